# -*- coding: utf-8 -*-
"""
Маршрутизатор консольного меню.

Меню — дерево узлов, хранящееся массивом (arena): у узла есть индекс,
индекс родителя и уникальное описание, которое служит ключом маршрута.
Результат обработчика узла передаётся обработчикам его дочерних узлов.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from rich.console import Console
from rich.prompt import IntPrompt

logger = logging.getLogger(__name__)

# (дерево, текущий узел) → следующий узел или None для выхода
Chooser = Callable[["MenuTree", int], Optional[int]]
Route = Callable[[Any], Any]
ErrorHandler = Callable[["MenuNode", Exception], None]


@dataclass
class MenuNode:
    """Узел меню."""

    index: int
    description: str
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children


class MenuTree:
    """Дерево меню с корнем в узле 0."""

    ROOT = 0

    def __init__(self, root_description: str = "Main menu"):
        self.nodes: List[MenuNode] = [MenuNode(self.ROOT, root_description)]
        self._index: Dict[str, int] = {root_description: self.ROOT}

    def add(self, description: str, parent: int = ROOT) -> int:
        """
        Добавить узел.

        Возвращает:
            Индекс нового узла

        Исключения:
            ValueError: Описание уже занято или родителя нет
        """
        if description in self._index:
            raise ValueError(f"Menu description already used: {description!r}")
        if not 0 <= parent < len(self.nodes):
            raise ValueError(f"Unknown parent menu index: {parent}")

        node = MenuNode(len(self.nodes), description, parent)
        self.nodes.append(node)
        self.nodes[parent].children.append(node.index)
        self._index[description] = node.index
        return node.index

    def node(self, index: int) -> MenuNode:
        return self.nodes[index]

    def find(self, description: str) -> int:
        return self._index[description]

    def children(self, index: int) -> List[MenuNode]:
        return [self.nodes[child] for child in self.nodes[index].children]


def log_route_error(node: MenuNode, error: Exception) -> None:
    logger.error(f"Ошибка в пункте меню '{node.description}': {error}", exc_info=error)


class MenuRouter:
    """
    Цикл меню.

    На каждом шаге chooser выбирает узел; если для его описания
    зарегистрирован обработчик, он вызывается с последним результатом
    родительского узла. После листа управление возвращается к родителю.
    Цикл заканчивается, когда chooser возвращает None.
    """

    def __init__(self, tree: MenuTree, chooser: Chooser, on_error: ErrorHandler = log_route_error):
        self.tree = tree
        self.chooser = chooser
        self.on_error = on_error
        self.routes: Dict[str, Route] = {}
        self.results: Dict[int, Any] = {}
        self.current: Optional[int] = MenuTree.ROOT

    def register(self, description: str, callback: Route) -> None:
        """Зарегистрировать обработчик для узла с этим описанием."""
        self.routes[description] = callback

    def run(self) -> None:
        while True:
            self.current = self.chooser(self.tree, self.current)
            if self.current is None:
                break

            node = self.tree.node(self.current)
            callback = self.routes.get(node.description)

            if callback is not None:
                argument = self.results.get(node.parent) if node.parent is not None else None
                try:
                    self.results[node.index] = callback(argument)
                except Exception as error:
                    self.on_error(node, error)

            if node.is_leaf:
                self.current = node.parent


def prompt_chooser(
    console: Console,
    back_label: str = "Back",
    exit_label: str = "Exit",
    prompt: str = "Choose an option"
) -> Chooser:
    """
    Интерактивный выбор пункта через rich.

    Показывает дочерние пункты текущего узла; 0 — назад к родителю,
    в корне 0 — выход.
    """

    def choose(tree: MenuTree, current: int) -> Optional[int]:
        node = tree.node(current)
        children = tree.children(current)

        console.print(f"\n[bold cyan]{node.description}[/bold cyan]")
        for number, child in enumerate(children, start=1):
            console.print(f"  {number}. {child.description}")
        console.print(f"  0. {exit_label if node.parent is None else back_label}")

        choice = IntPrompt.ask(
            prompt,
            choices=[str(i) for i in range(len(children) + 1)],
            show_choices=False,
            console=console,
        )
        if choice == 0:
            return node.parent
        return children[choice - 1].index

    return choose
