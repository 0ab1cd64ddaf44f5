# -*- coding: utf-8 -*-
"""
Консольный интерфейс администрирования.

Те же сервисы, что и у веб-слоя; все асинхронные вызовы выполняются
в одном цикле событий asyncio.Runner.
"""

import asyncio
import logging
from typing import Any, Callable, Iterable, List, Optional

from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from rolebook.application.dto import PersonDTO, RefDTO, RoleDTO, UserDTO, parse_id
from rolebook.application.services.person_service import PersonService
from rolebook.application.services.role_service import RoleService
from rolebook.application.services.user_service import UserService
from rolebook.cli.menu import MenuNode, MenuRouter, MenuTree, prompt_chooser
from rolebook.infrastructure.config.database import get_engine, get_session_factory, init_models
from rolebook.infrastructure.config.settings import get_settings
from rolebook.infrastructure.i18n.message_source import MessageSource, get_message_source
from rolebook.infrastructure.persistence.person_repository_impl import PersonRepositoryImpl
from rolebook.infrastructure.persistence.role_repository_impl import RoleRepositoryImpl
from rolebook.infrastructure.persistence.user_repository_impl import UserRepositoryImpl
from rolebook.shared.exceptions.domain_exceptions import DomainValidationError

logger = logging.getLogger(__name__)

SERVICES = {
    "role": (RoleService, RoleRepositoryImpl),
    "person": (PersonService, PersonRepositoryImpl),
    "user": (UserService, UserRepositoryImpl),
}


class ConsoleApp:
    """Обработчики пунктов меню поверх CRUD сервисов."""

    def __init__(
        self,
        console: Console,
        runner: asyncio.Runner,
        session_factory,
        messages: MessageSource,
        locale: str
    ):
        self.console = console
        self.runner = runner
        self.session_factory = session_factory
        self.messages = messages
        self.locale = locale

    def t(self, key: str, *args: Any) -> str:
        return self.messages.get_message(key, args, self.locale)

    def call(self, resource: str, operation: Callable):
        """Выполнить operation(service) в отдельной сессии БД."""
        service_class, repository_class = SERVICES[resource]

        async def execute():
            async with self.session_factory() as session:
                service = service_class(repository_class(session), get_settings().max_field_length)
                return await operation(service)

        return self.runner.run(execute())

    def report_error(self, node: MenuNode, error: Exception) -> None:
        if isinstance(error, DomainValidationError):
            for message in self.messages.localize(error.errors, self.locale):
                self.console.print(f"[red]✗ {message}[/red]")
            return
        logger.error(f"Ошибка в пункте меню '{node.description}': {error}", exc_info=error)
        self.console.print(f"[red]✗ {type(error).__name__}: {error}[/red]")

    def success(self, key: str, *args: Any) -> None:
        self.console.print(f"[green]✓ {self.t(key, *args)}[/green]")

    def print_table(self, title: str, columns: List[str], rows: Iterable[Iterable[Any]]) -> None:
        table = Table(title=title)
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*[str(value) for value in row])
        self.console.print(table)

    def select(self, resource: str) -> Any:
        """Запросить ID и загрузить запись; результат получат дочерние пункты."""
        record_id = IntPrompt.ask(self.t(f"{resource}.data.column.id"), console=self.console)
        record = self.call(resource, lambda service: service.get(record_id))
        self.console.print(f"→ {record.display_name}")
        return record

    # =========================================================================
    # Роли
    # =========================================================================

    def list_roles(self, _=None) -> None:
        roles = self.call("role", lambda service: service.list())
        self.print_table(
            self.t("nav.roles"),
            [self.t("role.data.column.id"), self.t("role.data.column.name"), self.t("role.data.column.persons")],
            [(r.id, r.name, "; ".join(p.name or "" for p in r.persons)) for r in roles],
        )

    def create_role(self, _=None) -> RoleDTO:
        role = RoleDTO(name=Prompt.ask(self.t("role.data.column.name"), console=self.console))
        role = self.call("role", lambda service: service.create(role))
        self.success("role.successMessage.create", role.name)
        return role

    def update_role(self, role: RoleDTO) -> RoleDTO:
        name = Prompt.ask(self.t("role.data.column.name"), default=role.name, console=self.console)
        role = self.call("role", lambda service: service.update(role.model_copy(update={"name": name})))
        message = self.t("role.successMessage.update", role.name)
        if role.persons:
            message += " " + self.t("role.successMessage.affectedPersons", "; ".join(p.name or "" for p in role.persons))
        self.console.print(f"[green]✓ {message}[/green]")
        return role

    def delete_role(self, role: RoleDTO) -> None:
        if Confirm.ask(f"{self.t('action.delete')} «{role.name}»?", console=self.console):
            role = self.call("role", lambda service: service.delete(role.id))
            self.success("role.successMessage.delete", role.name)

    # =========================================================================
    # Люди
    # =========================================================================

    def list_persons(self, _=None) -> None:
        persons = self.call("person", lambda service: service.list())
        self.print_table(
            self.t("nav.persons"),
            [self.t("person.data.column.id"), self.t("person.data.column.name"), self.t("person.data.column.roles")],
            [(p.id, p.display_name, "; ".join(r.name or "" for r in p.roles)) for p in persons],
        )

    def _ask_person(self, person: PersonDTO) -> PersonDTO:
        def ask(key: str, default: str) -> str:
            return Prompt.ask(self.t(key), default=default, console=self.console)

        first_name = ask("person.data.column.firstName", person.first_name)
        middle_name = ask("person.data.column.middleName", person.middle_name)
        last_name = ask("person.data.column.lastName", person.last_name)
        role_ids = ask("person.data.column.roles", ",".join(str(i) for i in person.role_ids))
        return person.model_copy(update={
            "first_name": first_name,
            "middle_name": middle_name,
            "last_name": last_name,
            "roles": [RefDTO(id=i) for i in _parse_ids(role_ids)],
        })

    def create_person(self, _=None) -> PersonDTO:
        person = self._ask_person(PersonDTO())
        person = self.call("person", lambda service: service.create(person))
        self.success("person.successMessage.create", person.display_name)
        return person

    def update_person(self, person: PersonDTO) -> PersonDTO:
        changed = self._ask_person(person)
        person = self.call("person", lambda service: service.update(changed))
        self.success("person.successMessage.update", person.display_name)
        return person

    def delete_person(self, person: PersonDTO) -> None:
        if Confirm.ask(f"{self.t('action.delete')} «{person.display_name}»?", console=self.console):
            person = self.call("person", lambda service: service.delete(person.id))
            self.success("person.successMessage.delete", person.display_name)

    # =========================================================================
    # Пользователи
    # =========================================================================

    def list_users(self, _=None) -> None:
        users = self.call("user", lambda service: service.list())
        self.print_table(
            self.t("nav.users"),
            [self.t("user.data.column.id"), self.t("user.data.column.username")],
            [(u.id, u.username) for u in users],
        )

    def create_user(self, _=None) -> UserDTO:
        user = UserDTO(
            username=Prompt.ask(self.t("user.data.column.username"), console=self.console),
            password=Prompt.ask(self.t("user.data.column.password"), password=True, console=self.console),
        )
        user = self.call("user", lambda service: service.create(user))
        self.success("user.successMessage.create", user.username)
        return user

    def update_user(self, user: UserDTO) -> UserDTO:
        username = Prompt.ask(self.t("user.data.column.username"), default=user.username, console=self.console)
        self.console.print(self.t("user.data.hint.password"))
        password = Prompt.ask(
            self.t("user.data.column.password"), password=True, default="", show_default=False, console=self.console
        )
        changed = user.model_copy(update={"username": username, "password": password})
        user = self.call("user", lambda service: service.update(changed))
        self.success("user.successMessage.update", user.username)
        return user

    def delete_user(self, user: UserDTO) -> None:
        if Confirm.ask(f"{self.t('action.delete')} «{user.username}»?", console=self.console):
            user = self.call("user", lambda service: service.delete(user.id))
            self.success("user.successMessage.delete", user.username)


def _parse_ids(value: str) -> List[int]:
    ids = []
    for part in value.split(","):
        record_id = parse_id(part)
        if record_id is not None and record_id not in ids:
            ids.append(record_id)
    return ids


def build_menu(app: ConsoleApp) -> MenuRouter:
    """Дерево меню и обработчики его пунктов."""
    tree = MenuTree(app.t("app.title"))
    router = MenuRouter(
        tree,
        prompt_chooser(
            app.console,
            back_label=app.t("console.prompt.back"),
            exit_label=app.t("console.prompt.exit"),
            prompt=app.t("console.prompt.choice"),
        ),
        on_error=app.report_error,
    )

    for resource, nav_key in (("role", "nav.roles"), ("person", "nav.persons"), ("user", "nav.users")):
        title = app.t(nav_key)
        section = tree.add(title)

        list_key = f"{title}: {app.t('console.menu.list')}"
        create_key = f"{title}: {app.t('action.create')}"
        select_key = f"{title}: {app.t('console.menu.select')}"
        update_key = f"{title}: {app.t('action.update')}"
        delete_key = f"{title}: {app.t('action.delete')}"

        tree.add(list_key, section)
        tree.add(create_key, section)
        selected = tree.add(select_key, section)
        tree.add(update_key, selected)
        tree.add(delete_key, selected)

        router.register(list_key, getattr(app, f"list_{resource}s"))
        router.register(create_key, getattr(app, f"create_{resource}"))
        router.register(select_key, lambda _, resource=resource: app.select(resource))
        router.register(update_key, getattr(app, f"update_{resource}"))
        router.register(delete_key, getattr(app, f"delete_{resource}"))

    return router


def run_console(language: Optional[str] = None, console: Optional[Console] = None) -> None:
    """Запустить консольное меню до выхода пользователя."""
    settings = get_settings()
    messages = get_message_source()
    console = console or Console()
    locale = messages.resolve_locale(language or settings.default_locale)

    with asyncio.Runner() as runner:
        runner.run(init_models())
        app = ConsoleApp(console, runner, get_session_factory(), messages, locale)
        try:
            build_menu(app).run()
        finally:
            runner.run(get_engine().dispose())
