#!/usr/bin/env python3
"""
CLI администрирования.

Использование:
    rolebook serve --port 8000
    rolebook init-db
    rolebook console --language ru
"""

import asyncio

import click
from rich.console import Console

from rolebook.infrastructure.config.settings import get_settings, setup_logging

console = Console()


@click.group()
def cli():
    """Rolebook CLI."""
    setup_logging(get_settings())


@cli.command()
@click.option('--host', default=None, help='Адрес (по умолчанию из настроек)')
@click.option('--port', default=None, type=int, help='Порт (по умолчанию из настроек)')
@click.option('--reload', is_flag=True, help='Перезапуск при изменении кода')
def serve(host, port, reload: bool):
    """Запустить веб-интерфейс."""
    import uvicorn

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"\n🚀 [bold green]Запуск веб-интерфейса[/bold green] http://{host}:{port}\n")
    uvicorn.run("rolebook.main:app", host=host, port=port, reload=reload)


@cli.command(name='init-db')
def init_db():
    """Создать таблицы в базе данных."""
    from rolebook.infrastructure.config.database import get_engine, init_models

    async def run():
        try:
            await init_models()
        finally:
            await get_engine().dispose()

    asyncio.run(run())
    console.print("✅ [bold green]Таблицы созданы[/bold green]")


@cli.command(name='console')
@click.option('--language', default=None, help='Язык сообщений (en, ru)')
def console_menu(language):
    """
    Консольное меню: роли, люди, пользователи.

    Примеры:
        rolebook console
        rolebook console --language ru
    """
    from rolebook.cli.console import run_console

    run_console(language=language, console=console)


if __name__ == '__main__':
    cli()
