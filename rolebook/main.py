"""
FastAPI Application Entry Point.

Путь: rolebook/main.py
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from rolebook import __version__
from rolebook.api.middleware import log_unexpected_errors, resolve_locale
from rolebook.api.routes import persons, roles, users
from rolebook.infrastructure.config.database import init_models
from rolebook.infrastructure.config.settings import get_settings, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    yield


def create_app() -> FastAPI:
    """Собрать приложение: middleware, маршруты, служебные endpoints."""
    settings = get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="Rolebook",
        description="Администрирование ролей, людей и пользователей",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Middleware
    app.middleware("http")(resolve_locale)
    app.middleware("http")(log_unexpected_errors)
    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)

    # Routes
    app.include_router(roles.router)
    app.include_router(persons.router)
    app.include_router(users.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": __version__
        }

    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse("/persons", status_code=303)

    return app


app = create_app()
