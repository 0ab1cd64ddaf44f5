"""
Общие fixtures: временная SQLite БД и HTTP клиент приложения.
"""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from rolebook.application.services.person_service import PersonService
from rolebook.application.services.role_service import RoleService
from rolebook.application.services.user_service import UserService
from rolebook.infrastructure.config.database import get_db_session, init_models, make_engine, make_sessionmaker
from rolebook.infrastructure.persistence.person_repository_impl import PersonRepositoryImpl
from rolebook.infrastructure.persistence.role_repository_impl import RoleRepositoryImpl
from rolebook.infrastructure.persistence.user_repository_impl import UserRepositoryImpl


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'rolebook.db'}")
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return make_sessionmaker(engine)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def role_service(session):
    return RoleService(RoleRepositoryImpl(session))


@pytest_asyncio.fixture
async def person_service(session):
    return PersonService(PersonRepositoryImpl(session))


@pytest_asyncio.fixture
async def user_service(session):
    return UserService(UserRepositoryImpl(session))


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP клиент; каждая сессия БД — новая, как в рабочем приложении."""
    from rolebook.main import app

    async def override_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_db_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client
    app.dependency_overrides.clear()
