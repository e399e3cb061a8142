from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from tests.fixtures.json_loader import TestDataLoader
from src.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.event_bus import RecoveryEventBus
from src.depends import get_mailer, get_password_hasher, get_text_messenger, get_unit_of_work


class IntegrationConfig(ApplicationConfig):
    REST = False
    FORGOT_PASSWORD_ROUTE = "/forgot-password"
    FORGOT_PASSWORD_VIEWS = {}
    FORGOT_PASSWORD_TEMPLATE_DIRS = []
    TOKEN_EXPIRATION = "1 hour"
    HASH_ITERATIONS = 4


class RestIntegrationConfig(IntegrationConfig):
    REST = True


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def mailer():
    mailer = MagicMock()
    mailer.forgot = AsyncMock()
    mailer.forgot_login = AsyncMock()
    return mailer


@pytest.fixture
def texter():
    texter = MagicMock()
    texter.forgot = AsyncMock()
    texter.forgot_login = AsyncMock()
    return texter


@pytest.fixture
def hasher():
    return BcryptPasswordHasher(iterations=4)


@pytest.fixture
def events():
    """Event bus recording everything published on it"""
    bus = RecoveryEventBus()
    bus.received = []
    for name in ("forgot::sent", "forgotLogin::sent", "forgot::text", "forgot::success"):
        bus.subscribe(name, bus.received.append)
    return bus


def build_app(application_config, engine, mailer, texter, hasher, events):
    from src.api.app import create_app

    app = create_app(application_config, events=events)
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    # Fresh session per request, like the real dependency
    async def override_get_unit_of_work():
        async with Session() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_text_messenger] = lambda: texter
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    return app


@pytest_asyncio.fixture
async def client(engine, mailer, texter, hasher, events):
    app = build_app(IntegrationConfig, engine, mailer, texter, hasher, events)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def rest_client(engine, mailer, texter, hasher, events):
    app = build_app(RestIntegrationConfig, engine, mailer, texter, hasher, events)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
