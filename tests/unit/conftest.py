from datetime import datetime, timedelta

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.config import ForgotPasswordConfig
from src.app.services.event_bus import RecoveryEventBus
from src.domain.entities import User


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with the user repository"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.find = AsyncMock(return_value=None)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    return uow


@pytest.fixture
def config():
    return ForgotPasswordConfig(token_expiration="1h", hash_iterations=4)


@pytest.fixture
def mock_mailer():
    mailer = MagicMock()
    mailer.forgot = AsyncMock()
    mailer.forgot_login = AsyncMock()
    return mailer


@pytest.fixture
def mock_texter():
    texter = MagicMock()
    texter.forgot = AsyncMock()
    texter.forgot_login = AsyncMock()
    return texter


@pytest.fixture
def mock_hasher():
    hasher = MagicMock()
    hasher.hash = MagicMock(return_value=("new-salt", "new-derived-key"))
    return hasher


@pytest.fixture
def events():
    """Event bus recording everything published on it"""
    bus = RecoveryEventBus()
    bus.received = []
    for name in ("forgot::sent", "forgotLogin::sent", "forgot::text", "forgot::success"):
        bus.subscribe(name, bus.received.append)
    return bus


@pytest.fixture
def user():
    return User(
        email="user@example.com",
        name="Jane",
        recovery_email="jane.backup@example.org",
        recovery_phone="+15550100",
        recovery_field="jane-1984",
        salt="old-salt",
        derived_key="old-derived-key",
    )


@pytest.fixture
def user_with_token(user):
    user.pwd_reset_token = "6f1c2a3b-4d5e-4f60-8a9b-0c1d2e3f4a5b"
    user.pwd_reset_token_expires = datetime.utcnow() + timedelta(minutes=30)
    return user
