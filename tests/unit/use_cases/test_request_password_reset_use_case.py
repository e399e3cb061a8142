"""
Unit tests for RequestPasswordResetUseCase

Tests all business logic with mocked dependencies.
"""
from datetime import datetime, timedelta

import pytest

from src.app.use_cases.forgot_password import (
    RecoveryRequestCommand,
    RequestPasswordResetUseCase,
)
from src.app.use_cases.forgot_password.tokens import is_valid_token_format
from src.domain.entities import RecoveryChannel, RecoveryEventName


@pytest.fixture
def use_case(mock_uow, config, mock_mailer, mock_texter, events):
    return RequestPasswordResetUseCase(mock_uow, config, mock_mailer, mock_texter, events)


def command(channel, value):
    return RecoveryRequestCommand(channel=channel, value=value)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email",
    ["not-an-email", "", "user@", "@example.com", "user@example", "user example@example.com"],
)
async def test_malformed_email_is_rejected(use_case, mock_uow, mock_mailer, email):
    """Malformed emails never reach storage"""
    result = await use_case.execute(command(RecoveryChannel.email, email))

    assert result.is_err()
    assert result.error.code == "INVALID_EMAIL"
    assert result.error.message == "Email is invalid"
    mock_uow.users.find.assert_not_called()
    mock_uow.users.update.assert_not_called()
    mock_mailer.forgot.assert_not_called()


@pytest.mark.asyncio
async def test_missing_identity_is_rejected(use_case, mock_uow):
    result = await use_case.execute(None)

    assert result.is_err()
    assert result.error.message == "Email is invalid"
    mock_uow.users.find.assert_not_called()


@pytest.mark.asyncio
async def test_malformed_recovery_email_is_rejected(use_case, mock_uow):
    result = await use_case.execute(command(RecoveryChannel.recovery_email, "nope"))

    assert result.is_err()
    assert result.error.code == "INVALID_EMAIL"
    mock_uow.users.find.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("channel", [RecoveryChannel.recovery_phone, RecoveryChannel.recovery_field])
async def test_empty_recovery_value_is_rejected(use_case, mock_uow, channel):
    result = await use_case.execute(command(channel, ""))

    assert result.is_err()
    assert result.error.code == "INVALID_RECOVERY_VALUE"
    mock_uow.users.find.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_email_pretends_success(use_case, mock_uow, mock_mailer, events):
    """No enumeration - unknown users get the same answer and no token"""
    mock_uow.users.find.return_value = None

    result = await use_case.execute(command(RecoveryChannel.email, "nobody@example.com"))

    assert result.is_ok()
    assert result.value.status == "sent"
    mock_uow.users.find.assert_called_once_with("email", "nobody@example.com")
    mock_uow.users.update.assert_not_called()
    mock_uow.commit.assert_not_called()
    mock_mailer.forgot.assert_not_called()
    assert events.received == []


@pytest.mark.asyncio
async def test_known_email_issues_token_and_sends_mail(use_case, mock_uow, mock_mailer, mock_texter, events, user):
    mock_uow.users.find.return_value = user

    before = datetime.utcnow()
    result = await use_case.execute(command(RecoveryChannel.email, "user@example.com"), context="ctx")
    after = datetime.utcnow()

    assert result.is_ok()
    assert result.value.status == "sent"

    # Token and expiry persisted
    mock_uow.users.update.assert_called_once_with(user)
    mock_uow.commit.assert_called_once()
    assert is_valid_token_format(user.pwd_reset_token)
    assert before + timedelta(hours=1) <= user.pwd_reset_token_expires <= after + timedelta(hours=1)

    # Exactly one dispatch, with that token
    mock_mailer.forgot.assert_called_once_with("Jane", "user@example.com", user.pwd_reset_token)
    mock_texter.forgot.assert_not_called()

    assert len(events.received) == 1
    event = events.received[0]
    assert event.name == RecoveryEventName.forgot_sent
    assert event.user is user
    assert event.context == "ctx"


@pytest.mark.asyncio
async def test_known_and_unknown_email_get_same_response(use_case, mock_uow, user):
    mock_uow.users.find.return_value = user
    found = await use_case.execute(command(RecoveryChannel.email, "user@example.com"))

    mock_uow.users.find.return_value = None
    missing = await use_case.execute(command(RecoveryChannel.email, "other@example.com"))

    assert found.value == missing.value


@pytest.mark.asyncio
async def test_new_request_replaces_pending_token(use_case, mock_uow, user_with_token):
    old_token = user_with_token.pwd_reset_token
    mock_uow.users.find.return_value = user_with_token

    result = await use_case.execute(command(RecoveryChannel.email, "user@example.com"))

    assert result.is_ok()
    assert user_with_token.pwd_reset_token != old_token
    assert user_with_token.pwd_reset_token_expires > datetime.utcnow()


@pytest.mark.asyncio
async def test_recovery_email_sends_mail_to_recovery_address(use_case, mock_uow, mock_mailer, events, user):
    mock_uow.users.find.return_value = user

    result = await use_case.execute(command(RecoveryChannel.recovery_email, "jane.backup@example.org"))

    assert result.is_ok()
    mock_uow.users.find.assert_called_once_with("recovery_email", "jane.backup@example.org")
    mock_mailer.forgot.assert_called_once_with("Jane", "jane.backup@example.org", user.pwd_reset_token)
    assert events.received[0].name == RecoveryEventName.forgot_sent


@pytest.mark.asyncio
async def test_recovery_phone_sends_text(use_case, mock_uow, mock_mailer, mock_texter, events, user):
    mock_uow.users.find.return_value = user

    result = await use_case.execute(command(RecoveryChannel.recovery_phone, "+15550100"))

    assert result.is_ok()
    mock_uow.users.find.assert_called_once_with("recovery_phone", "+15550100")
    mock_texter.forgot.assert_called_once_with("Jane", "+15550100", user.pwd_reset_token)
    mock_mailer.forgot.assert_not_called()
    assert [event.name for event in events.received] == [RecoveryEventName.forgot_text]


@pytest.mark.asyncio
async def test_recovery_field_sends_mail_to_login_email(use_case, mock_uow, mock_mailer, user):
    mock_uow.users.find.return_value = user

    result = await use_case.execute(command(RecoveryChannel.recovery_field, "jane-1984"))

    assert result.is_ok()
    mock_uow.users.find.assert_called_once_with("recovery_field", "jane-1984")
    mock_mailer.forgot.assert_called_once_with("Jane", "user@example.com", user.pwd_reset_token)


@pytest.mark.asyncio
async def test_mail_failure_propagates(use_case, mock_uow, mock_mailer, events, user):
    """Upstream errors are not swallowed"""
    mock_uow.users.find.return_value = user
    mock_mailer.forgot.side_effect = ConnectionError("smtp down")

    with pytest.raises(ConnectionError):
        await use_case.execute(command(RecoveryChannel.email, "user@example.com"))

    assert events.received == []


@pytest.mark.asyncio
async def test_storage_failure_propagates(use_case, mock_uow, mock_mailer):
    mock_uow.users.find.side_effect = RuntimeError("database unavailable")

    with pytest.raises(RuntimeError):
        await use_case.execute(command(RecoveryChannel.email, "user@example.com"))

    mock_mailer.forgot.assert_not_called()
