"""
Reset Password Use Case

Sets a new password for the owner of a valid reset token and consumes it.
"""

import logging
from typing import Any

from src.app.config import ForgotPasswordConfig
from src.app.services.event_bus import RecoveryEventBus
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import RecoveryEventName
from src.libs.result import Error, Result, Return
from .dtos import ResetPasswordResponse
from .reset_token_lookup import TOKEN_NOT_FOUND, find_pending_user
from .tokens import is_valid_token_format, mask

logger = logging.getLogger(__name__)

MISSING_PASSWORD = Error("INVALID_PASSWORD", "Please enter a password")


class ResetPasswordUseCase:
    """
    Use case for choosing a new password.

    Business Rules:
    - Malformed tokens are rejected without a storage lookup
    - An empty password is rejected before the token is looked up
    - Expired tokens are cleared and the password is left untouched
    - Users carrying a legacy iteration count are hashed with that count
    - Token fields are cleared together with the credential update (single use)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        config: ForgotPasswordConfig,
        hasher: IPasswordHasher,
        events: RecoveryEventBus,
    ):
        self.uow = uow
        self.config = config
        self.hasher = hasher
        self.events = events

    async def execute(self, token: str, password: str, context: Any = None) -> Result[ResetPasswordResponse]:
        """
        Execute reset password use case.

        Args:
            token: Reset token from the link
            password: New plain text password
            context: Passed through to event subscribers

        Returns:
            Result with success status, or Error

        Errors:
            - TOKEN_NOT_FOUND: Malformed, unknown or already used token
            - INVALID_PASSWORD: No password given
            - TOKEN_EXPIRED: Token has expired (and has now been cleared)
        """
        if not is_valid_token_format(token):
            return Return.err(TOKEN_NOT_FOUND)

        if not password:
            return Return.err(MISSING_PASSWORD)

        async with self.uow:
            lookup = await find_pending_user(self.uow, token)
            if lookup.is_err():
                return Return.err(lookup.error)

            user = lookup.value
            salt, derived_key = self.hasher.hash(
                password, user.iterations or self.config.hash_iterations
            )

            user.salt = salt
            user.derived_key = derived_key
            user.clear_reset_token()

            user = await self.uow.users.update(user)
            await self.uow.commit()

        logger.info(f"Password reset with token {mask(token)} for user {user.id}")
        await self.events.publish(RecoveryEventName.forgot_success, user, context)

        return Return.ok(
            ResetPasswordResponse(
                status="success",
                message="Password has been changed",
            )
        )
