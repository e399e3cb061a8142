"""
Request Password Reset Use Case

Issues a reset token and sends it over the channel the user asked with.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from src.app.config import ForgotPasswordConfig
from src.app.services.event_bus import RecoveryEventBus
from src.app.services.messaging import IMailer, ITextMessenger
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import RecoveryChannel, RecoveryEventName, User
from src.libs.result import Result, Return
from .dtos import RecoveryRequestCommand, RecoveryRequestResponse
from .tokens import generate_token, mask
from .validation import INVALID_EMAIL, validate_command

logger = logging.getLogger(__name__)

SENT_RESPONSE = RecoveryRequestResponse(
    status="sent",
    message="If an account matches, recovery instructions have been sent",
)


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Email addresses must be well formed, phone and recovery field non-empty
    - No user enumeration: same response whether or not a user matched
    - A new token replaces any pending one (one active token per user)
    - Token expires after the configured duration
    - Exactly one mail or text is dispatched per matched request
    """

    def __init__(
        self,
        uow: UnitOfWork,
        config: ForgotPasswordConfig,
        mailer: IMailer,
        texter: ITextMessenger,
        events: RecoveryEventBus,
    ):
        self.uow = uow
        self.config = config
        self.mailer = mailer
        self.texter = texter
        self.events = events

    async def execute(
        self, command: Optional[RecoveryRequestCommand], context: Any = None
    ) -> Result[RecoveryRequestResponse]:
        """
        Execute request password reset use case.

        Args:
            command: Identity value picked from the request, None if missing
            context: Passed through to event subscribers

        Returns:
            Result with the "sent" response, or Error

        Errors:
            - INVALID_EMAIL: Missing or malformed email address
            - INVALID_RECOVERY_VALUE: Empty phone number or recovery field
        """
        if command is None:
            return Return.err(INVALID_EMAIL)

        validation = validate_command(command)
        if validation.is_err():
            return Return.err(validation.error)

        async with self.uow:
            user = await self.uow.users.find(
                self.config.lookup_field(command.channel), command.value
            )

            # No enumeration - pretend we sent something
            if user is None:
                logger.info(f"Password reset requested for unknown {command.channel.value}")
                return Return.ok(SENT_RESPONSE)

            token = generate_token()
            user.pwd_reset_token = token
            user.pwd_reset_token_expires = datetime.utcnow() + self.config.token_expiration

            user = await self.uow.users.update(user)
            await self.uow.commit()

        logger.info(f"Issued reset token {mask(token)} for user {user.id} via {command.channel.value}")

        event = await self._dispatch(command.channel, user, token)
        await self.events.publish(event, user, context)

        return Return.ok(SENT_RESPONSE)

    async def _dispatch(self, channel: RecoveryChannel, user: User, token: str) -> RecoveryEventName:
        name = getattr(user, self.config.name_field)

        if channel == RecoveryChannel.recovery_phone:
            await self.texter.forgot(name, getattr(user, self.config.recovery_phone_field), token)
            return RecoveryEventName.forgot_text

        if channel == RecoveryChannel.recovery_email:
            address = getattr(user, self.config.recovery_email_field)
        else:
            address = getattr(user, self.config.email_field)

        await self.mailer.forgot(name, address, token)
        return RecoveryEventName.forgot_sent
