"""
Request Login Reminder Use Case

Tells a user which login email belongs to their account, looked up through
one of their recovery channels. No reset token is issued.
"""

import logging
from typing import Any, Optional

from src.app.config import ForgotPasswordConfig
from src.app.services.event_bus import RecoveryEventBus
from src.app.services.messaging import IMailer, ITextMessenger
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import RecoveryChannel, RecoveryEventName, User
from src.libs.result import Result, Return
from .dtos import RecoveryRequestCommand, RecoveryRequestResponse
from .request_password_reset_use_case import SENT_RESPONSE
from .validation import INVALID_RECOVERY_VALUE, validate_command

logger = logging.getLogger(__name__)

LOGIN_CHANNELS = (
    RecoveryChannel.recovery_email,
    RecoveryChannel.recovery_phone,
    RecoveryChannel.recovery_field,
)


class RequestLoginReminderUseCase:
    """
    Use case for "forgot my login".

    Business Rules:
    - Only recovery channels are accepted (not the login email itself)
    - No user enumeration: same response whether or not a user matched
    - Phone lookups are answered by text, the others by mail
    - Every success uses the same response, whatever the channel
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
        Errors:
            - INVALID_RECOVERY_VALUE: No recovery value, or an empty one
            - INVALID_EMAIL: Malformed recovery email
        """
        if command is None or command.channel not in LOGIN_CHANNELS:
            return Return.err(INVALID_RECOVERY_VALUE)

        validation = validate_command(command)
        if validation.is_err():
            return Return.err(validation.error)

        # Nothing is written here, leaving the block rolls back and expires
        # the user, so everything that reads it stays inside
        async with self.uow:
            user = await self.uow.users.find(
                self.config.lookup_field(command.channel), command.value
            )

            if user is None:
                logger.info(f"Login reminder requested for unknown {command.channel.value}")
                return Return.ok(SENT_RESPONSE)

            event = await self._dispatch(command.channel, user)
            await self.events.publish(event, user, context)

            logger.info(f"Sent login reminder for user {user.id} via {command.channel.value}")

        return Return.ok(SENT_RESPONSE)

    async def _dispatch(self, channel: RecoveryChannel, user: User) -> RecoveryEventName:
        name = getattr(user, self.config.name_field)
        email_list = [getattr(user, self.config.email_field)]

        if channel == RecoveryChannel.recovery_phone:
            phone = getattr(user, self.config.recovery_phone_field)
            await self.texter.forgot_login(name, phone, email_list)
            return RecoveryEventName.forgot_text

        # A generic recovery field is not an address, mail the recovery email
        # when there is one and the login email otherwise
        destination = getattr(user, self.config.recovery_email_field) or email_list[0]
        await self.mailer.forgot_login(name, destination, email_list)
        return RecoveryEventName.forgot_login_sent
