from src.domain.entities import RecoveryChannel
from src.libs.result import Error, Result, Return
from .dtos import RecoveryRequestCommand
from .tokens import is_valid_email

INVALID_EMAIL = Error("INVALID_EMAIL", "Email is invalid")
INVALID_RECOVERY_VALUE = Error("INVALID_RECOVERY_VALUE", "Recovery value is invalid")

EMAIL_CHANNELS = (RecoveryChannel.email, RecoveryChannel.recovery_email)


def validate_command(command: RecoveryRequestCommand) -> Result[None]:
    """Email channels need a well formed address, the others a non-empty value"""
    if command.channel in EMAIL_CHANNELS:
        if not is_valid_email(command.value):
            return Return.err(INVALID_EMAIL)
    elif not command.value:
        return Return.err(INVALID_RECOVERY_VALUE)
    return Return.ok(None)
