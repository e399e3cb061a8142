"""
Forgot Password Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the recovery flow.
"""

from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel

from src.app.config import ForgotPasswordConfig
from src.domain.entities import RecoveryChannel


# ============================================================================
# Commands
# ============================================================================


class RecoveryRequestCommand(BaseModel):
    """Identity value a user asked to recover their account with"""

    channel: RecoveryChannel
    value: str

    @classmethod
    def from_body(
        cls,
        body: Mapping[str, Any],
        config: ForgotPasswordConfig,
        channels: Iterable[RecoveryChannel] = tuple(RecoveryChannel),
    ) -> Optional["RecoveryRequestCommand"]:
        """
        Pick the identity value out of a request body.

        Keys are checked in channel order (email, recovery email, recovery
        phone, recovery field), using the configured field names except for
        email which always arrives as `email`.

        Returns:
            The command, or None when the body holds none of the keys
        """
        keys = {
            RecoveryChannel.email: "email",
            RecoveryChannel.recovery_email: config.recovery_email_field,
            RecoveryChannel.recovery_phone: config.recovery_phone_field,
            RecoveryChannel.recovery_field: config.recovery_field,
        }
        for channel in channels:
            value = body.get(keys[channel])
            if value is not None:
                return cls(channel=channel, value=str(value).strip())
        return None


# ============================================================================
# Response DTOs
# ============================================================================


class RecoveryRequestResponse(BaseModel):
    """Response for recovery requests - identical whether or not a user matched"""

    status: str
    message: str


class ResetTokenResponse(BaseModel):
    """Response for a valid, pending reset token"""

    token: str


class ResetPasswordResponse(BaseModel):
    """Response for a completed password reset"""

    status: str
    message: str
