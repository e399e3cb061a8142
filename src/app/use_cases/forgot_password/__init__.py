"""
Forgot Password Use Cases

Token issue, validation and consumption for the recovery flow.
"""

from .request_password_reset_use_case import RequestPasswordResetUseCase
from .request_login_reminder_use_case import RequestLoginReminderUseCase
from .validate_reset_token_use_case import ValidateResetTokenUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .dtos import (
    RecoveryRequestCommand,
    RecoveryRequestResponse,
    ResetTokenResponse,
    ResetPasswordResponse,
)

__all__ = [
    # Use Cases
    "RequestPasswordResetUseCase",
    "RequestLoginReminderUseCase",
    "ValidateResetTokenUseCase",
    "ResetPasswordUseCase",
    # DTOs - Commands
    "RecoveryRequestCommand",
    # DTOs - Responses
    "RecoveryRequestResponse",
    "ResetTokenResponse",
    "ResetPasswordResponse",
]
