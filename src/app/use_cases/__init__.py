"""
Use Cases

Organized by domain folder:
- forgot_password/: Password reset and login recovery flows
"""

from .forgot_password import (
    RequestPasswordResetUseCase,
    RequestLoginReminderUseCase,
    ValidateResetTokenUseCase,
    ResetPasswordUseCase,
    RecoveryRequestCommand,
    RecoveryRequestResponse,
    ResetTokenResponse,
    ResetPasswordResponse,
)

__all__ = [
    "RequestPasswordResetUseCase",
    "RequestLoginReminderUseCase",
    "ValidateResetTokenUseCase",
    "ResetPasswordUseCase",
    "RecoveryRequestCommand",
    "RecoveryRequestResponse",
    "ResetTokenResponse",
    "ResetPasswordResponse",
]
