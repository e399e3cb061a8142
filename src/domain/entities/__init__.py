"""
Forgot Password Domain Entities

Each entity in its own file for better maintainability.
"""

from .enums import RecoveryChannel, RecoveryEventName
from .user import User
from .events import RecoveryEvent

__all__ = [
    # Enums
    "RecoveryChannel",
    "RecoveryEventName",
    # Entities
    "User",
    "RecoveryEvent",
]
