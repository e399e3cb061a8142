"""
RecoveryEvent

Notification handed to host-application subscribers.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .enums import RecoveryEventName
from .user import User


@dataclass(frozen=True)
class RecoveryEvent:
    """
    Something that happened in the recovery flow.

    ``context`` is whatever the caller passed along with the request,
    the API layer hands over the current ``Request``.
    """

    name: RecoveryEventName
    user: User
    context: Any = None
    occurred_at: datetime = field(default_factory=datetime.utcnow)
