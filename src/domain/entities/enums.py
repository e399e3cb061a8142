"""
Forgot Password Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class RecoveryEventName(str, Enum):
    """Notifications published by the recovery flow"""

    forgot_sent = "forgot::sent"
    forgot_login_sent = "forgotLogin::sent"
    forgot_text = "forgot::text"
    forgot_success = "forgot::success"


class RecoveryChannel(str, Enum):
    """Identity value a recovery request was made with"""

    email = "email"
    recovery_email = "recovery_email"
    recovery_phone = "recovery_phone"
    recovery_field = "recovery_field"
