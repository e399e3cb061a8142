"""
Reset token and identity format helpers.
"""

import re
import uuid

# Same pattern browsers use for <input type="email">, kept strict on the TLD
EMAIL_REGEXP = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,6}$")

TOKEN_REGEXP = re.compile(
    r"[0-9a-f]{22}|[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def generate_token() -> str:
    return str(uuid.uuid4())


def is_valid_token_format(token: str) -> bool:
    return bool(token) and TOKEN_REGEXP.fullmatch(token) is not None


def is_valid_email(value: str) -> bool:
    return bool(value) and EMAIL_REGEXP.match(value) is not None


def mask(value: str) -> str:
    """Shorten a token or address for log lines"""
    if not value:
        return ""
    return value[:4] + "..."
