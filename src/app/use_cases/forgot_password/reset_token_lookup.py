"""
Pending reset token lookup shared by the token routes.
"""

import logging
from datetime import datetime

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from src.libs.result import Error, Result, Return
from .tokens import is_valid_token_format, mask

logger = logging.getLogger(__name__)

TOKEN_NOT_FOUND = Error("TOKEN_NOT_FOUND", "Not Found")
TOKEN_EXPIRED = Error("TOKEN_EXPIRED", "link expired")


def is_expired(user: User, now: datetime = None) -> bool:
    """A token is invalid at or after its expiry instant"""
    expires = user.pwd_reset_token_expires
    if expires is None:
        return True
    return expires <= (now or datetime.utcnow())


async def find_pending_user(uow: UnitOfWork, token: str) -> Result[User]:
    """
    Find the user owning an unexpired reset token.

    Must be called inside ``async with uow``. Malformed tokens never reach
    storage. An expired token is cleared and committed before TOKEN_EXPIRED
    is returned, so the next lookup with it is TOKEN_NOT_FOUND.

    Errors:
        - TOKEN_NOT_FOUND: Malformed token or no user holds it
        - TOKEN_EXPIRED: Token found but past its expiry
    """
    if not is_valid_token_format(token):
        return Return.err(TOKEN_NOT_FOUND)

    user = await uow.users.find("pwd_reset_token", token)
    if user is None:
        return Return.err(TOKEN_NOT_FOUND)

    if is_expired(user):
        user.clear_reset_token()
        await uow.users.update(user)
        await uow.commit()
        logger.info(f"Cleared expired reset token {mask(token)} for user {user.id}")
        return Return.err(TOKEN_EXPIRED)

    return Return.ok(user)
