"""
Validate Reset Token Use Case

Checks that a reset link is still usable before showing the new password form.
"""

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import ResetTokenResponse
from .tokens import is_valid_token_format
from .reset_token_lookup import TOKEN_NOT_FOUND, find_pending_user


class ValidateResetTokenUseCase:
    """
    Use case for opening a reset link.

    Business Rules:
    - Malformed tokens are rejected without a storage lookup
    - Expired tokens are cleared on first access
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[ResetTokenResponse]:
        """
        Errors:
            - TOKEN_NOT_FOUND: Malformed or unknown token
            - TOKEN_EXPIRED: Token has expired (and has now been cleared)
        """
        if not is_valid_token_format(token):
            return Return.err(TOKEN_NOT_FOUND)

        async with self.uow:
            lookup = await find_pending_user(self.uow, token)
            if lookup.is_err():
                return Return.err(lookup.error)

        return Return.ok(ResetTokenResponse(token=token))
