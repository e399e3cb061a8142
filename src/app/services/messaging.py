from abc import ABC, abstractmethod
from typing import List


class IMailer(ABC):
    """Outbound mail for the recovery flow"""

    @abstractmethod
    async def forgot(self, name: str, email: str, token: str) -> None:
        """Send the reset link for `token` to `email`"""
        pass

    @abstractmethod
    async def forgot_login(self, name: str, recovery_value: str, email_list: List[str]) -> None:
        """Remind the owner of `recovery_value` which login emails they have"""
        pass


class ITextMessenger(ABC):
    """Outbound SMS for the recovery flow"""

    @abstractmethod
    async def forgot(self, name: str, phone: str, token: str) -> None:
        """Text the reset link for `token` to `phone`"""
        pass

    @abstractmethod
    async def forgot_login(self, name: str, phone: str, email_list: List[str]) -> None:
        """Text the login emails of the account to `phone`"""
        pass
