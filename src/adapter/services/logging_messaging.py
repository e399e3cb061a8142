"""
Development delivery adapters.

Write recovery messages to the log instead of sending them, so the reset
link can be picked up from the server output without SMTP or SMS setup.
"""

import logging
from typing import List

from src.app.config import ForgotPasswordConfig
from src.app.services.messaging import IMailer, ITextMessenger

logger = logging.getLogger(__name__)


class LoggingMailer(IMailer):
    def __init__(self, config: ForgotPasswordConfig):
        self.config = config

    async def forgot(self, name: str, email: str, token: str) -> None:
        logger.info(
            f"[forgot password] to={email} name={name} link={self.config.reset_link(token)}"
        )

    async def forgot_login(self, name: str, recovery_value: str, email_list: List[str]) -> None:
        logger.info(
            f"[forgot login] to={recovery_value} name={name} logins={', '.join(email_list)}"
        )


class LoggingTextMessenger(ITextMessenger):
    def __init__(self, config: ForgotPasswordConfig):
        self.config = config

    async def forgot(self, name: str, phone: str, token: str) -> None:
        logger.info(
            f"[forgot password sms] to={phone} name={name} link={self.config.reset_link(token)}"
        )

    async def forgot_login(self, name: str, phone: str, email_list: List[str]) -> None:
        logger.info(f"[forgot login sms] to={phone} name={name} logins={', '.join(email_list)}")
