"""
SMTP mail delivery for the recovery flow.

Bodies are rendered from Jinja2 templates in templates/email. smtplib is
blocking, so each message is sent from a worker thread.
"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from pathlib import Path
from typing import Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.app.config import ForgotPasswordConfig
from src.app.services.messaging import IMailer

logger = logging.getLogger(__name__)

EMAIL_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates" / "email"


class SmtpMailer(IMailer):
    def __init__(
        self,
        config: ForgotPasswordConfig,
        host: str,
        port: int = 587,
        sender: str = "no-reply@localhost",
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        app_name: str = "Forgot Password",
    ):
        self.config = config
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.app_name = app_name
        self._env = Environment(
            loader=FileSystemLoader(EMAIL_TEMPLATE_DIR),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def _render(self, template: str, context: Dict[str, object]) -> str:
        return self._env.get_template(template).render(app_name=self.app_name, **context)

    def _build(self, recipient: str, subject: str, template: str, context: Dict[str, object]) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = recipient
        message.set_content(self._render(f"{template}.txt", context))
        message.add_alternative(self._render(f"{template}.html", context), subtype="html")
        return message

    def _send(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password or "")
            smtp.send_message(message)

    async def forgot(self, name: str, email: str, token: str) -> None:
        message = self._build(
            email,
            "Reset your password",
            "forgot_password",
            {"name": name, "link": self.config.reset_link(token)},
        )
        await asyncio.to_thread(self._send, message)
        logger.info(f"Sent password reset email to {email}")

    async def forgot_login(self, name: str, recovery_value: str, email_list: List[str]) -> None:
        message = self._build(
            recovery_value,
            "Your login",
            "forgot_login",
            {"name": name, "email_list": email_list},
        )
        await asyncio.to_thread(self._send, message)
        logger.info(f"Sent login reminder email to {recovery_value}")
