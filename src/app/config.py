"""
Forgot Password Configuration

Immutable settings for the recovery flow, built once from ApplicationConfig
and passed to every handler.
"""

from datetime import timedelta
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.domain.entities import RecoveryChannel, User
from src.libs.duration import parse_duration


DEFAULT_VIEWS = {
    "forgot_password": "get-forgot-password.html",
    "sent_email": "post-forgot-password.html",
    "new_password": "get-new-password.html",
    "link_expired": "link-expired.html",
    "changed_password": "change-password-success.html",
}


class ForgotPasswordConfig(BaseModel):
    """
    Settings for the forgot password routes.

    Field names refer to attributes of the User entity and are validated
    against it, so a typo fails at startup rather than on the first request.
    """

    model_config = ConfigDict(frozen=True)

    route: str = "/forgot-password"
    rest: bool = False
    views: Dict[str, str] = Field(default_factory=dict)
    template_dirs: Tuple[str, ...] = ()
    token_expiration: timedelta = timedelta(days=1)
    hash_iterations: int = 12
    app_url: str = "http://localhost:8000"

    email_field: str = "email"
    name_field: str = "name"
    recovery_email_field: str = "recovery_email"
    recovery_phone_field: str = "recovery_phone"
    recovery_field: str = "recovery_field"

    @field_validator("token_expiration", mode="before")
    @classmethod
    def _parse_token_expiration(cls, value):
        return parse_duration(value)

    @field_validator("route")
    @classmethod
    def _normalize_route(cls, value: str) -> str:
        value = "/" + value.strip("/")
        if value == "/":
            raise ValueError("route must not be empty")
        return value

    @field_validator("views")
    @classmethod
    def _known_views(cls, value: Dict[str, str]) -> Dict[str, str]:
        unknown = set(value) - set(DEFAULT_VIEWS)
        if unknown:
            raise ValueError(f"Unknown views: {', '.join(sorted(unknown))}")
        return value

    @model_validator(mode="after")
    def _known_fields(self):
        for name in (
            self.email_field,
            self.name_field,
            self.recovery_email_field,
            self.recovery_phone_field,
            self.recovery_field,
        ):
            if name not in User.model_fields:
                raise ValueError(f"User has no field '{name}'")
        return self

    @property
    def base_route(self) -> str:
        """Route the router is mounted on, prefixed with /rest in REST mode"""
        if self.rest:
            return "/rest" + self.route
        return self.route

    def lookup_field(self, channel: RecoveryChannel) -> str:
        """User attribute a recovery channel is matched against"""
        return {
            RecoveryChannel.email: self.email_field,
            RecoveryChannel.recovery_email: self.recovery_email_field,
            RecoveryChannel.recovery_phone: self.recovery_phone_field,
            RecoveryChannel.recovery_field: self.recovery_field,
        }[channel]

    def view(self, name: str) -> str:
        """Custom template for a view, or the built-in one"""
        return self.views.get(name) or DEFAULT_VIEWS[name]

    def reset_link(self, token: str) -> str:
        return f"{self.app_url.rstrip('/')}{self.route}/{token}"

    @classmethod
    def from_application_config(cls, application_config) -> "ForgotPasswordConfig":
        return cls(
            route=application_config.FORGOT_PASSWORD_ROUTE,
            rest=application_config.REST,
            views=application_config.FORGOT_PASSWORD_VIEWS or {},
            template_dirs=tuple(application_config.FORGOT_PASSWORD_TEMPLATE_DIRS or ()),
            token_expiration=application_config.TOKEN_EXPIRATION,
            hash_iterations=application_config.HASH_ITERATIONS,
            app_url=application_config.APP_URL,
            email_field=application_config.EMAIL_FIELD,
            name_field=application_config.NAME_FIELD,
            recovery_email_field=application_config.RECOVERY_EMAIL_FIELD,
            recovery_phone_field=application_config.RECOVERY_PHONE_FIELD,
            recovery_field=application_config.RECOVERY_FIELD,
        )
