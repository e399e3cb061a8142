import logging
from pathlib import Path
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates

from src.api.error import ServerError
from src.app.config import ForgotPasswordConfig
from src.app.services.event_bus import RecoveryEventBus
from src.app.services.messaging import IMailer, ITextMessenger
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.forgot_password import (
    RecoveryRequestCommand,
    RequestLoginReminderUseCase,
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
    ValidateResetTokenUseCase,
)
from src.app.use_cases.forgot_password.request_login_reminder_use_case import LOGIN_CHANNELS
from src.depends import get_mailer, get_password_hasher, get_text_messenger, get_unit_of_work
from src.libs.result import Error

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

VALIDATION_ERRORS = ("INVALID_EMAIL", "INVALID_RECOVERY_VALUE", "INVALID_PASSWORD")


async def read_body(request: Request) -> Dict[str, Any]:
    """Request body as a dict, from JSON or an HTML form"""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
    form = await request.form()
    return dict(form)


def create_forgot_password_router(
    config: ForgotPasswordConfig, events: RecoveryEventBus
) -> APIRouter:
    """
    Forgot password routes mounted on the configured route.

    In REST mode every route answers with a status code or JSON only and the
    routes live under /rest. Otherwise views are rendered from Jinja2
    templates, custom template directories take precedence over the
    built-in ones.
    """
    router = APIRouter(prefix=config.base_route, tags=["Forgot Password"])
    templates = Jinja2Templates(directory=[*config.template_dirs, str(TEMPLATE_DIR)])

    def render(
        request: Request,
        view: str,
        title: str,
        status_code: int = status.HTTP_200_OK,
        **context: Any,
    ) -> Response:
        return templates.TemplateResponse(
            request,
            config.view(view),
            {"title": title, "route": config.base_route, **context},
            status_code=status_code,
        )

    def not_found() -> HTTPException:
        # Same answer as an unknown route, nothing about the token leaks
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    def recovery_error(request: Request, error: Error) -> Response:
        if error.code not in VALIDATION_ERRORS:
            raise ServerError(error)
        logger.warning(f"Client error: {error.code} on {request.url.path}")
        if config.rest:
            return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"error": error.message})
        return render(
            request,
            "forgot_password",
            "Forgot password",
            status_code=status.HTTP_403_FORBIDDEN,
            error=error.message,
        )

    def sent(request: Request) -> Response:
        if config.rest:
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        return render(request, "sent_email", "Forgot password")

    def token_error(request: Request, error: Error, token: str) -> Response:
        if error.code in ("TOKEN_EXPIRED", "INVALID_PASSWORD"):
            logger.warning(f"Client error: {error.code}")
        if error.code == "TOKEN_NOT_FOUND":
            raise not_found()
        if error.code == "TOKEN_EXPIRED":
            if config.rest:
                return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"error": error.message})
            return render(
                request,
                "link_expired",
                "Forgot password - Link expired",
                status_code=status.HTTP_403_FORBIDDEN,
            )
        if error.code == "INVALID_PASSWORD":
            if config.rest:
                return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"error": error.message})
            return render(
                request,
                "new_password",
                "Choose a new password",
                status_code=status.HTTP_403_FORBIDDEN,
                error=error.message,
                token=token,
            )
        raise ServerError(error)

    @router.get("")
    async def get_forgot(request: Request):
        """
        Recovery request form.

        Not handled in REST mode, the client brings its own form.
        """
        if config.rest:
            raise not_found()
        return render(request, "forgot_password", "Forgot password")

    @router.post("")
    async def post_forgot(
        request: Request,
        uow: UnitOfWork = Depends(get_unit_of_work),
        mailer: IMailer = Depends(get_mailer),
        texter: ITextMessenger = Depends(get_text_messenger),
    ):
        """
        Request a reset link by email, recovery email, recovery phone or
        recovery field.

        Returns:
            - 204 / "sent" view: whether or not an account matched (no enumeration)
            - 403: Malformed email or empty recovery value
        """
        body = await read_body(request)
        command = RecoveryRequestCommand.from_body(body, config)

        use_case = RequestPasswordResetUseCase(uow, config, mailer, texter, events)
        result = await use_case.execute(command, context=request)

        if result.is_err():
            return recovery_error(request, result.error)
        return sent(request)

    @router.post("/login")
    async def post_forgot_login(
        request: Request,
        uow: UnitOfWork = Depends(get_unit_of_work),
        mailer: IMailer = Depends(get_mailer),
        texter: ITextMessenger = Depends(get_text_messenger),
    ):
        """
        Send the login email(s) of an account to one of its recovery channels.

        Returns:
            - 204 / "sent" view: whether or not an account matched (no enumeration)
            - 403: Missing, malformed or empty recovery value
        """
        body = await read_body(request)
        command = RecoveryRequestCommand.from_body(body, config, channels=LOGIN_CHANNELS)

        use_case = RequestLoginReminderUseCase(uow, config, mailer, texter, events)
        result = await use_case.execute(command, context=request)

        if result.is_err():
            return recovery_error(request, result.error)
        return sent(request)

    @router.get("/{token}")
    async def get_token(
        request: Request,
        token: str,
        uow: UnitOfWork = Depends(get_unit_of_work),
    ):
        """
        Open a reset link.

        Returns:
            - 204 / new password form: token is valid
            - 403: Token expired (it is cleared on the way)
            - 404: Malformed or unknown token
        """
        use_case = ValidateResetTokenUseCase(uow)
        result = await use_case.execute(token)

        if result.is_err():
            return token_error(request, result.error, token)

        if config.rest:
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        return render(request, "new_password", "Choose a new password", token=token)

    @router.post("/{token}")
    async def post_token(
        request: Request,
        token: str,
        uow: UnitOfWork = Depends(get_unit_of_work),
        hasher: IPasswordHasher = Depends(get_password_hasher),
    ):
        """
        Choose a new password with a reset token.

        Returns:
            - 204 / "password changed" view: password updated, token consumed
            - 403: Empty password, or token expired (it is cleared on the way)
            - 404: Malformed, unknown or already used token
        """
        body = await read_body(request)
        password = body.get("password")
        password = "" if password is None else str(password)

        use_case = ResetPasswordUseCase(uow, config, hasher, events)
        result = await use_case.execute(token, password, context=request)

        if result.is_err():
            return token_error(request, result.error, token)

        if config.rest:
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        return render(request, "changed_password", "Password changed")

    return router
