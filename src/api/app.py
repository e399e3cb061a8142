from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from src.app.config import ForgotPasswordConfig
from src.app.services.event_bus import RecoveryEventBus
from .error import ServerError
import logging

logger = logging.getLogger(__name__)


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_upstream_error(request: Request, exc: Exception):
    # Storage, mail and hashing failures end up here, they are not retried
    error_dict = {"code": "INTERNAL_ERROR", "message": "Internal server error"}
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


@asynccontextmanager
async def create_tables(app: FastAPI):
    from src.depends import engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield
    await engine.dispose()


def create_app(ApplicationConfig, events: Optional[RecoveryEventBus] = None) -> FastAPI:
    """
    Build the application.

    Host code subscribes to recovery notifications through
    ``app.state.recovery_events`` (or passes its own bus in).
    """
    app = FastAPI(title="Forgot Password", version="0.1.0", lifespan=create_tables)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import forgot_password, health_check

    config = ForgotPasswordConfig.from_application_config(ApplicationConfig)
    events = events or RecoveryEventBus()
    app.state.forgot_password_config = config
    app.state.recovery_events = events

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(forgot_password.create_forgot_password_router(config, events))

    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(Exception, handle_upstream_error)

    return app
