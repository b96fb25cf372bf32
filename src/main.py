"""FastAPI application entry point for the web exception handling demo."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from src.config import Settings, get_settings
from src.logging_config import setup_logging
from src.models.errors import StatusFailure, TeaPotFailure
from src.services.access_gate import AccessGate, AccessGateMiddleware
from src.services.error_translator import (
    ErrorTranslationMiddleware,
    ErrorTranslator,
    register_error_handlers,
)

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    timestamp: str


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)
    logger.info("%s starting up", settings.app_name)

    yield

    logger.info("%s shutting down", settings.app_name)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; loaded from the environment when omitted.
    """
    settings = settings or get_settings()

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Demonstrates centralized translation of HTTP failures into JSON errors",
        lifespan=lifespan,
    )
    application.state.settings = settings

    translator = ErrorTranslator(
        default_message=settings.default_error_message,
        legacy_escaping=settings.legacy_error_escaping,
    )
    gate = AccessGate(
        forbidden_marker=settings.forbidden_path_marker,
        message=settings.access_denied_message,
    )

    # Middleware added last runs first: translation wraps the gate
    application.add_middleware(AccessGateMiddleware, gate=gate)
    application.add_middleware(ErrorTranslationMiddleware, translator=translator)
    register_error_handlers(application, translator)

    @application.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint used by container probes."""
        return HealthResponse(
            status="healthy",
            version=settings.app_version,
            timestamp=datetime.now(tz=UTC).isoformat(),
        )

    @application.get("/hello", response_class=PlainTextResponse)
    async def get_hello() -> str:
        return "Hello you !"

    @application.get("/forbidden", response_class=PlainTextResponse)
    async def get_forbidden() -> str:
        raise StatusFailure(status.HTTP_403_FORBIDDEN, "You shall not pass !")

    @application.get("/secret1", response_class=PlainTextResponse)
    async def get_secret1() -> str:
        return "This is a secret"

    @application.get("/secret2", response_class=PlainTextResponse)
    async def get_secret2() -> str:
        """Never reached: the access gate refuses this path."""
        return "This is another secret"

    @application.get("/trouble", response_class=PlainTextResponse)
    async def get_trouble() -> str:
        raise ValueError("Oups, I didn't expect this trouble")

    @application.get("/teatime", response_class=PlainTextResponse)
    async def get_teatime() -> str:
        raise TeaPotFailure()

    return application


app = create_app()
