"""Centralized translation of request failures into JSON error responses.

Every failure raised while handling a request, whether by the access gate,
by endpoint code or by the router itself, ends up in
:meth:`ErrorTranslator.translate`. The translator classifies the failure,
picks a status code and a message, and renders the ``{"message": ...}`` body.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from fastapi import FastAPI, Request, status
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from src.models.errors import (
    AccessDeniedFailure,
    ErrorResponse,
    StatusFailure,
    get_declared_status,
)

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Oups, Houston, we have a problem"
JSON_MEDIA_TYPE = "application/json"

_LEGACY_TEMPLATE = '{\n    "message": "%s"\n}\n'


@dataclass(frozen=True)
class ErrorResult:
    """Status, body and headers of a translated failure."""

    status_code: int
    body: str
    media_type: str = JSON_MEDIA_TYPE
    headers: dict[str, str] = field(default_factory=dict)

    def to_response(self) -> Response:
        return Response(
            content=self.body,
            status_code=self.status_code,
            media_type=self.media_type,
            headers=self.headers or None,
        )


class ErrorTranslator:
    """Maps any exception onto a status code and a JSON error body.

    Args:
        default_message: Message used for unclassified failures and for
            classified ones raised without a reason.
        legacy_escaping: Render the body with the original text template,
            escaping only double quotes, instead of a real JSON encoder.
    """

    def __init__(self, default_message: str = DEFAULT_MESSAGE, legacy_escaping: bool = False) -> None:
        self.default_message = default_message
        self.legacy_escaping = legacy_escaping

    def translate(self, exc: BaseException) -> ErrorResult:
        """Classify ``exc`` and build its error response. Never raises."""
        headers: dict[str, str] = {}

        if isinstance(exc, StatusFailure):
            status_code, reason = exc.status_code, exc.reason
        elif isinstance(exc, StarletteHTTPException):
            status_code = exc.status_code
            reason = exc.detail if isinstance(exc.detail, str) else None
            headers = dict(exc.headers or {})
        elif isinstance(exc, AccessDeniedFailure):
            status_code, reason = status.HTTP_401_UNAUTHORIZED, exc.reason
        elif (declared := get_declared_status(exc)) is not None:
            status_code, reason = declared.status_code, declared.reason
        else:
            status_code, reason = status.HTTP_500_INTERNAL_SERVER_ERROR, None

        return ErrorResult(
            status_code=status_code,
            body=self.render(reason),
            headers=headers,
        )

    def render(self, reason: str | None) -> str:
        """Render the JSON body for ``reason``, substituting the default when absent."""
        message = self.default_message if reason is None else reason
        if self.legacy_escaping:
            return (_LEGACY_TEMPLATE % message.replace('"', '\\"')).strip()
        return ErrorResponse(message=message).model_dump_json()


class ErrorTranslationMiddleware(BaseHTTPMiddleware):
    """Runs the rest of the pipeline and translates any failure that escapes it.

    Successful responses pass through untouched. A failure raised while a
    response body is already streaming happens after ``call_next`` returned
    and reaches the server instead, so a request never gets two responses.
    """

    def __init__(self, app: ASGIApp, translator: ErrorTranslator) -> None:
        super().__init__(app)
        self.translator = translator

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            result = self.translator.translate(exc)
            _log_failure(request, exc, result)
            return result.to_response()


def _log_failure(request: Request, exc: BaseException, result: ErrorResult) -> None:
    extra = {
        "method": request.method,
        "path": request.url.path,
        "status_code": result.status_code,
        "failure": type(exc).__name__,
    }
    if result.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Request failed", exc_info=exc, extra=extra)
    else:
        logger.warning("Request rejected", extra=extra)


def register_error_handlers(app: FastAPI, translator: ErrorTranslator) -> None:
    """Route framework HTTP errors (404, 405, ...) through ``translator``.

    Starlette handles its own ``HTTPException`` inside the router, before
    the translation middleware could see it, so it needs an explicit handler.

    Args:
        app: The FastAPI application instance.
        translator: Translator shared with :class:`ErrorTranslationMiddleware`.
    """

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> Response:
        result = translator.translate(exc)
        _log_failure(request, exc, result)
        return result.to_response()
