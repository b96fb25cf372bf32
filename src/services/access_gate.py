"""Path-based access gate applied to every inbound request before routing."""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from src.models.errors import AccessDeniedFailure

FORBIDDEN_MARKER = "secret2"
ACCESS_DENIED_MESSAGE = "Stop! This access is forbidden"


class AccessGate:
    """Refuses any request whose path contains a forbidden marker.

    The comparison is case-insensitive and only looks at the path, never at
    the query string.

    Args:
        forbidden_marker: Substring that must not appear in the path.
        message: Reason attached to the raised :class:`AccessDeniedFailure`.
    """

    def __init__(
        self,
        forbidden_marker: str = FORBIDDEN_MARKER,
        message: str = ACCESS_DENIED_MESSAGE,
    ) -> None:
        self.forbidden_marker = forbidden_marker.lower()
        self.message = message

    def check(self, path: str) -> None:
        """Return if ``path`` may proceed.

        Raises:
            AccessDeniedFailure: When the path contains the forbidden marker.
        """
        if self.forbidden_marker in path.lower():
            raise AccessDeniedFailure(self.message)


class AccessGateMiddleware(BaseHTTPMiddleware):
    """Runs :class:`AccessGate` ahead of routing, for known and unknown routes alike."""

    def __init__(self, app: ASGIApp, gate: AccessGate) -> None:
        super().__init__(app)
        self.gate = gate

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        self.gate.check(request.url.path)
        return await call_next(request)
