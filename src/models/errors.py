"""Failure types raised during request processing and the JSON error body."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from fastapi import status
from pydantic import BaseModel, Field

E = TypeVar("E", bound=type[BaseException])


class ErrorResponse(BaseModel):
    """Uniform JSON error body returned for every failed request."""

    message: str = Field(..., description="Human-readable error description")


class FailureSignal(Exception):
    """Base for failures that know which HTTP status they map to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        super().__init__(reason)


class StatusFailure(FailureSignal):
    """Failure carrying an explicit status code chosen at the raise site."""

    def __init__(self, status_code: int, reason: str | None = None) -> None:
        super().__init__(reason)
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code!r}, reason={self.reason!r})"


class AccessDeniedFailure(FailureSignal):
    """Raised when a request is refused by an access rule."""

    status_code = status.HTTP_401_UNAUTHORIZED


@dataclass(frozen=True)
class DeclaredStatus:
    """Status code and reason bound to an exception class at definition time."""

    status_code: int
    reason: str | None = None


def declared_status(status_code: int, reason: str | None = None) -> Callable[[E], E]:
    """Class decorator binding a fixed status and reason to an exception type.

    The binding is inherited by subclasses and read by the error translator;
    whatever message the instance was raised with is ignored.

    Example::

        @declared_status(418, reason="No more tea")
        class TeaPotFailure(DeclaredStatusFailure):
            pass
    """

    def decorate(cls: E) -> E:
        cls.__declared_status__ = DeclaredStatus(status_code, reason)  # type: ignore[attr-defined]
        return cls

    return decorate


def get_declared_status(exc: BaseException) -> DeclaredStatus | None:
    """Return the status bound to the exception's class, if any."""
    return getattr(type(exc), "__declared_status__", None)


class DeclaredStatusFailure(FailureSignal):
    """Base for failures whose status and reason come from ``declared_status``."""

    def __init__(self) -> None:
        declared = get_declared_status(self)
        super().__init__(declared.reason if declared else None)
        if declared is not None:
            self.status_code = declared.status_code


@declared_status(status.HTTP_418_IM_A_TEAPOT, reason="No more tea")
class TeaPotFailure(DeclaredStatusFailure):
    """Raised when the tea has run out."""
