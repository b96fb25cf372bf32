"""Pydantic models and failure types for the web exception handling demo."""

from src.models.errors import (
    AccessDeniedFailure,
    DeclaredStatus,
    DeclaredStatusFailure,
    ErrorResponse,
    FailureSignal,
    StatusFailure,
    TeaPotFailure,
    declared_status,
    get_declared_status,
)

__all__ = [
    "AccessDeniedFailure",
    "DeclaredStatus",
    "DeclaredStatusFailure",
    "ErrorResponse",
    "FailureSignal",
    "StatusFailure",
    "TeaPotFailure",
    "declared_status",
    "get_declared_status",
]
