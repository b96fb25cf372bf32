"""Request pipeline services: the access gate and the error translator."""

from src.services.access_gate import AccessGate, AccessGateMiddleware
from src.services.error_translator import (
    ErrorResult,
    ErrorTranslationMiddleware,
    ErrorTranslator,
    register_error_handlers,
)

__all__ = [
    "AccessGate",
    "AccessGateMiddleware",
    "ErrorResult",
    "ErrorTranslationMiddleware",
    "ErrorTranslator",
    "register_error_handlers",
]
