"""Platarium error type.

Every failure raised by the library is a :class:`PlatariumError` tagged with
an :class:`ErrorKind`. Callers branch on ``err.kind`` instead of catching
per-condition subclasses.
"""

from enum import Enum
from typing import Any, Dict, Optional

__all__ = [
    "ErrorKind",
    "PlatariumError",
]


class ErrorKind(str, Enum):
    """Failure categories."""

    INVALID_ARGUMENT = "invalid_argument"
    INVALID_MNEMONIC = "invalid_mnemonic"
    INVALID_KEY_FORMAT = "invalid_key_format"
    LENGTH_VIOLATION = "length_violation"
    CORRELATION_FAILURE = "correlation_failure"
    MISSING_KEY_MATERIAL = "missing_key_material"


class PlatariumError(Exception):
    """Base and only exception for all Platarium errors."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.kind = ErrorKind(kind)
        self.message = message
        self.context: Dict[str, Any] = dict(context or {})

    def __str__(self) -> str:
        return f"[{self.kind.name}] {self.message}"

    def __repr__(self) -> str:
        return f"PlatariumError({self.kind.name}, {self.message!r})"
