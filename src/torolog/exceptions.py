"""
torolog exception hierarchy.

Emit operations never raise these for malformed input; they surface only
from level parsing and from the terminal ``panic`` level.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class TorologError(Exception):
    """Root of all torolog errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class InvalidLevelError(TorologError, ValueError):
    """Raised when a level name cannot be parsed."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"Unknown log level: {value!r}",
            code="invalid_level",
            details={"value": value},
        )
        self.value = value


class PanicError(TorologError, RuntimeError):
    """Raised after a panic-level event has been written."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="panic")
        self.message = message
