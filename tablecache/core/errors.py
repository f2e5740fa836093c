"""Exceptions raised by the cache.

Storage failures on writes are reported through return values, so only
codec problems surface as exceptions.
"""

from __future__ import annotations

from typing import Any


class CacheError(Exception):
    """Base exception for cache errors.

    Attributes:
        message: Human-readable error message.
        context: Optional structured context for logging.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


class SerializationError(CacheError):
    """A value could not be encoded for storage."""


class DeserializationError(CacheError):
    """A stored value is not valid encoded data."""
