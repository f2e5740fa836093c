"""JSON encoding of cached values."""

import json
from typing import Any

from tablecache.core.errors import DeserializationError, SerializationError


def encode_value(value: Any) -> str:
    """Serialize a value to JSON text.

    Tuples come back as lists and non-string dict keys as strings, as with
    any JSON round trip. NaN and infinities are rejected.
    """
    try:
        return json.dumps(value, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationError(
            "Value is not JSON serializable",
            context={"type": type(value).__name__, "reason": str(exc)},
        ) from exc


def decode_value(text: str | None) -> Any:
    """Parse stored JSON text back into a value."""
    if text is None:
        raise DeserializationError("Stored value is empty")
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise DeserializationError(
            "Stored value is not valid JSON",
            context={"reason": str(exc)},
        ) from exc
