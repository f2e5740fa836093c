"""Cache key sanitization."""

import re

_DISALLOWED = re.compile(r"[^A-Za-z0-9_-]+")


def sanitize_key(raw: str) -> str:
    """Strip everything but ASCII letters, digits, ``_`` and ``-``.

    Distinct raw keys can collapse to the same key (``"a b/c"`` and ``"abc"``).
    An input with no allowed characters yields ``""``, which is returned as is.
    """
    return _DISALLOWED.sub("", raw)
