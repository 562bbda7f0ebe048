"""Content-addressed cache keys.

The key covers every invocation argument, including ones that do not
affect pricing (block number, cache-write flag), so each distinct
invocation owns a distinct fixture.

The digest follows the ``object-hash`` npm package for an ordered array of
strings (SHA-1 over ``array:<n>:`` followed by ``string:<len>:<value>``
per element), so fixtures keyed by that package stay addressable.
"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence


def _js_length(value: str) -> int:
    """String length as JavaScript counts it (UTF-16 code units)."""
    return len(value.encode("utf-16-le")) // 2


def compute_cache_key(args: Sequence[str]) -> str:
    """Hex digest identifying an ordered argument list.

    Args:
        args: Invocation arguments, in order

    Returns:
        40-char lowercase SHA-1 hex digest
    """
    digest = hashlib.sha1()  # noqa: S324 - content addressing, not security
    digest.update(f"array:{len(args)}:".encode())
    for arg in args:
        if not isinstance(arg, str):
            raise TypeError(f"Cache key arguments must be strings, got {type(arg).__name__}")
        digest.update(f"string:{_js_length(arg)}:".encode())
        digest.update(arg.encode("utf-8"))
    return digest.hexdigest()


__all__ = ["compute_cache_key"]
