"""Error classes for swap calldata preparation.

Every fatal error aborts the invocation with no output. ``CacheWriteFailed``
is the only non-fatal condition: the orchestrator logs it and still emits.
"""

from __future__ import annotations


class PspCalldataError(Exception):
    """Base error for calldata preparation."""

    pass


class InvalidInput(PspCalldataError, ValueError):
    """Malformed invocation input (amount, side, decimals, flags, addresses)."""

    pass


class UnsupportedSelector(PspCalldataError):
    """Calldata selector has no known amount offset for the trade side."""

    def __init__(self, selector: str, side: str) -> None:
        super().__init__(f"Unrecognized function selector for Augustus ({side}): {selector}")
        self.selector = selector
        self.side = side


class CollaboratorError(PspCalldataError):
    """Failure reported by (or while talking to) the aggregator API.

    Attributes:
        retryable: True for timeouts and transport failures, where repeating
            the same request may succeed.
    """

    def __init__(self, message: str, *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable


class QuoteUnavailable(CollaboratorError):
    """No priced route could be obtained for the token pair and amount."""

    pass


class BuildFailed(CollaboratorError):
    """The aggregator refused to build transaction calldata for the route."""

    pass


class CacheWriteFailed(PspCalldataError):
    """Persisting an encoded response to the cache store failed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Failed to write cache entry {key}: {reason}")
        self.key = key
        self.reason = reason


__all__ = [
    "PspCalldataError",
    "InvalidInput",
    "UnsupportedSelector",
    "CollaboratorError",
    "QuoteUnavailable",
    "BuildFailed",
    "CacheWriteFailed",
]
