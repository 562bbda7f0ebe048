"""Cache storage backends and the response cache wrapping them.

Entries are the exact bytes emitted for a key, with no metadata, no expiry
and no size bound. Content for a key is deterministic, so concurrent
writers of the same key are safe as last-writer-wins; ``FileCacheStore``
can additionally serialise writes within a process.
"""

from __future__ import annotations

import os
import tempfile
import threading
from pathlib import Path
from typing import Protocol

from psp_calldata.errors import CacheWriteFailed


class CacheStore(Protocol):
    """Storage adapter behind the response cache."""

    def get(self, key: str) -> bytes | None:
        """Return the stored bytes for key, or None when absent."""
        ...

    def put(self, key: str, data: bytes) -> None:
        """Store bytes under key, replacing any previous entry."""
        ...


class MemoryCacheStore:
    """Dict-backed store for tests and long-running processes."""

    def __init__(self, entries: dict[str, bytes] | None = None) -> None:
        self.entries: dict[str, bytes] = dict(entries or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> bytes | None:
        return self.entries.get(key)

    def put(self, key: str, data: bytes) -> None:
        with self._lock:
            self.entries[key] = bytes(data)

    def __len__(self) -> int:
        return len(self.entries)


class NullCacheStore:
    """Store that never hits and drops every write."""

    def get(self, key: str) -> bytes | None:  # noqa: ARG002
        return None

    def put(self, key: str, data: bytes) -> None:  # noqa: ARG002
        return None


class FileCacheStore:
    """One file per key under a cache directory.

    Writes land in a temporary file in the same directory and are renamed
    into place, so readers never observe a partially written entry.

    Args:
        directory: Cache directory, created on first write
        lock: Serialise the check-then-write sequence within this process
    """

    def __init__(self, directory: str | Path, *, lock: bool = False) -> None:
        self.directory = Path(directory)
        self._lock = threading.Lock() if lock else None

    def path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise ValueError(f"Invalid cache key: {key!r}")
        return self.directory / key

    def get(self, key: str) -> bytes | None:
        path = self.path_for(key)
        if not path.is_file():
            return None
        return path.read_bytes()

    def put(self, key: str, data: bytes) -> None:
        if self._lock is None:
            self._write(key, data)
            return
        with self._lock:
            if self.get(key) == data:
                return
            self._write(key, data)

    def _write(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class ResponseCache:
    """Exact-match cache of encoded responses.

    Whether a fresh response is written at all is decided per request by
    the caller.

    Args:
        store: Storage adapter
    """

    def __init__(self, store: CacheStore) -> None:
        self.store = store

    def get(self, key: str) -> bytes | None:
        return self.store.get(key)

    def put(self, key: str, data: bytes) -> None:
        """Persist an entry.

        Raises:
            CacheWriteFailed: If the store could not write the entry
        """
        try:
            self.store.put(key, data)
        except (OSError, ValueError) as e:
            raise CacheWriteFailed(key, str(e)) from e


__all__ = [
    "CacheStore",
    "FileCacheStore",
    "MemoryCacheStore",
    "NullCacheStore",
    "ResponseCache",
]
