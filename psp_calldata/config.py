"""Runtime configuration, read from ``PSP_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

DEFAULT_API_URL = "https://apiv5.paraswap.io"
DEFAULT_PARTNER = "aave"
DEFAULT_TIMEOUT = 30.0
DEFAULT_CACHE_DIR = Path("src/tests/.pspcache")
DEFAULT_LOG_LEVEL = "WARNING"

_TRUTHY = ("true", "1", "yes")


def _optional_path(value: str) -> Path | None:
    return Path(value) if value else None


@dataclass(frozen=True)
class Settings:
    """Settings shared by the CLI and the HTTP service.

    Attributes:
        api_url: Base URL of the ParaSwap REST API
        partner: Partner id sent with quote and build requests
        timeout: Per-request timeout in seconds for aggregator calls
        cache_dir: Directory holding one cache file per key, relative
            paths resolve against the working directory. None (PSP_CACHE_DIR
            set empty) disables file caching
        cache_lock: Serialise cache writes within the process
        log_level: Minimum structlog level name
        host: Bind host for the HTTP service
        port: Bind port for the HTTP service
    """

    api_url: str = DEFAULT_API_URL
    partner: str = DEFAULT_PARTNER
    timeout: float = DEFAULT_TIMEOUT
    cache_dir: Path | None = DEFAULT_CACHE_DIR
    cache_lock: bool = False
    log_level: str = DEFAULT_LOG_LEVEL
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            api_url=env.get("PSP_API_URL", DEFAULT_API_URL).rstrip("/"),
            partner=env.get("PSP_PARTNER", DEFAULT_PARTNER),
            timeout=float(env.get("PSP_TIMEOUT", str(DEFAULT_TIMEOUT))),
            cache_dir=_optional_path(env.get("PSP_CACHE_DIR", str(DEFAULT_CACHE_DIR))),
            cache_lock=env.get("PSP_CACHE_LOCK", "false").lower() in _TRUTHY,
            log_level=env.get("PSP_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            host=env.get("PSP_HOST", "0.0.0.0"),
            port=int(env.get("PSP_PORT", "8000")),
        )
