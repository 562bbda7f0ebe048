"""Command-line entry point.

Prints the ABI-encoded swap record for one request to stdout, with no
trailing newline. On failure nothing is printed to stdout, a message goes
to stderr and the exit status is non-zero.

Usage:
    psp-calldata CHAIN_ID SRC_TOKEN DEST_TOKEN AMOUNT USER SIDE SLIPPAGE MAX \\
        SRC_DECIMALS DEST_DECIMALS [BLOCK_NUMBER] [UPDATE_CACHE]
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import BinaryIO

import structlog

from psp_calldata.cache import CacheStore, FileCacheStore, NullCacheStore, ResponseCache
from psp_calldata.config import Settings
from psp_calldata.errors import PspCalldataError
from psp_calldata.models.request import SwapRequest
from psp_calldata.orchestrator import RouteOrchestrator
from psp_calldata.paraswap import ParaSwapClient

logger = structlog.get_logger()


def configure_logging(level: str) -> None:
    """Route structlog output to stderr; stdout is reserved for the record."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping().get(level.upper(), logging.WARNING)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="psp-calldata",
        description="Prepare ParaSwap calldata for an on-chain swap adapter",
    )
    parser.add_argument("chain_id", help="Chain id, e.g. 1")
    parser.add_argument("src_token", help="Source token address")
    parser.add_argument("dest_token", help="Destination token address")
    parser.add_argument("amount", help="Fixed amount in base units")
    parser.add_argument("user_address", help="Address executing the swap")
    parser.add_argument("side", help="SELL or BUY")
    parser.add_argument("max_slippage", help="Slippage tolerance in whole percent")
    parser.add_argument("max", help="'true' to resolve the patchable amount offset")
    parser.add_argument("src_decimals", help="Source token decimals")
    parser.add_argument("dest_decimals", help="Destination token decimals")
    parser.add_argument("block_number", nargs="?", help="Block number (cache key only)")
    parser.add_argument(
        "update_cache", nargs="?", help="'false' to skip writing the response cache"
    )
    return parser


def positional_args(namespace: argparse.Namespace) -> list[str]:
    """Positional arguments in invocation order, trailing omissions dropped."""
    args = [
        namespace.chain_id,
        namespace.src_token,
        namespace.dest_token,
        namespace.amount,
        namespace.user_address,
        namespace.side,
        namespace.max_slippage,
        namespace.max,
        namespace.src_decimals,
        namespace.dest_decimals,
    ]
    for optional in (namespace.block_number, namespace.update_cache):
        if optional is None:
            break
        args.append(optional)
    return args


def build_orchestrator(settings: Settings, client: ParaSwapClient) -> RouteOrchestrator:
    store: CacheStore = (
        FileCacheStore(settings.cache_dir, lock=settings.cache_lock)
        if settings.cache_dir is not None
        else NullCacheStore()
    )
    cache = ResponseCache(store)
    return RouteOrchestrator(client, client, cache, partner=settings.partner)


def main(
    argv: Sequence[str] | None = None,
    *,
    settings: Settings | None = None,
    orchestrator: RouteOrchestrator | None = None,
    stdout: BinaryIO | None = None,
) -> int:
    """Run one preparation and return the process exit status."""
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    namespace = build_parser().parse_args(argv)
    out = stdout if stdout is not None else sys.stdout.buffer

    try:
        request = SwapRequest.from_args(positional_args(namespace))
        if orchestrator is not None:
            output = orchestrator.prepare(request)
        else:
            with ParaSwapClient(
                api_url=settings.api_url,
                timeout=settings.timeout,
                partner=settings.partner,
            ) as client:
                output = build_orchestrator(settings, client).prepare(request)
    except PspCalldataError as e:
        logger.error("prepare_failed", error_type=type(e).__name__, error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1

    out.write(output)
    out.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
