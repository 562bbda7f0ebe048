"""Swap calldata preparation pipeline.

A request flows through a fixed sequence of steps::

    cache lookup -> hit: emit
                 -> miss: quote -> adjust -> build tx -> resolve offset
                          -> encode -> [store] -> emit

A cache hit short-circuits everything, so no aggregator call is made.
The quote and build calls run strictly one after the other since the
build needs the quoted route.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from psp_calldata.cache import NullCacheStore, ResponseCache, compute_cache_key
from psp_calldata.config import DEFAULT_PARTNER
from psp_calldata.encoding import NO_OFFSET, SwapCalldata
from psp_calldata.errors import CacheWriteFailed
from psp_calldata.models.request import SwapRequest
from psp_calldata.paraswap.base import RateProvider, TransactionBuilder
from psp_calldata.selectors import offset_for_side
from psp_calldata.slippage import adjust_amounts

logger = structlog.get_logger()


@dataclass(frozen=True)
class PreparedSwap:
    """Result of one preparation.

    Attributes:
        key: Cache key of the request
        output: Emitted record (0x-hex of the ABI encoding)
        cached: True when served from the cache
    """

    key: str
    output: bytes
    cached: bool


class RouteOrchestrator:
    """Prepares adapter-ready swap calldata for a request.

    Args:
        rates: Quoting collaborator
        builder: Transaction-building collaborator
        cache: Response cache, defaults to one that never hits
        partner: Partner id sent when building transactions
    """

    def __init__(
        self,
        rates: RateProvider,
        builder: TransactionBuilder,
        cache: ResponseCache | None = None,
        partner: str = DEFAULT_PARTNER,
    ) -> None:
        self.rates = rates
        self.builder = builder
        self.cache = cache if cache is not None else ResponseCache(NullCacheStore())
        self.partner = partner

    def prepare(self, request: SwapRequest) -> bytes:
        """Return the emitted record for a request, from cache when possible."""
        return self.run(request).output

    def run(self, request: SwapRequest) -> PreparedSwap:
        """Run the pipeline and report whether the cache answered.

        Raises:
            UnsupportedSelector: Calldata uses a router method with no known offset
            QuoteUnavailable: No route for the pair and amount
            BuildFailed: The aggregator refused to build the transaction
        """
        key = compute_cache_key(request.cache_args())

        cached = self.cache.get(key)
        if cached is not None:
            logger.info("cache_hit", key=key)
            return PreparedSwap(key=key, output=cached, cached=True)

        output = self.prepare_calldata(request).to_output()

        if request.update_cache:
            try:
                self.cache.put(key, output)
            except CacheWriteFailed as e:
                logger.warning("cache_write_failed", key=key, error=e.reason)

        return PreparedSwap(key=key, output=output, cached=False)

    def prepare_calldata(self, request: SwapRequest) -> SwapCalldata:
        """Quote, adjust, build and resolve the offset, bypassing the cache."""
        route = self.rates.get_rate(
            chain_id=request.chain_id,
            src_token=request.src_token,
            src_decimals=request.src_decimals,
            dest_token=request.dest_token,
            dest_decimals=request.dest_decimals,
            amount=request.amount,
            side=request.side,
            include_contract_methods=request.preferred_methods,
        )
        logger.debug(
            "quote_received",
            src_amount=route.src_amount,
            dest_amount=route.dest_amount,
            contract_method=route.contract_method,
        )

        amounts = adjust_amounts(route, request.side, request.max_slippage)

        # Checks are skipped: the adjusted amounts intentionally differ from the quote
        tx = self.builder.build_tx(
            chain_id=request.chain_id,
            src_token=request.src_token,
            src_decimals=request.src_decimals,
            dest_token=request.dest_token,
            dest_decimals=request.dest_decimals,
            src_amount=str(amounts.src_amount),
            dest_amount=str(amounts.dest_amount),
            price_route=route,
            user_address=request.user_address,
            partner=self.partner,
            ignore_checks=True,
        )
        calldata = tx.calldata

        offset = offset_for_side(request.side, calldata) if request.max else NO_OFFSET
        logger.debug("calldata_built", to=tx.to, size=len(calldata), offset=offset)

        return SwapCalldata(
            to=tx.to,
            data=calldata,
            src_amount=amounts.src_amount,
            dest_amount=amounts.dest_amount,
            offset=offset,
        )


__all__ = ["PreparedSwap", "RouteOrchestrator"]
