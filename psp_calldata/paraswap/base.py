"""Interfaces of the aggregator collaborators used by the orchestrator."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from psp_calldata.models.request import ContractMethod, SwapSide
from psp_calldata.models.route import BuiltTransaction, PricedRoute


class RateProvider(Protocol):
    """Quotes a priced route for a token pair and amount.

    Implementations raise QuoteUnavailable when no route exists.
    """

    def get_rate(
        self,
        *,
        chain_id: int,
        src_token: str,
        src_decimals: int,
        dest_token: str,
        dest_decimals: int,
        amount: str,
        side: SwapSide,
        include_contract_methods: Sequence[ContractMethod] = (),
    ) -> PricedRoute: ...


class TransactionBuilder(Protocol):
    """Turns a priced route into router calldata.

    Implementations raise BuildFailed when the route is stale or the
    inputs are inconsistent.
    """

    def build_tx(
        self,
        *,
        chain_id: int,
        src_token: str,
        src_decimals: int,
        dest_token: str,
        dest_decimals: int,
        src_amount: str,
        dest_amount: str,
        price_route: PricedRoute,
        user_address: str,
        partner: str,
        ignore_checks: bool = True,
    ) -> BuiltTransaction: ...
