"""In-process aggregator stand-in for tests and offline runs."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from psp_calldata.errors import BuildFailed, QuoteUnavailable
from psp_calldata.models.request import ContractMethod, SwapSide
from psp_calldata.models.route import BuiltTransaction, PricedRoute

# Builds calldata from the build_tx keyword arguments
CalldataFactory = Callable[[dict[str, Any]], str]


class MockParaSwap:
    """Mock aggregator serving a fixed route and transaction.

    Configure the quote and the transaction, then assert on ``calls``.

    Args:
        route: Route returned by ``get_rate``, None to raise QuoteUnavailable
        router: Router address put in built transactions
        calldata: Hex calldata or a factory computing it from the build
            arguments, None to raise BuildFailed
    """

    def __init__(
        self,
        route: PricedRoute | dict[str, Any] | None,
        router: str = "0xdef171fe48cf0115b1d80b88dc8eab59176fee57",
        calldata: str | CalldataFactory | None = "0x",
    ) -> None:
        self.route = PricedRoute.model_validate(route) if isinstance(route, dict) else route
        self.router = router
        self.calldata = calldata
        self.closed = False
        self.calls: list[tuple[str, dict[str, Any]]] = []

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
    ) -> PricedRoute:
        self.calls.append(
            (
                "get_rate",
                {
                    "chain_id": chain_id,
                    "src_token": src_token,
                    "src_decimals": src_decimals,
                    "dest_token": dest_token,
                    "dest_decimals": dest_decimals,
                    "amount": amount,
                    "side": side,
                    "include_contract_methods": tuple(include_contract_methods),
                },
            )
        )
        if self.route is None:
            raise QuoteUnavailable("No route found")
        return self.route

    def build_tx(self, **kwargs: Any) -> BuiltTransaction:
        self.calls.append(("build_tx", kwargs))
        if self.calldata is None:
            raise BuildFailed("Unable to build transaction")
        data = self.calldata(kwargs) if callable(self.calldata) else self.calldata
        return BuiltTransaction(to=self.router, data=data)

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> MockParaSwap:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["MockParaSwap"]
