"""Slippage adjustment of the non-fixed side of a priced route.

All arithmetic is on Python ints. Results are truncated toward zero, which
is floor division for the non-negative amounts handled here.
"""

from __future__ import annotations

from dataclasses import dataclass

from psp_calldata.errors import InvalidInput
from psp_calldata.models.request import SwapSide
from psp_calldata.models.route import PricedRoute

PERCENT = 100


@dataclass(frozen=True)
class AdjustedAmounts:
    """Amounts to build the transaction with."""

    src_amount: int
    dest_amount: int


def _check(amount: int, slippage: int) -> None:
    if isinstance(slippage, bool) or not isinstance(slippage, int):
        raise InvalidInput(f"Slippage must be an integer percent, got {slippage!r}")
    if not 0 <= slippage <= PERCENT:
        raise InvalidInput(f"Slippage must be between 0 and {PERCENT}, got {slippage}")
    if amount < 0:
        raise InvalidInput(f"Amount cannot be negative: {amount}")


def apply_slippage_down(amount: int, slippage: int) -> int:
    """Minimum acceptable output: ``amount * (100 - slippage) // 100``."""
    _check(amount, slippage)
    return amount * (PERCENT - slippage) // PERCENT


def apply_slippage_up(amount: int, slippage: int) -> int:
    """Maximum authorised input: ``amount * (100 + slippage) // 100``."""
    _check(amount, slippage)
    return amount * (PERCENT + slippage) // PERCENT


def adjust_amounts(route: PricedRoute, side: SwapSide, slippage: int) -> AdjustedAmounts:
    """Apply slippage to the side of the route that is not fixed by the user.

    SELL keeps the source amount and lowers the destination amount, so the
    swap still succeeds on a worse-than-quoted fill. BUY keeps the
    destination amount and raises the source amount, authorising up to
    ``slippage`` percent more input.

    Args:
        route: Priced route from the aggregator
        side: Trade side of the request
        slippage: Tolerance in whole percent (0 is a no-op)

    Returns:
        AdjustedAmounts for building the transaction
    """
    src_amount = int(route.src_amount)
    dest_amount = int(route.dest_amount)

    if side is SwapSide.SELL:
        return AdjustedAmounts(
            src_amount=src_amount,
            dest_amount=apply_slippage_down(dest_amount, slippage),
        )
    return AdjustedAmounts(
        src_amount=apply_slippage_up(src_amount, slippage),
        dest_amount=dest_amount,
    )


__all__ = ["AdjustedAmounts", "adjust_amounts", "apply_slippage_down", "apply_slippage_up"]
