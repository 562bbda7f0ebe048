"""Augustus function selectors and the calldata offset of their patchable amount.

An adapter contract overwrites one 32-byte amount word inside the router
calldata right before execution. For a sell the patched word is the source
amount, for a buy it is the destination amount. Each offset is the byte
position of that word counted from the start of the calldata, i.e.
``4 + k * 32`` where ``k`` is the zero-indexed head slot of the parameter
(struct parameters encode their static head in place, so ``k`` indexes
into the struct fields).

Entries are append-only: new router versions add selectors, existing
offsets never change.
"""

from __future__ import annotations

import re
from types import MappingProxyType

from psp_calldata.errors import InvalidInput, UnsupportedSelector
from psp_calldata.models.request import SwapSide

SELECTOR_SIZE = 4
WORD_SIZE = 32

_HEX = re.compile(r"[0-9a-fA-F]*")


def _slot(k: int) -> int:
    """Byte offset of head slot ``k`` after the 4-byte selector."""
    return SELECTOR_SIZE + k * WORD_SIZE


# Source amount offsets, patched for SELL
SELL_AMOUNT_OFFSETS = MappingProxyType(
    {
        "0xda8567c8": _slot(3),  # Augustus V3 multiSwap
        "0x58b9d179": _slot(0),  # Augustus V4 swapOnUniswap
        "0x0863b7ac": _slot(2),  # Augustus V4 swapOnUniswapFork
        "0x8f00eccb": _slot(2),  # Augustus V4 multiSwap
        "0xec1d21dd": _slot(2),  # Augustus V4 megaSwap
        "0x54840d1a": _slot(0),  # Augustus V5 swapOnUniswap
        "0xf5661034": _slot(2),  # Augustus V5 swapOnUniswapFork
        "0x0b86a4c1": _slot(1),  # Augustus V5 swapOnUniswapV2Fork
        "0x64466805": _slot(2),  # Augustus V5 swapOnZeroXv4
        "0xa94e78ef": _slot(2),  # Augustus V5 multiSwap
        "0x46c67b6d": _slot(2),  # Augustus V5 megaSwap
        "0xb22f4db8": _slot(2),  # directBalancerV2GivenInSwap
        "0x19fc5be0": _slot(2),  # directBalancerV2GivenOutSwap
        "0x3865bde6": _slot(4),  # directCurveV1Swap
        "0x58f15100": _slot(2),  # directCurveV2Swap
        "0xa6886da9": _slot(4),  # directUniV3Swap
    }
)

# Destination amount offsets, patched for BUY
BUY_AMOUNT_OFFSETS = MappingProxyType(
    {
        "0x935fb84b": _slot(1),  # Augustus V5 buyOnUniswap
        "0xc03786b0": _slot(3),  # Augustus V5 buyOnUniswapFork
        "0xb2f1e6db": _slot(2),  # Augustus V5 buyOnUniswapV2Fork
        "0xb66bcbac": _slot(5),  # Augustus V5 buy (old)
        "0x35326910": _slot(5),  # Augustus V5 buy
        "0x87a63926": _slot(2),  # directUniV3Buy
    }
)

_overlap = SELL_AMOUNT_OFFSETS.keys() & BUY_AMOUNT_OFFSETS.keys()
if _overlap:
    raise RuntimeError(f"Selectors present in both offset tables: {sorted(_overlap)}")


def selector_from_calldata(calldata: str | bytes) -> str:
    """Extract the 4-byte function selector as lowercase 0x-hex.

    Calldata shorter than a selector yields its truncated prefix, which
    matches no table entry and so surfaces as an unsupported selector.

    Args:
        calldata: Raw calldata bytes, 0x-prefixed hex, or a bare selector

    Raises:
        InvalidInput: If the calldata is not hex
    """
    if isinstance(calldata, bytes | bytearray):
        return "0x" + bytes(calldata[:SELECTOR_SIZE]).hex()

    hex_part = calldata[2:] if calldata[:2].lower() == "0x" else calldata
    head_hex = hex_part[: SELECTOR_SIZE * 2]
    if not _HEX.fullmatch(head_hex):
        raise InvalidInput(f"Calldata is not hex: '{head_hex}'")
    return "0x" + head_hex.lower()


def offset_for_sell(calldata: str | bytes) -> int:
    """Offset of the source amount in sell calldata.

    Raises:
        UnsupportedSelector: If the selector is not a known sell method
    """
    selector = selector_from_calldata(calldata)
    try:
        return SELL_AMOUNT_OFFSETS[selector]
    except KeyError:
        raise UnsupportedSelector(selector, SwapSide.SELL.value) from None


def offset_for_buy(calldata: str | bytes) -> int:
    """Offset of the destination amount in buy calldata.

    Raises:
        UnsupportedSelector: If the selector is not a known buy method
    """
    selector = selector_from_calldata(calldata)
    try:
        return BUY_AMOUNT_OFFSETS[selector]
    except KeyError:
        raise UnsupportedSelector(selector, SwapSide.BUY.value) from None


def offset_for_side(side: SwapSide, calldata: str | bytes) -> int:
    """Look up the patchable amount offset in the table for ``side``."""
    if side is SwapSide.SELL:
        return offset_for_sell(calldata)
    return offset_for_buy(calldata)


__all__ = [
    "SELL_AMOUNT_OFFSETS",
    "BUY_AMOUNT_OFFSETS",
    "selector_from_calldata",
    "offset_for_sell",
    "offset_for_buy",
    "offset_for_side",
]
