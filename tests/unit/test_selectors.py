"""Tests for the selector offset tables."""

import pytest
from eth_abi import encode  # type: ignore[attr-defined]

from psp_calldata.errors import InvalidInput, UnsupportedSelector
from psp_calldata.models import SwapSide
from psp_calldata.selectors import (
    BUY_AMOUNT_OFFSETS,
    SELL_AMOUNT_OFFSETS,
    offset_for_buy,
    offset_for_sell,
    offset_for_side,
    selector_from_calldata,
)
from tests.helpers import (
    DAI,
    UNKNOWN_SELECTOR,
    V5_BUY,
    V5_BUY_ON_UNISWAP_V2_FORK,
    V5_MULTI_SWAP,
    V5_SWAP_ON_UNISWAP_V2_FORK,
    WETH,
    make_calldata,
    read_word,
)

# Known Augustus call signatures and the offset of their patchable amount
KNOWN_SELL = {
    "0xda8567c8": 100,
    "0x58b9d179": 4,
    "0x0863b7ac": 68,
    "0x8f00eccb": 68,
    "0xec1d21dd": 68,
    "0x54840d1a": 4,
    "0xf5661034": 68,
    "0x0b86a4c1": 36,
    "0x64466805": 68,
    "0xa94e78ef": 68,
    "0x46c67b6d": 68,
    "0xb22f4db8": 68,
    "0x19fc5be0": 68,
    "0x3865bde6": 132,
    "0x58f15100": 68,
    "0xa6886da9": 132,
}
KNOWN_BUY = {
    "0x935fb84b": 36,
    "0xc03786b0": 100,
    "0xb2f1e6db": 68,
    "0xb66bcbac": 164,
    "0x35326910": 164,
    "0x87a63926": 68,
}


class TestTableContents:
    """Tests for the static table contents."""

    @pytest.mark.parametrize("selector,offset", sorted(KNOWN_SELL.items()))
    def test_sell_selectors_resolve(self, selector, offset):
        """Every known sell selector resolves to its offset."""
        assert offset_for_sell(selector) == offset

    @pytest.mark.parametrize("selector,offset", sorted(KNOWN_BUY.items()))
    def test_buy_selectors_resolve(self, selector, offset):
        """Every known buy selector resolves to its offset."""
        assert offset_for_buy(selector) == offset

    def test_tables_cover_exactly_known_selectors(self):
        """The tables hold no entries beyond the known signatures."""
        assert dict(SELL_AMOUNT_OFFSETS) == KNOWN_SELL
        assert dict(BUY_AMOUNT_OFFSETS) == KNOWN_BUY

    def test_tables_are_disjoint(self):
        """No selector is both a sell and a buy method."""
        assert not SELL_AMOUNT_OFFSETS.keys() & BUY_AMOUNT_OFFSETS.keys()

    def test_offsets_are_word_aligned_after_selector(self):
        """Every offset is 4 + k*32."""
        for offset in [*SELL_AMOUNT_OFFSETS.values(), *BUY_AMOUNT_OFFSETS.values()]:
            assert offset >= 4
            assert (offset - 4) % 32 == 0

    def test_tables_are_read_only(self):
        """The tables cannot be mutated at runtime."""
        with pytest.raises(TypeError):
            SELL_AMOUNT_OFFSETS["0x00000000"] = 4  # type: ignore[index]
        with pytest.raises(TypeError):
            BUY_AMOUNT_OFFSETS["0x00000000"] = 4  # type: ignore[index]


class TestUnsupportedSelectors:
    """Unknown selectors fail instead of defaulting."""

    def test_unknown_selector_fails_both_lookups(self):
        """A selector in neither table fails for both sides."""
        with pytest.raises(UnsupportedSelector) as sell_err:
            offset_for_sell(UNKNOWN_SELECTOR)
        with pytest.raises(UnsupportedSelector) as buy_err:
            offset_for_buy(UNKNOWN_SELECTOR)
        assert sell_err.value.selector == UNKNOWN_SELECTOR
        assert sell_err.value.side == "SELL"
        assert buy_err.value.side == "BUY"

    def test_sell_selector_is_not_a_buy(self):
        """A sell method is rejected by the buy table."""
        with pytest.raises(UnsupportedSelector):
            offset_for_buy(V5_MULTI_SWAP)

    def test_buy_selector_is_not_a_sell(self):
        """A buy method is rejected by the sell table."""
        with pytest.raises(UnsupportedSelector):
            offset_for_sell(V5_BUY)

    def test_zero_selector_is_unsupported(self):
        """The zero selector is not special-cased."""
        with pytest.raises(UnsupportedSelector):
            offset_for_sell("0x00000000")


class TestSelectorExtraction:
    """Tests for selector_from_calldata."""

    def test_from_hex_calldata(self):
        """Selector is the first four bytes of hex calldata."""
        assert selector_from_calldata(V5_MULTI_SWAP + "00" * 64) == V5_MULTI_SWAP

    def test_from_bytes(self):
        """Raw bytes are accepted."""
        assert selector_from_calldata(bytes.fromhex("a94e78ef" + "ff" * 32)) == V5_MULTI_SWAP

    def test_uppercase_is_normalized(self):
        """Mixed-case hex resolves to the lowercase selector."""
        assert selector_from_calldata("0xA94E78EF00") == V5_MULTI_SWAP
        assert offset_for_sell("0xA94E78EF") == 68

    def test_too_short_is_unsupported(self):
        """Calldata shorter than a selector matches no method."""
        assert selector_from_calldata("0xa94e") == "0xa94e"
        assert selector_from_calldata(b"\xa9\x4e") == "0xa94e"
        with pytest.raises(UnsupportedSelector):
            offset_for_sell("0x")
        with pytest.raises(UnsupportedSelector):
            offset_for_buy(b"")

    def test_non_hex_raises(self):
        """Non-hex calldata is invalid input."""
        with pytest.raises(InvalidInput):
            selector_from_calldata("0xzzzzzzzz")


class TestOffsetsPointAtAmount:
    """Offsets address the amount word in ABI-encoded calldata."""

    def test_swap_on_uniswap_v2_fork_amount_in(self):
        """swapOnUniswapV2Fork(tokenIn, amountIn, amountOutMin, weth, pools): amountIn."""
        amount_in = 123_456_789 * 10**18
        args = encode(
            ["address", "uint256", "uint256", "address", "uint256[]"],
            [DAI, amount_in, 1, WETH, [7, 8]],
        )
        calldata = bytes.fromhex(V5_SWAP_ON_UNISWAP_V2_FORK[2:]) + args

        offset = offset_for_sell(calldata)

        assert read_word(calldata, offset) == amount_in

    def test_buy_on_uniswap_v2_fork_amount_out(self):
        """buyOnUniswapV2Fork(tokenIn, amountInMax, amountOut, weth, pools): amountOut."""
        amount_out = 500
        args = encode(
            ["address", "uint256", "uint256", "address", "uint256[]"],
            [DAI, 10**30, amount_out, WETH, [9]],
        )
        calldata = bytes.fromhex(V5_BUY_ON_UNISWAP_V2_FORK[2:]) + args

        offset = offset_for_buy(calldata)

        assert read_word(calldata, offset) == amount_out

    def test_dynamic_struct_amount(self):
        """A dynamic struct argument starts after its head pointer (directUniV3Swap)."""
        from_amount = 42 * 10**6
        struct = (DAI, WETH, WETH, from_amount, 1, b"\x01\x02")
        args = encode(["(address,address,address,uint256,uint256,bytes)"], [struct])
        calldata = bytes.fromhex("a6886da9") + args

        offset = offset_for_sell(calldata)

        assert offset == 132
        assert read_word(calldata, offset) == from_amount

    def test_multiswap_factory_calldata(self):
        """The calldata factory places the amount where the table expects it."""
        calldata = bytes.fromhex(make_calldata(V5_MULTI_SWAP, 999, slot=2)[2:])
        assert read_word(calldata, offset_for_sell(calldata)) == 999


class TestOffsetForSide:
    """Tests for side dispatch."""

    def test_sell_uses_sell_table(self):
        assert offset_for_side(SwapSide.SELL, V5_MULTI_SWAP) == 68

    def test_buy_uses_buy_table(self):
        assert offset_for_side(SwapSide.BUY, V5_BUY) == 164

    def test_wrong_side_raises(self):
        with pytest.raises(UnsupportedSelector):
            offset_for_side(SwapSide.BUY, V5_MULTI_SWAP)
