"""Test helpers module for shared test utilities.

- constants: Token, router and selector constants
- factories: Request, route and calldata factory functions
"""

from tests.helpers.constants import (
    AUGUSTUS_V5,
    DAI,
    TOKEN_DECIMALS,
    UNKNOWN_SELECTOR,
    USDC,
    USER,
    V5_BUY,
    V5_BUY_ON_UNISWAP_V2_FORK,
    V5_MULTI_SWAP,
    V5_SWAP_ON_UNISWAP_V2_FORK,
    WETH,
)
from tests.helpers.factories import make_calldata, make_request, make_route, read_word

__all__ = [
    # Constants
    "AUGUSTUS_V5",
    "DAI",
    "TOKEN_DECIMALS",
    "UNKNOWN_SELECTOR",
    "USDC",
    "USER",
    "V5_BUY",
    "V5_BUY_ON_UNISWAP_V2_FORK",
    "V5_MULTI_SWAP",
    "V5_SWAP_ON_UNISWAP_V2_FORK",
    "WETH",
    # Factories
    "make_calldata",
    "make_request",
    "make_route",
    "read_word",
]
