"""Swap request model and invocation-argument parsing."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from psp_calldata.errors import InvalidInput
from psp_calldata.models.types import Address, Uint256


class SwapSide(str, Enum):
    """Which amount of the swap is fixed by the user."""

    SELL = "SELL"  # exact source amount, destination amount floats
    BUY = "BUY"  # exact destination amount, source amount floats


class ContractMethod(str, Enum):
    """Augustus execution strategies the aggregator may pick for a route."""

    SWAP_ON_UNISWAP = "swapOnUniswap"
    BUY_ON_UNISWAP = "buyOnUniswap"
    SWAP_ON_UNISWAP_FORK = "swapOnUniswapFork"
    BUY_ON_UNISWAP_FORK = "buyOnUniswapFork"
    SWAP_ON_UNISWAP_V2_FORK = "swapOnUniswapV2Fork"
    BUY_ON_UNISWAP_V2_FORK = "buyOnUniswapV2Fork"
    SIMPLE_SWAP = "simpleSwap"
    SIMPLE_BUY = "simpleBuy"
    MULTI_SWAP = "multiSwap"
    MEGA_SWAP = "megaSwap"
    BUY = "buy"
    SWAP_ON_ZERO_X_V4 = "swapOnZeroXv4"
    DIRECT_UNI_V3_SWAP = "directUniV3Swap"
    DIRECT_UNI_V3_BUY = "directUniV3Buy"
    DIRECT_BALANCER_V2_GIVEN_IN_SWAP = "directBalancerV2GivenInSwap"
    DIRECT_BALANCER_V2_GIVEN_OUT_SWAP = "directBalancerV2GivenOutSwap"
    DIRECT_CURVE_V1_SWAP = "directCurveV1Swap"
    DIRECT_CURVE_V2_SWAP = "directCurveV2Swap"


# Strategies whose calldata layout is covered by the offset tables
PREFERRED_METHODS: dict[SwapSide, tuple[ContractMethod, ...]] = {
    SwapSide.SELL: (ContractMethod.MULTI_SWAP, ContractMethod.MEGA_SWAP),
    SwapSide.BUY: (ContractMethod.BUY,),
}

# Positional invocation arguments, in order
ARGUMENT_NAMES = (
    "chain_id",
    "src_token",
    "dest_token",
    "amount",
    "user_address",
    "side",
    "max_slippage",
    "max",
    "src_decimals",
    "dest_decimals",
    "block_number",
    "update_cache",
)
REQUIRED_ARGUMENTS = 10


def _parse_int(name: str, raw: str) -> int:
    if not raw.isascii() or not raw.isdigit():
        raise InvalidInput(f"{name} must be a non-negative integer, got '{raw}'")
    return int(raw)


def _parse_flag(name: str, raw: str) -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise InvalidInput(f"{name} must be 'true' or 'false', got '{raw}'")


def _render_flag(value: bool) -> str:
    return "true" if value else "false"


class SwapRequest(BaseModel):
    """A single swap preparation request.

    Attributes:
        chain_id: Network id passed to the aggregator
        src_token: Token being sold
        dest_token: Token being bought
        amount: Fixed amount in base units of the side fixed by ``side``
        user_address: Address that will execute the swap
        side: SELL (exact in) or BUY (exact out)
        max_slippage: Slippage tolerance in whole percent
        max: Restrict routes to patchable methods and resolve the amount offset
        src_decimals: Decimals of the source token
        dest_decimals: Decimals of the destination token
        block_number: Only part of the cache key, never sent to the aggregator
        update_cache: Whether a freshly computed response is written to the cache
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    chain_id: int = Field(gt=0, alias="chainId")
    src_token: Address = Field(alias="srcToken")
    dest_token: Address = Field(alias="destToken")
    amount: Uint256
    user_address: Address = Field(alias="userAddress")
    side: SwapSide
    max_slippage: int = Field(ge=0, le=100, alias="maxSlippage")
    max: bool = False
    src_decimals: int = Field(ge=0, le=77, alias="srcDecimals")
    dest_decimals: int = Field(ge=0, le=77, alias="destDecimals")
    block_number: int | None = Field(default=None, ge=0, alias="blockNumber")
    update_cache: bool = Field(default=True, alias="updateCache")
    # Raw invocation arguments, set only by from_args
    _args: tuple[str, ...] = PrivateAttr(default=())

    @classmethod
    def from_args(cls, args: Sequence[str]) -> SwapRequest:
        """Parse the positional invocation arguments.

        Raises:
            InvalidInput: On a wrong argument count or any malformed value
        """
        args = tuple(args)
        if not REQUIRED_ARGUMENTS <= len(args) <= len(ARGUMENT_NAMES):
            raise InvalidInput(
                f"Expected {REQUIRED_ARGUMENTS} to {len(ARGUMENT_NAMES)} arguments, "
                f"got {len(args)}"
            )

        values = dict(zip(ARGUMENT_NAMES, args, strict=False))
        if values["side"] not in SwapSide.__members__:
            raise InvalidInput(f"side must be SELL or BUY, got '{values['side']}'")

        fields: dict[str, object] = {
            "chain_id": _parse_int("chain_id", values["chain_id"]),
            "src_token": values["src_token"],
            "dest_token": values["dest_token"],
            "amount": values["amount"],
            "user_address": values["user_address"],
            "side": SwapSide(values["side"]),
            "max_slippage": _parse_int("max_slippage", values["max_slippage"]),
            "max": _parse_flag("max", values["max"]),
            "src_decimals": _parse_int("src_decimals", values["src_decimals"]),
            "dest_decimals": _parse_int("dest_decimals", values["dest_decimals"]),
        }
        if "block_number" in values:
            fields["block_number"] = _parse_int("block_number", values["block_number"])
        if "update_cache" in values:
            # Anything other than an explicit "false" keeps cache writes on
            fields["update_cache"] = values["update_cache"] != "false"

        request = cls.validated(fields)
        request._args = args
        return request

    @classmethod
    def validated(cls, fields: dict[str, object]) -> SwapRequest:
        """Build a request, reporting validation errors as InvalidInput."""
        try:
            return cls.model_validate(fields)
        except ValidationError as err:
            raise InvalidInput(str(err)) from err

    @property
    def preferred_methods(self) -> tuple[ContractMethod, ...]:
        """Contract methods to restrict the route to, empty when unrestricted."""
        if not self.max:
            return ()
        return PREFERRED_METHODS[self.side]

    def cache_args(self) -> tuple[str, ...]:
        """Ordered argument list the cache key is computed from.

        Requests parsed from invocation arguments keep those arguments
        verbatim. Requests built from fields (e.g. over HTTP) render every
        field, so the cache-write flag always takes part in the key.
        """
        if self._args:
            return self._args
        return (
            str(self.chain_id),
            self.src_token,
            self.dest_token,
            self.amount,
            self.user_address,
            self.side.value,
            str(self.max_slippage),
            _render_flag(self.max),
            str(self.src_decimals),
            str(self.dest_decimals),
            "" if self.block_number is None else str(self.block_number),
            _render_flag(self.update_cache),
        )
