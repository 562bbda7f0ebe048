"""Pydantic models for swap requests and aggregator payloads."""

from psp_calldata.models.request import (
    PREFERRED_METHODS,
    ContractMethod,
    SwapRequest,
    SwapSide,
)
from psp_calldata.models.route import BuiltTransaction, PricedRoute
from psp_calldata.models.types import Address, Bytes, Uint256

__all__ = [
    # Types
    "Address",
    "Bytes",
    "Uint256",
    # Request
    "ContractMethod",
    "PREFERRED_METHODS",
    "SwapRequest",
    "SwapSide",
    # Aggregator payloads
    "BuiltTransaction",
    "PricedRoute",
]
