"""Aggregator payload models.

Only the fields the pipeline reads are declared. Everything else the API
returns is preserved as extra data so the route can be sent back verbatim
when building the transaction.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from psp_calldata.models.types import Address, Bytes, Uint256, hex_to_bytes


class PricedRoute(BaseModel):
    """Priced route returned by the quoting endpoint."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    src_amount: Uint256 = Field(alias="srcAmount")
    dest_amount: Uint256 = Field(alias="destAmount")
    src_token: str | None = Field(default=None, alias="srcToken")
    dest_token: str | None = Field(default=None, alias="destToken")
    contract_method: str | None = Field(default=None, alias="contractMethod")
    network: int | None = None

    def to_payload(self) -> dict[str, Any]:
        """Route as the API expects it back, extra fields included."""
        payload = self.model_dump(by_alias=True, exclude_unset=True)
        payload.update(self.model_extra or {})
        return payload


class BuiltTransaction(BaseModel):
    """Transaction parameters returned by the transaction-building endpoint."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    to: Address
    data: Bytes
    from_: str | None = Field(default=None, alias="from")
    value: str | None = None
    chain_id: int | None = Field(default=None, alias="chainId")

    @property
    def calldata(self) -> bytes:
        return hex_to_bytes(self.data)
