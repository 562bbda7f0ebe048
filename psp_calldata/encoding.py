"""ABI codec for the record handed to the on-chain swap adapter.

The adapter decodes a single ``(address,bytes,uint256,uint256,uint256)``
tuple: router address, router calldata, source amount, destination amount
and the calldata offset of the amount it may overwrite. Without offset
patching the offset is the uint256 zero, so both modes share one layout.

Records are emitted (and cached) as 0x-prefixed hex text of the encoding,
the form test harnesses read back through their FFI.
"""

from __future__ import annotations

from dataclasses import dataclass

from eth_abi import decode, encode  # type: ignore[attr-defined]

from psp_calldata.models.types import UINT256_MAX, address_to_bytes, normalize_address

SWAP_CALLDATA_TYPES = ["(address,bytes,uint256,uint256,uint256)"]

NO_OFFSET = 0


@dataclass(frozen=True)
class SwapCalldata:
    """Everything the adapter needs to execute one swap.

    Attributes:
        to: Router contract address
        data: Router calldata
        src_amount: Source amount (slippage-adjusted for BUY)
        dest_amount: Destination amount (slippage-adjusted for SELL)
        offset: Byte offset of the patchable amount, 0 when not patching
    """

    to: str
    data: bytes
    src_amount: int
    dest_amount: int
    offset: int = NO_OFFSET

    def __post_init__(self) -> None:
        for name in ("src_amount", "dest_amount", "offset"):
            value = getattr(self, name)
            if not 0 <= value <= UINT256_MAX:
                raise ValueError(f"{name} out of uint256 range: {value}")

    def encode(self) -> bytes:
        """ABI-encode as the adapter's single tuple argument."""
        return encode(
            SWAP_CALLDATA_TYPES,
            [
                (
                    address_to_bytes(self.to),
                    self.data,
                    self.src_amount,
                    self.dest_amount,
                    self.offset,
                )
            ],
        )

    def to_output(self) -> bytes:
        """Emitted form: the encoding as 0x-prefixed ASCII hex, no newline."""
        return b"0x" + self.encode().hex().encode("ascii")

    @classmethod
    def from_output(cls, output: bytes | str) -> SwapCalldata:
        """Decode an emitted record (0x-prefixed hex text)."""
        text = output.decode("ascii") if isinstance(output, bytes) else output
        if not text.startswith("0x"):
            raise ValueError("Emitted record must start with 0x")
        return cls.decode(bytes.fromhex(text[2:]))

    @classmethod
    def decode(cls, encoded: bytes) -> SwapCalldata:
        """Inverse of ``encode``. The address comes back lowercased."""
        ((to, data, src_amount, dest_amount, offset),) = decode(SWAP_CALLDATA_TYPES, encoded)
        return cls(
            to=normalize_address(to),
            data=bytes(data),
            src_amount=src_amount,
            dest_amount=dest_amount,
            offset=offset,
        )


__all__ = ["NO_OFFSET", "SWAP_CALLDATA_TYPES", "SwapCalldata"]
