"""
256-bit contract identifiers and their resolution to contract addresses.

Identifiers are stored as bytes32: a 20-byte address left-padded with
12 zero bytes, as in ABI-encoded address words.
"""

import re
from dataclasses import dataclass

from web3 import Web3

from .errors import ContractIdError

CONTRACT_ID_SIZE = 32
ADDRESS_SIZE = 20

HEX_ID_RE = re.compile(r"[0-9a-fA-F]{64}")


@dataclass(frozen=True)
class ContractId:
    """Fixed-width identifier of a deployed contract instance."""
    value: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.value, bytes) or len(self.value) != CONTRACT_ID_SIZE:
            raise ContractIdError(
                f"Contract id must be {CONTRACT_ID_SIZE} bytes, got {self.value!r}"
            )

    @classmethod
    def from_hex(cls, hex_str: str) -> "ContractId":
        """Parse a 64-digit hex string, with or without 0x prefix."""
        digits = hex_str[2:] if hex_str.lower().startswith("0x") else hex_str
        if not HEX_ID_RE.fullmatch(digits):
            raise ContractIdError(f"Invalid contract id hex: {hex_str!r}")
        return cls(bytes.fromhex(digits))

    def to_address(self) -> str:
        """
        Resolve the identifier to a checksummed contract address.

        Raises:
            ContractIdError: if the upper 12 bytes are not zero
        """
        padding = self.value[: CONTRACT_ID_SIZE - ADDRESS_SIZE]
        if any(padding):
            raise ContractIdError(
                f"Contract id {self} does not encode a {ADDRESS_SIZE}-byte address"
            )
        return Web3.to_checksum_address("0x" + self.value[-ADDRESS_SIZE:].hex())

    def __str__(self) -> str:
        return "0x" + self.value.hex()
