"""
Multicall3 helper for batching AMM pool_metadata calls into a single RPC request.

Uses the Multicall3 contract deployed at a standard address to aggregate
many view calls against the AMM into one eth_call.
"""

from typing import Any

from eth_abi.abi import encode, decode
from web3 import Web3
from web3.contract import Contract

from .config import MULTICALL3_ADDRESS


# Multicall3 ABI (minimal - only aggregate3)
MULTICALL3_ABI = [
    {
        "name": "aggregate3",
        "type": "function",
        "stateMutability": "payable",
        "inputs": [
            {
                "name": "calls",
                "type": "tuple[]",
                "components": [
                    {"name": "target", "type": "address"},
                    {"name": "allowFailure", "type": "bool"},
                    {"name": "callData", "type": "bytes"},
                ],
            }
        ],
        "outputs": [
            {
                "name": "returnData",
                "type": "tuple[]",
                "components": [
                    {"name": "success", "type": "bool"},
                    {"name": "returnData", "type": "bytes"},
                ],
            }
        ],
    }
]

POOL_ID_TYPE = "(bytes32,bytes32,bool)"
POOL_METADATA_TYPES = ["uint64", "uint64", "uint64", "uint8", "uint8"]
POOL_METADATA_SELECTOR = bytes(Web3.keccak(text=f"pool_metadata({POOL_ID_TYPE})")[:4])


def create_multicall3(w3: Web3) -> Contract:
    """Create a Multicall3 contract instance."""
    return w3.eth.contract(
        address=Web3.to_checksum_address(MULTICALL3_ADDRESS),
        abi=MULTICALL3_ABI
    )


def execute_multicall(
    w3: Web3,
    calls: list[tuple[str, bool, bytes]],
    block_identifier: Any = "latest",
) -> list[tuple[bool, bytes]]:
    """Run `calls` through aggregate3 at `block_identifier`, returning (success, returnData) pairs."""
    multicall = create_multicall3(w3)
    results = multicall.functions.aggregate3(calls).call(block_identifier=block_identifier)
    return [(r[0], r[1]) for r in results]


def build_pool_metadata_call(
    amm_address: str, pool_id: tuple[bytes, bytes, bool]
) -> tuple[str, bool, bytes]:
    """
    Build a pool_metadata call for Multicall3.aggregate3.

    allowFailure is set; a failed pool comes back as (False, b"").

    Returns:
        Tuple of (target, allowFailure, callData)
    """
    calldata = POOL_METADATA_SELECTOR + encode([POOL_ID_TYPE], [pool_id])
    return (Web3.to_checksum_address(amm_address), True, calldata)


def decode_pool_metadata_result(data: bytes) -> tuple[int, int, int, int, int]:
    """Decode pool_metadata return data into (reserve0, reserve1, liquidity, decimals0, decimals1)."""
    result = decode(POOL_METADATA_TYPES, data)
    return (result[0], result[1], result[2], result[3], result[4])
