"""
Contract ABIs for AMM pool registry queries.

Contains the minimal AMM interface: the pool registry accessor, the
fee schedule, and per-pool metadata.
"""

# Pool id tuple shared by pools() and pool_metadata()
POOL_ID_COMPONENTS = [
    {"name": "asset0", "type": "bytes32"},
    {"name": "asset1", "type": "bytes32"},
    {"name": "isStable", "type": "bool"},
]


# AMM ABI (minimal - pool registry only)
AMM_POOLS_ABI = [
    {
        "name": "pools",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {
                "name": "pools",
                "type": "tuple[]",
                "components": POOL_ID_COMPONENTS,
            }
        ],
    }
]


# AMM ABI (extended - for pool state population)
AMM_ABI = AMM_POOLS_ABI + [
    {
        "name": "fees",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {"name": "lpFeeVolatile", "type": "uint64"},
            {"name": "lpFeeStable", "type": "uint64"},
            {"name": "protocolFeeVolatile", "type": "uint64"},
            {"name": "protocolFeeStable", "type": "uint64"},
        ],
    },
    {
        "name": "pool_metadata",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {
                "name": "poolId",
                "type": "tuple",
                "components": POOL_ID_COMPONENTS,
            }
        ],
        "outputs": [
            {"name": "reserve0", "type": "uint64"},
            {"name": "reserve1", "type": "uint64"},
            {"name": "liquidity", "type": "uint64"},
            {"name": "decimals0", "type": "uint8"},
            {"name": "decimals1", "type": "uint8"},
        ],
    },
]
