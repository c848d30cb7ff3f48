"""
Configuration constants for the AMM pool registry query.

Centralizes the target contract identifier, RPC settings, and the
Multicall3 address used for batched pool reads.
"""

# ─── AMM Contract ───

# 256-bit contract identifier (bytes32, address left-padded with zeros)
AMM_CONTRACT_ID = "0x0000000000000000000000002e40f2b244b98ed6b8204b3de0156c6961f98525"
# Block the AMM was deployed at; pool reads below it are skipped
AMM_CREATION_BLOCK = 0

# ─── RPC ───

# Environment variable holding the JSON-RPC endpoint (loaded from .env)
RPC_URL_ENV = "rpc_url"

# ─── Batching ───

# Multicall3 contract address (same on all major EVM chains)
MULTICALL3_ADDRESS = "0xcA11bde05977b3631167028862bE2a173976CA11"

# Max pool_metadata calls per aggregate3 request
POOL_BATCH_STEP = 766

# Zeroed 32-byte asset id
ZERO_ASSET_ID = bytes(32)
