"""Filters for pruning discovered pools before simulation."""

from .amm import ConstantProductPool
from .config import ZERO_ASSET_ID


def filter_blacklisted_tokens(
    pools: list[ConstantProductPool], blacklisted_tokens: list[bytes]
) -> list[ConstantProductPool]:
    """Drop pools that hold a blacklisted token."""
    blacklist = set(blacklisted_tokens)
    return [
        pool for pool in pools
        if not any(token in blacklist for token in pool.tokens())
    ]


def filter_blacklisted_amms(
    pools: list[ConstantProductPool], blacklisted_addresses: list[str]
) -> list[ConstantProductPool]:
    """Drop pools whose AMM address is blacklisted (case-insensitive)."""
    blacklist = {address.lower() for address in blacklisted_addresses}
    return [pool for pool in pools if pool.address.lower() not in blacklist]


def filter_empty_amms(pools: list[ConstantProductPool]) -> list[ConstantProductPool]:
    """Drop pools with both tokens unset."""
    return [
        pool for pool in pools
        if not (pool.token_0 == ZERO_ASSET_ID and pool.token_1 == ZERO_ASSET_ID)
    ]


def filter_amms_with_empty_reserves(
    pools: list[ConstantProductPool],
) -> list[ConstantProductPool]:
    """Drop pools with no liquidity on either side."""
    return [pool for pool in pools if not (pool.reserve_0 == 0 and pool.reserve_1 == 0)]
