"""
Mira v1 pool discovery.

Lists every pool registered in the AMM and populates reserves and token
decimals through batched Multicall3 static calls.
"""

import logging
from dataclasses import dataclass
from typing import Any

from web3 import Web3

from .amm import MiraV1Pool
from .amm_contract import AmmContract
from .config import AMM_CONTRACT_ID, AMM_CREATION_BLOCK, POOL_BATCH_STEP
from .contract_id import ContractId
from .multicall import build_pool_metadata_call, decode_pool_metadata_result, execute_multicall

logger = logging.getLogger(__name__)


@dataclass
class MiraV1Factory:
    contract_id: ContractId | str = AMM_CONTRACT_ID
    creation_block: int = AMM_CREATION_BLOCK

    def bind(self, w3: Web3) -> AmmContract:
        return AmmContract.bind(w3, self.contract_id)

    def get_all_pools(
        self,
        w3: Web3,
        block_number: int | None = None,
        step: int = POOL_BATCH_STEP,
    ) -> list[MiraV1Pool]:
        """
        Get every pool in the AMM with reserves populated.

        Pools whose metadata cannot be read are skipped. A block before
        `creation_block` has no pools and makes no calls.
        """
        if block_number is not None and block_number < self.creation_block:
            logger.info(
                "Block %d predates AMM creation at block %d", block_number, self.creation_block
            )
            return []

        block_identifier = block_number if block_number is not None else "latest"
        amm = self.bind(w3)
        pool_ids = amm.pools(block_identifier=block_identifier)
        lp_fee_volatile, lp_fee_stable, _, _ = amm.fees(block_identifier=block_identifier)

        pools = [
            MiraV1Pool(
                address=amm.address,
                token_0=asset_0,
                token_0_decimals=0,
                token_1=asset_1,
                token_1_decimals=0,
                reserve_0=0,
                reserve_1=0,
                fee=lp_fee_stable if is_stable else lp_fee_volatile,
                is_stable=is_stable,
            )
            for asset_0, asset_1, is_stable in pool_ids
        ]
        logger.info("Found %d pools in AMM %s", len(pools), amm.address)
        return populate_pool_data(w3, pools, block_number, step)


def populate_pool_data(
    w3: Web3,
    pools: list[MiraV1Pool],
    block_number: int | None = None,
    step: int = POOL_BATCH_STEP,
) -> list[MiraV1Pool]:
    """
    Refresh reserves and decimals of `pools` in batches of `step` calls.

    Returns the pools that were populated, in input order.
    """
    block_identifier: Any = block_number if block_number is not None else "latest"
    populated = []

    for start in range(0, len(pools), step):
        batch = pools[start:start + step]
        calls = [build_pool_metadata_call(pool.address, pool.pool_id) for pool in batch]
        results = execute_multicall(w3, calls, block_identifier=block_identifier)

        for pool, (success, data) in zip(batch, results):
            if not success or not data:
                logger.warning(
                    "pool_metadata failed for pool (%s, %s, stable=%s)",
                    pool.token_0.hex(), pool.token_1.hex(), pool.is_stable,
                )
                continue
            reserve_0, reserve_1, _, decimals_0, decimals_1 = decode_pool_metadata_result(data)
            pool.reserve_0 = reserve_0
            pool.reserve_1 = reserve_1
            pool.token_0_decimals = decimals_0
            pool.token_1_decimals = decimals_1
            populated.append(pool)

    return populated
