"""
One-shot AMM pool registry query.

Resolves the configured AMM contract id, binds it to the AMM interface,
calls pools() and logs the raw result.
Run: cd backend && uv run python -m amm_pools.query
"""

import logging
import os

from dotenv import load_dotenv
from web3 import Web3

from .amm_contract import AmmContract, PoolId
from .config import AMM_CONTRACT_ID, RPC_URL_ENV
from .contract_id import ContractId

logger = logging.getLogger(__name__)


def query_pools(w3: Web3, contract_id: ContractId | str = AMM_CONTRACT_ID) -> list[PoolId]:
    """
    Fetch the AMM pool registry and log it verbatim.

    Emits exactly one log record on success and none on failure;
    errors from binding or the call propagate unchanged.
    """
    amm = AmmContract.bind(w3, contract_id)
    pools = amm.pools()
    logger.info("%s", pools)
    return pools


def create_web3() -> Web3:
    """Build a Web3 instance from the rpc_url environment variable."""
    load_dotenv()
    rpc_url = os.getenv(RPC_URL_ENV)
    if not rpc_url:
        raise RuntimeError(f"{RPC_URL_ENV} is not set")
    return Web3(Web3.HTTPProvider(rpc_url))


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    query_pools(create_web3())


if __name__ == "__main__":
    main()
