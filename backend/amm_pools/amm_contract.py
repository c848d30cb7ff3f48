"""
AMM contract handle.

Binds the static AMM ABI to a resolved contract address and exposes the
interface's read-only operations as plain methods. Every method is a
single eth_call; web3 failures are re-raised as AMMError subclasses.
"""

from typing import Any

import requests
from web3 import Web3
from web3.contract import Contract
from web3.exceptions import BadFunctionCallOutput, ContractLogicError, Web3Exception

from .abis import AMM_ABI
from .config import AMM_CONTRACT_ID
from .contract_id import ContractId
from .errors import ContractCallError, ContractNotDeployedError

PoolId = tuple[bytes, bytes, bool]


class AmmContract:
    """Callable handle to a deployed AMM contract."""

    def __init__(self, contract: Contract, contract_id: ContractId) -> None:
        self._contract = contract
        self._contract_id = contract_id

    @classmethod
    def bind(cls, w3: Web3, contract_id: ContractId | str = AMM_CONTRACT_ID) -> "AmmContract":
        """
        Resolve a contract identifier and bind it to the AMM ABI.

        Args:
            w3: Web3 instance
            contract_id: ContractId or its hex form

        Returns:
            AmmContract handle
        """
        if isinstance(contract_id, str):
            contract_id = ContractId.from_hex(contract_id)
        contract = w3.eth.contract(address=contract_id.to_address(), abi=AMM_ABI)
        return cls(contract, contract_id)

    @property
    def address(self) -> str:
        return self._contract.address

    @property
    def contract_id(self) -> ContractId:
        return self._contract_id

    def pools(self, block_identifier: Any = "latest") -> list[PoolId]:
        """Get the AMM's pool registry."""
        return self._call("pools", block_identifier=block_identifier)

    def fees(self, block_identifier: Any = "latest") -> tuple[int, int, int, int]:
        """
        Get the AMM fee schedule.

        Returns:
            Tuple of (lpFeeVolatile, lpFeeStable, protocolFeeVolatile, protocolFeeStable)
        """
        result = self._call("fees", block_identifier=block_identifier)
        return (result[0], result[1], result[2], result[3])

    def pool_metadata(
        self, pool_id: PoolId, block_identifier: Any = "latest"
    ) -> tuple[int, int, int, int, int]:
        """
        Get reserves and token decimals of a single pool.

        Returns:
            Tuple of (reserve0, reserve1, liquidity, decimals0, decimals1)
        """
        result = self._call("pool_metadata", pool_id, block_identifier=block_identifier)
        return (result[0], result[1], result[2], result[3], result[4])

    def _call(self, fn_name: str, *args: Any, block_identifier: Any = "latest") -> Any:
        fn = getattr(self._contract.functions, fn_name)
        try:
            return fn(*args).call(block_identifier=block_identifier)
        except BadFunctionCallOutput as exc:
            raise ContractNotDeployedError(
                f"No AMM contract at {self.address} (id {self._contract_id})"
            ) from exc
        except ContractLogicError as exc:
            raise ContractCallError(f"{fn_name}() reverted on {self.address}: {exc}") from exc
        # web3 6.x raises plain ValueError for JSON-RPC error responses
        except (Web3Exception, requests.RequestException, ValueError) as exc:
            raise ContractCallError(f"{fn_name}() failed on {self.address}: {exc}") from exc
