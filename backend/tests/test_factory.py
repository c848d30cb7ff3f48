"""
Tests for pool discovery through batched pool_metadata calls.

Multicall3 return data is real ABI-encoded bytes; contracts are mocks.
Run: cd backend && uv run pytest tests/test_factory.py
"""

import logging
import os
import sys
from unittest.mock import MagicMock

from eth_abi.abi import decode, encode

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from amm_pools.abis import AMM_ABI
from amm_pools.factory import MiraV1Factory
from amm_pools.multicall import (
    POOL_ID_TYPE,
    POOL_METADATA_SELECTOR,
    POOL_METADATA_TYPES,
    build_pool_metadata_call,
    decode_pool_metadata_result,
)

AMM_ADDRESS = "0x2e40f2B244b98ed6B8204B3De0156C6961f98525"
P1 = (b"\x01" * 32, b"\x02" * 32, False)
P2 = (b"\x03" * 32, b"\x04" * 32, True)
P3 = (b"\x05" * 32, b"\x06" * 32, False)


def metadata(reserve_0: int, reserve_1: int, decimals_0: int, decimals_1: int) -> bytes:
    return encode(POOL_METADATA_TYPES, [reserve_0, reserve_1, 1, decimals_0, decimals_1])


def make_w3(pool_ids, multicall_results) -> tuple[MagicMock, MagicMock, MagicMock]:
    """Mock Web3 serving the AMM and Multicall3 contracts by ABI."""
    amm = MagicMock()
    amm.address = AMM_ADDRESS
    amm.functions.pools.return_value.call.return_value = pool_ids
    amm.functions.fees.return_value.call.return_value = (300, 50, 0, 0)

    multicall = MagicMock()
    multicall.functions.aggregate3.return_value.call.side_effect = multicall_results

    w3 = MagicMock()
    w3.eth.contract.side_effect = lambda address, abi: amm if abi is AMM_ABI else multicall
    return w3, amm, multicall


def test_build_pool_metadata_call() -> None:
    target, allow_failure, calldata = build_pool_metadata_call(AMM_ADDRESS.lower(), P2)

    assert target == AMM_ADDRESS
    assert allow_failure is True
    assert calldata[:4] == POOL_METADATA_SELECTOR
    assert decode([POOL_ID_TYPE], calldata[4:]) == (P2,)


def test_decode_pool_metadata_result() -> None:
    assert decode_pool_metadata_result(metadata(10, 20, 6, 18)) == (10, 20, 1, 6, 18)


def test_get_all_pools() -> None:
    """Pools carry metadata and the fee matching their curve."""
    w3, _, multicall = make_w3(
        [P1, P2],
        [[(True, metadata(1000, 2000, 9, 9)), (True, metadata(5, 7, 6, 18))]],
    )

    pools = MiraV1Factory().get_all_pools(w3)

    assert [p.pool_id for p in pools] == [P1, P2]
    assert (pools[0].reserve_0, pools[0].reserve_1, pools[0].fee) == (1000, 2000, 300)
    assert (pools[1].token_0_decimals, pools[1].token_1_decimals, pools[1].fee) == (6, 18, 50)
    assert all(p.address == AMM_ADDRESS for p in pools)

    calls = multicall.functions.aggregate3.call_args[0][0]
    assert [c[2] for c in calls] == [
        build_pool_metadata_call(AMM_ADDRESS, P1)[2],
        build_pool_metadata_call(AMM_ADDRESS, P2)[2],
    ]
    multicall.functions.aggregate3.return_value.call.assert_called_once_with(
        block_identifier="latest"
    )


def test_get_all_pools_batches_and_block() -> None:
    w3, amm, multicall = make_w3(
        [P1, P2, P3],
        [
            [(True, metadata(1, 1, 9, 9)), (True, metadata(2, 2, 9, 9))],
            [(True, metadata(3, 3, 9, 9))],
        ],
    )

    pools = MiraV1Factory().get_all_pools(w3, block_number=42, step=2)

    assert [p.reserve_0 for p in pools] == [1, 2, 3]
    assert multicall.functions.aggregate3.call_count == 2
    amm.functions.pools.return_value.call.assert_called_once_with(block_identifier=42)


def test_failed_metadata_skipped(caplog) -> None:
    caplog.set_level(logging.WARNING)
    w3, _, _ = make_w3(
        [P1, P2, P3],
        [[(True, metadata(1, 1, 9, 9)), (False, b""), (True, metadata(3, 3, 9, 9))]],
    )

    pools = MiraV1Factory().get_all_pools(w3)

    assert [p.pool_id for p in pools] == [P1, P3]
    warnings = [r for r in caplog.records if r.name == "amm_pools.factory"]
    assert len(warnings) == 1
    assert warnings[0].levelno == logging.WARNING


def test_multicall_contract_bound() -> None:
    w3, _, _ = make_w3([], [])

    assert MiraV1Factory().get_all_pools(w3) == []
    abis = [kwargs["abi"] for _, kwargs in w3.eth.contract.call_args_list]
    assert abis == [AMM_ABI]


def test_amm_contract_reads() -> None:
    """Handle methods unpack the raw call results."""
    w3, amm, _ = make_w3([P1], [])
    amm.functions.pool_metadata.return_value.call.return_value = [10, 20, 15, 9, 6]

    handle = MiraV1Factory().bind(w3)

    assert handle.address == AMM_ADDRESS
    assert handle.fees() == (300, 50, 0, 0)
    assert handle.pool_metadata(P1, block_identifier=7) == (10, 20, 15, 9, 6)
    amm.functions.pool_metadata.assert_called_once_with(P1)
    amm.functions.pool_metadata.return_value.call.assert_called_once_with(block_identifier=7)


def test_block_before_creation_makes_no_calls() -> None:
    w3, amm, multicall = make_w3([P1], [[(True, metadata(1, 1, 9, 9))]])

    pools = MiraV1Factory(creation_block=100).get_all_pools(w3, block_number=99)

    assert pools == []
    w3.eth.contract.assert_not_called()
    amm.functions.pools.assert_not_called()
    multicall.functions.aggregate3.assert_not_called()


def test_creation_block_itself_is_queried() -> None:
    w3, amm, _ = make_w3([P1], [[(True, metadata(1, 1, 9, 9))]])

    pools = MiraV1Factory(creation_block=100).get_all_pools(w3, block_number=100)

    assert [p.pool_id for p in pools] == [P1]
    amm.functions.pools.return_value.call.assert_called_once_with(block_identifier=100)
