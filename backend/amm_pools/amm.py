"""
Local constant-product pool models.

Pools hold a snapshot of on-chain reserves and simulate swaps and spot
prices without touching the chain. MiraV1Pool can refresh its snapshot
through an AmmContract handle.
"""

from dataclasses import dataclass
from typing import Any

from .amm_contract import AmmContract, PoolId
from .amm_math import U128_MAX, div_uu, get_amount_out, q64_to_float
from .errors import DivisionByZeroError, SwapSimulationError

U64_MAX = 2 ** 64 - 1


@dataclass
class ConstantProductPool:
    """Two-token pool priced by x * y = k with a flat LP fee."""
    address: str
    token_0: bytes
    token_0_decimals: int
    token_1: bytes
    token_1_decimals: int
    reserve_0: int
    reserve_1: int
    fee: int

    def tokens(self) -> list[bytes]:
        return [self.token_0, self.token_1]

    def get_token_out(self, token_in: bytes) -> bytes:
        return self.token_1 if token_in == self.token_0 else self.token_0

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Amount received for `amount_in` against the given reserves."""
        return get_amount_out(amount_in, reserve_in, reserve_out, self.fee)

    def simulate_swap(self, base_token: bytes, quote_token: bytes, amount_in: int) -> int:
        """Amount of the other token received for `amount_in` of `base_token`."""
        if base_token == self.token_0:
            return self.get_amount_out(amount_in, self.reserve_0, self.reserve_1)
        return self.get_amount_out(amount_in, self.reserve_1, self.reserve_0)

    def simulate_swap_mut(self, base_token: bytes, quote_token: bytes, amount_in: int) -> int:
        """Simulate a swap and move the reserves to their post-swap state."""
        amount_out = self.simulate_swap(base_token, quote_token, amount_in)
        if base_token == self.token_0:
            reserve_0 = self.reserve_0 + amount_in
            reserve_1 = self.reserve_1 - amount_out
        else:
            reserve_0 = self.reserve_0 - amount_out
            reserve_1 = self.reserve_1 + amount_in

        if reserve_0 > U64_MAX or reserve_1 > U64_MAX:
            raise SwapSimulationError(f"Reserve overflow swapping {amount_in} into {self.address}")
        if reserve_0 < 0 or reserve_1 < 0:
            raise SwapSimulationError(f"Swap of {amount_in} drains {self.address}")

        self.reserve_0 = reserve_0
        self.reserve_1 = reserve_1
        return amount_out


@dataclass
class MiraV1Pool(ConstantProductPool):
    """Mira v1 pool, identified inside its AMM by (token_0, token_1, is_stable)."""
    is_stable: bool = False

    @property
    def pool_id(self) -> PoolId:
        return (self.token_0, self.token_1, self.is_stable)

    def calculate_price(self, base_token: bytes, quote_token: bytes) -> float:
        """Price of the base token in terms of the other token."""
        # TODO: stable pools use a different invariant; this is the volatile price
        return q64_to_float(self.calculate_price_64_x_64(base_token))

    def calculate_price_64_x_64(self, base_token: bytes) -> int:
        """Decimal-adjusted price of the base token as Q64.64."""
        decimal_shift = self.token_0_decimals - self.token_1_decimals
        if decimal_shift < 0:
            r_a = self.reserve_0 * 10 ** (-decimal_shift)
            r_1 = self.reserve_1
        else:
            r_a = self.reserve_0
            r_1 = self.reserve_1 * 10 ** decimal_shift

        if base_token == self.token_0:
            return U128_MAX if r_a == 0 else div_uu(r_1, r_a)
        return U128_MAX if r_1 == 0 else div_uu(r_a, r_1)

    def sync(self, amm: AmmContract, block_identifier: Any = "latest") -> None:
        """Refresh reserves from chain."""
        reserve_0, reserve_1, _, _, _ = amm.pool_metadata(
            self.pool_id, block_identifier=block_identifier
        )
        self.reserve_0 = reserve_0
        self.reserve_1 = reserve_1

    def populate_data(self, amm: AmmContract, block_identifier: Any = "latest") -> None:
        """Refresh reserves and token decimals from chain."""
        reserve_0, reserve_1, _, decimals_0, decimals_1 = amm.pool_metadata(
            self.pool_id, block_identifier=block_identifier
        )
        self.reserve_0 = reserve_0
        self.reserve_1 = reserve_1
        self.token_0_decimals = decimals_0
        self.token_1_decimals = decimals_1


@dataclass
class OxiswapPool(ConstantProductPool):
    """Oxiswap pool."""

    def calculate_price(self, base_token: bytes, quote_token: bytes) -> float:
        if base_token == self.token_0:
            reserve_in, reserve_out = self.reserve_0, self.reserve_1
        else:
            reserve_in, reserve_out = self.reserve_1, self.reserve_0
        if reserve_in == 0:
            raise DivisionByZeroError(f"Empty {base_token.hex()} reserve in {self.address}")
        return reserve_out / reserve_in
