"""
Pool state for constant-product pools.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple

from ..errors import InvalidFeeParameters, InvariantViolation
from ..kernels.python.checked_math import checked_mul_wide, require_u64


# Type aliases
PubKey = str  # account / mint identity as a base58 or hex string
Amount = int  # u64 base token units


class SwapDirection(Enum):
    """Trade direction through a pool."""
    A_TO_B = "A_TO_B"
    B_TO_A = "B_TO_A"


def compute_pool_id(token_a_mint: PubKey, token_b_mint: PubKey, fee_numerator: int, fee_denominator: int) -> str:
    """
    Deterministically compute a pool_id:

        pool_id = H("RushSwapPool" || mint_a || mint_b || fee_numerator || fee_denominator)
    """
    if token_a_mint == token_b_mint:
        raise ValueError(f"pool tokens must differ: {token_a_mint}")
    data = (
        b"RushSwapPool"
        + token_a_mint.encode("utf-8")
        + token_b_mint.encode("utf-8")
        + str(int(fee_numerator)).encode("utf-8")
        + b"/"
        + str(int(fee_denominator)).encode("utf-8")
    )
    return "0x" + hashlib.sha256(data).hexdigest()


@dataclass(frozen=True)
class PoolState:
    """
    Immutable snapshot of a liquidity pool.

    Attributes:
        authority: Pool creator/admin
        token_a_mint: Mint of the base token (A)
        token_b_mint: Mint of the quote token (B)
        token_a_vault: Vault holding token A
        token_b_vault: Vault holding token B
        lp_mint: LP token mint
        reserve_a: Current reserve of token A
        reserve_b: Current reserve of token B
        total_lp_supply: LP tokens in circulation
        fee_numerator: Swap fee numerator (3 for 0.3%)
        fee_denominator: Swap fee denominator (1000 for 0.3%)
    """
    authority: PubKey
    token_a_mint: PubKey
    token_b_mint: PubKey
    token_a_vault: PubKey
    token_b_vault: PubKey
    lp_mint: PubKey
    reserve_a: Amount = 0
    reserve_b: Amount = 0
    total_lp_supply: Amount = 0
    fee_numerator: int = 3
    fee_denominator: int = 1000

    def __post_init__(self) -> None:
        """Validate pool state invariants."""
        for name in ("reserve_a", "reserve_b", "total_lp_supply", "fee_numerator", "fee_denominator"):
            require_u64(name, getattr(self, name))

        if self.token_a_mint == self.token_b_mint:
            raise ValueError(f"pool tokens must differ: {self.token_a_mint}")

        if self.fee_denominator == 0 or self.fee_numerator >= self.fee_denominator:
            raise InvalidFeeParameters(
                f"fee must satisfy 0 <= numerator < denominator: {self.fee_numerator}/{self.fee_denominator}"
            )

        if self.total_lp_supply > 0 and (self.reserve_a == 0 or self.reserve_b == 0):
            raise InvariantViolation(
                f"reserves must be positive while LP supply is outstanding: "
                f"({self.reserve_a}, {self.reserve_b}), supply={self.total_lp_supply}"
            )

    @property
    def pool_id(self) -> str:
        return compute_pool_id(self.token_a_mint, self.token_b_mint, self.fee_numerator, self.fee_denominator)

    @property
    def is_empty(self) -> bool:
        return self.total_lp_supply == 0

    def reserves_for(self, direction: SwapDirection) -> Tuple[Amount, Amount]:
        """Return `(reserve_in, reserve_out)` for a trade direction."""
        if direction == SwapDirection.A_TO_B:
            return self.reserve_a, self.reserve_b
        if direction == SwapDirection.B_TO_A:
            return self.reserve_b, self.reserve_a
        raise ValueError(f"unknown swap direction: {direction!r}")

    def with_swap_reserves(self, direction: SwapDirection, new_reserve_in: Amount, new_reserve_out: Amount) -> "PoolState":
        """Snapshot with the post-swap reserves written back in A/B order."""
        if direction == SwapDirection.A_TO_B:
            return replace(self, reserve_a=new_reserve_in, reserve_b=new_reserve_out)
        return replace(self, reserve_a=new_reserve_out, reserve_b=new_reserve_in)

    def constant_product(self) -> int:
        """k = reserve_a * reserve_b, at u128 width."""
        return checked_mul_wide(self.reserve_a, self.reserve_b)

    def __repr__(self) -> str:
        return (
            f"PoolState(pool_id={self.pool_id[:18]}..., "
            f"reserves=({self.reserve_a}, {self.reserve_b}), "
            f"lp_supply={self.total_lp_supply}, "
            f"fee={self.fee_numerator}/{self.fee_denominator})"
        )
