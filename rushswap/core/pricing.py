"""
Pool spot price and limit-order trigger predicates.

This module is intentionally small and pure:
- The functional core computes prices and trigger decisions deterministically.
- The imperative shell supplies reserves and the current timestamp.

Prices are fixed-point integers with 6 implied decimals, quoted as units of
token B per unit of token A.
"""

from __future__ import annotations

from ..errors import InsufficientLiquidity, InvalidAmount
from ..kernels.python.checked_math import checked_mul_div, narrow_u64, require_u64


PRICE_SCALE: int = 1_000_000  # 1e6


def pool_price(reserve_a: int, reserve_b: int) -> int:
    """Canonical pool price: ``reserve_b * 1e6 // reserve_a``."""
    require_u64("reserve_a", reserve_a)
    require_u64("reserve_b", reserve_b)
    if reserve_a == 0:
        raise InsufficientLiquidity("reserve_a is zero; pool has no price")
    return narrow_u64(checked_mul_div(reserve_b, PRICE_SCALE, reserve_a))


def order_triggered(pool_price: int, target_price: int, is_sell: bool) -> bool:
    """
    True when a limit order may execute at `pool_price`.

    Sell orders (disposing of token A) trigger at or above the target; buy
    orders trigger at or below it.
    """
    if is_sell:
        return pool_price >= target_price
    return pool_price <= target_price


def is_expired(expires_at: int, current_time: int) -> bool:
    """An order is stale strictly after its expiry timestamp."""
    if current_time < 0:
        raise InvalidAmount(f"current_time must be non-negative: {current_time}")
    return current_time > expires_at


def display_price(reserve_a: int, reserve_b: int) -> float:
    """
    Floating-point price for off-chain display only.

    Nothing in the engine gates a trade or state transition on this value.
    """
    require_u64("reserve_a", reserve_a)
    require_u64("reserve_b", reserve_b)
    if reserve_a == 0:
        raise InsufficientLiquidity("reserve_a is zero; pool has no price")
    return reserve_b / reserve_a
