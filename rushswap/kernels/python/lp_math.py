"""
Liquidity math kernel.

Pure functions with explicit floor rounding:
- initial issuance is the geometric mean of the first deposit,
- later issuance is the smaller of the two pro-rata shares,
- redemption is pro-rata on both sides at once,
- deposits into a live pool must match the pool ratio within a tolerance.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import (
    InsufficientLiquidity,
    InsufficientLPBalance,
    InvalidAmount,
    InvalidInitialDeposit,
    RatioImbalance,
)
from .checked_math import checked_mul_div, checked_mul_wide, integer_sqrt, narrow_u64, require_u64


BPS_DENOM = 10_000
DEFAULT_RATIO_TOLERANCE_BPS = 100


@dataclass(frozen=True)
class RatioCheck:
    expected_ratio_bps: int
    provided_ratio_bps: int
    diff_bps: int
    tolerance_bps: int


def initial_lp_tokens(amount_a: int, amount_b: int) -> int:
    """`floor(sqrt(amount_a * amount_b))`, for the first deposit into an empty pool."""
    require_u64("amount_a", amount_a)
    require_u64("amount_b", amount_b)
    if amount_a == 0 or amount_b == 0:
        raise InvalidInitialDeposit(f"initial deposits must be greater than zero: ({amount_a}, {amount_b})")

    product = checked_mul_wide(amount_a, amount_b)
    return narrow_u64(integer_sqrt(product))


def lp_tokens_for_deposit(
    amount_a: int,
    amount_b: int,
    reserve_a: int,
    reserve_b: int,
    total_lp_supply: int,
) -> int:
    """
    LP tokens for a deposit into a live pool.

    Takes the minimum of the two pro-rata shares so a lopsided deposit mints
    only against its scarcer side.
    """
    for name, v in (
        ("amount_a", amount_a),
        ("amount_b", amount_b),
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("total_lp_supply", total_lp_supply),
    ):
        require_u64(name, v)

    if amount_a == 0 or amount_b == 0:
        raise InvalidAmount(f"deposit amounts must be positive: ({amount_a}, {amount_b})")
    if reserve_a == 0 or reserve_b == 0:
        raise InsufficientLiquidity(f"cannot price a deposit against an empty reserve: ({reserve_a}, {reserve_b})")

    lp_from_a = narrow_u64(checked_mul_div(amount_a, total_lp_supply, reserve_a))
    lp_from_b = narrow_u64(checked_mul_div(amount_b, total_lp_supply, reserve_b))
    return min(lp_from_a, lp_from_b)


def check_ratio(
    amount_a: int,
    amount_b: int,
    reserve_a: int,
    reserve_b: int,
    tolerance_bps: int = DEFAULT_RATIO_TOLERANCE_BPS,
) -> RatioCheck:
    """Compare the deposit ratio with the pool ratio, both in basis points."""
    for name, v in (
        ("amount_a", amount_a),
        ("amount_b", amount_b),
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("tolerance_bps", tolerance_bps),
    ):
        require_u64(name, v)

    expected = checked_mul_div(reserve_b, BPS_DENOM, reserve_a)
    provided = checked_mul_div(amount_b, BPS_DENOM, amount_a)
    diff = expected - provided if expected > provided else provided - expected
    return RatioCheck(
        expected_ratio_bps=expected,
        provided_ratio_bps=provided,
        diff_bps=diff,
        tolerance_bps=tolerance_bps,
    )


def validate_ratio_imbalance(
    amount_a: int,
    amount_b: int,
    reserve_a: int,
    reserve_b: int,
    tolerance_bps: int = DEFAULT_RATIO_TOLERANCE_BPS,
) -> None:
    """
    Reject a deposit whose B/A ratio strays from the pool's by more than
    `tolerance_bps` (default 100, i.e. 1%).

    Must run before `lp_tokens_for_deposit` on any deposit into a live pool.
    """
    chk = check_ratio(amount_a, amount_b, reserve_a, reserve_b, tolerance_bps)
    if chk.diff_bps > chk.tolerance_bps:
        raise RatioImbalance(
            f"pool ratio imbalance exceeds tolerance: expected={chk.expected_ratio_bps} "
            f"provided={chk.provided_ratio_bps} diff={chk.diff_bps} > {chk.tolerance_bps}"
        )


def redemption_amounts(
    lp_tokens_to_burn: int,
    total_lp_supply: int,
    reserve_a: int,
    reserve_b: int,
) -> tuple[int, int]:
    """Pro-rata `(amount_a, amount_b)` for burning LP tokens (floor rounding)."""
    for name, v in (
        ("lp_tokens_to_burn", lp_tokens_to_burn),
        ("total_lp_supply", total_lp_supply),
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
    ):
        require_u64(name, v)

    if lp_tokens_to_burn == 0:
        raise InvalidAmount("lp_tokens_to_burn must be positive")
    if total_lp_supply == 0:
        raise InsufficientLiquidity("total_lp_supply is zero")
    if lp_tokens_to_burn > total_lp_supply:
        raise InsufficientLPBalance(f"cannot burn more than total supply: {lp_tokens_to_burn} > {total_lp_supply}")

    amount_a = narrow_u64(checked_mul_div(lp_tokens_to_burn, reserve_a, total_lp_supply))
    amount_b = narrow_u64(checked_mul_div(lp_tokens_to_burn, reserve_b, total_lp_supply))
    return amount_a, amount_b
