"""
Constant Product Market Maker (CPMM) pool operations.

This module applies the swap kernel to a pool snapshot and returns the next
snapshot. It never mutates its inputs; the caller persists the result and
moves tokens.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Time Complexity: O(1) per swap operation
- Invariant: After each swap, reserve_in' * reserve_out' >= reserve_in * reserve_out - rounding_slack
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..config import BPS_DENOM, DEFAULT_CONFIG, AmmConfig
from ..errors import InsufficientLiquidity, InvalidAmount, InvariantViolation, SlippageTooHigh
from ..kernels.python.checked_math import checked_add, require_u64
from ..kernels.python.cpmm_swap import SwapQuote, quote_swap
from ..state.pools import Amount, PoolState, SwapDirection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwapResult:
    amount_in: Amount
    amount_out: Amount
    fee_amount: Amount
    direction: SwapDirection
    pool: PoolState


def quote(pool: PoolState, amount_in: Amount, direction: SwapDirection) -> SwapQuote:
    """Quote an exact-in swap against `pool` without applying it."""
    reserve_in, reserve_out = pool.reserves_for(direction)
    return quote_swap(
        input_amount=amount_in,
        input_reserve=reserve_in,
        output_reserve=reserve_out,
        fee_numerator=pool.fee_numerator,
        fee_denominator=pool.fee_denominator,
    )


def swap(
    pool: PoolState,
    amount_in: Amount,
    min_amount_out: Amount,
    direction: SwapDirection,
) -> SwapResult:
    """
    Execute an exact-in swap.

    The input reserve grows by the full `amount_in` (fee included) and the
    output reserve shrinks by the output amount.

    Raises:
        InvalidAmount: `amount_in` is zero
        InsufficientLiquidity: a reserve is empty, the output rounds to zero, or
            the trade would empty the output reserve
        SlippageTooHigh: output is below `min_amount_out`
        CalculationOverflow: the input reserve would exceed u64
    """
    require_u64("min_amount_out", min_amount_out)
    q = quote(pool, amount_in, direction)

    if q.amount_out < min_amount_out:
        raise SlippageTooHigh(f"amount_out ({q.amount_out}) < min_amount_out ({min_amount_out})")
    if q.new_reserve_out == 0:
        raise InsufficientLiquidity(f"swap of {amount_in} would drain the {direction.value} output reserve")
    reserve_in, _ = pool.reserves_for(direction)
    new_reserve_in = checked_add(reserve_in, amount_in)

    # floor(k / priced_reserve) may shed less than one priced_reserve of k.
    if q.k_after + q.rounding_slack < q.k_before:
        raise InvariantViolation(f"new_k ({q.k_after}) < old_k ({q.k_before}) beyond rounding")

    next_pool = pool.with_swap_reserves(direction, new_reserve_in, q.new_reserve_out)
    logger.debug(
        "swap %s in=%d out=%d fee=%d reserves=(%d, %d)",
        direction.value, amount_in, q.amount_out, q.fee_amount, next_pool.reserve_a, next_pool.reserve_b,
    )
    return SwapResult(
        amount_in=amount_in,
        amount_out=q.amount_out,
        fee_amount=q.fee_amount,
        direction=direction,
        pool=next_pool,
    )


def min_amount_out_for_slippage(expected_out: Amount, slippage_bps: int) -> Amount:
    """`floor(expected_out * (10_000 - slippage_bps) / 10_000)`."""
    require_u64("expected_out", expected_out)
    if not isinstance(slippage_bps, int) or isinstance(slippage_bps, bool):
        raise TypeError("slippage_bps must be an int")
    if not (0 <= slippage_bps <= BPS_DENOM):
        raise InvalidAmount(f"slippage_bps must be in [0, {BPS_DENOM}]: {slippage_bps}")
    return (expected_out * (BPS_DENOM - slippage_bps)) // BPS_DENOM


def price_impact_bps(amount_in: Amount, amount_out: Amount, reserve_in: Amount, reserve_out: Amount) -> int:
    """
    Price impact of a fill in basis points, floored.

    impact = (spot - execution) / spot, with spot = reserve_out / reserve_in and
    execution = amount_out / amount_in, evaluated by cross-multiplication.
    A fill at or better than spot reports 0.
    """
    for name, v in (
        ("amount_in", amount_in),
        ("amount_out", amount_out),
        ("reserve_in", reserve_in),
        ("reserve_out", reserve_out),
    ):
        require_u64(name, v)
    if amount_in == 0:
        raise InvalidAmount("amount_in must be positive")
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientLiquidity(f"no spot price against an empty reserve: ({reserve_in}, {reserve_out})")

    spot_scaled = amount_in * reserve_out
    exec_scaled = amount_out * reserve_in
    if exec_scaled >= spot_scaled:
        return 0
    return ((spot_scaled - exec_scaled) * BPS_DENOM) // spot_scaled


def _market_order(
    pool: PoolState,
    amount_in: Amount,
    direction: SwapDirection,
    slippage_bps: Optional[int],
    config: AmmConfig,
) -> SwapResult:
    bps = config.default_slippage_bps if slippage_bps is None else slippage_bps
    expected = quote(pool, amount_in, direction).amount_out
    return swap(pool, amount_in, min_amount_out_for_slippage(expected, bps), direction)


def market_sell(
    pool: PoolState,
    amount_in_a: Amount,
    slippage_bps: Optional[int] = None,
    config: AmmConfig = DEFAULT_CONFIG,
) -> SwapResult:
    """Sell token A at the current pool price, guarded by a slippage tolerance."""
    return _market_order(pool, amount_in_a, SwapDirection.A_TO_B, slippage_bps, config)


def market_buy(
    pool: PoolState,
    amount_in_b: Amount,
    slippage_bps: Optional[int] = None,
    config: AmmConfig = DEFAULT_CONFIG,
) -> SwapResult:
    """Buy token A by paying token B, guarded by a slippage tolerance."""
    return _market_order(pool, amount_in_b, SwapDirection.B_TO_A, slippage_bps, config)
