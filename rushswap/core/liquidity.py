"""
Liquidity management operations: create pool, add/remove liquidity, and the
position-aware wrappers around them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from ..config import DEFAULT_CONFIG, AmmConfig
from ..errors import InsufficientLiquidity, InvariantViolation, SlippageTooHigh
from ..kernels.python.checked_math import checked_add, checked_sub, require_u64
from ..kernels.python.lp_math import (
    initial_lp_tokens,
    lp_tokens_for_deposit,
    redemption_amounts,
    validate_ratio_imbalance,
)
from ..state.pools import Amount, PoolState, PubKey
from ..state.positions import LiquidityPosition, PositionTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddLiquidityResult:
    lp_minted: Amount
    amount_a: Amount
    amount_b: Amount
    pool: PoolState


@dataclass(frozen=True)
class RemoveLiquidityResult:
    lp_burned: Amount
    amount_a: Amount
    amount_b: Amount
    pool: PoolState


def create_pool(
    authority: PubKey,
    token_a_mint: PubKey,
    token_b_mint: PubKey,
    token_a_vault: PubKey,
    token_b_vault: PubKey,
    lp_mint: PubKey,
    config: AmmConfig = DEFAULT_CONFIG,
) -> PoolState:
    """
    Create a new pool with zero reserves and the configured swap fee.

    Liquidity is seeded by the first `add_liquidity` call.
    """
    pool = PoolState(
        authority=authority,
        token_a_mint=token_a_mint,
        token_b_mint=token_b_mint,
        token_a_vault=token_a_vault,
        token_b_vault=token_b_vault,
        lp_mint=lp_mint,
        fee_numerator=config.fee_numerator,
        fee_denominator=config.fee_denominator,
    )
    logger.debug("pool created %s fee=%d/%d", pool.pool_id, pool.fee_numerator, pool.fee_denominator)
    return pool


def add_liquidity(
    pool: PoolState,
    amount_a: Amount,
    amount_b: Amount,
    min_lp_tokens: Amount = 0,
    config: AmmConfig = DEFAULT_CONFIG,
) -> AddLiquidityResult:
    """
    Deposit both tokens and mint LP tokens.

    For an empty pool (total_lp_supply == 0):
        lp = floor(sqrt(amount_a * amount_b))

    For a live pool, the deposit ratio is checked first, then:
        lp = min(floor(amount_a * supply / reserve_a), floor(amount_b * supply / reserve_b))

    Both amounts are added to the reserves in full.

    Raises:
        InvalidInitialDeposit: first deposit has a zero side
        InvalidAmount: later deposit has a zero side
        RatioImbalance: deposit ratio outside `config.ratio_tolerance_bps`
        InsufficientLiquidity: the deposit mints zero LP tokens
        SlippageTooHigh: fewer than `min_lp_tokens` would be minted
    """
    require_u64("min_lp_tokens", min_lp_tokens)

    if pool.total_lp_supply == 0:
        if pool.reserve_a != 0 or pool.reserve_b != 0:
            raise InvariantViolation(
                f"pool has reserves but no LP supply: ({pool.reserve_a}, {pool.reserve_b})"
            )
        lp_minted = initial_lp_tokens(amount_a, amount_b)
    else:
        validate_ratio_imbalance(
            amount_a, amount_b, pool.reserve_a, pool.reserve_b, tolerance_bps=config.ratio_tolerance_bps
        )
        lp_minted = lp_tokens_for_deposit(amount_a, amount_b, pool.reserve_a, pool.reserve_b, pool.total_lp_supply)

    if lp_minted == 0:
        raise InsufficientLiquidity("deposit too small to mint LP tokens")
    if lp_minted < min_lp_tokens:
        raise SlippageTooHigh(f"lp_minted ({lp_minted}) < min_lp_tokens ({min_lp_tokens})")

    next_pool = replace(
        pool,
        reserve_a=checked_add(pool.reserve_a, amount_a),
        reserve_b=checked_add(pool.reserve_b, amount_b),
        total_lp_supply=checked_add(pool.total_lp_supply, lp_minted),
    )
    logger.debug(
        "liquidity added a=%d b=%d lp=%d supply=%d",
        amount_a, amount_b, lp_minted, next_pool.total_lp_supply,
    )
    return AddLiquidityResult(lp_minted=lp_minted, amount_a=amount_a, amount_b=amount_b, pool=next_pool)


def remove_liquidity(
    pool: PoolState,
    lp_tokens: Amount,
    min_amount_a: Amount = 0,
    min_amount_b: Amount = 0,
) -> RemoveLiquidityResult:
    """
    Burn LP tokens for a pro-rata share of both reserves.

    Outputs:
        amount_a = floor(lp_tokens * reserve_a / supply)
        amount_b = floor(lp_tokens * reserve_b / supply)

    Burning the entire supply empties the pool.
    """
    require_u64("min_amount_a", min_amount_a)
    require_u64("min_amount_b", min_amount_b)

    amount_a, amount_b = redemption_amounts(lp_tokens, pool.total_lp_supply, pool.reserve_a, pool.reserve_b)

    if amount_a == 0 and amount_b == 0:
        raise InsufficientLiquidity("redemption would return nothing")
    if amount_a < min_amount_a:
        raise SlippageTooHigh(f"amount_a ({amount_a}) < min_amount_a ({min_amount_a})")
    if amount_b < min_amount_b:
        raise SlippageTooHigh(f"amount_b ({amount_b}) < min_amount_b ({min_amount_b})")

    next_pool = replace(
        pool,
        reserve_a=checked_sub(pool.reserve_a, amount_a),
        reserve_b=checked_sub(pool.reserve_b, amount_b),
        total_lp_supply=checked_sub(pool.total_lp_supply, lp_tokens),
    )
    logger.debug(
        "liquidity removed lp=%d a=%d b=%d supply=%d",
        lp_tokens, amount_a, amount_b, next_pool.total_lp_supply,
    )
    return RemoveLiquidityResult(lp_burned=lp_tokens, amount_a=amount_a, amount_b=amount_b, pool=next_pool)


def deposit_to_position(
    positions: PositionTable,
    owner: PubKey,
    pool: PoolState,
    amount_a: Amount,
    amount_b: Amount,
    timestamp: int,
    min_lp_tokens: Amount = 0,
    config: AmmConfig = DEFAULT_CONFIG,
) -> tuple[AddLiquidityResult, LiquidityPosition]:
    """Add liquidity and credit the minted LP tokens to the owner's position."""
    res = add_liquidity(pool, amount_a, amount_b, min_lp_tokens=min_lp_tokens, config=config)
    pos = positions.deposit(owner, pool.pool_id, res.lp_minted, timestamp)
    return res, pos


def withdraw_from_position(
    positions: PositionTable,
    owner: PubKey,
    pool: PoolState,
    lp_tokens: Amount,
    min_amount_a: Amount = 0,
    min_amount_b: Amount = 0,
) -> tuple[RemoveLiquidityResult, LiquidityPosition]:
    """
    Remove liquidity on behalf of a position holder.

    The owner's LP balance is checked before the pool is touched, so a failed
    withdrawal leaves both the table and the pool unchanged.
    """
    pos = positions.get(owner, pool.pool_id)
    if pos is None:
        pos = LiquidityPosition(owner=owner, pool=pool.pool_id)
    pos.debit(lp_tokens)

    res = remove_liquidity(pool, lp_tokens, min_amount_a=min_amount_a, min_amount_b=min_amount_b)
    return res, positions.withdraw(owner, pool.pool_id, lp_tokens)
