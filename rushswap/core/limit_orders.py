"""Limit-order lifecycle engine.

``step(order, pool, request)`` is the single entry point. It:

1. Checks the action's guard against the PRE-state (fail-closed, typed error).
2. Dispatches to the matching update function.
3. Returns an ``OrderStepResult`` (accepted, or rejected with the error kind).

Ordering inside EXECUTE matters: expiry is evaluated before the price
predicate, so a stale order is expired rather than filled. Crossing the target
price does not by itself satisfy the owner's floor; the realized swap output
is checked against ``minimum_receive`` independently.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum, unique
from typing import Callable

from ..config import DEFAULT_CONFIG, AmmConfig
from ..errors import (
    AmmError,
    ErrorKind,
    InvalidAmount,
    OrderNotExpired,
    OrderNotPending,
    PriceNotReached,
    Unauthorized,
)
from ..kernels.python.checked_math import checked_add, require_u64
from ..state.orders import LimitOrder, OrderStatus
from ..state.pools import PoolState, PubKey, SwapDirection
from .cpmm import swap
from .pricing import is_expired, order_triggered, pool_price

logger = logging.getLogger(__name__)


@unique
class OrderAction(Enum):
    EXECUTE = "execute"
    CANCEL = "cancel"
    EXPIRE = "expire"


@dataclass(frozen=True)
class OrderRequest:
    """Parameters for an order action. `caller` is only checked by CANCEL."""

    action: OrderAction
    current_time: int
    caller: PubKey = ""


@dataclass(frozen=True)
class OrderStepResult:
    """Result of a single lifecycle step.

    `pool` is the post-swap pool for a fill and the unchanged pool otherwise.
    """

    accepted: bool
    order: LimitOrder | None = None
    pool: PoolState | None = None
    amount_out: int = 0
    rejection: ErrorKind | None = None
    message: str | None = None

    @property
    def executed(self) -> bool:
        return self.accepted and self.order is not None and self.order.status is OrderStatus.EXECUTED


def create_order(
    *,
    order_id: str,
    owner: PubKey,
    pool: PoolState,
    is_sell: bool,
    sell_amount: int,
    target_price: int,
    minimum_receive: int,
    created_at: int,
    expiry_seconds: int,
    config: AmmConfig = DEFAULT_CONFIG,
) -> LimitOrder:
    """
    Build a PENDING order against `pool`.

    A sell order escrows token A and buys token B; a buy order escrows token B.
    """
    require_u64("sell_amount", sell_amount)
    require_u64("target_price", target_price)
    require_u64("minimum_receive", minimum_receive)
    require_u64("created_at", created_at)
    require_u64("expiry_seconds", expiry_seconds)
    if sell_amount == 0:
        raise InvalidAmount("sell_amount must be positive")
    if target_price == 0:
        raise InvalidAmount("target_price must be positive")
    if expiry_seconds == 0 or expiry_seconds > config.max_order_expiry_seconds:
        raise InvalidAmount(f"expiry_seconds must be in [1, {config.max_order_expiry_seconds}]: {expiry_seconds}")

    if is_sell:
        sell_token, buy_token = pool.token_a_mint, pool.token_b_mint
    else:
        sell_token, buy_token = pool.token_b_mint, pool.token_a_mint

    return LimitOrder(
        order_id=order_id,
        owner=owner,
        pool=pool.pool_id,
        sell_token=sell_token,
        buy_token=buy_token,
        is_sell=is_sell,
        sell_amount=sell_amount,
        target_price=target_price,
        minimum_receive=minimum_receive,
        created_at=created_at,
        expires_at=checked_add(created_at, expiry_seconds),
    )


# -- Guards ------------------------------------------------------------------

def _guard_pending(order: LimitOrder) -> None:
    if not order.is_pending:
        raise OrderNotPending(f"order {order.order_id} is {order.status.value}")


def guard_execute(order: LimitOrder, pool: PoolState, req: OrderRequest) -> None:
    _guard_pending(order)
    if order.pool != pool.pool_id:
        raise ValueError(f"order {order.order_id} targets pool {order.pool}, not {pool.pool_id}")


def guard_cancel(order: LimitOrder, pool: PoolState, req: OrderRequest) -> None:
    _guard_pending(order)
    if req.caller != order.owner:
        raise Unauthorized(f"only the owner may cancel order {order.order_id}")


def guard_expire(order: LimitOrder, pool: PoolState, req: OrderRequest) -> None:
    _guard_pending(order)
    if not is_expired(order.expires_at, req.current_time):
        raise OrderNotExpired(f"order {order.order_id} valid until {order.expires_at}")


# -- Updates -----------------------------------------------------------------

def _expired(order: LimitOrder, pool: PoolState) -> OrderStepResult:
    return OrderStepResult(accepted=True, order=replace(order, status=OrderStatus.EXPIRED), pool=pool)


def apply_execute(order: LimitOrder, pool: PoolState, req: OrderRequest) -> OrderStepResult:
    if is_expired(order.expires_at, req.current_time):
        return _expired(order, pool)

    price = pool_price(pool.reserve_a, pool.reserve_b)
    if not order_triggered(price, order.target_price, order.is_sell):
        raise PriceNotReached(
            f"pool price {price} has not reached target {order.target_price} "
            f"({'sell' if order.is_sell else 'buy'})"
        )

    direction = SwapDirection.A_TO_B if order.is_sell else SwapDirection.B_TO_A
    res = swap(pool, order.sell_amount, order.minimum_receive, direction)
    filled = replace(order, status=OrderStatus.EXECUTED, filled_amount=res.amount_out)
    return OrderStepResult(accepted=True, order=filled, pool=res.pool, amount_out=res.amount_out)


def apply_cancel(order: LimitOrder, pool: PoolState, req: OrderRequest) -> OrderStepResult:
    return OrderStepResult(accepted=True, order=replace(order, status=OrderStatus.CANCELLED), pool=pool)


def apply_expire(order: LimitOrder, pool: PoolState, req: OrderRequest) -> OrderStepResult:
    return _expired(order, pool)


GuardFn = Callable[[LimitOrder, PoolState, OrderRequest], None]
UpdateFn = Callable[[LimitOrder, PoolState, OrderRequest], OrderStepResult]

_DISPATCH: dict[OrderAction, tuple[GuardFn, UpdateFn]] = {
    OrderAction.EXECUTE: (guard_execute, apply_execute),
    OrderAction.CANCEL: (guard_cancel, apply_cancel),
    OrderAction.EXPIRE: (guard_expire, apply_expire),
}


def step_or_raise(order: LimitOrder, pool: PoolState, req: OrderRequest) -> OrderStepResult:
    """Run one lifecycle step, raising the typed `AmmError` on rejection."""
    require_u64("current_time", req.current_time)
    guard, update = _DISPATCH[req.action]
    guard(order, pool, req)
    result = update(order, pool, req)
    logger.debug(
        "order %s %s -> %s out=%d",
        order.order_id, req.action.value, result.order.status.value if result.order else "?", result.amount_out,
    )
    return result


def step(order: LimitOrder, pool: PoolState, req: OrderRequest) -> OrderStepResult:
    """Run one lifecycle step; domain failures come back as a rejected result."""
    try:
        return step_or_raise(order, pool, req)
    except AmmError as exc:
        return OrderStepResult(accepted=False, order=order, pool=pool, rejection=exc.kind, message=exc.message)
