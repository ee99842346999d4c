"""
Core pool operations
"""

from .cpmm import (
    SwapResult,
    market_buy,
    market_sell,
    min_amount_out_for_slippage,
    price_impact_bps,
    quote,
    swap,
)
from .liquidity import (
    AddLiquidityResult,
    RemoveLiquidityResult,
    add_liquidity,
    create_pool,
    deposit_to_position,
    remove_liquidity,
    withdraw_from_position,
)
from .pricing import PRICE_SCALE, display_price, is_expired, order_triggered, pool_price
from .limit_orders import OrderAction, OrderRequest, OrderStepResult, create_order
from .limit_orders import step as order_step
from .limit_orders import step_or_raise as order_step_or_raise

__all__ = [
    "SwapResult",
    "market_buy",
    "market_sell",
    "min_amount_out_for_slippage",
    "price_impact_bps",
    "quote",
    "swap",
    "AddLiquidityResult",
    "RemoveLiquidityResult",
    "add_liquidity",
    "create_pool",
    "deposit_to_position",
    "remove_liquidity",
    "withdraw_from_position",
    "PRICE_SCALE",
    "display_price",
    "is_expired",
    "order_triggered",
    "pool_price",
    "OrderAction",
    "OrderRequest",
    "OrderStepResult",
    "create_order",
    "order_step",
    "order_step_or_raise",
]
