"""`rushswap`: constant-product AMM invariant engine.

Deterministic, integer-only arithmetic for pooled-liquidity trading:
- checked u64/u128 arithmetic and an exact integer square root,
- fee-adjusted constant-product swap outputs,
- LP-token issuance, redemption and deposit-ratio checks,
- pool price and limit-order trigger predicates.

Every operation is a pure function over immutable snapshots. Persistence,
custody transfers and signature checks belong to the caller.
"""

from .config import AmmConfig, config_from_env, load_config
from .errors import AmmError, ErrorKind
from .kernels.python.checked_math import (
    checked_add,
    checked_add_wide,
    checked_div,
    checked_mul,
    checked_mul_wide,
    checked_sub,
    checked_sub_wide,
    integer_sqrt,
)
from .kernels.python.cpmm_swap import SwapQuote, compute_swap_output, quote_swap
from .kernels.python.lp_math import (
    initial_lp_tokens,
    lp_tokens_for_deposit,
    redemption_amounts,
    validate_ratio_imbalance,
)
from .state import LimitOrder, LiquidityPosition, OrderStatus, PoolState, PositionTable, SwapDirection
from .core import (
    OrderAction,
    OrderRequest,
    add_liquidity,
    create_order,
    create_pool,
    order_step,
    order_step_or_raise,
    order_triggered,
    pool_price,
    remove_liquidity,
    swap,
)

__all__ = [
    "AmmConfig",
    "config_from_env",
    "load_config",
    "AmmError",
    "ErrorKind",
    "checked_add",
    "checked_add_wide",
    "checked_div",
    "checked_mul",
    "checked_mul_wide",
    "checked_sub",
    "checked_sub_wide",
    "integer_sqrt",
    "SwapQuote",
    "compute_swap_output",
    "quote_swap",
    "initial_lp_tokens",
    "lp_tokens_for_deposit",
    "redemption_amounts",
    "validate_ratio_imbalance",
    "LimitOrder",
    "LiquidityPosition",
    "OrderStatus",
    "PoolState",
    "PositionTable",
    "SwapDirection",
    "OrderAction",
    "OrderRequest",
    "add_liquidity",
    "create_order",
    "create_pool",
    "order_step",
    "order_step_or_raise",
    "order_triggered",
    "pool_price",
    "remove_liquidity",
    "swap",
]
