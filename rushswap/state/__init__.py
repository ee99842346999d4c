"""
State records for RushSwap pools
"""

from .pools import PoolState, SwapDirection, compute_pool_id
from .positions import LiquidityPosition, PositionTable
from .orders import LimitOrder, OrderStatus

__all__ = [
    "PoolState",
    "SwapDirection",
    "compute_pool_id",
    "LiquidityPosition",
    "PositionTable",
    "LimitOrder",
    "OrderStatus",
]
