"""
Limit order records.

Status is a closed set: PENDING moves to exactly one of EXECUTED, CANCELLED
or EXPIRED, and all three are terminal.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique

from ..errors import InvalidAmount
from ..kernels.python.checked_math import require_u64
from .pools import Amount, PubKey


@unique
class OrderStatus(Enum):
    PENDING = "pending"
    EXECUTED = "executed"
    CANCELLED = "cancelled"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self is not OrderStatus.PENDING


@dataclass(frozen=True)
class LimitOrder:
    """
    A limit order whose `sell_amount` is held in escrow by the caller.

    `target_price` uses 6 implied decimals and is quoted like the pool price:
    units of token B per unit of token A. `is_sell` is True when the order
    disposes of token A.
    """
    order_id: str
    owner: PubKey
    pool: str
    sell_token: PubKey
    buy_token: PubKey
    is_sell: bool
    sell_amount: Amount
    target_price: Amount
    minimum_receive: Amount
    created_at: int
    expires_at: int
    status: OrderStatus = OrderStatus.PENDING
    filled_amount: Amount = 0

    def __post_init__(self) -> None:
        for name in ("sell_amount", "target_price", "minimum_receive", "filled_amount"):
            require_u64(name, getattr(self, name))
        if self.sell_token == self.buy_token:
            raise ValueError(f"sell and buy tokens must differ: {self.sell_token}")
        if self.created_at < 0:
            raise InvalidAmount(f"created_at must be non-negative: {self.created_at}")
        if self.expires_at < self.created_at:
            raise InvalidAmount(f"expires_at precedes created_at: {self.expires_at} < {self.created_at}")
        if self.status is not OrderStatus.EXECUTED and self.filled_amount != 0:
            raise ValueError("only executed orders carry a filled amount")

    @property
    def is_pending(self) -> bool:
        return self.status is OrderStatus.PENDING
