"""
Liquidity-provider positions.

A position is scoped per (owner, pool_id). The table keeps only open
positions: a position whose LP balance reaches zero is closed and dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterator, Optional, Tuple

from ..errors import InsufficientLPBalance, InvalidAmount
from ..kernels.python.checked_math import checked_add, checked_sub, require_u64
from .pools import Amount, PoolState, PubKey

# Type alias
PoolId = str


@dataclass(frozen=True)
class LiquidityPosition:
    """
    An owner's LP stake in one pool.

    Attributes:
        owner: Position owner
        pool: pool_id of the pool
        lp_tokens: LP tokens held
        deposit_timestamp: When the position was opened
        last_claim_timestamp: Last reward claim (equals deposit_timestamp until a claim)
        total_rewards_claimed: Cumulative reward counter
    """
    owner: PubKey
    pool: PoolId
    lp_tokens: Amount = 0
    deposit_timestamp: int = 0
    last_claim_timestamp: int = 0
    total_rewards_claimed: Amount = 0

    def __post_init__(self) -> None:
        require_u64("lp_tokens", self.lp_tokens)
        require_u64("total_rewards_claimed", self.total_rewards_claimed)
        if self.deposit_timestamp < 0 or self.last_claim_timestamp < 0:
            raise InvalidAmount("timestamps must be non-negative")

    @property
    def is_closed(self) -> bool:
        return self.lp_tokens == 0

    def credit(self, lp_tokens: Amount) -> "LiquidityPosition":
        return replace(self, lp_tokens=checked_add(self.lp_tokens, lp_tokens))

    def debit(self, lp_tokens: Amount) -> "LiquidityPosition":
        if lp_tokens > self.lp_tokens:
            raise InsufficientLPBalance(f"position holds {self.lp_tokens} LP tokens, cannot burn {lp_tokens}")
        return replace(self, lp_tokens=checked_sub(self.lp_tokens, lp_tokens))

    def record_claim(self, amount: Amount, timestamp: int) -> "LiquidityPosition":
        """Bump the cumulative reward counter. Reward pricing is the caller's concern."""
        if timestamp < self.last_claim_timestamp:
            raise InvalidAmount(f"claim timestamp moves backwards: {timestamp} < {self.last_claim_timestamp}")
        return replace(
            self,
            last_claim_timestamp=timestamp,
            total_rewards_claimed=checked_add(self.total_rewards_claimed, amount),
        )


class PositionTable:
    """
    Deterministic position table mapping (owner, pool_id) -> LiquidityPosition.

    Notes:
    - LP balances are always non-negative.
    - Closed (zero) positions are omitted to keep the table sparse.
    """

    def __init__(self) -> None:
        self._positions: Dict[Tuple[PubKey, PoolId], LiquidityPosition] = {}

    def get(self, owner: PubKey, pool_id: PoolId) -> Optional[LiquidityPosition]:
        """Return the open position for (owner, pool_id), or None."""
        return self._positions.get((owner, pool_id))

    def lp_balance(self, owner: PubKey, pool_id: PoolId) -> Amount:
        pos = self.get(owner, pool_id)
        return pos.lp_tokens if pos is not None else 0

    def put(self, position: LiquidityPosition) -> None:
        """Store a position; a zero position closes it."""
        key = (position.owner, position.pool)
        if position.is_closed:
            self._positions.pop(key, None)
        else:
            self._positions[key] = position

    def deposit(self, owner: PubKey, pool_id: PoolId, lp_tokens: Amount, timestamp: int) -> LiquidityPosition:
        """Credit LP tokens, opening the position on first deposit."""
        require_u64("lp_tokens", lp_tokens)
        pos = self.get(owner, pool_id)
        if pos is None:
            pos = LiquidityPosition(
                owner=owner,
                pool=pool_id,
                deposit_timestamp=timestamp,
                last_claim_timestamp=timestamp,
            )
        pos = pos.credit(lp_tokens)
        self.put(pos)
        return pos

    def withdraw(self, owner: PubKey, pool_id: PoolId, lp_tokens: Amount) -> LiquidityPosition:
        """Debit LP tokens; a fully redeemed position is closed (returned zeroed)."""
        require_u64("lp_tokens", lp_tokens)
        pos = self.get(owner, pool_id)
        if pos is None:
            raise InsufficientLPBalance(f"no open position for {owner} in {pool_id}")
        pos = pos.debit(lp_tokens)
        self.put(pos)
        return pos

    def positions_for_pool(self, pool_id: PoolId) -> Iterator[LiquidityPosition]:
        for (_, pid), pos in sorted(self._positions.items()):
            if pid == pool_id:
                yield pos

    def total_lp_tokens(self, pool_id: PoolId) -> Amount:
        return sum(pos.lp_tokens for pos in self.positions_for_pool(pool_id))

    def verify_supply(self, pool: PoolState) -> bool:
        """True when the positions in `pool` sum to its total LP supply."""
        return self.total_lp_tokens(pool.pool_id) == pool.total_lp_supply

    def __len__(self) -> int:
        return len(self._positions)

    def __repr__(self) -> str:
        return f"PositionTable({len(self._positions)} entries)"
