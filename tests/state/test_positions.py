# [TESTER] v1

from __future__ import annotations

import pytest

from rushswap.errors import InsufficientLPBalance, InvalidAmount
from rushswap.state.positions import LiquidityPosition, PositionTable


class TestLiquidityPosition:
    def test_credit_and_debit(self):
        pos = LiquidityPosition(owner="alice", pool="p").credit(100).debit(40)
        assert pos.lp_tokens == 60

    def test_debit_beyond_balance(self):
        with pytest.raises(InsufficientLPBalance):
            LiquidityPosition(owner="alice", pool="p", lp_tokens=5).debit(6)

    def test_record_claim(self):
        pos = LiquidityPosition(owner="alice", pool="p", lp_tokens=5, deposit_timestamp=10, last_claim_timestamp=10)
        pos = pos.record_claim(7, 20).record_claim(3, 20)
        assert (pos.last_claim_timestamp, pos.total_rewards_claimed) == (20, 10)
        with pytest.raises(InvalidAmount, match="backwards"):
            pos.record_claim(1, 19)


class TestPositionTable:
    def test_deposit_opens_and_accumulates(self):
        table = PositionTable()
        table.deposit("alice", "p", 100, timestamp=5)
        pos = table.deposit("alice", "p", 50, timestamp=9)
        assert pos.lp_tokens == 150
        assert pos.deposit_timestamp == 5
        assert len(table) == 1

    def test_positions_are_scoped_per_pool(self):
        table = PositionTable()
        table.deposit("alice", "p", 100, timestamp=0)
        table.deposit("alice", "q", 7, timestamp=0)
        table.deposit("bob", "p", 20, timestamp=0)
        assert table.total_lp_tokens("p") == 120
        assert [pos.owner for pos in table.positions_for_pool("p")] == ["alice", "bob"]

    def test_withdraw_to_zero_drops_entry(self):
        table = PositionTable()
        table.deposit("alice", "p", 100, timestamp=0)
        assert table.withdraw("alice", "p", 100).is_closed
        assert table.get("alice", "p") is None
        assert table.lp_balance("alice", "p") == 0

    def test_withdraw_unknown_position(self):
        with pytest.raises(InsufficientLPBalance):
            PositionTable().withdraw("alice", "p", 1)
