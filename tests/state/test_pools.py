# [TESTER] v1

from __future__ import annotations

import pytest

from rushswap.errors import CalculationOverflow, InvalidAmount, InvalidFeeParameters, InvariantViolation
from rushswap.kernels.python.checked_math import U64_MAX
from rushswap.state.pools import PoolState, SwapDirection, compute_pool_id


def _pool(**kw) -> PoolState:
    return PoolState("auth", "mintA", "mintB", "vaultA", "vaultB", "lpMint", **kw)


def test_pool_id_is_deterministic_and_fee_scoped() -> None:
    a = compute_pool_id("mintA", "mintB", 3, 1000)
    assert a == compute_pool_id("mintA", "mintB", 3, 1000)
    assert a.startswith("0x") and len(a) == 66
    assert a != compute_pool_id("mintA", "mintB", 25, 10_000)
    assert a != compute_pool_id("mintB", "mintA", 3, 1000)


def test_pool_id_ignores_reserves() -> None:
    assert _pool().pool_id == _pool(reserve_a=10, reserve_b=10, total_lp_supply=10).pool_id


def test_identical_mints_rejected() -> None:
    with pytest.raises(ValueError, match="must differ"):
        compute_pool_id("mintA", "mintA", 3, 1000)


@pytest.mark.parametrize("num, den", [(1000, 1000), (1, 0)])
def test_bad_fee(num: int, den: int) -> None:
    with pytest.raises(InvalidFeeParameters):
        _pool(fee_numerator=num, fee_denominator=den)


def test_outstanding_supply_requires_both_reserves() -> None:
    with pytest.raises(InvariantViolation):
        _pool(reserve_a=10, reserve_b=0, total_lp_supply=1)


def test_reserves_are_u64() -> None:
    with pytest.raises(InvalidAmount):
        _pool(reserve_a=-1)
    with pytest.raises(CalculationOverflow):
        _pool(reserve_a=U64_MAX + 1)


def test_direction_selects_reserves() -> None:
    pool = _pool(reserve_a=10, reserve_b=20, total_lp_supply=14)
    assert pool.reserves_for(SwapDirection.A_TO_B) == (10, 20)
    assert pool.reserves_for(SwapDirection.B_TO_A) == (20, 10)
    assert pool.with_swap_reserves(SwapDirection.B_TO_A, 25, 8).reserve_a == 8
    assert pool.with_swap_reserves(SwapDirection.A_TO_B, 12, 17).reserve_b == 17


def test_constant_product_is_wide() -> None:
    pool = _pool(reserve_a=U64_MAX, reserve_b=U64_MAX, total_lp_supply=1)
    assert pool.constant_product() == U64_MAX * U64_MAX
