# [TESTER] v1

from __future__ import annotations

import random

import pytest
from hypothesis import assume, given, strategies as st

from rushswap.errors import (
    CalculationOverflow,
    InsufficientLiquidity,
    InsufficientLPBalance,
    InvalidAmount,
    InvalidInitialDeposit,
    RatioImbalance,
)
from rushswap.kernels.python.checked_math import U64_MAX, integer_sqrt
from rushswap.kernels.python.lp_math import (
    check_ratio,
    initial_lp_tokens,
    lp_tokens_for_deposit,
    redemption_amounts,
    validate_ratio_imbalance,
)


U64 = st.integers(min_value=1, max_value=U64_MAX)


# ---------------------------------------------------------------------------
# Initial issuance
# ---------------------------------------------------------------------------

def test_balanced_first_deposit_mints_geometric_mean() -> None:
    assert initial_lp_tokens(1_000_000, 1_000_000) == 1_000_000


def test_unbalanced_first_deposit_floors() -> None:
    # sqrt(2 * 10**12) = 1_414_213.56...
    assert initial_lp_tokens(1_000_000, 2_000_000) == 1_414_213


@pytest.mark.parametrize("a, b", [(0, 1_000), (1_000, 0), (0, 0)])
def test_first_deposit_with_zero_side_is_rejected(a: int, b: int) -> None:
    with pytest.raises(InvalidInitialDeposit, match="greater than zero"):
        initial_lp_tokens(a, b)


def test_first_deposit_at_u64_max_does_not_overflow() -> None:
    assert initial_lp_tokens(U64_MAX, U64_MAX) == U64_MAX


@given(a=U64, b=U64)
def test_initial_issuance_is_floor_sqrt_of_product(a: int, b: int) -> None:
    assert initial_lp_tokens(a, b) == integer_sqrt(a * b)


@given(a=st.integers(min_value=1, max_value=10**12), b=st.integers(min_value=1, max_value=10**12))
def test_initial_issuance_bounded_by_larger_side(a: int, b: int) -> None:
    lp = initial_lp_tokens(a, b)
    assert min(a, b) <= lp <= max(a, b)


# ---------------------------------------------------------------------------
# Proportional issuance
# ---------------------------------------------------------------------------

class TestLpTokensForDeposit:
    def test_proportional_deposit(self):
        assert lp_tokens_for_deposit(100_000, 200_000, 1_000_000, 2_000_000, 1_414_213) == 141_421

    def test_lopsided_deposit_mints_against_scarcer_side(self):
        # A side alone would mint 100_000; B side alone 50_000.
        assert lp_tokens_for_deposit(100_000, 50_000, 1_000_000, 1_000_000, 1_000_000) == 50_000

    def test_zero_amount_is_invalid(self):
        with pytest.raises(InvalidAmount):
            lp_tokens_for_deposit(0, 10, 1_000, 1_000, 1_000)

    def test_zero_reserve_is_insufficient_liquidity(self):
        with pytest.raises(InsufficientLiquidity):
            lp_tokens_for_deposit(10, 10, 0, 1_000, 1_000)

    def test_wide_intermediate(self):
        # amount * supply exceeds u64 while the share fits.
        half = U64_MAX // 2
        assert lp_tokens_for_deposit(half, half, half, half, half) == half


# ---------------------------------------------------------------------------
# Ratio check
# ---------------------------------------------------------------------------

class TestRatioImbalance:
    def test_deposit_within_one_percent_passes(self):
        chk = check_ratio(500_000, 1_005_000, 1_000_000, 2_000_000)
        assert chk.expected_ratio_bps == 20_000
        assert chk.provided_ratio_bps == 20_100
        assert chk.diff_bps == 100
        validate_ratio_imbalance(500_000, 1_005_000, 1_000_000, 2_000_000)

    def test_deposit_beyond_one_percent_fails(self):
        with pytest.raises(RatioImbalance, match="diff=400"):
            validate_ratio_imbalance(500_000, 1_020_000, 1_000_000, 2_000_000)

    def test_deposit_short_of_ratio_fails(self):
        with pytest.raises(RatioImbalance):
            validate_ratio_imbalance(500_000, 980_000, 1_000_000, 2_000_000)

    def test_tolerance_is_a_parameter(self):
        validate_ratio_imbalance(500_000, 1_020_000, 1_000_000, 2_000_000, tolerance_bps=400)
        with pytest.raises(RatioImbalance):
            validate_ratio_imbalance(500_000, 1_005_000, 1_000_000, 2_000_000, tolerance_bps=0)

    def test_zero_divisor_is_calculation_overflow(self):
        with pytest.raises(CalculationOverflow, match="division by zero"):
            validate_ratio_imbalance(0, 10, 1_000, 1_000)
        with pytest.raises(CalculationOverflow):
            validate_ratio_imbalance(10, 10, 0, 1_000)


# ---------------------------------------------------------------------------
# Redemption
# ---------------------------------------------------------------------------

class TestRedemption:
    def test_pro_rata_floor(self):
        assert redemption_amounts(1, 3, 10, 20) == (3, 6)

    def test_full_supply_returns_full_reserves(self):
        assert redemption_amounts(1_000, 1_000, 123_456, 789) == (123_456, 789)

    def test_zero_burn_is_invalid(self):
        with pytest.raises(InvalidAmount):
            redemption_amounts(0, 1_000, 1_000, 1_000)

    def test_zero_supply_is_insufficient_liquidity(self):
        with pytest.raises(InsufficientLiquidity):
            redemption_amounts(1, 0, 1_000, 1_000)

    def test_burning_more_than_supply(self):
        with pytest.raises(InsufficientLPBalance):
            redemption_amounts(1_001, 1_000, 1_000, 1_000)


@given(
    reserve_a=st.integers(min_value=10**6, max_value=10**12),
    reserve_b=st.integers(min_value=10**6, max_value=10**12),
    supply=st.integers(min_value=10**6, max_value=10**12),
    a=st.integers(min_value=1, max_value=10**12),
    b=st.integers(min_value=1, max_value=10**12),
)
def test_deposit_then_redeem_never_returns_more(reserve_a: int, reserve_b: int, supply: int, a: int, b: int) -> None:
    lp = lp_tokens_for_deposit(a, b, reserve_a, reserve_b, supply)
    assume(lp > 0)
    out_a, out_b = redemption_amounts(lp, supply + lp, reserve_a + a, reserve_b + b)
    assert out_a <= a
    assert out_b <= b


def test_seeded_round_trip_loses_at_most_rounding() -> None:
    rng = random.Random(0)
    for _ in range(500):
        reserve_a = rng.randrange(10**6, 10**9)
        ratio = rng.randrange(1, 4)
        reserve_b = reserve_a * ratio
        supply = initial_lp_tokens(reserve_a, reserve_b)
        a = rng.randrange(10**4, 10**8)
        b = a * ratio
        lp = lp_tokens_for_deposit(a, b, reserve_a, reserve_b, supply)
        out_a, out_b = redemption_amounts(lp, supply + lp, reserve_a + a, reserve_b + b)
        assert out_a <= a and out_b <= b
        # One LP unit is worth at most ceil(reserve / supply) of each token.
        assert a - out_a <= 2 * (reserve_a // supply + 1)
        assert b - out_b <= 2 * (reserve_b // supply + 1)
