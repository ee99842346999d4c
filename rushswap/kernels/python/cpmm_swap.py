"""
Constant-product swap kernel.

Semantics:
- Fee is charged on the input with floor rounding:
  `fee_amount = floor(input_amount * fee_numerator / fee_denominator)`.
- Pricing uses `amount_with_fee = input_amount - fee_amount` against
  `k = input_reserve * output_reserve`:
  `output = output_reserve - floor(k / (input_reserve + amount_with_fee))`.
- The whole `input_amount`, fee included, stays in the input reserve. That is
  what grows `k` over time and pays LPs.
- `floor(k / new_input_reserve)` rounds the remaining output reserve down, so a
  single swap can shed up to `input_reserve + amount_with_fee - 1` of `k`
  (`SwapQuote.rounding_slack`) when the fee is too small to cover it.

All products are taken at u128 width; the output is bounded by
`output_reserve` so narrowing it back to u64 cannot fail. Post-swap reserves
in `SwapQuote` stay at wide width: whether they fit a u64 pool is decided by
the pool-level swap, not by the quote.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import InsufficientLiquidity, InvalidAmount, InvalidFeeParameters
from .checked_math import (
    checked_add_wide,
    checked_div,
    checked_mul_div,
    checked_mul_wide,
    checked_sub_wide,
    narrow_u64,
    require_u64,
)


@dataclass(frozen=True)
class SwapQuote:
    amount_out: int
    fee_amount: int
    amount_with_fee: int
    gross_in: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int

    @property
    def k_after(self) -> int:
        return self.new_reserve_in * self.new_reserve_out

    @property
    def rounding_slack(self) -> int:
        """
        Largest amount by which floor division can shrink k:
        `input_reserve + amount_with_fee - 1`.
        """
        input_reserve = self.new_reserve_in - self.gross_in
        return input_reserve + self.amount_with_fee - 1


def validate_fee(fee_numerator: int, fee_denominator: int) -> None:
    require_u64("fee_numerator", fee_numerator)
    require_u64("fee_denominator", fee_denominator)
    if fee_denominator == 0:
        raise InvalidFeeParameters("fee_denominator must be positive")
    if fee_numerator >= fee_denominator:
        raise InvalidFeeParameters(
            f"fee_numerator must be below fee_denominator: {fee_numerator}/{fee_denominator}"
        )


def compute_fee(input_amount: int, fee_numerator: int, fee_denominator: int) -> int:
    """`floor(input_amount * fee_numerator / fee_denominator)`."""
    require_u64("input_amount", input_amount)
    validate_fee(fee_numerator, fee_denominator)
    return checked_mul_div(input_amount, fee_numerator, fee_denominator)


def quote_swap(
    *,
    input_amount: int,
    input_reserve: int,
    output_reserve: int,
    fee_numerator: int,
    fee_denominator: int,
) -> SwapQuote:
    """
    Exact-in swap quote plus the post-swap reserves.

    Raises InvalidAmount for a zero input, InsufficientLiquidity for an empty
    reserve or a trade too small to produce any output.
    """
    for name, v in (
        ("input_amount", input_amount),
        ("input_reserve", input_reserve),
        ("output_reserve", output_reserve),
    ):
        require_u64(name, v)

    if input_amount == 0:
        raise InvalidAmount("input_amount must be positive")
    if input_reserve == 0 or output_reserve == 0:
        raise InsufficientLiquidity(f"cannot swap against an empty reserve: ({input_reserve}, {output_reserve})")
    validate_fee(fee_numerator, fee_denominator)

    fee_amount = checked_mul_div(input_amount, fee_numerator, fee_denominator)
    amount_with_fee = checked_sub_wide(input_amount, fee_amount)

    k_before = checked_mul_wide(input_reserve, output_reserve)
    new_input_reserve = checked_add_wide(input_reserve, amount_with_fee)
    new_output_reserve = checked_div(k_before, new_input_reserve)
    output_wide = checked_sub_wide(output_reserve, new_output_reserve)

    if output_wide == 0:
        raise InsufficientLiquidity("output amount is zero (trade too small)")
    amount_out = narrow_u64(output_wide)

    new_reserve_in = checked_add_wide(input_reserve, input_amount)
    new_reserve_out = checked_sub_wide(output_reserve, amount_out)

    return SwapQuote(
        amount_out=amount_out,
        fee_amount=fee_amount,
        amount_with_fee=amount_with_fee,
        gross_in=input_amount,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=k_before,
    )


def compute_swap_output(
    input_amount: int,
    input_reserve: int,
    output_reserve: int,
    fee_numerator: int,
    fee_denominator: int,
) -> int:
    """Output amount of an exact-in swap (see `quote_swap`)."""
    return quote_swap(
        input_amount=input_amount,
        input_reserve=input_reserve,
        output_reserve=output_reserve,
        fee_numerator=fee_numerator,
        fee_denominator=fee_denominator,
    ).amount_out
