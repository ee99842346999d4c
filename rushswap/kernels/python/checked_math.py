"""
Checked integer arithmetic (u64 values, u128 intermediates).

Python ints never wrap, so "checked" here means every result is compared
against the declared width and rejected rather than silently carried into a
value the on-chain representation could not hold. Products of two u64 values
are computed at the wide (u128) width before narrowing back to u64.

No floats anywhere in this module.
"""

from __future__ import annotations

from ...errors import CalculationOverflow, CalculationUnderflow, InvalidAmount


U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def require_u64(name: str, value: int) -> int:
    _require_int(name, value)
    if value < 0:
        raise InvalidAmount(f"{name} must be non-negative: {value}")
    if value > U64_MAX:
        raise CalculationOverflow(f"{name} exceeds u64: {value}")
    return value


def require_u128(name: str, value: int) -> int:
    _require_int(name, value)
    if value < 0:
        raise InvalidAmount(f"{name} must be non-negative: {value}")
    if value > U128_MAX:
        raise CalculationOverflow(f"{name} exceeds u128: {value}")
    return value


def narrow_u64(value: int) -> int:
    """Narrow a wide intermediate back to u64."""
    _require_int("value", value)
    if value < 0:
        raise CalculationUnderflow(f"negative result: {value}")
    if value > U64_MAX:
        raise CalculationOverflow(f"result does not fit u64: {value}")
    return value


# -- Native (u64) width -------------------------------------------------------

def checked_add(a: int, b: int) -> int:
    require_u64("a", a)
    require_u64("b", b)
    total = a + b
    if total > U64_MAX:
        raise CalculationOverflow(f"u64 add overflow: {a} + {b}")
    return total


def checked_sub(a: int, b: int) -> int:
    require_u64("a", a)
    require_u64("b", b)
    if b > a:
        raise CalculationUnderflow(f"u64 sub underflow: {a} - {b}")
    return a - b


def checked_mul_wide(a: int, b: int) -> int:
    """u64 * u64 computed at u128 width."""
    require_u64("a", a)
    require_u64("b", b)
    product = a * b
    if product > U128_MAX:
        raise CalculationOverflow(f"u128 mul overflow: {a} * {b}")
    return product


# -- Wide (u128) width --------------------------------------------------------

def checked_add_wide(a: int, b: int) -> int:
    require_u128("a", a)
    require_u128("b", b)
    total = a + b
    if total > U128_MAX:
        raise CalculationOverflow(f"u128 add overflow: {a} + {b}")
    return total


def checked_sub_wide(a: int, b: int) -> int:
    require_u128("a", a)
    require_u128("b", b)
    if b > a:
        raise CalculationUnderflow(f"u128 sub underflow: {a} - {b}")
    return a - b


def checked_mul(a: int, b: int) -> int:
    require_u128("a", a)
    require_u128("b", b)
    product = a * b
    if product > U128_MAX:
        raise CalculationOverflow(f"u128 mul overflow: {a} * {b}")
    return product


def checked_div(a: int, b: int) -> int:
    """Floor division; a zero divisor is reported as an overflow."""
    require_u128("a", a)
    require_u128("b", b)
    if b == 0:
        raise CalculationOverflow(f"division by zero: {a} / 0")
    return a // b


def checked_mul_div(a: int, b: int, d: int) -> int:
    """`floor(a * b / d)` with the product held at u128 width."""
    return checked_div(checked_mul(a, b), d)


def integer_sqrt(n: int) -> int:
    """
    Newton's-method integer square root: the unique `floor(sqrt(n))`.

    The iterate is non-increasing once it drops below the previous one, so the
    loop stops after O(log n) steps. Bit-exact for any size of `n`.
    """
    _require_int("n", n)
    if n < 0:
        raise InvalidAmount(f"integer_sqrt of negative value: {n}")
    if n < 2:
        return n

    x = n
    y = (x + 1) // 2
    while y < x:
        x = y
        y = (x + n // x) // 2
    return x
