"""Exception types for the RushSwap invariant engine.

Every domain failure is an ``AmmError`` carrying an ``ErrorKind``. The classes
subclass ``ValueError`` so callers written against the plain ``ValueError``
contract keep working.
"""

from __future__ import annotations

from enum import Enum, unique


@unique
class ErrorKind(Enum):
    """One member per externally observable failure kind."""
    INVALID_AMOUNT = "InvalidAmount"
    INVALID_INITIAL_DEPOSIT = "InvalidInitialDeposit"
    INSUFFICIENT_LIQUIDITY = "InsufficientLiquidity"
    INSUFFICIENT_POOL_RESERVES = "InsufficientPoolReserves"
    INSUFFICIENT_BALANCE = "InsufficientBalance"
    INSUFFICIENT_LP_BALANCE = "InsufficientLPBalance"
    SLIPPAGE_TOO_HIGH = "SlippageTooHigh"
    RATIO_IMBALANCE = "RatioImbalance"
    CALCULATION_OVERFLOW = "CalculationOverflow"
    INVALID_FEE_PARAMETERS = "InvalidFeeParameters"
    INVARIANT_VIOLATION = "InvariantViolation"
    ORDER_NOT_PENDING = "OrderNotPending"
    ORDER_NOT_EXPIRED = "OrderNotExpired"
    PRICE_NOT_REACHED = "PriceNotReached"
    UNAUTHORIZED = "Unauthorized"


class AmmError(ValueError):
    """Base class for all engine failures."""

    kind: ErrorKind

    def __init__(self, message: str = "") -> None:
        self.message = message or self.kind.value
        super().__init__(f"{self.kind.value}: {self.message}")


class InvalidAmount(AmmError):
    kind = ErrorKind.INVALID_AMOUNT


class InvalidInitialDeposit(AmmError):
    kind = ErrorKind.INVALID_INITIAL_DEPOSIT


class InsufficientLiquidity(AmmError):
    kind = ErrorKind.INSUFFICIENT_LIQUIDITY


class InsufficientPoolReserves(AmmError):
    kind = ErrorKind.INSUFFICIENT_POOL_RESERVES


class InsufficientBalance(AmmError):
    kind = ErrorKind.INSUFFICIENT_BALANCE


class InsufficientLPBalance(AmmError):
    kind = ErrorKind.INSUFFICIENT_LP_BALANCE


class SlippageTooHigh(AmmError):
    kind = ErrorKind.SLIPPAGE_TOO_HIGH


class RatioImbalance(AmmError):
    kind = ErrorKind.RATIO_IMBALANCE


class CalculationOverflow(AmmError):
    """Raised when a checked arithmetic step overflows or divides by zero."""

    kind = ErrorKind.CALCULATION_OVERFLOW


class CalculationUnderflow(CalculationOverflow):
    """Subtraction below zero. Reported under the overflow kind."""


class InvalidFeeParameters(AmmError):
    kind = ErrorKind.INVALID_FEE_PARAMETERS


class InvariantViolation(AmmError):
    """Raised when a post-state breaks a pool invariant."""

    kind = ErrorKind.INVARIANT_VIOLATION


class OrderNotPending(AmmError):
    kind = ErrorKind.ORDER_NOT_PENDING


class OrderNotExpired(AmmError):
    kind = ErrorKind.ORDER_NOT_EXPIRED


class PriceNotReached(AmmError):
    kind = ErrorKind.PRICE_NOT_REACHED


class Unauthorized(AmmError):
    kind = ErrorKind.UNAUTHORIZED
