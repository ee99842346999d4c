# [TESTER] v1

from __future__ import annotations

import pytest

from rushswap import errors
from rushswap.errors import AmmError, CalculationOverflow, CalculationUnderflow, ErrorKind, SlippageTooHigh


def test_every_kind_has_one_class() -> None:
    classes = [
        obj for obj in vars(errors).values()
        if isinstance(obj, type) and issubclass(obj, AmmError) and obj is not AmmError
    ]
    kinds = {cls.kind for cls in classes if cls is not CalculationUnderflow}
    assert kinds == set(ErrorKind)


def test_message_carries_kind() -> None:
    exc = SlippageTooHigh("got 5, wanted 6")
    assert str(exc) == "SlippageTooHigh: got 5, wanted 6"
    assert exc.message == "got 5, wanted 6"
    assert exc.kind is ErrorKind.SLIPPAGE_TOO_HIGH


def test_default_message_is_kind_name() -> None:
    assert CalculationOverflow().message == "CalculationOverflow"


def test_errors_remain_value_errors() -> None:
    with pytest.raises(ValueError):
        raise CalculationUnderflow("1 - 2")
