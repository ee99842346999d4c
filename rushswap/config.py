"""
Engine parameters.

Fee fraction and deposit ratio tolerance are parameters rather than constants:
deployments have used both 3/1000 (0.3%) and 25/10_000 (0.25%) swap fees.
Parameters can come from code, a YAML file, or the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

from .errors import InvalidFeeParameters


BPS_DENOM = 10_000
DEFAULT_MAX_ORDER_EXPIRY_SECONDS = 30 * 24 * 60 * 60


@dataclass(frozen=True)
class AmmConfig:
    """Runtime parameters for pool creation, deposits and market orders."""

    fee_numerator: int = 3
    fee_denominator: int = 1000
    ratio_tolerance_bps: int = 100
    default_slippage_bps: int = 100
    max_order_expiry_seconds: int = DEFAULT_MAX_ORDER_EXPIRY_SECONDS

    def __post_init__(self) -> None:
        for f in fields(self):
            v = getattr(self, f.name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{f.name} must be an int")
        if self.fee_denominator <= 0:
            raise InvalidFeeParameters(f"fee_denominator must be positive: {self.fee_denominator}")
        if not (0 <= self.fee_numerator < self.fee_denominator):
            raise InvalidFeeParameters(
                f"fee_numerator must be in [0, fee_denominator): {self.fee_numerator}/{self.fee_denominator}"
            )
        if not (0 <= self.ratio_tolerance_bps <= BPS_DENOM):
            raise ValueError(f"ratio_tolerance_bps must be in [0, {BPS_DENOM}]: {self.ratio_tolerance_bps}")
        if not (0 <= self.default_slippage_bps <= BPS_DENOM):
            raise ValueError(f"default_slippage_bps must be in [0, {BPS_DENOM}]: {self.default_slippage_bps}")
        if self.max_order_expiry_seconds <= 0:
            raise ValueError(f"max_order_expiry_seconds must be positive: {self.max_order_expiry_seconds}")


DEFAULT_CONFIG = AmmConfig()


def config_from_mapping(obj: Mapping[str, Any], base: AmmConfig = DEFAULT_CONFIG) -> AmmConfig:
    """Build a config from a plain mapping, rejecting unknown keys."""
    if not isinstance(obj, Mapping):
        raise TypeError("config must be a mapping")
    known = {f.name for f in fields(AmmConfig)}
    unknown = sorted(set(obj) - known)
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")
    return replace(base, **dict(obj))


def load_config(path: Union[str, Path], base: AmmConfig = DEFAULT_CONFIG) -> AmmConfig:
    """Load an `AmmConfig` from a YAML mapping. An empty file yields `base`."""
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if obj is None:
        return base
    return config_from_mapping(obj, base)


def _env_int(name: str, default: int, *, lo: int, hi: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip())
    except ValueError:
        return int(default)
    if v < lo:
        return int(lo)
    if v > hi:
        return int(hi)
    return int(v)


def config_from_env(prefix: str = "RUSHSWAP_", base: AmmConfig = DEFAULT_CONFIG) -> AmmConfig:
    """
    Override `base` from environment integers, e.g. RUSHSWAP_FEE_NUMERATOR=25.

    Malformed values fall back to the base value; out-of-range values are clamped.
    """
    return AmmConfig(
        fee_numerator=_env_int(prefix + "FEE_NUMERATOR", base.fee_numerator, lo=0, hi=2**64 - 1),
        fee_denominator=_env_int(prefix + "FEE_DENOMINATOR", base.fee_denominator, lo=1, hi=2**64 - 1),
        ratio_tolerance_bps=_env_int(prefix + "RATIO_TOLERANCE_BPS", base.ratio_tolerance_bps, lo=0, hi=BPS_DENOM),
        default_slippage_bps=_env_int(prefix + "DEFAULT_SLIPPAGE_BPS", base.default_slippage_bps, lo=0, hi=BPS_DENOM),
        max_order_expiry_seconds=_env_int(
            prefix + "MAX_ORDER_EXPIRY_SECONDS", base.max_order_expiry_seconds, lo=1, hi=2**63 - 1
        ),
    )
