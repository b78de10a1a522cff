"""
Deployment settings for the launchpad program.

``ProgramSettings`` holds the parameters fixed at deployment (fees, supply,
allocation split, listing price). Values come from, in increasing priority:

1. the dataclass defaults,
2. an optional YAML file (``yaml.safe_load``; a flat mapping of field names),
3. ``LAUNCHPAD_*`` environment variables (integers, clamped to their bounds).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from ..core.allocation import (
    CREATOR_ALLOCATION_PERCENT,
    LIQUIDITY_ALLOCATION_PERCENT,
    SALE_ALLOCATION_PERCENT,
    TOTAL_SUPPLY,
    AllocationPercents,
)
from ..core.errors import InvalidConfig
from ..core.fees import BPS_DENOM, SWAP_FEE_BPS, TREASURY_SHARE_BPS
from ..core.launch_pool import DEFAULT_LAUNCH_DURATION, DEFAULT_TARGET
from ..core.liquidity import DEFAULT_SQRT_PRICE, MAX_SQRT_PRICE, MIN_SQRT_PRICE
from ..core.math import I64_MAX, U64_MAX, U128_MAX
from ..core.vesting import DEFAULT_CREATOR_LINEAR_UNLOCK_DURATION, DEFAULT_CREATOR_LOCK_DURATION

ENV_PREFIX = "LAUNCHPAD_"


@dataclass(frozen=True)
class ProgramSettings:
    swap_fee_bps: int = SWAP_FEE_BPS
    treasury_share_bps: int = TREASURY_SHARE_BPS

    total_supply: int = TOTAL_SUPPLY
    creator_percent: int = CREATOR_ALLOCATION_PERCENT
    sale_percent: int = SALE_ALLOCATION_PERCENT
    liquidity_percent: int = LIQUIDITY_ALLOCATION_PERCENT

    default_target: int = DEFAULT_TARGET
    default_duration: int = DEFAULT_LAUNCH_DURATION
    creator_lock_duration: int = DEFAULT_CREATOR_LOCK_DURATION
    creator_linear_unlock_duration: int = DEFAULT_CREATOR_LINEAR_UNLOCK_DURATION

    # Q64.64 listing price and the AMM's admissible range.
    sqrt_price: int = DEFAULT_SQRT_PRICE
    min_sqrt_price: int = MIN_SQRT_PRICE
    max_sqrt_price: int = MAX_SQRT_PRICE

    def __post_init__(self) -> None:
        for f in fields(self):
            v = getattr(self, f.name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{f.name} must be an int")
            if v < 0:
                raise ValueError(f"{f.name} must be non-negative: {v}")
        for name in ("swap_fee_bps", "treasury_share_bps"):
            if getattr(self, name) > BPS_DENOM:
                raise ValueError(f"{name} must be <= {BPS_DENOM}")
        if self.total_supply == 0 or self.total_supply > U64_MAX:
            raise ValueError(f"total_supply out of range: {self.total_supply}")
        AllocationPercents(self.creator_percent, self.sale_percent, self.liquidity_percent)
        if not (0 < self.min_sqrt_price <= self.sqrt_price <= self.max_sqrt_price):
            raise ValueError("sqrt prices must satisfy 0 < min <= price <= max")

    @property
    def allocation_percents(self) -> AllocationPercents:
        return AllocationPercents(
            creator=self.creator_percent,
            sale=self.sale_percent,
            liquidity=self.liquidity_percent,
        )


# Environment variable bounds: (lo, hi) per field.
_ENV_BOUNDS: dict[str, tuple[int, int]] = {
    "swap_fee_bps": (0, BPS_DENOM),
    "treasury_share_bps": (0, BPS_DENOM),
    "total_supply": (1, U64_MAX),
    "creator_percent": (0, 100),
    "sale_percent": (0, 100),
    "liquidity_percent": (0, 100),
    "default_target": (0, U64_MAX),
    "default_duration": (0, I64_MAX),
    "creator_lock_duration": (0, I64_MAX),
    "creator_linear_unlock_duration": (0, I64_MAX),
    "sqrt_price": (1, U128_MAX),
    "min_sqrt_price": (1, U128_MAX),
    "max_sqrt_price": (1, U128_MAX),
}


def _env_int(env: Mapping[str, str], name: str, default: int, *, lo: int, hi: int) -> int:
    raw = env.get(name)
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


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Read a flat YAML mapping of setting overrides."""
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfig(f"{path}: expected a mapping at top level")
    known = {f.name for f in fields(ProgramSettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise InvalidConfig(f"{path}: unknown settings: {', '.join(unknown)}")
    return data


def apply_env_overrides(settings: ProgramSettings, env: Optional[Mapping[str, str]] = None) -> ProgramSettings:
    env = os.environ if env is None else env
    changes = {}
    for name, (lo, hi) in _ENV_BOUNDS.items():
        key = ENV_PREFIX + name.upper()
        if key in env:
            changes[name] = _env_int(env, key, getattr(settings, name), lo=lo, hi=hi)
    if not changes:
        return settings
    try:
        return replace(settings, **changes)
    except (TypeError, ValueError) as exc:
        raise InvalidConfig(str(exc)) from exc


def load_settings(
    path: str | Path | None = None,
    *,
    env: Optional[Mapping[str, str]] = None,
) -> ProgramSettings:
    """Build settings from defaults, an optional YAML file, then the environment."""
    overrides = load_config_file(path) if path is not None else {}
    try:
        settings = ProgramSettings(**overrides)
    except (TypeError, ValueError) as exc:
        raise InvalidConfig(str(exc)) from exc
    return apply_env_overrides(settings, env)
