"""
Ledger records: global config, participation, dividends, staking.

All records are frozen dataclasses that validate their own invariants on
construction; updates go through ``dataclasses.replace``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .balances import Amount, AssetId, PubKey

HOUR = 60 * 60
DAY = 24 * HOUR

DEFAULT_POINTS_PER_UNIT = 1000
DEFAULT_MIN_TARGET = 50_000_000_000
DEFAULT_MAX_TARGET = 500_000_000_000
DEFAULT_MIN_DURATION = HOUR
DEFAULT_MAX_DURATION = 7 * DAY
DEFAULT_MIN_STAKE_DURATION = DAY
DEFAULT_MIN_CONTRIBUTION = 100_000_000  # 0.1 unit
DEFAULT_MAX_CONTRIBUTION = 3_000_000_000  # 3 units


def _require_non_negative(record: object, names: tuple[str, ...]) -> None:
    for name in names:
        v = getattr(record, name)
        if not isinstance(v, int) or isinstance(v, bool):
            raise TypeError(f"{name} must be an int")
        if v < 0:
            raise ValueError(f"{name} must be non-negative: {v}")


@dataclass(frozen=True)
class GlobalConfig:
    """Process-wide parameters; mutated only by the admin."""

    admin: PubKey
    oracle: PubKey
    venue: str
    treasury: PubKey
    points_per_unit: int = DEFAULT_POINTS_PER_UNIT
    min_target: Amount = DEFAULT_MIN_TARGET
    max_target: Amount = DEFAULT_MAX_TARGET
    min_duration: int = DEFAULT_MIN_DURATION
    max_duration: int = DEFAULT_MAX_DURATION
    min_stake_duration: int = DEFAULT_MIN_STAKE_DURATION
    min_contribution: Amount = DEFAULT_MIN_CONTRIBUTION
    max_contribution: Amount = DEFAULT_MAX_CONTRIBUTION
    paused: bool = False
    pool_count: int = 0

    def __post_init__(self) -> None:
        _require_non_negative(
            self,
            (
                "points_per_unit",
                "min_target",
                "max_target",
                "min_duration",
                "max_duration",
                "min_stake_duration",
                "min_contribution",
                "max_contribution",
                "pool_count",
            ),
        )
        if not isinstance(self.paused, bool):
            raise TypeError("paused must be a bool")
        if self.min_target > self.max_target:
            raise ValueError(f"min_target > max_target: {self.min_target} > {self.max_target}")
        if self.min_duration > self.max_duration:
            raise ValueError(f"min_duration > max_duration: {self.min_duration} > {self.max_duration}")
        if self.min_contribution > self.max_contribution:
            raise ValueError(
                f"min_contribution > max_contribution: {self.min_contribution} > {self.max_contribution}"
            )


@dataclass(frozen=True)
class UserPosition:
    """One user's participation in one pool."""

    user: PubKey
    pool_id: str
    contributed: Amount = 0
    points_consumed: int = 0
    excess_claimed: bool = False
    tokens_claimed: bool = False
    refunded: bool = False
    participated_at: int = 0
    last_updated: int = 0

    def __post_init__(self) -> None:
        _require_non_negative(self, ("contributed", "points_consumed", "participated_at", "last_updated"))


@dataclass(frozen=True)
class UserPoint:
    """Lifetime points consumed by a user across all pools."""

    user: PubKey
    points_consumed: int = 0

    def __post_init__(self) -> None:
        _require_non_negative(self, ("points_consumed",))


@dataclass(frozen=True)
class UserDividendRecord:
    """High-water mark of dividends released to a user for one token."""

    user: PubKey
    token_mint: AssetId
    total_claimed: Amount = 0
    first_claimed_at: int = 0
    last_claimed_at: int = 0

    def __post_init__(self) -> None:
        _require_non_negative(self, ("total_claimed", "first_claimed_at", "last_claimed_at"))


@dataclass(frozen=True)
class StakingPosition:
    """Fixed-lock stake of one token by one user."""

    user: PubKey
    token_mint: AssetId
    staked_amount: Amount
    lock_duration: int
    stake_time: int
    unlock_time: int

    def __post_init__(self) -> None:
        _require_non_negative(self, ("staked_amount", "lock_duration", "stake_time", "unlock_time"))
        if self.unlock_time < self.stake_time:
            raise ValueError(f"unlock_time before stake_time: {self.unlock_time} < {self.stake_time}")

    def can_unstake(self, now: int) -> bool:
        return now >= self.unlock_time
