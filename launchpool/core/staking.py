"""
Fixed-lock staking ledger.

A position is created by the first stake and deleted by unstake. Top-ups add
to ``staked_amount`` and leave ``unlock_time`` where it was.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..state.records import GlobalConfig, StakingPosition
from .errors import (
    CannotStakeZeroTokens,
    InvalidStakeDuration,
    NoStakeFound,
    PlatformPaused,
    StakeNotUnlocked,
)
from .math import checked_add


def validate_stake(config: GlobalConfig, amount: int, lock_duration: int) -> None:
    if amount <= 0:
        raise CannotStakeZeroTokens()
    if config.paused:
        raise PlatformPaused()
    if lock_duration < config.min_stake_duration:
        raise InvalidStakeDuration(
            f"lock_duration {lock_duration} below minimum {config.min_stake_duration}"
        )


def stake(
    position: Optional[StakingPosition],
    *,
    user: str,
    token_mint: str,
    amount: int,
    lock_duration: int,
    now: int,
) -> StakingPosition:
    if position is None:
        return StakingPosition(
            user=user,
            token_mint=token_mint,
            staked_amount=amount,
            lock_duration=lock_duration,
            stake_time=now,
            unlock_time=checked_add(now, lock_duration),
        )
    return replace(position, staked_amount=checked_add(position.staked_amount, amount))


def unstake(position: Optional[StakingPosition], now: int) -> int:
    """Amount returned by unstaking ``position`` at ``now``."""
    if position is None:
        raise NoStakeFound()
    if not position.can_unstake(now):
        raise StakeNotUnlocked(f"unlocks at {position.unlock_time}, now {now}")
    return position.staked_amount
