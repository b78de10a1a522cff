"""
Creator token vesting kernel: cliff, then linear unlock.

The caller supplies the time (read once per operation) and the schedule
parameters stored on the pool.

    lock_end   = unlock_start + lock_duration
    unlock_end = lock_end + linear_unlock_duration

    now <  lock_end                      -> 0
    linear_unlock_duration == 0          -> allocation
    lock_end <= now < unlock_end         -> floor((now - lock_end) * allocation / linear)
    now >= unlock_end                    -> allocation
"""

from __future__ import annotations

from dataclasses import dataclass

from .math import mul_div, saturating_sub

SECONDS_PER_DAY = 24 * 60 * 60
DEFAULT_CREATOR_LOCK_DURATION = 30 * SECONDS_PER_DAY
DEFAULT_CREATOR_LINEAR_UNLOCK_DURATION = 90 * SECONDS_PER_DAY


@dataclass(frozen=True)
class VestingSchedule:
    """Creator schedule anchored at ``unlock_start`` (0 = not started)."""

    allocation: int
    unlock_start: int
    lock_duration: int
    linear_unlock_duration: int

    def __post_init__(self) -> None:
        if self.allocation < 0:
            raise ValueError(f"allocation must be non-negative: {self.allocation}")
        if self.unlock_start < 0:
            raise ValueError(f"unlock_start must be non-negative: {self.unlock_start}")
        if self.lock_duration < 0:
            raise ValueError(f"lock_duration must be non-negative: {self.lock_duration}")
        if self.linear_unlock_duration < 0:
            raise ValueError(
                f"linear_unlock_duration must be non-negative: {self.linear_unlock_duration}"
            )

    @property
    def started(self) -> bool:
        return self.unlock_start != 0

    @property
    def lock_end(self) -> int:
        return self.unlock_start + self.lock_duration

    @property
    def unlock_end(self) -> int:
        return self.lock_end + self.linear_unlock_duration


def unlocked_amount(schedule: VestingSchedule, now: int) -> int:
    """Cumulative amount unlocked at ``now``; never exceeds ``schedule.allocation``."""
    if not schedule.started:
        return 0
    if now < schedule.lock_end:
        return 0
    if schedule.linear_unlock_duration == 0:
        return schedule.allocation
    if now >= schedule.unlock_end:
        return schedule.allocation

    elapsed = now - schedule.lock_end
    unlocked = mul_div(elapsed, schedule.allocation, schedule.linear_unlock_duration, wide_bits=128)
    return min(unlocked, schedule.allocation)


def claimable_amount(schedule: VestingSchedule, already_claimed: int, now: int) -> int:
    """Newly claimable amount: unlocked minus what was already released."""
    return saturating_sub(unlocked_amount(schedule, now), already_claimed)


def is_locked(schedule: VestingSchedule, now: int) -> bool:
    if not schedule.started:
        return True
    return now < schedule.lock_end
