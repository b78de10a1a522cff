"""
Launch pool state machine (pure transitions).

    INITIALIZED -> ACTIVE -> {SUCCESS | FAILED}
    SUCCESS -> MIGRATED

FAILED and MIGRATED are terminal. Each transition validates its guard and
returns a new ``LaunchPool``; the caller persists it. Guards raise typed
``LaunchpadError`` subclasses instead of returning a rejected result, so a
failed transition never produces a partial record.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..state.pools import LaunchPool, LaunchStatus, MigrationRecord
from ..state.records import GlobalConfig
from .allocation import AllocationPercents, TOTAL_SUPPLY, split_capital, split_supply
from .errors import (
    InsufficientLiquidity,
    InvalidAmount,
    InvalidDuration,
    InvalidLaunchStatus,
    InvalidStartTime,
    InvalidTargetAmount,
    LaunchNotActive,
    NotMigrated,
    NotStarted,
    PlatformPaused,
    TimeWindowExpired,
    TooEarlyToFinalize,
)
from .math import checked_add, checked_sub
from .vesting import (
    DEFAULT_CREATOR_LINEAR_UNLOCK_DURATION,
    DEFAULT_CREATOR_LOCK_DURATION,
    VestingSchedule,
)

DEFAULT_TARGET = 100 * 1_000_000_000
DEFAULT_LAUNCH_DURATION = 12 * 60 * 60


def validate_launch_params(config: GlobalConfig, target: int, duration: int) -> None:
    if config.paused:
        raise PlatformPaused()
    if not (config.min_target <= target <= config.max_target):
        raise InvalidTargetAmount(
            f"target {target} outside [{config.min_target}, {config.max_target}]"
        )
    if not (config.min_duration <= duration <= config.max_duration):
        raise InvalidDuration(
            f"duration {duration} outside [{config.min_duration}, {config.max_duration}]"
        )


def new_pool(
    *,
    pool_id: str,
    index: int,
    creator: str,
    token_mint: str,
    quote_mint: str,
    token_vault: str,
    quote_vault: str,
    target: int,
    start_time: int,
    duration: int,
    points_per_unit: int,
    now: int,
    total_supply: int = TOTAL_SUPPLY,
    percents: AllocationPercents = AllocationPercents(),
    lock_duration: int = DEFAULT_CREATOR_LOCK_DURATION,
    linear_unlock_duration: int = DEFAULT_CREATOR_LINEAR_UNLOCK_DURATION,
) -> LaunchPool:
    """Build an ``INITIALIZED`` pool with its supply split and window set."""
    if start_time < now:
        raise InvalidStartTime(f"start_time {start_time} is before now {now}")
    if lock_duration < 0 or linear_unlock_duration < 0:
        raise InvalidDuration("vesting durations must be non-negative")
    split = split_supply(total_supply, percents)
    return LaunchPool(
        pool_id=pool_id,
        index=index,
        creator=creator,
        token_mint=token_mint,
        quote_mint=quote_mint,
        token_vault=token_vault,
        quote_vault=quote_vault,
        status=LaunchStatus.INITIALIZED,
        total_supply=total_supply,
        creator_allocation=split.creator_allocation,
        sale_allocation=split.sale_allocation,
        liquidity_allocation=split.liquidity_allocation,
        target=target,
        start_time=start_time,
        end_time=checked_add(start_time, duration),
        points_per_unit=points_per_unit,
        creator_lock_duration=lock_duration,
        creator_linear_unlock_duration=linear_unlock_duration,
    )


def activate(pool: LaunchPool) -> LaunchPool:
    if pool.status is not LaunchStatus.INITIALIZED:
        raise InvalidLaunchStatus(f"cannot activate from {pool.status.value}")
    return replace(pool, status=LaunchStatus.ACTIVE)


def require_active(pool: LaunchPool) -> None:
    if pool.status is not LaunchStatus.ACTIVE:
        raise LaunchNotActive(f"pool is {pool.status.value}")


def require_in_window(pool: LaunchPool, now: int) -> None:
    """The participation window is inclusive at both ends."""
    if now < pool.start_time:
        raise NotStarted(f"window opens at {pool.start_time}, now {now}")
    if now > pool.end_time:
        raise TimeWindowExpired(f"window closed at {pool.end_time}, now {now}")


def apply_contribution(pool: LaunchPool, capital: int, points: int, *, first_participation: bool) -> LaunchPool:
    """Accumulate one participation into the pool and recompute the capital portions."""
    require_active(pool)
    raised = checked_add(pool.raised, capital)
    liquidity_portion, excess_portion = split_capital(raised, pool.target)
    participants = pool.participant_count
    if first_participation:
        participants = checked_add(participants, 1)
    return replace(
        pool,
        raised=raised,
        liquidity_portion=liquidity_portion,
        excess_portion=excess_portion,
        total_points_consumed=checked_add(pool.total_points_consumed, points),
        participant_count=participants,
    )


def can_finalize(pool: LaunchPool, now: int) -> bool:
    return pool.is_active and (now > pool.end_time or pool.target_reached)


def finalize(pool: LaunchPool, now: int) -> LaunchPool:
    """
    Close the campaign.

    Allowed once the window has passed or the target is reached; the outcome
    is SUCCESS iff ``raised >= target``.

    Raises:
        LaunchNotActive: If the pool is not ACTIVE.
        TooEarlyToFinalize: If the window is open and the target is not met.
    """
    require_active(pool)
    if not can_finalize(pool, now):
        raise TooEarlyToFinalize(f"window ends at {pool.end_time}, raised {pool.raised}/{pool.target}")
    status = LaunchStatus.SUCCESS if pool.target_reached else LaunchStatus.FAILED
    return replace(pool, status=status, finalized_time=now)


def require_migratable(pool: LaunchPool) -> None:
    if pool.liquidity_allocation == 0 or pool.liquidity_portion == 0:
        raise InsufficientLiquidity("no liquidity allocation or capital to seed the AMM")
    if pool.status is not LaunchStatus.SUCCESS:
        raise InvalidLaunchStatus(f"cannot migrate from {pool.status.value}")


def migrate(
    pool: LaunchPool,
    *,
    amm_pool: str,
    position: str,
    sqrt_price: int,
    liquidity: int,
    capital_used: int,
    token_used: int,
    now: int,
) -> LaunchPool:
    """
    Record a completed AMM seeding, reconciling against the measured amounts.

    ``capital_used`` and ``token_used`` are reserve balance deltas observed
    around the AMM call, not the amounts requested from it.
    """
    require_migratable(pool)
    if capital_used > pool.raised:
        raise InsufficientLiquidity(f"AMM consumed {capital_used} > raised {pool.raised}")
    sale_allocation = checked_sub(checked_sub(pool.total_supply, pool.creator_allocation), token_used)
    record = MigrationRecord(
        amm_pool=amm_pool,
        position=position,
        sqrt_price=sqrt_price,
        liquidity=liquidity,
        capital_used=capital_used,
        token_used=token_used,
        unlock_start_time=now,
    )
    return replace(
        pool,
        status=LaunchStatus.MIGRATED,
        liquidity_portion=capital_used,
        excess_portion=pool.raised - capital_used,
        sale_allocation=sale_allocation,
        migration=record,
    )


def creator_schedule(pool: LaunchPool) -> VestingSchedule:
    return VestingSchedule(
        allocation=pool.creator_allocation,
        unlock_start=pool.creator_unlock_start_time,
        lock_duration=pool.creator_lock_duration,
        linear_unlock_duration=pool.creator_linear_unlock_duration,
    )


def record_creator_claim(pool: LaunchPool, amount: int) -> LaunchPool:
    claimed = checked_add(pool.creator_claimed_tokens, amount)
    if claimed > pool.creator_allocation:
        raise InvalidAmount(f"creator claims {claimed} exceed allocation {pool.creator_allocation}")
    return replace(pool, creator_claimed_tokens=claimed)


def lock_liquidity(pool: LaunchPool, amount: int) -> LaunchPool:
    """Add ``amount`` to the permanently locked share of the AMM position."""
    if amount == 0:
        raise InvalidAmount("lock amount must be positive")
    migration: Optional[MigrationRecord] = pool.migration
    if pool.status is not LaunchStatus.MIGRATED or migration is None:
        raise NotMigrated(f"pool is {pool.status.value}")
    locked = checked_add(migration.locked_liquidity, amount, bits=128)
    if locked > migration.liquidity:
        raise InsufficientLiquidity(f"lock {locked} exceeds position liquidity {migration.liquidity}")
    return replace(pool, migration=replace(migration, locked_liquidity=locked))
