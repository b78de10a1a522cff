"""
Launch pool records.

A ``LaunchPool`` is immutable; transitions in ``launchpool.core.launch_pool``
return a new record. Fields that only make sense after migration live on
``MigrationRecord`` and are present iff the status is ``MIGRATED``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional

from .balances import Amount, AssetId, PubKey


@unique
class LaunchStatus(Enum):
    """Launch pool lifecycle."""
    INITIALIZED = "Initialized"
    ACTIVE = "Active"
    SUCCESS = "Success"
    FAILED = "Failed"
    MIGRATED = "Migrated"


@dataclass(frozen=True)
class MigrationRecord:
    """
    Result of seeding the AMM.

    Attributes:
        amm_pool: AMM pool identifier
        position: AMM position holding the seeded liquidity
        sqrt_price: Listing price (Q64.64 square root)
        liquidity: Liquidity requested from the AMM
        capital_used: Capital the AMM actually pulled from the reserve
        token_used: Tokens the AMM actually pulled from the reserve
        unlock_start_time: Anchor of the creator vesting schedule
        locked_liquidity: Liquidity permanently locked so far
    """
    amm_pool: str
    position: str
    sqrt_price: int
    liquidity: int
    capital_used: Amount
    token_used: Amount
    unlock_start_time: int
    locked_liquidity: int = 0

    def __post_init__(self) -> None:
        for name, v in (
            ("sqrt_price", self.sqrt_price),
            ("liquidity", self.liquidity),
            ("capital_used", self.capital_used),
            ("token_used", self.token_used),
            ("unlock_start_time", self.unlock_start_time),
            ("locked_liquidity", self.locked_liquidity),
        ):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if v < 0:
                raise ValueError(f"{name} must be non-negative: {v}")
        if self.locked_liquidity > self.liquidity:
            raise ValueError("locked_liquidity cannot exceed liquidity")


@dataclass(frozen=True)
class LaunchPool:
    """
    State of one crowdfunding campaign.

    Attributes:
        pool_id: Deterministic pool address
        index: Pool counter value at creation
        creator: Creator public key
        token_mint: Launched token
        quote_mint: Capital asset
        token_vault: Reserve account holding the launched token
        quote_vault: Reserve account holding contributed capital
        status: Lifecycle status
        total_supply: Tokens minted at creation
        creator_allocation / sale_allocation / liquidity_allocation: Supply split
        target: Fundraising target in capital base units
        raised: Capital raised so far
        liquidity_portion: Capital reserved for the AMM
        excess_portion: Capital above the target, returned pro-rata
        start_time / end_time: Participation window (inclusive)
        finalized_time: When the pool left ACTIVE (0 before)
        points_per_unit: Points required per whole capital unit
        total_points_consumed: Points spent by all participants
        participant_count: Users with a nonzero contribution
        creator_lock_duration / creator_linear_unlock_duration: Vesting schedule
        creator_claimed_tokens: Creator tokens released so far
        migration: Present only once MIGRATED
    """
    pool_id: str
    index: int
    creator: PubKey
    token_mint: AssetId
    quote_mint: AssetId
    token_vault: PubKey
    quote_vault: PubKey
    status: LaunchStatus
    total_supply: Amount
    creator_allocation: Amount
    sale_allocation: Amount
    liquidity_allocation: Amount
    target: Amount
    start_time: int
    end_time: int
    points_per_unit: int
    creator_lock_duration: int
    creator_linear_unlock_duration: int
    raised: Amount = 0
    liquidity_portion: Amount = 0
    excess_portion: Amount = 0
    finalized_time: int = 0
    total_points_consumed: int = 0
    participant_count: int = 0
    creator_claimed_tokens: Amount = 0
    migration: Optional[MigrationRecord] = None

    def __post_init__(self) -> None:
        if not isinstance(self.status, LaunchStatus):
            raise TypeError("status must be a LaunchStatus")
        for name in (
            "index",
            "total_supply",
            "creator_allocation",
            "sale_allocation",
            "liquidity_allocation",
            "target",
            "raised",
            "liquidity_portion",
            "excess_portion",
            "points_per_unit",
            "total_points_consumed",
            "participant_count",
            "creator_claimed_tokens",
            "creator_lock_duration",
            "creator_linear_unlock_duration",
        ):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if v < 0:
                raise ValueError(f"{name} must be non-negative: {v}")
        if self.end_time < self.start_time:
            raise ValueError(f"end_time before start_time: {self.end_time} < {self.start_time}")

    @property
    def is_active(self) -> bool:
        return self.status is LaunchStatus.ACTIVE

    @property
    def target_reached(self) -> bool:
        return self.raised >= self.target

    @property
    def creator_unlock_start_time(self) -> int:
        return self.migration.unlock_start_time if self.migration is not None else 0

    @property
    def position(self) -> Optional[str]:
        return self.migration.position if self.migration is not None else None

    def __repr__(self) -> str:
        return (
            f"LaunchPool(pool_id={self.pool_id[:12]}..., status={self.status.value}, "
            f"raised={self.raised}/{self.target}, participants={self.participant_count})"
        )
