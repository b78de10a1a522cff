"""
Reward and creator claim kernels.

Buyer claims are one-shot per position (``tokens_claimed`` never reverts).
Creator claims are incremental: each claim releases ``unlocked - claimed``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from ..state.pools import LaunchPool, LaunchStatus
from ..state.records import UserPosition
from .allocation import buyer_excess_share, buyer_token_share
from .errors import AlreadyClaimed, NotMigrated, NothingToClaim
from .launch_pool import creator_schedule
from .vesting import claimable_amount


@dataclass(frozen=True)
class RewardClaim:
    """
    Amounts released to one buyer.

    Attributes:
        tokens: Launched tokens from the sale allocation
        capital: Pro-rata share of the excess capital
    """
    tokens: int
    capital: int


def compute_user_claim(pool: LaunchPool, position: Optional[UserPosition]) -> RewardClaim:
    """
    Compute what ``position`` may claim from ``pool``.

    Settled pools (MIGRATED or FAILED) pay the pro-rata token share plus the
    pro-rata excess capital. A FAILED pool never reached its target, so its
    excess is zero and the claim is tokens only.

    Raises:
        NotMigrated: If the pool is neither MIGRATED nor FAILED.
        NothingToClaim: If the user never participated.
        AlreadyClaimed: If the position was already settled.
    """
    if pool.status not in (LaunchStatus.MIGRATED, LaunchStatus.FAILED):
        raise NotMigrated(f"pool is {pool.status.value}")
    if position is None or position.contributed == 0:
        raise NothingToClaim("no contribution in this pool")
    if position.tokens_claimed:
        raise AlreadyClaimed()

    tokens = buyer_token_share(position.contributed, pool.sale_allocation, pool.raised)
    capital = 0
    if pool.excess_portion > 0 and not position.excess_claimed:
        capital = buyer_excess_share(position.contributed, pool.excess_portion, pool.raised)
    return RewardClaim(tokens=tokens, capital=capital)


def apply_user_claim(position: UserPosition, claim: RewardClaim, now: int) -> UserPosition:
    return replace(
        position,
        tokens_claimed=True,
        excess_claimed=position.excess_claimed or claim.capital > 0,
        last_updated=now,
    )


def compute_creator_claim(pool: LaunchPool, now: int) -> int:
    """
    Creator tokens newly claimable at ``now``.

    A FAILED pool never starts the unlock clock, so it always has nothing
    to claim.
    """
    if pool.status is LaunchStatus.FAILED:
        raise NothingToClaim("vesting never started for a failed pool")
    if pool.status is not LaunchStatus.MIGRATED:
        raise NotMigrated(f"pool is {pool.status.value}")
    amount = claimable_amount(creator_schedule(pool), pool.creator_claimed_tokens, now)
    if amount == 0:
        raise NothingToClaim("no creator tokens unlocked since the last claim")
    return amount
