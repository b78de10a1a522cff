"""Invariant checkers for launch pools and participation records.

Each function returns True when the invariant holds; ``check_all()`` and
``check_position()`` return the names of violated invariants (empty = all
pass). The program layer runs them on every post-state before committing.
"""

from __future__ import annotations

from typing import Callable

from ..state.pools import LaunchPool, LaunchStatus
from ..state.records import UserPosition


def inv_allocation_sums_to_supply(p: LaunchPool) -> bool:
    if p.migration is not None:
        # The AMM's consumption replaces the nominal liquidity allocation.
        return p.creator_allocation + p.sale_allocation + p.migration.token_used == p.total_supply
    return p.creator_allocation + p.sale_allocation + p.liquidity_allocation == p.total_supply


def inv_portions_sum_to_raised(p: LaunchPool) -> bool:
    return p.liquidity_portion + p.excess_portion == p.raised


def inv_liquidity_capped_by_target(p: LaunchPool) -> bool:
    if p.migration is not None:
        return True
    return p.liquidity_portion == min(p.raised, p.target)


def inv_creator_claims_bounded(p: LaunchPool) -> bool:
    return p.creator_claimed_tokens <= p.creator_allocation


def inv_creator_claims_after_migration(p: LaunchPool) -> bool:
    if p.status is LaunchStatus.MIGRATED:
        return True
    return p.creator_claimed_tokens == 0


def inv_migration_iff_migrated(p: LaunchPool) -> bool:
    return (p.migration is not None) == (p.status is LaunchStatus.MIGRATED)


def inv_no_capital_without_participants(p: LaunchPool) -> bool:
    if p.participant_count > 0:
        return True
    return p.raised == 0 and p.total_points_consumed == 0


def inv_success_reached_target(p: LaunchPool) -> bool:
    if p.status in (LaunchStatus.SUCCESS, LaunchStatus.MIGRATED):
        return p.raised >= p.target
    if p.status is LaunchStatus.FAILED:
        return p.raised < p.target
    return True


def inv_locked_liquidity_bounded(p: LaunchPool) -> bool:
    if p.migration is None:
        return True
    return p.migration.locked_liquidity <= p.migration.liquidity


INVARIANT_REGISTRY: dict[str, Callable[[LaunchPool], bool]] = {
    "inv_allocation_sums_to_supply": inv_allocation_sums_to_supply,
    "inv_portions_sum_to_raised": inv_portions_sum_to_raised,
    "inv_liquidity_capped_by_target": inv_liquidity_capped_by_target,
    "inv_creator_claims_bounded": inv_creator_claims_bounded,
    "inv_creator_claims_after_migration": inv_creator_claims_after_migration,
    "inv_migration_iff_migrated": inv_migration_iff_migrated,
    "inv_no_capital_without_participants": inv_no_capital_without_participants,
    "inv_success_reached_target": inv_success_reached_target,
    "inv_locked_liquidity_bounded": inv_locked_liquidity_bounded,
}


def check_all(pool: LaunchPool) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(pool)
    ]


def check_position(pool: LaunchPool, position: UserPosition) -> list[str]:
    violations = []
    if position.contributed > pool.raised:
        violations.append("inv_position_within_raised")
    return violations
