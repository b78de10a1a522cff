"""
Participation ledger kernels.

A participation spends oracle-attested points for capital allowance:

    capital = floor(points * CAPITAL_PER_UNIT / points_per_unit)

Points are bounded by the signed lifetime total; capital is bounded per user
by the configured min/max contribution.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from ..state.records import GlobalConfig, UserPoint, UserPosition
from .allocation import capital_for_points
from .errors import InsufficientPoints, InvalidContribution, InvalidPointsAmount
from .math import checked_add


@dataclass(frozen=True)
class ParticipationQuote:
    """Validated amounts for one participation."""

    points: int
    capital: int
    first_participation: bool


def validate_points(points_to_spend: int, total_points_signed: int, lifetime_consumed: int) -> None:
    if points_to_spend <= 0:
        raise InvalidPointsAmount(f"points_to_spend must be positive: {points_to_spend}")
    if points_to_spend > total_points_signed:
        raise InsufficientPoints(f"spending {points_to_spend} > signed total {total_points_signed}")
    if checked_add(lifetime_consumed, points_to_spend) > total_points_signed:
        raise InsufficientPoints(
            f"lifetime {lifetime_consumed} + {points_to_spend} exceeds signed total {total_points_signed}"
        )


def validate_contribution(capital: int, already_contributed: int, config: GlobalConfig) -> None:
    if capital < config.min_contribution:
        raise InvalidContribution(f"contribution {capital} below minimum {config.min_contribution}")
    total = checked_add(already_contributed, capital)
    if total > config.max_contribution:
        raise InvalidContribution(f"total contribution {total} exceeds maximum {config.max_contribution}")


def quote_participation(
    *,
    points_to_spend: int,
    total_points_signed: int,
    points_per_unit: int,
    position: Optional[UserPosition],
    user_point: Optional[UserPoint],
    config: GlobalConfig,
) -> ParticipationQuote:
    """Run every participation check in order and return the amounts to apply."""
    lifetime = user_point.points_consumed if user_point is not None else 0
    validate_points(points_to_spend, total_points_signed, lifetime)
    capital = capital_for_points(points_to_spend, points_per_unit)
    contributed = position.contributed if position is not None else 0
    validate_contribution(capital, contributed, config)
    return ParticipationQuote(
        points=points_to_spend,
        capital=capital,
        first_participation=contributed == 0,
    )


def apply_to_position(
    position: Optional[UserPosition],
    *,
    user: str,
    pool_id: str,
    quote: ParticipationQuote,
    now: int,
) -> UserPosition:
    if position is None:
        position = UserPosition(user=user, pool_id=pool_id)
    return replace(
        position,
        contributed=checked_add(position.contributed, quote.capital),
        points_consumed=checked_add(position.points_consumed, quote.points),
        participated_at=position.participated_at or now,
        last_updated=now,
    )


def apply_to_user_point(point: Optional[UserPoint], *, user: str, points: int) -> UserPoint:
    if point is None:
        point = UserPoint(user=user)
    return replace(point, points_consumed=checked_add(point.points_consumed, points))
