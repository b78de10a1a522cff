"""
Token and capital allocation kernels (deterministic, integer-only).

- ``split_supply``: creator / sale / liquidity split at pool creation.
- ``capital_for_points``: points to capital conversion at participation.
- ``buyer_token_share`` / ``buyer_excess_share``: pro-rata claims.

All divisions floor, so the sum of every user's share never exceeds the
pool-level amount being divided; the remainder stays in the reserve as dust.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import DivisionByZero, InvalidTokenAllocation
from .math import checked_add, mul_div, require_uint

PERCENT_DENOM = 100

CREATOR_ALLOCATION_PERCENT = 30
SALE_ALLOCATION_PERCENT = 50
LIQUIDITY_ALLOCATION_PERCENT = 20

TOKEN_DECIMALS = 6
TOTAL_SUPPLY = 1_000_000_000 * 10**TOKEN_DECIMALS

# Base units of capital per whole unit (lamports per SOL).
CAPITAL_PER_UNIT = 1_000_000_000


@dataclass(frozen=True)
class AllocationPercents:
    creator: int = CREATOR_ALLOCATION_PERCENT
    sale: int = SALE_ALLOCATION_PERCENT
    liquidity: int = LIQUIDITY_ALLOCATION_PERCENT

    def __post_init__(self) -> None:
        for name, v in (("creator", self.creator), ("sale", self.sale), ("liquidity", self.liquidity)):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} percent must be an int")
            if not (0 <= v <= PERCENT_DENOM):
                raise ValueError(f"{name} percent must be in [0, {PERCENT_DENOM}]: {v}")
        total = self.creator + self.sale + self.liquidity
        if total != PERCENT_DENOM:
            raise ValueError(f"percents must sum to {PERCENT_DENOM}, got {total}")


@dataclass(frozen=True)
class TokenAllocation:
    creator_allocation: int
    sale_allocation: int
    liquidity_allocation: int

    @property
    def total(self) -> int:
        return self.creator_allocation + self.sale_allocation + self.liquidity_allocation


def split_supply(total_supply: int, percents: AllocationPercents = AllocationPercents()) -> TokenAllocation:
    """
    Split ``total_supply`` by percentage, multiplying before dividing.

    Raises:
        InvalidTokenAllocation: If floor rounding leaves the parts short of
            ``total_supply`` (the percentages do not divide it exactly).
    """
    require_uint(total_supply, bits=64, name="total_supply")
    creator = mul_div(total_supply, percents.creator, PERCENT_DENOM)
    sale = mul_div(total_supply, percents.sale, PERCENT_DENOM)
    liquidity = mul_div(total_supply, percents.liquidity, PERCENT_DENOM)

    total = checked_add(checked_add(creator, sale), liquidity)
    if total != total_supply:
        raise InvalidTokenAllocation(f"split sums to {total}, expected {total_supply}")
    return TokenAllocation(
        creator_allocation=creator,
        sale_allocation=sale,
        liquidity_allocation=liquidity,
    )


def capital_for_points(points: int, points_per_unit: int) -> int:
    """``floor(points * CAPITAL_PER_UNIT / points_per_unit)``."""
    if points_per_unit == 0:
        raise DivisionByZero("points_per_unit is zero")
    return mul_div(points, CAPITAL_PER_UNIT, points_per_unit)


def buyer_token_share(contributed: int, sale_allocation: int, raised: int) -> int:
    """``floor(contributed * sale_allocation / raised)``; zero when nothing was raised."""
    if raised == 0:
        return 0
    return mul_div(contributed, sale_allocation, raised)


def buyer_excess_share(contributed: int, excess: int, raised: int) -> int:
    """``floor(contributed * excess / raised)``; zero when nothing was raised."""
    if raised == 0:
        return 0
    return mul_div(contributed, excess, raised)


def split_capital(raised: int, target: int) -> tuple[int, int]:
    """Return ``(liquidity_portion, excess_portion)`` for the amount raised so far.

    Liquidity takes everything up to the target; anything above it is excess.
    """
    if raised > target:
        return target, raised - target
    return raised, 0
