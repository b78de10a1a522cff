# [TESTER] v1

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import given, settings

from launchpool.core.allocation import (
    CAPITAL_PER_UNIT,
    TOTAL_SUPPLY,
    AllocationPercents,
    buyer_excess_share,
    buyer_token_share,
    capital_for_points,
    split_capital,
    split_supply,
)
from launchpool.core.errors import DivisionByZero, InvalidTokenAllocation, MathOverflow


def test_default_supply_split() -> None:
    split = split_supply(TOTAL_SUPPLY)
    assert TOTAL_SUPPLY == 10**15
    assert split.creator_allocation == 3 * 10**14
    assert split.sale_allocation == 5 * 10**14
    assert split.liquidity_allocation == 2 * 10**14
    assert split.total == TOTAL_SUPPLY


def test_split_rejects_supply_that_does_not_divide() -> None:
    # 30/50/20 of 101 floors to 30 + 50 + 20 = 100.
    with pytest.raises(InvalidTokenAllocation):
        split_supply(101)


def test_split_rejects_supply_above_u64() -> None:
    with pytest.raises(MathOverflow):
        split_supply(1 << 64)


def test_custom_percents() -> None:
    split = split_supply(1_000, AllocationPercents(creator=10, sale=60, liquidity=30))
    assert (split.creator_allocation, split.sale_allocation, split.liquidity_allocation) == (100, 600, 300)


@pytest.mark.parametrize(
    "creator,sale,liquidity",
    [(30, 50, 21), (0, 0, 0), (101, 0, -1)],
)
def test_percents_must_sum_to_100(creator: int, sale: int, liquidity: int) -> None:
    with pytest.raises(ValueError):
        AllocationPercents(creator=creator, sale=sale, liquidity=liquidity)


def test_percents_reject_bool() -> None:
    with pytest.raises(TypeError):
        AllocationPercents(creator=True, sale=49, liquidity=50)  # type: ignore[arg-type]


class TestCapitalForPoints:
    def test_one_unit_per_1000_points(self) -> None:
        assert capital_for_points(1_000, 1_000) == CAPITAL_PER_UNIT
        assert capital_for_points(100, 1_000) == 100_000_000

    def test_floors(self) -> None:
        assert capital_for_points(1, 3) == CAPITAL_PER_UNIT // 3

    def test_zero_rate(self) -> None:
        with pytest.raises(DivisionByZero):
            capital_for_points(1_000, 0)


class TestBuyerShares:
    def test_ten_of_one_thirty(self) -> None:
        # 10 of 130 raised against a 5e14 sale allocation.
        assert buyer_token_share(10, 5 * 10**14, 130) == 38_461_538_461_538

    def test_zero_raised_pays_nothing(self) -> None:
        assert buyer_token_share(0, 5 * 10**14, 0) == 0
        assert buyer_excess_share(0, 30, 0) == 0

    def test_excess_share(self) -> None:
        assert buyer_excess_share(60, 30, 130) == 13
        assert buyer_excess_share(70, 30, 130) == 16


class TestSplitCapital:
    def test_below_target(self) -> None:
        assert split_capital(60, 100) == (60, 0)

    def test_at_target(self) -> None:
        assert split_capital(100, 100) == (100, 0)

    def test_above_target(self) -> None:
        # 60 + 70 against a target of 100.
        assert split_capital(130, 100) == (100, 30)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

@settings(max_examples=200, deadline=None)
@given(units=st.integers(min_value=1, max_value=(2**64 - 1) // 100))
def test_split_sums_to_supply(units: int) -> None:
    total = units * 100
    assert split_supply(total).total == total


@settings(max_examples=200, deadline=None)
@given(
    contributions=st.lists(st.integers(min_value=1, max_value=10**12), min_size=1, max_size=20),
    sale=st.integers(min_value=0, max_value=10**15),
)
def test_buyer_shares_never_exceed_allocation(contributions: list[int], sale: int) -> None:
    raised = sum(contributions)
    paid = sum(buyer_token_share(c, sale, raised) for c in contributions)
    assert paid <= sale
    assert sale - paid < len(contributions)


@settings(max_examples=200, deadline=None)
@given(
    raised=st.integers(min_value=0, max_value=10**15),
    target=st.integers(min_value=0, max_value=10**15),
)
def test_portions_sum_to_raised(raised: int, target: int) -> None:
    liquidity, excess = split_capital(raised, target)
    assert liquidity == min(raised, target)
    assert liquidity + excess == raised
