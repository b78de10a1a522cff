# [TESTER] v1

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import given, settings

from launchpool.core.errors import DivisionByZero, InvalidAmount, MathOverflow
from launchpool.core.liquidity import (
    DEFAULT_SQRT_PRICE,
    MAX_SQRT_PRICE,
    MIN_SQRT_PRICE,
    get_amounts_for_liquidity,
    get_liquidity_for_adding_liquidity,
    liquidity_from_base,
    liquidity_from_quote,
    validate_price_range,
)
from launchpool.core.math import U128_MAX, checked_add, checked_sub, div_ceil, mul_div

LIQUIDITY_TOKENS = 2 * 10**14
LIQUIDITY_CAPITAL = 100 * 10**9


def test_default_price_balances_default_seed() -> None:
    # The default listing price is 100 units of capital for 200M tokens, so
    # both sides support roughly the same liquidity.
    from_base = liquidity_from_base(LIQUIDITY_TOKENS, MAX_SQRT_PRICE, DEFAULT_SQRT_PRICE)
    from_quote = liquidity_from_quote(LIQUIDITY_CAPITAL, MIN_SQRT_PRICE, DEFAULT_SQRT_PRICE)
    assert abs(from_base - from_quote) * 1000 < max(from_base, from_quote)


def test_liquidity_is_min_of_sides() -> None:
    liquidity = get_liquidity_for_adding_liquidity(
        LIQUIDITY_TOKENS, LIQUIDITY_CAPITAL, DEFAULT_SQRT_PRICE, MIN_SQRT_PRICE, MAX_SQRT_PRICE
    )
    from_base = liquidity_from_base(LIQUIDITY_TOKENS, MAX_SQRT_PRICE, DEFAULT_SQRT_PRICE)
    from_quote = liquidity_from_quote(LIQUIDITY_CAPITAL, MIN_SQRT_PRICE, DEFAULT_SQRT_PRICE)
    assert liquidity == min(from_base, from_quote)
    assert 0 < liquidity <= U128_MAX


def test_inverse_never_exceeds_inputs() -> None:
    liquidity = get_liquidity_for_adding_liquidity(
        LIQUIDITY_TOKENS, LIQUIDITY_CAPITAL, DEFAULT_SQRT_PRICE, MIN_SQRT_PRICE, MAX_SQRT_PRICE
    )
    amounts = get_amounts_for_liquidity(liquidity, DEFAULT_SQRT_PRICE, MIN_SQRT_PRICE, MAX_SQRT_PRICE)
    assert amounts.base_amount <= LIQUIDITY_TOKENS
    assert amounts.quote_amount <= LIQUIDITY_CAPITAL


def test_base_side_underflow_and_zero_delta() -> None:
    with pytest.raises(MathOverflow):
        liquidity_from_base(1, DEFAULT_SQRT_PRICE, DEFAULT_SQRT_PRICE + 1)
    with pytest.raises(MathOverflow):
        liquidity_from_base(1, DEFAULT_SQRT_PRICE, DEFAULT_SQRT_PRICE)


def test_quote_side_underflow_and_zero_delta() -> None:
    with pytest.raises(MathOverflow):
        liquidity_from_quote(1, DEFAULT_SQRT_PRICE + 1, DEFAULT_SQRT_PRICE)
    with pytest.raises(MathOverflow):
        liquidity_from_quote(1, DEFAULT_SQRT_PRICE, DEFAULT_SQRT_PRICE)


def test_quote_side_result_must_fit_u128() -> None:
    with pytest.raises(MathOverflow):
        liquidity_from_quote(10**18, DEFAULT_SQRT_PRICE - 1, DEFAULT_SQRT_PRICE)


def test_amounts_must_fit_u64() -> None:
    with pytest.raises(MathOverflow):
        liquidity_from_base(1 << 64, MAX_SQRT_PRICE, DEFAULT_SQRT_PRICE)


@pytest.mark.parametrize(
    "sqrt_price",
    [MIN_SQRT_PRICE - 1, MAX_SQRT_PRICE + 1, 0],
)
def test_price_range_rejects_out_of_bounds(sqrt_price: int) -> None:
    with pytest.raises(InvalidAmount):
        validate_price_range(sqrt_price, MIN_SQRT_PRICE, MAX_SQRT_PRICE)


def test_price_range_accepts_bounds() -> None:
    validate_price_range(MIN_SQRT_PRICE, MIN_SQRT_PRICE, MAX_SQRT_PRICE)
    validate_price_range(MAX_SQRT_PRICE, MIN_SQRT_PRICE, MAX_SQRT_PRICE)


class TestCheckedMath:
    def test_add_overflow(self) -> None:
        with pytest.raises(MathOverflow):
            checked_add(2**64 - 1, 1)

    def test_sub_underflow(self) -> None:
        with pytest.raises(MathOverflow):
            checked_sub(1, 2)

    def test_mul_div_uses_wide_intermediate(self) -> None:
        assert mul_div(2**63, 2**63, 2**63) == 2**63

    def test_mul_div_zero_denominator(self) -> None:
        with pytest.raises(DivisionByZero):
            mul_div(1, 1, 0)

    def test_div_ceil(self) -> None:
        assert div_ceil(7, 2) == 4
        assert div_ceil(8, 2) == 4


@settings(max_examples=200, deadline=None)
@given(
    base=st.integers(min_value=1, max_value=10**15),
    quote=st.integers(min_value=1, max_value=10**12),
)
def test_seed_amounts_round_in_pool_favour(base: int, quote: int) -> None:
    liquidity = get_liquidity_for_adding_liquidity(
        base, quote, DEFAULT_SQRT_PRICE, MIN_SQRT_PRICE, MAX_SQRT_PRICE
    )
    amounts = get_amounts_for_liquidity(liquidity, DEFAULT_SQRT_PRICE, MIN_SQRT_PRICE, MAX_SQRT_PRICE)
    assert amounts.base_amount <= base
    assert amounts.quote_amount <= quote
