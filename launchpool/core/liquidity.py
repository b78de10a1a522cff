"""
Concentrated-liquidity seed math used when a launch migrates to the AMM.

Prices are square roots in Q64.64 fixed point; liquidity is carried with the
same 2^64 scale the AMM uses, which is why the quote side shifts by 128 bits.

    L_base  = B * sqrtP * sqrtP_max / (sqrtP_max - sqrtP)
    L_quote = (Q << 128) / (sqrtP - sqrtP_min)
    L       = min(L_base, L_quote)

The base-side product is bounded to 512 bits and the quote-side shift to 256
bits; the chosen liquidity must fit in u128.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidAmount, MathOverflow
from .math import U128_MAX, U256_MAX, U512_MAX, div_ceil, require_uint

# Q64.64 bounds of the AMM's full price range.
MIN_SQRT_PRICE: int = 4295048016
MAX_SQRT_PRICE: int = 79226673521066979257578248091

# sqrt(100 SOL / 200M tokens) * 2^64: the default listing price.
DEFAULT_SQRT_PRICE: int = 412481737123559485

Q128: int = 1 << 128


@dataclass(frozen=True)
class SeedAmounts:
    """Amounts an AMM needs to back a given liquidity at a given price."""

    base_amount: int
    quote_amount: int


def liquidity_from_base(base_amount: int, sqrt_max_price: int, sqrt_price: int) -> int:
    """``B * sqrtP * sqrtP_max / (sqrtP_max - sqrtP)`` with a 512-bit intermediate."""
    require_uint(base_amount, bits=64, name="base_amount")
    if sqrt_max_price < sqrt_price:
        raise MathOverflow("sqrt_price above sqrt_max_price")
    delta = sqrt_max_price - sqrt_price
    if delta == 0:
        raise MathOverflow("zero price delta on base side")

    prod = base_amount * sqrt_price
    if prod > U512_MAX:
        raise MathOverflow("base liquidity product exceeds 512 bits")
    prod *= sqrt_max_price
    if prod > U512_MAX:
        raise MathOverflow("base liquidity product exceeds 512 bits")
    return prod // delta


def liquidity_from_quote(quote_amount: int, sqrt_min_price: int, sqrt_price: int) -> int:
    """``(Q << 128) / (sqrtP - sqrtP_min)`` with a 256-bit intermediate."""
    require_uint(quote_amount, bits=64, name="quote_amount")
    if sqrt_price < sqrt_min_price:
        raise MathOverflow("sqrt_price below sqrt_min_price")
    delta = sqrt_price - sqrt_min_price
    if delta == 0:
        raise MathOverflow("zero price delta on quote side")

    shifted = quote_amount << 128
    if shifted > U256_MAX:
        raise MathOverflow("quote shift exceeds 256 bits")
    liquidity = shifted // delta
    if liquidity > U128_MAX:
        raise MathOverflow("quote liquidity exceeds u128")
    return liquidity


def get_liquidity_for_adding_liquidity(
    base_amount: int,
    quote_amount: int,
    sqrt_price: int,
    min_sqrt_price: int,
    max_sqrt_price: int,
) -> int:
    """
    Liquidity supported by a (base, quote) deposit at ``sqrt_price``.

    Whichever side is scarcer determines the result.

    Raises:
        MathOverflow: On underflow of either price delta, a zero delta, or a
            result that does not fit in u128.
    """
    from_base = liquidity_from_base(base_amount, max_sqrt_price, sqrt_price)
    from_quote = liquidity_from_quote(quote_amount, min_sqrt_price, sqrt_price)
    if from_base > from_quote:
        return from_quote
    if from_base > U128_MAX:
        raise MathOverflow("base liquidity exceeds u128")
    return from_base


def validate_price_range(sqrt_price: int, min_sqrt_price: int, max_sqrt_price: int) -> None:
    """Reject a listing price outside the pool's configured sqrt-price range."""
    for name, v in (
        ("sqrt_price", sqrt_price),
        ("min_sqrt_price", min_sqrt_price),
        ("max_sqrt_price", max_sqrt_price),
    ):
        if not isinstance(v, int) or isinstance(v, bool) or v <= 0:
            raise InvalidAmount(f"{name} must be a positive int")
    if not (min_sqrt_price <= sqrt_price <= max_sqrt_price):
        raise InvalidAmount(
            f"sqrt_price {sqrt_price} outside [{min_sqrt_price}, {max_sqrt_price}]"
        )


def get_amounts_for_liquidity(
    liquidity: int,
    sqrt_price: int,
    min_sqrt_price: int,
    max_sqrt_price: int,
) -> SeedAmounts:
    """
    Inverse of ``get_liquidity_for_adding_liquidity``, rounding up.

    An AMM charges the depositor the ceiling of each side so the pool is never
    under-collateralized; the launchpad therefore measures the actual deltas
    instead of assuming its requested amounts were consumed exactly.
    """
    require_uint(liquidity, bits=128, name="liquidity")
    if not (min_sqrt_price <= sqrt_price <= max_sqrt_price):
        raise MathOverflow("sqrt_price outside range")
    base = div_ceil(liquidity * (max_sqrt_price - sqrt_price), sqrt_price * max_sqrt_price)
    quote = div_ceil(liquidity * (sqrt_price - min_sqrt_price), Q128)
    return SeedAmounts(base_amount=base, quote_amount=quote)
