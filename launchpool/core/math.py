"""Checked integer arithmetic shared by the accounting kernels.

Python ints never wrap, so "checked" here means *width-checked*: every result
that the ledger persists is bounded to the fixed width the on-chain layout
used (u64 amounts, u128 liquidity) and every wide intermediate is bounded to
its declared width (u128 for vesting, u256/u512 for liquidity). Exceeding a
bound raises ``MathOverflow``; nothing is ever silently truncated.

Rounding is always floor (``//``) unless a function says otherwise.
"""

from __future__ import annotations

from .errors import DivisionByZero, MathOverflow

U64_MAX: int = (1 << 64) - 1
U128_MAX: int = (1 << 128) - 1
U256_MAX: int = (1 << 256) - 1
U512_MAX: int = (1 << 512) - 1
I64_MAX: int = (1 << 63) - 1

_WIDTH_MAX = {64: U64_MAX, 128: U128_MAX, 256: U256_MAX, 512: U512_MAX}


def _max_for(bits: int) -> int:
    try:
        return _WIDTH_MAX[bits]
    except KeyError:
        raise ValueError(f"unsupported width: {bits}") from None


def require_uint(value: int, *, bits: int = 64, name: str = "value") -> int:
    """Return *value* if it is a non-negative int that fits in *bits*."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0 or value > _max_for(bits):
        raise MathOverflow(f"{name} out of u{bits} range: {value}")
    return value


def checked_add(a: int, b: int, *, bits: int = 64) -> int:
    return require_uint(a + b, bits=bits, name="sum")


def checked_sub(a: int, b: int) -> int:
    """``a - b``; underflow below zero is an error, never a wrap."""
    if b > a:
        raise MathOverflow(f"subtraction underflow: {a} - {b}")
    return a - b


def saturating_sub(a: int, b: int) -> int:
    return a - b if a > b else 0


def checked_mul(a: int, b: int, *, bits: int = 64) -> int:
    return require_uint(a * b, bits=bits, name="product")


def mul_div(a: int, b: int, denominator: int, *, wide_bits: int = 128, bits: int = 64) -> int:
    """``floor(a * b / denominator)`` with a ``wide_bits`` intermediate.

    The product is checked against ``wide_bits`` and the quotient against
    ``bits``. A zero denominator raises ``DivisionByZero``.
    """
    if denominator == 0:
        raise DivisionByZero()
    product = checked_mul(a, b, bits=wide_bits)
    return require_uint(product // denominator, bits=bits, name="quotient")


def div_ceil(numerator: int, denominator: int) -> int:
    if denominator == 0:
        raise DivisionByZero()
    return -(-numerator // denominator)
