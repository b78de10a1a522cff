"""
Fee kernels (deterministic, integer-only).

- ``swap_fee``: the launchpad's cut taken from a swap input before routing.
- ``split_pool_fee``: AMM fee income split between treasury and creator.

Floor rounding favours the payer of the remainder: the swap keeps the dust,
and the creator receives any odd unit of a pool fee split.
"""

from __future__ import annotations

from dataclasses import dataclass

from .math import checked_mul, checked_sub

BPS_DENOM = 10_000

SWAP_FEE_BPS = 5
TREASURY_SHARE_BPS = 5_000


def _require_bps(name: str, v: int) -> None:
    if not isinstance(v, int) or isinstance(v, bool):
        raise TypeError(f"{name} must be an int")
    if not (0 <= v <= BPS_DENOM):
        raise ValueError(f"{name} must be in [0, {BPS_DENOM}]: {v}")


@dataclass(frozen=True)
class SwapFeeQuote:
    amount_in: int
    fee_amount: int
    swap_amount: int


@dataclass(frozen=True)
class PoolFeeSplit:
    treasury_amount: int
    creator_amount: int

    def __post_init__(self) -> None:
        for name, v in (("treasury_amount", self.treasury_amount), ("creator_amount", self.creator_amount)):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if v < 0:
                raise ValueError(f"{name} must be non-negative: {v}")


def swap_fee(amount_in: int, fee_bps: int = SWAP_FEE_BPS) -> SwapFeeQuote:
    """``fee = floor(amount_in * fee_bps / 10_000)``; the rest is routed to the venue."""
    _require_bps("fee_bps", fee_bps)
    if not isinstance(amount_in, int) or isinstance(amount_in, bool) or amount_in < 0:
        raise ValueError(f"amount_in must be a non-negative int, got {amount_in}")
    fee = checked_mul(amount_in, fee_bps) // BPS_DENOM
    return SwapFeeQuote(amount_in=amount_in, fee_amount=fee, swap_amount=checked_sub(amount_in, fee))


def split_pool_fee(fee_amount: int, treasury_bps: int = TREASURY_SHARE_BPS) -> PoolFeeSplit:
    _require_bps("treasury_bps", treasury_bps)
    if not isinstance(fee_amount, int) or isinstance(fee_amount, bool) or fee_amount < 0:
        raise ValueError(f"fee_amount must be a non-negative int, got {fee_amount}")
    treasury = checked_mul(fee_amount, treasury_bps) // BPS_DENOM
    return PoolFeeSplit(treasury_amount=treasury, creator_amount=fee_amount - treasury)
