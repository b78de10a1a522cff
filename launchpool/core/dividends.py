"""
Dividend claim ledger (high-water mark).

The oracle signs a user's cumulative dividend total; the ledger pays the
difference between that total and what it already released. Replaying an old
authorization therefore pays nothing.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..state.records import UserDividendRecord
from .errors import InsufficientVaultBalance, InvalidAmount, NoClaimableAmount


def dividend_claimable(record: Optional[UserDividendRecord], total_dividend_amount: int) -> int:
    """``total - total_claimed``; a regressing total is rejected, never wrapped."""
    claimed = record.total_claimed if record is not None else 0
    if total_dividend_amount < claimed:
        raise InvalidAmount(f"signed total {total_dividend_amount} below claimed {claimed}")
    return total_dividend_amount - claimed


def compute_dividend_claim(
    record: Optional[UserDividendRecord],
    total_dividend_amount: int,
    vault_balance: int,
) -> int:
    amount = dividend_claimable(record, total_dividend_amount)
    if amount == 0:
        raise NoClaimableAmount()
    if vault_balance < amount:
        raise InsufficientVaultBalance(f"vault holds {vault_balance}, claim needs {amount}")
    return amount


def apply_dividend_claim(
    record: Optional[UserDividendRecord],
    *,
    user: str,
    token_mint: str,
    total_dividend_amount: int,
    now: int,
) -> UserDividendRecord:
    if record is None:
        record = UserDividendRecord(user=user, token_mint=token_mint)
    return replace(
        record,
        total_claimed=total_dividend_amount,
        first_claimed_at=record.first_claimed_at or now,
        last_claimed_at=now,
    )
