"""
Core launchpad algorithms
"""

from .allocation import (
    AllocationPercents,
    TokenAllocation,
    buyer_excess_share,
    buyer_token_share,
    capital_for_points,
    split_capital,
    split_supply,
)
from .claims import RewardClaim, compute_creator_claim, compute_user_claim
from .dividends import compute_dividend_claim, dividend_claimable
from .errors import LaunchpadError
from .fees import PoolFeeSplit, SwapFeeQuote, split_pool_fee, swap_fee
from .invariants import check_all, check_position
from .launch_pool import can_finalize, finalize, migrate
from .liquidity import get_amounts_for_liquidity, get_liquidity_for_adding_liquidity
from .vesting import VestingSchedule, claimable_amount, unlocked_amount

__all__ = [
    "AllocationPercents",
    "TokenAllocation",
    "buyer_excess_share",
    "buyer_token_share",
    "capital_for_points",
    "split_capital",
    "split_supply",
    "RewardClaim",
    "compute_creator_claim",
    "compute_user_claim",
    "compute_dividend_claim",
    "dividend_claimable",
    "LaunchpadError",
    "PoolFeeSplit",
    "SwapFeeQuote",
    "split_pool_fee",
    "swap_fee",
    "check_all",
    "check_position",
    "can_finalize",
    "finalize",
    "migrate",
    "get_amounts_for_liquidity",
    "get_liquidity_for_adding_liquidity",
    "VestingSchedule",
    "claimable_amount",
    "unlocked_amount",
]
