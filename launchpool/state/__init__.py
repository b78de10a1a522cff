"""
State records and storage for the launchpad
"""

from .balances import NATIVE_MINT, InsufficientFunds, MintAuthorityError, TokenLedger
from .pools import LaunchPool, LaunchStatus, MigrationRecord
from .records import GlobalConfig, StakingPosition, UserDividendRecord, UserPoint, UserPosition
from .store import RecordStore, derive_address, launch_pool_address

__all__ = [
    "NATIVE_MINT",
    "InsufficientFunds",
    "MintAuthorityError",
    "TokenLedger",
    "LaunchPool",
    "LaunchStatus",
    "MigrationRecord",
    "GlobalConfig",
    "StakingPosition",
    "UserDividendRecord",
    "UserPoint",
    "UserPosition",
    "RecordStore",
    "derive_address",
    "launch_pool_address",
]
