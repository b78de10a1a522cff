"""
Keyed record store for the launchpad program.

Every record lives at a deterministic address derived from fixed seeds and the
program id (Solana program-derived addresses, computed with ``solders``).
Callers address records by their semantic key; the store derives the address.

The store keeps plain dicts of frozen records, so ``snapshot()`` is a shallow
copy and ``restore()`` is an all-or-nothing rollback.
"""

from __future__ import annotations

from typing import Dict, Optional

from solders.pubkey import Pubkey

from .balances import AssetId, PubKey
from .pools import LaunchPool
from .records import GlobalConfig, StakingPosition, UserDividendRecord, UserPoint, UserPosition

# Program id of the launchpad deployment this ledger models.
PROGRAM_ID = Pubkey.from_string("7E22dUYERWbyaqGDTKeU7NfYPRnBuAaVULXJgafxsBHq")

LAUNCH_POOL_SEED = b"launch_pool"
USER_POSITION_SEED = b"user_position"
USER_POINT_SEED = b"user_point"
USER_DIVIDEND_SEED = b"user_dividend"
STAKING_POSITION_SEED = b"staking_position"
TOKEN_MINT_SEED = b"token_mint"
TOKEN_VAULT_SEED = b"token_vault"
QUOTE_VAULT_SEED = b"quote_vault"
DIVIDEND_VAULT_SEED = b"dividend_vault"
STAKING_VAULT_SEED = b"staking_vault"


def _key_bytes(key: str) -> bytes:
    return bytes(Pubkey.from_string(key))


def derive_address(*seeds: bytes, program_id: Pubkey = PROGRAM_ID) -> str:
    """Derive the canonical program address for ``seeds`` (base58)."""
    address, _bump = Pubkey.find_program_address(list(seeds), program_id)
    return str(address)


def launch_pool_address(creator: PubKey, index: int) -> str:
    return derive_address(LAUNCH_POOL_SEED, _key_bytes(creator), index.to_bytes(8, "little"))


def user_position_address(pool_id: str, user: PubKey) -> str:
    return derive_address(USER_POSITION_SEED, _key_bytes(pool_id), _key_bytes(user))


def user_point_address(user: PubKey) -> str:
    return derive_address(USER_POINT_SEED, _key_bytes(user))


def user_dividend_address(user: PubKey, token_mint: AssetId) -> str:
    return derive_address(USER_DIVIDEND_SEED, _key_bytes(user), _key_bytes(token_mint))


def staking_position_address(user: PubKey, token_mint: AssetId) -> str:
    return derive_address(STAKING_POSITION_SEED, _key_bytes(user), _key_bytes(token_mint))


def token_mint_address(pool_id: str) -> str:
    return derive_address(TOKEN_MINT_SEED, _key_bytes(pool_id))


def token_vault_address(pool_id: str) -> str:
    return derive_address(TOKEN_VAULT_SEED, _key_bytes(pool_id))


def quote_vault_address(pool_id: str) -> str:
    return derive_address(QUOTE_VAULT_SEED, _key_bytes(pool_id))


def dividend_vault_address(token_mint: AssetId) -> str:
    return derive_address(DIVIDEND_VAULT_SEED, _key_bytes(token_mint))


def staking_vault_address(token_mint: AssetId) -> str:
    return derive_address(STAKING_VAULT_SEED, _key_bytes(token_mint))


class RecordStore:
    """
    In-memory record tables keyed by derived address.

    ``get_*`` return ``None`` for absent records; ``put_*`` insert or replace.
    Staking positions are the only records that are ever deleted.
    """

    def __init__(self) -> None:
        self._config: Optional[GlobalConfig] = None
        self._pools: Dict[str, LaunchPool] = {}
        self._positions: Dict[str, UserPosition] = {}
        self._points: Dict[str, UserPoint] = {}
        self._dividends: Dict[str, UserDividendRecord] = {}
        self._stakes: Dict[str, StakingPosition] = {}

    # -- config -----------------------------------------------------------

    def get_config(self) -> Optional[GlobalConfig]:
        return self._config

    def put_config(self, config: GlobalConfig) -> None:
        self._config = config

    # -- pools ------------------------------------------------------------

    def get_pool(self, pool_id: str) -> Optional[LaunchPool]:
        return self._pools.get(pool_id)

    def put_pool(self, pool: LaunchPool) -> None:
        self._pools[pool.pool_id] = pool

    def pools(self) -> list[LaunchPool]:
        return [self._pools[k] for k in sorted(self._pools)]

    # -- participation ----------------------------------------------------

    def get_position(self, pool_id: str, user: PubKey) -> Optional[UserPosition]:
        return self._positions.get(user_position_address(pool_id, user))

    def put_position(self, position: UserPosition) -> None:
        self._positions[user_position_address(position.pool_id, position.user)] = position

    def positions_for_pool(self, pool_id: str) -> list[UserPosition]:
        found = [p for p in self._positions.values() if p.pool_id == pool_id]
        return sorted(found, key=lambda p: p.user)

    def get_user_point(self, user: PubKey) -> Optional[UserPoint]:
        return self._points.get(user_point_address(user))

    def put_user_point(self, point: UserPoint) -> None:
        self._points[user_point_address(point.user)] = point

    # -- dividends --------------------------------------------------------

    def get_dividend(self, user: PubKey, token_mint: AssetId) -> Optional[UserDividendRecord]:
        return self._dividends.get(user_dividend_address(user, token_mint))

    def put_dividend(self, record: UserDividendRecord) -> None:
        self._dividends[user_dividend_address(record.user, record.token_mint)] = record

    # -- staking ----------------------------------------------------------

    def get_stake(self, user: PubKey, token_mint: AssetId) -> Optional[StakingPosition]:
        return self._stakes.get(staking_position_address(user, token_mint))

    def put_stake(self, stake: StakingPosition) -> None:
        self._stakes[staking_position_address(stake.user, stake.token_mint)] = stake

    def delete_stake(self, user: PubKey, token_mint: AssetId) -> None:
        self._stakes.pop(staking_position_address(user, token_mint), None)

    # -- atomicity support ------------------------------------------------

    def snapshot(self) -> tuple:
        return (
            self._config,
            dict(self._pools),
            dict(self._positions),
            dict(self._points),
            dict(self._dividends),
            dict(self._stakes),
        )

    def restore(self, snap: tuple) -> None:
        config, pools, positions, points, dividends, stakes = snap
        self._config = config
        self._pools = dict(pools)
        self._positions = dict(positions)
        self._points = dict(points)
        self._dividends = dict(dividends)
        self._stakes = dict(stakes)

    def __repr__(self) -> str:
        return (
            f"RecordStore(pools={len(self._pools)}, positions={len(self._positions)}, "
            f"stakes={len(self._stakes)})"
        )
