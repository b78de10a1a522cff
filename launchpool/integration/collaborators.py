"""
External collaborators of the launchpad program.

The program only talks to these interfaces. The in-memory implementations
below keep their balances in the shared ``TokenLedger`` so the program can
measure exactly what each collaborator moved.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Protocol, runtime_checkable

from solders.pubkey import Pubkey

from ..core.errors import InsufficientLiquidity, InvalidAmount, SlippageExceeded
from ..core.liquidity import get_amounts_for_liquidity, validate_price_range
from ..state.balances import Amount, AssetId, PubKey, TokenLedger
from ..state.store import derive_address

# Program ids of the external programs the launchpad calls into.
AMM_PROGRAM_ID = Pubkey.from_string("cpamdpZCGKUy5JxQXB4dcpGPiikHawvSWAd6mEn1sGG")
SWAP_VENUE_PROGRAM_ID = Pubkey.from_string("LBUZKhRxPF3XUpBCjp4YzTKgLccjZhTSDM9YuVaPwxo")


class Clock(Protocol):
    def now(self) -> int: ...


@dataclass
class FixedClock:
    """Manually advanced clock."""

    current: int = 0

    def now(self) -> int:
        return self.current

    def advance(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError("clock cannot move backwards")
        self.current += seconds
        return self.current


@runtime_checkable
class Snapshottable(Protocol):
    def snapshot(self) -> object: ...

    def restore(self, snap) -> None: ...


class MetadataRegistry(Protocol):
    def register(self, mint: AssetId, *, name: str, symbol: str, uri: str, update_authority: PubKey) -> None: ...


@dataclass(frozen=True)
class TokenMetadata:
    mint: AssetId
    name: str
    symbol: str
    uri: str
    update_authority: PubKey


class InMemoryMetadataRegistry:
    MAX_NAME_LEN = 32
    MAX_SYMBOL_LEN = 10
    MAX_URI_LEN = 200

    def __init__(self) -> None:
        self._entries: Dict[AssetId, TokenMetadata] = {}

    def register(self, mint: AssetId, *, name: str, symbol: str, uri: str, update_authority: PubKey) -> None:
        if mint in self._entries:
            raise ValueError(f"metadata already registered for {mint}")
        if not name or len(name) > self.MAX_NAME_LEN:
            raise ValueError(f"name must be 1..{self.MAX_NAME_LEN} chars")
        if not symbol or len(symbol) > self.MAX_SYMBOL_LEN:
            raise ValueError(f"symbol must be 1..{self.MAX_SYMBOL_LEN} chars")
        if len(uri) > self.MAX_URI_LEN:
            raise ValueError(f"uri must be at most {self.MAX_URI_LEN} chars")
        self._entries[mint] = TokenMetadata(mint, name, symbol, uri, update_authority)

    def get(self, mint: AssetId) -> Optional[TokenMetadata]:
        return self._entries.get(mint)

    def snapshot(self) -> dict:
        return dict(self._entries)

    def restore(self, snap: dict) -> None:
        self._entries = dict(snap)


# ---------------------------------------------------------------------------
# AMM
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AmmPosition:
    pool: str
    position: str
    owner: PubKey
    liquidity: int
    locked_liquidity: int = 0


class AmmService(Protocol):
    def initialize_pool(
        self,
        *,
        token_mint: AssetId,
        quote_mint: AssetId,
        token_source: PubKey,
        quote_source: PubKey,
        owner: PubKey,
        liquidity: int,
        sqrt_price: int,
        min_sqrt_price: int,
        max_sqrt_price: int,
    ) -> AmmPosition: ...

    def claim_fees(self, position: str, *, destination: PubKey) -> Dict[AssetId, Amount]: ...

    def lock_position(self, position: str, amount: int) -> None: ...


@dataclass
class _AmmPoolState:
    token_mint: AssetId
    quote_mint: AssetId
    reserve: PubKey
    fee_account: PubKey
    sqrt_price: int
    positions: Dict[str, AmmPosition] = field(default_factory=dict)


class SimulatedAmm:
    """
    Concentrated-liquidity AMM stand-in.

    Deposits are charged with the AMM's own rounding (ceiling of each side),
    so callers see slightly different amounts from the ones they requested.
    """

    def __init__(self, ledger: TokenLedger) -> None:
        self.ledger = ledger
        self._pools: Dict[str, _AmmPoolState] = {}
        self._position_pool: Dict[str, str] = {}

    def initialize_pool(
        self,
        *,
        token_mint: AssetId,
        quote_mint: AssetId,
        token_source: PubKey,
        quote_source: PubKey,
        owner: PubKey,
        liquidity: int,
        sqrt_price: int,
        min_sqrt_price: int,
        max_sqrt_price: int,
    ) -> AmmPosition:
        validate_price_range(sqrt_price, min_sqrt_price, max_sqrt_price)
        if liquidity <= 0:
            raise InvalidAmount("liquidity must be positive")
        pool_id = derive_address(
            b"pool", bytes(Pubkey.from_string(token_mint)), bytes(Pubkey.from_string(quote_mint)),
            program_id=AMM_PROGRAM_ID,
        )
        if pool_id in self._pools:
            raise ValueError(f"AMM pool already exists: {pool_id}")
        pool_key = bytes(Pubkey.from_string(pool_id))
        state = _AmmPoolState(
            token_mint=token_mint,
            quote_mint=quote_mint,
            reserve=derive_address(b"reserve", pool_key, program_id=AMM_PROGRAM_ID),
            fee_account=derive_address(b"fees", pool_key, program_id=AMM_PROGRAM_ID),
            sqrt_price=sqrt_price,
        )

        amounts = get_amounts_for_liquidity(liquidity, sqrt_price, min_sqrt_price, max_sqrt_price)
        self.ledger.transfer(token_source, state.reserve, token_mint, amounts.base_amount)
        self.ledger.transfer(quote_source, state.reserve, quote_mint, amounts.quote_amount)

        position_id = derive_address(b"position", pool_key, bytes(Pubkey.from_string(owner)), program_id=AMM_PROGRAM_ID)
        position = AmmPosition(pool=pool_id, position=position_id, owner=owner, liquidity=liquidity)
        state.positions[position_id] = position
        self._pools[pool_id] = state
        self._position_pool[position_id] = pool_id
        return position

    def _pool_for(self, position: str) -> _AmmPoolState:
        try:
            return self._pools[self._position_pool[position]]
        except KeyError:
            raise ValueError(f"unknown AMM position: {position}") from None

    def get_position(self, position: str) -> AmmPosition:
        return self._pool_for(position).positions[position]

    def accrue_fees(self, position: str, *, payer: PubKey, asset: AssetId, amount: Amount) -> None:
        """Simulate trading fees: ``payer`` funds the pool's fee account."""
        state = self._pool_for(position)
        if asset not in (state.token_mint, state.quote_mint):
            raise ValueError(f"{asset} is not traded in this pool")
        self.ledger.transfer(payer, state.fee_account, asset, amount)

    def claim_fees(self, position: str, *, destination: PubKey) -> Dict[AssetId, Amount]:
        state = self._pool_for(position)
        claimed: Dict[AssetId, Amount] = {}
        for asset in (state.token_mint, state.quote_mint):
            amount = self.ledger.get(state.fee_account, asset)
            self.ledger.transfer(state.fee_account, destination, asset, amount)
            claimed[asset] = amount
        return claimed

    def lock_position(self, position: str, amount: int) -> None:
        state = self._pool_for(position)
        current = state.positions[position]
        locked = current.locked_liquidity + amount
        if amount <= 0 or locked > current.liquidity:
            raise InsufficientLiquidity(f"cannot lock {amount} of {current.liquidity - current.locked_liquidity}")
        state.positions[position] = replace(current, locked_liquidity=locked)

    def snapshot(self) -> tuple:
        pools = {
            k: replace(v, positions=dict(v.positions))
            for k, v in self._pools.items()
        }
        return pools, dict(self._position_pool)

    def restore(self, snap: tuple) -> None:
        pools, position_pool = snap
        self._pools = {k: replace(v, positions=dict(v.positions)) for k, v in pools.items()}
        self._position_pool = dict(position_pool)


# ---------------------------------------------------------------------------
# Swap venue
# ---------------------------------------------------------------------------


class SwapVenue(Protocol):
    def swap(
        self,
        *,
        user: PubKey,
        input_mint: AssetId,
        output_mint: AssetId,
        amount_in: Amount,
        min_amount_out: Amount,
    ) -> Amount: ...


class SimulatedSwapVenue:
    """
    Fixed-rate venue quoting ``amount_out = amount_in * rate_num // rate_den``.

    The venue's inventory of each asset is held at ``reserve`` in the ledger.
    """

    def __init__(self, ledger: TokenLedger, *, rate_num: int = 1, rate_den: int = 1) -> None:
        if rate_num <= 0 or rate_den <= 0:
            raise ValueError("rate must be positive")
        self.ledger = ledger
        self.rate_num = rate_num
        self.rate_den = rate_den
        self.reserve = derive_address(b"reserve", program_id=SWAP_VENUE_PROGRAM_ID)

    def swap(
        self,
        *,
        user: PubKey,
        input_mint: AssetId,
        output_mint: AssetId,
        amount_in: Amount,
        min_amount_out: Amount,
    ) -> Amount:
        amount_out = amount_in * self.rate_num // self.rate_den
        if amount_out < min_amount_out:
            raise SlippageExceeded(f"amount_out {amount_out} < min_amount_out {min_amount_out}")
        if self.ledger.get(self.reserve, output_mint) < amount_out:
            raise InsufficientLiquidity("venue cannot fill the swap")
        self.ledger.transfer(user, self.reserve, input_mint, amount_in)
        self.ledger.transfer(self.reserve, user, output_mint, amount_out)
        return amount_out
