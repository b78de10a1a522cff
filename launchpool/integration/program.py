"""
Launchpad program: the imperative shell around the pure kernels.

Every public method is one atomic operation:

- the clock is read once,
- the record store, the token ledger and any snapshottable collaborator are
  snapshotted before the first mutation and restored on any exception,
- post-state invariants are checked before records are written,
- events are published only after the operation commits.

Permission checks are explicit comparisons against the caller key.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field, fields, replace
from enum import Enum, unique
from typing import Any, Dict, Iterator, List, Optional

from solders.pubkey import Pubkey

from ..core import claims, dividends, launch_pool, participation, staking
from ..core.errors import (
    AlreadyInitialized,
    InsufficientLiquidity,
    InvalidAmount,
    InvalidConfig,
    InvariantViolation,
    LaunchpadError,
    NotCreator,
    NotInitialized,
    NotMigrated,
    PoolNotFound,
    SlippageExceeded,
    Unauthorized,
)
from ..core.fees import PoolFeeSplit, split_pool_fee, swap_fee
from ..core.invariants import check_all, check_position
from ..core.liquidity import get_liquidity_for_adding_liquidity, validate_price_range
from ..core.math import checked_sub
from ..core.vesting import claimable_amount
from ..state.balances import NATIVE_MINT, Amount, AssetId, PubKey, TokenLedger
from ..state.pools import LaunchPool, LaunchStatus
from ..state.records import GlobalConfig, StakingPosition, UserDividendRecord, UserPosition
from ..state.store import (
    RecordStore,
    derive_address,
    dividend_vault_address,
    launch_pool_address,
    quote_vault_address,
    staking_vault_address,
    token_mint_address,
    token_vault_address,
)
from .collaborators import AmmService, Clock, MetadataRegistry, Snapshottable, SwapVenue
from .config import ProgramSettings
from .signatures import (
    Ed25519Verifier,
    InstructionContext,
    Verifier,
    dividend_message,
    points_message,
    verify_preceding_signature,
)

logger = logging.getLogger(__name__)

# Owner of every program-controlled reserve and of the AMM position.
VAULT_AUTHORITY = derive_address(b"vault_authority")

_UPDATABLE_CONFIG_FIELDS = frozenset(
    f.name for f in fields(GlobalConfig) if f.name not in ("admin", "pool_count")
)


@unique
class EventKind(Enum):
    CONFIG_INITIALIZED = "ConfigInitialized"
    CONFIG_UPDATED = "ConfigUpdated"
    LAUNCH_POOL_INITIALIZED = "LaunchPoolInitialized"
    PARTICIPATION = "Participation"
    LAUNCH_FINALIZED = "LaunchFinalized"
    LIQUIDITY_POOL_CREATED = "LiquidityPoolCreated"
    USER_REWARDS_CLAIMED = "UserRewardsClaimed"
    CREATOR_TOKENS_CLAIMED = "CreatorTokensClaimed"
    DIVIDEND_CLAIMED = "DividendClaimed"
    TOKENS_STAKED = "TokensStaked"
    TOKENS_UNSTAKED = "TokensUnstaked"
    POOL_FEES_CLAIMED = "PoolFeesClaimed"
    SWAP_FEE_CHARGED = "SwapFeeCharged"
    LIQUIDITY_LOCKED = "LiquidityLocked"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    timestamp: int
    data: Dict[str, Any] = field(default_factory=dict)


def fee_vault_address(pool_id: str) -> str:
    return derive_address(b"fee_vault", bytes(Pubkey.from_string(pool_id)))


class LaunchpadProgram:
    """
    Launchpad operations over a record store and a token ledger.

    Collaborators (AMM, swap venue, metadata registry, clock, verifier) are
    injected; see ``launchpool.integration.collaborators``.
    """

    def __init__(
        self,
        *,
        ledger: TokenLedger,
        amm: AmmService,
        venue: SwapVenue,
        metadata: MetadataRegistry,
        clock: Clock,
        verifier: Optional[Verifier] = None,
        store: Optional[RecordStore] = None,
        settings: Optional[ProgramSettings] = None,
    ) -> None:
        self.ledger = ledger
        self.amm = amm
        self.venue = venue
        self.metadata = metadata
        self.clock = clock
        self.verifier: Verifier = verifier if verifier is not None else Ed25519Verifier()
        self.store = store if store is not None else RecordStore()
        self.settings = settings if settings is not None else ProgramSettings()
        self.events: List[Event] = []

    # ------------------------------------------------------------------
    # Transaction plumbing
    # ------------------------------------------------------------------

    def _participants(self) -> list:
        parts: list = [self.store, self.ledger]
        for c in (self.amm, self.venue, self.metadata):
            if isinstance(c, Snapshottable) and all(c is not p for p in parts):
                parts.append(c)
        return parts

    @contextmanager
    def _transaction(self, op: str) -> Iterator[List[Event]]:
        snaps = [(p, p.snapshot()) for p in self._participants()]
        pending: List[Event] = []
        try:
            yield pending
        except Exception as exc:
            for participant, snap in snaps:
                participant.restore(snap)
            if isinstance(exc, LaunchpadError):
                logger.warning("%s rejected: %s: %s", op, exc.code, exc)
            else:
                logger.warning("%s aborted: %r", op, exc)
            raise
        self.events.extend(pending)
        for event in pending:
            logger.info("%s committed: %s %s", op, event.kind.value, event.data)

    def _require_config(self) -> GlobalConfig:
        config = self.store.get_config()
        if config is None:
            raise NotInitialized("global config has not been initialized")
        return config

    def _require_pool(self, pool_id: str) -> LaunchPool:
        pool = self.store.get_pool(pool_id)
        if pool is None:
            raise PoolNotFound(f"no launch pool at {pool_id}")
        return pool

    def _commit_pool(self, pool: LaunchPool) -> None:
        violations = check_all(pool)
        if violations:
            raise InvariantViolation(violations)
        self.store.put_pool(pool)

    def _commit_position(self, pool: LaunchPool, position: UserPosition) -> None:
        violations = check_position(pool, position)
        if violations:
            raise InvariantViolation(violations)
        self.store.put_position(position)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def config(self) -> Optional[GlobalConfig]:
        return self.store.get_config()

    def get_pool(self, pool_id: str) -> LaunchPool:
        return self._require_pool(pool_id)

    def get_position(self, pool_id: str, user: PubKey) -> Optional[UserPosition]:
        return self.store.get_position(pool_id, user)

    def get_dividend_record(self, user: PubKey, token_mint: AssetId) -> Optional[UserDividendRecord]:
        return self.store.get_dividend(user, token_mint)

    def get_stake(self, user: PubKey, token_mint: AssetId) -> Optional[StakingPosition]:
        return self.store.get_stake(user, token_mint)

    def creator_claimable(self, pool_id: str) -> int:
        pool = self._require_pool(pool_id)
        return claimable_amount(
            launch_pool.creator_schedule(pool), pool.creator_claimed_tokens, self.clock.now()
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def initialize_config(
        self,
        admin: PubKey,
        *,
        oracle: PubKey,
        venue: str,
        treasury: PubKey,
        **overrides: Any,
    ) -> GlobalConfig:
        now = self.clock.now()
        with self._transaction("initialize_config") as events:
            if self.store.get_config() is not None:
                raise AlreadyInitialized("global config already exists")
            unknown = set(overrides) - (_UPDATABLE_CONFIG_FIELDS - {"oracle", "venue", "treasury"})
            if unknown:
                raise InvalidConfig(f"unknown config fields: {', '.join(sorted(unknown))}")
            try:
                config = GlobalConfig(admin=admin, oracle=oracle, venue=venue, treasury=treasury, **overrides)
            except (TypeError, ValueError) as exc:
                raise InvalidConfig(str(exc)) from exc
            self.store.put_config(config)
            events.append(Event(EventKind.CONFIG_INITIALIZED, now, {"admin": admin, "oracle": oracle}))
        return config

    def update_config(self, caller: PubKey, **changes: Any) -> GlobalConfig:
        """Apply admin changes; absent fields keep their value."""
        now = self.clock.now()
        with self._transaction("update_config") as events:
            config = self._require_config()
            if caller != config.admin:
                raise Unauthorized("only the admin may update the config")
            unknown = set(changes) - _UPDATABLE_CONFIG_FIELDS
            if unknown:
                raise InvalidConfig(f"unknown config fields: {', '.join(sorted(unknown))}")
            try:
                config = replace(config, **changes)
            except (TypeError, ValueError) as exc:
                raise InvalidConfig(str(exc)) from exc
            self.store.put_config(config)
            events.append(Event(EventKind.CONFIG_UPDATED, now, {"fields": sorted(changes)}))
        return config

    # ------------------------------------------------------------------
    # Launch lifecycle
    # ------------------------------------------------------------------

    def initialize_launch(
        self,
        creator: PubKey,
        *,
        name: str,
        symbol: str,
        uri: str,
        target: Optional[int] = None,
        duration: Optional[int] = None,
        lock_duration: Optional[int] = None,
        linear_unlock_duration: Optional[int] = None,
        start_time: Optional[int] = None,
    ) -> LaunchPool:
        """
        Create a pool, mint its full supply into the token reserve, register
        metadata, revoke the mint authority and open the pool.
        """
        now = self.clock.now()
        s = self.settings
        target = s.default_target if target is None else target
        duration = s.default_duration if duration is None else duration
        with self._transaction("initialize_launch") as events:
            config = self._require_config()
            launch_pool.validate_launch_params(config, target, duration)

            pool_id = launch_pool_address(creator, config.pool_count)
            token_mint = token_mint_address(pool_id)
            pool = launch_pool.new_pool(
                pool_id=pool_id,
                index=config.pool_count,
                creator=creator,
                token_mint=token_mint,
                quote_mint=NATIVE_MINT,
                token_vault=token_vault_address(pool_id),
                quote_vault=quote_vault_address(pool_id),
                target=target,
                start_time=now if start_time is None else start_time,
                duration=duration,
                points_per_unit=config.points_per_unit,
                now=now,
                total_supply=s.total_supply,
                percents=s.allocation_percents,
                lock_duration=s.creator_lock_duration if lock_duration is None else lock_duration,
                linear_unlock_duration=(
                    s.creator_linear_unlock_duration if linear_unlock_duration is None else linear_unlock_duration
                ),
            )

            self.ledger.create_mint(token_mint, authority=pool_id)
            self.ledger.mint_to(token_mint, pool.token_vault, pool.total_supply, authority=pool_id)
            self.metadata.register(token_mint, name=name, symbol=symbol, uri=uri, update_authority=pool_id)
            self.ledger.revoke_mint_authority(token_mint, authority=pool_id)

            pool = launch_pool.activate(pool)
            self._commit_pool(pool)
            self.store.put_config(replace(config, pool_count=config.pool_count + 1))
            events.append(
                Event(
                    EventKind.LAUNCH_POOL_INITIALIZED,
                    now,
                    {
                        "pool": pool_id,
                        "creator": creator,
                        "token_mint": token_mint,
                        "name": name,
                        "symbol": symbol,
                        "total_supply": pool.total_supply,
                        "target": target,
                        "start_time": pool.start_time,
                        "end_time": pool.end_time,
                    },
                )
            )
        return pool

    def participate_with_points(
        self,
        user: PubKey,
        pool_id: str,
        *,
        points_to_spend: int,
        total_points_signed: int,
        signature: bytes,
        instructions: InstructionContext,
    ) -> UserPosition:
        now = self.clock.now()
        with self._transaction("participate_with_points") as events:
            config = self._require_config()
            pool = self._require_pool(pool_id)
            launch_pool.require_active(pool)
            launch_pool.require_in_window(pool, now)

            verify_preceding_signature(
                instructions,
                verifier=self.verifier,
                trusted_key=config.oracle,
                message=points_message(user, points_to_spend, total_points_signed, pool_id),
                signature=signature,
            )

            position = self.store.get_position(pool_id, user)
            quote = participation.quote_participation(
                points_to_spend=points_to_spend,
                total_points_signed=total_points_signed,
                points_per_unit=pool.points_per_unit,
                position=position,
                user_point=self.store.get_user_point(user),
                config=config,
            )
            logger.debug("participation %s in %s: %d points -> %d capital", user, pool_id, quote.points, quote.capital)

            self.ledger.transfer(user, pool.quote_vault, pool.quote_mint, quote.capital)

            pool = launch_pool.apply_contribution(
                pool, quote.capital, quote.points, first_participation=quote.first_participation
            )
            position = participation.apply_to_position(position, user=user, pool_id=pool_id, quote=quote, now=now)
            self._commit_pool(pool)
            self._commit_position(pool, position)
            self.store.put_user_point(
                participation.apply_to_user_point(self.store.get_user_point(user), user=user, points=quote.points)
            )
            events.append(
                Event(
                    EventKind.PARTICIPATION,
                    now,
                    {
                        "pool": pool_id,
                        "user": user,
                        "capital": quote.capital,
                        "points": quote.points,
                        "total_contribution": position.contributed,
                        "raised": pool.raised,
                        "first_participation": quote.first_participation,
                        "participants": pool.participant_count,
                    },
                )
            )
        return position

    def finalize_launch(self, pool_id: str) -> LaunchPool:
        now = self.clock.now()
        with self._transaction("finalize_launch") as events:
            pool = launch_pool.finalize(self._require_pool(pool_id), now)
            self._commit_pool(pool)
            events.append(
                Event(
                    EventKind.LAUNCH_FINALIZED,
                    now,
                    {
                        "pool": pool_id,
                        "success": pool.status is LaunchStatus.SUCCESS,
                        "raised": pool.raised,
                        "target": pool.target,
                        "liquidity": pool.liquidity_portion,
                        "excess": pool.excess_portion,
                        "participants": pool.participant_count,
                        "points": pool.total_points_consumed,
                    },
                )
            )
        return pool

    def create_amm_pool(self, pool_id: str, *, sqrt_price: Optional[int] = None) -> LaunchPool:
        """
        Seed the AMM with the liquidity allocation and the liquidity capital.

        The amounts the AMM consumed are measured as reserve balance deltas and
        drive the reconciliation of ``excess_portion`` and ``sale_allocation``.
        """
        now = self.clock.now()
        s = self.settings
        sqrt_price = s.sqrt_price if sqrt_price is None else sqrt_price
        with self._transaction("create_amm_pool") as events:
            pool = self._require_pool(pool_id)
            launch_pool.require_migratable(pool)
            validate_price_range(sqrt_price, s.min_sqrt_price, s.max_sqrt_price)
            liquidity = get_liquidity_for_adding_liquidity(
                pool.liquidity_allocation,
                pool.liquidity_portion,
                sqrt_price,
                s.min_sqrt_price,
                s.max_sqrt_price,
            )
            if liquidity == 0:
                raise InsufficientLiquidity("seed amounts support zero liquidity")

            token_before = self.ledger.get(pool.token_vault, pool.token_mint)
            quote_before = self.ledger.get(pool.quote_vault, pool.quote_mint)
            position = self.amm.initialize_pool(
                token_mint=pool.token_mint,
                quote_mint=pool.quote_mint,
                token_source=pool.token_vault,
                quote_source=pool.quote_vault,
                owner=VAULT_AUTHORITY,
                liquidity=liquidity,
                sqrt_price=sqrt_price,
                min_sqrt_price=s.min_sqrt_price,
                max_sqrt_price=s.max_sqrt_price,
            )
            token_used = checked_sub(token_before, self.ledger.get(pool.token_vault, pool.token_mint))
            capital_used = checked_sub(quote_before, self.ledger.get(pool.quote_vault, pool.quote_mint))
            if token_used > pool.liquidity_allocation:
                raise InsufficientLiquidity(
                    f"AMM consumed {token_used} tokens > allocation {pool.liquidity_allocation}"
                )
            logger.debug(
                "migration %s: liquidity=%d token_used=%d capital_used=%d", pool_id, liquidity, token_used, capital_used
            )

            pool = launch_pool.migrate(
                pool,
                amm_pool=position.pool,
                position=position.position,
                sqrt_price=sqrt_price,
                liquidity=liquidity,
                capital_used=capital_used,
                token_used=token_used,
                now=now,
            )
            self._commit_pool(pool)
            events.append(
                Event(
                    EventKind.LIQUIDITY_POOL_CREATED,
                    now,
                    {
                        "pool": pool_id,
                        "amm_pool": position.pool,
                        "position": position.position,
                        "token_amount": token_used,
                        "capital_amount": capital_used,
                        "liquidity": liquidity,
                    },
                )
            )
        return pool

    def lock_liquidity(self, caller: PubKey, pool_id: str, amount: int) -> LaunchPool:
        now = self.clock.now()
        with self._transaction("lock_liquidity") as events:
            config = self._require_config()
            if caller != config.admin:
                raise Unauthorized("only the admin may lock liquidity")
            pool = launch_pool.lock_liquidity(self._require_pool(pool_id), amount)
            self.amm.lock_position(pool.position, amount)
            self._commit_pool(pool)
            events.append(
                Event(
                    EventKind.LIQUIDITY_LOCKED,
                    now,
                    {"pool": pool_id, "position": pool.position, "amount": amount, "admin": caller},
                )
            )
        return pool

    # ------------------------------------------------------------------
    # Claims
    # ------------------------------------------------------------------

    def claim_user_rewards(self, user: PubKey, pool_id: str) -> claims.RewardClaim:
        """Pay the buyer's token share and excess capital from a settled pool."""
        now = self.clock.now()
        with self._transaction("claim_user_rewards") as events:
            pool = self._require_pool(pool_id)
            position = self.store.get_position(pool_id, user)
            claim = claims.compute_user_claim(pool, position)
            self.ledger.transfer(pool.token_vault, user, pool.token_mint, claim.tokens)
            self.ledger.transfer(pool.quote_vault, user, pool.quote_mint, claim.capital)
            position = claims.apply_user_claim(position, claim, now)
            self._commit_position(pool, position)
            events.append(
                Event(
                    EventKind.USER_REWARDS_CLAIMED,
                    now,
                    {
                        "pool": pool_id,
                        "user": user,
                        "tokens": claim.tokens,
                        "capital": claim.capital,
                        "contribution": position.contributed,
                        "raised": pool.raised,
                    },
                )
            )
        return claim

    def claim_creator_tokens(self, caller: PubKey, pool_id: str) -> int:
        now = self.clock.now()
        with self._transaction("claim_creator_tokens") as events:
            pool = self._require_pool(pool_id)
            if caller != pool.creator:
                raise NotCreator()
            amount = claims.compute_creator_claim(pool, now)
            if self.ledger.get(pool.token_vault, pool.token_mint) < amount:
                raise InsufficientLiquidity("token reserve cannot cover the creator claim")
            self.ledger.transfer(pool.token_vault, caller, pool.token_mint, amount)
            pool = launch_pool.record_creator_claim(pool, amount)
            self._commit_pool(pool)
            remaining = pool.creator_allocation - pool.creator_claimed_tokens
            events.append(
                Event(
                    EventKind.CREATOR_TOKENS_CLAIMED,
                    now,
                    {
                        "pool": pool_id,
                        "creator": caller,
                        "amount": amount,
                        "total_claimed": pool.creator_claimed_tokens,
                        "remaining": remaining,
                        "fully_unlocked": remaining == 0,
                    },
                )
            )
        return amount

    def claim_token_dividends(
        self,
        user: PubKey,
        token_mint: AssetId,
        *,
        total_dividend_amount: int,
        signature: bytes,
        instructions: InstructionContext,
    ) -> int:
        now = self.clock.now()
        with self._transaction("claim_token_dividends") as events:
            config = self._require_config()
            verify_preceding_signature(
                instructions,
                verifier=self.verifier,
                trusted_key=config.oracle,
                message=dividend_message(user, token_mint, total_dividend_amount),
                signature=signature,
            )
            record = self.store.get_dividend(user, token_mint)
            vault = dividend_vault_address(token_mint)
            amount = dividends.compute_dividend_claim(
                record, total_dividend_amount, self.ledger.get(vault, token_mint)
            )
            self.ledger.transfer(vault, user, token_mint, amount)
            record = dividends.apply_dividend_claim(
                record, user=user, token_mint=token_mint, total_dividend_amount=total_dividend_amount, now=now
            )
            self.store.put_dividend(record)
            events.append(
                Event(
                    EventKind.DIVIDEND_CLAIMED,
                    now,
                    {
                        "user": user,
                        "token_mint": token_mint,
                        "amount": amount,
                        "total_claimed": record.total_claimed,
                    },
                )
            )
        return amount

    # ------------------------------------------------------------------
    # Staking
    # ------------------------------------------------------------------

    def stake_tokens(self, user: PubKey, token_mint: AssetId, amount: int, lock_duration: int) -> StakingPosition:
        now = self.clock.now()
        with self._transaction("stake_tokens") as events:
            config = self._require_config()
            staking.validate_stake(config, amount, lock_duration)
            self.ledger.transfer(user, staking_vault_address(token_mint), token_mint, amount)
            existing = self.store.get_stake(user, token_mint)
            position = staking.stake(
                existing, user=user, token_mint=token_mint, amount=amount, lock_duration=lock_duration, now=now
            )
            self.store.put_stake(position)
            events.append(
                Event(
                    EventKind.TOKENS_STAKED,
                    now,
                    {
                        "user": user,
                        "token_mint": token_mint,
                        "amount": amount,
                        "total_staked": position.staked_amount,
                        "unlock_time": position.unlock_time,
                        "additional": existing is not None,
                    },
                )
            )
        return position

    def unstake_tokens(self, user: PubKey, token_mint: AssetId) -> int:
        now = self.clock.now()
        with self._transaction("unstake_tokens") as events:
            position = self.store.get_stake(user, token_mint)
            amount = staking.unstake(position, now)
            self.ledger.transfer(staking_vault_address(token_mint), user, token_mint, amount)
            self.store.delete_stake(user, token_mint)
            events.append(
                Event(
                    EventKind.TOKENS_UNSTAKED,
                    now,
                    {
                        "user": user,
                        "token_mint": token_mint,
                        "amount": amount,
                        "duration_staked": now - position.stake_time,
                    },
                )
            )
        return amount

    # ------------------------------------------------------------------
    # Fees and swaps
    # ------------------------------------------------------------------

    def claim_pool_fee(self, pool_id: str) -> Dict[AssetId, PoolFeeSplit]:
        """Collect the AMM position's fees and split each asset between treasury and creator."""
        now = self.clock.now()
        with self._transaction("claim_pool_fee") as events:
            config = self._require_config()
            pool = self._require_pool(pool_id)
            if pool.status is not LaunchStatus.MIGRATED:
                raise NotMigrated(f"pool is {pool.status.value}")
            fee_vault = fee_vault_address(pool_id)
            collected = self.amm.claim_fees(pool.position, destination=fee_vault)
            splits: Dict[AssetId, PoolFeeSplit] = {}
            for asset in sorted(collected):
                split = split_pool_fee(collected[asset], self.settings.treasury_share_bps)
                self.ledger.transfer(fee_vault, config.treasury, asset, split.treasury_amount)
                self.ledger.transfer(fee_vault, pool.creator, asset, split.creator_amount)
                splits[asset] = split
            events.append(
                Event(
                    EventKind.POOL_FEES_CLAIMED,
                    now,
                    {
                        "pool": pool_id,
                        "treasury": {a: sp.treasury_amount for a, sp in splits.items()},
                        "creator": {a: sp.creator_amount for a, sp in splits.items()},
                    },
                )
            )
        return splits

    def swap(
        self,
        user: PubKey,
        *,
        input_mint: AssetId,
        output_mint: AssetId,
        amount_in: Amount,
        min_amount_out: Amount,
    ) -> Amount:
        """Take the swap fee to the treasury and route the remainder to the venue."""
        now = self.clock.now()
        with self._transaction("swap") as events:
            config = self._require_config()
            if amount_in <= 0:
                raise InvalidAmount("amount_in must be positive")
            quote = swap_fee(amount_in, self.settings.swap_fee_bps)
            self.ledger.transfer(user, config.treasury, input_mint, quote.fee_amount)

            before = self.ledger.get(user, output_mint)
            self.venue.swap(
                user=user,
                input_mint=input_mint,
                output_mint=output_mint,
                amount_in=quote.swap_amount,
                min_amount_out=min_amount_out,
            )
            amount_out = checked_sub(self.ledger.get(user, output_mint), before)
            if amount_out < min_amount_out:
                raise SlippageExceeded(f"received {amount_out} < min_amount_out {min_amount_out}")
            events.append(
                Event(
                    EventKind.SWAP_FEE_CHARGED,
                    now,
                    {
                        "user": user,
                        "input_mint": input_mint,
                        "output_mint": output_mint,
                        "amount_in": amount_in,
                        "fee_amount": quote.fee_amount,
                        "swap_amount": quote.swap_amount,
                        "amount_out": amount_out,
                        "fee_bps": self.settings.swap_fee_bps,
                    },
                )
            )
        return amount_out
