# [TESTER] v1

from __future__ import annotations

import pytest

pytest.importorskip("solders")

from solders.keypair import Keypair

from launchpool.state.balances import NATIVE_MINT, InsufficientFunds, MintAuthorityError, TokenLedger
from launchpool.state.canonical import canonical_json_bytes, domain_sep_bytes, hex_to_bytes_allow_0x, sha256_hex
from launchpool.state.records import GlobalConfig, StakingPosition, UserPoint, UserPosition
from launchpool.state.store import (
    RecordStore,
    launch_pool_address,
    staking_position_address,
    user_position_address,
)


def _key(i: int) -> str:
    return str(Keypair.from_seed(bytes([i]) * 32).pubkey())


ALICE = _key(1)
BOB = _key(2)
POOL = _key(3)
MINT = _key(4)


class TestRecords:
    def test_config_defaults(self) -> None:
        cfg = GlobalConfig(admin=ALICE, oracle=BOB, venue="v", treasury=ALICE)
        assert cfg.points_per_unit == 1000
        assert cfg.min_contribution == 100_000_000
        assert cfg.max_contribution == 3_000_000_000
        assert not cfg.paused

    def test_config_rejects_inverted_bounds(self) -> None:
        with pytest.raises(ValueError):
            GlobalConfig(admin=ALICE, oracle=BOB, venue="v", treasury=ALICE, min_target=10, max_target=5)

    def test_config_rejects_bool_amounts(self) -> None:
        with pytest.raises(TypeError):
            GlobalConfig(admin=ALICE, oracle=BOB, venue="v", treasury=ALICE, points_per_unit=True)

    def test_position_defaults_unsettled(self) -> None:
        position = UserPosition(user=ALICE, pool_id=POOL, contributed=1)
        assert not (position.tokens_claimed or position.excess_claimed or position.refunded)
        with pytest.raises(ValueError):
            UserPosition(user=ALICE, pool_id=POOL, contributed=-1)

    def test_stake_unlock(self) -> None:
        s = StakingPosition(user=ALICE, token_mint=MINT, staked_amount=5, lock_duration=10, stake_time=100, unlock_time=110)
        assert not s.can_unstake(109)
        assert s.can_unstake(110)
        with pytest.raises(ValueError):
            StakingPosition(user=ALICE, token_mint=MINT, staked_amount=5, lock_duration=10, stake_time=100, unlock_time=99)


class TestTokenLedger:
    def test_transfer_moves_funds(self) -> None:
        ledger = TokenLedger()
        ledger.set(ALICE, NATIVE_MINT, 100)
        ledger.transfer(ALICE, BOB, NATIVE_MINT, 40)
        assert ledger.get(ALICE, NATIVE_MINT) == 60
        assert ledger.get(BOB, NATIVE_MINT) == 40

    def test_overdraft_rejected(self) -> None:
        ledger = TokenLedger()
        ledger.set(ALICE, NATIVE_MINT, 10)
        with pytest.raises(InsufficientFunds):
            ledger.transfer(ALICE, BOB, NATIVE_MINT, 11)
        assert ledger.get(ALICE, NATIVE_MINT) == 10

    def test_zero_transfer_is_noop(self) -> None:
        ledger = TokenLedger()
        ledger.transfer(ALICE, BOB, NATIVE_MINT, 0)
        assert ledger.get_balances_for_asset(NATIVE_MINT) == {}

    def test_mint_lifecycle(self) -> None:
        ledger = TokenLedger()
        ledger.create_mint(MINT, authority=POOL)
        ledger.mint_to(MINT, ALICE, 1_000, authority=POOL)
        assert ledger.supply(MINT) == 1_000
        with pytest.raises(MintAuthorityError):
            ledger.mint_to(MINT, ALICE, 1, authority=BOB)
        ledger.revoke_mint_authority(MINT, authority=POOL)
        assert ledger.mint_authority(MINT) is None
        with pytest.raises(MintAuthorityError):
            ledger.mint_to(MINT, ALICE, 1, authority=POOL)
        assert ledger.supply(MINT) == ledger.total_held(MINT) == 1_000

    def test_duplicate_mint(self) -> None:
        ledger = TokenLedger()
        ledger.create_mint(MINT, authority=POOL)
        with pytest.raises(MintAuthorityError):
            ledger.create_mint(MINT, authority=POOL)

    def test_snapshot_restore(self) -> None:
        ledger = TokenLedger()
        ledger.set(ALICE, NATIVE_MINT, 5)
        snap = ledger.snapshot()
        ledger.transfer(ALICE, BOB, NATIVE_MINT, 5)
        ledger.restore(snap)
        assert ledger.get(ALICE, NATIVE_MINT) == 5
        assert ledger.get(BOB, NATIVE_MINT) == 0


class TestAddresses:
    def test_derivation_is_deterministic(self) -> None:
        assert launch_pool_address(ALICE, 0) == launch_pool_address(ALICE, 0)
        assert launch_pool_address(ALICE, 0) != launch_pool_address(ALICE, 1)
        assert launch_pool_address(ALICE, 0) != launch_pool_address(BOB, 0)

    def test_seed_namespaces_do_not_collide(self) -> None:
        assert user_position_address(POOL, ALICE) != staking_position_address(ALICE, POOL)

    def test_rejects_non_base58_keys(self) -> None:
        with pytest.raises(ValueError):
            user_position_address("not-a-key", ALICE)


class TestRecordStore:
    def test_absent_records_are_none(self) -> None:
        store = RecordStore()
        assert store.get_config() is None
        assert store.get_position(POOL, ALICE) is None
        assert store.get_stake(ALICE, MINT) is None

    def test_positions_are_keyed_by_pool_and_user(self) -> None:
        store = RecordStore()
        store.put_position(UserPosition(user=BOB, pool_id=POOL, contributed=2))
        store.put_position(UserPosition(user=ALICE, pool_id=POOL, contributed=1))
        assert store.get_position(POOL, ALICE).contributed == 1
        users = [p.user for p in store.positions_for_pool(POOL)]
        assert users == sorted([ALICE, BOB])

    def test_snapshot_restore_rolls_back_inserts(self) -> None:
        store = RecordStore()
        store.put_user_point(UserPoint(user=ALICE, points_consumed=10))
        snap = store.snapshot()
        store.put_user_point(UserPoint(user=ALICE, points_consumed=20))
        store.put_stake(
            StakingPosition(user=ALICE, token_mint=MINT, staked_amount=1, lock_duration=0, stake_time=0, unlock_time=0)
        )
        store.restore(snap)
        assert store.get_user_point(ALICE).points_consumed == 10
        assert store.get_stake(ALICE, MINT) is None

    def test_delete_stake(self) -> None:
        store = RecordStore()
        store.put_stake(
            StakingPosition(user=ALICE, token_mint=MINT, staked_amount=1, lock_duration=0, stake_time=0, unlock_time=0)
        )
        store.delete_stake(ALICE, MINT)
        assert store.get_stake(ALICE, MINT) is None


class TestCanonical:
    def test_sorted_compact_json(self) -> None:
        assert canonical_json_bytes({"b": 1, "a": [2, "x"]}) == b'{"a":[2,"x"],"b":1}'

    def test_rejects_floats(self) -> None:
        with pytest.raises(TypeError):
            canonical_json_bytes({"a": 1.0})

    def test_rejects_surrogates(self) -> None:
        with pytest.raises(TypeError):
            canonical_json_bytes({"a": "\ud800"})

    def test_domain_separation(self) -> None:
        assert domain_sep_bytes("points_auth") == b"launchpad:points_auth:v1\x00"
        assert domain_sep_bytes("points_auth") != domain_sep_bytes("dividend_auth")
        with pytest.raises(ValueError):
            domain_sep_bytes("bad\x00label")

    def test_sha256_hex_prefix(self) -> None:
        assert sha256_hex(b"").startswith("0x")
        assert len(sha256_hex(b"")) == 66

    def test_hex_decoding(self) -> None:
        assert hex_to_bytes_allow_0x("0x0a0b", name="x") == b"\x0a\x0b"
        with pytest.raises(ValueError):
            hex_to_bytes_allow_0x("0a0", name="x")
        with pytest.raises(ValueError):
            hex_to_bytes_allow_0x("0a", name="x", expected_nbytes=2)
