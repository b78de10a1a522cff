# [TESTER] v1

from __future__ import annotations

import pytest

pytest.importorskip("solders")

from launchpool.agents.oracle_signer import (
    BlsOracleSigner,
    Ed25519OracleSigner,
    sign_dividend_authorization,
    sign_points_authorization,
)
from launchpool.core.errors import InvalidInstructionIndex, InvalidSignature
from launchpool.integration.signatures import (
    BlsVerifier,
    Ed25519Verifier,
    InstructionContext,
    ProgramCall,
    SignatureCheck,
    dividend_message,
    points_message,
    verify_preceding_signature,
)

ORACLE = Ed25519OracleSigner.from_seed(b"\x42" * 32)
USER = Ed25519OracleSigner.from_seed(b"\x01" * 32).pubkey
POOL = Ed25519OracleSigner.from_seed(b"\x02" * 32).pubkey


def _points_auth(points: int = 1000, total: int = 5000):
    return sign_points_authorization(ORACLE, user=USER, points_to_spend=points, total_points=total, pool_id=POOL)


class TestMessages:
    def test_points_message_is_domain_separated(self) -> None:
        msg = points_message(USER, 1000, 5000, POOL)
        assert msg.startswith(b"launchpad:points_auth:v1\x00")
        assert msg != points_message(USER, 1000, 5001, POOL)

    def test_dividend_message_differs_from_points(self) -> None:
        assert dividend_message(USER, POOL, 5000).startswith(b"launchpad:dividend_auth:v1\x00")


class TestEd25519:
    def test_signer_round_trip(self) -> None:
        msg = points_message(USER, 1, 1, POOL)
        sig = ORACLE.sign(msg)
        assert len(sig) == 64
        assert Ed25519Verifier().verify(ORACLE.pubkey, msg, sig)
        assert not Ed25519Verifier().verify(USER, msg, sig)

    def test_malformed_inputs_do_not_verify(self) -> None:
        assert not Ed25519Verifier().verify("not-a-key", b"m", b"\x00" * 64)
        assert not Ed25519Verifier().verify(ORACLE.pubkey, b"m", b"\x00" * 10)

    def test_seed_length(self) -> None:
        with pytest.raises(ValueError):
            Ed25519OracleSigner.from_seed(b"\x00" * 31)


class TestPrecedingSignature:
    def test_accepts_matching_check(self) -> None:
        auth = _points_auth()
        verify_preceding_signature(
            auth.instructions,
            verifier=Ed25519Verifier(),
            trusted_key=ORACLE.pubkey,
            message=points_message(USER, 1000, 5000, POOL),
            signature=auth.signature,
        )

    def test_first_instruction_has_no_predecessor(self) -> None:
        auth = _points_auth()
        ctx = InstructionContext(instructions=auth.instructions.instructions, current_index=0)
        with pytest.raises(InvalidInstructionIndex):
            verify_preceding_signature(
                ctx, verifier=Ed25519Verifier(), trusted_key=ORACLE.pubkey,
                message=points_message(USER, 1000, 5000, POOL), signature=auth.signature,
            )

    def test_predecessor_must_be_signature_check(self) -> None:
        auth = _points_auth()
        ctx = InstructionContext(instructions=(ProgramCall("noop"), ProgramCall("participate")), current_index=1)
        with pytest.raises(InvalidInstructionIndex):
            verify_preceding_signature(
                ctx, verifier=Ed25519Verifier(), trusted_key=ORACLE.pubkey,
                message=points_message(USER, 1000, 5000, POOL), signature=auth.signature,
            )

    def test_wrong_signer(self) -> None:
        auth = _points_auth()
        with pytest.raises(InvalidSignature):
            verify_preceding_signature(
                auth.instructions, verifier=Ed25519Verifier(), trusted_key=USER,
                message=points_message(USER, 1000, 5000, POOL), signature=auth.signature,
            )

    def test_altered_amount(self) -> None:
        auth = _points_auth()
        with pytest.raises(InvalidSignature):
            verify_preceding_signature(
                auth.instructions, verifier=Ed25519Verifier(), trusted_key=ORACLE.pubkey,
                message=points_message(USER, 2000, 5000, POOL), signature=auth.signature,
            )

    def test_forged_check_fails_verification(self) -> None:
        msg = points_message(USER, 1000, 5000, POOL)
        forged = b"\x01" * 64
        ctx = InstructionContext(
            instructions=(SignatureCheck(pubkey=ORACLE.pubkey, message=msg, signature=forged), ProgramCall("p")),
            current_index=1,
        )
        with pytest.raises(InvalidSignature):
            verify_preceding_signature(
                ctx, verifier=Ed25519Verifier(), trusted_key=ORACLE.pubkey, message=msg, signature=forged,
            )

    def test_dividend_authorization(self) -> None:
        auth = sign_dividend_authorization(ORACLE, user=USER, token_mint=POOL, total_dividend_amount=77)
        verify_preceding_signature(
            auth.instructions, verifier=Ed25519Verifier(), trusted_key=ORACLE.pubkey,
            message=dividend_message(USER, POOL, 77), signature=auth.signature,
        )


class TestBls:
    def test_sign_and_verify(self) -> None:
        pytest.importorskip("py_ecc")
        signer = BlsOracleSigner(secret_key=12345)
        msg = dividend_message(USER, POOL, 10)
        sig = signer.sign(msg)
        assert len(sig) == 96
        assert BlsVerifier().verify(signer.pubkey, msg, sig)
        assert not BlsVerifier().verify(signer.pubkey, msg + b"x", sig)

    def test_rejects_bad_key_length(self) -> None:
        assert not BlsVerifier().verify("0x00", b"m", b"\x00" * 96)

    def test_secret_key_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            BlsOracleSigner(secret_key=0)
