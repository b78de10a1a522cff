"""
Oracle authorization checks.

The oracle authorizes participations and dividend claims off-chain by signing
a canonical message. On submission the transaction carries two instructions:
a signature-check record (what the runtime's signature precompile verified)
immediately followed by the launchpad instruction. The program accepts the
authorization only when that preceding record covers exactly the trusted key,
the message it rebuilt from its own inputs, and the supplied signature, and
the injected ``Verifier`` agrees.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from py_ecc.bls import G2Basic
from solders.pubkey import Pubkey
from solders.signature import Signature

from ..core.errors import InvalidInstructionIndex, InvalidSignature
from ..state.canonical import (
    CANONICAL_ENCODING_VERSION,
    canonical_json_bytes,
    domain_sep_bytes,
    hex_to_bytes_allow_0x,
)

POINTS_DOMAIN = "points_auth"
DIVIDEND_DOMAIN = "dividend_auth"


class Verifier(Protocol):
    def verify(self, pubkey: str, message: bytes, signature: bytes) -> bool: ...


class Ed25519Verifier:
    """EdDSA over Ed25519; keys are base58 account addresses."""

    def verify(self, pubkey: str, message: bytes, signature: bytes) -> bool:
        try:
            key = Pubkey.from_string(pubkey)
            sig = Signature.from_bytes(signature)
        except (TypeError, ValueError):
            return False
        return bool(sig.verify(key, message))


class BlsVerifier:
    """
    BLS12-381 (G2Basic) verification; keys are 48-byte hex, signatures 96 bytes.

    The signed payload is ``sha256(message)``, matching how the oracle signs.
    """

    def verify(self, pubkey: str, message: bytes, signature: bytes) -> bool:
        try:
            pubkey_bytes = hex_to_bytes_allow_0x(pubkey, name="pubkey", expected_nbytes=48)
        except (TypeError, ValueError):
            return False
        if len(signature) != 96:
            return False
        msg_hash = hashlib.sha256(message).digest()
        try:
            return bool(G2Basic.Verify(pubkey_bytes, msg_hash, signature))
        except (TypeError, ValueError):
            return False


@dataclass(frozen=True)
class SignatureCheck:
    """A signature-precompile instruction: ``pubkey`` signed ``message``."""

    pubkey: str
    message: bytes
    signature: bytes


@dataclass(frozen=True)
class ProgramCall:
    """Any non-signature instruction in the transaction."""

    name: str


@dataclass(frozen=True)
class InstructionContext:
    """The transaction's instructions and the index of the one executing."""

    instructions: Sequence[Any]
    current_index: int


def points_message(user: str, points_to_spend: int, total_points_signed: int, pool_id: str) -> bytes:
    return domain_sep_bytes(POINTS_DOMAIN, version=CANONICAL_ENCODING_VERSION) + canonical_json_bytes(
        {
            "user": user,
            "points_to_spend": points_to_spend,
            "total_points": total_points_signed,
            "pool": pool_id,
        }
    )


def dividend_message(user: str, token_mint: str, total_dividend_amount: int) -> bytes:
    return domain_sep_bytes(DIVIDEND_DOMAIN, version=CANONICAL_ENCODING_VERSION) + canonical_json_bytes(
        {
            "user": user,
            "token_mint": token_mint,
            "total_dividend": total_dividend_amount,
        }
    )


def verify_preceding_signature(
    ctx: InstructionContext,
    *,
    verifier: Verifier,
    trusted_key: str,
    message: bytes,
    signature: bytes,
) -> None:
    """
    Require the instruction before ``ctx.current_index`` to be a matching signature check.

    Raises:
        InvalidInstructionIndex: If there is no preceding instruction or it is
            not a signature check.
        InvalidSignature: If the check covers a different key, message or
            signature, or the signature does not verify.
    """
    index = ctx.current_index
    if index <= 0 or index > len(ctx.instructions):
        raise InvalidInstructionIndex(f"no instruction precedes index {index}")
    preceding = ctx.instructions[index - 1]
    if not isinstance(preceding, SignatureCheck):
        raise InvalidInstructionIndex("preceding instruction is not a signature check")

    if preceding.pubkey != trusted_key:
        raise InvalidSignature("signature check is for a different key")
    if preceding.message != message:
        raise InvalidSignature("signature check covers a different message")
    if preceding.signature != signature:
        raise InvalidSignature("signature check carries a different signature")
    if not verifier.verify(trusted_key, message, signature):
        raise InvalidSignature()
