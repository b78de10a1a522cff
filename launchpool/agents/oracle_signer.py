"""
Oracle-side signing of points and dividend authorizations.

The oracle computes points and dividend totals off-chain and signs the same
canonical messages the program rebuilds on submission.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Protocol

from py_ecc.bls import G2Basic
from solders.keypair import Keypair

from ..integration.signatures import (
    InstructionContext,
    ProgramCall,
    SignatureCheck,
    dividend_message,
    points_message,
)
from ..state.balances import AssetId, PubKey


class OracleSigner(Protocol):
    @property
    def pubkey(self) -> str: ...

    def sign(self, message: bytes) -> bytes: ...


class Ed25519OracleSigner:
    """Signs with a Solana keypair; ``pubkey`` is the base58 address."""

    def __init__(self, keypair: Keypair) -> None:
        self._keypair = keypair

    @classmethod
    def from_seed(cls, seed: bytes) -> "Ed25519OracleSigner":
        if len(seed) != 32:
            raise ValueError("seed must be 32 bytes")
        return cls(Keypair.from_seed(seed))

    @property
    def pubkey(self) -> str:
        return str(self._keypair.pubkey())

    def sign(self, message: bytes) -> bytes:
        return bytes(self._keypair.sign_message(message))


class BlsOracleSigner:
    """
    Signs with a BLS12-381 secret key (G2Basic).

    The payload is ``sha256(message)``; ``pubkey`` is the 48-byte key as 0x hex.
    """

    def __init__(self, secret_key: int) -> None:
        if not isinstance(secret_key, int) or secret_key <= 0:
            raise ValueError("secret_key must be a positive int")
        self._sk = secret_key
        self._pk = G2Basic.SkToPk(secret_key)

    @property
    def pubkey(self) -> str:
        return "0x" + bytes(self._pk).hex()

    def sign(self, message: bytes) -> bytes:
        return bytes(G2Basic.Sign(self._sk, hashlib.sha256(message).digest()))


@dataclass(frozen=True)
class SignedAuthorization:
    """A signature plus the transaction layout that carries it."""

    signature: bytes
    instructions: InstructionContext


def _authorize(signer: OracleSigner, message: bytes, instruction: str) -> SignedAuthorization:
    signature = signer.sign(message)
    check = SignatureCheck(pubkey=signer.pubkey, message=message, signature=signature)
    return SignedAuthorization(
        signature=signature,
        instructions=InstructionContext(instructions=(check, ProgramCall(instruction)), current_index=1),
    )


def sign_points_authorization(
    signer: OracleSigner,
    *,
    user: PubKey,
    points_to_spend: int,
    total_points: int,
    pool_id: str,
) -> SignedAuthorization:
    """
    Authorize ``user`` to spend ``points_to_spend`` of ``total_points`` in a pool.

    Args:
        signer: Oracle signer
        user: Participant address
        points_to_spend: Points consumed by this participation
        total_points: User's lifetime points total attested by the oracle
        pool_id: Launch pool address

    Returns:
        SignedAuthorization to pass to ``participate_with_points``
    """
    message = points_message(user, points_to_spend, total_points, pool_id)
    return _authorize(signer, message, "participate_with_points")


def sign_dividend_authorization(
    signer: OracleSigner,
    *,
    user: PubKey,
    token_mint: AssetId,
    total_dividend_amount: int,
) -> SignedAuthorization:
    """Authorize ``user``'s cumulative dividend total for ``token_mint``."""
    message = dividend_message(user, token_mint, total_dividend_amount)
    return _authorize(signer, message, "claim_token_dividends")
