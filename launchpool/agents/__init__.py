"""
Off-chain agents for the launchpad
"""

from .oracle_signer import (
    BlsOracleSigner,
    Ed25519OracleSigner,
    SignedAuthorization,
    sign_dividend_authorization,
    sign_points_authorization,
)

__all__ = [
    "BlsOracleSigner",
    "Ed25519OracleSigner",
    "SignedAuthorization",
    "sign_dividend_authorization",
    "sign_points_authorization",
]
