"""
Multi-asset token ledger with deterministic ordering.

Implements TokenLedger[PubKey, AssetId] -> Amount, standing in for the token
program: balances, mint authorities, transfers and burns. The launchpad only
moves funds through this interface.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple


# Type aliases
PubKey = str  # base58 account address
AssetId = str  # base58 mint address
Amount = int  # Non-negative integer (u64 on the wire)

# Wrapped native capital asset (wSOL).
NATIVE_MINT = "So11111111111111111111111111111111111111112"


class InsufficientFunds(ValueError):
    """Raised when a debit would take a balance below zero."""


class MintAuthorityError(ValueError):
    """Raised when minting without (or against) the mint authority."""


class TokenLedger:
    """
    Deterministic balance table mapping (owner, asset) -> amount.

    Note: balances live in a plain dict. Callers must sort keys explicitly if
    they hash or serialize the table; dict order is not part of the contract.
    """

    def __init__(self) -> None:
        self._balances: Dict[Tuple[PubKey, AssetId], Amount] = {}
        self._supply: Dict[AssetId, Amount] = {}
        # asset -> current mint authority (None once revoked)
        self._mint_authority: Dict[AssetId, Optional[PubKey]] = {}

    # -- balances ---------------------------------------------------------

    def get(self, owner: PubKey, asset: AssetId) -> Amount:
        """Get balance for (owner, asset). Returns 0 if not found."""
        return self._balances.get((owner, asset), 0)

    def set(self, owner: PubKey, asset: AssetId, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            # Remove zero balances to keep table sparse
            self._balances.pop((owner, asset), None)
        else:
            self._balances[(owner, asset)] = amount

    def add(self, owner: PubKey, asset: AssetId, delta: Amount) -> None:
        current = self.get(owner, asset)
        new_balance = current + delta
        if new_balance < 0:
            raise InsufficientFunds(
                f"Insufficient balance: {current} + {delta} = {new_balance} < 0"
            )
        self.set(owner, asset, new_balance)

    def transfer(self, source: PubKey, destination: PubKey, asset: AssetId, amount: Amount) -> None:
        """
        Move ``amount`` of ``asset`` between accounts.

        Zero-amount transfers are a no-op.

        Raises:
            ValueError: If amount is negative
            InsufficientFunds: If the source balance is too small
        """
        if amount < 0:
            raise ValueError(f"Transfer amount must be non-negative: {amount}")
        if amount == 0:
            return
        self.add(source, asset, -amount)
        self.add(destination, asset, amount)

    # -- mint lifecycle ---------------------------------------------------

    def create_mint(self, asset: AssetId, authority: PubKey) -> None:
        if asset in self._mint_authority:
            raise MintAuthorityError(f"Mint already exists: {asset}")
        self._mint_authority[asset] = authority
        self._supply.setdefault(asset, 0)

    def mint_to(self, asset: AssetId, destination: PubKey, amount: Amount, *, authority: PubKey) -> None:
        if amount <= 0:
            raise ValueError(f"Mint amount must be positive: {amount}")
        current = self._mint_authority.get(asset)
        if current is None or current != authority:
            raise MintAuthorityError(f"{authority} is not the mint authority of {asset}")
        self.add(destination, asset, amount)
        self._supply[asset] = self._supply.get(asset, 0) + amount

    def revoke_mint_authority(self, asset: AssetId, *, authority: PubKey) -> None:
        if self._mint_authority.get(asset) != authority:
            raise MintAuthorityError(f"{authority} is not the mint authority of {asset}")
        self._mint_authority[asset] = None

    def mint_authority(self, asset: AssetId) -> Optional[PubKey]:
        return self._mint_authority.get(asset)

    def supply(self, asset: AssetId) -> Amount:
        return self._supply.get(asset, 0)

    # -- queries ----------------------------------------------------------

    def get_balances_for_asset(self, asset: AssetId) -> Dict[PubKey, Amount]:
        result = {}
        for (owner, a), amount in self._balances.items():
            if a == asset:
                result[owner] = amount
        return result

    def total_held(self, asset: AssetId) -> Amount:
        return sum(self.get_balances_for_asset(asset).values())

    # -- atomicity support ------------------------------------------------

    def snapshot(self) -> tuple:
        return (dict(self._balances), dict(self._supply), dict(self._mint_authority))

    def restore(self, snap: tuple) -> None:
        balances, supply, authorities = snap
        self._balances = dict(balances)
        self._supply = dict(supply)
        self._mint_authority = dict(authorities)

    def __repr__(self) -> str:
        return f"TokenLedger({len(self._balances)} entries)"
