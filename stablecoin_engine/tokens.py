"""In-memory fungible token: the reference token collaborator.

Balances, allowances and supply live in plain dicts. Transfers that cannot
be covered report ``False`` and move nothing; minting and burning are
reserved to the owner.
"""
from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class InMemoryToken:
    """Fungible token with ERC-20 style transfer and allowance semantics."""

    def __init__(self, symbol: str, owner: Any | None = None, decimals: int = 18) -> None:
        self.symbol = symbol
        self.decimals = decimals
        self.owner = owner
        self.total_supply = 0
        self._balances: dict[Any, int] = {}
        self._allowances: dict[tuple[Any, Any], int] = {}

    def __repr__(self) -> str:
        return f"InMemoryToken({self.symbol!r})"

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def balance_of(self, account: Any) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: Any, spender: Any) -> int:
        return self._allowances.get((owner, spender), 0)

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    def approve(self, owner: Any, spender: Any, amount: int) -> bool:
        if amount < 0:
            return False
        self._allowances[(owner, spender)] = amount
        return True

    def transfer(self, sender: Any, recipient: Any, amount: int) -> bool:
        return self._move(sender, recipient, amount)

    def transfer_from(
        self, spender: Any, owner: Any, recipient: Any, amount: int
    ) -> bool:
        allowed = self.allowance(owner, spender)
        if allowed < amount:
            logger.debug(
                "%s: allowance %d of %s for %s below %d",
                self.symbol, allowed, owner, spender, amount,
            )
            return False
        if not self._move(owner, recipient, amount):
            return False
        self._allowances[(owner, spender)] = allowed - amount
        return True

    def _move(self, sender: Any, recipient: Any, amount: int) -> bool:
        if amount < 0:
            return False
        balance = self.balance_of(sender)
        if balance < amount:
            logger.debug(
                "%s: balance %d of %s below %d", self.symbol, balance, sender, amount
            )
            return False
        self._balances[sender] = balance - amount
        self._balances[recipient] = self.balance_of(recipient) + amount
        return True

    # ------------------------------------------------------------------
    # Supply
    # ------------------------------------------------------------------

    def _require_owner(self, caller: Any) -> None:
        if self.owner is not None and caller != self.owner:
            raise PermissionError(f"{caller} is not the owner of {self.symbol}")

    def transfer_ownership(self, caller: Any, new_owner: Any) -> None:
        self._require_owner(caller)
        self.owner = new_owner

    def mint(self, caller: Any, recipient: Any, amount: int) -> bool:
        self._require_owner(caller)
        if amount <= 0:
            return False
        self._balances[recipient] = self.balance_of(recipient) + amount
        self.total_supply += amount
        return True

    def burn(self, caller: Any, amount: int) -> bool:
        """Burn *amount* from the caller's own balance."""
        self._require_owner(caller)
        balance = self.balance_of(caller)
        if amount <= 0 or balance < amount:
            return False
        self._balances[caller] = balance - amount
        self.total_supply -= amount
        return True

    # ------------------------------------------------------------------
    # Transactional
    # ------------------------------------------------------------------

    def snapshot(self) -> tuple[dict[Any, int], dict[tuple[Any, Any], int], int, Any]:
        return (
            dict(self._balances),
            dict(self._allowances),
            self.total_supply,
            self.owner,
        )

    def restore(
        self, state: tuple[dict[Any, int], dict[tuple[Any, Any], int], int, Any]
    ) -> None:
        balances, allowances, supply, owner = state
        self._balances = dict(balances)
        self._allowances = dict(allowances)
        self.total_supply = supply
        self.owner = owner
