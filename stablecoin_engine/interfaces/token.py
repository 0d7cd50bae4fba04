"""Token protocols: fungible collateral and the mintable debt token.

Callers are passed explicitly; each call either fully succeeds (``True``)
or reports failure (``False``) with no partial transfer. Tokens must also
support ``snapshot``/``restore`` so a failed engine operation can undo the
transfers it already made.
"""
from typing import Any, Protocol

from .transactional import Transactional


class CollateralToken(Transactional, Protocol):
    """Abstract interface for a fungible collateral token."""

    symbol: str

    def balance_of(self, account: Any) -> int: ...

    def transfer(self, sender: Any, recipient: Any, amount: int) -> bool: ...

    def transfer_from(
        self, spender: Any, owner: Any, recipient: Any, amount: int
    ) -> bool: ...


class DebtToken(CollateralToken, Protocol):
    """Debt token; mint and burn are restricted to its owner (the engine)."""

    def mint(self, caller: Any, recipient: Any, amount: int) -> bool: ...

    def burn(self, caller: Any, amount: int) -> bool: ...
