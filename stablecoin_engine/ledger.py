"""Collateral ledger: per-account collateral and minted-debt bookkeeping.

Pure bookkeeping: no pricing and no token movement. Balances never go
negative; an overdraw raises instead of clamping.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any

from .errors import InsufficientCollateral, InsufficientDebt, NeedsMoreThanZero
from .models import CollateralDeposited, CollateralRedeemed, DebtBurned, DebtMinted
from .oracles.adapter import PriceOracleAdapter
from .registry import AssetRegistry

logger = logging.getLogger(__name__)


def _require_positive(amount: int) -> None:
    if amount <= 0:
        raise NeedsMoreThanZero(amount)


def _label(asset: Any) -> str:
    return str(getattr(asset, "symbol", asset))


class CollateralLedger:
    """Account → asset → amount balances plus account → minted debt."""

    def __init__(self, registry: AssetRegistry) -> None:
        self._registry = registry
        self._collateral: defaultdict[Any, dict[Any, int]] = defaultdict(dict)
        self._debt: dict[Any, int] = {}
        self.events: list[Any] = []

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def collateral_of(self, account: Any, asset: Any) -> int:
        return self._collateral.get(account, {}).get(asset, 0)

    def debt_of(self, account: Any) -> int:
        return self._debt.get(account, 0)

    def balances_of(self, account: Any) -> dict[Any, int]:
        """Collateral balances of *account*, in registration order."""
        return {asset: self.collateral_of(account, asset) for asset in self._registry}

    def collateral_usd_value(self, account: Any, oracle: PriceOracleAdapter) -> int:
        """Sum of the account's collateral in USD across the registry.

        Assets with a zero balance are skipped and need no price read.
        """
        total = 0
        for asset in self._registry:
            amount = self.collateral_of(account, asset)
            if amount:
                total += oracle.get_usd_value(asset, amount)
        return total

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def deposit(self, account: Any, asset: Any, amount: int) -> None:
        _require_positive(amount)
        self._registry.require(asset)

        balances = self._collateral[account]
        balances[asset] = balances.get(asset, 0) + amount
        self._record(CollateralDeposited(account, asset, amount))

    def withdraw(
        self, account: Any, asset: Any, amount: int, to: Any | None = None
    ) -> None:
        _require_positive(amount)
        self._registry.require(asset)

        available = self.collateral_of(account, asset)
        if available < amount:
            raise InsufficientCollateral(account, amount, available)

        self._collateral[account][asset] = available - amount
        self._record(
            CollateralRedeemed(account, account if to is None else to, asset, amount)
        )

    def mint_debt(self, account: Any, amount: int) -> None:
        _require_positive(amount)
        self._debt[account] = self.debt_of(account) + amount
        self._record(DebtMinted(account, amount))

    def burn_debt(self, account: Any, amount: int) -> None:
        _require_positive(amount)
        available = self.debt_of(account)
        if available < amount:
            raise InsufficientDebt(account, amount, available)
        self._debt[account] = available - amount
        self._record(DebtBurned(account, amount))

    def _record(self, event: Any) -> None:
        self.events.append(event)
        if isinstance(event, CollateralDeposited):
            logger.info(
                "Collateral deposited: %s %s by %s",
                event.amount, _label(event.asset), event.account,
            )
        elif isinstance(event, CollateralRedeemed):
            logger.info(
                "Collateral redeemed: %s %s from %s to %s",
                event.amount, _label(event.asset),
                event.redeemed_from, event.redeemed_to,
            )
        else:
            logger.debug("%s", event)

    # ------------------------------------------------------------------
    # Transactional
    # ------------------------------------------------------------------

    def snapshot(self) -> tuple[dict[Any, dict[Any, int]], dict[Any, int], int]:
        return (
            {acct: dict(bal) for acct, bal in self._collateral.items()},
            dict(self._debt),
            len(self.events),
        )

    def restore(self, state: tuple[dict[Any, dict[Any, int]], dict[Any, int], int]) -> None:
        collateral, debt, event_count = state
        self._collateral = defaultdict(
            dict, {acct: dict(bal) for acct, bal in collateral.items()}
        )
        self._debt = dict(debt)
        del self.events[event_count:]
