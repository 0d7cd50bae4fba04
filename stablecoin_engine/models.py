"""Data models: all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PriceRound:
    """Latest round reported by a price feed (8-decimal answer)."""

    round_id: int
    answer: int
    started_at: int
    updated_at: int
    answered_in_round: int


@dataclass(frozen=True)
class AccountInfo:
    """Debt and collateral value of one account, both 18-decimal USD."""

    debt_minted: int
    collateral_usd_value: int


@dataclass(frozen=True)
class LiquidationQuote:
    """Collateral owed to a liquidator for covering a slice of debt."""

    debt_to_cover: int
    collateral_equivalent: int
    bonus: int

    @property
    def total_seized(self) -> int:
        return self.collateral_equivalent + self.bonus


# ---------------------------------------------------------------------------
# Ledger events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CollateralDeposited:
    account: Any
    asset: Any
    amount: int


@dataclass(frozen=True)
class CollateralRedeemed:
    redeemed_from: Any
    redeemed_to: Any
    asset: Any
    amount: int


@dataclass(frozen=True)
class DebtMinted:
    account: Any
    amount: int


@dataclass(frozen=True)
class DebtBurned:
    account: Any
    amount: int
