"""Health factor: the solvency score of an account."""
from __future__ import annotations

import logging
from typing import Any

from .constants import (
    FIXED_POINT_SCALE,
    LIQUIDATION_PRECISION,
    LIQUIDATION_THRESHOLD,
    MAX_HEALTH_FACTOR,
    MIN_HEALTH_FACTOR,
)
from .errors import BreaksHealthFactor
from .ledger import CollateralLedger
from .oracles.adapter import PriceOracleAdapter

logger = logging.getLogger(__name__)


def calculate_health_factor(debt_minted: int, collateral_usd_value: int) -> int:
    """Return the 18-decimal health factor for a debt / collateral pair.

    health_factor = (collateral * threshold / precision) * 1e18 / debt

    Zero debt is infinitely healthy and returns ``MAX_HEALTH_FACTOR``.
    """
    if debt_minted == 0:
        return MAX_HEALTH_FACTOR
    adjusted = collateral_usd_value * LIQUIDATION_THRESHOLD // LIQUIDATION_PRECISION
    return adjusted * FIXED_POINT_SCALE // debt_minted


class HealthFactorEngine:
    """Derive health factors from ledger balances and oracle prices."""

    def __init__(self, ledger: CollateralLedger, oracle: PriceOracleAdapter) -> None:
        self._ledger = ledger
        self._oracle = oracle

    def account_information(self, account: Any) -> tuple[int, int]:
        return (
            self._ledger.debt_of(account),
            self._ledger.collateral_usd_value(account, self._oracle),
        )

    def health_factor(self, account: Any) -> int:
        debt_minted = self._ledger.debt_of(account)
        if debt_minted == 0:
            return MAX_HEALTH_FACTOR
        collateral = self._ledger.collateral_usd_value(account, self._oracle)
        return calculate_health_factor(debt_minted, collateral)

    def is_liquidatable(self, account: Any) -> bool:
        return self.health_factor(account) < MIN_HEALTH_FACTOR

    def assert_safe(self, account: Any) -> int:
        """Raise ``BreaksHealthFactor`` if *account* is below the minimum."""
        score = self.health_factor(account)
        if score < MIN_HEALTH_FACTOR:
            logger.warning("Health factor of %s broken: %d", account, score)
            raise BreaksHealthFactor(score)
        return score
