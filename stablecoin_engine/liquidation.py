"""Liquidation: repay an unsafe account's debt for its collateral plus a bonus."""
from __future__ import annotations

import logging
from typing import Any, Callable

from .constants import LIQUIDATION_BONUS, LIQUIDATION_PRECISION, MIN_HEALTH_FACTOR
from .errors import HealthFactorIsOk, HealthFactorNotImproved, NeedsMoreThanZero
from .health import HealthFactorEngine
from .models import LiquidationQuote
from .oracles.adapter import PriceOracleAdapter
from .registry import AssetRegistry

logger = logging.getLogger(__name__)

# seize(asset, amount, from_account, to_account)
SeizeCollateral = Callable[[Any, int, Any, Any], None]
# repay(amount, on_behalf_of, debt_from)
RepayDebt = Callable[[int, Any, Any], None]


class LiquidationProtocol:
    """Single-step liquidation of an account below the minimum health factor.

    Collateral movement and debt repayment are delegated to the engine's
    settlement callables so the ledger and the token collaborators move in
    the same order as in ordinary redemptions and burns.
    """

    def __init__(
        self,
        registry: AssetRegistry,
        oracle: PriceOracleAdapter,
        health: HealthFactorEngine,
        seize: SeizeCollateral,
        repay: RepayDebt,
    ) -> None:
        self._registry = registry
        self._oracle = oracle
        self._health = health
        self._seize = seize
        self._repay = repay

    def quote(self, asset: Any, debt_to_cover: int) -> LiquidationQuote:
        """Collateral of *asset* owed for repaying *debt_to_cover* USD of debt."""
        collateral_equivalent = self._oracle.get_asset_amount_from_usd(
            asset, debt_to_cover
        )
        bonus = collateral_equivalent * LIQUIDATION_BONUS // LIQUIDATION_PRECISION
        return LiquidationQuote(
            debt_to_cover=debt_to_cover,
            collateral_equivalent=collateral_equivalent,
            bonus=bonus,
        )

    def execute(
        self, liquidator: Any, asset: Any, target: Any, debt_to_cover: int
    ) -> LiquidationQuote:
        if debt_to_cover <= 0:
            raise NeedsMoreThanZero(debt_to_cover)
        self._registry.require(asset)

        starting = self._health.health_factor(target)
        if starting >= MIN_HEALTH_FACTOR:
            raise HealthFactorIsOk(starting)

        quote = self.quote(asset, debt_to_cover)
        # No clamping: seizing more than the target holds fails outright.
        self._seize(asset, quote.total_seized, target, liquidator)
        self._repay(debt_to_cover, target, liquidator)

        ending = self._health.health_factor(target)
        if ending <= starting:
            raise HealthFactorNotImproved(starting, ending)

        self._health.assert_safe(liquidator)

        logger.info(
            "Liquidated %s: %s covered %d debt for %d %s (bonus %d), "
            "health factor %d -> %d",
            target, liquidator, debt_to_cover, quote.total_seized,
            getattr(asset, "symbol", asset), quote.bonus, starting, ending,
        )
        return quote
