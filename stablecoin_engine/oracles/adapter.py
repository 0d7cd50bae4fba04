"""Price oracle adapter: staleness guard and USD conversions."""
from __future__ import annotations

import logging
import time
from typing import Any, Callable

from ..constants import FIXED_POINT_SCALE, PRICE_SCALE, STALENESS_TIMEOUT
from ..errors import InvalidPrice, NeedsMoreThanZero, OracleStale
from ..models import PriceRound
from ..registry import AssetRegistry

logger = logging.getLogger(__name__)


def _wall_clock() -> int:
    return int(time.time())


class PriceOracleAdapter:
    """Validate feed freshness and convert between asset amounts and USD.

    Nothing is cached: every conversion re-reads the feed and re-checks the
    round age against ``STALENESS_TIMEOUT``. A stale or non-positive price
    aborts the caller's operation; there is no fallback price.
    """

    timeout = STALENESS_TIMEOUT

    def __init__(
        self, registry: AssetRegistry, clock: Callable[[], int] | None = None
    ) -> None:
        self._registry = registry
        self._clock = clock or _wall_clock

    def now(self) -> int:
        return int(self._clock())

    def latest_round(self, asset: Any) -> PriceRound:
        """Return the feed's latest round after checking its age."""
        round_data = self._registry.feed(asset).latest_round_data()

        if round_data.updated_at == 0:
            raise OracleStale(asset, self.now())
        age = self.now() - round_data.updated_at
        if age < 0 or age > self.timeout:
            logger.warning(
                "Rejecting stale price for %s: age %ds (timeout %ds)",
                getattr(asset, "symbol", asset), age, self.timeout,
            )
            raise OracleStale(asset, age)
        if round_data.answer <= 0:
            raise InvalidPrice(asset, round_data.answer)
        return round_data

    def latest_price(self, asset: Any) -> int:
        """Latest 8-decimal price of one unit of *asset*."""
        return self.latest_round(asset).answer

    def get_usd_value(self, asset: Any, amount: int) -> int:
        if amount < 0:
            raise NeedsMoreThanZero(amount)
        price = self.latest_price(asset)
        return price * PRICE_SCALE * amount // FIXED_POINT_SCALE

    def get_asset_amount_from_usd(self, asset: Any, usd_amount: int) -> int:
        if usd_amount < 0:
            raise NeedsMoreThanZero(usd_amount)
        price = self.latest_price(asset)
        return usd_amount * FIXED_POINT_SCALE // (price * PRICE_SCALE)
