"""Price feed protocol: one external price source per collateral asset."""
from typing import Protocol

from ..models import PriceRound


class PriceFeed(Protocol):
    """Abstract interface for reading the latest price round."""

    def latest_round_data(self) -> PriceRound: ...
