"""Asset registry: the fixed table of collateral assets and their feeds."""
from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from types import MappingProxyType
from typing import Any, Mapping

from .errors import AssetFeedLengthMismatch, TokenNotAllowed, ValidationError
from .interfaces.price_feed import PriceFeed

logger = logging.getLogger(__name__)


class AssetRegistry:
    """Immutable, ordered mapping of collateral asset to price feed.

    Iteration follows registration order.
    """

    __slots__ = ("_assets", "_feeds")

    def __init__(self, assets: Sequence[Any], price_feeds: Sequence[PriceFeed]) -> None:
        assets = tuple(assets)
        price_feeds = tuple(price_feeds)
        if len(assets) != len(price_feeds):
            raise AssetFeedLengthMismatch(len(assets), len(price_feeds))

        feeds: dict[Any, PriceFeed] = {}
        for asset, feed in zip(assets, price_feeds):
            if asset in feeds:
                raise ValidationError(
                    f"Duplicate collateral asset: {getattr(asset, 'symbol', asset)}"
                )
            feeds[asset] = feed

        object.__setattr__(self, "_assets", assets)
        object.__setattr__(self, "_feeds", MappingProxyType(feeds))
        logger.debug("Registered %d collateral assets", len(assets))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("AssetRegistry is immutable")

    @property
    def allowed_assets(self) -> tuple[Any, ...]:
        return self._assets

    @property
    def price_feed_of(self) -> Mapping[Any, PriceFeed]:
        return self._feeds

    def __contains__(self, asset: object) -> bool:
        try:
            return asset in self._feeds
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Any]:
        return iter(self._assets)

    def __len__(self) -> int:
        return len(self._assets)

    def require(self, asset: Any) -> None:
        """Raise ``TokenNotAllowed`` unless *asset* is registered."""
        if asset not in self:
            raise TokenNotAllowed(asset)

    def feed(self, asset: Any) -> PriceFeed:
        self.require(asset)
        return self._feeds[asset]
