"""Pyth Network price feed backed by the Hermes REST API."""
from __future__ import annotations

import asyncio
import logging
import ssl
from collections.abc import Iterable
from typing import Any

import aiohttp
import certifi

from ..config import PythConfig
from ..constants import FEED_DECIMALS
from ..errors import OracleError
from ..models import PriceRound

logger = logging.getLogger(__name__)


def _normalize_id(feed_id: str) -> str:
    return feed_id.lower().removeprefix("0x")


def scale_price(price_raw: int, expo: int) -> int:
    """Rescale a Pyth ``price * 10**expo`` pair to an 8-decimal integer."""
    shift = expo + FEED_DECIMALS
    if shift >= 0:
        return price_raw * 10**shift
    return price_raw // 10 ** (-shift)


def parse_round(item: dict[str, Any]) -> PriceRound:
    """Build a ``PriceRound`` from one entry of Hermes' ``parsed`` list."""
    price_data = item.get("price", {})
    price_raw = int(price_data.get("price", 0))
    expo = int(price_data.get("expo", 0))
    publish_time = int(price_data.get("publish_time", 0))

    return PriceRound(
        round_id=publish_time,
        answer=scale_price(price_raw, expo),
        started_at=publish_time,
        updated_at=publish_time,
        answered_in_round=publish_time,
    )


async def fetch_rounds(
    feed_ids: Iterable[str], config: PythConfig
) -> dict[str, PriceRound]:
    """Fetch the latest rounds for several feeds in a single request.

    Returns a mapping keyed by normalized feed id. Feeds missing from the
    response are absent from the result; HTTP and network errors are logged
    and yield an empty mapping.
    """
    rounds: dict[str, PriceRound] = {}

    ids = sorted({_normalize_id(fid) for fid in feed_ids})
    if not ids:
        return rounds

    query_params = "&".join([f"ids[]={fid}" for fid in ids])
    url = f"{config.hermes_url}?{query_params}"

    ssl_context = ssl.create_default_context(cafile=certifi.where())
    connector = aiohttp.TCPConnector(ssl=ssl_context)

    try:
        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.get(
                url, timeout=aiohttp.ClientTimeout(total=config.timeout)
            ) as response:
                if response.status != 200:
                    logger.error(
                        "Error fetching prices from Pyth: HTTP %s", response.status
                    )
                    return rounds

                data = await response.json()
                for item in data.get("parsed", []):
                    feed_id = _normalize_id(str(item.get("id", "")))
                    if feed_id in ids:
                        rounds[feed_id] = parse_round(item)

    except (aiohttp.ClientError, asyncio.TimeoutError, OSError, ValueError) as e:
        logger.error("Error fetching prices from Pyth: %s", e)

    logger.info("Fetched %d of %d Pyth price rounds", len(rounds), len(ids))
    return rounds


class PythPriceFeed:
    """Price feed for one Pyth feed id.

    ``refresh`` pulls the latest update over the network; reads through
    ``latest_round_data`` return the last fetched round. Staleness is not
    checked here, the engine's oracle adapter does that.
    """

    decimals = FEED_DECIMALS

    def __init__(self, feed_id: str, config: PythConfig) -> None:
        self.feed_id = _normalize_id(feed_id)
        self._config = config
        self._round: PriceRound | None = None

    def update(self, round_data: PriceRound) -> None:
        if self._round is not None and round_data.updated_at < self._round.updated_at:
            logger.debug("Ignoring out-of-order Pyth update for %s", self.feed_id)
            return
        self._round = round_data

    async def refresh(self) -> bool:
        """Fetch the latest round; returns False if nothing was received."""
        rounds = await fetch_rounds([self.feed_id], self._config)
        round_data = rounds.get(self.feed_id)
        if round_data is None:
            logger.warning("No Pyth price received for feed %s", self.feed_id)
            return False
        self.update(round_data)
        return True

    def latest_round_data(self) -> PriceRound:
        if self._round is None:
            raise OracleError(f"Pyth feed {self.feed_id} has not been refreshed")
        return self._round


async def refresh_all(feeds: Iterable[PythPriceFeed], config: PythConfig) -> int:
    """Refresh several feeds with one batched request; returns the hit count."""
    feeds = list(feeds)
    rounds = await fetch_rounds([f.feed_id for f in feeds], config)

    updated = 0
    for feed in feeds:
        round_data = rounds.get(feed.feed_id)
        if round_data is None:
            logger.warning("No Pyth price received for feed %s", feed.feed_id)
            continue
        feed.update(round_data)
        updated += 1
    return updated
