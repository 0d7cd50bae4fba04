"""Settable in-process price feed."""
from __future__ import annotations

import time

from ..constants import FEED_DECIMALS
from ..models import PriceRound


class StaticPriceFeed:
    """Price feed whose answer is pushed by its owner.

    Each ``update_answer`` opens a new round stamped with the supplied time
    (wall clock by default).
    """

    decimals = FEED_DECIMALS

    def __init__(self, answer: int, updated_at: int | None = None) -> None:
        self._round = PriceRound(0, 0, 0, 0, 0)
        self.update_answer(answer, updated_at)

    def update_answer(self, answer: int, updated_at: int | None = None) -> None:
        stamp = int(time.time()) if updated_at is None else updated_at
        round_id = self._round.round_id + 1
        self._round = PriceRound(
            round_id=round_id,
            answer=answer,
            started_at=stamp,
            updated_at=stamp,
            answered_in_round=round_id,
        )

    def latest_round_data(self) -> PriceRound:
        return self._round
