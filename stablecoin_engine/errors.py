"""Exception taxonomy for the engine.

Every failure aborts the whole operation; nothing here is retried.
"""
from __future__ import annotations

from typing import Any


def _label(asset: Any) -> str:
    return str(getattr(asset, "symbol", asset))


class EngineError(Exception):
    """Base class for all engine failures."""


class ValidationError(EngineError, ValueError):
    """Invalid input, checked before any state change."""


class NeedsMoreThanZero(ValidationError):
    def __init__(self, amount: int) -> None:
        super().__init__(f"Amount must be more than zero, got {amount}")
        self.amount = amount


class TokenNotAllowed(ValidationError):
    def __init__(self, asset: Any) -> None:
        super().__init__(f"Token not allowed as collateral: {_label(asset)}")
        self.asset = asset


class AssetFeedLengthMismatch(ValidationError):
    def __init__(self, assets: int, feeds: int) -> None:
        super().__init__(
            f"Asset and price feed sequences must have the same length "
            f"({assets} assets, {feeds} feeds)"
        )
        self.assets = assets
        self.feeds = feeds


class NotTransactional(ValidationError):
    """A token collaborator cannot be snapshotted and rolled back."""

    def __init__(self, token: Any) -> None:
        super().__init__(
            f"Token {_label(token)} must implement snapshot/restore"
        )
        self.token = token


class TransferFailed(EngineError):
    """A token collaborator reported a failed transfer, mint or burn."""


class MintFailed(TransferFailed):
    """The debt token refused to mint."""


class InsufficientBalance(EngineError):
    """A withdrawal or burn exceeds the recorded balance."""

    def __init__(self, account: Any, requested: int, available: int) -> None:
        super().__init__(
            f"{type(self).__name__}: {account} requested {requested}, "
            f"has {available}"
        )
        self.account = account
        self.requested = requested
        self.available = available


class InsufficientCollateral(InsufficientBalance):
    pass


class InsufficientDebt(InsufficientBalance):
    pass


class BreaksHealthFactor(EngineError):
    def __init__(self, score: int) -> None:
        super().__init__(f"Health factor broken: {score}")
        self.score = score


class HealthFactorIsOk(EngineError):
    def __init__(self, score: int) -> None:
        super().__init__(f"Health factor is ok, cannot liquidate: {score}")
        self.score = score


class HealthFactorNotImproved(EngineError):
    def __init__(self, before: int, after: int) -> None:
        super().__init__(f"Health factor not improved: {before} -> {after}")
        self.before = before
        self.after = after


class OracleError(EngineError):
    """The price source cannot be trusted for this read."""


class OracleStale(OracleError):
    def __init__(self, asset: Any, age: int) -> None:
        super().__init__(f"Stale price for {_label(asset)}: last update {age}s ago")
        self.asset = asset
        self.age = age


class InvalidPrice(OracleError):
    def __init__(self, asset: Any, answer: int) -> None:
        super().__init__(f"Invalid price for {_label(asset)}: {answer}")
        self.asset = asset
        self.answer = answer


class ReentrantCall(EngineError, RuntimeError):
    """A guarded operation was entered while another one was in flight."""
