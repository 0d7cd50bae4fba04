"""Overcollateralized stablecoin engine."""
from .engine import StablecoinEngine
from .errors import (
    AssetFeedLengthMismatch,
    BreaksHealthFactor,
    EngineError,
    HealthFactorIsOk,
    HealthFactorNotImproved,
    InsufficientBalance,
    InsufficientCollateral,
    InsufficientDebt,
    InvalidPrice,
    MintFailed,
    NeedsMoreThanZero,
    NotTransactional,
    OracleError,
    OracleStale,
    ReentrantCall,
    TokenNotAllowed,
    TransferFailed,
    ValidationError,
)
from .models import AccountInfo, LiquidationQuote, PriceRound
from .tokens import InMemoryToken

__all__ = [
    "AccountInfo",
    "AssetFeedLengthMismatch",
    "BreaksHealthFactor",
    "EngineError",
    "HealthFactorIsOk",
    "HealthFactorNotImproved",
    "InMemoryToken",
    "InsufficientBalance",
    "InsufficientCollateral",
    "InsufficientDebt",
    "InvalidPrice",
    "LiquidationQuote",
    "MintFailed",
    "NeedsMoreThanZero",
    "NotTransactional",
    "OracleError",
    "OracleStale",
    "PriceRound",
    "ReentrantCall",
    "StablecoinEngine",
    "TokenNotAllowed",
    "TransferFailed",
    "ValidationError",
]
