"""Price oracle adapter and price feed implementations."""
from .adapter import PriceOracleAdapter
from .pyth import PythPriceFeed, fetch_rounds, refresh_all
from .static import StaticPriceFeed

__all__ = [
    "PriceOracleAdapter",
    "PythPriceFeed",
    "StaticPriceFeed",
    "fetch_rounds",
    "refresh_all",
]
