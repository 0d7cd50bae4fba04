"""Protocol interfaces for the engine's external collaborators."""
from .price_feed import PriceFeed
from .token import CollateralToken, DebtToken
from .transactional import Transactional

__all__ = ["CollateralToken", "DebtToken", "PriceFeed", "Transactional"]
