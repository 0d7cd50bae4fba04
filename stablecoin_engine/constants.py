"""Fixed-point scales and protocol parameters.

All amounts are integers in 18-decimal fixed point. Multiply before dividing
so intermediate results keep full precision.
"""
from __future__ import annotations

# Price feeds report 8-decimal prices; PRICE_SCALE lifts them to 18 decimals.
FEED_DECIMALS = 8
PRICE_SCALE = 10**10
FIXED_POINT_SCALE = 10**18

# Collateral counts at 50% of its USD value (200% overcollateralized).
LIQUIDATION_THRESHOLD = 50
LIQUIDATION_BONUS = 10
LIQUIDATION_PRECISION = 100

MIN_HEALTH_FACTOR = 10**18
MAX_HEALTH_FACTOR = 2**256 - 1

STALENESS_TIMEOUT = 3 * 60 * 60
