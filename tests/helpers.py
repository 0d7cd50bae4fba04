"""Test constants and builders shared by fixtures and property tests."""
from __future__ import annotations

from stablecoin_engine import InMemoryToken, StablecoinEngine
from stablecoin_engine.oracles import StaticPriceFeed

ETHER = 10**18

ENGINE = "engine"
USER = "user"
LIQUIDATOR = "liquidator"

NOW = 1_700_000_000

ETH_USD_PRICE = 2000 * 10**8
BTC_USD_PRICE = 1000 * 10**8

STARTING_BALANCE = 100 * ETHER
COLLATERAL_AMOUNT = 10 * ETHER
AMOUNT_TO_MINT = 100 * ETHER
COLLATERAL_TO_COVER = 20 * ETHER


class FakeClock:
    """Settable clock for staleness checks."""

    def __init__(self, now: int = NOW) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


def fund(token: InMemoryToken, account: str, amount: int, spender: str = ENGINE) -> None:
    """Mint *amount* of *token* to *account* and approve *spender* for it."""
    token.mint(token.owner, account, amount)
    token.approve(account, spender, amount)


def build_engine(clock: FakeClock | None = None) -> tuple[
    StablecoinEngine, InMemoryToken, InMemoryToken, InMemoryToken,
    StaticPriceFeed, StaticPriceFeed,
]:
    """Engine over WETH/WBTC with fresh $2000 / $1000 feeds."""
    clock = clock or FakeClock()
    weth = InMemoryToken("WETH")
    wbtc = InMemoryToken("WBTC")
    dsc = InMemoryToken("DSC", owner=ENGINE)
    eth_usd = StaticPriceFeed(ETH_USD_PRICE, updated_at=clock.now)
    btc_usd = StaticPriceFeed(BTC_USD_PRICE, updated_at=clock.now)
    engine = StablecoinEngine(
        [weth, wbtc], [eth_usd, btc_usd], dsc, address=ENGINE, clock=clock
    )
    return engine, weth, wbtc, dsc, eth_usd, btc_usd
