"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from stablecoin_engine import InMemoryToken, StablecoinEngine
from stablecoin_engine.config import PythConfig
from stablecoin_engine.oracles import StaticPriceFeed
from tests.helpers import (
    AMOUNT_TO_MINT,
    COLLATERAL_AMOUNT,
    ENGINE,
    STARTING_BALANCE,
    USER,
    FakeClock,
    build_engine,
    fund,
)


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def deployment(clock: FakeClock) -> tuple:
    return build_engine(clock)


@pytest.fixture()
def engine(deployment: tuple) -> StablecoinEngine:
    return deployment[0]


@pytest.fixture()
def weth(deployment: tuple) -> InMemoryToken:
    return deployment[1]


@pytest.fixture()
def wbtc(deployment: tuple) -> InMemoryToken:
    return deployment[2]


@pytest.fixture()
def dsc(deployment: tuple) -> InMemoryToken:
    return deployment[3]


@pytest.fixture()
def eth_usd(deployment: tuple) -> StaticPriceFeed:
    return deployment[4]


@pytest.fixture()
def btc_usd(deployment: tuple) -> StaticPriceFeed:
    return deployment[5]


@pytest.fixture()
def funded_user(weth: InMemoryToken, wbtc: InMemoryToken) -> str:
    fund(weth, USER, STARTING_BALANCE)
    fund(wbtc, USER, STARTING_BALANCE)
    return USER


@pytest.fixture()
def deposited(engine: StablecoinEngine, weth: InMemoryToken, funded_user: str) -> StablecoinEngine:
    engine.deposit_collateral(funded_user, weth, COLLATERAL_AMOUNT)
    return engine


@pytest.fixture()
def minted(
    engine: StablecoinEngine, weth: InMemoryToken, dsc: InMemoryToken, funded_user: str
) -> StablecoinEngine:
    engine.deposit_collateral_and_mint(
        funded_user, weth, COLLATERAL_AMOUNT, AMOUNT_TO_MINT
    )
    dsc.approve(funded_user, ENGINE, AMOUNT_TO_MINT)
    return engine


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_pyth_config() -> PythConfig:
    return PythConfig(
        hermes_url="https://hermes.example.com/v2/updates/price/latest",
        timeout=5,
    )


SAMPLE_YAML = textwrap.dedent("""\
    engine:
      address: engine-1
      debt_token: DSC
    assets:
      - symbol: weth
        feed: "0xaaa111"
      - symbol: WBTC
        feed: "bbb222"
    price_oracle:
      provider: pyth
      pyth:
        hermes_url: "https://hermes.example.com"
        timeout: 10
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
