"""Unit tests for the collateral ledger: pure bookkeeping."""
from __future__ import annotations

import pytest

from stablecoin_engine.errors import (
    InsufficientCollateral,
    InsufficientDebt,
    NeedsMoreThanZero,
    OracleStale,
    TokenNotAllowed,
)
from stablecoin_engine.ledger import CollateralLedger
from stablecoin_engine.models import (
    CollateralDeposited,
    CollateralRedeemed,
    DebtBurned,
    DebtMinted,
)
from stablecoin_engine.oracles import PriceOracleAdapter, StaticPriceFeed
from stablecoin_engine.registry import AssetRegistry
from tests.helpers import BTC_USD_PRICE, ETH_USD_PRICE, ETHER, NOW, FakeClock


@pytest.fixture()
def registry() -> AssetRegistry:
    return AssetRegistry(
        ["WETH", "WBTC"],
        [
            StaticPriceFeed(ETH_USD_PRICE, updated_at=NOW),
            StaticPriceFeed(BTC_USD_PRICE, updated_at=NOW),
        ],
    )


@pytest.fixture()
def ledger(registry: AssetRegistry) -> CollateralLedger:
    return CollateralLedger(registry)


class TestCollateral:
    def test_deposit_and_read(self, ledger: CollateralLedger) -> None:
        ledger.deposit("alice", "WETH", 3)
        ledger.deposit("alice", "WETH", 4)
        assert ledger.collateral_of("alice", "WETH") == 7
        assert ledger.collateral_of("alice", "WBTC") == 0
        assert ledger.collateral_of("bob", "WETH") == 0

    def test_deposit_zero_rejected(self, ledger: CollateralLedger) -> None:
        with pytest.raises(NeedsMoreThanZero):
            ledger.deposit("alice", "WETH", 0)

    def test_deposit_unregistered_rejected(self, ledger: CollateralLedger) -> None:
        with pytest.raises(TokenNotAllowed):
            ledger.deposit("alice", "DOGE", 1)
        assert ledger.events == []

    def test_withdraw(self, ledger: CollateralLedger) -> None:
        ledger.deposit("alice", "WETH", 10)
        ledger.withdraw("alice", "WETH", 4, to="bob")
        assert ledger.collateral_of("alice", "WETH") == 6
        assert ledger.events[-1] == CollateralRedeemed("alice", "bob", "WETH", 4)

    def test_withdraw_more_than_balance_fails(self, ledger: CollateralLedger) -> None:
        ledger.deposit("alice", "WETH", 10)
        with pytest.raises(InsufficientCollateral) as exc_info:
            ledger.withdraw("alice", "WETH", 11)
        assert exc_info.value.available == 10
        assert ledger.collateral_of("alice", "WETH") == 10

    def test_balances_in_registration_order(self, ledger: CollateralLedger) -> None:
        ledger.deposit("alice", "WBTC", 2)
        assert list(ledger.balances_of("alice").items()) == [("WETH", 0), ("WBTC", 2)]


class TestDebt:
    def test_mint_and_burn(self, ledger: CollateralLedger) -> None:
        ledger.mint_debt("alice", 100)
        ledger.burn_debt("alice", 40)
        assert ledger.debt_of("alice") == 60
        assert ledger.events == [DebtMinted("alice", 100), DebtBurned("alice", 40)]

    def test_burn_more_than_minted_fails(self, ledger: CollateralLedger) -> None:
        ledger.mint_debt("alice", 5)
        with pytest.raises(InsufficientDebt):
            ledger.burn_debt("alice", 6)
        assert ledger.debt_of("alice") == 5

    def test_zero_amounts_rejected(self, ledger: CollateralLedger) -> None:
        with pytest.raises(NeedsMoreThanZero):
            ledger.mint_debt("alice", 0)
        with pytest.raises(NeedsMoreThanZero):
            ledger.burn_debt("alice", -1)


class TestValuation:
    def test_sums_across_assets(self, ledger: CollateralLedger, registry: AssetRegistry) -> None:
        oracle = PriceOracleAdapter(registry, FakeClock())
        ledger.deposit("alice", "WETH", ETHER)
        ledger.deposit("alice", "WBTC", 2 * ETHER)
        assert ledger.collateral_usd_value("alice", oracle) == 4000 * ETHER

    def test_zero_balances_skip_price_reads(
        self, ledger: CollateralLedger, registry: AssetRegistry
    ) -> None:
        registry.feed("WBTC").update_answer(BTC_USD_PRICE, updated_at=1)
        oracle = PriceOracleAdapter(registry, FakeClock())
        ledger.deposit("alice", "WETH", ETHER)
        assert ledger.collateral_usd_value("alice", oracle) == 2000 * ETHER

        ledger.deposit("alice", "WBTC", ETHER)
        with pytest.raises(OracleStale):
            ledger.collateral_usd_value("alice", oracle)


class TestSnapshot:
    def test_restore_discards_changes(self, ledger: CollateralLedger) -> None:
        ledger.deposit("alice", "WETH", 10)
        state = ledger.snapshot()

        ledger.deposit("alice", "WETH", 5)
        ledger.deposit("bob", "WBTC", 1)
        ledger.mint_debt("alice", 3)
        ledger.restore(state)

        assert ledger.collateral_of("alice", "WETH") == 10
        assert ledger.collateral_of("bob", "WBTC") == 0
        assert ledger.debt_of("alice") == 0
        assert ledger.events == [CollateralDeposited("alice", "WETH", 10)]
