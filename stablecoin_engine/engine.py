"""Stablecoin engine: the public position surface.

Accounts deposit registered collateral and mint the debt token against it,
kept at or above ``MIN_HEALTH_FACTOR`` after every operation. Unsafe
accounts can be liquidated by anyone holding enough debt token.

Each mutating operation runs under the instance guard and in a fixed
order: validate, update the ledger, call the token collaborators, then
check solvency. Any failure rolls the ledger and every token
collaborator back to where they were before the call.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any, Callable

from . import constants
from .errors import (
    EngineError,
    MintFailed,
    NeedsMoreThanZero,
    NotTransactional,
    TransferFailed,
)
from .guard import NonReentrantGuard, atomic
from .health import HealthFactorEngine, calculate_health_factor
from .interfaces.price_feed import PriceFeed
from .interfaces.token import CollateralToken, DebtToken
from .interfaces.transactional import Transactional
from .ledger import CollateralLedger
from .liquidation import LiquidationProtocol
from .models import AccountInfo, LiquidationQuote
from .oracles.adapter import PriceOracleAdapter
from .registry import AssetRegistry

logger = logging.getLogger(__name__)


def _require_positive(*amounts: int) -> None:
    for amount in amounts:
        if amount <= 0:
            raise NeedsMoreThanZero(amount)


def _label(asset: Any) -> str:
    return str(getattr(asset, "symbol", asset))


def _settle(
    call: Callable[[], bool], failure: type[TransferFailed], message: str
) -> None:
    """Run one token call; a refusal or a raised error becomes *failure*."""
    try:
        ok = call()
    except EngineError:
        raise
    except Exception as e:
        raise failure(f"{message}: {e}") from e
    if not ok:
        raise failure(message)


class StablecoinEngine:
    """Collateral/debt bookkeeping, solvency checks and liquidation."""

    PRICE_SCALE = constants.PRICE_SCALE
    FIXED_POINT_SCALE = constants.FIXED_POINT_SCALE
    LIQUIDATION_THRESHOLD = constants.LIQUIDATION_THRESHOLD
    LIQUIDATION_BONUS = constants.LIQUIDATION_BONUS
    LIQUIDATION_PRECISION = constants.LIQUIDATION_PRECISION
    MIN_HEALTH_FACTOR = constants.MIN_HEALTH_FACTOR
    STALENESS_TIMEOUT = constants.STALENESS_TIMEOUT

    def __init__(
        self,
        assets: Sequence[CollateralToken],
        price_feeds: Sequence[PriceFeed],
        debt_token: DebtToken,
        *,
        address: Any = "stablecoin-engine",
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.registry = AssetRegistry(assets, price_feeds)
        for token in (*self.registry, debt_token):
            if not isinstance(token, Transactional):
                raise NotTransactional(token)
        self.address = address
        self.debt_token = debt_token

        self.oracle = PriceOracleAdapter(self.registry, clock)
        self.ledger = CollateralLedger(self.registry)
        self.health = HealthFactorEngine(self.ledger, self.oracle)
        self.liquidations = LiquidationProtocol(
            self.registry,
            self.oracle,
            self.health,
            seize=self._redeem_collateral,
            repay=self._burn_debt,
        )
        self._guard = NonReentrantGuard()

        logger.info(
            "Engine %s ready: %d collateral assets (%s), debt token %s",
            address,
            len(self.registry),
            ", ".join(_label(a) for a in self.registry),
            _label(debt_token),
        )

    @contextmanager
    def _operation(self, name: str) -> Iterator[None]:
        with self._guard.enter(name):
            try:
                with atomic(self.ledger, self.debt_token, *self.registry):
                    yield
            except EngineError as e:
                logger.warning("%s failed: %s", name, e)
                raise

    # ------------------------------------------------------------------
    # Settlement steps (run inside an operation)
    # ------------------------------------------------------------------

    def _deposit_collateral(self, sender: Any, asset: Any, amount: int) -> None:
        self.ledger.deposit(sender, asset, amount)
        _settle(
            lambda: asset.transfer_from(self.address, sender, self.address, amount),
            TransferFailed,
            f"Could not pull {amount} {_label(asset)} from {sender}",
        )

    def _mint_debt(self, sender: Any, amount: int) -> None:
        self.ledger.mint_debt(sender, amount)
        self.health.assert_safe(sender)
        _settle(
            lambda: self.debt_token.mint(self.address, sender, amount),
            MintFailed,
            f"Debt token refused to mint {amount} to {sender}",
        )

    def _redeem_collateral(
        self, asset: Any, amount: int, from_account: Any, to_account: Any
    ) -> None:
        self.ledger.withdraw(from_account, asset, amount, to=to_account)
        _settle(
            lambda: asset.transfer(self.address, to_account, amount),
            TransferFailed,
            f"Could not send {amount} {_label(asset)} to {to_account}",
        )

    def _burn_debt(self, amount: int, on_behalf_of: Any, debt_from: Any) -> None:
        self.ledger.burn_debt(on_behalf_of, amount)
        _settle(
            lambda: self.debt_token.transfer_from(
                self.address, debt_from, self.address, amount
            ),
            TransferFailed,
            f"Could not pull {amount} debt token from {debt_from}",
        )
        _settle(
            lambda: self.debt_token.burn(self.address, amount),
            TransferFailed,
            f"Debt token refused to burn {amount}",
        )

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def deposit_collateral(self, sender: Any, asset: Any, amount: int) -> None:
        _require_positive(amount)
        self.registry.require(asset)
        with self._operation("deposit_collateral"):
            self._deposit_collateral(sender, asset, amount)

    def mint_debt(self, sender: Any, amount: int) -> None:
        _require_positive(amount)
        with self._operation("mint_debt"):
            self._mint_debt(sender, amount)
        logger.info("Minted %d debt token to %s", amount, sender)

    def deposit_collateral_and_mint(
        self, sender: Any, asset: Any, collateral_amount: int, debt_amount: int
    ) -> None:
        _require_positive(collateral_amount, debt_amount)
        self.registry.require(asset)
        with self._operation("deposit_collateral_and_mint"):
            self._deposit_collateral(sender, asset, collateral_amount)
            self._mint_debt(sender, debt_amount)
        logger.info("Minted %d debt token to %s", debt_amount, sender)

    def redeem_collateral(self, sender: Any, asset: Any, amount: int) -> None:
        _require_positive(amount)
        self.registry.require(asset)
        with self._operation("redeem_collateral"):
            self._redeem_collateral(asset, amount, sender, sender)
            self.health.assert_safe(sender)

    def redeem_collateral_for_debt(
        self, sender: Any, asset: Any, collateral_amount: int, debt_amount: int
    ) -> None:
        _require_positive(collateral_amount, debt_amount)
        self.registry.require(asset)
        with self._operation("redeem_collateral_for_debt"):
            self._burn_debt(debt_amount, sender, sender)
            self._redeem_collateral(asset, collateral_amount, sender, sender)
            self.health.assert_safe(sender)

    def burn_debt(self, sender: Any, amount: int) -> None:
        _require_positive(amount)
        with self._operation("burn_debt"):
            self._burn_debt(amount, sender, sender)
            self.health.assert_safe(sender)
        logger.info("Burned %d debt token for %s", amount, sender)

    def liquidate(
        self, liquidator: Any, asset: Any, target: Any, debt_to_cover: int
    ) -> LiquidationQuote:
        """Repay *debt_to_cover* of *target*'s debt for its *asset* collateral.

        The liquidator must hold the debt tokens and have approved the engine
        to pull them. Receives the collateral equivalent plus a 10% bonus.
        """
        _require_positive(debt_to_cover)
        self.registry.require(asset)
        with self._operation("liquidate"):
            return self.liquidations.execute(liquidator, asset, target, debt_to_cover)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def get_account_info(self, account: Any) -> AccountInfo:
        debt_minted, collateral_usd = self.health.account_information(account)
        return AccountInfo(debt_minted=debt_minted, collateral_usd_value=collateral_usd)

    def get_account_collateral_value(self, account: Any) -> int:
        return self.ledger.collateral_usd_value(account, self.oracle)

    def get_health_factor(self, account: Any) -> int:
        return self.health.health_factor(account)

    @staticmethod
    def calculate_health_factor(debt_minted: int, collateral_usd_value: int) -> int:
        return calculate_health_factor(debt_minted, collateral_usd_value)

    def get_usd_value(self, asset: Any, amount: int) -> int:
        return self.oracle.get_usd_value(asset, amount)

    def get_asset_amount_from_usd(self, asset: Any, usd_amount: int) -> int:
        return self.oracle.get_asset_amount_from_usd(asset, usd_amount)

    def get_collateral_balance(self, account: Any, asset: Any) -> int:
        return self.ledger.collateral_of(account, asset)

    def list_allowed_assets(self) -> tuple[Any, ...]:
        return self.registry.allowed_assets

    def get_price_feed(self, asset: Any) -> PriceFeed:
        return self.registry.feed(asset)
