"""Configuration loader: reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EngineConfig:
    address: str = "stablecoin-engine"
    debt_token: str = "DSC"


@dataclass(frozen=True)
class AssetConfig:
    symbol: str = ""
    feed: str = ""


@dataclass(frozen=True)
class PythConfig:
    hermes_url: str = "https://hermes.pyth.network/v2/updates/price/latest"
    timeout: int = 30


@dataclass(frozen=True)
class PriceOracleConfig:
    provider: str = "pyth"
    pyth: PythConfig = field(default_factory=PythConfig)


@dataclass(frozen=True)
class AppConfig:
    engine: EngineConfig = field(default_factory=EngineConfig)
    assets: tuple[AssetConfig, ...] = ()
    price_oracle: PriceOracleConfig = field(default_factory=PriceOracleConfig)

    def asset(self, symbol: str) -> AssetConfig:
        for asset in self.assets:
            if asset.symbol == symbol.upper():
                return asset
        raise KeyError(f"Unknown asset '{symbol}'")


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_engine(raw: dict[str, Any]) -> EngineConfig:
    return EngineConfig(
        address=raw.get("address", EngineConfig.address),
        debt_token=raw.get("debt_token", EngineConfig.debt_token),
    )


def _build_assets(raw: list[dict[str, Any]]) -> tuple[AssetConfig, ...]:
    return tuple(
        AssetConfig(
            symbol=str(a.get("symbol", "")).upper(),
            feed=str(a.get("feed", "")),
        )
        for a in raw
    )


def _build_price_oracle(raw: dict[str, Any]) -> PriceOracleConfig:
    pyth_raw = raw.get("pyth") or {}
    return PriceOracleConfig(
        provider=raw.get("provider", "pyth"),
        pyth=PythConfig(
            hermes_url=pyth_raw.get("hermes_url", PythConfig.hermes_url),
            timeout=int(pyth_raw.get("timeout", PythConfig.timeout)),
        ),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate engine configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        engine=_build_engine(raw.get("engine") or {}),
        assets=_build_assets(raw.get("assets") or []),
        price_oracle=_build_price_oracle(raw.get("price_oracle") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.assets:
        raise ValueError("At least one collateral asset must be configured")

    seen: set[str] = set()
    for asset in cfg.assets:
        if not asset.symbol:
            raise ValueError("Collateral asset has no symbol")
        if not asset.feed:
            raise ValueError(f"Asset '{asset.symbol}' has no price feed")
        if asset.symbol in seen:
            raise ValueError(f"Asset '{asset.symbol}' is configured twice")
        seen.add(asset.symbol)

    if cfg.price_oracle.provider != "pyth":
        raise ValueError(
            f"Unsupported price oracle provider '{cfg.price_oracle.provider}'"
        )
