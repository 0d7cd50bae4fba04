"""Command-line interface for live collateral price quotes."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from decimal import Decimal, InvalidOperation

from .config import AppConfig, load_config
from .constants import FIXED_POINT_SCALE
from .errors import EngineError
from .logging_setup import configure_logging
from .oracles import PriceOracleAdapter, PythPriceFeed, refresh_all
from .registry import AssetRegistry

logger = logging.getLogger(__name__)


def parse_units(value: str) -> int:
    """Parse a decimal string such as ``"1.5"`` into an 18-decimal integer."""
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}") from None
    if not amount.is_finite():
        raise argparse.ArgumentTypeError(f"amount must be finite: {value!r}")
    if amount <= 0:
        raise argparse.ArgumentTypeError(f"amount must be positive: {value!r}")
    return int(amount * FIXED_POINT_SCALE)


def format_units(value: int, places: int = 6) -> str:
    """Render an 18-decimal integer with *places* decimals."""
    return f"{Decimal(value) / FIXED_POINT_SCALE:,.{places}f}"


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="stablecoin-engine",
        description="Collateral price quotes for the stablecoin engine",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("assets", help="List configured collateral assets")

    value_parser = sub.add_parser("value", help="USD value of an asset amount")
    value_parser.add_argument("symbol", type=str.upper)
    value_parser.add_argument("amount", type=parse_units)

    convert_parser = sub.add_parser("convert", help="Asset amount worth a USD amount")
    convert_parser.add_argument("symbol", type=str.upper)
    convert_parser.add_argument("usd", type=parse_units)

    return parser


def build_oracle(config: AppConfig) -> tuple[PriceOracleAdapter, list[PythPriceFeed]]:
    """Build an oracle adapter over Pyth feeds keyed by asset symbol."""
    pyth_cfg = config.price_oracle.pyth
    feeds = [PythPriceFeed(asset.feed, pyth_cfg) for asset in config.assets]
    registry = AssetRegistry([asset.symbol for asset in config.assets], feeds)
    return PriceOracleAdapter(registry), feeds


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command; returns the exit status."""
    configure_logging(args.log_level)
    config = load_config(args.config)

    if args.command == "assets":
        for asset in config.assets:
            print(f"{asset.symbol}\t{asset.feed}")
        return 0

    oracle, feeds = build_oracle(config)
    await refresh_all(feeds, config.price_oracle.pyth)

    try:
        if args.command == "value":
            usd = oracle.get_usd_value(args.symbol, args.amount)
            print(f"{format_units(args.amount)} {args.symbol} = ${format_units(usd, 2)}")
        elif args.command == "convert":
            amount = oracle.get_asset_amount_from_usd(args.symbol, args.usd)
            print(f"${format_units(args.usd, 2)} = {format_units(amount)} {args.symbol}")
    except EngineError as e:
        logger.error("%s", e)
        return 1
    return 0


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))
