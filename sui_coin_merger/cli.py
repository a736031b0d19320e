"""Command-line interface for the Sui coin merger."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .config import load_config
from .keys import load_keypair_from_env
from .logging_setup import configure_logging
from .services import MergeRunner

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="sui-coin-merger",
        description="Merge fragmented Sui coin objects into fewer, larger coins",
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

    merge_parser = sub.add_parser("merge", help="Merge coins of every owned token type")
    merge_parser.add_argument(
        "--coin-type",
        dest="coin_types",
        action="append",
        default=None,
        help="Only merge this coin type (repeatable)",
    )
    merge_parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Coins merged per transaction (overrides config)",
    )

    sub.add_parser("balances", help="List owned coin types and object counts")
    sub.add_parser("address", help="Show the address derived from the signing key")

    return parser


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command and return the exit status."""
    config = load_config(args.config)
    keypair = load_keypair_from_env(config.key_env_var)

    if args.command == "address":
        logger.info("Address: %s", keypair.address)
        return 0

    runner = MergeRunner(config, keypair)

    if args.command == "balances":
        balances = await runner.list_balances()
        if not balances:
            logger.info("No owned tokens found for address %s", keypair.address)
        for balance in balances:
            logger.info(
                "%s: %d objects, balance %d",
                balance.coin_type,
                balance.coin_object_count,
                balance.total_balance,
            )
        return 0

    if args.command == "merge":
        report = await runner.run(args.coin_types, args.batch_size)
        for coin_type, error in report.failures:
            logger.error("Merge failed for %s: %s", coin_type, error)
        return 0 if report.ok else 1

    build_parser().print_help()
    return 1


def main(argv: list[str] | None = None) -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.log_level)
    try:
        exit_code = asyncio.run(_run(args))
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        exit_code = 130
    except Exception as e:
        logger.error("Coin merge run failed: %s", e)
        exit_code = 1

    sys.exit(exit_code)
