#!/usr/bin/env python3
"""Vault Price Feed.

Deploys an in-memory vault, price oracle, feeder and consumer, hands oracle
ownership to the feeder and publishes the vault's price per share once.

Configure via CLI flags or env vars. CLI args take precedence.
"""

import argparse
import logging
import os
import sys

from .src.Deployment import deploy_pipeline
from .src.errors import VaultFeedError
from .src.fixed_point import (
    DEFAULT_ORACLE_DECIMALS,
    VALUE_DECIMALS,
    from_units,
    to_units,
)
from .src.identity import LOCALNET_DEPLOYER_KEY, identity_from_key

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser with environment fallbacks.

    :returns: Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        description="Vault Price Feed: publish a vault's price per share to an oracle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default demo: pool value 250, 100 shares, 8-decimal oracle
  python -m vaultfeed.main

  # Custom vault state
  python -m vaultfeed.main --pool-value 1000 --total-shares 25

  # Keep the deployer as oracle owner (feeder update will be rejected)
  python -m vaultfeed.main --no-transfer

Environment variables (CLI args take precedence):
  POOL_VALUE, TOTAL_SHARES, INITIAL_PRICE, ORACLE_DECIMALS, DEPLOYER_KEY
""",
    )

    parser.add_argument(
        "--pool-value",
        dest="pool_value",
        type=str,
        help="Initial vault pool value in whole units (default: 250)",
        default=os.environ.get("POOL_VALUE") or "250",
    )

    parser.add_argument(
        "--total-shares",
        dest="total_shares",
        type=str,
        help="Initial vault share count in whole units (default: 100)",
        default=os.environ.get("TOTAL_SHARES") or "100",
    )

    parser.add_argument(
        "--initial-price",
        dest="initial_price",
        type=int,
        help="Initial oracle price in raw oracle units (default: 0)",
        default=int(os.environ.get("INITIAL_PRICE") or "0"),
    )

    parser.add_argument(
        "--decimals",
        type=int,
        help=f"Oracle decimals (default: {DEFAULT_ORACLE_DECIMALS})",
        default=int(os.environ.get("ORACLE_DECIMALS") or DEFAULT_ORACLE_DECIMALS),
    )

    parser.add_argument(
        "--deployer-key",
        dest="deployer_key",
        type=str,
        help="Private key of the deploying account (default: localnet test key)",
        default=os.environ.get("DEPLOYER_KEY") or LOCALNET_DEPLOYER_KEY,
    )

    parser.add_argument(
        "--no-transfer",
        dest="transfer",
        action="store_false",
        help="Do not transfer oracle ownership to the feeder",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the Vault Price Feed CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # Validate arguments
    if not 1 <= args.decimals <= VALUE_DECIMALS:
        parser.error(f"--decimals must be between 1 and {VALUE_DECIMALS}")

    if args.initial_price < 0:
        parser.error("--initial-price must be non-negative")

    try:
        pool_value = to_units(args.pool_value, VALUE_DECIMALS)
        total_shares = to_units(args.total_shares, VALUE_DECIMALS)
    except ValueError as e:
        parser.error(str(e))

    try:
        deployer = identity_from_key(args.deployer_key)
    except ValueError:
        parser.error("--deployer-key is not a valid private key")

    # Log configuration
    logger.info("=" * 60)
    logger.info("Vault Price Feed")
    logger.info("=" * 60)
    logger.info(f"Deployer:          {deployer}")
    logger.info(f"Pool Value:        {args.pool_value}")
    logger.info(f"Total Shares:      {args.total_shares}")
    logger.info(f"Initial Price:     {args.initial_price}")
    logger.info(f"Oracle Decimals:   {args.decimals}")
    logger.info(f"Transfer Owner:    {'yes' if args.transfer else 'no'}")
    logger.info("=" * 60)

    try:
        pipeline = deploy_pipeline(
            deployer,
            pool_value=pool_value,
            total_shares=total_shares,
            initial_price=args.initial_price,
            decimals=args.decimals,
            transfer_ownership=args.transfer,
        )
        logger.info(f"Oracle owner address: {pipeline.oracle.owner()}")

        logger.info("Updating oracle via feeder...")
        pipeline.feeder.update_oracle()

        price, decimals = pipeline.consumer.get_latest_price()
        logger.info(
            f"Latest oracle price ({decimals} decimals): {price} "
            f"(${from_units(price, decimals):f})"
        )
    except VaultFeedError as e:
        logger.error(f"Pipeline error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
