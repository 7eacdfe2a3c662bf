#!/usr/bin/env python3
"""
Flash loan arbitrage evaluator CLI.

Quotes one flash loan -> swap -> swap cycle, prints the legs and the profit,
and prints combo instructions when the cycle is profitable. Nothing is
executed on-chain.

Usage:
    python3 run_flash_arb.py
    python3 run_flash_arb.py --config configs/flash_arb_eth.yaml
    python3 run_flash_arb.py --config configs/flash_arb_stub.yaml --amount 250 --json
"""

import argparse
import json
import sys
from typing import List, Optional

from dotenv import load_dotenv

import logging_config
from flash_arbitrage.config_loader import load_config
from flash_arbitrage.evaluator import ArbitrageEvaluator, EvaluationRequest
from flash_arbitrage.exceptions import (
    ConfigurationError,
    EvaluationCancelled,
    InvalidResult,
    QuoteUnavailable,
)
from flash_arbitrage.planner import generate_plan
from flash_arbitrage.providers import build_quotation_providers
from flash_arbitrage.report import render_report, result_to_dict
from flash_arbitrage.utils import get_logger
from flash_arbitrage.version import get_version

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_EVALUATION_FAILED = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Flash loan arbitrage opportunity evaluator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Evaluate the configured mainnet cycle (PROVIDER_URL from .env)
  python3 run_flash_arb.py --config configs/flash_arb_eth.yaml

  # Deterministic dry run without an RPC endpoint
  python3 run_flash_arb.py --config configs/flash_arb_stub.yaml

  # Borrow a different amount and print JSON
  python3 run_flash_arb.py --amount 2500 --json
        """,
    )

    parser.add_argument(
        "--config",
        default="configs/flash_arb_eth.yaml",
        help="Path to config YAML file (default: configs/flash_arb_eth.yaml)",
    )
    parser.add_argument(
        "--amount",
        default=None,
        help="Borrow amount in whole tokens, overriding cycle.borrow_amount",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of the text report",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logging of every quotation step",
    )
    parser.add_argument(
        "--color",
        action="store_true",
        help="Highlight the profit line with ANSI colors",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {get_version()}",
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 when the evaluation completed, 1 for configuration
        errors, 2 when a quotation failed or was cancelled)
    """
    args = parse_args(argv)

    if args.debug:
        logging_config.setup_debug()
    else:
        logging_config.setup()

    load_dotenv()

    # Startup: everything here must succeed before any quotation is made
    try:
        config = load_config(args.config)
        request = EvaluationRequest.from_config(config, borrow_amount=args.amount)
        providers = build_quotation_providers(config)
        evaluator = ArbitrageEvaluator.from_config(config, providers)
    except ConfigurationError as e:
        logger.error(f"Config error: {e}")
        return EXIT_CONFIG_ERROR

    logger.info("Starting flash loan arbitrage evaluation...")
    try:
        result = evaluator.evaluate(request)
        plan = generate_plan(result)
    except QuoteUnavailable as e:
        logger.error(f"Quote unavailable: {e}")
        return EXIT_EVALUATION_FAILED
    except EvaluationCancelled as e:
        logger.warning(f"Evaluation cancelled: {e}")
        return EXIT_EVALUATION_FAILED
    except InvalidResult as e:
        logger.error(f"Evaluation produced an invalid result: {e}")
        return EXIT_EVALUATION_FAILED

    if args.json:
        print(json.dumps(result_to_dict(result, plan), indent=2))
    else:
        print(render_report(result, plan, color=args.color))

    logger.info("Evaluation completed.")
    return EXIT_OK


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\n⏸ Stopped by user")
        sys.exit(EXIT_EVALUATION_FAILED)
