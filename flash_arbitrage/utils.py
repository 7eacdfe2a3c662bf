"""
Common utilities for the flash arbitrage evaluator.

This module provides centralized helpers for logging and for converting
fixed-point token amounts into display strings.
"""

import logging
from typing import Union


# Formatting utilities
def format_units(value: int, decimals: int) -> str:
    """
    Format an integer amount of smallest units as a decimal string.

    Trailing zeros are trimmed but at least one fractional digit is kept, so
    100_000000 at 6 decimals renders as "100.0" and 40_000000000000000 at
    18 decimals renders as "0.04".

    Args:
        value: Signed integer amount in smallest units
        decimals: Token decimals

    Returns:
        Human-readable decimal string
    """
    sign = "-" if value < 0 else ""
    whole, fraction = divmod(abs(value), 10**decimals)
    if decimals == 0:
        return f"{sign}{whole}.0"
    fraction_str = str(fraction).rjust(decimals, "0").rstrip("0") or "0"
    return f"{sign}{whole}.{fraction_str}"


def format_signed_units(value: int, decimals: int) -> str:
    """Like format_units but always carries a sign prefix."""
    formatted = format_units(value, decimals)
    return formatted if value < 0 else f"+{formatted}"


def calculate_bps(profit: int, principal: int) -> float:
    """Profit relative to principal in basis points (display only)."""
    if principal == 0:
        return 0.0
    return profit * 10000 / principal


# Logging utilities
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"


def get_logger(name: str, level: Union[str, int] = logging.INFO) -> logging.Logger:
    """
    Get a module logger with the package's console format.

    The handler is attached once per logger; logging_config.setup() later
    strips it so CLI runs log through the root handler only.

    Args:
        name: Logger name (typically __name__)
        level: Level applied when the logger has none yet
    """
    logger = logging.getLogger(name)

    if logger.level == logging.NOTSET:
        logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)

    return logger
