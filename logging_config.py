"""
Logging configuration for cleaner output.

Usage:
    import logging_config
    logging_config.setup()
"""

import logging
import sys


def setup(level=logging.INFO):
    """
    Configure logging for cleaner, more readable output.

    - Uses shorter timestamp format (HH:MM:SS instead of full datetime)
    - Suppresses per-request logs from web3 and urllib3
    """

    # Root logger - minimal format
    root = logging.getLogger()
    root.setLevel(level)

    # Clear existing handlers
    root.handlers.clear()

    # Log to stderr so the report on stdout stays machine-readable with --json
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(message)s", datefmt="%H:%M:%S"
    )
    console.setFormatter(formatter)
    root.addHandler(console)

    # Suppress noisy loggers
    logging.getLogger("web3").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    # Application loggers follow the requested level
    logging.getLogger("__main__").setLevel(level)
    logging.getLogger("flash_arbitrage").setLevel(level)

    # Package loggers carry their own handlers; route everything through root
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("flash_arbitrage."):
            package_logger = logging.getLogger(name)
            package_logger.handlers.clear()
            package_logger.setLevel(logging.NOTSET)
            package_logger.propagate = True


def setup_minimal():
    """
    Even more minimal logging - only warnings and errors.
    Good for production or when you only care about problems.
    """
    setup(level=logging.WARNING)


def setup_debug():
    """
    Verbose logging for debugging.
    Shows every quotation step and raw RPC activity.
    """
    setup(level=logging.DEBUG)
    logging.getLogger("web3").setLevel(logging.DEBUG)
