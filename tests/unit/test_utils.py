"""Tests for the utils module."""

import io
import logging

import pytest

from flash_arbitrage.utils import (
    LOG_FORMAT,
    calculate_bps,
    format_signed_units,
    format_units,
    get_logger,
)


@pytest.mark.parametrize(
    "value,decimals,expected",
    [
        (100_000000, 6, "100.0"),
        (104_000000, 6, "104.0"),
        (40_000000000000000, 18, "0.04"),
        (1, 6, "0.000001"),
        (0, 6, "0.0"),
        (-1_000000, 6, "-1.0"),
        (-500000, 6, "-0.5"),
        (42, 0, "42.0"),
    ],
)
def test_format_units(value, decimals, expected):
    assert format_units(value, decimals) == expected


def test_format_signed_units():
    assert format_signed_units(4_000000, 6) == "+4.0"
    assert format_signed_units(0, 6) == "+0.0"
    assert format_signed_units(-1_000000, 6) == "-1.0"


def test_calculate_bps():
    assert calculate_bps(4_000000, 100_000000) == pytest.approx(400.0)
    assert calculate_bps(-1_000000, 100_000000) == pytest.approx(-100.0)
    assert calculate_bps(5, 0) == 0.0


def test_get_logger_basic():
    """Test basic get_logger functionality."""
    logger = get_logger(__name__)
    assert isinstance(logger, logging.Logger)
    assert logger.name == __name__
    assert logger.handlers


def test_get_logger_with_level():
    """Test get_logger with custom level."""
    logger = get_logger(__name__ + ".level", level=logging.DEBUG)
    assert logger.level == logging.DEBUG


def test_get_logger_does_not_duplicate_handlers():
    name = __name__ + ".repeat"
    first = get_logger(name)
    second = get_logger(name)
    assert first is second
    assert len(second.handlers) == 1


def test_get_logger_console_format():
    name = __name__ + ".format"
    logger = get_logger(name)
    handler = logger.handlers[0]
    assert handler.formatter._fmt == LOG_FORMAT

    captured = io.StringIO()
    handler.stream = captured
    logger.info("evaluated")

    output = captured.getvalue()
    assert "| INFO     |" in output
    assert f"{name}:" in output
    assert output.strip().endswith("| evaluated")


def test_get_logger_keeps_existing_level():
    name = __name__ + ".preset"
    logging.getLogger(name).setLevel(logging.WARNING)
    logger = get_logger(name, level=logging.DEBUG)
    assert logger.level == logging.WARNING
