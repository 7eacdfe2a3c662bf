"""Tests for the exceptions module."""

import pytest

from flash_arbitrage.exceptions import (
    ConfigurationError,
    EvaluationCancelled,
    FlashArbitrageError,
    InvalidResult,
    QuoteTimeout,
    QuoteUnavailable,
)


def test_base_exception():
    """Test the base exception class."""
    error = FlashArbitrageError("Test error")
    assert str(error) == "Test error"
    assert error.details == {}

    error_with_details = FlashArbitrageError("Test error", {"key": "value"})
    assert error_with_details.details == {"key": "value"}


def test_configuration_error():
    """Test configuration error."""
    error = ConfigurationError("Config error", {"config_file": "test.yaml"})
    assert str(error) == "Config error"
    assert error.details["config_file"] == "test.yaml"
    assert isinstance(error, FlashArbitrageError)


def test_quote_unavailable_without_step():
    error = QuoteUnavailable("no liquidity")
    assert str(error) == "no liquidity"
    assert error.step is None
    assert error.venue is None


def test_quote_unavailable_prefixes_step():
    error = QuoteUnavailable("no liquidity", step="swap_a", venue="sushiswap_v2")
    assert str(error) == "[swap_a] no liquidity"
    assert error.venue == "sushiswap_v2"


def test_quote_unavailable_step_can_be_set_later():
    error = QuoteUnavailable("no liquidity")
    error.step = "swap_b"
    assert str(error) == "[swap_b] no liquidity"


def test_quote_timeout_is_quote_unavailable():
    error = QuoteTimeout("too slow", timeout=2.5, step="flash_loan")
    assert isinstance(error, QuoteUnavailable)
    assert error.timeout == 2.5
    assert str(error) == "[flash_loan] too slow"


def test_evaluation_cancelled():
    error = EvaluationCancelled("stopped", step="swap_b")
    assert error.step == "swap_b"
    assert isinstance(error, FlashArbitrageError)


def test_invalid_result():
    error = InvalidResult("bad profit", {"profit": 1})
    assert error.details == {"profit": 1}


def test_exception_hierarchy():
    """Test that all exceptions inherit from the base class."""
    for exc_class in (
        ConfigurationError,
        QuoteUnavailable,
        QuoteTimeout,
        EvaluationCancelled,
        InvalidResult,
    ):
        assert issubclass(exc_class, FlashArbitrageError)
        assert issubclass(exc_class, Exception)


def test_exception_raising():
    """Test that exceptions can be raised and caught."""
    with pytest.raises(QuoteUnavailable):
        raise QuoteTimeout("timeout")

    with pytest.raises(FlashArbitrageError):
        raise ConfigurationError("bad config")
