"""
Exception hierarchy for the flash loan arbitrage evaluator.

Each failure kind has its own type so callers can tell a bad configuration
apart from an unavailable quote or a malformed result.
"""

from typing import Any, Dict, Optional


class FlashArbitrageError(Exception):
    """Base exception for all flash arbitrage related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(FlashArbitrageError):
    """Raised when required configuration is missing or invalid at startup."""

    pass


class QuoteUnavailable(FlashArbitrageError):
    """Raised when a venue cannot price the requested amount."""

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        venue: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.step = step
        self.venue = venue

    def __str__(self) -> str:
        message = super().__str__()
        if self.step:
            return f"[{self.step}] {message}"
        return message


class QuoteTimeout(QuoteUnavailable):
    """Raised when a quotation call does not complete within its timeout."""

    def __init__(
        self,
        message: str,
        timeout: Optional[float] = None,
        step: Optional[str] = None,
        venue: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, step=step, venue=venue, details=details)
        self.timeout = timeout


class EvaluationCancelled(FlashArbitrageError):
    """Raised when the caller cancels an evaluation between steps."""

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.step = step


class InvalidResult(FlashArbitrageError):
    """Raised when an ArbitrageResult violates its own invariants."""

    pass
