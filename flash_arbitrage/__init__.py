"""
Flash Loan Arbitrage Evaluator.

Quotes a flash loan -> swap -> swap cycle across two DEX venues and decides
whether it is profitable before any instructions are produced. Evaluation
only: nothing is ever signed or sent.
"""

from flash_arbitrage.version import __version__

PROJECT_NAME = "flash-arbitrage"
VERSION = __version__

from flash_arbitrage.config_loader import ArbitrageConfig, load_config
from flash_arbitrage.evaluator import ArbitrageEvaluator, EvaluationRequest
from flash_arbitrage.exceptions import (
    ConfigurationError,
    EvaluationCancelled,
    FlashArbitrageError,
    InvalidResult,
    QuoteTimeout,
    QuoteUnavailable,
)
from flash_arbitrage.interfaces import CancellationToken, QuotationProviders
from flash_arbitrage.planner import generate_plan
from flash_arbitrage.types import (
    Amount,
    ArbitrageResult,
    FlashLoanQuote,
    InstructionPlan,
    PlanStep,
    SwapQuote,
    Token,
    Venue,
)

__all__ = [
    "PROJECT_NAME",
    "VERSION",
    "Amount",
    "ArbitrageConfig",
    "ArbitrageEvaluator",
    "ArbitrageResult",
    "CancellationToken",
    "ConfigurationError",
    "EvaluationCancelled",
    "EvaluationRequest",
    "FlashArbitrageError",
    "FlashLoanQuote",
    "InstructionPlan",
    "InvalidResult",
    "PlanStep",
    "QuotationProviders",
    "QuoteTimeout",
    "QuoteUnavailable",
    "SwapQuote",
    "Token",
    "Venue",
    "generate_plan",
    "load_config",
]
