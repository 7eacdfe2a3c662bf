"""
Arbitrage evaluator for a single flash loan -> swap A -> swap B cycle.

Each quotation takes the previous quotation's output as its input, so the
three calls run strictly in order. Price discovery is delegated to the
injected providers; the only arithmetic done here is the final integer
subtraction in the borrow token's smallest units.
"""

import threading
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .config_loader import ArbitrageConfig
from .exceptions import (
    ConfigurationError,
    EvaluationCancelled,
    QuoteTimeout,
    QuoteUnavailable,
)
from .interfaces import CancellationToken, QuotationProviders
from .types import Amount, ArbitrageResult, SwapQuote, Token, Venue
from .utils import calculate_bps, format_signed_units, get_logger

logger = get_logger(__name__)

STEP_FLASH_LOAN = "flash_loan"
STEP_SWAP_A = "swap_a"
STEP_SWAP_B = "swap_b"


@dataclass(frozen=True)
class EvaluationRequest:
    """
    The cycle to evaluate.

    Attributes:
        borrow_token: Asset drawn from the flash loan and repaid at the end
        borrow_amount: Amount to borrow, in borrow_token units
        intermediate_token: Asset held between the two swaps
        flash_loan_venue: Venue lending the borrow asset
        venue_a: Venue swapping borrow -> intermediate
        venue_b: Venue swapping intermediate -> borrow
    """

    borrow_token: Token
    borrow_amount: Amount
    intermediate_token: Token
    flash_loan_venue: Venue
    venue_a: Venue
    venue_b: Venue

    @classmethod
    def from_config(
        cls, config: ArbitrageConfig, borrow_amount: Optional[str] = None
    ) -> "EvaluationRequest":
        """
        Build a request for the configured cycle.

        Args:
            config: Validated configuration
            borrow_amount: Human-readable quantity overriding the configured one

        Raises:
            ConfigurationError: If the borrow amount is invalid
        """
        return cls(
            borrow_token=config.borrow_token,
            borrow_amount=config.borrow_amount(borrow_amount),
            intermediate_token=config.intermediate_token,
            flash_loan_venue=config.flash_loan,
            venue_a=config.venue(config.cycle.venue_a),
            venue_b=config.venue(config.cycle.venue_b),
        )

    @property
    def cycle(self) -> str:
        return f"{self.borrow_token} -> {self.intermediate_token} -> {self.borrow_token}"


class ArbitrageEvaluator:
    """
    Evaluates one flash-loan arbitrage cycle per call.

    Args:
        providers: Quotation providers for the flash loan and both swaps
        quote_timeout: Seconds each quotation may take (None waits indefinitely)
        chain_id: Expected chain of every provider

    Raises:
        ConfigurationError: If the providers do not all quote on one chain
    """

    def __init__(
        self,
        providers: QuotationProviders,
        quote_timeout: Optional[float] = None,
        chain_id: Optional[int] = None,
    ):
        chain_ids = providers.chain_ids
        if len(chain_ids) != 1:
            raise ConfigurationError(
                f"Quotation providers span several chains: {sorted(chain_ids)}"
            )
        provider_chain = next(iter(chain_ids))
        if chain_id is not None and provider_chain != chain_id:
            raise ConfigurationError(
                f"Quotation providers quote on chain {provider_chain}, expected {chain_id}"
            )
        if quote_timeout is not None and quote_timeout <= 0:
            raise ConfigurationError(f"quote_timeout must be positive: {quote_timeout}")

        self.providers = providers
        self.quote_timeout = quote_timeout
        self.chain_id = provider_chain

    @classmethod
    def from_config(
        cls, config: ArbitrageConfig, providers: QuotationProviders
    ) -> "ArbitrageEvaluator":
        return cls(
            providers,
            quote_timeout=config.quote_timeout_sec,
            chain_id=config.chain_id,
        )

    def evaluate(
        self,
        request: EvaluationRequest,
        cancel_token: Optional[CancellationToken] = None,
    ) -> ArbitrageResult:
        """
        Quote the cycle and decide whether it is profitable.

        Args:
            request: Cycle to evaluate
            cancel_token: Optional signal checked before each quotation

        Returns:
            Fully populated ArbitrageResult

        Raises:
            QuoteUnavailable: If any quotation fails (tagged with the failing step)
            EvaluationCancelled: If cancel_token is raised before a step starts
            ConfigurationError: If the request targets another chain
        """
        self._check_request(request)
        logger.info(
            f"Evaluating {request.cycle}: borrow {request.borrow_amount} "
            f"from {request.flash_loan_venue.name}, "
            f"swap on {request.venue_a.name} then {request.venue_b.name}"
        )

        # Step 1: flash loan
        self._check_cancelled(cancel_token, STEP_FLASH_LOAN)
        loan = self._quote(
            STEP_FLASH_LOAN,
            request.flash_loan_venue,
            self.providers.flash_loan.get_flash_loan_quotation,
            request.borrow_token,
            request.borrow_amount,
        )
        borrowed = loan.borrowed
        if borrowed != request.borrow_amount:
            raise QuoteUnavailable(
                f"Flash loan offers {borrowed}, requested {request.borrow_amount}",
                step=STEP_FLASH_LOAN,
                venue=request.flash_loan_venue.name,
            )
        logger.debug(f"Flash loan: borrowed {borrowed}")

        # Step 2: borrow -> intermediate, input is exactly the borrowed amount
        self._check_cancelled(cancel_token, STEP_SWAP_A)
        swap_a = self._quote(
            STEP_SWAP_A,
            request.venue_a,
            self.providers.swap_a.get_swap_quotation,
            request.borrow_token,
            request.intermediate_token,
            borrowed,
            request.venue_a.address,
        )
        intermediate = self._expect_output(
            swap_a, borrowed, request.intermediate_token, STEP_SWAP_A, request.venue_a
        )
        logger.debug(f"Swap A: {borrowed} -> {intermediate}")

        # Step 3: intermediate -> borrow, input is exactly swap A's output
        self._check_cancelled(cancel_token, STEP_SWAP_B)
        swap_b = self._quote(
            STEP_SWAP_B,
            request.venue_b,
            self.providers.swap_b.get_swap_quotation,
            request.intermediate_token,
            request.borrow_token,
            intermediate,
            request.venue_b.address,
        )
        final = self._expect_output(
            swap_b, intermediate, request.borrow_token, STEP_SWAP_B, request.venue_b
        )
        logger.debug(f"Swap B: {intermediate} -> {final}")

        # Step 4: profit in borrow-token units
        profit = final - borrowed
        result = ArbitrageResult(
            borrowed=borrowed,
            intermediate=intermediate,
            final=final,
            profit=profit,
            profitable=profit > 0,
            flash_loan_venue=request.flash_loan_venue,
            venue_a=request.venue_a,
            venue_b=request.venue_b,
        )

        decimals = request.borrow_token.decimals
        logger.info(
            f"Cycle {request.cycle}: profit "
            f"{format_signed_units(profit, decimals)} {request.borrow_token} "
            f"({calculate_bps(profit, borrowed.value):+.2f} bps), "
            f"profitable={result.profitable}"
        )
        return result

    def _check_request(self, request: EvaluationRequest) -> None:
        for token in (request.borrow_token, request.intermediate_token):
            if token.chain_id != self.chain_id:
                raise ConfigurationError(
                    f"{token.symbol} is on chain {token.chain_id}, "
                    f"providers quote on chain {self.chain_id}"
                )
        if request.borrow_amount.token != request.borrow_token:
            raise ConfigurationError(
                f"Borrow amount is in {request.borrow_amount.token}, "
                f"expected {request.borrow_token}"
            )

    @staticmethod
    def _check_cancelled(cancel_token: Optional[CancellationToken], step: str) -> None:
        if cancel_token is not None and cancel_token.cancelled:
            logger.warning(f"Evaluation cancelled before {step}: {cancel_token.reason}")
            raise EvaluationCancelled(
                f"Evaluation cancelled before {step}: {cancel_token.reason}", step=step
            )

    @staticmethod
    def _expect_output(
        quote: SwapQuote, sent: Amount, token: Token, step: str, venue: Venue
    ) -> Amount:
        if quote.input != sent:
            raise QuoteUnavailable(
                f"{venue.name} priced {quote.input} instead of {sent}",
                step=step,
                venue=venue.name,
            )
        if quote.output.token != token:
            raise QuoteUnavailable(
                f"{venue.name} quoted {quote.output.token}, expected {token}",
                step=step,
                venue=venue.name,
            )
        return quote.output

    def _quote(self, step: str, venue: Venue, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            if self.quote_timeout is None:
                return fn(*args)
            return self._call_with_timeout(step, venue, fn, *args)
        except QuoteUnavailable as e:
            if e.step is None:
                e.step = step
            if e.venue is None:
                e.venue = venue.name
            logger.warning(f"Quote failed at {step} on {venue.name}: {e}")
            raise

    def _call_with_timeout(
        self, step: str, venue: Venue, fn: Callable[..., Any], *args: Any
    ) -> Any:
        future: Future = Future()

        def run() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(fn(*args))
            except BaseException as e:
                future.set_exception(e)

        # Daemon worker: a hung provider must not keep the process alive at exit
        worker = threading.Thread(target=run, name=f"quote-{step}", daemon=True)
        worker.start()
        try:
            return future.result(timeout=self.quote_timeout)
        except FutureTimeoutError:
            raise QuoteTimeout(
                f"{venue.name} did not answer within {self.quote_timeout}s",
                timeout=self.quote_timeout,
                step=step,
                venue=venue.name,
            ) from None
