"""
Quotation provider interfaces consumed by the arbitrage evaluator.

Providers are injected explicitly; the evaluator never constructs or
substitutes one on its own.
"""

import threading
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .types import Amount, FlashLoanQuote, SwapQuote, Token


@runtime_checkable
class FlashLoanQuoter(Protocol):
    """Protocol for venues that can price a flash loan."""

    chain_id: int

    def get_flash_loan_quotation(self, token: Token, amount: Amount) -> FlashLoanQuote:
        """
        Quote borrowing amount of token.

        Raises:
            QuoteUnavailable: If the venue cannot lend the requested amount
        """
        ...


@runtime_checkable
class SwapQuoter(Protocol):
    """Protocol for venues that can price an exact-input swap."""

    chain_id: int

    def get_swap_quotation(
        self,
        input_token: Token,
        output_token: Token,
        amount: Amount,
        venue_address: str,
    ) -> SwapQuote:
        """
        Quote swapping amount of input_token into output_token on a venue.

        Raises:
            QuoteUnavailable: If the venue cannot price the requested amount
        """
        ...


@dataclass(frozen=True)
class QuotationProviders:
    """The three logical providers used by one evaluation."""

    flash_loan: FlashLoanQuoter
    swap_a: SwapQuoter
    swap_b: SwapQuoter

    @property
    def chain_ids(self) -> set:
        return {self.flash_loan.chain_id, self.swap_a.chain_id, self.swap_b.chain_id}


class CancellationToken:
    """Signal a caller can raise to stop an evaluation between steps."""

    def __init__(self):
        self._event = threading.Event()
        self.reason = ""

    def cancel(self, reason: str = "cancelled by caller") -> None:
        self.reason = reason
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()
