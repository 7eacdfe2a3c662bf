"""
Deterministic quotation provider for development and tests.

Never selected implicitly: the provider factory only builds it when the
configuration asks for it outside production.
"""

from typing import Dict, Optional, Tuple

from ..exceptions import QuoteUnavailable
from ..types import Amount, FlashLoanQuote, SwapQuote, Token, Venue
from .base import VenueBoundProvider


class StubQuotationProvider(VenueBoundProvider):
    """
    Fixed-output quotes keyed by (input symbol, output symbol).

    The flash loan always lends exactly the requested amount; each swap
    returns the configured output regardless of the input size. Tokens and
    venue addresses are checked the same way the on-chain providers check
    them.

    Args:
        chain_id: Chain the stub pretends to quote on
        venue: Venue reported on every quote
        swap_outputs: {(input_symbol, output_symbol): output value in smallest units}
    """

    def __init__(
        self,
        chain_id: int,
        venue: Venue,
        swap_outputs: Optional[Dict[Tuple[str, str], int]] = None,
    ):
        super().__init__(chain_id, venue)
        self.swap_outputs = dict(swap_outputs or {})

    def get_flash_loan_quotation(self, token: Token, amount: Amount) -> FlashLoanQuote:
        self._check_chain(token)
        return FlashLoanQuote(borrowed=Amount(token=token, value=amount.value), venue=self.venue)

    def get_swap_quotation(
        self,
        input_token: Token,
        output_token: Token,
        amount: Amount,
        venue_address: str,
    ) -> SwapQuote:
        self._check_venue_address(venue_address)
        self._check_chain(input_token, output_token)
        key = (input_token.symbol, output_token.symbol)
        if key not in self.swap_outputs:
            raise QuoteUnavailable(
                f"No stub quote for {input_token.symbol} -> {output_token.symbol}",
                venue=self.venue.name,
            )
        return SwapQuote(
            input=amount,
            output=Amount(token=output_token, value=self.swap_outputs[key]),
            venue=self.venue,
        )
