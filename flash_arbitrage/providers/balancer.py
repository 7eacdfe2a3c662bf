"""
Balancer V2 flash-loan quotation.

The Vault lends any token it holds, so a loan is available when the Vault's
balance covers the requested amount.
"""

from ..exceptions import QuoteUnavailable
from ..types import Amount, FlashLoanQuote, Token
from ..utils import get_logger
from .abi import ERC20_ABI
from .base import OnChainProvider

logger = get_logger(__name__)


class BalancerV2FlashLoanProvider(OnChainProvider):
    """Quotes flash loans drawn from a Balancer V2 Vault."""

    def get_flash_loan_quotation(self, token: Token, amount: Amount) -> FlashLoanQuote:
        self._check_chain(token)
        if amount.token != token:
            raise QuoteUnavailable(
                f"Loan amount is in {amount.token.symbol}, expected {token.symbol}",
                venue=self.venue.name,
            )

        erc20 = self._contract(token.address, ERC20_ABI)
        vault_balance = self._call(
            f"read {token.symbol} balance of vault",
            erc20.functions.balanceOf(self.venue.address).call,
        )
        logger.debug(
            f"{self.venue.name}: vault holds {vault_balance} units of {token.symbol}, "
            f"requested {amount.value}"
        )

        if vault_balance < amount.value:
            raise QuoteUnavailable(
                f"Insufficient {token.symbol} liquidity in {self.venue.name}: "
                f"{vault_balance} < {amount.value}",
                venue=self.venue.name,
                details={"available": vault_balance, "requested": amount.value},
            )

        return FlashLoanQuote(borrowed=amount, venue=self.venue)
