"""
Uniswap V3 swap quotation through the QuoterV2 contract.

Concentrated liquidity cannot be priced from a single reserve snapshot, so
the quoter simulates the swap (including tick crossings) with an eth_call.
"""

from ..exceptions import QuoteUnavailable
from ..types import Amount, SwapQuote, Token
from ..utils import get_logger
from .abi import QUOTER_V2_ABI, UNISWAP_V3_POOL_ABI
from .base import OnChainProvider

logger = get_logger(__name__)


class UniswapV3SwapProvider(OnChainProvider):
    """Quotes exact-input single-pool swaps against one V3 pool."""

    def fetch_pool_fee(self, input_token: Token, output_token: Token) -> int:
        """
        Read the pool's fee tier after checking it trades the requested pair.

        Raises:
            QuoteUnavailable: If the pool cannot be read or does not hold both tokens
        """
        pool = self._contract(self.venue.address, UNISWAP_V3_POOL_ABI)
        token0 = self._call("read token0", pool.functions.token0().call)
        token1 = self._call("read token1", pool.functions.token1().call)
        self._check_pair(token0, token1, input_token, output_token)
        return int(self._call("read fee tier", pool.functions.fee().call))

    def get_swap_quotation(
        self,
        input_token: Token,
        output_token: Token,
        amount: Amount,
        venue_address: str,
    ) -> SwapQuote:
        self._check_venue_address(venue_address)
        self._check_chain(input_token, output_token)
        if not self.venue.quoter:
            raise QuoteUnavailable(
                f"{self.venue.name} has no quoter address", venue=self.venue.name
            )
        if amount.value <= 0:
            raise QuoteUnavailable(
                f"{self.venue.name} cannot price a zero amount", venue=self.venue.name
            )

        fee = self.fetch_pool_fee(input_token, output_token)
        quoter = self._contract(self.venue.quoter, QUOTER_V2_ABI)
        params = (input_token.address, output_token.address, amount.value, fee, 0)
        result = self._call(
            "quote exact input",
            quoter.functions.quoteExactInputSingle(params).call,
        )
        amount_out = int(result[0])
        logger.debug(
            f"{self.venue.name}: quoter returned {amount_out} {output_token.symbol} units "
            f"(fee tier {fee}, ticks crossed {result[2]})"
        )

        if amount_out <= 0:
            raise QuoteUnavailable(
                f"{self.venue.name} returns nothing for {amount}",
                venue=self.venue.name,
            )

        return SwapQuote(
            input=amount,
            output=Amount(token=output_token, value=amount_out),
            venue=self.venue,
        )
