"""
Uniswap V2 style swap quotation for constant-product pairs (Sushiswap V2, etc).

Output is computed from the pair's live reserves with the same integer
arithmetic the pair contract uses, so quotes carry no rounding drift.
"""

from typing import Tuple

from ..exceptions import QuoteUnavailable
from ..types import Amount, SwapQuote, Token
from ..utils import get_logger
from .abi import UNISWAP_V2_PAIR_ABI
from .base import OnChainProvider

logger = get_logger(__name__)

DEFAULT_FEE_BPS = 30
BPS_DENOMINATOR = 10000


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int, fee_bps: int) -> int:
    """
    Calculate output amount for a V2 swap using constant-product formula.

    Formula (with fee embedded):
        amountInWithFee = amountIn * (10000 - fee_bps)
        amountOut = (amountInWithFee * reserveOut) / (reserveIn * 10000 + amountInWithFee)

    Args:
        amount_in: Input token amount (in smallest units)
        reserve_in: Reserve of input token
        reserve_out: Reserve of output token
        fee_bps: Pair fee in basis points (30 for 0.3%)

    Returns:
        Output token amount (in smallest units), rounded down

    Raises:
        ValueError: If inputs are invalid (non-positive, fee out of range)
    """
    if amount_in <= 0:
        raise ValueError(f"amount_in must be positive: {amount_in}")
    if reserve_in <= 0 or reserve_out <= 0:
        raise ValueError(
            f"Reserves must be positive: in={reserve_in}, out={reserve_out}"
        )
    if fee_bps < 0 or fee_bps >= BPS_DENOMINATOR:
        raise ValueError(f"Fee must be in [0, {BPS_DENOMINATOR}) bps: {fee_bps}")

    amount_in_with_fee = amount_in * (BPS_DENOMINATOR - fee_bps)
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * BPS_DENOMINATOR + amount_in_with_fee
    return numerator // denominator


class UniswapV2SwapProvider(OnChainProvider):
    """Quotes exact-input swaps against a single V2 pair."""

    @property
    def fee_bps(self) -> int:
        if self.venue.fee_bps is None:
            return DEFAULT_FEE_BPS
        return self.venue.fee_bps

    def fetch_reserves(self, input_token: Token, output_token: Token) -> Tuple[int, int]:
        """
        Fetch reserves ordered for a swap from input_token to output_token.

        Raises:
            QuoteUnavailable: If the pair cannot be read or does not hold both tokens
        """
        pair = self._contract(self.venue.address, UNISWAP_V2_PAIR_ABI)
        token0 = self._call("read token0", pair.functions.token0().call)
        token1 = self._call("read token1", pair.functions.token1().call)
        self._check_pair(token0, token1, input_token, output_token)

        reserves = self._call("read reserves", pair.functions.getReserves().call)
        reserve0, reserve1 = int(reserves[0]), int(reserves[1])

        if token0.lower() == input_token.address.lower():
            return reserve0, reserve1
        return reserve1, reserve0

    def get_swap_quotation(
        self,
        input_token: Token,
        output_token: Token,
        amount: Amount,
        venue_address: str,
    ) -> SwapQuote:
        self._check_venue_address(venue_address)
        self._check_chain(input_token, output_token)

        reserve_in, reserve_out = self.fetch_reserves(input_token, output_token)
        logger.debug(
            f"{self.venue.name}: reserves {reserve_in} {input_token.symbol} / "
            f"{reserve_out} {output_token.symbol}"
        )

        try:
            amount_out = get_amount_out(amount.value, reserve_in, reserve_out, self.fee_bps)
        except ValueError as e:
            raise QuoteUnavailable(
                f"{self.venue.name} cannot price {amount}: {e}", venue=self.venue.name
            ) from e

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
