"""
Shared plumbing for quotation providers bound to a single venue.
"""

from typing import Any, Callable, List

from web3 import Web3

from ..exceptions import QuoteUnavailable
from ..types import Token, Venue
from ..utils import get_logger

logger = get_logger(__name__)


class VenueBoundProvider:
    """
    Base class for quotation providers that price exactly one venue on one chain.

    Args:
        chain_id: Chain the provider quotes on
        venue: Venue this provider prices
    """

    def __init__(self, chain_id: int, venue: Venue):
        self.chain_id = chain_id
        self.venue = venue

    def _check_venue_address(self, venue_address: str) -> None:
        if venue_address.lower() != self.venue.address.lower():
            raise QuoteUnavailable(
                f"Venue address {venue_address} is not served by {self.venue.name} "
                f"({self.venue.address})",
                venue=self.venue.name,
            )

    def _check_chain(self, *tokens: Token) -> None:
        for token in tokens:
            if token.chain_id != self.chain_id:
                raise QuoteUnavailable(
                    f"{token.symbol} is on chain {token.chain_id}, "
                    f"{self.venue.name} quotes on chain {self.chain_id}",
                    venue=self.venue.name,
                )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(venue={self.venue.name!r}, chain_id={self.chain_id})"


class OnChainProvider(VenueBoundProvider):
    """
    Base class for web3-backed quotation providers.

    Args:
        web3: Web3 instance connected to the chain
        chain_id: Chain the provider quotes on
        venue: Venue this provider prices
    """

    def __init__(self, web3: Web3, chain_id: int, venue: Venue):
        super().__init__(chain_id, venue)
        self.web3 = web3

    def _contract(self, address: str, abi: List[dict]):
        if not Web3.is_checksum_address(address):
            raise QuoteUnavailable(
                f"Invalid contract address: {address}", venue=self.venue.name
            )
        return self.web3.eth.contract(address=address, abi=abi)

    def _call(self, description: str, fn: Callable[[], Any]) -> Any:
        """Run a contract call, reporting any RPC failure as QuoteUnavailable."""
        try:
            return fn()
        except QuoteUnavailable:
            raise
        except Exception as e:
            logger.debug(f"{self.venue.name}: {description} failed: {e}")
            raise QuoteUnavailable(
                f"Failed to {description} on {self.venue.name}: {e}",
                venue=self.venue.name,
            ) from e

    def _check_pair(self, token0: str, token1: str, *tokens: Token) -> None:
        """Ensure the pool holds exactly the requested tokens."""
        pool_tokens = {token0.lower(), token1.lower()}
        wanted = {token.address.lower() for token in tokens}
        if pool_tokens != wanted:
            symbols = "/".join(token.symbol for token in tokens)
            raise QuoteUnavailable(
                f"{self.venue.name} pool {self.venue.address} does not trade {symbols}",
                venue=self.venue.name,
                details={"token0": token0, "token1": token1},
            )
