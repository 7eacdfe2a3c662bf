"""
Core data types for flash loan arbitrage evaluation.

Amounts are plain integers in a token's smallest unit. Decimal conversion
only happens when parsing configuration and when rendering output.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, localcontext
from typing import Literal, Optional, Tuple, Union

VenueKind = Literal["balancer_v2", "uniswap_v2", "uniswap_v3"]
StepAction = Literal["flash_loan", "swap"]

# uint256 cannot hold more than 77 full decimal digits
MAX_DECIMALS = 77

# Enough digits to hold any uint256 value exactly
DECIMAL_PRECISION = 80


@dataclass(frozen=True)
class Token:
    """
    A fungible asset on a specific chain.

    Attributes:
        chain_id: EVM chain identifier (1 for Ethereum mainnet)
        address: Checksum address of the token contract
        symbol: Ticker symbol (e.g., "USDC")
        decimals: Number of decimals defining the smallest unit
        name: Optional human-readable name
    """

    chain_id: int
    address: str
    symbol: str
    decimals: int
    name: Optional[str] = None

    def __post_init__(self):
        if not self.symbol:
            raise ValueError("Token symbol must not be empty")
        if not isinstance(self.decimals, int) or isinstance(self.decimals, bool):
            raise ValueError(f"Token {self.symbol} decimals must be an int")
        if not 0 <= self.decimals <= MAX_DECIMALS:
            raise ValueError(
                f"Token {self.symbol} decimals must be in [0, {MAX_DECIMALS}]: {self.decimals}"
            )

    @property
    def scale(self) -> int:
        """Number of smallest units in one whole token."""
        return 10**self.decimals

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class Amount:
    """
    Non-negative integer quantity of a token in its smallest unit.

    Attributes:
        token: Token whose decimals define the scale of value
        value: Integer amount in smallest units (e.g., 100_000000 for 100 USDC)
    """

    token: Token
    value: int

    def __post_init__(self):
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValueError(
                f"Amount value must be an int, got {type(self.value).__name__}"
            )
        if self.value < 0:
            raise ValueError(f"Amount must not be negative: {self.value} {self.token}")

    @classmethod
    def from_units(cls, token: Token, human: Union[str, int, Decimal]) -> "Amount":
        """
        Build an Amount from a human-readable decimal quantity.

        Args:
            token: Token the quantity is denominated in
            human: Quantity in whole tokens (e.g., "100" or "0.04")

        Raises:
            ValueError: If the quantity is not a number, is negative, or has
                more fractional digits than the token supports
        """
        if isinstance(human, float):
            raise ValueError("Use a string or Decimal for token quantities, not float")
        try:
            quantity = Decimal(str(human))
        except InvalidOperation as e:
            raise ValueError(f"Invalid {token.symbol} quantity: {human!r}") from e
        if not quantity.is_finite():
            raise ValueError(f"Invalid {token.symbol} quantity: {human!r}")

        with localcontext() as ctx:
            ctx.prec = DECIMAL_PRECISION
            scaled = quantity.scaleb(token.decimals)
            if scaled != scaled.to_integral_value():
                raise ValueError(
                    f"{human} {token.symbol} has more than {token.decimals} decimal places"
                )
        return cls(token=token, value=int(scaled))

    def to_units(self) -> Decimal:
        """Return the quantity in whole tokens as an exact Decimal."""
        with localcontext() as ctx:
            ctx.prec = DECIMAL_PRECISION
            return Decimal(self.value).scaleb(-self.token.decimals)

    def same_token(self, other: "Amount") -> bool:
        return self.token == other.token

    def __sub__(self, other: "Amount") -> int:
        """Signed difference in smallest units; only defined for equal tokens."""
        if not isinstance(other, Amount):
            return NotImplemented
        if not self.same_token(other):
            raise ValueError(
                f"Cannot subtract {other.token.symbol} from {self.token.symbol}"
            )
        return self.value - other.value

    def __str__(self) -> str:
        return f"{self.to_units()} {self.token.symbol}"


@dataclass(frozen=True)
class Venue:
    """
    A liquidity source used to price one leg of the cycle.

    Attributes:
        name: Display name (e.g., "sushiswap_v2")
        kind: Protocol family the venue speaks
        address: Pool, pair or vault address
        fee_bps: Swap fee in basis points for constant-product pairs
        quoter: Quoter contract address for concentrated-liquidity pools
    """

    name: str
    kind: VenueKind
    address: str
    fee_bps: Optional[int] = None
    quoter: Optional[str] = None


@dataclass(frozen=True)
class FlashLoanQuote:
    """Amount a flash-loan venue is able to lend."""

    borrowed: Amount
    venue: Venue


@dataclass(frozen=True)
class SwapQuote:
    """Expected output of swapping input on a venue, without executing."""

    input: Amount
    output: Amount
    venue: Venue


@dataclass(frozen=True)
class ArbitrageResult:
    """
    Outcome of evaluating one flash-loan cycle.

    Attributes:
        borrowed: Amount drawn from the flash loan
        intermediate: Output of the first swap
        final: Output of the second swap, back in the borrow token
        profit: final - borrowed in borrow-token units (may be negative)
        profitable: True iff profit > 0
        flash_loan_venue: Venue that priced the loan
        venue_a: Venue that priced the first swap
        venue_b: Venue that priced the second swap
    """

    borrowed: Amount
    intermediate: Amount
    final: Amount
    profit: int
    profitable: bool
    flash_loan_venue: Venue
    venue_a: Venue
    venue_b: Venue

    @property
    def borrow_token(self) -> Token:
        return self.borrowed.token


@dataclass(frozen=True)
class PlanStep:
    """One step of an instruction plan."""

    index: int
    action: StepAction
    venue: Venue
    input: Amount
    output: Amount


@dataclass(frozen=True)
class InstructionPlan:
    """Ordered flash loan -> swap A -> swap B steps for a profitable cycle."""

    steps: Tuple[PlanStep, PlanStep, PlanStep]
    profit: int
    borrow_token: Token

    def __iter__(self):
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)
