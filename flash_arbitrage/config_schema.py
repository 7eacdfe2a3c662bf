"""
Configuration schema validation using Pydantic
"""

from decimal import Decimal
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from web3 import Web3


def _checksum(value: str) -> str:
    if not isinstance(value, str) or not Web3.is_address(value):
        raise ValueError(f"Invalid address: {value}")
    return Web3.to_checksum_address(value)


def _quantity(value) -> str:
    """Normalise a YAML quantity to a string so no float rounding sneaks in."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid quantity: {value}")
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    raise ValueError(f"Invalid quantity: {value!r}")


class TokenSchema(BaseModel):
    """Token entry in the token table"""

    address: str
    decimals: int = Field(ge=0, le=77, description="Decimal precision of the token")
    name: Optional[str] = None

    @field_validator("address")
    @classmethod
    def validate_address(cls, v):
        return _checksum(v)


class FlashLoanSchema(BaseModel):
    """Flash-loan venue configuration"""

    name: str = Field(min_length=1)
    kind: Literal["balancer_v2"] = "balancer_v2"
    address: str

    @field_validator("address")
    @classmethod
    def validate_address(cls, v):
        return _checksum(v)


class VenueSchema(BaseModel):
    """Swap venue configuration"""

    name: str = Field(min_length=1)
    kind: Literal["uniswap_v2", "uniswap_v3"]
    address: str
    fee_bps: Optional[int] = Field(default=None, ge=0, lt=10000)
    quoter: Optional[str] = None

    @field_validator("address")
    @classmethod
    def validate_address(cls, v):
        return _checksum(v)

    @field_validator("quoter")
    @classmethod
    def validate_quoter(cls, v):
        if v is None:
            return v
        return _checksum(v)

    @model_validator(mode="after")
    def validate_kind_fields(self):
        if self.kind == "uniswap_v3" and not self.quoter:
            raise ValueError(f"uniswap_v3 venue '{self.name}' requires a quoter address")
        return self


class CycleSchema(BaseModel):
    """The single cycle to evaluate"""

    borrow_token: str
    borrow_amount: str = Field(description="Borrow amount in whole tokens")
    intermediate_token: str
    venue_a: str
    venue_b: str

    @field_validator("borrow_amount", mode="before")
    @classmethod
    def validate_borrow_amount(cls, v):
        return _quantity(v)

    @model_validator(mode="after")
    def validate_distinct_tokens(self):
        if self.borrow_token == self.intermediate_token:
            raise ValueError("borrow_token and intermediate_token must differ")
        return self


class StubOutputSchema(BaseModel):
    """One fixed swap output for the stub provider"""

    input: str
    output: str
    amount: str

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v):
        return _quantity(v)


class StubSchema(BaseModel):
    """Stub provider configuration"""

    swap_outputs: List[StubOutputSchema] = Field(default_factory=list)


class FlashArbConfigSchema(BaseModel):
    """Complete flash arbitrage configuration schema"""

    environment: Literal["development", "staging", "production"] = "development"
    network: str = "ethereum"
    chain_id: int = Field(gt=0)
    rpc_url_env: str = "PROVIDER_URL"
    rpc_url: Optional[str] = None
    provider: Literal["onchain", "stub"]
    quote_timeout_sec: Optional[float] = Field(default=10.0, gt=0)
    tokens: Dict[str, TokenSchema]
    flash_loan: FlashLoanSchema
    venues: List[VenueSchema] = Field(min_length=1)
    cycle: CycleSchema
    stub: Optional[StubSchema] = None

    @field_validator("rpc_url")
    @classmethod
    def validate_rpc_url(cls, v):
        if v and not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid RPC URL format: {v}")
        return v

    @model_validator(mode="after")
    def validate_references(self):
        venue_names = [venue.name for venue in self.venues]
        duplicates = {name for name in venue_names if venue_names.count(name) > 1}
        if duplicates:
            raise ValueError(f"Duplicate venue names: {sorted(duplicates)}")

        for field_name in ("borrow_token", "intermediate_token"):
            symbol = getattr(self.cycle, field_name)
            if symbol not in self.tokens:
                raise ValueError(f"cycle.{field_name} '{symbol}' not found in tokens")

        for field_name in ("venue_a", "venue_b"):
            name = getattr(self.cycle, field_name)
            if name not in venue_names:
                raise ValueError(f"cycle.{field_name} '{name}' not found in venues")

        if self.stub:
            for entry in self.stub.swap_outputs:
                for symbol in (entry.input, entry.output):
                    if symbol not in self.tokens:
                        raise ValueError(f"stub swap output token '{symbol}' not found in tokens")

        if self.provider == "stub" and self.environment == "production":
            raise ValueError("stub provider cannot be used in production")
        return self


def validate_flash_arb_config(config_dict: Dict) -> FlashArbConfigSchema:
    """
    Validate a flash arbitrage configuration dictionary

    Args:
        config_dict: Dictionary representation of the config

    Returns:
        Validated FlashArbConfigSchema object

    Raises:
        pydantic.ValidationError: If configuration is invalid
    """
    return FlashArbConfigSchema(**config_dict)
