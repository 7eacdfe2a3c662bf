"""
Configuration loading and normalization for the flash arbitrage evaluator.

Loads a YAML file, validates it against the Pydantic schema and turns it
into an immutable ArbitrageConfig that is passed by reference to the
provider factory and the evaluator.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from .config_schema import validate_flash_arb_config
from .exceptions import ConfigurationError
from .types import Amount, Token, Venue


@dataclass(frozen=True)
class CycleConfig:
    """Normalized description of the cycle to evaluate."""

    borrow_token: str
    borrow_amount: str
    intermediate_token: str
    venue_a: str
    venue_b: str


@dataclass(frozen=True)
class ArbitrageConfig:
    """Immutable runtime configuration object."""

    chain_id: int
    provider: str
    tokens: Mapping[str, Token]
    flash_loan: Venue
    venues: Mapping[str, Venue]
    cycle: CycleConfig
    environment: str = "development"
    network: str = "ethereum"
    rpc_url: Optional[str] = None
    rpc_url_env: str = "PROVIDER_URL"
    quote_timeout_sec: Optional[float] = 10.0
    stub_swap_outputs: Mapping[Tuple[str, str], int] = field(default_factory=dict)

    def __post_init__(self):
        # Read-only views so a shared config cannot be edited in place
        for name in ("tokens", "venues", "stub_swap_outputs"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    def token(self, symbol: str) -> Token:
        try:
            return self.tokens[symbol]
        except KeyError:
            raise ConfigurationError(f"Unknown token: {symbol}") from None

    def venue(self, name: str) -> Venue:
        try:
            return self.venues[name]
        except KeyError:
            raise ConfigurationError(f"Unknown venue: {name}") from None

    @property
    def borrow_token(self) -> Token:
        return self.token(self.cycle.borrow_token)

    @property
    def intermediate_token(self) -> Token:
        return self.token(self.cycle.intermediate_token)

    def borrow_amount(self, override: Optional[str] = None) -> Amount:
        """
        Borrow amount in smallest units of the borrow token.

        Args:
            override: Human-readable quantity replacing the configured one

        Raises:
            ConfigurationError: If the quantity is invalid or not positive
        """
        human = self.cycle.borrow_amount if override is None else override
        return parse_positive_amount(self.borrow_token, human, "borrow amount")


def parse_positive_amount(token: Token, human: Any, label: str) -> Amount:
    try:
        amount = Amount.from_units(token, human)
    except ValueError as e:
        raise ConfigurationError(f"Invalid {label}: {e}") from e
    if amount.value <= 0:
        raise ConfigurationError(f"{label.capitalize()} must be positive: {human}")
    return amount


def load_yaml_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load and parse YAML configuration file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to load config {config_path}: {e}") from e

    if config_dict is None:
        raise ConfigurationError(f"Empty configuration file: {config_path}")
    if not isinstance(config_dict, dict):
        raise ConfigurationError("Config file must contain a YAML dictionary")

    return config_dict


def _resolve_rpc_url(rpc_url_env: str, rpc_url: Optional[str], environ: Mapping[str, str]) -> Optional[str]:
    """Environment variable wins over the URL written in the file."""
    from_env = environ.get(rpc_url_env)
    if from_env and from_env.strip():
        return from_env.strip()
    return rpc_url


def build_config(
    config_dict: Dict[str, Any], environ: Optional[Mapping[str, str]] = None
) -> ArbitrageConfig:
    """
    Validate a raw configuration dictionary and normalize it.

    Args:
        config_dict: Loaded YAML config
        environ: Environment used to resolve the RPC URL (defaults to os.environ)

    Returns:
        Frozen ArbitrageConfig

    Raises:
        ConfigurationError: If the configuration fails validation
    """
    if environ is None:
        environ = os.environ

    try:
        schema = validate_flash_arb_config(config_dict)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed: {e}",
            details={"errors": e.errors(include_url=False)},
        ) from e
    except TypeError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e

    tokens = {
        symbol: Token(
            chain_id=schema.chain_id,
            address=info.address,
            symbol=symbol,
            decimals=info.decimals,
            name=info.name,
        )
        for symbol, info in schema.tokens.items()
    }

    flash_loan = Venue(
        name=schema.flash_loan.name,
        kind=schema.flash_loan.kind,
        address=schema.flash_loan.address,
    )
    venues = {
        venue.name: Venue(
            name=venue.name,
            kind=venue.kind,
            address=venue.address,
            fee_bps=venue.fee_bps,
            quoter=venue.quoter,
        )
        for venue in schema.venues
    }

    stub_swap_outputs = {}
    if schema.stub:
        for entry in schema.stub.swap_outputs:
            amount = parse_positive_amount(
                tokens[entry.output], entry.amount, f"stub output {entry.input}->{entry.output}"
            )
            stub_swap_outputs[(entry.input, entry.output)] = amount.value

    config = ArbitrageConfig(
        chain_id=schema.chain_id,
        provider=schema.provider,
        tokens=tokens,
        flash_loan=flash_loan,
        venues=venues,
        cycle=CycleConfig(
            borrow_token=schema.cycle.borrow_token,
            borrow_amount=schema.cycle.borrow_amount,
            intermediate_token=schema.cycle.intermediate_token,
            venue_a=schema.cycle.venue_a,
            venue_b=schema.cycle.venue_b,
        ),
        environment=schema.environment,
        network=schema.network,
        rpc_url=_resolve_rpc_url(schema.rpc_url_env, schema.rpc_url, environ),
        rpc_url_env=schema.rpc_url_env,
        quote_timeout_sec=schema.quote_timeout_sec,
        stub_swap_outputs=stub_swap_outputs,
    )

    # Fail at startup rather than mid-evaluation
    config.borrow_amount()
    return config


def load_config(
    config_path: Union[str, Path], environ: Optional[Mapping[str, str]] = None
) -> ArbitrageConfig:
    """
    Load and normalize a flash arbitrage configuration file.

    Args:
        config_path: Path to the YAML configuration file
        environ: Environment used to resolve the RPC URL (defaults to os.environ)

    Returns:
        Normalized and frozen configuration

    Raises:
        ConfigurationError: If the configuration cannot be loaded or is invalid
    """
    return build_config(load_yaml_config(config_path), environ)
