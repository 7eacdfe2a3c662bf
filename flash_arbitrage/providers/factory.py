"""
Explicit construction of quotation providers from configuration.

Exactly one provider family is selected by ``config.provider``. Anything
that prevents building it is a ConfigurationError raised at startup; there
is no fallback to another provider.
"""

from typing import Optional

from web3 import Web3

from ..config_loader import ArbitrageConfig
from ..exceptions import ConfigurationError
from ..interfaces import QuotationProviders
from ..types import Venue
from ..utils import get_logger
from .balancer import BalancerV2FlashLoanProvider
from .stub import StubQuotationProvider
from .uniswap_v2 import UniswapV2SwapProvider
from .uniswap_v3 import UniswapV3SwapProvider

logger = get_logger(__name__)

SWAP_PROVIDERS = {
    "uniswap_v2": UniswapV2SwapProvider,
    "uniswap_v3": UniswapV3SwapProvider,
}

FLASH_LOAN_PROVIDERS = {
    "balancer_v2": BalancerV2FlashLoanProvider,
}


def connect_web3(config: ArbitrageConfig) -> Web3:
    """
    Connect to the configured RPC endpoint and check it serves the configured chain.

    Raises:
        ConfigurationError: If no RPC URL is configured, the endpoint is
            unreachable, or it reports a different chain id
    """
    rpc_url = config.rpc_url
    if not rpc_url:
        raise ConfigurationError(
            f"RPC URL environment variable {config.rpc_url_env} not set and no rpc_url in config"
        )

    request_kwargs = {}
    if config.quote_timeout_sec:
        request_kwargs["timeout"] = config.quote_timeout_sec

    logger.info(f"Connecting to RPC for {config.network} (chain {config.chain_id})")
    web3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs=request_kwargs))
    try:
        connected = web3.is_connected()
    except Exception as e:
        raise ConfigurationError(f"Failed to connect to RPC: {e}") from e
    if not connected:
        raise ConfigurationError(f"Failed to connect to RPC for {config.network}")

    try:
        remote_chain_id = web3.eth.chain_id
    except Exception as e:
        raise ConfigurationError(f"Failed to read chain id from RPC: {e}") from e
    if remote_chain_id != config.chain_id:
        raise ConfigurationError(
            f"RPC serves chain {remote_chain_id}, config expects chain {config.chain_id}",
            details={"expected": config.chain_id, "actual": remote_chain_id},
        )

    return web3


def _build_swap_provider(web3: Web3, config: ArbitrageConfig, venue: Venue):
    provider_cls = SWAP_PROVIDERS.get(venue.kind)
    if provider_cls is None:
        raise ConfigurationError(f"Venue '{venue.name}' has unsupported kind '{venue.kind}'")
    return provider_cls(web3, config.chain_id, venue)


def _build_flash_loan_provider(web3: Web3, config: ArbitrageConfig):
    venue = config.flash_loan
    provider_cls = FLASH_LOAN_PROVIDERS.get(venue.kind)
    if provider_cls is None:
        raise ConfigurationError(
            f"Flash-loan venue '{venue.name}' has unsupported kind '{venue.kind}'"
        )
    return provider_cls(web3, config.chain_id, venue)


def build_stub_providers(config: ArbitrageConfig) -> QuotationProviders:
    """
    Build deterministic providers from the ``stub`` config section.

    Raises:
        ConfigurationError: If the configuration targets production
    """
    if config.environment == "production":
        raise ConfigurationError("stub provider cannot be used in production")

    outputs = config.stub_swap_outputs
    return QuotationProviders(
        flash_loan=StubQuotationProvider(config.chain_id, config.flash_loan),
        swap_a=StubQuotationProvider(
            config.chain_id, config.venue(config.cycle.venue_a), outputs
        ),
        swap_b=StubQuotationProvider(
            config.chain_id, config.venue(config.cycle.venue_b), outputs
        ),
    )


def build_onchain_providers(
    config: ArbitrageConfig, web3: Optional[Web3] = None
) -> QuotationProviders:
    """
    Build web3-backed providers for the cycle's flash-loan venue and two swap venues.

    Args:
        config: Validated configuration
        web3: Already connected Web3 instance (connects from config if omitted)

    Raises:
        ConfigurationError: If the RPC connection or any venue kind is unusable
    """
    if web3 is None:
        web3 = connect_web3(config)

    return QuotationProviders(
        flash_loan=_build_flash_loan_provider(web3, config),
        swap_a=_build_swap_provider(web3, config, config.venue(config.cycle.venue_a)),
        swap_b=_build_swap_provider(web3, config, config.venue(config.cycle.venue_b)),
    )


def build_quotation_providers(
    config: ArbitrageConfig, web3: Optional[Web3] = None
) -> QuotationProviders:
    """
    Select and build the quotation providers named by ``config.provider``.

    Raises:
        ConfigurationError: If the provider kind is unknown or cannot be built
    """
    if config.provider == "onchain":
        providers = build_onchain_providers(config, web3)
    elif config.provider == "stub":
        providers = build_stub_providers(config)
    else:
        raise ConfigurationError(f"Unknown quotation provider: {config.provider!r}")

    logger.info(
        f"Quotation providers: flash_loan={providers.flash_loan!r}, "
        f"swap_a={providers.swap_a!r}, swap_b={providers.swap_b!r}"
    )
    return providers
