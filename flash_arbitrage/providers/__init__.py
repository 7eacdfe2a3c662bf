"""
Quotation providers for flash loans and swaps.
"""

from .balancer import BalancerV2FlashLoanProvider
from .factory import build_quotation_providers, connect_web3
from .stub import StubQuotationProvider
from .uniswap_v2 import UniswapV2SwapProvider, get_amount_out
from .uniswap_v3 import UniswapV3SwapProvider

__all__ = [
    "BalancerV2FlashLoanProvider",
    "StubQuotationProvider",
    "UniswapV2SwapProvider",
    "UniswapV3SwapProvider",
    "build_quotation_providers",
    "connect_web3",
    "get_amount_out",
]
