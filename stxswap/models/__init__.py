"""
Data models shared by the clients and the swap service.
"""
from stxswap.models.bitflow import (
    QuoteResult,
    SelectedRoute,
    SwapExecutionData,
    SwapParams,
)
from stxswap.models.network import (
    NETWORK_KEY_BY_CHAIN_ID,
    STACKS_NETWORK_CONFIGS,
    NetworkConfig,
)

__all__ = [
    "NETWORK_KEY_BY_CHAIN_ID",
    "STACKS_NETWORK_CONFIGS",
    "NetworkConfig",
    "QuoteResult",
    "SelectedRoute",
    "SwapExecutionData",
    "SwapParams",
]
