"""Swap orchestration."""

from stxswap.services.swap import SwapPlan, SwapRequest
from stxswap.services.swap_service import SwapConfigurationError, SwapService

__all__ = ["SwapConfigurationError", "SwapPlan", "SwapRequest", "SwapService"]
