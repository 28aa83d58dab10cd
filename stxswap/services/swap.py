"""Swap planning structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from stxswap.clarity.values import ClarityValue
from stxswap.clients.stacks.signer import ContractCallOptions
from stxswap.models.bitflow import QuoteResult, SwapExecutionData, SwapParams
from stxswap.translation.post_conditions import NormalizedPostCondition


@dataclass(frozen=True)
class SwapRequest:
    """One swap attempt: token Y by id, or by index into the possible-Y list.

    ``route_index`` picks a candidate route from the quoting service instead of
    its best route.
    """

    token_x_id: str
    amount: float
    sender_address: str
    token_y_id: str | None = None
    token_y_index: int | None = None
    route_index: int | None = None
    slippage_tolerance: float = 0.01


@dataclass(frozen=True)
class SwapPlan:
    request: SwapRequest
    token_y_id: str
    quote: QuoteResult
    execution_data: SwapExecutionData
    swap_params: SwapParams
    function_args: tuple[ClarityValue, ...]
    post_conditions: tuple[NormalizedPostCondition, ...]
    options: ContractCallOptions

    def summary(self) -> dict[str, Any]:
        best = self.quote.bestRoute
        return {
            "token_x": self.request.token_x_id,
            "token_y": self.token_y_id,
            "amount": self.request.amount,
            "quote": best.quote if best else None,
            "route_index": self.request.route_index,
            "slippage_tolerance": self.request.slippage_tolerance,
            "sender": self.request.sender_address,
            "network": self.options.network.name,
            "contract": self.swap_params.contract_id,
            "function": self.swap_params.functionName,
            "function_args": [arg.to_json() for arg in self.function_args],
            "post_conditions": [pc.as_dict() for pc in self.post_conditions],
            "anchor_mode": self.options.anchor_mode.value,
            "post_condition_mode": self.options.post_condition_mode.value,
        }
