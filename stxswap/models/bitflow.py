"""Pydantic models for Bitflow quoting-service payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SelectedRoute(BaseModel):
    model_config = ConfigDict(extra="ignore")

    route: Any
    quote: float | None = None
    tokenXDecimals: int
    tokenYDecimals: int


class QuoteResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    bestRoute: SelectedRoute | None = None
    allRoutes: list[dict[str, Any]] = Field(default_factory=list)
    inputData: dict[str, Any] = Field(default_factory=dict)


class SwapExecutionData(BaseModel):
    """Route and amount handed back to the quoting service to obtain call parameters."""

    model_config = ConfigDict(extra="ignore")

    route: Any
    amount: float
    tokenXDecimals: int
    tokenYDecimals: int

    @classmethod
    def from_route(cls, route: SelectedRoute, amount: float) -> "SwapExecutionData":
        return cls(
            route=route.route,
            amount=amount,
            tokenXDecimals=route.tokenXDecimals,
            tokenYDecimals=route.tokenYDecimals,
        )


class SwapParams(BaseModel):
    """Contract-call description returned by the quoting service.

    ``functionArgs`` and ``postConditions`` stay as raw descriptors; they are
    converted by :mod:`stxswap.translation`.
    """

    model_config = ConfigDict(extra="ignore")

    contractAddress: str
    contractName: str
    functionName: str
    functionArgs: list[dict[str, Any]] = Field(default_factory=list)
    postConditions: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def contract_id(self) -> str:
        return f"{self.contractAddress}.{self.contractName}"
