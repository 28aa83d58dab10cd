"""Bitflow quoting-service client.

Wraps the four Bitflow calls the swap flow needs: possible output tokens,
candidate routes, best-route quote and contract-call parameters. Responses are
validated into the models in :mod:`stxswap.models.bitflow`; the descriptors in
``SwapParams`` are left raw for :mod:`stxswap.translation`.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from stxswap.clients.base_client import BaseHTTPClient, HTTPClientError
from stxswap.logging import log
from stxswap.models.bitflow import QuoteResult, SwapExecutionData, SwapParams
from stxswap.settings.config import settings


class BitflowError(HTTPClientError):
    """Raised for Bitflow quoting-service failures."""


class NoRouteFoundError(BitflowError):
    """Raised when the quoting service has no route for a token pair."""

    def __init__(self, token_x_id: str, token_y_id: str):
        super().__init__(f"No route found for {token_x_id} -> {token_y_id}")
        self.token_x_id = token_x_id
        self.token_y_id = token_y_id


class BitflowClient(BaseHTTPClient):
    """Async client for the Bitflow routing API."""

    error_class = BitflowError

    def __init__(
        self,
        api_host: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        resolved_host = api_host or settings.bitflow_api_host
        if not resolved_host:
            raise BitflowError("Missing Bitflow host: provide api_host or set BITFLOW_API_HOST in .env")

        resolved_key = api_key
        if resolved_key is None and settings.bitflow_api_key is not None:
            resolved_key = settings.bitflow_api_key.get_secret_value()
        if not resolved_key:
            raise BitflowError("Missing Bitflow API key: provide api_key or set BITFLOW_API_KEY in .env")

        super().__init__({
            "base_url": resolved_host,
            "timeout": timeout if timeout is not None else settings.http_timeout,
            "headers": {"Accept": "application/json"},
            "transport": transport,
        })
        self._api_key = resolved_key
        log.debug(f"BitflowClient initialized host={self.base_url}")

    def _params(self, **params: Any) -> dict[str, Any]:
        return {**params, "key": self._api_key}

    async def get_all_possible_token_y(self, token_x_id: str) -> list[str]:
        """Token ids reachable from ``token_x_id``, in the service's order."""
        data = await self._request_json(
            "GET", "/getAllPossibleTokenY", params=self._params(tokenX=token_x_id)
        )
        if isinstance(data, dict):
            data = data.get("tokens", data.get("data"))
        if not isinstance(data, list):
            raise BitflowError(f"Unexpected token list payload for {token_x_id}: {data!r}")

        tokens = [str(item) for item in data]
        log.info(f"Possible output tokens token_x={token_x_id} count={len(tokens)}")
        return tokens

    async def get_all_possible_token_y_routes(self, token_x_id: str, token_y_id: str) -> list[dict[str, Any]]:
        data = await self._request_json(
            "GET",
            "/getAllPossibleTokenYRoutes",
            params=self._params(tokenX=token_x_id, tokenY=token_y_id),
        )
        if isinstance(data, dict):
            data = data.get("routes", data.get("data"))
        if not isinstance(data, list):
            raise BitflowError(f"Unexpected routes payload for {token_x_id} -> {token_y_id}: {data!r}")
        log.info(f"Candidate routes token_x={token_x_id} token_y={token_y_id} count={len(data)}")
        return data

    async def get_quote_for_route(self, token_x_id: str, token_y_id: str, amount: float) -> QuoteResult:
        """Best-route quote for swapping ``amount`` of token X into token Y.

        Raises:
            NoRouteFoundError: when the service returns no best route
        """
        data = await self._request_json(
            "GET",
            "/getQuoteForRoute",
            params=self._params(tokenX=token_x_id, tokenY=token_y_id, amountInput=amount),
        )
        try:
            quote = QuoteResult.model_validate(data)
        except ValidationError as e:
            raise BitflowError(f"Invalid quote payload for {token_x_id} -> {token_y_id}: {e}") from e

        if quote.bestRoute is None:
            raise NoRouteFoundError(token_x_id, token_y_id)
        log.info(
            f"Quote token_x={token_x_id} token_y={token_y_id} amount={amount} "
            f"quote={quote.bestRoute.quote} routes={len(quote.allRoutes)}"
        )
        return quote

    async def get_swap_params(
        self,
        execution_data: SwapExecutionData,
        sender_address: str,
        slippage_tolerance: float,
    ) -> SwapParams:
        """Contract-call parameters for an execution of the selected route."""
        payload = {
            "swapExecutionData": execution_data.model_dump(mode="json"),
            "senderAddress": sender_address,
            "slippageTolerance": slippage_tolerance,
        }
        data = await self._request_json(
            "POST", "/getSwapParams", params=self._params(), json=payload
        )
        try:
            params = SwapParams.model_validate(data)
        except ValidationError as e:
            raise BitflowError(f"Invalid swap params payload: {e}") from e

        log.info(
            f"Swap params contract={params.contract_id} function={params.functionName} "
            f"args={len(params.functionArgs)} post_conditions={len(params.postConditions)}"
        )
        return params
