"""Stacks node client: raw transaction broadcast."""

from __future__ import annotations

from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict

from stxswap.clients.base_client import BaseHTTPClient, HTTPClientError
from stxswap.logging import log
from stxswap.models.network import NetworkConfig
from stxswap.settings.config import settings


class StacksNodeError(HTTPClientError):
    """Raised when the node cannot be reached or answers unexpectedly."""


class BroadcastResult(BaseModel):
    """Outcome of ``POST /v2/transactions``.

    Accepted transactions carry only ``txid``; rejections also carry ``error``,
    ``reason`` and optional ``reason_data``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    txid: Optional[str] = None
    error: Optional[str] = None
    reason: Optional[str] = None
    reason_data: Optional[Any] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.txid)


class StacksNodeClient(BaseHTTPClient):
    error_class = StacksNodeError

    def __init__(
        self,
        network: NetworkConfig | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.network = network or settings.network
        super().__init__({
            "base_url": self.network.api_url,
            "timeout": timeout if timeout is not None else settings.http_timeout,
            "transport": transport,
        })

    async def broadcast_transaction(self, raw: bytes) -> BroadcastResult:
        """Broadcast a serialized, signed transaction.

        A node rejection (HTTP 400 with an ``error`` body) is returned as a
        result rather than raised; the caller decides how to report it.
        """
        response = await self._request(
            "POST",
            "/v2/transactions",
            raise_for_status=False,
            content=raw,
            headers={"Content-Type": "application/octet-stream"},
        )

        try:
            body = response.json()
        except ValueError as e:
            raise StacksNodeError(
                f"Unexpected broadcast response HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            ) from e

        if response.is_success and isinstance(body, str):
            txid = body.strip('"')
            log.info(f"Broadcast accepted network={self.network.name} txid={txid}")
            return BroadcastResult(txid=txid)

        if isinstance(body, dict) and body.get("error"):
            result = BroadcastResult.model_validate(body)
            log.warning(
                f"Broadcast rejected network={self.network.name} txid={result.txid} "
                f"error={result.error} reason={result.reason}"
            )
            return result

        raise StacksNodeError(
            f"Unexpected broadcast response HTTP {response.status_code}: {response.text[:200]}",
            status_code=response.status_code,
        )


class TransactionRejectedError(StacksNodeError):
    """Transaction was rejected by the node."""

    def __init__(self, txid: str | None, reason: str, reason_data: Any = None):
        self.txid = txid
        self.reason = reason
        self.reason_data = reason_data
        super().__init__(f"Transaction {txid} rejected: {reason}")

    @classmethod
    def from_result(cls, result: BroadcastResult) -> "TransactionRejectedError":
        reason = result.reason or result.error or "unknown"
        return cls(result.txid, reason, result.reason_data)
