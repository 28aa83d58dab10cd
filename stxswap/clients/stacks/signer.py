"""Remote signing-service client for Stacks contract calls.

The signing service owns the transaction engine: it resolves the nonce,
estimates the fee, builds the contract-call transaction from the options sent
here and signs it. This process never needs to hold the sender's key; when
``STACKS_SENDER_KEY`` is configured it is forwarded for services that expect
the caller to supply it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

import httpx
from pydantic import SecretStr

from stxswap.clarity.values import ClarityValue
from stxswap.clients.base_client import BaseHTTPClient, HTTPClientError
from stxswap.logging import log
from stxswap.models.network import NetworkConfig
from stxswap.models.transaction import AnchorMode, PostConditionMode
from stxswap.settings.config import settings
from stxswap.translation.post_conditions import NormalizedPostCondition


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------

class SignerError(HTTPClientError):
    """Base exception for signer errors"""


class AuthenticationError(SignerError):
    """Token invalid or missing"""


class SigningRejectedError(SignerError):
    """Signing service refused to sign the request"""


class SignerUnavailableError(SignerError):
    """Signer not reachable or failing"""


# -----------------------------------------------------------------------------
# Types
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ContractCallOptions:
    """Everything the signing service needs to build one contract call."""

    contract_address: str
    contract_name: str
    function_name: str
    function_args: Sequence[ClarityValue]
    sender_address: str
    network: NetworkConfig
    post_conditions: Sequence[NormalizedPostCondition] = field(default_factory=tuple)
    anchor_mode: AnchorMode = AnchorMode.ANY
    post_condition_mode: PostConditionMode = PostConditionMode.DENY
    sender_key: Optional[SecretStr] = field(default=None, repr=False)

    @property
    def contract_id(self) -> str:
        return f"{self.contract_address}.{self.contract_name}"

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "contractAddress": self.contract_address,
            "contractName": self.contract_name,
            "functionName": self.function_name,
            "functionArgs": [arg.to_json() for arg in self.function_args],
            "functionArgsHex": [arg.to_hex() for arg in self.function_args],
            "senderAddress": self.sender_address,
            "network": self.network.name,
            "chainId": self.network.chain_id,
            "anchorMode": AnchorMode(self.anchor_mode).value,
            "postConditionMode": PostConditionMode(self.post_condition_mode).value,
            "postConditions": [pc.to_payload() for pc in self.post_conditions],
        }
        if self.sender_key is not None:
            payload["senderKey"] = self.sender_key.get_secret_value()
        return payload


@dataclass(frozen=True)
class SignedTransaction:
    txid: str
    raw: bytes = field(repr=False)

    @property
    def raw_hex(self) -> str:
        return self.raw.hex()

    @classmethod
    def from_response(cls, data: Any) -> "SignedTransaction":
        if not isinstance(data, dict):
            raise SignerError(f"Unexpected signer response: {data!r}")
        txid = data.get("txid")
        tx_hex = data.get("transaction") or data.get("tx")
        if not txid or not isinstance(tx_hex, str):
            raise SignerError("Signer response is missing 'txid' or 'transaction'")
        if tx_hex.startswith("0x"):
            tx_hex = tx_hex[2:]
        try:
            raw = bytes.fromhex(tx_hex)
        except ValueError as e:
            raise SignerError(f"Signer returned a non-hex transaction: {e}") from e
        return cls(txid=str(txid), raw=raw)


# -----------------------------------------------------------------------------
# Client
# -----------------------------------------------------------------------------

class RemoteSigner(BaseHTTPClient):
    """Client for the contract-call signing service.

    Status mapping:
    - 401 -> AuthenticationError
    - 403 -> SigningRejectedError
    - other 4xx -> SignerError
    - 5xx or connection failure -> SignerUnavailableError
    """

    # Transport failures raised by the base client
    error_class = SignerUnavailableError

    def __init__(
        self,
        signer_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        resolved_url = signer_url or settings.signer_url
        if not resolved_url:
            raise SignerError("Missing signer URL: provide signer_url or set STACKS_SIGNER_URL in .env")

        resolved_token = token
        if resolved_token is None and settings.signer_token is not None:
            resolved_token = settings.signer_token.get_secret_value()

        headers = {"Accept": "application/json"}
        if resolved_token:
            headers["Authorization"] = f"Bearer {resolved_token}"

        super().__init__({
            "base_url": resolved_url,
            "timeout": timeout if timeout is not None else settings.http_timeout,
            "headers": headers,
            "transport": transport,
        })

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text[:200] or f"HTTP {response.status_code}"
        if isinstance(data, dict) and data.get("error"):
            return str(data["error"])
        return f"HTTP {response.status_code}"

    async def make_contract_call(self, options: ContractCallOptions) -> SignedTransaction:
        """Have the signing service build and sign a contract call."""
        log.info(
            f"Requesting signature contract={options.contract_id} function={options.function_name} "
            f"sender={options.sender_address} network={options.network.name}"
        )
        response = await self._request(
            "POST", "/v1/contract-call", raise_for_status=False, json=options.to_payload()
        )

        status = response.status_code
        if status == 401:
            raise AuthenticationError("Invalid or missing token", status_code=status)
        if status == 403:
            raise SigningRejectedError(self._error_message(response), status_code=status)
        if status >= 500:
            raise SignerUnavailableError(
                f"Signer failed: {self._error_message(response)}", status_code=status
            )
        if status >= 400:
            raise SignerError(self._error_message(response), status_code=status)

        try:
            data = response.json()
        except ValueError as e:
            raise SignerError(f"Invalid JSON from signer: {response.text[:200]}") from e
        if isinstance(data, dict) and data.get("error"):
            raise SignerError(str(data["error"]), status_code=status)

        signed = SignedTransaction.from_response(data)
        log.info(f"Signed contract call txid={signed.txid} size={len(signed.raw)}")
        return signed
