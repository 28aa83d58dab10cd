"""Typed Stacks network models and default network registry."""

from __future__ import annotations

from typing import Final
from urllib.parse import urlparse

from pydantic import BaseModel, field_validator


class NetworkConfig(BaseModel):
    """Runtime network configuration for contract-call broadcasting."""

    name: str
    chain_id: int
    transaction_version: int
    single_sig_address_version: int
    multi_sig_address_version: int
    api_url: str
    explorer_base_url: str | None = None
    is_testnet: bool = False

    model_config = {
        "frozen": True,
    }

    @field_validator("api_url", "explorer_base_url")
    @classmethod
    def validate_url(cls, value: str | None) -> str | None:
        if value is None:
            return value
        parsed = urlparse(value)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ValueError(f"Invalid URL: {value}")
        return value.rstrip("/")

    @property
    def address_versions(self) -> tuple[int, int]:
        return (self.single_sig_address_version, self.multi_sig_address_version)

    def with_api_url(self, api_url: str) -> "NetworkConfig":
        return NetworkConfig.model_validate({**self.model_dump(), "api_url": api_url})

    def explorer_tx_url(self, txid: str) -> str | None:
        if not self.explorer_base_url:
            return None
        tx = txid if txid.startswith("0x") else f"0x{txid}"
        return f"{self.explorer_base_url}/txid/{tx}?chain={self.name}"


STACKS_MAINNET_CHAIN_ID: Final[int] = 0x00000001
STACKS_TESTNET_CHAIN_ID: Final[int] = 0x80000000


STACKS_NETWORK_CONFIGS: dict[str, NetworkConfig] = {
    "mainnet": NetworkConfig(
        name="mainnet",
        chain_id=STACKS_MAINNET_CHAIN_ID,
        transaction_version=0x00,
        single_sig_address_version=22,
        multi_sig_address_version=20,
        api_url="https://api.hiro.so",
        explorer_base_url="https://explorer.hiro.so",
    ),
    "testnet": NetworkConfig(
        name="testnet",
        chain_id=STACKS_TESTNET_CHAIN_ID,
        transaction_version=0x80,
        single_sig_address_version=26,
        multi_sig_address_version=21,
        api_url="https://api.testnet.hiro.so",
        explorer_base_url="https://explorer.hiro.so",
        is_testnet=True,
    ),
}

NETWORK_KEY_BY_CHAIN_ID: dict[int, str] = {
    config.chain_id: key for key, config in STACKS_NETWORK_CONFIGS.items()
}
