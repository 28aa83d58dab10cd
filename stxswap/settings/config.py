"""
Configuration management for the Stacks swap tool.
"""
from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stxswap.models.network import (
    NETWORK_KEY_BY_CHAIN_ID,
    STACKS_NETWORK_CONFIGS,
    NetworkConfig,
)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


# Load environment variables from .env file if it exists
env_file = Path(".env")
if env_file.exists():
    load_dotenv(env_file, override=False)  # Don't override existing env vars
else:
    load_dotenv(PROJECT_ROOT / ".env", override=False)

NETWORK_CONFIGS: dict[str, NetworkConfig] = STACKS_NETWORK_CONFIGS
NETWORK_BY_CHAIN_ID: dict[int, str] = dict(NETWORK_KEY_BY_CHAIN_ID)


class ConfigurationError(RuntimeError):
    """Raised at startup when a required setting is missing or invalid."""


def get_network_config(network: str | int | None) -> NetworkConfig | None:
    """Return network configuration by network name or chain id."""
    if network is None:
        return None
    if isinstance(network, int):
        network_key = NETWORK_BY_CHAIN_ID.get(network)
        return NETWORK_CONFIGS.get(network_key) if network_key else None
    return NETWORK_CONFIGS.get(network.strip().lower())


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        extra="ignore",
        env_ignore_empty=True,
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
    )

    app_name: str = "stxswap"

    # Bitflow quoting service
    bitflow_api_host: Optional[str] = Field(default=None, validation_alias="BITFLOW_API_HOST")
    bitflow_api_key: Optional[SecretStr] = Field(default=None, validation_alias="BITFLOW_API_KEY")

    # Stacks network / broadcast
    stacks_network: str = Field(default="mainnet", validation_alias="STACKS_NETWORK")
    stacks_api_url: Optional[str] = Field(default=None, validation_alias="STACKS_API_URL")

    # Signing service
    signer_url: Optional[str] = Field(default=None, validation_alias="STACKS_SIGNER_URL")
    signer_token: Optional[SecretStr] = Field(default=None, validation_alias="STACKS_SIGNER_TOKEN")
    sender_key: Optional[SecretStr] = Field(default=None, validation_alias="STACKS_SENDER_KEY")
    sender_address: Optional[str] = Field(default=None, validation_alias="STACKS_SENDER_ADDRESS")

    # Swap scenario
    swap_token_x: str = Field(default="token-aeusdc", validation_alias="SWAP_TOKEN_X")
    swap_token_y: Optional[str] = Field(default=None, validation_alias="SWAP_TOKEN_Y")
    swap_token_y_index: int = Field(default=11, validation_alias="SWAP_TOKEN_Y_INDEX")
    swap_amount: float = Field(default=0.01, validation_alias="SWAP_AMOUNT")
    swap_slippage_tolerance: float = Field(default=0.01, validation_alias="SWAP_SLIPPAGE_TOLERANCE")  # 1%

    # Transaction builder modes
    anchor_mode: Literal["any", "onChainOnly", "offChainOnly"] = Field(default="any", validation_alias="ANCHOR_MODE")
    post_condition_mode: Literal["allow", "deny"] = Field(default="deny", validation_alias="POST_CONDITION_MODE")

    http_timeout: float = Field(default=30.0, validation_alias="HTTP_TIMEOUT")

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str = Field(default="logs/stxswap.log", validation_alias="LOG_FILE")

    @field_validator("stacks_network")
    @classmethod
    def _validate_network(cls, value: str) -> str:
        key = value.strip().lower()
        if key not in NETWORK_CONFIGS:
            raise ValueError(f"Unsupported STACKS_NETWORK '{value}' (expected one of {sorted(NETWORK_CONFIGS)})")
        return key

    @field_validator("swap_slippage_tolerance")
    @classmethod
    def _validate_slippage(cls, value: float) -> float:
        if value < 0 or value >= 1:
            raise ValueError("SWAP_SLIPPAGE_TOLERANCE must be a fraction in [0, 1)")
        return value

    @model_validator(mode="after")
    def _strip_urls(self) -> "Settings":
        for name in ("bitflow_api_host", "stacks_api_url", "signer_url"):
            value = getattr(self, name)
            if value:
                setattr(self, name, value.strip().rstrip("/"))
        return self

    @property
    def network(self) -> NetworkConfig:
        """Resolved network, with the API URL override applied."""
        config = NETWORK_CONFIGS[self.stacks_network]
        if self.stacks_api_url:
            return config.with_api_url(self.stacks_api_url)
        return config

    def require_swap_config(self) -> None:
        """Fail fast when a variable needed for a swap attempt is absent."""
        required = {
            "BITFLOW_API_HOST": self.bitflow_api_host,
            "BITFLOW_API_KEY": self.bitflow_api_key,
            "STACKS_SIGNER_URL": self.signer_url,
            "STACKS_SENDER_ADDRESS": self.sender_address,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")


# Global settings instance
settings = Settings()
