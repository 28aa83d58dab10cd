"""Test configuration and fixtures.

This conftest isolates the process environment before ``stxswap`` is imported
(settings and logging are configured at import time), sanitizes env values
that carry inline comments, and provides fixtures shared by the client and
service tests.
"""

from pathlib import Path
import os
import tempfile

import pytest


ROOT = Path(__file__).resolve().parents[1]

# Variables read by stxswap.settings; a developer's .env or shell must not leak in
STXSWAP_ENV_VARS = (
    "BITFLOW_API_HOST",
    "BITFLOW_API_KEY",
    "STACKS_NETWORK",
    "STACKS_API_URL",
    "STACKS_SIGNER_URL",
    "STACKS_SIGNER_TOKEN",
    "STACKS_SENDER_KEY",
    "STACKS_SENDER_ADDRESS",
    "SWAP_TOKEN_X",
    "SWAP_TOKEN_Y",
    "SWAP_TOKEN_Y_INDEX",
    "SWAP_AMOUNT",
    "SWAP_SLIPPAGE_TOLERANCE",
    "ANCHOR_MODE",
    "POST_CONDITION_MODE",
    "HTTP_TIMEOUT",
)

for _k in STXSWAP_ENV_VARS:
    os.environ.pop(_k, None)

# Keep test logs out of the working tree
os.environ.setdefault("LOG_FILE", str(Path(tempfile.gettempdir()) / "stxswap_tests" / "stxswap.log"))

# Sanitize env vars that may contain inline comments (e.g. "INFO # verbose").
for _k, _v in list(os.environ.items()):
    if isinstance(_v, str) and '#' in _v and _k in ("LOG_LEVEL", "LOG_FILE"):
        cleaned = _v.split('#', 1)[0].strip()
        if cleaned != _v:
            os.environ[_k] = cleaned


# Zero hash160 addresses with valid c32check checksums
MAINNET_ADDRESS = "SP000000000000000000002Q6VF78"
TESTNET_ADDRESS = "ST000000000000000000002AMW42H"


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every stxswap variable so a fresh Settings() sees only defaults."""
    for name in STXSWAP_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def mainnet_address():
    return MAINNET_ADDRESS


@pytest.fixture
def testnet_address():
    return TESTNET_ADDRESS


@pytest.fixture
def swap_params_payload():
    """getSwapParams response in the shape the quoting service emits."""
    return {
        "contractAddress": MAINNET_ADDRESS,
        "contractName": "wrapper-alex-v-2-1",
        "functionName": "swap-helper-a",
        "functionArgs": [
            {"type": "contract", "value": f"{MAINNET_ADDRESS}.token-aeusdc"},
            {"type": "contract", "value": f"{MAINNET_ADDRESS}.token-wstx"},
            {"type": "uint", "value": "10000"},
            {"type": "some", "value": {"type": "uint", "value": 9900}},
            {"type": "true"},
        ],
        "postConditions": [
            {
                "type": "ft-postcondition",
                "address": MAINNET_ADDRESS,
                "condition": "eq",
                "amount": 10000,
                "asset": f"{MAINNET_ADDRESS}.token-aeusdc::aeusdc",
            },
            {
                "type": "stx-postcondition",
                "address": f"{MAINNET_ADDRESS}.wrapper-alex-v-2-1",
                "condition": "gte",
                "amount": "9900",
            },
        ],
    }


@pytest.fixture
def quote_payload():
    return {
        "bestRoute": {
            "route": {"path": ["token-aeusdc", "token-stx"], "dex_path": ["ALEX"]},
            "quote": 0.0234,
            "tokenXDecimals": 6,
            "tokenYDecimals": 6,
        },
        "allRoutes": [{"quote": 0.0234}],
        "inputData": {"tokenX": "token-aeusdc", "tokenY": "token-stx", "amountInput": 0.01},
    }
