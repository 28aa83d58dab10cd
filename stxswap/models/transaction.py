"""Transaction-builder enumerations passed through to the signing service."""

from __future__ import annotations

from enum import Enum


class AnchorMode(str, Enum):
    """Block-inclusion timing for a transaction."""
    ON_CHAIN_ONLY = "onChainOnly"
    OFF_CHAIN_ONLY = "offChainOnly"
    ANY = "any"


class PostConditionMode(str, Enum):
    """How strictly post-conditions are enforced."""
    ALLOW = "allow"
    DENY = "deny"
