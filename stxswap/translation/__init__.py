"""Translation layer between quoting-service descriptors and contract-call inputs."""

from stxswap.translation.arguments import (
    ARGUMENT_KIND_ALIASES,
    ARGUMENT_KINDS,
    ArgumentKind,
    parse_magnitude,
    translate,
    translate_all,
)
from stxswap.translation.errors import (
    InvalidMagnitude,
    MalformedPostCondition,
    MalformedPrincipal,
    TranslationError,
    UnsupportedArgumentKind,
    UnsupportedPostConditionKind,
)
from stxswap.translation.post_conditions import (
    POST_CONDITION_KIND_ALIASES,
    NormalizedPostCondition,
    PostConditionKind,
    normalize,
    normalize_all,
)

__all__ = [
    "ARGUMENT_KINDS",
    "ARGUMENT_KIND_ALIASES",
    "POST_CONDITION_KIND_ALIASES",
    "ArgumentKind",
    "InvalidMagnitude",
    "MalformedPostCondition",
    "MalformedPrincipal",
    "NormalizedPostCondition",
    "PostConditionKind",
    "TranslationError",
    "UnsupportedArgumentKind",
    "UnsupportedPostConditionKind",
    "normalize",
    "normalize_all",
    "parse_magnitude",
    "translate",
    "translate_all",
]
