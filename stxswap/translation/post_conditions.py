"""Post-condition normalizer: quoting-service constraints to canonical form."""

from __future__ import annotations

from enum import Enum
from typing import Any, Final, Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from stxswap.translation.arguments import descriptor_kind, parse_magnitude
from stxswap.translation.errors import (
    InvalidMagnitude,
    MalformedPostCondition,
    TranslationError,
    UnsupportedPostConditionKind,
)


class PostConditionKind(str, Enum):
    FUNGIBLE_ASSET = "fungible-asset"
    NATIVE_ASSET = "native-asset"


# Wire tags accepted as synonyms; the input spelling is kept in the output
POST_CONDITION_KIND_ALIASES: Final[dict[str, PostConditionKind]] = {
    "ft-postcondition": PostConditionKind.FUNGIBLE_ASSET,
    "stx-postcondition": PostConditionKind.NATIVE_ASSET,
}


class NormalizedPostCondition(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str = Field(serialization_alias="type")
    address: str
    condition: str
    amount: str
    asset: Optional[str] = None

    @property
    def is_fungible(self) -> bool:
        return self.asset is not None

    def as_dict(self) -> dict[str, Any]:
        """Canonical mapping keyed by ``kind``; ``asset`` only for fungible assets."""
        return self.model_dump(exclude_none=True)

    def to_payload(self) -> dict[str, Any]:
        """``type``-keyed mapping taken by the signing service."""
        return self.model_dump(by_alias=True, exclude_none=True)


def _required_str(descriptor: Mapping[str, Any], field: str, kind: Any) -> str:
    value = descriptor.get(field)
    if not isinstance(value, str) or not value:
        raise MalformedPostCondition(field, kind)
    return value


def _render_amount(descriptor: Mapping[str, Any], kind: Any) -> str:
    if descriptor.get("amount") is None:
        raise MalformedPostCondition("amount", kind)
    amount = parse_magnitude(descriptor["amount"], maximum=None)
    try:
        return str(amount)
    except ValueError:
        raise InvalidMagnitude(amount, "too many digits to render") from None


def _resolve_kind(raw_kind: Any) -> PostConditionKind:
    if not isinstance(raw_kind, str):
        raise UnsupportedPostConditionKind(raw_kind)
    try:
        return PostConditionKind(POST_CONDITION_KIND_ALIASES.get(raw_kind, raw_kind))
    except ValueError:
        raise UnsupportedPostConditionKind(raw_kind) from None


def normalize(descriptor: Mapping[str, Any]) -> NormalizedPostCondition:
    """Convert one post-condition descriptor to its canonical form.

    ``condition`` is copied as given; the signing service decides whether it is
    a valid comparator.
    """
    if not isinstance(descriptor, Mapping):
        raise TranslationError(f"Post-condition descriptor must be a mapping, got {type(descriptor).__name__}")

    raw_kind = descriptor_kind(descriptor)
    kind = _resolve_kind(raw_kind)

    if kind is PostConditionKind.FUNGIBLE_ASSET:
        return NormalizedPostCondition(
            kind=raw_kind,
            address=_required_str(descriptor, "address", raw_kind),
            condition=_required_str(descriptor, "condition", raw_kind),
            amount=_render_amount(descriptor, raw_kind),
            asset=_required_str(descriptor, "asset", raw_kind),
        )
    return NormalizedPostCondition(
        kind=raw_kind,
        address=_required_str(descriptor, "address", raw_kind),
        condition=_required_str(descriptor, "condition", raw_kind),
        amount=_render_amount(descriptor, raw_kind),
    )


def normalize_all(descriptors: Iterable[Mapping[str, Any]]) -> list[NormalizedPostCondition]:
    normalized: list[NormalizedPostCondition] = []
    for index, descriptor in enumerate(descriptors):
        try:
            normalized.append(normalize(descriptor))
        except TranslationError as exc:
            exc.add_context(f"post-condition {index}")
            raise
    return normalized
