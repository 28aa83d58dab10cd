"""Argument translator: quoting-service descriptors to Clarity values."""

from __future__ import annotations

import re
from decimal import Decimal
from enum import Enum
from typing import Any, Final, Iterable, Mapping, Optional

from stxswap.clarity.values import (
    MAX_U128,
    BoolCV,
    ClarityValue,
    ContractPrincipalCV,
    OptionalCV,
    TupleCV,
    UIntCV,
)
from stxswap.translation.errors import (
    InvalidMagnitude,
    MalformedPrincipal,
    TranslationError,
    UnsupportedArgumentKind,
)


class ArgumentKind(str, Enum):
    CONTRACT_PRINCIPAL = "contract-principal"
    UNSIGNED_INTEGER = "unsigned-integer"
    OPTIONAL = "optional"
    TRUE = "true"
    FALSE = "false"
    TUPLE = "tuple"


ARGUMENT_KINDS: Final[frozenset[ArgumentKind]] = frozenset(ArgumentKind)

# Short tags emitted by the quoting service
ARGUMENT_KIND_ALIASES: Final[dict[str, ArgumentKind]] = {
    "contract": ArgumentKind.CONTRACT_PRINCIPAL,
    "uint": ArgumentKind.UNSIGNED_INTEGER,
    "some": ArgumentKind.OPTIONAL,
}

_DIGITS_RE = re.compile(r"^[0-9]+$")


def descriptor_kind(descriptor: Mapping[str, Any]) -> Any:
    """Tag of a descriptor, read from ``kind`` and falling back to ``type``."""
    if "kind" in descriptor:
        return descriptor["kind"]
    return descriptor.get("type")


def _resolve_kind(raw_kind: Any) -> ArgumentKind:
    if not isinstance(raw_kind, str):
        raise UnsupportedArgumentKind(raw_kind)
    try:
        return ArgumentKind(ARGUMENT_KIND_ALIASES.get(raw_kind, raw_kind))
    except ValueError:
        raise UnsupportedArgumentKind(raw_kind) from None


def _parse_digits(value: str, text: str, maximum: Optional[int]) -> int:
    # Anything with more significant digits than the ceiling is out of range
    if maximum is not None and len(text.lstrip("0")) > len(str(maximum)):
        raise InvalidMagnitude(value, f"exceeds {maximum}")
    try:
        return int(text)
    except ValueError:
        raise InvalidMagnitude(value, f"too many digits ({len(text)})") from None


def parse_magnitude(value: Any, maximum: Optional[int] = MAX_U128) -> int:
    """Parse an exact non-negative integer from an int, digit string or integral number."""
    if isinstance(value, bool):
        raise InvalidMagnitude(value, "booleans are not magnitudes")

    if isinstance(value, int):
        magnitude = value
    elif isinstance(value, str):
        text = value.strip()
        if not _DIGITS_RE.match(text):
            raise InvalidMagnitude(value, "expected a decimal digit string")
        magnitude = _parse_digits(value, text, maximum)
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidMagnitude(value, "not an integral value")
        magnitude = int(value)
    elif isinstance(value, Decimal):
        if not value.is_finite() or value != value.to_integral_value():
            raise InvalidMagnitude(value, "not an integral value")
        magnitude = int(value)
    else:
        raise InvalidMagnitude(value, f"unsupported type {type(value).__name__}")

    if magnitude < 0:
        raise InvalidMagnitude(value, "negative")
    if maximum is not None and magnitude > maximum:
        raise InvalidMagnitude(value, f"exceeds {maximum}")
    return magnitude


def _translate_principal(value: Any) -> ContractPrincipalCV:
    if not isinstance(value, str):
        raise MalformedPrincipal(value)
    address, dot, contract_name = value.partition(".")
    if not dot or not address or not contract_name:
        raise MalformedPrincipal(value)
    return ContractPrincipalCV(address, contract_name)


def _translate_optional(value: Any) -> OptionalCV:
    if value is None:
        return OptionalCV(None)
    try:
        return OptionalCV(translate(value))
    except TranslationError as exc:
        exc.add_context("inside optional")
        raise


def _translate_tuple(value: Any) -> TupleCV:
    if not isinstance(value, Mapping):
        raise TranslationError(f"Tuple value must be a mapping of field name to descriptor, got {type(value).__name__}")
    fields: dict[str, ClarityValue] = {}
    for name, nested in value.items():
        try:
            fields[name] = translate(nested)
        except TranslationError as exc:
            exc.add_context(f"tuple field {name!r}")
            raise
    return TupleCV(fields)


def translate(descriptor: Mapping[str, Any]) -> ClarityValue:
    """Convert one argument descriptor into a Clarity value.

    Raises a :class:`TranslationError` subclass for anything outside the
    closed set of argument kinds or for a malformed ``value``.
    """
    if not isinstance(descriptor, Mapping):
        raise TranslationError(f"Argument descriptor must be a mapping, got {type(descriptor).__name__}")

    kind = _resolve_kind(descriptor_kind(descriptor))
    value = descriptor.get("value")

    if kind is ArgumentKind.CONTRACT_PRINCIPAL:
        return _translate_principal(value)
    if kind is ArgumentKind.UNSIGNED_INTEGER:
        return UIntCV(parse_magnitude(value))
    if kind is ArgumentKind.OPTIONAL:
        return _translate_optional(value)
    if kind is ArgumentKind.TRUE:
        return BoolCV(True)
    if kind is ArgumentKind.FALSE:
        return BoolCV(False)
    return _translate_tuple(value)


def translate_all(descriptors: Iterable[Mapping[str, Any]]) -> list[ClarityValue]:
    """Translate a full argument list; the first failure aborts the whole list."""
    values: list[ClarityValue] = []
    for index, descriptor in enumerate(descriptors):
        try:
            values.append(translate(descriptor))
        except TranslationError as exc:
            exc.add_context(f"argument {index}")
            raise
    return values
