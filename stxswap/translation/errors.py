"""Errors raised by the argument translator and post-condition normalizer."""

from __future__ import annotations

from typing import Any


class TranslationError(ValueError):
    """Base error for descriptor translation.

    ``context`` lists where the failure happened, outermost first
    (e.g. ``["argument 2", "inside optional"]``).
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.context: list[str] = []

    def add_context(self, where: str) -> "TranslationError":
        self.context.insert(0, where)
        return self

    def __str__(self) -> str:
        if not self.context:
            return self.message
        return f"{self.message} ({' > '.join(self.context)})"


class UnsupportedArgumentKind(TranslationError):
    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(f"Unsupported argument kind: {kind!r}")


class MalformedPrincipal(TranslationError):
    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Malformed contract principal, expected 'address.contract-name': {value!r}")


_SHOWN_CHARS = 64


def _abbreviate(value: Any) -> str:
    """Short repr for error messages; huge ints are described by size."""
    if isinstance(value, int) and not isinstance(value, bool) and value.bit_length() > 256:
        return f"<{value.bit_length()}-bit integer>"
    text = repr(value)
    if len(text) > _SHOWN_CHARS:
        return f"{text[:_SHOWN_CHARS]}... ({len(text)} chars)"
    return text


class InvalidMagnitude(TranslationError):
    def __init__(self, value: Any, reason: str = "not a non-negative integer"):
        self.value = value
        super().__init__(f"Invalid magnitude {_abbreviate(value)}: {reason}")


class UnsupportedPostConditionKind(TranslationError):
    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(f"Unsupported post-condition kind: {kind!r}")


class MalformedPostCondition(TranslationError):
    def __init__(self, field: str, kind: Any = None):
        self.field = field
        self.kind = kind
        super().__init__(f"Post-condition {kind!r} is missing or has an invalid '{field}'")
