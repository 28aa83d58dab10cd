"""c32check address decoding for Stacks principals."""

from __future__ import annotations

import hashlib
import re
from typing import Final

C32_ALPHABET: Final[str] = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
HASH160_LENGTH: Final[int] = 20
CHECKSUM_LENGTH: Final[int] = 4

_C32_RE = re.compile(r"^[0-9A-HJKMNP-TV-Z]*$")


class C32Error(ValueError):
    """Raised for strings that are not valid c32 / c32check data."""


def _normalize(text: str) -> str:
    # c32 treats O as zero and I/L as one
    return text.upper().replace("O", "0").replace("L", "1").replace("I", "1")


def c32_decode(text: str) -> bytes:
    """Decode a c32 string into bytes; each leading ``0`` digit is one zero byte."""
    normalized = _normalize(text)
    if not _C32_RE.match(normalized):
        raise C32Error(f"Not a c32 string: {text!r}")

    leading_zeros = len(normalized) - len(normalized.lstrip("0"))
    remainder = normalized[leading_zeros:]
    value = 0
    for char in remainder:
        value = value * 32 + C32_ALPHABET.index(char)
    body = value.to_bytes((value.bit_length() + 7) // 8, "big") if value else b""
    return b"\x00" * leading_zeros + body


def _checksum(version: int, data: bytes) -> bytes:
    digest = hashlib.sha256(hashlib.sha256(bytes([version]) + data).digest()).digest()
    return digest[:CHECKSUM_LENGTH]


def c32_address_decode(address: str) -> tuple[int, bytes]:
    """Split a Stacks address into ``(version, hash160)``, verifying the checksum."""
    if len(address) < 5 or address[0] not in "Ss":
        raise C32Error(f"Stacks address must start with 'S': {address!r}")

    version_char = _normalize(address[1])
    if version_char not in C32_ALPHABET:
        raise C32Error(f"Invalid address version character in {address!r}")
    version = C32_ALPHABET.index(version_char)

    payload = c32_decode(address[2:])
    if len(payload) != HASH160_LENGTH + CHECKSUM_LENGTH:
        raise C32Error(f"Address payload has wrong length: {address!r}")

    data, checksum = payload[:HASH160_LENGTH], payload[HASH160_LENGTH:]
    if _checksum(version, data) != checksum:
        raise C32Error(f"Address checksum mismatch: {address!r}")
    return version, data
