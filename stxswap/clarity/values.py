"""Clarity contract-call argument values.

Each variant is an immutable dataclass that knows two renderings:

* ``to_json()`` - the tagged JSON form understood by Stacks tooling and the
  signing service (``{"type": "uint", "value": "500"}``).
* ``serialize()`` - Clarity consensus bytes, as used in ``call-read`` requests
  and inside signed transactions.
"""

from __future__ import annotations

import re
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Final, Iterable, Mapping, Optional, Union

from stxswap.clarity.c32 import c32_address_decode

MAX_U128: Final[int] = 2**128 - 1
MAX_NAME_LENGTH: Final[int] = 128

CONTRACT_NAME_RE: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z]([a-zA-Z0-9]|[-_])*$")


class ClarityType(IntEnum):
    """Consensus type prefixes of the values built here."""
    UINT = 0x01
    BOOL_TRUE = 0x03
    BOOL_FALSE = 0x04
    PRINCIPAL_CONTRACT = 0x06
    OPTIONAL_NONE = 0x09
    OPTIONAL_SOME = 0x0A
    TUPLE = 0x0C


class ClaritySerializationError(ValueError):
    """Raised when a value cannot be encoded to consensus bytes."""


class ClarityValue:
    """Base class of every contract-call argument value."""

    type_name: str = ""

    def to_json(self) -> dict[str, Any]:
        raise NotImplementedError

    def serialize(self) -> bytes:
        raise NotImplementedError

    def to_hex(self) -> str:
        return "0x" + self.serialize().hex()


def _encode_name(name: str) -> bytes:
    raw = name.encode("ascii", errors="strict")
    if not raw or len(raw) > MAX_NAME_LENGTH:
        raise ClaritySerializationError(f"Name must be 1-{MAX_NAME_LENGTH} ASCII characters: {name!r}")
    return bytes([len(raw)]) + raw


@dataclass(frozen=True)
class ContractPrincipalCV(ClarityValue):
    address: str
    contract_name: str

    type_name = "contract"

    @property
    def contract_id(self) -> str:
        return f"{self.address}.{self.contract_name}"

    def to_json(self) -> dict[str, Any]:
        return {"type": self.type_name, "value": self.contract_id}

    def serialize(self) -> bytes:
        try:
            version, hash160 = c32_address_decode(self.address)
        except ValueError as exc:
            raise ClaritySerializationError(str(exc)) from exc
        if not CONTRACT_NAME_RE.match(self.contract_name):
            raise ClaritySerializationError(f"Invalid contract name: {self.contract_name!r}")
        return bytes([ClarityType.PRINCIPAL_CONTRACT, version]) + hash160 + _encode_name(self.contract_name)


@dataclass(frozen=True)
class UIntCV(ClarityValue):
    value: int

    type_name = "uint"

    def to_json(self) -> dict[str, Any]:
        # decimal string: JSON numbers lose precision above 2**53
        return {"type": self.type_name, "value": str(self.value)}

    def serialize(self) -> bytes:
        if self.value < 0 or self.value > MAX_U128:
            raise ClaritySerializationError(f"uint out of range: {self.value}")
        return bytes([ClarityType.UINT]) + self.value.to_bytes(16, "big")


@dataclass(frozen=True)
class BoolCV(ClarityValue):
    flag: bool

    @property
    def type_name(self) -> str:  # type: ignore[override]
        return "true" if self.flag else "false"

    def to_json(self) -> dict[str, Any]:
        return {"type": self.type_name}

    def serialize(self) -> bytes:
        return bytes([ClarityType.BOOL_TRUE if self.flag else ClarityType.BOOL_FALSE])


@dataclass(frozen=True)
class OptionalCV(ClarityValue):
    inner: Optional[ClarityValue] = None

    @property
    def type_name(self) -> str:  # type: ignore[override]
        return "none" if self.inner is None else "some"

    def to_json(self) -> dict[str, Any]:
        if self.inner is None:
            return {"type": "none"}
        return {"type": "some", "value": self.inner.to_json()}

    def serialize(self) -> bytes:
        if self.inner is None:
            return bytes([ClarityType.OPTIONAL_NONE])
        return bytes([ClarityType.OPTIONAL_SOME]) + self.inner.serialize()


@dataclass(frozen=True)
class TupleCV(ClarityValue):
    """Named fields in insertion order, kept as ``(name, value)`` pairs so the value hashes."""

    data: tuple[tuple[str, ClarityValue], ...] = ()

    type_name = "tuple"

    def __init__(self, data: Union[Mapping[str, ClarityValue], Iterable[tuple[str, ClarityValue]]] = ()):
        object.__setattr__(self, "data", tuple(dict(data).items()))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.data]

    def __getitem__(self, name: str) -> ClarityValue:
        for field_name, value in self.data:
            if field_name == name:
                return value
        raise KeyError(name)

    def to_json(self) -> dict[str, Any]:
        return {"type": self.type_name, "value": {name: value.to_json() for name, value in self.data}}

    def serialize(self) -> bytes:
        out = bytes([ClarityType.TUPLE]) + struct.pack(">I", len(self.data))
        # consensus form orders entries by name
        for name, value in sorted(self.data, key=lambda item: item[0]):
            out += _encode_name(name) + value.serialize()
        return out
