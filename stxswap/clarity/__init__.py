"""Clarity values and address helpers."""

from stxswap.clarity.c32 import C32Error, c32_address_decode, c32_decode
from stxswap.clarity.values import (
    MAX_U128,
    BoolCV,
    ClaritySerializationError,
    ClarityType,
    ClarityValue,
    ContractPrincipalCV,
    OptionalCV,
    TupleCV,
    UIntCV,
)

__all__ = [
    "MAX_U128",
    "BoolCV",
    "C32Error",
    "ClaritySerializationError",
    "ClarityType",
    "ClarityValue",
    "ContractPrincipalCV",
    "OptionalCV",
    "TupleCV",
    "UIntCV",
    "c32_address_decode",
    "c32_decode",
]
