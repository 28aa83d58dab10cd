from __future__ import annotations

from decimal import Decimal

import pytest

from stxswap.clarity import BoolCV, ContractPrincipalCV, OptionalCV, TupleCV, UIntCV
from stxswap.clarity.values import MAX_U128
from stxswap.translation import (
    ARGUMENT_KIND_ALIASES,
    ARGUMENT_KINDS,
    ArgumentKind,
    InvalidMagnitude,
    MalformedPrincipal,
    TranslationError,
    UnsupportedArgumentKind,
    parse_magnitude,
    translate,
    translate_all,
)


def test_contract_principal_splits_on_first_dot():
    value = translate({"kind": "contract-principal", "value": "SP2C2YFP12AJZB4MABJBAJ55XECVS7E4PMMZ89YZR.arkadiko-token"})

    assert value == ContractPrincipalCV("SP2C2YFP12AJZB4MABJBAJ55XECVS7E4PMMZ89YZR", "arkadiko-token")
    assert value.contract_id == "SP2C2YFP12AJZB4MABJBAJ55XECVS7E4PMMZ89YZR.arkadiko-token"


def test_contract_principal_keeps_remaining_dots_in_contract_name():
    value = translate({"kind": "contract-principal", "value": "SPABC.name.with.dots"})

    assert value == ContractPrincipalCV("SPABC", "name.with.dots")


@pytest.mark.parametrize("raw", ["SPABC", "SPABC.", ".token", "", None, 42])
def test_malformed_principal(raw):
    with pytest.raises(MalformedPrincipal):
        translate({"kind": "contract-principal", "value": raw})


@pytest.mark.parametrize(
    "raw, expected",
    [
        (0, 0),
        (500, 500),
        ("500", 500),
        (" 42 ", 42),
        (12.0, 12),
        (Decimal("7"), 7),
        ("340282366920938463463374607431768211455", MAX_U128),
    ],
)
def test_unsigned_integer_magnitudes(raw, expected):
    assert translate({"kind": "unsigned-integer", "value": raw}) == UIntCV(expected)


def test_unsigned_integer_above_double_precision_is_exact():
    big = "123456789012345678901234567890"
    value = translate({"kind": "unsigned-integer", "value": big})

    assert value.value == 123456789012345678901234567890
    assert value.to_json() == {"type": "uint", "value": big}


@pytest.mark.parametrize("raw", [-1, "-1", 1.5, "1.5", "0x10", "abc", "", True, None, Decimal("2.5"), float("nan")])
def test_invalid_magnitude(raw):
    with pytest.raises(InvalidMagnitude):
        translate({"kind": "unsigned-integer", "value": raw})


def test_magnitude_above_u128_rejected():
    with pytest.raises(InvalidMagnitude):
        translate({"kind": "unsigned-integer", "value": MAX_U128 + 1})


def test_parse_magnitude_without_ceiling():
    assert parse_magnitude(MAX_U128 + 1, maximum=None) == MAX_U128 + 1


@pytest.mark.parametrize(
    "raw",
    ["1" * 5000, "9" * 40, 10**5000, " " + "7" * 4301],
    ids=["str-5000-digits", "str-40-digits", "int-10e5000", "str-space-4301-digits"],
)
def test_oversized_magnitude_is_invalid_magnitude(raw):
    with pytest.raises(InvalidMagnitude) as exc_info:
        translate({"kind": "unsigned-integer", "value": raw})

    assert len(str(exc_info.value)) < 200


def test_leading_zeros_do_not_count_toward_ceiling():
    assert translate({"kind": "uint", "value": "0" * 60 + "5"}) == UIntCV(5)


def test_oversized_magnitude_in_list_names_argument():
    descriptors = [{"kind": "true"}, {"kind": "uint", "value": "9" * 5000}]

    with pytest.raises(InvalidMagnitude) as exc_info:
        translate_all(descriptors)

    assert exc_info.value.context == ["argument 1"]
    assert "(5002 chars)" in str(exc_info.value)


def test_oversized_digit_string_without_ceiling():
    with pytest.raises(InvalidMagnitude, match="too many digits"):
        parse_magnitude("1" * 5000, maximum=None)


def test_huge_int_message_reports_bit_length():
    with pytest.raises(InvalidMagnitude, match="-bit integer"):
        parse_magnitude(10**5000)


def test_booleans():
    assert translate({"kind": "true"}) == BoolCV(True)
    assert translate({"kind": "false"}) == BoolCV(False)


def test_optional_wraps_inner_value():
    value = translate({"kind": "optional", "value": {"kind": "unsigned-integer", "value": 5}})

    assert value == OptionalCV(UIntCV(5))
    assert value.to_json() == {"type": "some", "value": {"type": "uint", "value": "5"}}


def test_optional_null_is_none():
    assert translate({"kind": "optional", "value": None}) == OptionalCV(None)


def test_nested_optional_principal():
    value = translate({
        "kind": "optional",
        "value": {"kind": "optional", "value": {"kind": "contract-principal", "value": "SPX.pool"}},
    })

    assert value == OptionalCV(OptionalCV(ContractPrincipalCV("SPX", "pool")))


def test_optional_failure_keeps_type_and_adds_context():
    with pytest.raises(InvalidMagnitude) as exc_info:
        translate({"kind": "optional", "value": {"kind": "unsigned-integer", "value": -3}})

    assert exc_info.value.context == ["inside optional"]
    assert "inside optional" in str(exc_info.value)


def test_tuple_preserves_field_order():
    value = translate({
        "kind": "tuple",
        "value": {
            "b": {"kind": "unsigned-integer", "value": 2},
            "a": {"kind": "true"},
        },
    })

    assert isinstance(value, TupleCV)
    assert value.names == ["b", "a"]
    assert value["b"] == UIntCV(2)
    assert value["a"] == BoolCV(True)


def test_tuple_field_failure_names_field():
    with pytest.raises(UnsupportedArgumentKind) as exc_info:
        translate({"kind": "tuple", "value": {"amt": {"kind": "int", "value": 1}}})

    assert exc_info.value.context == ["tuple field 'amt'"]


def test_tuple_value_must_be_mapping():
    with pytest.raises(TranslationError):
        translate({"kind": "tuple", "value": [1, 2]})


@pytest.mark.parametrize("kind", ["int", "buffer", "list", "", None])
def test_unsupported_kind_names_kind(kind):
    with pytest.raises(UnsupportedArgumentKind) as exc_info:
        translate({"kind": kind, "value": 1})

    assert exc_info.value.kind == kind
    assert repr(kind) in str(exc_info.value)


def test_descriptor_must_be_mapping():
    with pytest.raises(TranslationError):
        translate(["uint", 1])


def test_wire_aliases_from_type_key():
    descriptors = [
        {"type": "contract", "value": "SPX.token-a"},
        {"type": "uint", "value": "10"},
        {"type": "some", "value": {"type": "uint", "value": 9}},
        {"type": "true"},
        {"type": "false"},
    ]

    assert translate_all(descriptors) == [
        ContractPrincipalCV("SPX", "token-a"),
        UIntCV(10),
        OptionalCV(UIntCV(9)),
        BoolCV(True),
        BoolCV(False),
    ]


def test_kind_takes_precedence_over_type():
    assert translate({"kind": "false", "type": "true"}) == BoolCV(False)


def test_translate_all_reports_index_and_aborts():
    descriptors = [
        {"kind": "true"},
        {"kind": "optional", "value": {"kind": "contract-principal", "value": "no-dot"}},
    ]

    with pytest.raises(MalformedPrincipal) as exc_info:
        translate_all(descriptors)

    assert exc_info.value.context == ["argument 1", "inside optional"]
    assert str(exc_info.value).endswith("(argument 1 > inside optional)")


def test_translation_errors_are_value_errors():
    with pytest.raises(ValueError):
        translate({"kind": "nope"})


def test_translate_is_pure():
    descriptor = {"kind": "tuple", "value": {"x": {"kind": "unsigned-integer", "value": "1"}}}
    snapshot = {"kind": "tuple", "value": {"x": {"kind": "unsigned-integer", "value": "1"}}}

    first = translate(descriptor)
    second = translate(descriptor)

    assert first == second
    assert descriptor == snapshot


@pytest.mark.parametrize(
    "descriptor, variant",
    [
        ({"kind": "contract-principal", "value": "SP000.my-contract"}, ContractPrincipalCV),
        ({"kind": "unsigned-integer", "value": 1}, UIntCV),
        ({"kind": "optional", "value": {"kind": "true"}}, OptionalCV),
        ({"kind": "true"}, BoolCV),
        ({"kind": "false"}, BoolCV),
        ({"kind": "tuple", "value": {}}, TupleCV),
    ],
)
def test_every_kind_maps_to_its_variant(descriptor, variant):
    assert isinstance(translate(descriptor), variant)


def test_reference_examples():
    assert translate({"kind": "contract-principal", "value": "SP000.my-contract"}) == ContractPrincipalCV(
        "SP000", "my-contract"
    )
    assert translate({"kind": "optional", "value": {"kind": "true"}}) == OptionalCV(BoolCV(True))

    with pytest.raises(MalformedPrincipal):
        translate({"kind": "contract-principal", "value": "no-dot-here"})
    with pytest.raises(UnsupportedArgumentKind, match="bogus"):
        translate({"kind": "bogus"})


def test_aliases_resolve_to_known_kinds():
    assert set(ARGUMENT_KIND_ALIASES.values()) <= ARGUMENT_KINDS
    assert len(ARGUMENT_KINDS) == 6


def test_argument_kinds_compare_as_strings():
    assert ArgumentKind.UNSIGNED_INTEGER == "unsigned-integer"
    assert ArgumentKind("tuple") is ArgumentKind.TUPLE
    assert ARGUMENT_KIND_ALIASES["uint"] is ArgumentKind.UNSIGNED_INTEGER
