from __future__ import annotations

import pytest

from stxswap.translation import (
    InvalidMagnitude,
    PostConditionKind,
    MalformedPostCondition,
    NormalizedPostCondition,
    TranslationError,
    UnsupportedPostConditionKind,
    normalize,
    normalize_all,
)


def test_fungible_asset_reference_example():
    result = normalize({
        "kind": "fungible-asset",
        "address": "SP1",
        "condition": "gte",
        "amount": 500,
        "asset": "SP1.token::tok",
    })

    assert result.as_dict() == {
        "kind": "fungible-asset",
        "address": "SP1",
        "condition": "gte",
        "amount": "500",
        "asset": "SP1.token::tok",
    }
    assert result.is_fungible


def test_native_asset_has_no_asset_field():
    result = normalize({"kind": "native-asset", "address": "SP2", "condition": "eq", "amount": "1000000"})

    assert result.as_dict() == {"kind": "native-asset", "address": "SP2", "condition": "eq", "amount": "1000000"}
    assert result.asset is None
    assert not result.is_fungible


def test_native_asset_ignores_stray_asset():
    result = normalize({
        "kind": "native-asset",
        "address": "SP2",
        "condition": "eq",
        "amount": 1,
        "asset": "SP1.token::tok",
    })

    assert "asset" not in result.as_dict()


@pytest.mark.parametrize(
    "amount, rendered",
    [
        (0, "0"),
        ("007", "7"),
        (1_000_000.0, "1000000"),
        (10**30, "1" + "0" * 30),
        ("123456789012345678901234567890", "123456789012345678901234567890"),
    ],
)
def test_amount_rendering_is_exact(amount, rendered):
    result = normalize({"kind": "native-asset", "address": "SP2", "condition": "lte", "amount": amount})

    assert result.amount == rendered


@pytest.mark.parametrize("amount", [-1, "1,000", "1e3", 2.5, True])
def test_invalid_amount(amount):
    with pytest.raises(InvalidMagnitude):
        normalize({"kind": "native-asset", "address": "SP2", "condition": "eq", "amount": amount})


@pytest.mark.parametrize("amount", [10**5000, "9" * 5000], ids=["int-10e5000", "str-5000-digits"])
def test_amount_too_large_to_render(amount):
    with pytest.raises(InvalidMagnitude) as exc_info:
        normalize_all([{"kind": "native-asset", "address": "SP2", "condition": "eq", "amount": amount}])

    assert exc_info.value.context == ["post-condition 0"]
    assert len(str(exc_info.value)) < 200


@pytest.mark.parametrize("kind", ["nft-postcondition", "non-fungible-asset", "bogus", None])
def test_unsupported_kind(kind):
    with pytest.raises(UnsupportedPostConditionKind) as exc_info:
        normalize({"kind": kind, "address": "SP1", "condition": "sent", "asset": "SP1.nft::n"})

    assert exc_info.value.kind == kind


def test_nft_postcondition_on_wire_type_key():
    with pytest.raises(UnsupportedPostConditionKind):
        normalize({"type": "nft-postcondition", "address": "SP1", "condition": "sent"})


@pytest.mark.parametrize("field", ["address", "condition", "amount", "asset"])
def test_missing_fungible_field(field):
    descriptor = {
        "kind": "fungible-asset",
        "address": "SP1",
        "condition": "gte",
        "amount": 5,
        "asset": "SP1.token::tok",
    }
    del descriptor[field]

    with pytest.raises(MalformedPostCondition) as exc_info:
        normalize(descriptor)

    assert exc_info.value.field == field


def test_condition_is_passed_through_unchecked():
    result = normalize({"kind": "native-asset", "address": "SP2", "condition": "not-a-comparator", "amount": 1})

    assert result.condition == "not-a-comparator"


def test_wire_aliases_keep_their_spelling():
    fungible = normalize({
        "type": "ft-postcondition",
        "address": "SP1",
        "condition": "eq",
        "amount": 10000,
        "asset": "SP1.token-aeusdc::aeusdc",
    })
    native = normalize({"type": "stx-postcondition", "address": "SP1", "condition": "gte", "amount": "9900"})

    assert fungible.kind == "ft-postcondition"
    assert fungible.asset == "SP1.token-aeusdc::aeusdc"
    assert native.kind == "stx-postcondition"
    assert native.asset is None


def test_to_payload_uses_type_key():
    result = normalize({"type": "stx-postcondition", "address": "SP1", "condition": "gte", "amount": 9900})

    assert result.to_payload() == {
        "type": "stx-postcondition",
        "address": "SP1",
        "condition": "gte",
        "amount": "9900",
    }


def test_normalize_all_reports_index():
    descriptors = [
        {"kind": "native-asset", "address": "SP1", "condition": "eq", "amount": 1},
        {"kind": "nft-postcondition", "address": "SP1", "condition": "sent"},
    ]

    with pytest.raises(UnsupportedPostConditionKind) as exc_info:
        normalize_all(descriptors)

    assert exc_info.value.context == ["post-condition 1"]


def test_descriptor_must_be_mapping():
    with pytest.raises(TranslationError):
        normalize("stx-postcondition")


def test_normalize_is_pure_and_frozen():
    descriptor = {"kind": "fungible-asset", "address": "SP1", "condition": "gte", "amount": 500, "asset": "SP1.t::t"}

    first = normalize(descriptor)
    second = normalize(descriptor)

    assert first == second
    assert descriptor["amount"] == 500
    assert isinstance(first, NormalizedPostCondition)
    with pytest.raises(Exception):
        first.amount = "1"


def test_post_condition_kinds_compare_as_strings():
    assert PostConditionKind.NATIVE_ASSET == "native-asset"
    assert PostConditionKind("fungible-asset") is PostConditionKind.FUNGIBLE_ASSET
