from __future__ import annotations

import pytest

from schemadmin.domain.entities import (
    CollectionQuery,
    CurrentUser,
    FieldSpec,
    SchemaDefinition,
    SchemaRegistry,
    form_path,
    list_path,
)


def test_for_page_derives_skip_from_one_based_page() -> None:
    query = CollectionQuery.for_page(3, 20, where={"a": 1}, sort={"createdAt": -1})

    assert query.skip == 40
    assert query.limit == 20
    assert query.to_dict() == {"where": {"a": 1}, "limit": 20, "skip": 40, "sort": {"createdAt": -1}}


@pytest.mark.parametrize("kwargs", [{"limit": 0}, {"limit": -5}, {"skip": -1}, {"sort": {"a": 2}}])
def test_query_rejects_invalid_values(kwargs) -> None:
    with pytest.raises(ValueError):
        CollectionQuery(**kwargs)


def test_for_page_rejects_page_zero() -> None:
    with pytest.raises(ValueError):
        CollectionQuery.for_page(0, 10)


def test_schema_from_payload_accepts_class_name_alias() -> None:
    schema = SchemaDefinition.from_payload(
        {"className": "Product", "fields": {"name": {"type": "String", "required": True, "maxLength": 5}}}
    )

    assert schema.collection == "Product"
    assert schema.label == "Product"
    spec = schema.fields["name"]
    assert spec.required is True
    assert spec.max_length == 5


def test_schema_payload_without_collection_is_rejected() -> None:
    with pytest.raises(ValueError):
        SchemaDefinition.from_payload({"fields": {}})


def test_registry_lookup_and_replace() -> None:
    registry = SchemaRegistry.from_payload([{"collection": "a"}, {"collection": "b"}])
    assert registry.collections() == ["a", "b"]
    assert "a" in registry

    registry.replace([SchemaDefinition(collection="c")])

    assert registry.get("a") is None
    assert registry.get("c").collection == "c"
    assert len(registry) == 1


def test_current_user_access_rules() -> None:
    assert CurrentUser.from_payload({"objectId": "u1", "roles": ["admin"]}).has_access
    assert CurrentUser.from_payload({"id": "u2", "isMaster": True}).has_access
    nobody = CurrentUser.from_payload({"id": "u3", "username": "guest"})
    assert not nobody.has_access
    assert nobody.id == "u3"


def test_route_helpers() -> None:
    assert list_path("products") == "/collections/products"
    assert form_path("products", "42") == "/collections/products/form/42"


def test_field_constraints_sent_as_text_are_coerced() -> None:
    spec = FieldSpec.from_payload("name", {"type": "String", "maxLength": "10"})
    price = FieldSpec.from_payload("price", {"type": "Number", "min": "0", "max": " 9.5 "})

    assert spec.max_length == 10
    assert (price.min, price.max) == (0, 9.5)


@pytest.mark.parametrize(
    "payload",
    [{"maxLength": "ten"}, {"min": "low"}, {"max": True}, {"maxLength": "1.5"}],
)
def test_non_numeric_field_constraints_are_rejected(payload) -> None:
    with pytest.raises(ValueError):
        FieldSpec.from_payload("name", payload)
