from __future__ import annotations

from schemadmin.domain.entities import SchemaDefinition
from schemadmin.domain.search import build_where, searchable_fields

ARTICLES = SchemaDefinition.from_payload(
    {
        "collection": "articles",
        "fields": {
            "title": {"type": "String"},
            "views": {"type": "Number"},
            "body": {"type": "String"},
            "published": {"type": "Boolean"},
        },
    }
)


def test_only_string_fields_are_searched() -> None:
    assert searchable_fields(ARTICLES) == ["title", "body"]
    assert build_where("foo", {}, ARTICLES) == {
        "$or": [
            {"title": {"$regex": "foo", "$options": "i"}},
            {"body": {"$regex": "foo", "$options": "i"}},
        ]
    }


def test_blank_search_returns_copy_of_filters() -> None:
    filters = {"status": "active"}
    where = build_where("   ", filters, ARTICLES)

    assert where == {"status": "active"}
    assert where is not filters


def test_filters_are_siblings_of_the_or_group() -> None:
    schema = SchemaDefinition.from_payload({"collection": "a", "fields": {"title": {"type": "String"}}})
    where = build_where("foo", {"status": "active"}, schema)

    assert where == {"$or": [{"title": {"$regex": "foo", "$options": "i"}}], "status": "active"}


def test_search_without_string_fields_adds_nothing() -> None:
    numbers_only = SchemaDefinition.from_payload({"collection": "n", "fields": {"v": {"type": "Number"}}})

    assert build_where("foo", {"x": 1}, numbers_only) == {"x": 1}
    assert build_where("foo", {}, None) == {}


def test_search_term_is_matched_literally() -> None:
    schema = SchemaDefinition.from_payload({"collection": "a", "fields": {"title": {"type": "String"}}})
    where = build_where("a.b*", {}, schema)

    assert where["$or"][0]["title"]["$regex"] == r"a\.b\*"
