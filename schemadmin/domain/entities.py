"""Domain value objects shared across adapters, use-cases, and presenters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional

from .ports import Condition, ObjectId, Record

NEW_OBJECT_ID: ObjectId = "new"
"""Route sentinel for a record that has not been persisted yet."""

ID_FIELD = "id"


def list_path(collection: str) -> str:
    return f"/collections/{collection}"


def form_path(collection: str, object_id: ObjectId) -> str:
    return f"/collections/{collection}/form/{object_id}"


@dataclass(frozen=True)
class CollectionQuery:
    """One page request against a collection.

    Built fresh for every load; ``skip`` is derived from the 1-based page.
    """

    where: Condition = field(default_factory=dict)
    limit: int = 20
    skip: int = 0
    sort: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit <= 0:
            raise ValueError("CollectionQuery.limit must be a positive integer.")
        if isinstance(self.skip, bool) or not isinstance(self.skip, int) or self.skip < 0:
            raise ValueError("CollectionQuery.skip must be a non-negative integer.")
        for key, direction in self.sort.items():
            if direction not in (1, -1):
                raise ValueError(f"Sort direction for '{key}' must be 1 or -1.")

    @classmethod
    def for_page(
        cls,
        page: int,
        limit: int,
        *,
        where: Optional[Condition] = None,
        sort: Optional[Mapping[str, int]] = None,
    ) -> "CollectionQuery":
        """Build the query for a 1-based ``page`` of ``limit`` rows."""
        if page < 1:
            raise ValueError("Page numbers start at 1.")
        return cls(
            where=dict(where or {}),
            limit=limit,
            skip=(page - 1) * limit,
            sort=dict(sort or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "where": dict(self.where),
            "limit": self.limit,
            "skip": self.skip,
            "sort": dict(self.sort),
        }


def _number(value: Any) -> float:
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


def _constraint(name: str, payload: Mapping[str, Any], key: str, cast: Callable[[Any], Any]) -> Any:
    """Numeric constraint coerced with ``cast``; registries may send numbers as text."""
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Field '{name}' has a non-numeric {key}: {value!r}")
    try:
        return cast(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Field '{name}' has a non-numeric {key}: {value!r}") from exc


@dataclass(frozen=True)
class FieldSpec:
    """Declared type and constraints of one schema field."""

    name: str
    type: str = "String"
    required: bool = False
    max_length: Optional[int] = None
    min: Optional[float] = None
    max: Optional[float] = None

    @classmethod
    def from_payload(cls, name: str, payload: Mapping[str, Any]) -> "FieldSpec":
        if not isinstance(payload, Mapping):
            raise ValueError(f"Field '{name}' must be described by a mapping.")
        return cls(
            name=str(name),
            type=str(payload.get("type") or "String"),
            required=bool(payload.get("required", False)),
            max_length=_constraint(name, payload, "maxLength", int),
            min=_constraint(name, payload, "min", _number),
            max=_constraint(name, payload, "max", _number),
        )


@dataclass(frozen=True)
class SchemaDefinition:
    """Field-type/constraint description of one collection."""

    collection: str
    label: str = ""
    fields: Dict[str, FieldSpec] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SchemaDefinition":
        """Parse ``{collection, label, fields}``; ``className`` is accepted as
        an alias for ``collection`` since Parse-style servers report it that way.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Schema payload must be a mapping.")
        collection = payload.get("collection") or payload.get("className")
        if not isinstance(collection, str) or not collection.strip():
            raise ValueError("Schema payload requires a collection name.")
        raw_fields = payload.get("fields") or {}
        if not isinstance(raw_fields, Mapping):
            raise ValueError(f"Schema '{collection}' fields must be a mapping.")
        fields = {
            str(name): FieldSpec.from_payload(str(name), spec)
            for name, spec in raw_fields.items()
        }
        return cls(
            collection=collection,
            label=str(payload.get("label") or collection),
            fields=fields,
        )

    def fields_of_type(self, type_name: str) -> List[str]:
        """Names of fields declared with ``type_name``, in declaration order."""
        return [name for name, spec in self.fields.items() if spec.type == type_name]


class SchemaRegistry:
    """Read-only lookup of schemas by collection name.

    The main presenter replaces the content once schemas are fetched; list and
    form presenters only read from it.
    """

    def __init__(self, schemas: Iterable[SchemaDefinition] = ()) -> None:
        self._schemas: Dict[str, SchemaDefinition] = {}
        self.replace(schemas)

    @classmethod
    def from_payload(cls, payload: Iterable[Mapping[str, Any]]) -> "SchemaRegistry":
        return cls(SchemaDefinition.from_payload(item) for item in payload)

    def replace(self, schemas: Iterable[SchemaDefinition]) -> None:
        self._schemas = {schema.collection: schema for schema in schemas}

    def get(self, collection: str) -> Optional[SchemaDefinition]:
        return self._schemas.get(collection)

    def collections(self) -> List[str]:
        return list(self._schemas.keys())

    def __contains__(self, collection: object) -> bool:
        return collection in self._schemas

    def __iter__(self) -> Iterator[SchemaDefinition]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)


@dataclass(frozen=True)
class CurrentUser:
    """Signed-in user as reported by the session endpoint."""

    id: Optional[str] = None
    username: str = ""
    roles: List[str] = field(default_factory=list)
    is_master: bool = False

    @classmethod
    def from_payload(cls, payload: Record) -> "CurrentUser":
        roles = payload.get("roles") or []
        if isinstance(roles, str):
            roles = [roles]
        object_id = payload.get(ID_FIELD) or payload.get("objectId")
        return cls(
            id=str(object_id) if object_id is not None else None,
            username=str(payload.get("username") or ""),
            roles=[str(role) for role in roles],
            is_master=bool(payload.get("isMaster", False)),
        )

    @property
    def has_access(self) -> bool:
        return bool(self.roles) or self.is_master
