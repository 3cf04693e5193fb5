from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from schemadmin.adapters.api_errors import ApiClientError
from schemadmin.domain.entities import ID_FIELD
from schemadmin.domain.ports import (
    CollectionPort,
    Condition,
    ObjectId,
    Record,
    SessionPort,
)

_MISSING = object()


def matches(record: Mapping[str, Any], where: Mapping[str, Any]) -> bool:
    """Evaluate the subset of query operators the presenters emit."""
    for key, expected in where.items():
        if key == "$or":
            if not any(matches(record, sub) for sub in expected):
                return False
            continue
        if key == "$and":
            if not all(matches(record, sub) for sub in expected):
                return False
            continue
        value = record.get(key, _MISSING)
        if isinstance(expected, Mapping) and any(str(op).startswith("$") for op in expected):
            if not _match_operators(value, expected):
                return False
        elif value is _MISSING or value != expected:
            return False
    return True


def _match_operators(value: Any, ops: Mapping[str, Any]) -> bool:
    present = value is not _MISSING and value is not None
    for op, arg in ops.items():
        if op == "$regex":
            flags = re.IGNORECASE if "i" in str(ops.get("$options", "")) else 0
            if not present or not re.search(str(arg), str(value), flags):
                return False
        elif op == "$options":
            continue
        elif op == "$exists":
            if bool(arg) != (value is not _MISSING):
                return False
        elif op == "$in":
            if not present or value not in arg:
                return False
        elif op == "$nin":
            if present and value in arg:
                return False
        elif op == "$ne":
            if present and value == arg:
                return False
        elif op in ("$gt", "$gte", "$lt", "$lte"):
            if not present:
                return False
            try:
                if op == "$gt" and not value > arg:
                    return False
                if op == "$gte" and not value >= arg:
                    return False
                if op == "$lt" and not value < arg:
                    return False
                if op == "$lte" and not value <= arg:
                    return False
            except TypeError:
                return False
        else:
            raise ValueError(f"Unsupported query operator: {op}")
    return True


def _sort_records(records: List[Record], sort: Mapping[str, int]) -> List[Record]:
    ordered = list(records)
    # Stable sorts applied from the least significant key.
    for key, direction in reversed(list(sort.items())):
        present = [r for r in ordered if r.get(key) is not None]
        absent = [r for r in ordered if r.get(key) is None]
        present.sort(key=lambda r: r[key], reverse=direction < 0)
        ordered = present + absent
    return ordered


@dataclass
class CollectionMemory(CollectionPort, SessionPort):
    """Offline substitute for ``CollectionRestAdapter`` backed by dicts."""

    user: Record = field(default_factory=lambda: {ID_FIELD: "admin", "username": "admin", "isMaster": True})
    schema_payload: List[Record] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._collections: Dict[str, Dict[ObjectId, Record]] = {}
        self.signed_out = False

    # ---------- CollectionPort ----------

    def find(self, collection: str, query: Mapping[str, Any]) -> List[Record]:
        rows = [r for r in self._rows(collection) if matches(r, query.get("where") or {})]
        rows = _sort_records(rows, query.get("sort") or {})
        skip = int(query.get("skip", 0))
        limit = int(query.get("limit", len(rows)))
        return [copy.deepcopy(r) for r in rows[skip:skip + limit]]

    def count(self, collection: str, where: Condition) -> int:
        return sum(1 for r in self._rows(collection) if matches(r, where or {}))

    def get(self, collection: str, object_id: ObjectId) -> Record:
        record = self._collections.get(collection, {}).get(object_id)
        if record is None:
            raise ApiClientError(
                f"get {collection}/{object_id}: Object not found. (HTTP 404)",
                status=404,
                context=f"get {collection}/{object_id}",
            )
        return copy.deepcopy(record)

    def upsert(self, collection: str, obj: Record) -> Record:
        now = datetime.now(timezone.utc).isoformat()
        bucket = self._collections.setdefault(collection, {})
        object_id = obj.get(ID_FIELD)
        if object_id:
            current = self.get(collection, object_id)
            current.update(obj)
            current["updatedAt"] = now
        else:
            current = dict(obj)
            current[ID_FIELD] = uuid4().hex[:10]
            current["createdAt"] = now
            current["updatedAt"] = now
        bucket[current[ID_FIELD]] = current
        return copy.deepcopy(current)

    def delete(self, collection: str, object_id: ObjectId) -> None:
        self.get(collection, object_id)
        del self._collections[collection][object_id]

    # ---------- SessionPort ----------

    def current_user(self) -> Record:
        return dict(self.user)

    def sign_out(self) -> None:
        self.signed_out = True

    def schemas(self) -> List[Record]:
        return copy.deepcopy(self.schema_payload)

    # ---------- Test helpers ----------

    def seed(self, collection: str, records: List[Record]) -> List[Record]:
        """Insert records as-is (ids kept when present) and return them."""
        stored: List[Record] = []
        bucket = self._collections.setdefault(collection, {})
        for record in records:
            if record.get(ID_FIELD):
                bucket[record[ID_FIELD]] = dict(record)
                stored.append(dict(record))
            else:
                stored.append(self.upsert(collection, record))
        return stored

    def _rows(self, collection: str) -> List[Record]:
        return list(self._collections.get(collection, {}).values())
