"""Quick-search condition builder for list screens."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional

from .entities import SchemaDefinition
from .field_kinds import DEFAULT_KINDS, FieldKindRegistry
from .ports import Condition


def searchable_fields(
    schema: Optional[SchemaDefinition],
    kinds: FieldKindRegistry = DEFAULT_KINDS,
) -> List[str]:
    """Fields whose declared kind takes part in quick search (String only)."""
    if schema is None:
        return []
    names: List[str] = []
    for name, spec in schema.fields.items():
        kind = kinds.kind_for(spec.type)
        if kind is not None and kind.searchable:
            names.append(name)
    return names


def build_where(
    search: str,
    filters: Mapping[str, Any],
    schema: Optional[SchemaDefinition],
    *,
    kinds: FieldKindRegistry = DEFAULT_KINDS,
) -> Condition:
    """Merge the quick-search OR group with the active filters.

    Filters are sibling keys of ``$or`` and win on key collisions. A search
    with no searchable field to target contributes nothing.
    """
    term = (search or "").strip()
    if not term:
        return dict(filters)
    fields = searchable_fields(schema, kinds)
    if not fields:
        return dict(filters)
    pattern = re.escape(term)
    where: Dict[str, Any] = {
        "$or": [{name: {"$regex": pattern, "$options": "i"}} for name in fields]
    }
    where.update(filters)
    return where


__all__ = ["build_where", "searchable_fields"]
