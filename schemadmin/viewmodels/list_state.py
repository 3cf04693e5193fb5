"""Paginated collection state owned by ``ListPresenter``.

Call context:
    ``ListPresenter`` mutates one instance per mounted list page and replaces
    it wholesale when the collection route changes. Views read it to render
    rows, the selection column and the infinite-scroll boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..domain.entities import ID_FIELD
from ..domain.ports import ObjectId, Record


def _default_sort() -> Dict[str, int]:
    return {"createdAt": -1}


@dataclass
class ListState:
    """Accumulated rows, selection and query inputs of a list page.

    ``objects`` keeps arrival order and grows with every page after the first.
    ``selected`` is an ordered, duplicate-free list of ids.
    """

    objects: List[Record] = field(default_factory=list)
    selected: List[ObjectId] = field(default_factory=list)
    count: int = 0
    current: int = 1
    limit: int = 20
    search: str = ""
    filters: Dict[str, Any] = field(default_factory=dict)
    sort: Dict[str, int] = field(default_factory=_default_sort)
    loading: bool = False
    in_flight: int = field(default=0, repr=False)

    @property
    def has_more(self) -> bool:
        """True while the server reports more rows than are materialized."""
        return self.count > len(self.objects)

    def loaded_ids(self) -> List[ObjectId]:
        return [obj[ID_FIELD] for obj in self.objects if obj.get(ID_FIELD) is not None]

    def is_selected(self, object_id: ObjectId) -> bool:
        return object_id in self.selected


__all__ = ["ListState"]
