"""Edit state of the create/edit form page.

Call context:
    ``FormPresenter`` replaces one instance on every ``initialize`` and mutates
    it as fields change and saves complete. Views read it to render inputs,
    field errors and the submit button state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from ..domain.entities import NEW_OBJECT_ID
from ..domain.ports import ObjectId, Record


@dataclass
class FormState:
    """Single-object edit state owned by ``FormPresenter``.

    ``object`` is what the form renders (last loaded/saved object overlaid with
    ``change``); ``original`` is the snapshot ``dirty`` is computed against.
    """

    object_id: Optional[ObjectId] = None
    object: Record = field(default_factory=dict)
    original: Record = field(default_factory=dict)
    change: Record = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)
    advanced: bool = False
    dirty: bool = False
    submitting: bool = False
    loading: bool = False

    @property
    def is_new(self) -> bool:
        return self.object_id == NEW_OBJECT_ID


__all__ = ["FormState"]
