"""Closed set of declared field kinds and their per-kind rules.

Validators and the list search look up a kind through ``FieldKindRegistry``
instead of branching on raw type strings. New kinds are added by registering
another ``FieldKind`` implementation.
"""

from __future__ import annotations


import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, Mapping, Optional

from .entities import FieldSpec


class FieldKind:
    """Capability shared by every declared field kind."""

    name: str = ""
    render_hint: str = "text"
    searchable: bool = False

    def validate(self, value: Any, spec: FieldSpec) -> Optional[str]:
        """Return an error message for a present value, ``None`` when valid."""
        return None


@dataclass(frozen=True)
class StringKind(FieldKind):
    name: str = "String"
    render_hint: str = "text"
    searchable: bool = True

    def validate(self, value: Any, spec: FieldSpec) -> Optional[str]:
        if spec.max_length is not None and len(str(value)) > spec.max_length:
            return f"{spec.name} must be less than {spec.max_length} characters"
        return None


@dataclass(frozen=True)
class NumberKind(FieldKind):
    name: str = "Number"
    render_hint: str = "number"

    def validate(self, value: Any, spec: FieldSpec) -> Optional[str]:
        number = coerce_number(value)
        if number is None:
            return f"{spec.name} must be a valid number"
        if spec.min is not None and number < spec.min:
            return f"{spec.name} must be at least {spec.min}"
        if spec.max is not None and number > spec.max:
            return f"{spec.name} must be at most {spec.max}"
        return None


@dataclass(frozen=True)
class BooleanKind(FieldKind):
    name: str = "Boolean"
    render_hint: str = "checkbox"


@dataclass(frozen=True)
class DateKind(FieldKind):
    name: str = "Date"
    render_hint: str = "date"

    def validate(self, value: Any, spec: FieldSpec) -> Optional[str]:
        if isinstance(value, (date, datetime)):
            return None
        # Parse-style servers wrap dates as {"__type": "Date", "iso": "..."}.
        if isinstance(value, Mapping):
            value = value.get("iso")
        if isinstance(value, str):
            text = value.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            try:
                datetime.fromisoformat(text)
                return None
            except ValueError:
                pass
        return f"{spec.name} must be a valid date"


def coerce_number(value: Any) -> Optional[float]:
    """Numeric coercion used by the Number rule; ``None`` when it fails."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


class FieldKindRegistry:
    """Lookup of field kinds by declared type name."""

    def __init__(self, kinds: Iterable[FieldKind]) -> None:
        self._kinds: Dict[str, FieldKind] = {kind.name: kind for kind in kinds}

    @classmethod
    def default(cls) -> "FieldKindRegistry":
        return cls([StringKind(), NumberKind(), BooleanKind(), DateKind()])

    def kind_for(self, type_name: str) -> Optional[FieldKind]:
        """Return the kind for ``type_name``; unknown types have no kind."""
        return self._kinds.get(type_name)

    def names(self) -> Iterable[str]:
        return self._kinds.keys()


DEFAULT_KINDS = FieldKindRegistry.default()


__all__ = [
    "BooleanKind",
    "DEFAULT_KINDS",
    "DateKind",
    "FieldKind",
    "FieldKindRegistry",
    "NumberKind",
    "StringKind",
    "coerce_number",
]
