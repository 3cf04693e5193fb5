"""Schema-driven form validation.

Only fields declared by the schema are inspected; extra keys on the object are
ignored. The result is data, never an exception: the form presenter uses it as
a submit gate.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .entities import SchemaDefinition
from .field_kinds import DEFAULT_KINDS, FieldKindRegistry


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: Dict[str, str] = field(default_factory=dict)


def is_empty(value: Any) -> bool:
    """Absent, ``None``, blank strings and empty containers count as empty."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def validate(
    obj: Mapping[str, Any],
    schema: Optional[SchemaDefinition],
    *,
    kinds: FieldKindRegistry = DEFAULT_KINDS,
) -> Dict[str, str]:
    """Return a field-keyed error map (first failing rule per field)."""
    errors: Dict[str, str] = {}
    if schema is None:
        return errors
    for name, spec in schema.fields.items():
        value = obj.get(name)
        if is_empty(value):
            if spec.required:
                errors[name] = f"{name} is required"
            continue
        kind = kinds.kind_for(spec.type)
        if kind is None:
            continue
        message = kind.validate(value, spec)
        if message:
            errors[name] = message
    return errors


def validate_form(
    obj: Mapping[str, Any],
    schema: Optional[SchemaDefinition],
    *,
    kinds: FieldKindRegistry = DEFAULT_KINDS,
) -> ValidationResult:
    errors = validate(obj, schema, kinds=kinds)
    return ValidationResult(is_valid=not errors, errors=errors)


__all__ = ["ValidationResult", "is_empty", "validate", "validate_form"]
