"""Domain package exports for value objects and ports."""

from .entities import (
    ID_FIELD,
    NEW_OBJECT_ID,
    CollectionQuery,
    CurrentUser,
    FieldSpec,
    SchemaDefinition,
    SchemaRegistry,
    form_path,
    list_path,
)
from .ports import (
    Condition,
    ConfirmRequest,
    Decision,
    ObjectId,
    Record,
    Severity,
    UseCaseError,
)
from .search import build_where
from .validation import ValidationResult, validate, validate_form

__all__ = [
    "CollectionQuery",
    "Condition",
    "ConfirmRequest",
    "CurrentUser",
    "Decision",
    "FieldSpec",
    "ID_FIELD",
    "NEW_OBJECT_ID",
    "ObjectId",
    "Record",
    "SchemaDefinition",
    "SchemaRegistry",
    "Severity",
    "UseCaseError",
    "ValidationResult",
    "build_where",
    "form_path",
    "list_path",
    "validate",
    "validate_form",
]
