"""Validation rules and layout for the registration form."""

from regform.schema.fields import FORM_FIELDS, FieldOption, FieldSpec, get_field
from regform.schema.rules import (
    FIELD_NAMES,
    FIELD_RULES,
    MESSAGES,
    FieldResult,
    Rule,
    UnknownFieldError,
    ValidationResult,
    is_valid,
    validate_field,
    validate_values,
    wire_name,
)

__all__ = [
    "FIELD_NAMES",
    "FIELD_RULES",
    "FORM_FIELDS",
    "MESSAGES",
    "FieldOption",
    "FieldResult",
    "FieldSpec",
    "Rule",
    "UnknownFieldError",
    "ValidationResult",
    "get_field",
    "is_valid",
    "validate_field",
    "validate_values",
    "wire_name",
]
