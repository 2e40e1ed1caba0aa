"""Validation rules for the registration form.

Each field has an ordered list of rules. Rules are evaluated in order and
the first failing rule's message is reported; later rules are skipped.
"""

from collections.abc import Callable, Mapping
from typing import Any, NamedTuple

from pydantic import BaseModel

USERNAME = "username"
FAV_LANGUAGE = "favLanguage"
FAV_FOOD = "favFood"
AGREEMENT = "agreement"

FIELD_NAMES = (USERNAME, FAV_LANGUAGE, FAV_FOOD, AGREEMENT)

# Python attribute name -> wire name
ATTRIBUTE_NAMES = {
    "username": USERNAME,
    "fav_language": FAV_LANGUAGE,
    "fav_food": FAV_FOOD,
    "agreement": AGREEMENT,
}

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20

LANGUAGE_CHOICES = ("javascript", "rust")
FOOD_CHOICES = ("broccoli", "spaghetti", "pizza")

MESSAGES = {
    "username_required": "username is required",
    "username_min": f"username must be at least {USERNAME_MIN_LENGTH} characters",
    "username_max": f"username cannot exceed {USERNAME_MAX_LENGTH} characters",
    "fav_language_required": "favLanguage is required",
    "fav_language_options": "favLanguage must be either javascript or rust",
    "fav_food_required": "favFood is required",
    "fav_food_options": "favFood must be either broccoli, spaghetti or pizza",
    "agreement_required": "agreement is required",
    "agreement_options": "agreement must be accepted",
}


class UnknownFieldError(KeyError):
    """Raised when a field name is not part of the form."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown form field: {name}")


class Rule(NamedTuple):
    """A single check: the value passes when ``predicate`` returns True."""

    predicate: Callable[[Any], bool]
    message: str


class FieldResult(BaseModel):
    """Result of validating one field value."""

    field: str
    valid: bool
    message: str = ""


class ValidationResult(BaseModel):
    """Result of validating a whole set of form values."""

    valid: bool
    errors: dict[str, str]

    @property
    def has_errors(self) -> bool:
        """Whether any field failed."""
        return len(self.errors) > 0


def _trimmed(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _is_string(value: Any) -> bool:
    # None is let through so that "required" reports it
    return value is None or isinstance(value, str)


def _string_rules(name: str, required: str) -> list[Rule]:
    return [
        Rule(_is_string, f"{name} must be a string"),
        Rule(lambda v: _trimmed(v) != "", required),
    ]


FIELD_RULES: dict[str, list[Rule]] = {
    USERNAME: _string_rules(USERNAME, MESSAGES["username_required"])
    + [
        Rule(lambda v: len(_trimmed(v)) >= USERNAME_MIN_LENGTH, MESSAGES["username_min"]),
        Rule(lambda v: len(_trimmed(v)) <= USERNAME_MAX_LENGTH, MESSAGES["username_max"]),
    ],
    FAV_LANGUAGE: _string_rules(FAV_LANGUAGE, MESSAGES["fav_language_required"])
    + [
        Rule(lambda v: _trimmed(v) in LANGUAGE_CHOICES, MESSAGES["fav_language_options"]),
    ],
    FAV_FOOD: _string_rules(FAV_FOOD, MESSAGES["fav_food_required"])
    + [
        Rule(lambda v: _trimmed(v) in FOOD_CHOICES, MESSAGES["fav_food_options"]),
    ],
    AGREEMENT: [
        Rule(lambda v: v is not None, MESSAGES["agreement_required"]),
        Rule(lambda v: isinstance(v, bool), "agreement must be a boolean"),
        Rule(lambda v: v is True, MESSAGES["agreement_options"]),
    ],
}


def first_failure(name: str, value: Any) -> str | None:
    """Return the message of the first rule ``value`` fails, or None.

    Raises:
        UnknownFieldError: If ``name`` is not a form field.
    """
    for rule in FIELD_RULES[wire_name(name)]:
        if not rule.predicate(value):
            return rule.message
    return None


def validate_field(name: str, value: Any) -> FieldResult:
    """Validate a single field's candidate value.

    Args:
        name: Wire or attribute name of the field (e.g. "favLanguage").
        value: The candidate value.

    Returns:
        FieldResult with the first violated rule's message, if any.

    Raises:
        UnknownFieldError: If ``name`` is not a form field.
    """
    field = wire_name(name)
    message = first_failure(field, value)
    if message is None:
        return FieldResult(field=field, valid=True)
    return FieldResult(field=field, valid=False, message=message)


def wire_name(name: str) -> str:
    """Return the wire name for a field given its wire or attribute name.

    Raises:
        UnknownFieldError: If ``name`` is neither.
    """
    if name in FIELD_RULES:
        return name
    if name in ATTRIBUTE_NAMES:
        return ATTRIBUTE_NAMES[name]
    raise UnknownFieldError(name)


def _as_mapping(values: Any) -> Mapping[str, Any]:
    if isinstance(values, BaseModel):
        return values.model_dump(by_alias=True)
    return {ATTRIBUTE_NAMES.get(key, key): value for key, value in values.items()}


def validate_values(values: Any) -> ValidationResult:
    """Validate every field of a form value set.

    Args:
        values: A FieldSet, or a mapping keyed by wire or attribute names.
            Missing keys are validated as absent values.

    Returns:
        ValidationResult holding one message per failing field.
    """
    mapping = _as_mapping(values)
    errors: dict[str, str] = {}

    for name in FIELD_NAMES:
        message = first_failure(name, mapping.get(name))
        if message is not None:
            errors[name] = message

    return ValidationResult(valid=not errors, errors=errors)


def is_valid(values: Any) -> bool:
    """Whether every field of ``values`` passes its rules."""
    return validate_values(values).valid
