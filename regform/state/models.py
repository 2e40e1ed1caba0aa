"""Form state models.

All models are frozen: an edit produces a new instance, so anything that
holds the previous state can tell that it changed.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from regform.schema.rules import ATTRIBUTE_NAMES, wire_name

_ATTRIBUTE_BY_WIRE = {wire: attr for attr, wire in ATTRIBUTE_NAMES.items()}


def attribute_name(name: str) -> str:
    """Return the model attribute name for a field's wire or attribute name."""
    return _ATTRIBUTE_BY_WIRE[wire_name(name)]


class FieldSet(BaseModel):
    """Current input of the four form fields.

    Attribute names are snake_case; the JSON body sent to the endpoint
    uses the camelCase aliases.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    username: str = ""
    fav_language: str = Field(default="", alias="favLanguage")
    fav_food: str = Field(default="", alias="favFood")
    agreement: bool = False

    def get(self, name: str) -> str | bool:
        """Get a field value by wire or attribute name."""
        return getattr(self, attribute_name(name))

    def replace(self, name: str, value: str | bool) -> FieldSet:
        """Return a copy with one field replaced.

        Raises:
            ValidationError: If ``value`` has the wrong type for the field.
        """
        data = {**self.model_dump(), attribute_name(name): value}
        return FieldSet.model_validate(data, strict=True)

    def to_payload(self) -> dict:
        """Request body for the registration endpoint."""
        return self.model_dump(by_alias=True)


class ErrorSet(BaseModel):
    """Per-field error messages; an empty string means no error."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    username: str = ""
    fav_language: str = Field(default="", alias="favLanguage")
    fav_food: str = Field(default="", alias="favFood")
    agreement: str = ""

    def get(self, name: str) -> str:
        """Get a field's message by wire or attribute name."""
        return getattr(self, attribute_name(name))

    def with_error(self, name: str, message: str) -> ErrorSet:
        """Return a copy with one field's message replaced."""
        return self.model_copy(update={attribute_name(name): message})

    @property
    def has_errors(self) -> bool:
        """Whether any field currently shows an error."""
        return any(self.model_dump().values())


class ServerOutcome(BaseModel):
    """Message returned by the endpoint for the last submission.

    At most one of ``success_message`` and ``failure_message`` is set.
    """

    model_config = ConfigDict(frozen=True)

    success_message: str | None = None
    failure_message: str | None = None

    @model_validator(mode="after")
    def validate_exclusive(self) -> ServerOutcome:
        """Ensure success and failure are not both set."""
        if self.success_message is not None and self.failure_message is not None:
            raise ValueError("Cannot set both 'success_message' and 'failure_message'")
        return self

    @classmethod
    def success(cls, message: str) -> ServerOutcome:
        return cls(success_message=message)

    @classmethod
    def failure(cls, message: str) -> ServerOutcome:
        return cls(failure_message=message)

    @property
    def is_empty(self) -> bool:
        return self.success_message is None and self.failure_message is None


class FormState(BaseModel):
    """Everything the registration screen shows.

    Attributes:
        values: Current field input.
        errors: Per-field messages from the latest check of each field.
        outcome: Server message from the last submission attempt.
        enabled: Whether ``values`` passed validation when last checked.
    """

    model_config = ConfigDict(frozen=True)

    values: FieldSet = Field(default_factory=FieldSet)
    errors: ErrorSet = Field(default_factory=ErrorSet)
    outcome: ServerOutcome = Field(default_factory=ServerOutcome)
    enabled: bool = False

    @classmethod
    def initial(cls) -> FormState:
        """State of a freshly opened form."""
        return cls()
