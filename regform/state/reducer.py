"""State transitions for the registration form.

Every user event and every submission reply is an action. ``reduce`` takes
the current FormState and an action and returns the next FormState; it
never mutates its input.
"""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import BaseModel, ValidationError

from regform.schema.fields import WidgetKind
from regform.schema.rules import AGREEMENT, is_valid, validate_field, wire_name
from regform.state.models import ErrorSet, FieldSet, FormState, ServerOutcome

logger = logging.getLogger(__name__)


class FieldEvent(BaseModel):
    """Raw change event from a form widget.

    Checkbox widgets report ``checked``; text, radio and select widgets
    report ``value``.
    """

    name: str
    kind: WidgetKind = "text"
    value: str | None = None
    checked: bool | None = None

    def field_value(self) -> str | bool:
        """The value this event writes into the form."""
        # agreement is a checkbox whatever widget reported it
        if self.kind == "checkbox" or wire_name(self.name) == AGREEMENT:
            return bool(self.checked)
        return self.value if self.value is not None else ""


class FieldChanged(BaseModel):
    """A field was edited."""

    kind: Literal["field_changed"] = "field_changed"
    name: str
    value: str | bool


class SubmissionSucceeded(BaseModel):
    """The endpoint accepted the registration."""

    kind: Literal["submission_succeeded"] = "submission_succeeded"
    message: str


class SubmissionFailed(BaseModel):
    """The endpoint rejected the registration, or could not be reached."""

    kind: Literal["submission_failed"] = "submission_failed"
    message: str


Action = FieldChanged | SubmissionSucceeded | SubmissionFailed


def recompute_enablement(state: FormState) -> FormState:
    """Set ``enabled`` from a check of the whole FieldSet."""
    enabled = is_valid(state.values)
    if enabled == state.enabled:
        return state
    return state.model_copy(update={"enabled": enabled})


def _apply_field_change(state: FormState, action: FieldChanged) -> FormState:
    result = validate_field(action.name, action.value)
    errors = state.errors.with_error(action.name, result.message)

    # a value of the wrong type is reported but never stored
    try:
        values = state.values.replace(action.name, action.value)
    except ValidationError:
        values = state.values

    logger.debug("Field %s changed (valid=%s)", result.field, result.valid)

    return recompute_enablement(state.model_copy(update={"values": values, "errors": errors}))


def reduce(state: FormState, action: Action) -> FormState:
    """Return the state that follows ``action``.

    Args:
        state: The current state.
        action: A FieldChanged, SubmissionSucceeded or SubmissionFailed.

    Returns:
        The next state.

    Raises:
        UnknownFieldError: If a FieldChanged names a field the form lacks.
        TypeError: If ``action`` is not a known action.
    """
    if isinstance(action, FieldChanged):
        return _apply_field_change(state, action)

    if isinstance(action, SubmissionSucceeded):
        reset = state.model_copy(
            update={
                "values": FieldSet(),
                "errors": ErrorSet(),
                "outcome": ServerOutcome.success(action.message),
            }
        )
        return recompute_enablement(reset)

    if isinstance(action, SubmissionFailed):
        return state.model_copy(update={"outcome": ServerOutcome.failure(action.message)})

    raise TypeError(f"Unknown action: {type(action).__name__}")


def change_field(state: FormState, event: FieldEvent) -> FormState:
    """Apply a widget change event to the form."""
    return reduce(state, FieldChanged(name=event.name, value=event.field_value()))


def fill(state: FormState, **values: str | bool) -> FormState:
    """Apply several field edits in order, keyed by wire or attribute name."""
    for name, value in values.items():
        state = reduce(state, FieldChanged(name=name, value=value))
    return state
