"""Form state store and its transitions."""

from regform.state.models import ErrorSet, FieldSet, FormState, ServerOutcome
from regform.state.reducer import (
    Action,
    FieldChanged,
    FieldEvent,
    SubmissionFailed,
    SubmissionSucceeded,
    change_field,
    fill,
    recompute_enablement,
    reduce,
)

__all__ = [
    # Models
    "ErrorSet",
    "FieldSet",
    "FormState",
    "ServerOutcome",
    # Actions
    "Action",
    "FieldChanged",
    "FieldEvent",
    "SubmissionFailed",
    "SubmissionSucceeded",
    # Transitions
    "change_field",
    "fill",
    "recompute_enablement",
    "reduce",
]
