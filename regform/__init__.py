"""regform: a validated registration form with remote submission."""

__version__ = "0.1.0"

from regform.client import RegistrationClient, RegistrationReply, RegistrationTransportError
from regform.state import FieldEvent, FieldSet, FormState, ServerOutcome, change_field, reduce
from regform.submission import submit

__all__ = [
    "__version__",
    "FieldEvent",
    "FieldSet",
    "FormState",
    "RegistrationClient",
    "RegistrationReply",
    "RegistrationTransportError",
    "ServerOutcome",
    "change_field",
    "reduce",
    "submit",
]
