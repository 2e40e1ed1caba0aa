"""Submission of the registration form.

The form is sent as-is: ``FormState.enabled`` gates the submit control in
the UI but is not checked here. The endpoint decides whether the
registration is accepted.
"""

import logging

from regform.client import RegistrationClient, RegistrationTransportError
from regform.state.models import FormState
from regform.state.reducer import SubmissionFailed, SubmissionSucceeded, reduce

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Unable to reach the registration service. Please try again."
DEFAULT_SUCCESS_MESSAGE = "Registration succeeded"


def submit(state: FormState, client: RegistrationClient) -> FormState:
    """Send the current values and fold the reply into the form state.

    On success the values are reset and the success message is shown. On
    a rejection, or when no response arrives at all, the values are kept
    and a failure message is shown.

    Args:
        state: The form state at the time of the submit action.
        client: Client for the registration endpoint.

    Returns:
        The state after the submission attempt.
    """
    try:
        reply = client.register(state.values)
    except RegistrationTransportError as e:
        logger.warning("Submission not delivered: %s", e)
        return reduce(state, SubmissionFailed(message=GENERIC_FAILURE_MESSAGE))

    if reply.ok:
        message = reply.message if reply.message is not None else DEFAULT_SUCCESS_MESSAGE
        return reduce(state, SubmissionSucceeded(message=message))

    message = reply.message
    if message is None:
        message = f"Registration failed (HTTP {reply.status_code})"
    logger.info("Registration rejected: %s", message)
    return reduce(state, SubmissionFailed(message=message))
