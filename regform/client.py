"""HTTP client for the remote registration endpoint."""

from __future__ import annotations

import logging

import jsonschema
import requests
from pydantic import BaseModel

from regform.config import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT, Settings
from regform.state.models import FieldSet

logger = logging.getLogger(__name__)


class RegistrationTransportError(Exception):
    """Raised when no response was received from the endpoint."""

    def __init__(self, endpoint: str, cause: Exception) -> None:
        self.endpoint = endpoint
        self.cause = cause
        super().__init__(f"No response from {endpoint}: {cause}")


class RegistrationReply(BaseModel):
    """What the endpoint said about a registration.

    ``message`` is None when the body was not JSON or carried no string
    ``message`` field.
    """

    ok: bool
    status_code: int
    message: str | None = None


REPLY_SCHEMA = {
    "type": "object",
    "properties": {"message": {"type": "string"}},
    "required": ["message"],
}


def _read_message(response: requests.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None

    try:
        jsonschema.validate(body, REPLY_SCHEMA)
    except jsonschema.ValidationError as e:
        logger.debug("Reply body without a usable message: %s", e.message)
        return None
    return body["message"]


class RegistrationClient:
    """Posts registrations to the endpoint.

    Usable as a context manager; a session created by the client is closed
    on exit, a session passed in is left to its owner.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        session: requests.Session | None = None,
    ) -> RegistrationClient:
        return cls(settings.endpoint, settings.timeout, session=session)

    def register(self, values: FieldSet) -> RegistrationReply:
        """Send one registration.

        Args:
            values: The form values to send as the JSON body.

        Returns:
            RegistrationReply for any HTTP response, 2xx or not.

        Raises:
            RegistrationTransportError: If no response was received.
        """
        logger.info("Posting registration for %r to %s", values.username, self.endpoint)
        try:
            response = self.session.post(
                self.endpoint,
                json=values.to_payload(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("Registration request to %s failed: %s", self.endpoint, e)
            raise RegistrationTransportError(self.endpoint, e) from e

        logger.info("Registration endpoint replied %s", response.status_code)
        return RegistrationReply(
            ok=200 <= response.status_code < 300,
            status_code=response.status_code,
            message=_read_message(response),
        )

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> RegistrationClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
