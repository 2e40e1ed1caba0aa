"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Callable
from typing import Any

import pytest
import requests
from requests.adapters import BaseAdapter

from regform.client import RegistrationClient
from regform.state import FormState, fill

TEST_ENDPOINT = "https://registration.test/registration"


class StubAdapter(BaseAdapter):
    """Transport adapter that answers every request with a canned reply."""

    def __init__(
        self,
        status_code: int = 201,
        body: Any = None,
        raw_body: bytes | None = None,
        error: Exception | None = None,
    ) -> None:
        super().__init__()
        self.status_code = status_code
        self.body = body
        self.raw_body = raw_body
        self.error = error
        self.requests: list[requests.PreparedRequest] = []
        self.timeouts: list[Any] = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error

        response = requests.Response()
        response.status_code = self.status_code
        response.headers["Content-Type"] = "application/json"
        response.encoding = "utf-8"
        if self.raw_body is not None:
            response._content = self.raw_body
        else:
            response._content = json.dumps(self.body).encode("utf-8")
        response.url = request.url
        response.request = request
        return response

    def close(self) -> None:
        pass

    def last_payload(self) -> dict:
        """JSON body of the most recent request."""
        return json.loads(self.requests[-1].body)


@pytest.fixture
def make_client() -> Callable[[StubAdapter], RegistrationClient]:
    """Build a RegistrationClient whose session is served by a StubAdapter."""

    def _make(adapter: StubAdapter) -> RegistrationClient:
        session = requests.Session()
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return RegistrationClient(TEST_ENDPOINT, timeout=5.0, session=session)

    return _make


@pytest.fixture
def valid_state() -> FormState:
    """A form filled in with valid values (alice / rust / pizza / agreed)."""
    return fill(
        FormState.initial(),
        username="alice",
        favLanguage="rust",
        favFood="pizza",
        agreement=True,
    )


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Keep tests away from the user's config file and environment."""
    home = tmp_path / "regform-home"
    monkeypatch.setenv("REGFORM_HOME", str(home))
    monkeypatch.delenv("REGFORM_ENDPOINT", raising=False)
    monkeypatch.delenv("REGFORM_TIMEOUT", raising=False)
    return home


@pytest.fixture
def stub_adapter() -> type[StubAdapter]:
    """The StubAdapter class, for building canned endpoint replies."""
    return StubAdapter
