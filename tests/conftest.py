"""Pytest shared fixtures: stubbed Directus responses and a recording session."""
import json
import pathlib
import sys
from types import SimpleNamespace

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from directus_iac.core.directus import DirectusClient

BASE_URL = "http://directus.test"
TOKEN = "test-token"


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch, request):
    """
    Prevent unit tests from reaching a real Directus instance.

    Integration tests are explicitly marked with @pytest.mark.integration and
    are allowed to perform real HTTP calls by skipping this fixture.
    """
    if request.node.get_closest_marker("integration"):
        return

    def _refuse(self, method, url, *args, **kwargs):
        raise RuntimeError(f"Unexpected network access in unit test: {method} {url}")

    monkeypatch.setattr(requests.Session, "request", _refuse)


# ─────────────────────────────────────────────────────────────────────────────
# Stub HTTP layer
# ─────────────────────────────────────────────────────────────────────────────
class StubResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code: int = 200, text=None):
        self._payload = payload
        self.status_code = status_code
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text
        self.content = text.encode("utf-8")

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload


class FakeSession:
    """Records requests and answers them from queued stub responses.

    Responses are registered per (method, path); when several are queued for
    the same route they are returned in order, the last one repeating.
    """

    def __init__(self):
        self.headers = {}
        self.calls = []
        self._routes = {}

    def add(self, method, path, payload=None, status_code=200, text=None):
        self._routes.setdefault((method, path), []).append(StubResponse(payload, status_code, text))

    def request(self, method, url, **kwargs):
        assert url.startswith(BASE_URL), url
        path = url[len(BASE_URL):]
        self.calls.append(SimpleNamespace(
            method=method,
            path=path,
            params=kwargs.get("params"),
            json=kwargs.get("json"),
            timeout=kwargs.get("timeout"),
        ))
        queue = self._routes.get((method, path))
        if not queue:
            raise AssertionError(f"Unexpected request: {method} {path}")
        return queue.pop(0) if len(queue) > 1 else queue[0]

    def writes(self):
        """Calls that modify remote state."""
        return [call for call in self.calls if call.method in ("POST", "PATCH", "DELETE")]


@pytest.fixture()
def fake_session():
    return FakeSession()


@pytest.fixture()
def client(fake_session):
    """DirectusClient wired to the recording session."""
    return DirectusClient(BASE_URL, TOKEN, session=fake_session)


@pytest.fixture()
def api_error():
    """Build a structured Directus error body."""
    def _build(message: str, code: str = ""):
        error = {"message": message}
        if code:
            error["extensions"] = {"code": code}
        return {"errors": [error]}
    return _build
