"""Low-level HTTP client for the Directus REST API.

Handles static-token authentication, path resolution, error decoding and
JSON (de)serialization.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import requests

from .exceptions import ConfigurationError, DirectusAPIError, DirectusError, ValidationError
from .paths import resolve_path

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30.0


class DirectusClient:
    """HTTP client for the Directus REST API authenticated by a static token.

    Features:
    - Bearer token attached to every request
    - Centralized error handling (structured Directus error bodies)
    - Per-call deadlines capped by the configured timeout

    Usage:
        client = DirectusClient("http://directus:8055", "static-token")
        role = client.get_item("roles", "4b2f...")
        client.update_item("roles", "4b2f...", {"name": "Editors"})
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: Optional[float] = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize Directus client.

        Args:
            base_url: Directus instance URL (e.g., "http://directus:8055")
            token: Static access token
            timeout: Default request timeout in seconds (0/None uses 30s)
            session: Optional pre-built requests session

        Raises:
            ConfigurationError: If base URL or token is missing or malformed
        """
        if not base_url:
            raise ConfigurationError("base URL is required")
        parsed = urlparse(base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(f"invalid base URL: {base_url!r}")
        if not token:
            raise ConfigurationError("token is required")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout or REQUEST_TIMEOUT
        self._session = session or requests.Session()
        self._session.headers.update({
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        })

    def __repr__(self) -> str:
        return f"DirectusClient(base_url={self.base_url!r}, timeout={self.timeout})"

    # ─────────────────────────────────────────────────────────────────────────
    # HTTP verbs
    # ─────────────────────────────────────────────────────────────────────────

    def get(self, path: str, params: Optional[Dict[str, str]] = None, *, timeout: Optional[float] = None) -> requests.Response:
        """Execute GET request.

        Args:
            path: API endpoint path (e.g., "/roles/abc")
            params: Query parameters
            timeout: Caller deadline in seconds

        Returns:
            Response object

        Raises:
            DirectusAPIError: On HTTP error
        """
        return self._request("GET", path, params=params, timeout=timeout)

    def post(self, path: str, json: Any = None, *, timeout: Optional[float] = None) -> requests.Response:
        """Execute POST request with a JSON payload."""
        return self._request("POST", path, json=json, timeout=timeout)

    def patch(self, path: str, json: Any = None, *, timeout: Optional[float] = None) -> requests.Response:
        """Execute PATCH request with a JSON payload."""
        return self._request("PATCH", path, json=json, timeout=timeout)

    def delete(self, path: str, *, timeout: Optional[float] = None) -> requests.Response:
        """Execute DELETE request."""
        return self._request("DELETE", path, timeout=timeout)

    # ─────────────────────────────────────────────────────────────────────────
    # Collection operations
    # ─────────────────────────────────────────────────────────────────────────

    def get_item(
        self,
        collection: str,
        item_id: str,
        params: Optional[Dict[str, str]] = None,
        *,
        timeout: Optional[float] = None,
    ) -> Any:
        """Retrieve a single item, optionally with query parameters.

        Query parameters are how relational fields are expanded, e.g.
        ``{"fields": "id,policies.id,policies.policy"}``.

        Returns:
            The ``data`` member of the response body
        """
        _require(collection=collection, id=item_id)
        resp = self.get(resolve_path(collection, item_id), params=params or None, timeout=timeout)
        return self._decode(resp)

    def list_items(
        self,
        collection: str,
        params: Optional[Dict[str, str]] = None,
        *,
        timeout: Optional[float] = None,
    ) -> list:
        """Retrieve all items of a collection."""
        _require(collection=collection)
        resp = self.get(resolve_path(collection), params=params or None, timeout=timeout)
        return self._decode(resp) or []

    def create_item(self, collection: str, data: Any, *, timeout: Optional[float] = None) -> Any:
        """Create an item and return the created representation."""
        _require(collection=collection)
        if data is None:
            raise ValidationError("data is required")
        resp = self.post(resolve_path(collection), json=data, timeout=timeout)
        return self._decode(resp)

    def update_item(self, collection: str, item_id: str, data: Any, *, timeout: Optional[float] = None) -> Any:
        """Partially update an item and return the updated representation."""
        _require(collection=collection, id=item_id)
        if data is None:
            raise ValidationError("data is required")
        resp = self.patch(resolve_path(collection, item_id), json=data, timeout=timeout)
        return self._decode(resp)

    def delete_item(self, collection: str, item_id: str, *, timeout: Optional[float] = None) -> None:
        """Delete an item."""
        _require(collection=collection, id=item_id)
        self.delete(resolve_path(collection, item_id), timeout=timeout)

    def ping(self, *, timeout: Optional[float] = None) -> None:
        """Check that the Directus server is reachable.

        Raises:
            DirectusError: If the server does not answer "pong"
        """
        resp = self.get("/server/ping", timeout=timeout)
        if resp.text != "pong":
            raise DirectusError(f"unexpected ping response: {resp.text}")

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _effective_timeout(self, timeout: Optional[float]) -> float:
        """Apply the caller's deadline when it is tighter than the configured one."""
        if timeout is None:
            return self.timeout
        return min(timeout, self.timeout)

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        kwargs["timeout"] = self._effective_timeout(kwargs.get("timeout"))
        logger.debug(f"{method} {path}")
        resp = self._session.request(method, url, **kwargs)
        self._handle_error(resp, path)
        return resp

    @staticmethod
    def _decode(resp: requests.Response) -> Any:
        """Unwrap the ``data`` envelope of a successful response."""
        if resp.status_code == 204 or not resp.content:
            return None
        try:
            body = resp.json()
        except ValueError as e:
            raise DirectusError(f"failed to decode response: {e}") from e
        if isinstance(body, dict):
            return body.get("data")
        return body

    def _handle_error(self, resp: requests.Response, endpoint: str) -> None:
        """Centralized error handling for HTTP responses.

        Directus returns errors as
        ``{"errors": [{"message": "...", "extensions": {"code": "..."}}]}``;
        anything else falls back to the raw body text.

        Raises:
            DirectusAPIError: If response status indicates error
        """
        if resp.status_code < 400:
            return

        message = resp.text
        code = None
        try:
            body = resp.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            errors = body.get("errors") or []
            first = errors[0] if errors and isinstance(errors[0], dict) else {}
            if first.get("message"):
                message = first["message"]
                code = (first.get("extensions") or {}).get("code") or None

        raise DirectusAPIError(resp.status_code, message, endpoint, code)


def _require(**params: str) -> None:
    """Raise ValidationError for the first empty required parameter."""
    for name, value in params.items():
        if not value:
            raise ValidationError(f"{name} is required")
