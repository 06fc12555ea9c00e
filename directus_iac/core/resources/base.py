"""Shared plumbing for resource orchestrators."""
from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import requests

from ..audit import safe_log_resource_event
from ..directus.client import DirectusClient
from ..directus.exceptions import DirectusError, ResourceOperationError, ValidationError

logger = logging.getLogger(__name__)


class DirectusResource:
    """Base class for resources managed through the Directus REST API.

    Subclasses set ``type_name`` (registry key), ``resource_type`` (used in
    messages) and ``collection`` (API collection they address).
    """

    type_name = ""
    resource_type = ""
    collection = ""

    def __init__(self, client: DirectusClient, *, audit_enabled: bool = False, operator: str = "automation"):
        """Initialize resource.

        Args:
            client: Directus client shared between resources
            audit_enabled: Record every remote write in the audit trail
            operator: Operator name written into audit events
        """
        self.client = client
        self.audit_enabled = audit_enabled
        self.operator = operator

    @contextmanager
    def _operation(self, operation: str, identifier: Optional[str]) -> Iterator[None]:
        """Wrap API and transport failures with operation context.

        ResourceOperationError raised further down (e.g. by the reconciler)
        already carries context and passes through unchanged.
        """
        try:
            yield
        except (ResourceOperationError, ValidationError):
            raise
        except (DirectusError, requests.RequestException) as e:
            logger.debug(f"{operation} {self.resource_type} {identifier or ''} failed: {e}")
            raise ResourceOperationError(operation, self.resource_type, identifier, e) from e

    def _audit(
        self,
        event_type: str,
        identifier: Optional[str],
        *,
        details: Optional[Dict[str, Any]] = None,
        success: bool = True,
    ) -> None:
        if not self.audit_enabled:
            return
        safe_log_resource_event(
            event_type,
            self.type_name,
            identifier,
            operator=self.operator,
            details=details,
            success=success,
        )

    @contextmanager
    def _write(self, event_type: str, identifier: Optional[str], details: Optional[Dict[str, Any]] = None) -> Iterator[None]:
        """Run a remote write, recording its outcome in the audit trail."""
        try:
            with self._operation(event_type, identifier):
                yield
        except ResourceOperationError as e:
            self._audit(event_type, identifier, details={**(details or {}), "error": str(e)}, success=False)
            raise
        self._audit(event_type, identifier, details=details)


def require(value: Any, name: str) -> None:
    """Raise ValidationError when a required attribute is empty."""
    if not value:
        raise ValidationError(f"{name} is required")
