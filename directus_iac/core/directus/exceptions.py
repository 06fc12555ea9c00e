"""Directus-specific exceptions for error handling."""
from __future__ import annotations
from typing import Optional


class DirectusError(Exception):
    """Base exception for all Directus operations."""
    pass


class ConfigurationError(DirectusError):
    """Client or provider is missing a required construction parameter."""
    pass


class ValidationError(DirectusError, ValueError):
    """A required call parameter is missing; raised before any network activity."""
    pass


class DirectusAPIError(DirectusError):
    """HTTP error from the Directus REST API.
    
    Attributes:
        status_code: HTTP status code
        message: Error message from response (structured message or raw body)
        endpoint: API endpoint that failed
        code: Directus error code (extensions.code), if supplied
    """
    
    def __init__(self, status_code: int, message: str, endpoint: str, code: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint
        self.code = code
        if code:
            super().__init__(f"HTTP {status_code} [{code}]: {message}")
        else:
            super().__init__(f"HTTP {status_code}: {message}")


class ResourceOperationError(DirectusError):
    """A resource operation (create/read/update/delete/import) failed.
    
    Wraps the underlying API or transport error with the operation name and
    the identifier of the resource involved.
    
    Attributes:
        operation: Operation verb, e.g. "create" or "read"
        resource_type: Human-readable resource type, e.g. "policy"
        identifier: Resource identifier (None when creating)
        cause: Underlying exception
    """
    
    def __init__(self, operation: str, resource_type: str, identifier: Optional[str], cause: Exception):
        self.operation = operation
        self.resource_type = resource_type
        self.identifier = identifier
        self.cause = cause
        target = f"{resource_type} {identifier}" if identifier else resource_type
        super().__init__(f"Could not {operation} {target}: {cause}")
    
    @property
    def status_code(self) -> Optional[int]:
        """HTTP status of the underlying API error, if any."""
        return getattr(self.cause, "status_code", None)
    
    @property
    def not_found(self) -> bool:
        """True when the remote service reported the resource as missing."""
        return self.status_code == 404
