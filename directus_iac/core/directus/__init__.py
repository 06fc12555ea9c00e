"""Directus REST API client library.

Architecture:
- client.py: HTTP client with static-token auth and error decoding
- paths.py: System vs. user collection path resolution
- exceptions.py: Typed exceptions for error handling

Usage:
    from directus_iac.core.directus import DirectusClient

    client = DirectusClient("http://directus:8055", "static-token")
    client.ping()
    policy = client.get_item("policies", "2f0c...")
"""
from .client import DirectusClient, REQUEST_TIMEOUT
from .exceptions import (
    DirectusError,
    ConfigurationError,
    ValidationError,
    DirectusAPIError,
    ResourceOperationError,
)
from .paths import SYSTEM_COLLECTIONS, is_system_collection, resolve_path

__all__ = [
    # Client
    "DirectusClient",
    "REQUEST_TIMEOUT",

    # Exceptions
    "DirectusError",
    "ConfigurationError",
    "ValidationError",
    "DirectusAPIError",
    "ResourceOperationError",

    # Paths
    "SYSTEM_COLLECTIONS",
    "is_system_collection",
    "resolve_path",
]
