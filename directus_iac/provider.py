"""Provider wiring: configuration → shared client → resource registry."""
from __future__ import annotations
import logging
from typing import Dict, Optional

import requests

from .config.settings import ProviderConfig, load_settings
from .core.directus.client import DirectusClient
from .core.resources import (
    CollectionResource,
    DirectusResource,
    PolicyResource,
    RoleResource,
    RolePoliciesAttachmentResource,
)

logger = logging.getLogger(__name__)


class DirectusProvider:
    """Configured entry point holding one client shared by every resource.

    Usage:
        provider = DirectusProvider.from_env()
        provider.ping()
        resource = provider.resources()["directus_role"]
    """

    def __init__(self, config: ProviderConfig, *, session: Optional[requests.Session] = None):
        self.config = config
        self.client = DirectusClient(config.endpoint, config.token, timeout=config.timeout, session=session)

        options = {"audit_enabled": config.audit_log_enabled, "operator": config.operator}
        self.policies = PolicyResource(self.client, **options)
        self.roles = RoleResource(self.client, **options)
        self.collections = CollectionResource(self.client, **options)
        self.role_policies_attachments = RolePoliciesAttachmentResource(self.client, **options)
        logger.debug(f"Configured Directus provider for {self.client.base_url}")

    @classmethod
    def from_env(cls) -> "DirectusProvider":
        """Build a provider from environment variables and Docker secrets."""
        return cls(load_settings())

    def resources(self) -> Dict[str, DirectusResource]:
        """Return the managed resources keyed by resource type name."""
        return {
            resource.type_name: resource
            for resource in (
                self.policies,
                self.roles,
                self.collections,
                self.role_policies_attachments,
            )
        }

    def ping(self, *, timeout: Optional[float] = None) -> None:
        """Check that the configured Directus instance answers."""
        self.client.ping(timeout=timeout)
