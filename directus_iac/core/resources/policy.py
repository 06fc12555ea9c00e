"""Directus access policy resource."""
from __future__ import annotations
import dataclasses
import logging
from typing import Optional

from ..directus.exceptions import ResourceOperationError
from ..models import Policy
from ..transformer import PolicyTransformer
from .base import DirectusResource, require

logger = logging.getLogger(__name__)


class PolicyResource(DirectusResource):
    """Manage ``directus_policies`` items."""

    type_name = "directus_policy"
    resource_type = "policy"
    collection = "policies"

    def create(self, plan: Policy, *, timeout: Optional[float] = None) -> Policy:
        """Create a policy and return its state (including the server-assigned id).

        Raises:
            ValidationError: If the policy name is missing
            ResourceOperationError: If the API call fails
        """
        require(plan.name, "name")
        payload = PolicyTransformer.to_payload(plan)

        try:
            with self._operation("create", plan.name):
                data = self.client.create_item(self.collection, payload, timeout=timeout)
        except ResourceOperationError as e:
            self._audit("create", None, details={"name": plan.name, "error": str(e)}, success=False)
            raise

        created = PolicyTransformer.from_response(data or {})
        self._audit("create", created.id, details={"fields": sorted(payload)})
        logger.info(f"Created policy '{created.name}' ({created.id})")
        return created

    def read(self, state: Policy, *, timeout: Optional[float] = None) -> Policy:
        """Refresh a policy from the API, keeping the stored identifier.

        Raises:
            ResourceOperationError: If the policy cannot be read; check
                ``not_found`` to detect a policy deleted outside management
        """
        require(state.id, "id")
        with self._operation("read", state.id):
            data = self.client.get_item(self.collection, state.id, timeout=timeout)
        return dataclasses.replace(PolicyTransformer.from_response(data or {}), id=state.id)

    def update(self, plan: Policy, *, timeout: Optional[float] = None) -> Policy:
        """Apply the set fields of ``plan`` to the existing policy."""
        require(plan.id, "id")
        payload = PolicyTransformer.to_payload(plan)

        with self._write("update", plan.id, details={"fields": sorted(payload)}):
            data = self.client.update_item(self.collection, plan.id, payload, timeout=timeout)

        logger.info(f"Updated policy {plan.id}")
        return dataclasses.replace(PolicyTransformer.from_response(data or {}), id=plan.id)

    def delete(self, state: Policy, *, timeout: Optional[float] = None) -> None:
        """Delete the policy."""
        require(state.id, "id")
        with self._write("delete", state.id):
            self.client.delete_item(self.collection, state.id, timeout=timeout)
        logger.info(f"Deleted policy {state.id}")

    def import_state(self, policy_id: str, *, timeout: Optional[float] = None) -> Policy:
        """Adopt an existing policy by its identifier."""
        require(policy_id, "import id")
        imported = self.read(Policy(id=policy_id), timeout=timeout)
        logger.info(f"Imported policy '{imported.name}' ({policy_id})")
        return imported
