"""Directus role resource."""
from __future__ import annotations
import dataclasses
import logging
from typing import Optional

from ..directus.exceptions import ResourceOperationError
from ..models import Role
from ..transformer import RoleTransformer
from .base import DirectusResource, require

logger = logging.getLogger(__name__)


class RoleResource(DirectusResource):
    """Manage ``directus_roles`` items.

    Policy attachments are not part of this resource; they are managed by
    ``RolePoliciesAttachmentResource``. Parent references are not checked
    for cycles locally, Directus rejects invalid hierarchies itself.
    """

    type_name = "directus_role"
    resource_type = "role"
    collection = "roles"

    def create(self, plan: Role, *, timeout: Optional[float] = None) -> Role:
        """Create a role and return its state (including the server-assigned id)."""
        require(plan.name, "name")
        payload = RoleTransformer.to_payload(plan, is_create=True)

        try:
            with self._operation("create", plan.name):
                data = self.client.create_item(self.collection, payload, timeout=timeout)
        except ResourceOperationError as e:
            self._audit("create", None, details={"name": plan.name, "error": str(e)}, success=False)
            raise

        created = RoleTransformer.from_response(data or {})
        self._audit("create", created.id, details={"fields": sorted(payload)})
        logger.info(f"Created role '{created.name}' ({created.id})")
        return created

    def read(self, state: Role, *, timeout: Optional[float] = None) -> Role:
        """Refresh a role from the API, keeping the stored identifier."""
        require(state.id, "id")
        with self._operation("read", state.id):
            data = self.client.get_item(self.collection, state.id, timeout=timeout)
        return dataclasses.replace(RoleTransformer.from_response(data or {}), id=state.id)

    def update(self, plan: Role, *, timeout: Optional[float] = None) -> Role:
        """Apply ``plan`` to the existing role.

        A ``None`` parent detaches the role from its parent; ``UNSET`` leaves
        the parent untouched.
        """
        require(plan.id, "id")
        payload = RoleTransformer.to_payload(plan, is_create=False)

        with self._write("update", plan.id, details={"fields": sorted(payload)}):
            data = self.client.update_item(self.collection, plan.id, payload, timeout=timeout)

        logger.info(f"Updated role {plan.id}")
        return dataclasses.replace(RoleTransformer.from_response(data or {}), id=plan.id)

    def delete(self, state: Role, *, timeout: Optional[float] = None) -> None:
        """Delete the role.

        Child roles are not deleted with their parent; they are orphaned and a
        warning is logged before the delete proceeds.
        """
        require(state.id, "id")
        if state.children:
            logger.warning(
                f"Deleting role {state.id} with {len(state.children)} child role(s); "
                "the children will become orphaned"
            )

        with self._write("delete", state.id, details={"orphaned_children": list(state.children or [])}):
            self.client.delete_item(self.collection, state.id, timeout=timeout)
        logger.info(f"Deleted role {state.id}")

    def import_state(self, role_id: str, *, timeout: Optional[float] = None) -> Role:
        """Adopt an existing role by its identifier."""
        require(role_id, "import id")
        imported = self.read(Role(id=role_id), timeout=timeout)
        logger.info(f"Imported role '{imported.name}' ({role_id})")
        return imported
