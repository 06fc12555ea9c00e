"""Role ↔ policy attachment resource (authoritative)."""
from __future__ import annotations
import logging
from typing import Iterable, Optional

from ..directus.client import DirectusClient
from ..directus.exceptions import ResourceOperationError
from ..models import RolePoliciesAttachment
from ..reconciler import RelationChangeSet, RelationReconciler
from .base import DirectusResource, require

logger = logging.getLogger(__name__)


class RolePoliciesAttachmentResource(DirectusResource):
    """Manage every policy attached to a role via ``directus_access``.

    The resource is authoritative: after create/update the role is attached
    to exactly ``policy_ids``, and policies attached by other means are
    detached. Delete detaches everything. The resource id is the role id.
    """

    type_name = "directus_role_policies_attachment"
    resource_type = "role"
    collection = "roles"

    def __init__(
        self,
        client: DirectusClient,
        *,
        audit_enabled: bool = False,
        operator: str = "automation",
        fields: Optional[str] = None,
    ):
        super().__init__(client, audit_enabled=audit_enabled, operator=operator)
        self.reconciler = RelationReconciler(
            client,
            owner_collection=self.collection,
            owner_type=self.resource_type,
            relation_field="policies",
            related_key="policy",
            fields=fields,
        )

    def create(self, plan: RolePoliciesAttachment, *, timeout: Optional[float] = None) -> RolePoliciesAttachment:
        """Attach exactly ``plan.policy_ids`` to the role."""
        require(plan.role_id, "role_id")
        self._converge(plan.role_id, plan.policy_ids, timeout=timeout)
        return RolePoliciesAttachment(role_id=plan.role_id, policy_ids=plan.policy_ids, id=plan.role_id)

    def read(self, state: RolePoliciesAttachment, *, timeout: Optional[float] = None) -> RolePoliciesAttachment:
        """Refresh the attached policy set from the API."""
        require(state.role_id, "role_id")
        records = self.reconciler.fetch(state.role_id, timeout=timeout)
        return RolePoliciesAttachment(
            role_id=state.role_id,
            policy_ids=frozenset(record.related_id for record in records),
            id=state.role_id,
        )

    def update(self, plan: RolePoliciesAttachment, *, timeout: Optional[float] = None) -> RolePoliciesAttachment:
        """Converge the role's attachments to the new ``plan.policy_ids``."""
        require(plan.role_id, "role_id")
        self._converge(plan.role_id, plan.policy_ids, timeout=timeout)
        return RolePoliciesAttachment(role_id=plan.role_id, policy_ids=plan.policy_ids, id=plan.role_id)

    def delete(self, state: RolePoliciesAttachment, *, timeout: Optional[float] = None) -> None:
        """Detach every policy from the role."""
        require(state.role_id, "role_id")
        self._converge(state.role_id, frozenset(), timeout=timeout)

    def import_state(self, role_id: str, *, timeout: Optional[float] = None) -> RolePoliciesAttachment:
        """Adopt the current attachments of a role.

        ``policy_ids`` is filled from the observed records so the first apply
        after an import does not plan to detach everything.
        """
        require(role_id, "import id")
        imported = self.read(RolePoliciesAttachment(role_id=role_id, id=role_id), timeout=timeout)
        logger.info(f"Imported {len(imported.policy_ids)} policy attachment(s) of role {role_id}")
        return imported

    def _converge(self, role_id: str, desired: Iterable[str], *, timeout: Optional[float]) -> RelationChangeSet:
        try:
            changes = self.reconciler.reconcile(role_id, desired, timeout=timeout)
        except ResourceOperationError as e:
            if e.operation == self.reconciler.write_operation:
                self._audit("reconcile", role_id, details={"error": str(e)}, success=False)
            raise

        if not changes.is_empty:
            self._audit(
                "reconcile",
                role_id,
                details={"attached": list(changes.to_create), "detached": list(changes.to_delete)},
            )
        return changes
