"""Authoritative reconciliation of many-to-many relations.

Directus links roles and policies through the ``directus_access`` junction
collection. Each edge is a relation record with its own identifier. The
reconciler converges the edges of one owner to exactly a desired set of
related identifiers:

    1. Read the owner with a minimal field projection (record id + related id).
    2. Diff the desired set against the observed records.
    3. If anything differs, send one PATCH to the owner that nests both the
       ``create`` and ``delete`` instructions; otherwise send nothing.

The reconciler knows nothing about create/update/delete of the managed
resource: callers express those as different desired sets (the configured
set, the new set, the empty set).
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import requests

from .directus.client import DirectusClient
from .directus.exceptions import DirectusError, ResourceOperationError, ValidationError
from .models import RelationRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelationChangeSet:
    """Minimal set of relation writes.

    Attributes:
        to_create: Related identifiers that need a new relation record
        to_delete: Relation record identifiers that must be removed
    """
    to_create: Tuple[str, ...] = ()
    to_delete: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.to_create and not self.to_delete

    def to_patch_body(self, relation_field: str, related_key: str) -> Dict[str, Any]:
        """Build the nested relational update for the owner.

        Example:
            >>> RelationChangeSet(("p3",), ("r1",)).to_patch_body("policies", "policy")
            {'policies': {'create': [{'policy': 'p3'}], 'delete': ['r1']}}
        """
        operations: Dict[str, Any] = {}
        if self.to_create:
            operations["create"] = [{related_key: related_id} for related_id in self.to_create]
        if self.to_delete:
            operations["delete"] = list(self.to_delete)
        return {relation_field: operations}


def plan_changes(desired: Iterable[str], observed: Sequence[RelationRecord]) -> RelationChangeSet:
    """Compute the minimal writes converging ``observed`` to ``desired``.

    Creates are emitted in sorted identifier order, deletes in observed order.

    Args:
        desired: Related identifiers that must be attached (set semantics)
        observed: Relation records currently present remotely

    Returns:
        RelationChangeSet with ``desired - observed`` to create and the
        records of ``observed - desired`` to delete
    """
    wanted = frozenset(desired)
    index = {record.related_id: record.id for record in observed}

    to_create = tuple(sorted(related_id for related_id in wanted if related_id not in index))
    to_delete = tuple(record.id for record in observed if record.related_id not in wanted)
    return RelationChangeSet(to_create=to_create, to_delete=to_delete)


def _relation_records(data: Any, relation_field: str) -> Optional[List[Dict[str, Any]]]:
    """Extract junction records from an owner item, or None when malformed."""
    if data is None:
        return []
    if not isinstance(data, dict):
        return None
    records = data.get(relation_field) or []
    if not isinstance(records, list):
        return None
    if not all(isinstance(record, dict) and record.get("id") is not None for record in records):
        return None
    return records


class RelationReconciler:
    """Converge the relation records of an owner item to a desired set.

    Usage:
        reconciler = RelationReconciler(client)
        changes = reconciler.reconcile(role_id, {"policy-a", "policy-b"})
    """

    def __init__(
        self,
        client: DirectusClient,
        *,
        owner_collection: str = "roles",
        owner_type: str = "role",
        relation_field: str = "policies",
        related_key: str = "policy",
        fields: Optional[str] = None,
    ):
        """Initialize reconciler.

        Args:
            client: Directus client
            owner_collection: Collection of the owning item
            owner_type: Human-readable owner type used in error messages
            relation_field: Relational (o2m) field on the owner
            related_key: Field of the junction record holding the related id
            fields: Field projection for the read step
        """
        self.client = client
        self.owner_collection = owner_collection
        self.owner_type = owner_type
        self.relation_field = relation_field
        self.related_key = related_key
        self.fields = fields or f"id,{relation_field}.id,{relation_field}.{related_key}"
        self.read_operation = f"read {relation_field} of"
        self.write_operation = f"update {relation_field} of"

    def fetch(self, owner_id: str, *, timeout: Optional[float] = None) -> List[RelationRecord]:
        """Read the relation records currently attached to the owner.

        Raises:
            ValidationError: If owner_id is empty
            ResourceOperationError: If the owner cannot be read
        """
        if not owner_id:
            raise ValidationError("owner id is required")

        try:
            data = self.client.get_item(
                self.owner_collection,
                owner_id,
                params={"fields": self.fields},
                timeout=timeout,
            )
        except (DirectusError, requests.RequestException) as e:
            raise ResourceOperationError(self.read_operation, self.owner_type, owner_id, e) from e

        records = _relation_records(data, self.relation_field)
        if records is None:
            cause = DirectusError(
                f"failed to decode {self.relation_field}: expected records with an id, "
                f"check the field projection {self.fields!r}"
            )
            raise ResourceOperationError(self.read_operation, self.owner_type, owner_id, cause)

        return [
            RelationRecord(id=str(record["id"]), related_id=str(record.get(self.related_key) or ""))
            for record in records
        ]

    def apply(self, owner_id: str, changes: RelationChangeSet, *, timeout: Optional[float] = None) -> None:
        """Send the change set as a single PATCH on the owner (no-op when empty)."""
        if changes.is_empty:
            return

        body = changes.to_patch_body(self.relation_field, self.related_key)
        try:
            self.client.update_item(self.owner_collection, owner_id, body, timeout=timeout)
        except (DirectusError, requests.RequestException) as e:
            raise ResourceOperationError(self.write_operation, self.owner_type, owner_id, e) from e

    def reconcile(
        self,
        owner_id: str,
        desired: Iterable[str],
        *,
        timeout: Optional[float] = None,
    ) -> RelationChangeSet:
        """Make the owner's relations exactly equal to ``desired``.

        Args:
            owner_id: Identifier of the owning item
            desired: Related identifiers to keep attached; everything else is detached
            timeout: Caller deadline applied to each network call

        Returns:
            The change set that was applied (empty when nothing was written)

        Raises:
            ValidationError: If owner_id is empty
            ResourceOperationError: If the read or the write fails; a failed
                read never leads to a write
        """
        observed = self.fetch(owner_id, timeout=timeout)
        changes = plan_changes(desired, observed)
        logger.debug(
            f"{self.owner_type} {owner_id}: {len(observed)} {self.relation_field} attached, "
            f"create={list(changes.to_create)} delete={list(changes.to_delete)}"
        )

        if changes.is_empty:
            logger.info(f"{self.owner_type} {owner_id}: {self.relation_field} already up to date")
            return changes

        self.apply(owner_id, changes, timeout=timeout)
        logger.info(
            f"{self.owner_type} {owner_id}: attached {len(changes.to_create)}, "
            f"detached {len(changes.to_delete)} {self.relation_field}"
        )
        return changes
