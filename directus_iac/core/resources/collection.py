"""Directus collection (data model table) resource."""
from __future__ import annotations
import dataclasses
import logging
from typing import Optional

from ..models import Collection
from ..transformer import CollectionTransformer
from .base import DirectusResource, require

logger = logging.getLogger(__name__)


class CollectionResource(DirectusResource):
    """Manage user-defined collections through ``/collections``.

    The collection name is both the natural key and the identifier; it cannot
    be changed in place, so a rename means delete + create.
    """

    type_name = "directus_collection"
    resource_type = "collection"
    collection = "collections"

    def create(self, plan: Collection, *, timeout: Optional[float] = None) -> Collection:
        """Create the collection together with its backing table."""
        require(plan.collection, "collection")
        payload = CollectionTransformer.to_payload(plan, is_create=True)

        with self._write("create", plan.collection, details={"fields": sorted(payload.get("meta", {}))}):
            data = self.client.create_item(self.collection, payload, timeout=timeout)

        created = dataclasses.replace(
            CollectionTransformer.from_response(data or {}),
            collection=plan.collection,
        )
        logger.info(f"Created collection {plan.collection}")
        return created

    def read(self, state: Collection, *, timeout: Optional[float] = None) -> Collection:
        """Refresh collection metadata, keeping the stored name."""
        require(state.collection, "collection")
        with self._operation("read", state.collection):
            data = self.client.get_item(self.collection, state.collection, timeout=timeout)
        return dataclasses.replace(
            CollectionTransformer.from_response(data or {}),
            collection=state.collection,
        )

    def update(self, plan: Collection, *, timeout: Optional[float] = None) -> Collection:
        """Update collection metadata. The name and schema are never sent."""
        require(plan.collection, "collection")
        payload = CollectionTransformer.to_payload(plan, is_create=False)

        with self._write("update", plan.collection, details={"fields": sorted(payload.get("meta", {}))}):
            data = self.client.update_item(self.collection, plan.collection, payload, timeout=timeout)

        logger.info(f"Updated collection {plan.collection}")
        return dataclasses.replace(
            CollectionTransformer.from_response(data or {}),
            collection=plan.collection,
        )

    def delete(self, state: Collection, *, timeout: Optional[float] = None) -> None:
        """Delete the collection and its table."""
        require(state.collection, "collection")
        with self._write("delete", state.collection):
            self.client.delete_item(self.collection, state.collection, timeout=timeout)
        logger.info(f"Deleted collection {state.collection}")

    def import_state(self, name: str, *, timeout: Optional[float] = None) -> Collection:
        """Adopt an existing collection by name."""
        require(name, "import id")
        imported = self.read(Collection(collection=name), timeout=timeout)
        logger.info(f"Imported collection {name}")
        return imported
