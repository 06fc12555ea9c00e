"""Directus wire format ↔ config model transformations.

This module provides bidirectional transformations between the JSON
representations returned by the Directus REST API and the config-format
dataclasses in ``directus_iac.core.models``.

Direction rules:
    wire → config: absent or empty values become None; boolean flags absent
        on the wire become False; empty arrays become None.
    config → wire: only fields holding a value are included, so partial
        updates never clobber unspecified fields. The role parent is the one
        nullable field and is sent as an explicit null on update.

Usage:
    # Directus → config
    policy = PolicyTransformer.from_response(response_data)

    # config → Directus
    payload = PolicyTransformer.to_payload(policy)
"""
from __future__ import annotations
from typing import Any, Dict

from .fields import (
    join_csv,
    set_bool_field,
    set_nullable_string_field,
    set_string_field,
    split_csv,
    string_list_or_none,
    string_or_none,
)
from .models import Collection, Policy, Role


class PolicyTransformer:
    """Bidirectional transformer for policy representations."""

    @staticmethod
    def to_payload(policy: Policy) -> Dict[str, Any]:
        """Convert a policy config to a create/update request body.

        The identifier is never sent; it addresses the policy in the URL.

        Example:
            >>> PolicyTransformer.to_payload(Policy(name="Editors", ip_access="10.0.0.0/8, 192.168.1.0/24"))
            {'name': 'Editors', 'ip_access': ['10.0.0.0/8', '192.168.1.0/24'], 'enforce_tfa': False, 'admin_access': False, 'app_access': False}
        """
        payload: Dict[str, Any] = {}
        set_string_field(payload, "name", policy.name)
        set_string_field(payload, "icon", policy.icon)
        set_string_field(payload, "description", policy.description)

        ip_access = split_csv(policy.ip_access)
        if ip_access:
            payload["ip_access"] = ip_access

        set_bool_field(payload, "enforce_tfa", policy.enforce_tfa)
        set_bool_field(payload, "admin_access", policy.admin_access)
        set_bool_field(payload, "app_access", policy.app_access)
        return payload

    @staticmethod
    def from_response(data: Dict[str, Any]) -> Policy:
        """Convert a Directus policy object to a policy config."""
        return Policy(
            id=data.get("id"),
            name=data.get("name"),
            icon=string_or_none(data.get("icon")),
            description=string_or_none(data.get("description")),
            ip_access=join_csv(data.get("ip_access")),
            enforce_tfa=bool(data.get("enforce_tfa")),
            admin_access=bool(data.get("admin_access")),
            app_access=bool(data.get("app_access")),
        )


class RoleTransformer:
    """Bidirectional transformer for role representations."""

    @staticmethod
    def to_payload(role: Role, *, is_create: bool) -> Dict[str, Any]:
        """Convert a role config to a request body.

        Args:
            role: Role config
            is_create: True for a create request, False for an update

        Returns:
            Request body. On update a None parent is sent as null so the
            server detaches the role from its former parent.
        """
        payload: Dict[str, Any] = {}
        set_string_field(payload, "name", role.name)
        set_string_field(payload, "icon", role.icon)
        set_string_field(payload, "description", role.description)

        if is_create:
            set_string_field(payload, "parent", role.parent)
        else:
            set_nullable_string_field(payload, "parent", role.parent)

        return payload

    @staticmethod
    def from_response(data: Dict[str, Any]) -> Role:
        """Convert a Directus role object to a role config."""
        return Role(
            id=data.get("id"),
            name=data.get("name"),
            icon=string_or_none(data.get("icon")),
            description=string_or_none(data.get("description")),
            parent=string_or_none(data.get("parent")),
            children=string_list_or_none(data.get("children")),
            users=string_list_or_none(data.get("users")),
        )


class CollectionTransformer:
    """Bidirectional transformer for collection representations."""

    @staticmethod
    def to_payload(collection: Collection, *, is_create: bool) -> Dict[str, Any]:
        """Convert a collection config to a request body.

        On create the body carries the collection name and an empty ``schema``
        object; without the schema Directus only creates a folder with no
        backing table. Updates never carry either.

        Example:
            >>> CollectionTransformer.to_payload(Collection(collection="articles", icon="article"), is_create=True)
            {'collection': 'articles', 'schema': {}, 'meta': {'icon': 'article'}}
        """
        payload: Dict[str, Any] = {}
        if is_create:
            payload["collection"] = collection.collection
            payload["schema"] = {}

        meta: Dict[str, Any] = {}
        set_string_field(meta, "icon", collection.icon)
        set_string_field(meta, "note", collection.note)
        set_bool_field(meta, "hidden", collection.hidden)
        set_bool_field(meta, "singleton", collection.singleton)
        set_string_field(meta, "sort_field", collection.sort_field)
        set_string_field(meta, "archive_field", collection.archive_field)
        set_string_field(meta, "color", collection.color)

        if meta:
            payload["meta"] = meta

        return payload

    @staticmethod
    def from_response(data: Dict[str, Any]) -> Collection:
        """Convert a Directus collection object to a collection config."""
        meta: Dict[str, Any] = data.get("meta") or {}
        return Collection(
            collection=data.get("collection", ""),
            icon=string_or_none(meta.get("icon")),
            note=string_or_none(meta.get("note")),
            hidden=bool(meta.get("hidden")),
            singleton=bool(meta.get("singleton")),
            sort_field=string_or_none(meta.get("sort_field")),
            archive_field=string_or_none(meta.get("archive_field")),
            color=string_or_none(meta.get("color")),
        )
