"""URL path resolution for Directus collections.

System collections (roles, policies, users, ...) live at the API root;
user-defined collections are served under the ``/items`` namespace.
"""
from __future__ import annotations

SYSTEM_COLLECTIONS = frozenset({
    "collections",
    "roles",
    "policies",
    "users",
    "folders",
    "files",
    "activity",
    "revisions",
    "webhooks",
    "flows",
    "operations",
    "dashboards",
    "panels",
    "shares",
    "settings",
})


def is_system_collection(collection: str) -> bool:
    """Return True if the collection is a built-in Directus system collection."""
    return collection in SYSTEM_COLLECTIONS


def resolve_path(collection: str, item_id: str = "") -> str:
    """Build the API path for a collection or one of its items.
    
    Args:
        collection: Collection name (e.g., "roles" or "articles")
        item_id: Item identifier; empty means the collection as a whole
        
    Returns:
        Root-relative path, e.g. "/roles/abc" or "/items/articles"
        
    Example:
        >>> resolve_path("roles", "x")
        '/roles/x'
        >>> resolve_path("articles")
        '/items/articles'
    """
    base = f"/{collection}" if is_system_collection(collection) else f"/items/{collection}"
    if item_id:
        return f"{base}/{item_id}"
    return base
