"""Config-format data models for managed Directus resources.

Optional attributes default to None (null) and policy flags to False. Any
optional attribute may also hold ``UNSET`` to mark a value that is not known
yet; transformers leave such fields out of request payloads.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, FrozenSet, List, Optional

from .directus.exceptions import ValidationError


@dataclass
class Policy:
    """Access policy (``directus_policies``). ``id`` is assigned by the server."""
    name: Optional[str] = None
    id: Optional[str] = None
    icon: Optional[str] = None
    description: Optional[str] = None
    ip_access: Optional[str] = None  # comma-separated allowlist
    # Omitted flags are sent as false; UNSET leaves the remote value untouched.
    enforce_tfa: Any = False
    admin_access: Any = False
    app_access: Any = False


@dataclass
class Role:
    """Role (``directus_roles``).

    ``parent`` is three-state on update: UNSET leaves it untouched, None
    detaches the role from its parent, a string re-parents it. ``children``
    and ``users`` are computed by the server.
    """
    name: Optional[str] = None
    id: Optional[str] = None
    icon: Optional[str] = None
    description: Optional[str] = None
    parent: Any = None
    children: Optional[List[str]] = None
    users: Optional[List[str]] = None


@dataclass
class Collection:
    """User-defined data collection. ``collection`` is its name and identifier."""
    collection: str = ""
    icon: Optional[str] = None
    note: Optional[str] = None
    hidden: Optional[bool] = None
    singleton: Optional[bool] = None
    sort_field: Optional[str] = None
    archive_field: Optional[str] = None
    color: Optional[str] = None


@dataclass
class RolePoliciesAttachment:
    """Authoritative set of policies attached to one role. ``id`` equals ``role_id``."""
    role_id: str = ""
    policy_ids: FrozenSet[str] = field(default_factory=frozenset)
    id: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.policy_ids, str):
            raise ValidationError(f"policy_ids must be a collection of ids, not a string: {self.policy_ids!r}")
        if not isinstance(self.policy_ids, frozenset):
            self.policy_ids = frozenset(self.policy_ids or ())


@dataclass(frozen=True)
class RelationRecord:
    """One edge of a many-to-many junction (e.g. a ``directus_access`` row)."""
    id: str
    related_id: str
