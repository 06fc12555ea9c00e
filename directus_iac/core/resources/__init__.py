"""Resource orchestrators: create/read/update/delete/import per resource type."""
from .base import DirectusResource
from .collection import CollectionResource
from .policy import PolicyResource
from .role import RoleResource
from .role_policies import RolePoliciesAttachmentResource

__all__ = [
    "DirectusResource",
    "PolicyResource",
    "RoleResource",
    "CollectionResource",
    "RolePoliciesAttachmentResource",
]
