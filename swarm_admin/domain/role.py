"""
Role Domain Model - Named permission sets.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Iterable, List, Optional


# Fixed permission catalog, in the column order of the permission matrix
PERMISSION_CATALOG = (
    "dashboard:view",
    "users:read",
    "users:create",
    "users:edit",
    "users:delete",
    "roles:manage",
    "settings:manage",
    "auditlog:view",
)


def normalize_permissions(permissions: Iterable[str]) -> List[str]:
    """
    Collapse duplicates and order permission keys.

    Catalog keys come first in catalog order; unknown keys keep their
    relative input order after them.
    """
    unique = list(dict.fromkeys(permissions))
    known = [p for p in PERMISSION_CATALOG if p in unique]
    unknown = [p for p in unique if p not in PERMISSION_CATALOG]
    return known + unknown


@dataclass
class Role:
    """
    Role entity - a named set of permission keys.

    Domain rules:
    - role_id is immutable
    - name is unique case-insensitively (enforced by the store)
    - permissions is never empty once the role exists
    """
    role_id: str
    name: str
    description: Optional[str] = None
    permissions: List[str] = field(default_factory=list)

    def has_permission(self, permission: str) -> bool:
        """Check if the role grants a permission key."""
        return permission in self.permissions

    def with_permission(self, permission: str, enabled: bool) -> List[str]:
        """Permission list after granting or revoking one key."""
        if enabled:
            return normalize_permissions(self.permissions + [permission])
        return [p for p in self.permissions if p != permission]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "role_id": self.role_id,
            "name": self.name,
            "description": self.description,
            "permissions": list(self.permissions),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Role":
        """Deserialize from dict."""
        return cls(
            role_id=data["role_id"],
            name=data["name"],
            description=data.get("description"),
            permissions=list(data.get("permissions", [])),
        )
