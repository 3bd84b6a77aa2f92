"""
User Domain Model - Pure business entity.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from datetime import datetime, timezone
from enum import Enum


class UserStatus(Enum):
    """Account lifecycle states shown in the users table."""
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    PENDING = "Pending"


def utcnow() -> datetime:
    """Timezone-aware current time used for every domain timestamp."""
    return datetime.now(timezone.utc)


@dataclass
class User:
    """
    User entity - a person managed from the admin dashboard.

    Domain rules:
    - user_id and created_at are immutable once assigned
    - role_id references Role.role_id (the role name is resolved at the boundary)
    - email uniqueness is enforced by the command layer, not here
    - password is a prototype plaintext secret and is never serialized
    """
    user_id: str
    name: str
    email: str
    role_id: str
    status: UserStatus = UserStatus.PENDING

    # Optional fields
    department: Optional[str] = None
    location: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    last_login: Optional[datetime] = None

    password: Optional[str] = field(default=None, repr=False)

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    def check_password(self, candidate: str) -> bool:
        """Compare a candidate secret against the stored one."""
        return self.password is not None and self.password == candidate

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict (password excluded)."""
        return {
            "user_id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role_id": self.role_id,
            "status": self.status.value,
            "department": self.department,
            "location": self.location,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "last_login": self.last_login.isoformat() if self.last_login else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Deserialize from dict."""
        return cls(
            user_id=data["user_id"],
            name=data["name"],
            email=data["email"],
            role_id=data["role_id"],
            status=UserStatus(data.get("status", "Pending")),
            department=data.get("department"),
            location=data.get("location"),
            created_at=datetime.fromisoformat(data["created_at"]) if data.get("created_at") else utcnow(),
            last_login=datetime.fromisoformat(data["last_login"]) if data.get("last_login") else None,
            password=data.get("password"),
        )
