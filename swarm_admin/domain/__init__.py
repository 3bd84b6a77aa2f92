"""
Domain Models - Pure business entities.

No infrastructure dependencies. Domain logic only.
"""

from swarm_admin.domain.user import User, UserStatus
from swarm_admin.domain.role import Role, PERMISSION_CATALOG
from swarm_admin.domain.errors import (
    AdminError,
    FieldError,
    ValidationError,
    NotFoundError,
    TransientError,
    PolicyDeniedError,
)

__all__ = [
    "User",
    "UserStatus",
    "Role",
    "PERMISSION_CATALOG",
    "AdminError",
    "FieldError",
    "ValidationError",
    "NotFoundError",
    "TransientError",
    "PolicyDeniedError",
]
