"""
Swarm-It Admin - User & Role Management Core

Hexagonal architecture for the admin dashboard: an in-memory directory of
users and roles, a query service for the users table, validated commands,
and the view controllers that sit between them and the UI.

Usage:
    import asyncio
    from swarm_admin import AdminClient

    client = AdminClient.from_settings()
    table = client.users_table(page_size=5)

    asyncio.run(table.set_search("example.com"))
    for row in table.rows:
        print(row.name, row.role, row.status)
"""

__version__ = "0.1.0"

from swarm_admin.sdk.client import AdminClient
from swarm_admin.domain.user import User, UserStatus
from swarm_admin.domain.role import Role, PERMISSION_CATALOG
from swarm_admin.domain.errors import (
    AdminError,
    ValidationError,
    NotFoundError,
    TransientError,
    PolicyDeniedError,
)

__all__ = [
    "AdminClient",
    "User",
    "UserStatus",
    "Role",
    "PERMISSION_CATALOG",
    "AdminError",
    "ValidationError",
    "NotFoundError",
    "TransientError",
    "PolicyDeniedError",
]
