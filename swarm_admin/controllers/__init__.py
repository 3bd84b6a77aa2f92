"""
Controllers - View state for the users table and the permission matrix.
"""

from swarm_admin.controllers.users_table import (
    UsersTableController,
    UserRow,
    TableState,
    SortState,
    RowActionResult,
)
from swarm_admin.controllers.permission_matrix import PermissionMatrixController, PermissionToggle

__all__ = [
    "UsersTableController",
    "UserRow",
    "TableState",
    "SortState",
    "RowActionResult",
    "PermissionMatrixController",
    "PermissionToggle",
]
