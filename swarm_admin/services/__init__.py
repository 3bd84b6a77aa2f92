"""
Services - Queries, commands, validators and derived views over the directory.
"""

from swarm_admin.services.query import UserQuery, UserPage, UserQueryService, query_users, page_count
from swarm_admin.services.commands import DirectoryCommands
from swarm_admin.services.validators import (
    UserForm,
    RoleForm,
    ProfileForm,
    PasswordChangeForm,
    validate_form,
)
from swarm_admin.services.profile import ProfileService, PasswordChangeResult
from swarm_admin.services.stats import (
    DashboardStats,
    GrowthPoint,
    compute_dashboard_stats,
    compute_user_growth,
)

__all__ = [
    # Queries
    "UserQuery",
    "UserPage",
    "UserQueryService",
    "query_users",
    "page_count",
    # Commands
    "DirectoryCommands",
    # Forms
    "UserForm",
    "RoleForm",
    "ProfileForm",
    "PasswordChangeForm",
    "validate_form",
    # Settings page
    "ProfileService",
    "PasswordChangeResult",
    # Dashboard
    "DashboardStats",
    "GrowthPoint",
    "compute_dashboard_stats",
    "compute_user_growth",
]
