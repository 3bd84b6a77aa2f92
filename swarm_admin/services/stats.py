"""
Dashboard Stats - Summary numbers and the user growth series.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence
from datetime import date
from swarm_admin.domain.user import User, UserStatus

RECENT_SIGNUPS_LIMIT = 5


@dataclass
class DashboardStats:
    """Counts shown on the dashboard stat cards."""
    total_users: int
    active_users: int
    inactive_users: int
    users_by_role: Dict[str, int] = field(default_factory=dict)
    recent_signups: int = 0


@dataclass
class GrowthPoint:
    """Cumulative user count at the end of a month."""
    month: str
    total_users: int


def compute_dashboard_stats(users: Sequence[User], role_names: Mapping[str, str]) -> DashboardStats:
    """
    Summarize a user snapshot.

    "Inactive" counts every user that is not Active (Pending included).
    Users whose role no longer exists are counted under "Unknown".
    """
    total = len(users)
    active = sum(1 for u in users if u.status == UserStatus.ACTIVE)

    by_role: Dict[str, int] = {}
    for user in users:
        name = role_names.get(user.role_id, "Unknown")
        by_role[name] = by_role.get(name, 0) + 1

    return DashboardStats(
        total_users=total,
        active_users=active,
        inactive_users=total - active,
        users_by_role=by_role,
        recent_signups=min(RECENT_SIGNUPS_LIMIT, total),
    )


def compute_user_growth(users: Sequence[User]) -> List[GrowthPoint]:
    """
    Cumulative user count per creation month, oldest first.

    Only months in which at least one user was created appear. Labels look
    like "Jan 23".
    """
    per_month: Dict[tuple, int] = {}
    for user in users:
        key = (user.created_at.year, user.created_at.month)
        per_month[key] = per_month.get(key, 0) + 1

    points = []
    running_total = 0
    for year, month in sorted(per_month):
        running_total += per_month[(year, month)]
        label = date(year, month, 1).strftime("%b %y")
        points.append(GrowthPoint(month=label, total_users=running_total))
    return points
