"""
Demo directory - the users and roles the dashboard ships with.
"""

from datetime import datetime, timezone
from typing import List, Tuple
from swarm_admin.domain.user import User, UserStatus
from swarm_admin.domain.role import Role

DEMO_PASSWORD = "password123"


def _day(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def demo_roles() -> List[Role]:
    return [
        Role(
            role_id="role_admin",
            name="Admin",
            description="Full access to all features",
            permissions=["users:read", "users:create", "users:edit", "users:delete",
                         "roles:manage", "settings:manage"],
        ),
        Role(
            role_id="role_manager",
            name="Manager",
            description="Manage users within their department",
            permissions=["dashboard:view", "users:read", "users:create", "users:edit"],
        ),
        Role(
            role_id="role_staff",
            name="Staff",
            description="Standard user access",
            permissions=["dashboard:view", "users:read"],
        ),
        Role(
            role_id="role_viewer",
            name="Viewer",
            description="Read-only access",
            permissions=["users:read"],
        ),
    ]


def demo_users() -> List[User]:
    def user(n, name, email, role, status, created, department=None, location=None, last_login=None):
        return User(
            user_id=f"usr_{n}",
            name=name,
            email=email,
            role_id=role,
            status=status,
            department=department,
            location=location,
            created_at=created,
            last_login=last_login,
            password=DEMO_PASSWORD,
        )

    return [
        user(1, "Alice Wonderland", "alice@example.com", "role_admin", UserStatus.ACTIVE,
             _day(2023, 1, 15), "IT", "New York"),
        user(2, "Bob The Builder", "bob@example.com", "role_manager", UserStatus.ACTIVE,
             _day(2023, 2, 20), "Engineering", last_login=_day(2024, 7, 20)),
        user(3, "Charlie Chaplin", "charlie@example.com", "role_staff", UserStatus.INACTIVE,
             _day(2023, 3, 10), "Marketing"),
        user(4, "Diana Prince", "diana@example.com", "role_staff", UserStatus.PENDING,
             _day(2024, 7, 1), "Sales", "London"),
        user(5, "Ethan Hunt", "ethan@example.com", "role_manager", UserStatus.ACTIVE,
             _day(2023, 5, 5), "Operations"),
        user(6, "Fiona Shrek", "fiona@example.com", "role_admin", UserStatus.ACTIVE,
             _day(2022, 11, 11), "HR"),
        user(7, "George Costanza", "george@example.com", "role_staff", UserStatus.ACTIVE,
             _day(2024, 1, 30), "Sales"),
        user(8, "Hermione Granger", "hermione@example.com", "role_staff", UserStatus.INACTIVE,
             _day(2023, 9, 1), "Research"),
        user(9, "Indiana Jones", "indy@example.com", "role_manager", UserStatus.ACTIVE,
             _day(2023, 6, 15), "Archaeology"),
        user(10, "Jack Sparrow", "jack@example.com", "role_staff", UserStatus.PENDING,
             _day(2024, 7, 15), "Maritime"),
    ]


def demo_directory() -> Tuple[List[User], List[Role]]:
    """Fresh copies of the demo users and roles."""
    return demo_users(), demo_roles()
