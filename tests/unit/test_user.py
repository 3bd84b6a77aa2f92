"""
Unit tests for User domain model.
"""

from datetime import datetime, timezone
from swarm_admin.domain.user import User, UserStatus


def test_user_creation():
    """Test basic user creation."""
    user = User(
        user_id="usr_1",
        name="Alice Wonderland",
        email="alice@example.com",
        role_id="role_admin",
    )

    assert user.user_id == "usr_1"
    assert user.role_id == "role_admin"
    assert user.status == UserStatus.PENDING
    assert user.department is None
    assert user.last_login is None
    assert user.created_at.tzinfo is not None
    assert user.is_active is False


def test_user_is_active():
    """Only Active users count as active."""
    active = User(user_id="1", name="A", email="a@example.com", role_id="r", status=UserStatus.ACTIVE)
    inactive = User(user_id="2", name="B", email="b@example.com", role_id="r", status=UserStatus.INACTIVE)

    assert active.is_active
    assert not inactive.is_active


def test_user_check_password():
    """Test password comparison."""
    user = User(user_id="1", name="A", email="a@example.com", role_id="r", password="password123")
    no_password = User(user_id="2", name="B", email="b@example.com", role_id="r")

    assert user.check_password("password123")
    assert not user.check_password("wrong")
    assert not no_password.check_password("")


def test_user_password_not_in_repr():
    """Password must not leak through repr."""
    user = User(user_id="1", name="A", email="a@example.com", role_id="r", password="hunter2hunter2")

    assert "hunter2hunter2" not in repr(user)


def test_user_serialization():
    """Test user to_dict and from_dict."""
    created = datetime(2023, 1, 15, tzinfo=timezone.utc)
    user = User(
        user_id="usr_1",
        name="Alice Wonderland",
        email="alice@example.com",
        role_id="role_admin",
        status=UserStatus.ACTIVE,
        department="IT",
        created_at=created,
        password="password123",
    )

    # Serialize
    data = user.to_dict()
    assert data["user_id"] == "usr_1"
    assert data["status"] == "Active"
    assert data["created_at"] == created.isoformat()
    assert data["last_login"] is None
    assert "password" not in data

    # Deserialize
    restored = User.from_dict(data)
    assert restored.user_id == user.user_id
    assert restored.status == UserStatus.ACTIVE
    assert restored.created_at == created
    assert restored.department == "IT"
    assert restored.password is None
