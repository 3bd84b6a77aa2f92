"""
Unit tests for form validators.
"""

import pytest
from swarm_admin.domain.errors import ValidationError
from swarm_admin.services.validators import (
    UserForm,
    RoleForm,
    ProfileForm,
    PasswordChangeForm,
    validate_form,
)


def _user_values(**overrides):
    values = {
        "name": "Kara Thrace",
        "email": "kara@example.com",
        "role": "Staff",
        "status": "Active",
        "password": "starbuck99",
        "confirm_password": "starbuck99",
    }
    values.update(overrides)
    return values


def test_user_form_valid_create():
    """A complete create form validates."""
    form = validate_form(UserForm, _user_values(department="  "))

    assert not form.is_edit
    assert form.department is None
    assert form.record_values() == {
        "name": "Kara Thrace",
        "email": "kara@example.com",
        "status": "Active",
        "department": None,
        "location": None,
        "password": "starbuck99",
    }


def test_user_form_short_name():
    """Names need two characters."""
    with pytest.raises(ValidationError) as exc_info:
        validate_form(UserForm, _user_values(name="K"))

    assert exc_info.value.field == "name"
    assert exc_info.value.message == "Name must be at least 2 characters."


def test_user_form_invalid_email():
    """Email syntax is checked."""
    with pytest.raises(ValidationError) as exc_info:
        validate_form(UserForm, _user_values(email="not-an-email"))

    assert exc_info.value.for_field("email") == "Invalid email address."


def test_user_form_status_and_role():
    """Status must be one of the three states; role is required."""
    with pytest.raises(ValidationError) as exc_info:
        validate_form(UserForm, _user_values(status="Banned", role=""))

    errors = exc_info.value.as_dict()
    assert errors["status"] == "Status is required."
    assert errors["role"] == "Role is required."


def test_user_form_collects_every_error():
    """All failing fields are reported at once."""
    with pytest.raises(ValidationError) as exc_info:
        validate_form(UserForm, {"name": "", "email": "x", "status": "Active"})

    fields = {e.field for e in exc_info.value.errors}
    assert {"name", "email", "role"} <= fields


def test_user_form_create_requires_password():
    """Creation without a password is rejected on confirm_password."""
    with pytest.raises(ValidationError) as exc_info:
        validate_form(UserForm, _user_values(password=None, confirm_password=None))

    assert exc_info.value.field == "confirm_password"
    assert exc_info.value.message == "Passwords required or do not match"


def test_user_form_password_mismatch():
    """Password and confirmation must match."""
    with pytest.raises(ValidationError) as exc_info:
        validate_form(UserForm, _user_values(confirm_password="different1"))

    assert exc_info.value.field == "confirm_password"


def test_user_form_short_password():
    """Passwords need eight characters."""
    with pytest.raises(ValidationError) as exc_info:
        validate_form(UserForm, _user_values(password="short", confirm_password="short"))

    assert exc_info.value.for_field("password") == "Password must be at least 8 characters."


def test_user_form_edit_without_password():
    """Editing does not require a password."""
    form = validate_form(UserForm, _user_values(id="usr_1", password="", confirm_password=""))

    assert form.is_edit
    assert "password" not in form.record_values()


def test_role_form_valid():
    """A complete role form validates."""
    form = validate_form(RoleForm, {
        "name": "Auditor",
        "description": "",
        "permissions": ["auditlog:view"],
    })

    assert form.description is None
    assert form.name == "Auditor"
    assert form.permissions == ["auditlog:view"]


def test_role_form_requires_permission():
    """At least one permission is required."""
    with pytest.raises(ValidationError) as exc_info:
        validate_form(RoleForm, {"name": "Auditor", "permissions": []})

    assert exc_info.value.field == "permissions"
    assert exc_info.value.message == "At least one permission is required."


def test_role_form_short_name():
    """Role names need two characters."""
    with pytest.raises(ValidationError) as exc_info:
        validate_form(RoleForm, {"name": "A", "permissions": ["users:read"]})

    assert exc_info.value.message == "Role name must be at least 2 characters."


def test_role_form_catalog_membership():
    """Unknown permissions are rejected unless the check is disabled."""
    values = {"name": "Custom", "permissions": ["users:read", "reports:export"]}

    with pytest.raises(ValidationError) as exc_info:
        validate_form(RoleForm, values)
    assert exc_info.value.field == "permissions"
    assert "reports:export" in exc_info.value.message

    form = validate_form(RoleForm, values, context={"enforce_permission_catalog": False})
    assert form.permissions == ["users:read", "reports:export"]


def test_profile_form():
    """Profile form accepts a blank email and clears blank fields."""
    form = validate_form(ProfileForm, {"name": "Alice", "email": "", "department": "", "location": "Paris"})

    assert form.email is None
    assert form.profile_values() == {"name": "Alice", "department": None, "location": "Paris"}


def test_password_change_form():
    """Current required, new min 8, confirmation must match."""
    form = validate_form(PasswordChangeForm, {
        "current_password": "password123",
        "new_password": "newpassword1",
        "confirm_password": "newpassword1",
    })
    assert form.new_password == "newpassword1"

    with pytest.raises(ValidationError) as exc_info:
        validate_form(PasswordChangeForm, {
            "current_password": "",
            "new_password": "short",
            "confirm_password": "short",
        })
    errors = exc_info.value.as_dict()
    assert errors["current_password"] == "Current password is required."
    assert errors["new_password"] == "New password must be at least 8 characters."


def test_password_change_form_mismatch():
    """Mismatched confirmation is reported on confirm_password."""
    with pytest.raises(ValidationError) as exc_info:
        validate_form(PasswordChangeForm, {
            "current_password": "password123",
            "new_password": "newpassword1",
            "confirm_password": "newpassword2",
        })

    assert exc_info.value.field == "confirm_password"
    assert exc_info.value.message == "New passwords don't match"
