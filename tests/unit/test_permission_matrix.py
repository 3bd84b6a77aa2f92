"""
Unit tests for the permission matrix controller.
"""

import asyncio

import pytest
from swarm_admin.controllers.permission_matrix import PermissionMatrixController, PermissionToggle
from swarm_admin.domain.role import Role, PERMISSION_CATALOG


@pytest.fixture
def matrix(queries, commands, policy):
    return PermissionMatrixController(queries, commands, policy)


@pytest.mark.asyncio
async def test_load(matrix):
    """Loading fills the grid and the confirmed snapshot."""
    assert await matrix.load() is True

    assert [r.name for r in matrix.roles] == ["Admin", "Manager", "Staff", "Viewer"]
    assert matrix.permissions == PERMISSION_CATALOG
    assert matrix.is_granted("role_viewer", "users:read")
    assert not matrix.is_granted("role_viewer", "users:delete")
    assert not matrix.is_granted("role_missing", "users:read")
    assert not matrix.is_loading


@pytest.mark.asyncio
async def test_load_failure(matrix, network):
    """A failed load reports an error and keeps the previous grid."""
    network.inject_failure("list_roles")

    assert await matrix.load() is False
    assert matrix.last_error == "Failed to load roles."
    assert matrix.roles == []


@pytest.mark.asyncio
async def test_admin_not_editable(matrix):
    """Protected roles are shown read-only."""
    await matrix.load()

    assert not matrix.is_editable("role_admin")
    assert matrix.is_editable("role_staff")
    assert not matrix.is_editable("role_missing")


@pytest.mark.asyncio
async def test_toggle_confirmed(matrix, directory):
    """A successful toggle lands in the store and the snapshot."""
    await matrix.load()

    assert await matrix.toggle("role_staff", "users:create", True) is True

    assert matrix.is_granted("role_staff", "users:create")
    assert matrix.confirmed["role_staff"].has_permission("users:create")
    assert directory.get_role("role_staff").has_permission("users:create")
    assert matrix.pending_count == 0
    assert matrix.last_error is None


@pytest.mark.asyncio
async def test_toggle_is_optimistic(matrix, network):
    """The grid shows the change before the command finishes."""
    await matrix.load()
    network.set_delay("set_role_permission", 0.02)

    pending = asyncio.ensure_future(matrix.toggle("role_staff", "users:delete", True))
    await asyncio.sleep(0)

    assert matrix.is_granted("role_staff", "users:delete")
    assert not matrix.confirmed["role_staff"].has_permission("users:delete")
    assert matrix.pending_count == 1

    assert await pending is True
    assert matrix.confirmed["role_staff"].has_permission("users:delete")


@pytest.mark.asyncio
async def test_toggle_failure_rolls_back(matrix, network, directory):
    """A failed toggle restores the last confirmed state."""
    await matrix.load()
    before = list(matrix.role("role_staff").permissions)
    network.inject_failure("set_role_permission")

    assert await matrix.toggle("role_staff", "users:create", True) is False

    assert matrix.role("role_staff").permissions == before
    assert matrix.last_error.startswith("Failed to update permission:")
    assert directory.get_role("role_staff").permissions == before
    assert matrix.pending_count == 0


@pytest.mark.asyncio
async def test_toggle_protected_role_rolls_back(matrix):
    """Policy denials roll back like any other failure."""
    await matrix.load()

    assert await matrix.toggle("role_admin", "auditlog:view", True) is False

    assert not matrix.is_granted("role_admin", "auditlog:view")
    assert "protected" in matrix.last_error


@pytest.mark.asyncio
async def test_toggle_last_permission_rejected(matrix):
    """Revoking the only permission of a role is refused."""
    await matrix.load()

    assert await matrix.toggle("role_viewer", "users:read", False) is False

    assert matrix.is_granted("role_viewer", "users:read")


@pytest.mark.asyncio
async def test_overlapping_toggles(matrix, network, directory):
    """A failed toggle rolls back without undoing a concurrent success."""
    await matrix.load()
    network.set_delay("set_role_permission", 0.02)
    network.inject_failure("set_role_permission")

    results = await asyncio.gather(
        matrix.toggle("role_staff", "users:create", True),
        matrix.toggle("role_staff", "users:edit", True),
    )

    assert results == [False, True]
    assert not matrix.is_granted("role_staff", "users:create")
    assert matrix.is_granted("role_staff", "users:edit")
    assert directory.get_role("role_staff").permissions == ["dashboard:view", "users:read", "users:edit"]


@pytest.mark.asyncio
async def test_concurrent_successes_compose(matrix, network, directory):
    """Two successful toggles on one role both stick."""
    await matrix.load()
    network.set_delay("set_role_permission", 0.02)

    await asyncio.gather(
        matrix.toggle("role_staff", "users:create", True),
        matrix.toggle("role_staff", "users:edit", True),
    )

    expected = ["dashboard:view", "users:read", "users:create", "users:edit"]
    assert directory.get_role("role_staff").permissions == expected
    assert matrix.role("role_staff").permissions == expected


@pytest.mark.asyncio
async def test_reload_during_toggle(matrix, network, directory):
    """A reload while a toggle is in flight keeps it pending and lets it confirm."""
    await matrix.load()
    network.set_delay("set_role_permission", 0.05)

    pending = asyncio.ensure_future(matrix.toggle("role_staff", "users:create", True))
    await asyncio.sleep(0.01)

    assert await matrix.load() is True
    assert matrix.pending_count == 1
    assert matrix.is_granted("role_staff", "users:create")

    assert await pending is True
    assert matrix.pending_count == 0
    assert matrix.is_granted("role_staff", "users:create")
    assert directory.get_role("role_staff").has_permission("users:create")


@pytest.mark.asyncio
async def test_reload_during_failing_toggle(matrix, network):
    """A toggle that fails after a reload still rolls back cleanly."""
    await matrix.load()
    network.set_delay("set_role_permission", 0.05)
    network.inject_failure("set_role_permission")

    pending = asyncio.ensure_future(matrix.toggle("role_staff", "users:create", True))
    await asyncio.sleep(0.01)
    await matrix.load()

    assert await pending is False
    assert matrix.pending_count == 0
    assert not matrix.is_granted("role_staff", "users:create")
    assert matrix.last_error.startswith("Failed to update permission:")


@pytest.mark.asyncio
async def test_delete_role_during_toggle(matrix, network):
    """Deleting a role with a toggle in flight drops the toggle."""
    await matrix.load()
    role = await matrix.create_role({"name": "Auditor", "permissions": ["auditlog:view"]})
    network.set_delay("set_role_permission", 0.05)

    pending = asyncio.ensure_future(matrix.toggle(role.role_id, "users:read", True))
    await asyncio.sleep(0.01)

    assert await matrix.delete_role(role.role_id) is True
    assert matrix.pending_count == 0

    assert await pending is False
    assert matrix.role(role.role_id) is None
    assert matrix.last_error.startswith("Failed to update permission:")


@pytest.mark.asyncio
async def test_toggle_unknown_role(matrix):
    """Unknown roles are reported, not raised."""
    await matrix.load()

    assert await matrix.toggle("role_missing", "users:read", True) is False
    assert matrix.last_error == "Role not found."


@pytest.mark.asyncio
async def test_create_and_delete_role(matrix):
    """Creating and deleting reload the grid."""
    await matrix.load()

    role = await matrix.create_role({"name": "Auditor", "permissions": ["auditlog:view"]})
    assert matrix.role(role.role_id) is not None

    assert await matrix.delete_role(role.role_id) is True
    assert matrix.role(role.role_id) is None


@pytest.mark.asyncio
async def test_delete_role_failure(matrix):
    """Delete failures become a message."""
    await matrix.load()

    assert await matrix.delete_role("role_staff") is False
    assert matrix.last_error.startswith("Failed to delete role:")

    assert await matrix.delete_role("role_admin") is False


def test_permission_toggle_apply():
    """A toggle applied to a role returns a new role."""
    role = Role(role_id="r", name="R", permissions=["users:read"])

    granted = PermissionToggle("r", "users:edit", True).apply(role)

    assert granted.permissions == ["users:read", "users:edit"]
    assert role.permissions == ["users:read"]
