"""
Permission Matrix Controller - Roles x permissions grid with optimistic edits.

A toggle is a command object: it is applied to the local grid at once, sent
to the command layer, and then reconciled. Local state is always
"last confirmed snapshot + still-pending toggles", so a failed toggle simply
drops out of the replay instead of needing a hand-written inverse.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional
from swarm_admin.domain.role import Role, PERMISSION_CATALOG
from swarm_admin.domain.errors import AdminError
from swarm_admin.ports.policy_port import RolePolicyPort
from swarm_admin.services.query import UserQueryService
from swarm_admin.services.commands import DirectoryCommands

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class PermissionToggle:
    """One pending grant/revoke of a permission on a role."""
    role_id: str
    permission: str
    enabled: bool

    def apply(self, role: Role) -> Role:
        return replace(role, permissions=role.with_permission(self.permission, self.enabled))


class PermissionMatrixController:
    """
    View state of the roles page.

    `roles` is what the grid renders; `confirmed` is the last state the
    command layer acknowledged.
    """

    def __init__(
        self,
        queries: UserQueryService,
        commands: DirectoryCommands,
        policy: RolePolicyPort,
    ):
        self._queries = queries
        self._commands = commands
        self._policy = policy

        self.roles: List[Role] = []
        self.confirmed: Dict[str, Role] = {}
        self.is_loading = False
        self.last_error: Optional[str] = None
        self._pending: List[PermissionToggle] = []

    @property
    def permissions(self) -> tuple:
        """Matrix columns."""
        return PERMISSION_CATALOG

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def load(self) -> bool:
        """Fetch every role and reset the confirmed snapshot to it."""
        self.is_loading = True
        self.last_error = None
        try:
            roles = await self._queries.list_roles()
        except AdminError as exc:
            logger.warning("Failed to load roles: %s", exc)
            self.last_error = "Failed to load roles."
            return False
        finally:
            self.is_loading = False

        # Toggles still in flight are replayed over the fresh snapshot
        self.confirmed = {r.role_id: r for r in roles}
        self._pending = [op for op in self._pending if op.role_id in self.confirmed]
        self.roles = [self._local(r.role_id) for r in roles]
        return True

    def role(self, role_id: str) -> Optional[Role]:
        for role in self.roles:
            if role.role_id == role_id:
                return role
        return None

    def is_granted(self, role_id: str, permission: str) -> bool:
        role = self.role(role_id)
        return role is not None and role.has_permission(permission)

    def is_editable(self, role_id: str) -> bool:
        """False for protected roles; the grid disables their checkboxes."""
        role = self.role(role_id)
        return role is not None and not self._policy.is_protected(role)

    async def toggle(self, role_id: str, permission: str, enabled: bool) -> bool:
        """
        Grant or revoke a permission optimistically.

        Returns:
            True if confirmed, False if rejected (local grid rolled back)
        """
        if role_id not in self.confirmed:
            self.last_error = "Role not found."
            return False

        op = PermissionToggle(role_id=role_id, permission=permission, enabled=enabled)
        self._pending.append(op)
        self._rebuild(role_id)

        try:
            authoritative = await self._commands.set_role_permission(role_id, permission, enabled)
        except AdminError as exc:
            self._settle(op)
            self._rebuild(role_id)
            self.last_error = f"Failed to update permission: {exc}"
            logger.info("Rolled back %s on %s: %s", permission, role_id, exc)
            return False

        self._settle(op)
        # A reload may have dropped the role meanwhile
        if role_id in self.confirmed:
            self.confirmed[role_id] = authoritative
        self._rebuild(role_id)
        self.last_error = None
        return True

    async def create_role(self, values: Mapping[str, Any]) -> Role:
        """
        Create a role, then reload the grid.

        Raises:
            ValidationError: form errors stay with the role form
            AdminError: any other command failure
        """
        role = await self._commands.create_role(values)
        await self.load()
        return role

    async def delete_role(self, role_id: str) -> bool:
        """
        Delete a role, then reload the grid.

        Returns:
            True if the role is gone (already-deleted counts), False on failure
        """
        try:
            await self._commands.delete_role(role_id)
        except AdminError as exc:
            self.last_error = f"Failed to delete role: {exc}"
            return False
        return await self.load()

    def _settle(self, op: PermissionToggle):
        """Forget a finished toggle (a reload may already have dropped it)."""
        if op in self._pending:
            self._pending.remove(op)

    def _local(self, role_id: str) -> Role:
        """Local role = confirmed snapshot + pending toggles, in order."""
        role = self.confirmed[role_id]
        for op in self._pending:
            if op.role_id == role_id:
                role = op.apply(role)
        return role

    def _rebuild(self, role_id: str):
        if role_id not in self.confirmed:
            return

        role = self._local(role_id)
        for index, current in enumerate(self.roles):
            if current.role_id == role_id:
                self.roles[index] = role
                return
