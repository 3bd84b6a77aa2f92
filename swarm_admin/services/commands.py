"""
Directory Commands - Validated, policy-checked mutations.

Order of every command:
1. Validate the form (synchronous; nothing is mutated on failure)
2. Consult the role policy (role mutations only)
3. Cross the network boundary (may suspend, may raise TransientError)
4. Mutate the store synchronously once resumed
"""

import logging
from typing import Optional, Dict, Any, Mapping
from swarm_admin.domain.user import User
from swarm_admin.domain.role import Role
from swarm_admin.domain.errors import FieldError, NotFoundError, PolicyDeniedError, ValidationError
from swarm_admin.ports.directory_port import DirectoryPort
from swarm_admin.ports.policy_port import RolePolicyPort, RoleAction
from swarm_admin.ports.network_port import NetworkPort
from swarm_admin.services.validators import RoleForm, UserForm, validate_form

logger = logging.getLogger(__name__)


class DirectoryCommands:
    """
    Write side of the directory.

    Soft failures follow the store contract: updates return None and
    deletes return False when the record is gone. Deleting twice is not
    an error.
    """

    def __init__(
        self,
        directory: DirectoryPort,
        network: NetworkPort,
        policy: RolePolicyPort,
        enforce_unique_email: bool = True,
        enforce_permission_catalog: bool = True,
    ):
        """
        Initialize commands.

        Args:
            directory: Store to mutate
            network: Network boundary every command crosses
            policy: Role policy consulted on role mutations
            enforce_unique_email: Reject duplicate emails (case-insensitive)
            enforce_permission_catalog: Reject permission keys outside the catalog
        """
        self._directory = directory
        self._network = network
        self._policy = policy
        self._enforce_unique_email = enforce_unique_email
        self._enforce_permission_catalog = enforce_permission_catalog

    # --- Users ---

    async def create_user(self, values: Mapping[str, Any]) -> User:
        """
        Create a user from raw form values.

        Args:
            values: UserForm fields; `role` is a role name

        Returns:
            Created user

        Raises:
            ValidationError: invalid form, unknown role or duplicate email
            TransientError: simulated network failure
        """
        form = validate_form(UserForm, {**values, "id": None})
        record = self._user_record(form, exclude_id=None)

        await self._network.call("create_user")
        user = self._directory.insert_user(record)
        logger.info("Created user %s", user.user_id)
        return user

    async def update_user(self, user_id: str, values: Mapping[str, Any]) -> Optional[User]:
        """
        Update a user. Missing fields keep their current value.

        Args:
            user_id: User ID
            values: Partial UserForm fields; `role` is a role name

        Returns:
            Updated user, None if the user no longer exists

        Raises:
            ValidationError: invalid merged form, unknown role or duplicate email
            TransientError: simulated network failure
        """
        current = self._directory.get_user(user_id)
        if current is None:
            logger.info("update_user: %s not found", user_id)
            return None

        merged = {**self._form_values(current), **values, "id": user_id}
        form = validate_form(UserForm, merged)
        record = self._user_record(form, exclude_id=user_id)

        await self._network.call("update_user")
        user = self._directory.update_user(user_id, record)
        if user is None:
            logger.info("update_user: %s deleted while saving", user_id)
        else:
            logger.info("Updated user %s", user_id)
        return user

    async def delete_user(self, user_id: str) -> bool:
        """
        Delete a user.

        Returns:
            True if removed, False if it was already gone
        """
        await self._network.call("delete_user")
        removed = self._directory.delete_user(user_id)
        if removed:
            logger.info("Deleted user %s", user_id)
        else:
            logger.info("delete_user: %s already gone", user_id)
        return removed

    # --- Roles ---

    async def create_role(self, values: Mapping[str, Any]) -> Role:
        """
        Create a role from raw form values.

        Raises:
            ValidationError: invalid form, duplicate name or no permissions
            PolicyDeniedError: policy refused the role
            TransientError: simulated network failure
        """
        form = self._validate_role(values)
        proposed = Role(role_id="", name=form.name, description=form.description,
                        permissions=form.permissions)
        self._check_policy(proposed, RoleAction.CREATE)

        await self._network.call("create_role")
        role = self._directory.insert_role({
            "name": form.name,
            "description": form.description,
            "permissions": form.permissions,
        })
        logger.info("Created role %s (%s)", role.role_id, role.name)
        return role

    async def update_role(self, role_id: str, values: Mapping[str, Any]) -> Optional[Role]:
        """
        Update a role. Missing fields keep their current value.

        Returns:
            Updated role, None if the role no longer exists

        Raises:
            ValidationError: invalid merged form or duplicate name
            PolicyDeniedError: role is protected
            TransientError: simulated network failure
        """
        current = self._directory.get_role(role_id)
        if current is None:
            logger.info("update_role: %s not found", role_id)
            return None

        merged = {**current.to_dict(), **values, "id": role_id}
        merged.pop("role_id", None)
        form = self._validate_role(merged)
        self._check_policy(current, RoleAction.UPDATE)

        await self._network.call("update_role")
        role = self._directory.update_role(role_id, {
            "name": form.name,
            "description": form.description,
            "permissions": form.permissions,
        })
        if role is not None:
            logger.info("Updated role %s", role_id)
        return role

    async def delete_role(self, role_id: str) -> bool:
        """
        Delete a role.

        Returns:
            True if removed, False if it was already gone

        Raises:
            ValidationError: users are still assigned to the role
            PolicyDeniedError: role is protected
            TransientError: simulated network failure
        """
        current = self._directory.get_role(role_id)
        if current is not None:
            self._check_policy(current, RoleAction.DELETE)
            assigned = [u for u in self._directory.list_users() if u.role_id == role_id]
            if assigned:
                raise ValidationError.single(
                    "id",
                    f'Role "{current.name}" is assigned to {len(assigned)} user(s).',
                )

        await self._network.call("delete_role")
        removed = self._directory.delete_role(role_id)
        if removed:
            logger.info("Deleted role %s", role_id)
        else:
            logger.info("delete_role: %s already gone", role_id)
        return removed

    async def set_role_permission(self, role_id: str, permission: str, enabled: bool) -> Role:
        """
        Grant or revoke a single permission.

        Returns:
            The authoritative role after the change

        Raises:
            NotFoundError: role does not exist
            ValidationError: unknown permission or last permission removed
            PolicyDeniedError: role is protected
            TransientError: simulated network failure
        """
        current = self._directory.get_role(role_id)
        if current is None:
            raise NotFoundError("Role", role_id)

        permissions = current.with_permission(permission, enabled)
        self._validate_role({
            "id": role_id,
            "name": current.name,
            "description": current.description,
            "permissions": permissions,
        })
        self._check_policy(current, RoleAction.SET_PERMISSION)

        await self._network.call("set_role_permission")

        # Re-read after resuming so overlapping toggles on one role compose
        current = self._directory.get_role(role_id)
        if current is None:
            raise NotFoundError("Role", role_id)
        role = self._directory.update_role(
            role_id, {"permissions": current.with_permission(permission, enabled)}
        )

        logger.info(
            "Permission %s %s for role %s",
            permission, "enabled" if enabled else "disabled", role.name,
        )
        return role

    # --- Helpers ---

    def _validate_role(self, values: Mapping[str, Any]) -> RoleForm:
        return validate_form(
            RoleForm,
            values,
            context={"enforce_permission_catalog": self._enforce_permission_catalog},
        )

    def _check_policy(self, role: Role, action: RoleAction):
        decision = self._policy.evaluate(role, action)
        if not decision.allowed:
            logger.warning("Policy denied %s on role %s: %s", action.value, role.name, decision.reason)
            raise PolicyDeniedError(decision.reason)

    def _user_record(self, form: UserForm, exclude_id: Optional[str]) -> Dict[str, Any]:
        """Resolve the role name and check cross-record rules."""
        errors = []

        role = self._directory.get_role_by_name(form.role)
        if role is None:
            errors.append(FieldError("role", f'Unknown role "{form.role}".'))

        if self._enforce_unique_email and self._email_taken(form.email, exclude_id):
            errors.append(FieldError("email", "Email address is already in use."))

        if errors:
            raise ValidationError(errors)

        record = form.record_values()
        record["role_id"] = role.role_id
        return record

    def _email_taken(self, email: str, exclude_id: Optional[str]) -> bool:
        wanted = email.lower()
        return any(
            u.email.lower() == wanted and u.user_id != exclude_id
            for u in self._directory.list_users()
        )

    def _form_values(self, user: User) -> Dict[str, Any]:
        """Current record as UserForm input (role resolved to its name)."""
        role = self._directory.get_role(user.role_id)
        return {
            "name": user.name,
            "email": user.email,
            "role": role.name if role else "",
            "status": user.status.value,
            "department": user.department,
            "location": user.location,
        }
