"""
Memory Directory Adapter - In-memory user and role storage.
"""

import logging
import uuid
from dataclasses import fields, replace
from typing import Optional, List, Dict, Any
from swarm_admin.ports.directory_port import DirectoryPort
from swarm_admin.domain.user import User, UserStatus, utcnow
from swarm_admin.domain.role import Role, normalize_permissions
from swarm_admin.domain.errors import FieldError, ValidationError

logger = logging.getLogger(__name__)

_USER_FIELDS = {f.name for f in fields(User)}
_ROLE_FIELDS = {f.name for f in fields(Role)}
_IMMUTABLE_USER_FIELDS = {"user_id", "created_at"}

ROLE_NAME_MIN_LENGTH = 2


def _copy_role(role: Role) -> Role:
    return replace(role, permissions=list(role.permissions))


class MemoryDirectoryAdapter(DirectoryPort):
    """
    In-memory user and role storage.

    Owned explicitly by whoever constructs it; there is no module-level
    instance. Records are lost when the object is dropped.
    """

    def __init__(
        self,
        users: Optional[List[User]] = None,
        roles: Optional[List[Role]] = None,
    ):
        """
        Initialize in-memory storage.

        Args:
            users: Optional initial users (kept in the given order)
            roles: Optional initial roles (kept in the given order)
        """
        self._users: List[User] = [replace(u) for u in users or []]
        self._roles: List[Role] = [_copy_role(r) for r in roles or []]

    # --- Users ---

    def list_users(self) -> List[User]:
        """Snapshot of every user."""
        return [replace(u) for u in self._users]

    def get_user(self, user_id: str) -> Optional[User]:
        """Get a user from memory."""
        index = self._user_index(user_id)
        if index is None:
            return None
        return replace(self._users[index])

    def insert_user(self, data: Dict[str, Any]) -> User:
        """Create a user; newest users are kept first."""
        values = self._user_values(data)
        user = User(
            user_id=self._new_id("usr", {u.user_id for u in self._users}),
            created_at=utcnow(),
            **values,
        )
        self._users.insert(0, user)
        logger.debug("Inserted user %s", user.user_id)
        return replace(user)

    def update_user(self, user_id: str, fields: Dict[str, Any]) -> Optional[User]:
        """Merge fields into a stored user."""
        index = self._user_index(user_id)
        if index is None:
            return None

        values = self._user_values(fields)
        self._users[index] = replace(self._users[index], **values)
        return replace(self._users[index])

    def delete_user(self, user_id: str) -> bool:
        """Delete a user from memory."""
        index = self._user_index(user_id)
        if index is None:
            return False

        del self._users[index]
        return True

    # --- Roles ---

    def list_roles(self) -> List[Role]:
        """Snapshot of every role."""
        return [_copy_role(r) for r in self._roles]

    def get_role(self, role_id: str) -> Optional[Role]:
        """Get a role from memory."""
        index = self._role_index(role_id)
        if index is None:
            return None
        return _copy_role(self._roles[index])

    def get_role_by_name(self, name: str) -> Optional[Role]:
        """Get a role by case-insensitive name."""
        wanted = name.strip().lower()
        for role in self._roles:
            if role.name.lower() == wanted:
                return _copy_role(role)
        return None

    def insert_role(self, data: Dict[str, Any]) -> Role:
        """Create a role after checking name and permission invariants."""
        values = self._role_values(data)
        name = (values.get("name") or "").strip()
        permissions = normalize_permissions(values.get("permissions") or [])
        self._check_role(name, permissions, exclude_id=None)

        role = Role(
            role_id=self._new_id("role", {r.role_id for r in self._roles}),
            name=name,
            description=values.get("description"),
            permissions=permissions,
        )
        self._roles.append(role)
        logger.debug("Inserted role %s (%s)", role.role_id, role.name)
        return _copy_role(role)

    def update_role(self, role_id: str, fields: Dict[str, Any]) -> Optional[Role]:
        """Merge fields into a stored role."""
        index = self._role_index(role_id)
        if index is None:
            return None

        values = self._role_values(fields)
        current = self._roles[index]
        if "name" in values:
            values["name"] = (values["name"] or "").strip()
        if "permissions" in values:
            values["permissions"] = normalize_permissions(values["permissions"] or [])

        updated = replace(current, **values)
        self._check_role(updated.name, updated.permissions, exclude_id=role_id)
        self._roles[index] = updated
        return _copy_role(updated)

    def delete_role(self, role_id: str) -> bool:
        """Delete a role from memory."""
        index = self._role_index(role_id)
        if index is None:
            return False

        del self._roles[index]
        return True

    # --- Helpers ---

    def _user_index(self, user_id: str) -> Optional[int]:
        for index, user in enumerate(self._users):
            if user.user_id == user_id:
                return index
        return None

    def _role_index(self, role_id: str) -> Optional[int]:
        for index, role in enumerate(self._roles):
            if role.role_id == role_id:
                return index
        return None

    @staticmethod
    def _new_id(prefix: str, taken: set) -> str:
        """Fresh ID, never reused within this store."""
        while True:
            candidate = f"{prefix}_{uuid.uuid4().hex}"
            if candidate not in taken:
                return candidate

    @staticmethod
    def _user_values(data: Dict[str, Any]) -> Dict[str, Any]:
        unknown = set(data) - _USER_FIELDS
        if unknown:
            raise ValueError(f"Unknown user fields: {sorted(unknown)}")

        values = {k: v for k, v in data.items() if k not in _IMMUTABLE_USER_FIELDS}
        if "status" in values and not isinstance(values["status"], UserStatus):
            values["status"] = UserStatus(values["status"])
        return values

    @staticmethod
    def _role_values(data: Dict[str, Any]) -> Dict[str, Any]:
        unknown = set(data) - _ROLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown role fields: {sorted(unknown)}")
        return {k: v for k, v in data.items() if k != "role_id"}

    def _check_role(self, name: str, permissions: List[str], exclude_id: Optional[str]):
        """Raise ValidationError if a role would break the store invariants."""
        errors = []

        if len(name) < ROLE_NAME_MIN_LENGTH:
            errors.append(FieldError("name", "Role name is too short."))
        elif any(
            r.name.lower() == name.lower() and r.role_id != exclude_id
            for r in self._roles
        ):
            errors.append(FieldError("name", f'Role with name "{name}" already exists.'))

        if not permissions:
            errors.append(FieldError("permissions", "Role must have at least one permission."))

        if errors:
            raise ValidationError(errors)
