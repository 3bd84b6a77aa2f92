"""
Directory Port - Interface for the user and role store.

Implementations:
- MemoryDirectoryAdapter: In-process collections (the dashboard's data layer)
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any
from swarm_admin.domain.user import User
from swarm_admin.domain.role import Role


class DirectoryPort(ABC):
    """Port: Authoritative User and Role collections."""

    @abstractmethod
    def list_users(self) -> List[User]:
        """
        Snapshot of every user.

        Returns:
            Copies of the stored users, in collection order
        """
        pass

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        """
        Get a user by ID.

        Args:
            user_id: User ID

        Returns:
            Copy of the user if found, None otherwise
        """
        pass

    @abstractmethod
    def insert_user(self, data: Dict[str, Any]) -> User:
        """
        Create a user.

        Args:
            data: User fields (without user_id / created_at)

        Returns:
            Created user with a fresh ID and creation timestamp
        """
        pass

    @abstractmethod
    def update_user(self, user_id: str, fields: Dict[str, Any]) -> Optional[User]:
        """
        Merge fields into a user.

        Args:
            user_id: User ID
            fields: Fields to overwrite

        Returns:
            Updated user, None if not found
        """
        pass

    @abstractmethod
    def delete_user(self, user_id: str) -> bool:
        """
        Delete a user.

        Args:
            user_id: User ID

        Returns:
            True if a record was removed, False if not found
        """
        pass

    @abstractmethod
    def list_roles(self) -> List[Role]:
        """
        Snapshot of every role.

        Returns:
            Copies of the stored roles, in creation order
        """
        pass

    @abstractmethod
    def get_role(self, role_id: str) -> Optional[Role]:
        """
        Get a role by ID.

        Args:
            role_id: Role ID

        Returns:
            Copy of the role if found, None otherwise
        """
        pass

    @abstractmethod
    def get_role_by_name(self, name: str) -> Optional[Role]:
        """
        Get a role by name (case-insensitive).

        Args:
            name: Role name

        Returns:
            Copy of the role if found, None otherwise
        """
        pass

    @abstractmethod
    def insert_role(self, data: Dict[str, Any]) -> Role:
        """
        Create a role.

        Args:
            data: Role fields (name, description, permissions)

        Returns:
            Created role with a fresh ID

        Raises:
            ValidationError: name shorter than 2, duplicate name, or no permissions
        """
        pass

    @abstractmethod
    def update_role(self, role_id: str, fields: Dict[str, Any]) -> Optional[Role]:
        """
        Merge fields into a role.

        Args:
            role_id: Role ID
            fields: Fields to overwrite

        Returns:
            Updated role, None if not found

        Raises:
            ValidationError: the result would break a role invariant
        """
        pass

    @abstractmethod
    def delete_role(self, role_id: str) -> bool:
        """
        Delete a role.

        Args:
            role_id: Role ID

        Returns:
            True if a record was removed, False if not found
        """
        pass
