"""
Role Policy Port - Decides whether a role may be mutated.

Consulted by the command layer on every role mutation, so protection does
not depend on which buttons the UI disables.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from swarm_admin.domain.role import Role


class Decision(Enum):
    """Authorization decision."""
    ALLOW = "allow"
    DENY = "deny"


class RoleAction(Enum):
    """Mutations a policy can be asked about."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    SET_PERMISSION = "set_permission"


@dataclass
class PolicyDecision:
    """Decision plus a human-readable reason."""
    decision: Decision
    reason: str
    policy_id: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.decision == Decision.ALLOW


class RolePolicyPort(ABC):
    """Port: Policy decision point for role mutations."""

    @abstractmethod
    def evaluate(self, role: Role, action: RoleAction) -> PolicyDecision:
        """
        Evaluate whether an action may be applied to a role.

        Args:
            role: Role being mutated (the proposed role for CREATE)
            action: Requested mutation

        Returns:
            PolicyDecision with allow/deny and reason
        """
        pass

    @abstractmethod
    def is_protected(self, role: Role) -> bool:
        """
        Check whether a role is protected from mutation.

        Args:
            role: Role to check

        Returns:
            True if update/delete/permission changes are always denied
        """
        pass
