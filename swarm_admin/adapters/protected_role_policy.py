"""
Protected Role Policy Adapter - Keeps built-in roles immutable.

The dashboard greys out the Admin row of the permission matrix; this policy
enforces the same rule underneath, so a direct command call is rejected too.
"""

from typing import Iterable, Optional
from swarm_admin.ports.policy_port import (
    RolePolicyPort,
    RoleAction,
    PolicyDecision,
    Decision,
)
from swarm_admin.domain.role import Role

DEFAULT_PROTECTED_ROLES = ("Admin",)


class ProtectedRolePolicyAdapter(RolePolicyPort):
    """
    Deny mutation of protected roles by name.

    - Protected roles: update, delete and permission changes denied
    - Other roles: everything allowed
    - CREATE is always allowed here; duplicate names are the store's concern
    """

    def __init__(self, protected_names: Optional[Iterable[str]] = None):
        """
        Initialize the policy.

        Args:
            protected_names: Role names that may not be mutated (default: Admin)
        """
        names = DEFAULT_PROTECTED_ROLES if protected_names is None else protected_names
        self._protected = {name.strip().lower() for name in names}

    def is_protected(self, role: Role) -> bool:
        """Check role name against the protected set."""
        return role.name.strip().lower() in self._protected

    def evaluate(self, role: Role, action: RoleAction) -> PolicyDecision:
        """Evaluate a role mutation."""
        if action == RoleAction.CREATE:
            return PolicyDecision(
                decision=Decision.ALLOW,
                reason=f"Creating role {role.name} is allowed",
                policy_id="protected-roles",
            )

        if self.is_protected(role):
            return PolicyDecision(
                decision=Decision.DENY,
                reason=f'Role "{role.name}" is protected and cannot be {_past_tense(action)}',
                policy_id="protected-roles",
            )

        return PolicyDecision(
            decision=Decision.ALLOW,
            reason=f"Role {role.name} may be {_past_tense(action)}",
            policy_id="protected-roles",
        )


def _past_tense(action: RoleAction) -> str:
    return {
        RoleAction.CREATE: "created",
        RoleAction.UPDATE: "updated",
        RoleAction.DELETE: "deleted",
        RoleAction.SET_PERMISSION: "modified",
    }[action]
