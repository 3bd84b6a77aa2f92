"""
Profile Service - Settings page operations for the signed-in user.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any, Mapping
from swarm_admin.domain.user import User
from swarm_admin.ports.directory_port import DirectoryPort
from swarm_admin.ports.network_port import NetworkPort
from swarm_admin.services.validators import PasswordChangeForm, ProfileForm, validate_form

logger = logging.getLogger(__name__)


@dataclass
class PasswordChangeResult:
    """Outcome of a password change; failures are outcomes, not exceptions."""
    success: bool
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "message": self.message}


class ProfileService:
    """
    Profile and password operations bound to one current user.

    The current user ID comes from whoever signed the user in; this
    service does not authenticate anybody.
    """

    def __init__(self, directory: DirectoryPort, network: NetworkPort, current_user_id: str):
        """
        Initialize profile service.

        Args:
            directory: Store holding the user
            network: Network boundary every call crosses
            current_user_id: ID of the signed-in user
        """
        self._directory = directory
        self._network = network
        self.current_user_id = current_user_id

    async def fetch_current_user(self) -> Optional[User]:
        """
        Fetch the signed-in user.

        Returns:
            User if found, None otherwise
        """
        await self._network.call("fetch_current_user")
        user = self._directory.get_user(self.current_user_id)
        if user is None:
            logger.error("Current user %s not found", self.current_user_id)
        return user

    async def update_profile(self, values: Mapping[str, Any]) -> Optional[User]:
        """
        Update name, department and location of the signed-in user.

        Other fields in `values` (email included) are ignored.

        Returns:
            Updated user, None if the user no longer exists

        Raises:
            ValidationError: invalid profile form
            TransientError: simulated network failure
        """
        form = validate_form(ProfileForm, values)

        await self._network.call("update_profile")
        user = self._directory.update_user(self.current_user_id, form.profile_values())
        if user is None:
            logger.info("update_profile: %s not found", self.current_user_id)
        else:
            logger.info("Updated profile of %s", self.current_user_id)
        return user

    async def change_password(self, values: Mapping[str, Any]) -> PasswordChangeResult:
        """
        Change the signed-in user's password.

        Args:
            values: current_password, new_password, confirm_password

        Returns:
            PasswordChangeResult; the stored secret changes only on success

        Raises:
            ValidationError: invalid password form
            TransientError: simulated network failure
        """
        form = validate_form(PasswordChangeForm, values)

        await self._network.call("change_password")
        user = self._directory.get_user(self.current_user_id)
        if user is None:
            return PasswordChangeResult(False, "Current user not found.")

        if not user.check_password(form.current_password):
            logger.info("Password change rejected for %s: wrong current password", user.user_id)
            return PasswordChangeResult(False, "Incorrect current password.")

        self._directory.update_user(user.user_id, {"password": form.new_password})
        logger.info("Password changed for %s", user.user_id)
        return PasswordChangeResult(True, "Password updated successfully.")
