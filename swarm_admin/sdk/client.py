"""
Admin Client - High-level SDK for the admin dashboard core.

Wires one explicitly owned directory to queries, commands, policy and the
view controllers, so nothing relies on module-level state.
"""

import logging
from typing import Optional, List
from swarm_admin.config import Settings, get_settings
from swarm_admin.ports.directory_port import DirectoryPort
from swarm_admin.ports.network_port import NetworkPort
from swarm_admin.ports.policy_port import RolePolicyPort
from swarm_admin.adapters.memory_directory import MemoryDirectoryAdapter
from swarm_admin.adapters.protected_role_policy import ProtectedRolePolicyAdapter
from swarm_admin.adapters.simulated_network import SimulatedNetworkAdapter
from swarm_admin.domain.user import User
from swarm_admin.domain.role import Role
from swarm_admin.services.query import UserQueryService
from swarm_admin.services.commands import DirectoryCommands
from swarm_admin.services.profile import ProfileService
from swarm_admin.services.stats import (
    DashboardStats,
    GrowthPoint,
    compute_dashboard_stats,
    compute_user_growth,
)
from swarm_admin.controllers.users_table import UsersTableController
from swarm_admin.controllers.permission_matrix import PermissionMatrixController
from swarm_admin.seed import demo_directory

logger = logging.getLogger(__name__)


class AdminClient:
    """
    High-level client combining the directory, its services and controllers.

    Example:
        from swarm_admin import AdminClient

        client = AdminClient.from_settings()

        table = client.users_table()
        await table.set_filter("role", "Admin")
        print(table.rows, table.total_count)

        await client.commands.create_user({...})
    """

    def __init__(
        self,
        directory: DirectoryPort,
        network: Optional[NetworkPort] = None,
        policy: Optional[RolePolicyPort] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize admin client with adapters.

        Args:
            directory: Store adapter (required)
            network: Network boundary (default: no latency, no failures)
            policy: Role policy (default: protected roles from settings)
            settings: Settings (default: read from the environment)
        """
        self.settings = settings or get_settings()
        self.directory = directory
        self.network = network or SimulatedNetworkAdapter()
        self.policy = policy or ProtectedRolePolicyAdapter(self.settings.protected_roles)

        self.queries = UserQueryService(self.directory, self.network)
        self.commands = DirectoryCommands(
            self.directory,
            self.network,
            self.policy,
            enforce_unique_email=self.settings.enforce_unique_email,
            enforce_permission_catalog=self.settings.enforce_permission_catalog,
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "AdminClient":
        """
        Build a client with in-memory adapters configured from settings.

        Args:
            settings: Settings (default: read from the environment)

        Returns:
            AdminClient, seeded with the demo directory if settings.seed_data
        """
        settings = settings or get_settings()
        if settings.seed_data:
            users, roles = demo_directory()
            directory = MemoryDirectoryAdapter(users=users, roles=roles)
        else:
            directory = MemoryDirectoryAdapter()

        logger.info(
            "Admin client ready (seeded=%s, latency=%ss)",
            settings.seed_data, settings.latency_seconds,
        )
        return cls(
            directory=directory,
            network=SimulatedNetworkAdapter(latency=settings.latency_seconds),
            settings=settings,
        )

    def users_table(self, page_size: Optional[int] = None) -> UsersTableController:
        """New users table controller (call refresh() to load the first page)."""
        return UsersTableController(
            self.queries,
            self.commands,
            page_size=page_size or self.settings.default_page_size,
            fetch_timeout=self.settings.fetch_timeout,
        )

    def permission_matrix(self) -> PermissionMatrixController:
        """New permission matrix controller (call load() first)."""
        return PermissionMatrixController(self.queries, self.commands, self.policy)

    def profile(self, current_user_id: str) -> ProfileService:
        """Settings page service for the signed-in user."""
        return ProfileService(self.directory, self.network, current_user_id)

    async def fetch_user(self, user_id: str) -> Optional[User]:
        return await self.queries.get_user(user_id)

    async def fetch_roles(self) -> List[Role]:
        return await self.queries.list_roles()

    async def fetch_dashboard_stats(self) -> DashboardStats:
        """Dashboard stat cards."""
        await self.network.call("dashboard_stats")
        role_names = {r.role_id: r.name for r in self.directory.list_roles()}
        return compute_dashboard_stats(self.directory.list_users(), role_names)

    async def fetch_user_growth(self) -> List[GrowthPoint]:
        """Cumulative user growth series for the dashboard chart."""
        await self.network.call("user_growth")
        return compute_user_growth(self.directory.list_users())
