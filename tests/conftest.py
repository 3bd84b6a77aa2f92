"""
Shared fixtures: a seeded directory behind a zero-latency network.
"""

import pytest
from swarm_admin.adapters.memory_directory import MemoryDirectoryAdapter
from swarm_admin.adapters.protected_role_policy import ProtectedRolePolicyAdapter
from swarm_admin.adapters.simulated_network import SimulatedNetworkAdapter
from swarm_admin.config import Settings
from swarm_admin.sdk.client import AdminClient
from swarm_admin.seed import demo_directory
from swarm_admin.services.commands import DirectoryCommands
from swarm_admin.services.query import UserQueryService


@pytest.fixture
def directory():
    users, roles = demo_directory()
    return MemoryDirectoryAdapter(users=users, roles=roles)


@pytest.fixture
def network():
    return SimulatedNetworkAdapter()


@pytest.fixture
def policy():
    return ProtectedRolePolicyAdapter()


@pytest.fixture
def queries(directory, network):
    return UserQueryService(directory, network)


@pytest.fixture
def commands(directory, network, policy):
    return DirectoryCommands(directory, network, policy)


@pytest.fixture
def settings():
    return Settings(_env_file=None, latency_seconds=0.0, seed_data=True)


@pytest.fixture
def client(settings):
    return AdminClient.from_settings(settings)


@pytest.fixture
def new_user_values():
    return {
        "name": "Kara Thrace",
        "email": "kara@example.com",
        "role": "Staff",
        "status": "Active",
        "department": "Flight",
        "password": "starbuck99",
        "confirm_password": "starbuck99",
    }
