"""
Adapters - Implementations of ports.

Storage:
- MemoryDirectoryAdapter: In-memory users and roles

Authorization (PDP):
- ProtectedRolePolicyAdapter: Protected (built-in) roles are immutable

Network boundary:
- SimulatedNetworkAdapter: Latency and failure injection
"""

from swarm_admin.adapters.memory_directory import MemoryDirectoryAdapter
from swarm_admin.adapters.protected_role_policy import ProtectedRolePolicyAdapter
from swarm_admin.adapters.simulated_network import SimulatedNetworkAdapter

__all__ = [
    "MemoryDirectoryAdapter",
    "ProtectedRolePolicyAdapter",
    "SimulatedNetworkAdapter",
]
