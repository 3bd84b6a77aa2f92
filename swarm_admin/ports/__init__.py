"""
Ports - Interfaces for storage, policy and the network boundary.

Hexagonal architecture: These define WHAT we need, not HOW.
Adapters provide the HOW.
"""

from swarm_admin.ports.directory_port import DirectoryPort
from swarm_admin.ports.policy_port import RolePolicyPort, RoleAction, PolicyDecision, Decision
from swarm_admin.ports.network_port import NetworkPort

__all__ = [
    # Storage
    "DirectoryPort",
    # Authorization (PDP)
    "RolePolicyPort",
    "RoleAction",
    "PolicyDecision",
    "Decision",
    # Network boundary
    "NetworkPort",
]
