from swarm_admin.sdk.client import AdminClient

__all__ = ["AdminClient"]
