"""
Network Port - The asynchronous boundary every query and command crosses.

The dashboard has no real backend, but callers are written against an
interface that can suspend and can fail.
"""

from abc import ABC, abstractmethod


class NetworkPort(ABC):
    """Port: Suspend the caller for one simulated round trip."""

    @abstractmethod
    async def call(self, operation: str) -> None:
        """
        Perform one round trip for an operation.

        Args:
            operation: Operation name (e.g. "query_users", "create_role")

        Raises:
            TransientError: the round trip failed
        """
        pass
