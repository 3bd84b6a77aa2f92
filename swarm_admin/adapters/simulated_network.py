"""
Simulated Network Adapter - Latency and failure injection for the mock backend.

WARNING: Stands in for a real API. Nothing leaves the process.
"""

import asyncio
import logging
import random
from typing import Optional, Dict
from swarm_admin.ports.network_port import NetworkPort
from swarm_admin.domain.errors import TransientError

logger = logging.getLogger(__name__)


class SimulatedNetworkAdapter(NetworkPort):
    """
    Suspends callers for a configurable delay and optionally fails them.

    Delays can be set per operation; unknown operations use the default.
    Failures come from a random failure rate or from explicitly queued
    failures (deterministic, for tests and demos).
    """

    def __init__(
        self,
        latency: float = 0.0,
        delays: Optional[Dict[str, float]] = None,
        failure_rate: float = 0.0,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize simulated network.

        Args:
            latency: Default delay in seconds
            delays: Per-operation delay overrides in seconds
            failure_rate: Probability (0..1) that a call fails
            rng: Random source for failure_rate (seedable)
        """
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be between 0 and 1")

        self._latency = latency
        self._delays: Dict[str, float] = dict(delays or {})
        self._failure_rate = failure_rate
        self._rng = rng or random.Random()
        self._queued_failures: Dict[str, int] = {}
        self.calls: Dict[str, int] = {}

    def set_delay(self, operation: str, seconds: float):
        """Override the delay of one operation."""
        self._delays[operation] = seconds

    def inject_failure(self, operation: str, count: int = 1):
        """Make the next `count` calls of an operation fail."""
        self._queued_failures[operation] = self._queued_failures.get(operation, 0) + count

    def delay_for(self, operation: str) -> float:
        return self._delays.get(operation, self._latency)

    async def call(self, operation: str) -> None:
        """Sleep for the operation delay, then maybe fail."""
        self.calls[operation] = self.calls.get(operation, 0) + 1

        delay = self.delay_for(operation)
        if delay > 0:
            await asyncio.sleep(delay)
        else:
            # Still yield so callers always observe a suspension point
            await asyncio.sleep(0)

        if self._queued_failures.get(operation):
            self._queued_failures[operation] -= 1
            logger.warning("Injected failure for %s", operation)
            raise TransientError(operation)

        if self._failure_rate and self._rng.random() < self._failure_rate:
            logger.warning("Random failure for %s", operation)
            raise TransientError(operation)
