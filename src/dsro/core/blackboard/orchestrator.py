"""Cycle loop for the blackboard protocol.

Resources are split into fixed-size clusters, one
:class:`~dsro.core.blackboard.agent.BlackboardAgent` per cluster.  Every
cycle each agent gets exactly one :meth:`try_improve` call, sequentially,
so the board never sees concurrent writers.  The loop stops at the first
cycle in which no contribution changed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence  # noqa: TC003

from dsro.core.blackboard.agent import MAX_CLUSTER_SIZE, BlackboardAgent
from dsro.core.blackboard.blackboard import Blackboard
from dsro.core.errors import ClusterSizeError, ConfigurationError
from dsro.core.model.resource import DiscreteResource  # noqa: TC001

logger = logging.getLogger(__name__)


def partition(
    resources: Sequence[DiscreteResource], cluster_size: int
) -> list[tuple[int, Sequence[DiscreteResource]]]:
    """Split *resources* into ``(offset, slice)`` clusters; the last may be shorter."""
    if not 1 <= cluster_size <= MAX_CLUSTER_SIZE:
        raise ClusterSizeError(cluster_size, MAX_CLUSTER_SIZE)
    return [
        (offset, resources[offset : offset + cluster_size])
        for offset in range(0, len(resources), cluster_size)
    ]


class BlackboardOrchestrator:
    """Runs blackboard agents cycle by cycle until a fixed point.

    Usage::

        agents = [BlackboardAgent(f"cluster-{i}", chunk, 0.9, 10, offset=o) ...]
        orchestrator = BlackboardOrchestrator(agents, max_cycles=50)
        board = orchestrator.run()
        indices = orchestrator.selected_indices()
    """

    def __init__(
        self,
        agents: list[BlackboardAgent],
        blackboard: Blackboard | None = None,
        *,
        max_cycles: int = 20,
    ) -> None:
        if max_cycles < 1:
            msg = f"max_cycles must be >= 1, got {max_cycles}"
            raise ConfigurationError(msg)
        self.agents = agents
        self.blackboard = blackboard or Blackboard()
        self.max_cycles = max_cycles
        self.cycles = 0
        self.converged = False

    def run(self) -> Blackboard:
        """Execute improvement cycles until nothing changes or ``max_cycles``."""
        for cycle in range(1, self.max_cycles + 1):
            changed = [agent.try_improve(self.blackboard) for agent in self.agents]
            self.cycles = cycle
            logger.debug(
                "cycle %d: %d/%d agents changed, cost %s",
                cycle,
                sum(changed),
                len(changed),
                self.blackboard.current_cost,
            )
            if not any(changed):
                self.converged = True
                break

        if not self.converged:
            logger.warning("blackboard did not reach a fixed point in %d cycles", self.max_cycles)
        return self.blackboard

    def selected_indices(self) -> list[int]:
        """Union of every agent's contribution as global resource indices."""
        return sorted(i for agent in self.agents for i in agent.global_indices)
