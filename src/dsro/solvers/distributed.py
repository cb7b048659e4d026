"""Distributed solver entry points — wire agents, run them, reassemble the result.

:func:`solve_gossip` creates one :class:`~dsro.core.gossip.GossipAgent`
per resource, connects them along a :class:`~dsro.core.topology.Topology`
and runs them inside one or more containers until every agent terminated.
:func:`solve_blackboard` splits the resources into clusters and runs the
blackboard cycle loop.  Both validate their configuration before any agent
is created.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Sequence  # noqa: TC003

from dsro.core.blackboard.agent import BlackboardAgent
from dsro.core.blackboard.orchestrator import BlackboardOrchestrator, partition
from dsro.core.errors import ConfigurationError
from dsro.core.gossip.agent import GossipAgent
from dsro.core.model.resource import DiscreteResource  # noqa: TC001
from dsro.core.topology import Topology  # noqa: TC001
from dsro.runtime.container import Container
from dsro.runtime.errors import ConvergenceTimeoutError
from dsro.runtime.messages import Address  # noqa: TC001
from dsro.runtime.transport import InMemoryTransport, Transport
from dsro.solvers.models import Solution
from dsro.utils.telemetry import (
    ATTR_AGENTS,
    ATTR_CLUSTER_SIZE,
    ATTR_COST,
    ATTR_CYCLES,
    ATTR_EDGES,
    ATTR_FEASIBLE,
    ATTR_MAX_CYCLES,
    ATTR_MESSAGES,
    ATTR_PROTOCOL,
    ATTR_RESOURCES,
    get_tracer,
)

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


def _require_resources(resources: Sequence[DiscreteResource]) -> None:
    if not resources:
        msg = "at least one resource is required"
        raise ConfigurationError(msg)


def _selection(
    resources: Sequence[DiscreteResource], indices: Sequence[int], cost: float
) -> tuple[list[int], list[DiscreteResource]]:
    if math.isinf(cost):
        return [], []
    ordered = sorted(indices)
    return ordered, [resources[i] for i in ordered]


class GossipSolver:
    """One gossip run: agents, containers and the result mapping.

    Usage::

        solver = GossipSolver(resources, 0.9, 10, small_world(20, 4, 0.1, seed=7))
        solution = await solver.solve()
    """

    def __init__(
        self,
        resources: Sequence[DiscreteResource],
        p_target: float,
        v_target: int,
        topology: Topology,
        *,
        transport: Transport | None = None,
        containers: int = 1,
        timeout: float | None = None,
    ) -> None:
        _require_resources(resources)
        topology.validate(len(resources))
        if containers < 1:
            msg = f"containers must be >= 1, got {containers}"
            raise ConfigurationError(msg)
        if not topology.is_connected():
            logger.warning(
                "topology has %d components; each converges to its own optimum",
                len(topology.components()),
            )

        self.resources = list(resources)
        self.p_target = p_target
        self.v_target = v_target
        self.topology = topology
        self.transport: Transport = transport or InMemoryTransport()
        self.n_containers = containers
        self.timeout = timeout
        self.agents: list[GossipAgent] = []
        self.addresses: list[Address] = []

    def _build(self) -> list[Container]:
        containers = [Container(f"node{i}", self.transport) for i in range(self.n_containers)]
        n = len(self.resources)
        self.agents = [GossipAgent(r, self.p_target, self.v_target, n) for r in self.resources]
        self.addresses = [
            containers[slot % len(containers)].register(agent)
            for slot, agent in enumerate(self.agents)
        ]
        for slot, agent in enumerate(self.agents):
            agent.set_neighbors(self.addresses[j] for j in sorted(self.topology.neighbors_of(slot)))
        return containers

    async def solve(self) -> Solution:
        """Run every agent to termination and return the agreed solution."""
        with _tracer.start_as_current_span("dsro.solve_gossip") as span:
            span.set_attribute(ATTR_PROTOCOL, "gossip")
            span.set_attribute(ATTR_RESOURCES, len(self.resources))
            span.set_attribute(ATTR_EDGES, len(self.topology.edges))

            containers = self._build()
            span.set_attribute(ATTR_AGENTS, len(self.agents))
            runs = asyncio.gather(*(container.run() for container in containers))
            try:
                if self.timeout is None:
                    await runs
                else:
                    await asyncio.wait_for(runs, self.timeout)
            except TimeoutError as exc:
                terminated = sum(agent.terminated for agent in self.agents)
                raise ConvergenceTimeoutError(self.timeout or 0.0, terminated, len(self.agents)) from exc

            solution = self._assemble()
            span.set_attribute(ATTR_MESSAGES, solution.messages)
            span.set_attribute(ATTR_COST, solution.cost)
            span.set_attribute(ATTR_FEASIBLE, solution.feasible)
            return solution

    def _assemble(self) -> Solution:
        costs = {agent.best_known_cost for agent in self.agents}
        if len(costs) > 1:
            logger.warning("agents disagree on the best cost: %s", sorted(costs))

        reference = self.agents[0]
        slot_of = {address: slot for slot, address in enumerate(self.addresses)}
        indices, selected = _selection(
            self.resources,
            [slot_of[address] for address in reference.best_known_set],
            reference.best_known_cost,
        )
        messages = getattr(self.transport, "delivered", 0)
        logger.info("gossip finished: cost %s after %d deliveries", reference.best_known_cost, messages)
        return Solution(
            protocol="gossip",
            selected_indices=indices,
            selected_resources=selected,
            cost=reference.best_known_cost,
            messages=messages,
        )


def solve_gossip(
    resources: Sequence[DiscreteResource],
    p_target: float,
    v_target: int,
    topology: Topology,
    *,
    transport: Transport | None = None,
    containers: int = 1,
    timeout: float | None = None,
) -> Solution:
    """Solve with the gossip protocol; blocks until every agent terminated.

    Raises:
        DimensionMismatchError: When the topology size differs from the resource count.
        ConvergenceTimeoutError: When *timeout* expires first.
    """
    solver = GossipSolver(
        resources,
        p_target,
        v_target,
        topology,
        transport=transport,
        containers=containers,
        timeout=timeout,
    )
    return asyncio.run(solver.solve())


def solve_blackboard(
    resources: Sequence[DiscreteResource],
    p_target: float,
    v_target: int,
    cluster_size: int,
    max_cycles: int = 20,
) -> Solution:
    """Solve with clustered blackboard agents.

    Raises:
        ClusterSizeError: When *cluster_size* is outside ``1..MAX_CLUSTER_SIZE``.
    """
    _require_resources(resources)
    clusters = partition(resources, cluster_size)

    with _tracer.start_as_current_span("dsro.solve_blackboard") as span:
        span.set_attribute(ATTR_PROTOCOL, "blackboard")
        span.set_attribute(ATTR_RESOURCES, len(resources))
        span.set_attribute(ATTR_CLUSTER_SIZE, cluster_size)
        span.set_attribute(ATTR_MAX_CYCLES, max_cycles)

        agents = [
            BlackboardAgent(f"cluster-{n}", chunk, p_target, v_target, offset=offset)
            for n, (offset, chunk) in enumerate(clusters)
        ]
        orchestrator = BlackboardOrchestrator(agents, max_cycles=max_cycles)
        board = orchestrator.run()

        indices, selected = _selection(
            resources, orchestrator.selected_indices(), board.current_cost
        )
        span.set_attribute(ATTR_AGENTS, len(agents))
        span.set_attribute(ATTR_CYCLES, orchestrator.cycles)
        span.set_attribute(ATTR_COST, board.current_cost)
        span.set_attribute(ATTR_FEASIBLE, not math.isinf(board.current_cost))
        logger.info(
            "blackboard finished: cost %s after %d cycles", board.current_cost, orchestrator.cycles
        )
        return Solution(
            protocol="blackboard",
            selected_indices=indices,
            selected_resources=selected,
            cost=board.current_cost,
            rounds=orchestrator.cycles,
        )
