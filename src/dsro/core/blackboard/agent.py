"""Blackboard agent — local subset search over a cluster of resources.

At construction the agent enumerates every non-empty subset of its
cluster (bitmask iteration) and keeps, for each subset size, the subset
with the lowest sum of expected costs.  Each :meth:`BlackboardAgent.try_improve`
call then tests those candidates against the other agents' contributions
with the full feasibility oracle.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence  # noqa: TC003
from dataclasses import dataclass

from dsro.core.blackboard.blackboard import Blackboard  # noqa: TC001
from dsro.core.blackboard.models import StateDelta, TraceEntry
from dsro.core.errors import ClusterSizeError
from dsro.core.model.problem import INFEASIBLE, sro_target_function
from dsro.core.model.resource import DiscreteResource, add, combine, expected_cost

logger = logging.getLogger(__name__)

MAX_CLUSTER_SIZE = 12


@dataclass(frozen=True)
class Candidate:
    """Cheapest subset of a given size within one cluster."""

    indices: tuple[int, ...]
    resource: DiscreteResource
    score: float

    @property
    def size(self) -> int:
        return len(self.indices)


class BlackboardAgent:
    """Owns a contiguous slice of the resources, starting at ``offset``."""

    def __init__(
        self,
        agent_id: str,
        resources: Sequence[DiscreteResource],
        p_target: float,
        v_target: int,
        *,
        offset: int = 0,
    ) -> None:
        if not 1 <= len(resources) <= MAX_CLUSTER_SIZE:
            raise ClusterSizeError(len(resources), MAX_CLUSTER_SIZE)
        self.agent_id = agent_id
        self.resources = tuple(resources)
        self.p_target = p_target
        self.v_target = v_target
        self.offset = offset
        self.best_combination_per_size = self._precompute()
        self.contributed_indices: tuple[int, ...] = ()

    def _precompute(self) -> tuple[Candidate, ...]:
        k = len(self.resources)
        scores = [expected_cost(r) for r in self.resources]
        best: list[tuple[float, int] | None] = [None] * k

        for mask in range(1, 1 << k):
            score = math.fsum(scores[i] for i in range(k) if mask >> i & 1)
            slot = mask.bit_count() - 1
            current = best[slot]
            if current is None or score < current[0]:
                best[slot] = (score, mask)

        candidates: list[Candidate] = []
        for entry in best:
            assert entry is not None
            score, mask = entry
            indices = tuple(i for i in range(k) if mask >> i & 1)
            resource = combine(self.resources[i] for i in indices)
            candidates.append(Candidate(indices=indices, resource=resource, score=score))
        return tuple(candidates)

    @property
    def global_indices(self) -> list[int]:
        """Contributed indices translated to positions in the full resource list."""
        return [self.offset + i for i in self.contributed_indices]

    def try_improve(self, blackboard: Blackboard) -> bool:
        """Run one improvement step against *blackboard*.

        Returns ``True`` when this agent's contribution changed.
        """
        others_combined = combine(blackboard.others(self.agent_id))

        best: Candidate | None = None
        best_total: DiscreteResource | None = None
        best_cost = INFEASIBLE
        for candidate in self.best_combination_per_size:
            total = add(candidate.resource, others_combined)
            cost = sro_target_function([total], self.p_target, self.v_target)
            if cost < best_cost:
                best, best_total, best_cost = candidate, total, cost

        previous = self.contributed_indices
        if best is not None and best_total is not None and best_cost < blackboard.current_cost:
            self._contribute(blackboard, best, best_total, best_cost, "improve")
        elif best is None and math.isinf(blackboard.current_cost):
            # nothing feasible yet: fall back to the whole cluster
            fallback = self.best_combination_per_size[-1]
            total = add(fallback.resource, others_combined)
            self._contribute(blackboard, fallback, total, INFEASIBLE, "fallback")

        return self.contributed_indices != previous

    def _contribute(
        self,
        blackboard: Blackboard,
        candidate: Candidate,
        total: DiscreteResource,
        cost: float,
        action: str,
    ) -> None:
        blackboard.apply(
            StateDelta(
                contributions={self.agent_id: candidate.resource},
                current_solution=total,
                current_cost=cost,
                trace_entries=[
                    TraceEntry(
                        agent_id=self.agent_id,
                        action=action,
                        data={"indices": list(candidate.indices), "cost": cost},
                    )
                ],
            )
        )
        if candidate.indices != self.contributed_indices:
            logger.debug("%s now contributes %s (%s, cost %s)", self.agent_id, candidate.indices, action, cost)
        self.contributed_indices = candidate.indices
