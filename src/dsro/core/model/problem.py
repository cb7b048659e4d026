"""SRO problem definition and the feasibility/cost oracle."""

from __future__ import annotations

import math
from collections.abc import Sequence  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field

from dsro.core.model.resource import DiscreteResource, combine

INFEASIBLE = math.inf
"""Cost reported for a resource set that cannot meet the target."""


def sro_target_function(
    resources: Sequence[DiscreteResource],
    p_target: float,
    v_target: int,
) -> float:
    """Expected cost of *resources* at ``v_target``, or :data:`INFEASIBLE`.

    A set is feasible when its combined value reaches ``v_target`` with
    probability at least ``p_target``.  The reported cost is the combined
    cost at exactly ``v_target``.
    """
    if not resources:
        return INFEASIBLE

    total = combine(resources)
    if total.max_value < v_target:
        return INFEASIBLE
    if total.probability_at_least(v_target) < p_target:
        return INFEASIBLE
    return total.c[max(v_target, 0)]


evaluate = sro_target_function


class DiscreteProblem(BaseModel):
    """A set of independent resources with a probability and value target."""

    model_config = ConfigDict(frozen=True)

    resources: tuple[DiscreteResource, ...]
    p_target: float = Field(ge=0.0, le=1.0)
    v_target: int = Field(ge=0)

    def evaluate(self, indices: Sequence[int]) -> float:
        """Evaluate the subset of resources at *indices*."""
        return sro_target_function(
            [self.resources[i] for i in indices], self.p_target, self.v_target
        )

