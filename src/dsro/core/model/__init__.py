"""Discrete independent resource model and the SRO oracle."""

from dsro.core.model.problem import (
    INFEASIBLE,
    DiscreteProblem,
    evaluate,
    sro_target_function,
)
from dsro.core.model.resource import (
    ZERO_RESOURCE,
    DiscreteResource,
    add,
    combine,
    expected_cost,
)

__all__ = [
    "INFEASIBLE",
    "ZERO_RESOURCE",
    "DiscreteProblem",
    "DiscreteResource",
    "add",
    "combine",
    "evaluate",
    "expected_cost",
    "sro_target_function",
]
