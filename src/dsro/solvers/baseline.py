"""Centralised reference solvers used to check the distributed protocols."""

from __future__ import annotations

from itertools import accumulate, combinations

from dsro.core.model.problem import INFEASIBLE, DiscreteProblem
from dsro.solvers.models import Solution


def _min_subset_size(problem: DiscreteProblem) -> int:
    """Smallest subset size whose largest values can still reach ``v_target``."""
    max_values = sorted((r.max_value for r in problem.resources), reverse=True)
    size = 1
    for size, reachable in enumerate(accumulate(max_values), start=1):
        if reachable >= problem.v_target:
            break
    return size


def discrete_optimum(problem: DiscreteProblem) -> Solution:
    """Exhaustive search over every subset that can reach the value target."""
    n = len(problem.resources)
    best_indices: tuple[int, ...] = ()
    best_cost = INFEASIBLE

    for size in range(_min_subset_size(problem), n + 1):
        for subset in combinations(range(n), size):
            cost = problem.evaluate(subset)
            if cost < best_cost:
                best_indices, best_cost = subset, cost

    return Solution(
        protocol="optimal",
        selected_indices=list(best_indices),
        selected_resources=[problem.resources[i] for i in best_indices],
        cost=best_cost,
    )


def take_all(problem: DiscreteProblem) -> Solution:
    """Select every resource."""
    indices = list(range(len(problem.resources)))
    cost = problem.evaluate(indices)
    if cost == INFEASIBLE:
        return Solution(protocol="take_all")
    return Solution(
        protocol="take_all",
        selected_indices=indices,
        selected_resources=list(problem.resources),
        cost=cost,
    )
