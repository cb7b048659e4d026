"""Solvers — the distributed protocols plus centralised reference baselines."""

from dsro.solvers.baseline import discrete_optimum, take_all
from dsro.solvers.distributed import GossipSolver, solve_blackboard, solve_gossip
from dsro.solvers.models import Solution

__all__ = [
    "GossipSolver",
    "Solution",
    "discrete_optimum",
    "solve_blackboard",
    "solve_gossip",
    "take_all",
]
