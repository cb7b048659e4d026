"""dsro — decentralized stochastic resource optimization over message-passing agents."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from dsro.sdk.runspec import RunSpecLoader as RunSpecLoader
    from dsro.sdk.runspec import RunSpecRunner as RunSpecRunner
    from dsro.solvers.distributed import solve_blackboard as solve_blackboard
    from dsro.solvers.distributed import solve_gossip as solve_gossip

_LAZY_EXPORTS = {
    "RunSpecRunner": "dsro.sdk.runspec",
    "RunSpecLoader": "dsro.sdk.runspec",
    "solve_gossip": "dsro.solvers.distributed",
    "solve_blackboard": "dsro.solvers.distributed",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'dsro' has no attribute {name!r}")
