"""Smoke test to verify the project scaffolding works."""

from __future__ import annotations


def test_import() -> None:
    import dsro

    assert dsro.__version__ == "0.1.0"


def test_cli_entrypoint() -> None:
    from dsro.cli import main

    assert callable(main)


def test_sdk_imports() -> None:
    from dsro.sdk import (
        BlackboardSettings,
        GossipSettings,
        RunSpec,
        RunSpecLoader,
        RunSpecRunner,
        RunSpecValidationError,
        TelemetrySettings,
        TopologySpec,
    )

    assert RunSpecRunner is not None
    assert RunSpecLoader is not None
    assert RunSpec is not None
    assert TopologySpec is not None
    assert GossipSettings is not None
    assert BlackboardSettings is not None
    assert TelemetrySettings is not None
    assert RunSpecValidationError is not None


def test_package_exports() -> None:
    from dsro.core.blackboard import BlackboardOrchestrator
    from dsro.core.gossip import GossipAgent
    from dsro.core.model import evaluate
    from dsro.runtime import Container, InMemoryTransport
    from dsro.solvers import solve_blackboard, solve_gossip

    assert all(
        obj is not None
        for obj in (BlackboardOrchestrator, GossipAgent, evaluate, Container, InMemoryTransport)
    )
    assert callable(solve_gossip)
    assert callable(solve_blackboard)


def test_lazy_import_from_dsro() -> None:
    import dsro

    assert dsro.RunSpecRunner is not None
    assert callable(dsro.solve_gossip)
