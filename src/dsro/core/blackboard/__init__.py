"""Blackboard protocol — clustered agents refining a shared best solution."""

from dsro.core.blackboard.agent import MAX_CLUSTER_SIZE, BlackboardAgent, Candidate
from dsro.core.blackboard.blackboard import Blackboard
from dsro.core.blackboard.models import StateDelta, TraceEntry
from dsro.core.blackboard.orchestrator import BlackboardOrchestrator, partition

__all__ = [
    "MAX_CLUSTER_SIZE",
    "Blackboard",
    "BlackboardAgent",
    "BlackboardOrchestrator",
    "Candidate",
    "StateDelta",
    "TraceEntry",
    "partition",
]
