"""Pydantic models for the run specification YAML consumed by ``dsro solve``."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from dsro.core.blackboard.agent import MAX_CLUSTER_SIZE
from dsro.core.model.problem import DiscreteProblem
from dsro.core.model.resource import DiscreteResource
from dsro.core.topology import Topology, from_adjacency, fully_connected, ring, small_world


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class ResourceSpec(BaseModel):
    """One resource: value probabilities ``p`` and per-value costs ``c``."""

    p: list[float]
    c: list[float]
    copies: int = Field(default=1, ge=1)

    def build(self) -> list[DiscreteResource]:
        resource = DiscreteResource(p=tuple(self.p), c=tuple(self.c))
        return [resource] * self.copies


class ProblemSpec(BaseModel):
    """Targets plus the resources, one participant per resource copy."""

    p_target: float = Field(ge=0.0, le=1.0)
    v_target: int = Field(ge=0)
    resources: list[ResourceSpec] = Field(min_length=1)

    def build_resources(self) -> list[DiscreteResource]:
        return [r for spec in self.resources for r in spec.build()]

    def build(self) -> DiscreteProblem:
        return DiscreteProblem(
            resources=tuple(self.build_resources()),
            p_target=self.p_target,
            v_target=self.v_target,
        )

    @property
    def size(self) -> int:
        return sum(spec.copies for spec in self.resources)


class TopologySpec(BaseModel):
    """Topology type and type-specific parameters."""

    type: Literal["fully_connected", "ring", "small_world", "adjacency"] = "fully_connected"
    k: int | None = None
    p: float | None = Field(default=None, ge=0.0, le=1.0)
    seed: int | None = None
    matrix: list[list[int]] | None = None

    @model_validator(mode="after")
    def _validate_parameters(self) -> TopologySpec:
        if self.type == "small_world":
            if self.k is None or self.p is None:
                msg = "small_world topology requires 'k' and 'p'"
                raise ValueError(msg)
            if self.k < 2 or self.k % 2 != 0:
                msg = f"small_world degree 'k' must be even and >= 2, got {self.k}"
                raise ValueError(msg)
        elif self.type == "adjacency":
            if not self.matrix:
                msg = "adjacency topology requires 'matrix'"
                raise ValueError(msg)
        return self

    def build(self, n: int) -> Topology:
        """Materialize the topology for *n* participants."""
        if self.type == "ring":
            return ring(n)
        if self.type == "small_world":
            assert self.k is not None and self.p is not None
            return small_world(n, self.k, self.p, seed=self.seed)
        if self.type == "adjacency":
            assert self.matrix is not None
            return from_adjacency(self.matrix)
        return fully_connected(n)


class ChaosSettings(BaseModel):
    """Message duplication and delay injected by the chaos transport."""

    duplicate_probability: float = Field(default=0.0, ge=0.0, le=1.0)
    max_delay: float = Field(default=0.0, ge=0.0)
    seed: int | None = None


class GossipSettings(BaseModel):
    topology: TopologySpec = Field(default_factory=TopologySpec)
    containers: int = Field(default=1, ge=1)
    timeout: float | None = Field(default=None, gt=0.0)
    serialize: bool = False
    chaos: ChaosSettings | None = None


class BlackboardSettings(BaseModel):
    cluster_size: int = Field(default=4, ge=1, le=MAX_CLUSTER_SIZE)
    max_cycles: int = Field(default=20, ge=1)


class RunSpec(BaseModel):
    """Top-level run specification parsed from YAML."""

    version: str = "1"
    name: str = ""
    protocol: Literal["gossip", "blackboard"] = "gossip"
    problem: ProblemSpec
    gossip: GossipSettings = Field(default_factory=GossipSettings)
    blackboard: BlackboardSettings = Field(default_factory=BlackboardSettings)
    telemetry: TelemetrySettings | None = None

    @model_validator(mode="after")
    def _validate_sizes(self) -> RunSpec:
        matrix = self.gossip.topology.matrix
        if self.gossip.topology.type == "adjacency" and matrix is not None:
            if len(matrix) != self.problem.size:
                msg = (
                    f"adjacency matrix has {len(matrix)} rows but the problem "
                    f"has {self.problem.size} resources"
                )
                raise ValueError(msg)
        return self
