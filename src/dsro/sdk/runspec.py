"""Run specification loading and execution for the dsro SDK."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import ValidationError

from dsro.runtime.transport import ChaosTransport, InMemoryTransport, Transport
from dsro.sdk.errors import RunSpecValidationError
from dsro.sdk.models import RunSpec
from dsro.solvers.baseline import discrete_optimum
from dsro.solvers.distributed import solve_blackboard, solve_gossip
from dsro.solvers.models import Solution  # noqa: TC001
from dsro.utils.telemetry import configure_telemetry

logger = logging.getLogger(__name__)


class RunSpecLoader:
    """Load and validate a run specification YAML file into a :class:`RunSpec`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> RunSpec:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.

        Raises:
            RunSpecValidationError: On YAML parse errors or schema validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise RunSpecValidationError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise RunSpecValidationError(f"YAML parse error: {exc}") from exc

        if not isinstance(data, dict):
            raise RunSpecValidationError("Run specification YAML must be a mapping")

        try:
            return RunSpec.model_validate(data)
        except ValidationError as exc:
            raise RunSpecValidationError(str(exc)) from exc


class RunSpecRunner:
    """Execute a validated :class:`RunSpec` with the chosen protocol."""

    def __init__(self, spec: RunSpec) -> None:
        self.spec = spec

    @classmethod
    def from_yaml(cls, path: str | Path) -> RunSpecRunner:
        """Load a run specification YAML and return a ready-to-run runner."""
        return cls(RunSpecLoader(Path(path)).load())

    def _transport(self) -> Transport:
        settings = self.spec.gossip
        if settings.chaos is not None:
            return ChaosTransport(
                duplicate_probability=settings.chaos.duplicate_probability,
                max_delay=settings.chaos.max_delay,
                seed=settings.chaos.seed,
                serialize=settings.serialize,
            )
        return InMemoryTransport(serialize=settings.serialize)

    def run(self, protocol: Literal["gossip", "blackboard"] | None = None) -> Solution:
        """Solve the problem; *protocol* overrides the one in the spec.

        Raises:
            ConfigurationError: When the spec's parameters are inconsistent.
            ConvergenceTimeoutError: When the gossip watchdog expires.
        """
        if self.spec.telemetry and self.spec.telemetry.enabled:
            configure_telemetry(
                run_name=self.spec.name, otlp_endpoint=self.spec.telemetry.otlp_endpoint
            )

        problem = self.spec.problem
        resources = problem.build_resources()
        chosen = protocol or self.spec.protocol
        logger.info("Solving %r with %s over %d resources", self.spec.name, chosen, len(resources))

        if chosen == "blackboard":
            settings = self.spec.blackboard
            return solve_blackboard(
                resources,
                problem.p_target,
                problem.v_target,
                settings.cluster_size,
                settings.max_cycles,
            )

        gossip = self.spec.gossip
        return solve_gossip(
            resources,
            problem.p_target,
            problem.v_target,
            gossip.topology.build(len(resources)),
            transport=self._transport(),
            containers=gossip.containers,
            timeout=gossip.timeout,
        )

    def optimum(self) -> Solution:
        """Brute-force reference solution for the same problem."""
        return discrete_optimum(self.spec.problem.build())
