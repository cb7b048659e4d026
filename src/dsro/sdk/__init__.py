"""dsro SDK — programmatic interface for loading and running run specifications."""

from dsro.sdk.errors import RunSpecValidationError
from dsro.sdk.models import (
    BlackboardSettings,
    ChaosSettings,
    GossipSettings,
    ProblemSpec,
    ResourceSpec,
    RunSpec,
    TelemetrySettings,
    TopologySpec,
)
from dsro.sdk.runspec import RunSpecLoader, RunSpecRunner

__all__ = [
    "BlackboardSettings",
    "ChaosSettings",
    "GossipSettings",
    "ProblemSpec",
    "ResourceSpec",
    "RunSpec",
    "RunSpecLoader",
    "RunSpecRunner",
    "RunSpecValidationError",
    "TelemetrySettings",
    "TopologySpec",
]
