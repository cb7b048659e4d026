"""Shared error types for the problem model and topology layer."""

from __future__ import annotations


class SROError(Exception):
    """Base error for all dsro failures."""


class ConfigurationError(SROError):
    """A solver was configured inconsistently; raised before any agent starts."""


class DimensionMismatchError(ConfigurationError):
    """Topology size and resource count (or matrix dimensions) disagree."""

    def __init__(self, expected: int, actual: int, detail: str = "") -> None:
        self.expected = expected
        self.actual = actual
        self.detail = detail
        msg = f"Dimension mismatch: expected {expected}, got {actual}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class DegreeError(ConfigurationError):
    """Small-world neighborhood degree is odd or too small."""

    def __init__(self, k: int) -> None:
        self.k = k
        super().__init__(f"Neighborhood degree must be even and >= 2, got {k}")


class ClusterSizeError(ConfigurationError):
    """Blackboard cluster size is outside the enumerable range."""

    def __init__(self, size: int, maximum: int) -> None:
        self.size = size
        self.maximum = maximum
        super().__init__(f"Cluster size must be between 1 and {maximum}, got {size}")
