"""SDK error types."""

from __future__ import annotations

from dsro.core.errors import SROError


class RunSpecValidationError(SROError):
    """Raised when a run specification YAML fails parsing or validation."""
