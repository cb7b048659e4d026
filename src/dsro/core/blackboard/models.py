"""Blackboard data models — trace entries and partial updates."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dsro.core.model.resource import DiscreteResource


class TraceEntry(BaseModel):
    """A single execution trace entry recording an agent action."""

    model_config = ConfigDict(ser_json_inf_nan="constants")

    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    agent_id: str
    action: str
    data: dict[str, Any] = {}


class StateDelta(BaseModel):
    """A partial update to apply to a Blackboard.

    Fields that are ``None`` or empty leave the corresponding Blackboard
    field unchanged.  Non-empty values are merged according to the rules
    documented on :pymethod:`Blackboard.apply`.
    """

    model_config = ConfigDict(ser_json_inf_nan="constants")

    contributions: dict[str, DiscreteResource] = {}
    current_solution: DiscreteResource | None = None
    current_cost: float | None = None
    trace_entries: list[TraceEntry] = []
