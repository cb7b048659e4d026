"""Core Blackboard — shared best-solution record for clustered agents.

The Blackboard holds every agent's current contribution, the combined
resource of the best solution found so far and its cost, plus an
execution trace.  Agents never write fields directly; they hand a
:class:`StateDelta` to :meth:`Blackboard.apply`.
"""

from pydantic import BaseModel, ConfigDict

from dsro.core.blackboard.models import StateDelta, TraceEntry
from dsro.core.model.problem import INFEASIBLE
from dsro.core.model.resource import DiscreteResource


class Blackboard(BaseModel):
    """Shared state for a single blackboard run."""

    model_config = ConfigDict(ser_json_inf_nan="constants")

    contributions: dict[str, DiscreteResource] = {}
    current_solution: DiscreteResource | None = None
    current_cost: float = INFEASIBLE
    execution_trace: list[TraceEntry] = []

    # ------------------------------------------------------------------
    # Core mutation
    # ------------------------------------------------------------------

    def apply(self, delta: StateDelta) -> "Blackboard":
        """Apply a :class:`StateDelta` and return *self* for chaining.

        * ``contributions`` — overwritten per agent id.
        * ``current_solution`` / ``current_cost`` — overwritten when set;
          a cost above the current one is rejected with :class:`ValueError`.
        * ``execution_trace`` — ``delta.trace_entries`` are appended.
        """
        if delta.current_cost is not None and delta.current_cost > self.current_cost:
            msg = f"blackboard cost cannot increase ({self.current_cost} -> {delta.current_cost})"
            raise ValueError(msg)

        self.contributions.update(delta.contributions)

        if delta.current_solution is not None:
            self.current_solution = delta.current_solution
        if delta.current_cost is not None:
            self.current_cost = delta.current_cost

        self.execution_trace.extend(delta.trace_entries)
        return self

    def others(self, agent_id: str) -> list[DiscreteResource]:
        """Contributions of every agent except *agent_id*, in insertion order."""
        return [res for owner, res in self.contributions.items() if owner != agent_id]

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def snapshot(self) -> bytes:
        """Serialise the entire board to JSON bytes."""
        return self.model_dump_json().encode()

    @classmethod
    def restore(cls, data: bytes) -> "Blackboard":
        """Deserialise a board from JSON bytes produced by :meth:`snapshot`."""
        return cls.model_validate_json(data)
