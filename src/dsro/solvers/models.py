"""Solver result model."""

from __future__ import annotations

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict

from dsro.core.model.problem import INFEASIBLE
from dsro.core.model.resource import DiscreteResource


class Solution(BaseModel):
    """The subset a solver selected, as indices into the input resources.

    An infeasible result has ``cost == inf`` and an empty selection.
    ``rounds`` counts blackboard cycles; ``messages`` counts gossip
    deliveries.
    """

    model_config = ConfigDict(ser_json_inf_nan="constants")

    protocol: Literal["gossip", "blackboard", "optimal", "take_all"]
    selected_indices: list[int] = []
    selected_resources: list[DiscreteResource] = []
    cost: float = INFEASIBLE
    rounds: int = 0
    messages: int = 0

    @property
    def feasible(self) -> bool:
        return not math.isinf(self.cost)
