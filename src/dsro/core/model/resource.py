"""Discrete independent resource model.

A :class:`DiscreteResource` describes the value a resource delivers as a
probability distribution over the integers ``0..max_value`` together with
the cost incurred for each value.  Resources combine by convolution: the
combined value distribution is the convolution of the inputs, and the
combined cost at value *k* is the probability-weighted cost of every way
the inputs can add up to *k*.
"""

from __future__ import annotations

import math
from functools import reduce
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, model_validator

if TYPE_CHECKING:
    from collections.abc import Iterable

_PROBABILITY_TOLERANCE = 1e-6


class DiscreteResource(BaseModel):
    """Immutable value distribution ``p`` with per-value costs ``c``.

    ``p[k]`` is the probability of delivering value ``k`` and ``c[k]`` the
    cost when that happens.  Both vectors must have the same length and
    ``p`` must sum to one.
    """

    model_config = ConfigDict(frozen=True)

    p: tuple[float, ...] = Field(min_length=1)
    c: tuple[float, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def _validate_vectors(self) -> DiscreteResource:
        if len(self.p) != len(self.c):
            msg = (
                f"probability and cost vectors must have equal length "
                f"({len(self.p)} != {len(self.c)})"
            )
            raise ValueError(msg)
        if any(x < 0 for x in self.p):
            msg = "probabilities must be non-negative"
            raise ValueError(msg)
        if not math.isclose(math.fsum(self.p), 1.0, rel_tol=_PROBABILITY_TOLERANCE):
            msg = f"probabilities must add up to 1, got {math.fsum(self.p)}"
            raise ValueError(msg)
        return self

    def __len__(self) -> int:
        return len(self.p)

    @property
    def max_value(self) -> int:
        return len(self.p) - 1

    def cdf(self) -> list[float]:
        """Cumulative probabilities ``P(V <= k)`` for every value ``k``."""
        out: list[float] = []
        total = 0.0
        for prob in self.p:
            total += prob
            out.append(total)
        return out

    def ccdf(self) -> list[float]:
        """Complementary cumulative probabilities ``P(V > k)``."""
        return [1.0 - x for x in self.cdf()]

    def probability_at_least(self, value: int) -> float:
        """Return ``P(V >= value)``."""
        if value <= 0:
            return 1.0
        if value > self.max_value:
            return 0.0
        return self.ccdf()[value - 1]


ZERO_RESOURCE = DiscreteResource(p=(1.0,), c=(0.0,))
"""Neutral element of :func:`add`: always delivers zero at zero cost."""


def add(a: DiscreteResource, b: DiscreteResource) -> DiscreteResource:
    """Combine two independent resources into one.

    Values with zero probability mass get a cost of ``0.0``.
    """
    size = len(a) + len(b) - 1
    probs = [0.0] * size
    weighted = [0.0] * size

    for i, (pa, ca) in enumerate(zip(a.p, a.c, strict=True)):
        if pa == 0.0:
            continue
        for j, (pb, cb) in enumerate(zip(b.p, b.c, strict=True)):
            mass = pa * pb
            probs[i + j] += mass
            weighted[i + j] += mass * (ca + cb)

    costs = [w / m if m > 0.0 else 0.0 for w, m in zip(weighted, probs, strict=True)]
    return DiscreteResource(p=tuple(probs), c=tuple(costs))


def combine(resources: Iterable[DiscreteResource]) -> DiscreteResource:
    """Fold any number of resources with :func:`add`.

    An empty input yields :data:`ZERO_RESOURCE`.
    """
    items = list(resources)
    if not items:
        return ZERO_RESOURCE
    return reduce(add, items)


def expected_cost(resource: DiscreteResource) -> float:
    """Probability-weighted cost ``sum(p * c)`` of a single resource."""
    return math.fsum(p * c for p, c in zip(resource.p, resource.c, strict=True))
