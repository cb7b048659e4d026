"""Shared fixtures: the three-resource instance used across the suite.

Two identical resources deliver 0, 1 or 2 units (costs equal to the value)
and a third delivers 0 or 1 unit at cost 5.  With ``p_target = 0.1``:

* ``v_target = 4``: only pairs containing both small resources reach 4;
  the optimum is ``{0, 1}`` at cost 4.0.
* ``v_target = 5``: only the full set reaches 5, at cost 9.0.
* ``v_target = 6``: beyond the combined support, infeasible.
"""

from __future__ import annotations

import random
from collections.abc import Callable

import pytest

from dsro.core.model.resource import DiscreteResource


def make_resource(p: list[float], c: list[float]) -> DiscreteResource:
    return DiscreteResource(p=tuple(p), c=tuple(c))


def random_resources(n: int, seed: int, max_value: int = 3) -> list[DiscreteResource]:
    """Random resources whose costs grow with the delivered value."""
    rng = random.Random(seed)
    out: list[DiscreteResource] = []
    for _ in range(n):
        size = rng.randint(2, max_value + 1)
        weights = [rng.uniform(0.1, 1.0) for _ in range(size)]
        total = sum(weights)
        costs = [0.0]
        for _ in range(size - 1):
            costs.append(costs[-1] + rng.uniform(0.5, 3.0))
        out.append(make_resource([w / total for w in weights], costs))
    return out


@pytest.fixture
def small() -> DiscreteResource:
    return make_resource([0.1, 0.4, 0.5], [0.0, 1.0, 2.0])


@pytest.fixture
def expensive() -> DiscreteResource:
    return make_resource([0.5, 0.5], [0.0, 5.0])


@pytest.fixture
def scenario(small: DiscreteResource, expensive: DiscreteResource) -> list[DiscreteResource]:
    return [small, small, expensive]


@pytest.fixture
def random_instance() -> Callable[[int, int], list[DiscreteResource]]:
    return random_resources
