"""Tests for the discrete resource model."""

import pytest
from pydantic import ValidationError

from dsro.core.model.resource import (
    ZERO_RESOURCE,
    DiscreteResource,
    add,
    combine,
    expected_cost,
)


class TestValidation:
    def test_valid(self) -> None:
        r = DiscreteResource(p=(0.25, 0.75), c=(0.0, 3.0))
        assert len(r) == 2
        assert r.max_value == 1

    def test_length_mismatch(self) -> None:
        with pytest.raises(ValidationError, match="equal length"):
            DiscreteResource(p=(0.5, 0.5), c=(1.0,))

    def test_negative_probability(self) -> None:
        with pytest.raises(ValidationError, match="non-negative"):
            DiscreteResource(p=(1.5, -0.5), c=(0.0, 1.0))

    def test_probabilities_must_sum_to_one(self) -> None:
        with pytest.raises(ValidationError, match="add up to 1"):
            DiscreteResource(p=(0.5, 0.4), c=(0.0, 1.0))

    def test_empty_vectors_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DiscreteResource(p=(), c=())

    def test_frozen(self) -> None:
        r = DiscreteResource(p=(1.0,), c=(0.0,))
        with pytest.raises(ValidationError):
            r.p = (0.5, 0.5)  # type: ignore[misc]


class TestDistribution:
    def test_cdf_and_ccdf(self, small: DiscreteResource) -> None:
        assert small.cdf() == pytest.approx([0.1, 0.5, 1.0])
        assert small.ccdf() == pytest.approx([0.9, 0.5, 0.0])

    def test_probability_at_least(self, small: DiscreteResource) -> None:
        assert small.probability_at_least(0) == 1.0
        assert small.probability_at_least(1) == pytest.approx(0.9)
        assert small.probability_at_least(2) == pytest.approx(0.5)
        assert small.probability_at_least(3) == 0.0

    def test_expected_cost(self, small: DiscreteResource, expensive: DiscreteResource) -> None:
        assert expected_cost(small) == pytest.approx(1.4)
        assert expected_cost(expensive) == pytest.approx(2.5)


class TestAdd:
    def test_convolution(self, small: DiscreteResource) -> None:
        total = add(small, small)
        assert total.max_value == 4
        assert total.p == pytest.approx((0.01, 0.08, 0.26, 0.4, 0.25))
        # costs equal the value, so every way of reaching k costs k
        assert total.c == pytest.approx((0.0, 1.0, 2.0, 3.0, 4.0))

    def test_weighted_cost(self, small: DiscreteResource, expensive: DiscreteResource) -> None:
        total = add(add(small, small), expensive)
        # value 4: (2, 2, 0) at cost 4 with mass .125, (1, 2, 1)/(2, 1, 1) at cost 8 with mass .2
        assert total.c[4] == pytest.approx(2.1 / 0.325)
        assert total.c[5] == pytest.approx(9.0)

    def test_commutative(self, small: DiscreteResource, expensive: DiscreteResource) -> None:
        left = add(small, expensive)
        right = add(expensive, small)
        assert left.p == pytest.approx(right.p)
        assert left.c == pytest.approx(right.c)

    def test_zero_mass_cost_is_zero(self) -> None:
        gappy = DiscreteResource(p=(0.5, 0.0, 0.5), c=(1.0, 7.0, 1.0))
        total = add(gappy, ZERO_RESOURCE)
        assert total.p == pytest.approx((0.5, 0.0, 0.5))
        assert total.c == (1.0, 0.0, 1.0)


class TestCombine:
    def test_empty_is_zero_resource(self) -> None:
        assert combine([]) is ZERO_RESOURCE

    def test_single_is_unchanged(self, small: DiscreteResource) -> None:
        assert combine([small]) is small

    def test_matches_pairwise_add(self, small: DiscreteResource, expensive: DiscreteResource) -> None:
        assert combine([small, expensive]) == add(small, expensive)

    def test_accepts_generators(self, small: DiscreteResource) -> None:
        assert combine(r for r in [small, small]).max_value == 4
