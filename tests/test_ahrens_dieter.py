"""Tests for gamma_samplers.samplers.ahrens_dieter module."""

from __future__ import annotations

import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from gamma_samplers.errors import RejectionLimitExceeded
from gamma_samplers.random import CountingSource, ReplaySource
from gamma_samplers.samplers.ahrens_dieter import (
    GD_MIN_T,
    Q0_COEFFICIENTS,
    GammaGDSampler,
    gd_sampler,
    gs_sampler,
    horner,
)


class TestHorner:
    """Tests for horner."""

    def test_basic(self):
        assert horner(2.0, (1.0, 0.0, 3.0)) == 13.0

    def test_constant(self):
        assert horner(123.0, (4.5,)) == 4.5

    def test_empty(self):
        assert horner(1.0, ()) == 0.0

    @given(
        st.floats(min_value=-2.0, max_value=2.0),
        st.lists(st.floats(min_value=-10.0, max_value=10.0), min_size=1, max_size=9),
    )
    @settings(max_examples=50)
    def test_matches_power_sum(self, x, coefficients):
        """Property: horner agrees with the naive power sum."""
        naive = sum(c * x**i for i, c in enumerate(coefficients))
        assert horner(x, coefficients) == pytest.approx(naive, rel=1e-9, abs=1e-9)


class TestGdConstruction:
    """Tests for gd_sampler constants."""

    def test_step1_constants(self):
        sampler = gd_sampler(1.5, 2.0)
        assert sampler.s2 == 1.0
        assert sampler.s == 1.0
        assert sampler.i2s == 0.5
        assert sampler.d == pytest.approx(4.0 * math.sqrt(2.0) - 12.0)
        assert sampler.scale == 2.0

    def test_q0_at_unit_shape(self):
        assert gd_sampler(1.0).q0 == pytest.approx(sum(Q0_COEFFICIENTS))

    def test_q0_large_shape_limit(self):
        # q0 ~ 1/(24a) as a grows
        a = 1e4
        assert gd_sampler(a).q0 == pytest.approx(1.0 / (24.0 * a), rel=1e-3)

    def test_first_regime(self):
        sampler = gd_sampler(3.686)
        s, s2 = sampler.s, sampler.s2
        assert sampler.b == pytest.approx(0.463 + s + 0.178 * s2)
        assert sampler.sigma == 1.235
        assert sampler.c == pytest.approx(0.195 / s - 0.079 + 0.16 * s)

    def test_second_regime(self):
        for a in (3.687, 13.022):
            sampler = gd_sampler(a)
            s, s2 = sampler.s, sampler.s2
            assert sampler.b == pytest.approx(1.654 + 0.0076 * s2)
            assert sampler.sigma == pytest.approx(1.68 / s + 0.275)
            assert sampler.c == pytest.approx(0.062 / s + 0.024)

    def test_third_regime(self):
        sampler = gd_sampler(13.023)
        assert sampler.b == 1.77
        assert sampler.sigma == 0.75
        assert sampler.c == pytest.approx(0.1515 / sampler.s)

    def test_immutable(self):
        sampler = gd_sampler(2.0)
        with pytest.raises(AttributeError):
            sampler.scale = 5.0


class TestCalcQ:
    """Tests for GammaGDSampler.calc_q."""

    @given(st.floats(min_value=1.0, max_value=1e4))
    @settings(max_examples=50)
    def test_continuous_at_series_boundary(self, a):
        """Property: both branches agree where |t / 2s| crosses 0.25."""
        sampler = gd_sampler(a)
        tol = 1e-9 * max(sampler.s2, 1.0)
        for boundary in (0.5 * sampler.s, -0.5 * sampler.s):
            inside = sampler.calc_q(boundary * (1.0 - 1e-12))
            outside = sampler.calc_q(boundary * (1.0 + 1e-12))
            assert abs(inside - outside) <= tol

    def test_zero(self):
        sampler = gd_sampler(4.0)
        assert sampler.calc_q(0.0) == sampler.q0

    def test_log1p_branch(self):
        sampler = gd_sampler(2.0)
        t = 3.0
        expected = (
            sampler.q0 - sampler.s * t + 0.25 * t * t + 2.0 * sampler.s2 * math.log1p(t * sampler.i2s)
        )
        assert sampler.calc_q(t) == expected


class TestGdDraw:
    """Tests for GammaGDSampler.draw against hand-traced streams."""

    def test_non_negative_normal_accepts_immediately(self):
        sampler = gd_sampler(1.5, 3.0)
        source = ReplaySource(normals=[0.5])
        assert sampler.draw(source) == pytest.approx(1.25**2 * 3.0)
        assert source.remaining() == {"uniform": 0, "normal": 0, "exponential": 0}

    def test_squeeze_accepts(self):
        sampler = gd_sampler(1.0)
        source = ReplaySource(normals=[-0.1], uniforms=[0.5])
        assert sampler.draw(source) == pytest.approx((sampler.s - 0.05) ** 2)

    def test_quotient_accepts(self):
        sampler = gd_sampler(1.0)
        # d*u = -0.028 > t**3 = -0.125, so the squeeze fails; q(-0.5) > log1p(-0.01)
        source = ReplaySource(normals=[-0.5], uniforms=[0.01])
        assert sampler.draw(source) == pytest.approx((sampler.s - 0.25) ** 2)
        assert source.remaining()["exponential"] == 0

    def _retry_result(self, sampler: GammaGDSampler) -> float:
        t = sampler.b + 0.5 * sampler.sigma
        return (sampler.s + 0.5 * t) ** 2 * sampler.scale

    def test_retry_loop(self):
        sampler = gd_sampler(1.0, 2.0)
        source = ReplaySource(
            normals=[-1.0],
            # quotient test fails at u=0.1; retry draws u' = 0.25, 0.25, 0.75
            uniforms=[0.1, 0.25, 0.25, 0.75],
            # e=2.0 with u<0 gives t < GD_MIN_T; e=0.5 with u<0 fails step 11
            exponentials=[2.0, 0.5, 0.5],
        )
        assert sampler.b - 2.0 * sampler.sigma < GD_MIN_T
        assert sampler.draw(source) == pytest.approx(self._retry_result(sampler))
        assert source.remaining() == {"uniform": 0, "normal": 0, "exponential": 0}

    def test_negative_x_goes_straight_to_retry(self):
        sampler = gd_sampler(1.0)
        source = ReplaySource(normals=[-2.0], uniforms=[0.5, 0.75], exponentials=[0.5])
        counter = CountingSource(source)
        assert sampler.draw(counter) == pytest.approx(self._retry_result(sampler))
        assert (counter.normals, counter.uniforms, counter.exponentials) == (1, 2, 1)

    def test_counting_guard_trips(self):
        sampler = gd_sampler(1.0)
        source = ReplaySource(
            normals=[-1.0],
            uniforms=[0.1, 0.25, 0.25, 0.75],
            exponentials=[2.0, 0.5, 0.5],
        )
        with pytest.raises(RejectionLimitExceeded):
            sampler.draw(CountingSource(source, limit=5))

    def test_scale_is_linear(self):
        s1 = gd_sampler(6.0, 1.0).draw(ReplaySource(normals=[0.7]))
        s7 = gd_sampler(6.0, 7.0).draw(ReplaySource(normals=[0.7]))
        assert s7 == pytest.approx(7.0 * s1)


class TestGsSampler:
    """Tests for gs_sampler and GammaGSSampler.draw."""

    def test_constants(self):
        sampler = gs_sampler(0.5, 4.0)
        assert sampler.ia == 2.0
        assert sampler.b == pytest.approx(1.0 + math.exp(-1.0) * 0.5)
        assert sampler.b > 1.0

    def test_accepts_unit_shape(self):
        assert gs_sampler(1.0).a == 1.0

    def test_first_branch(self):
        sampler = gs_sampler(0.5, 4.0)
        source = ReplaySource(uniforms=[0.5], exponentials=[1.0])
        assert sampler.draw(source) == pytest.approx(4.0 * (sampler.b * 0.5) ** 2)

    def test_second_branch_after_rejections(self):
        sampler = gs_sampler(0.5, 4.0)
        source = ReplaySource(
            # p = 0.59 rejects with e = 0.1; p = 1.12 rejects with e = 0.2
            uniforms=[0.5, 0.95, 0.95],
            exponentials=[0.1, 0.2, 1.0],
        )
        p = sampler.b * 0.95
        expected = 4.0 * -math.log(sampler.ia * (sampler.b - p))
        assert sampler.draw(source) == pytest.approx(expected)
        assert source.remaining()["uniform"] == 0

    def test_zero_uniform_returns_zero(self):
        sampler = gs_sampler(0.3, 2.0)
        assert sampler.draw(ReplaySource(uniforms=[0.0], exponentials=[0.0])) == 0.0
