"""Ahrens-Dieter rejection samplers for the Gamma distribution.

Two algorithms from J.H. Ahrens and U. Dieter:

- GD (shape >= 1): a normal proposal with an immediate accept for
  ``t >= 0``, a cubic squeeze, a quotient test built on the correction
  function ``q(t)``, and a double-exponential fallback.
- GS (0 < shape <= 1): a mixture proposal split at ``p = 1``.

All shape-dependent constants are computed once by the factory functions
and stored in immutable NamedTuples. ``draw`` only reads them.

References:
    - Ahrens & Dieter, "Generating gamma variates by a modified rejection
      technique", Communications of the ACM 25(1), 1982, pp 47-54.
      doi:10.1145/358315.358390
    - Ahrens & Dieter, "Computer methods for sampling from gamma, beta,
      poisson and binomial distributions", Computing 12(3), 1974,
      pp 223-246. doi:10.1007/BF02293108

"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import NamedTuple

from gamma_samplers.errors import validate_parameters
from gamma_samplers.random import RandomSource

logger = logging.getLogger(__name__)

# Power series for q0 in 1/a (GD step 4), lowest order first.
Q0_COEFFICIENTS = (
    0.0416666664,
    0.0208333723,
    0.0079849875,
    0.0015746717,
    -0.0003349403,
    0.0003340332,
    0.0006053049,
    -0.0004701849,
    0.0001710320,
)

# Fit of (log1p(v) - v + v^2/2) / v^3 on |v| <= 0.25, lowest order first.
Q_SERIES_COEFFICIENTS = (
    0.333333333,
    -0.249999949,
    0.199999867,
    -0.1666774828,
    0.142873973,
    -0.124385581,
    0.110368310,
    -0.112750886,
    0.10408986,
)

SQRT32 = 5.656854249492381  # 4 * sqrt(2)
INV_E = 0.36787944117144233  # exp(-1)

# Smallest t for which x = s + t/2 stays in the valid domain (GD step 9).
GD_MIN_T = -0.71874483771719

# Upper shape bounds of the first two GD regimes.
GD_REGIME_BOUNDS = (3.686, 13.022)


def horner(x: float, coefficients: Sequence[float]) -> float:
    """Evaluate ``sum(c[i] * x**i)`` by Horner's method.

    Args:
        x: Evaluation point.
        coefficients: Polynomial coefficients, lowest order first.

    Returns:
        Polynomial value at x.

    Examples:
        >>> horner(2.0, (1.0, 0.0, 3.0))
        13.0
        >>> horner(5.0, ())
        0.0

    """
    result = 0.0
    for c in reversed(coefficients):
        result = result * x + c
    return result


def _sign(x: float) -> float:
    return float((x > 0.0) - (x < 0.0))


class GammaGDSampler(NamedTuple):
    """Precomputed state of the GD algorithm for one (shape, scale) pair."""

    a: float
    s2: float
    s: float
    i2s: float
    d: float
    q0: float
    b: float
    sigma: float
    c: float
    scale: float

    def calc_q(self, t: float) -> float:
        """Correction function q(t) of the GD quotient test.

        For ``|t / (2s)| <= 0.25`` a fitted series replaces the ``log1p``
        form, which loses precision to cancellation there.

        Args:
            t: Normal or double-exponential deviate.

        Returns:
            log of the ratio between the Gamma density and the proposal
            density at ``x = s + t/2``.

        """
        v = t * self.i2s
        if abs(v) > 0.25:
            return self.q0 - self.s * t + 0.25 * t * t + 2.0 * self.s2 * math.log1p(v)
        return self.q0 + 0.5 * t * t * (v * horner(v, Q_SERIES_COEFFICIENTS))

    def draw(self, source: RandomSource) -> float:
        """Draw one Gamma(a, scale) variate.

        Args:
            source: Uniform, normal and exponential streams.

        Returns:
            Gamma-distributed float.

        Examples:
            >>> from gamma_samplers.random import ReplaySource
            >>> sampler = gd_sampler(1.5, 2.0)
            >>> sampler.draw(ReplaySource(normals=[0.0]))
            2.0

        """
        s = self.s
        scale = self.scale

        # Step 2
        t = source.normal()
        x = s + 0.5 * t
        if t >= 0.0:
            return x * x * scale

        # Step 3
        u = source.uniform()
        if self.d * u <= t * t * t:
            return x * x * scale

        # Steps 5-7
        if x > 0.0:
            q = self.calc_q(t)
            if math.log1p(-u) <= q:
                return x * x * scale

        # Steps 8-11
        b = self.b
        sigma = self.sigma
        c = self.c
        while True:
            while True:
                e = source.exponential()
                u = 2.0 * source.uniform() - 1.0
                t = b + e * sigma * _sign(u)
                if t >= GD_MIN_T:
                    break

            q = self.calc_q(t)
            if q > 0.0 and c * abs(u) <= math.expm1(q) * math.exp(e - 0.5 * t * t):
                break

        # Step 12
        x = s + 0.5 * t
        return x * x * scale


def gd_sampler(shape: float, scale: float = 1.0) -> GammaGDSampler:
    """Build a GD sampler for Gamma(shape, scale), shape >= 1.

    Args:
        shape: Shape parameter, >= 1.
        scale: Scale parameter, > 0.

    Returns:
        Immutable GammaGDSampler.

    Raises:
        InvalidParameter: If shape < 1 or either parameter is not a
            positive finite number.

    Examples:
        >>> sampler = gd_sampler(2.0, 3.0)
        >>> sampler.s2, sampler.scale
        (1.5, 3.0)
        >>> sampler.sigma
        1.235

    """
    a, scale = validate_parameters("GD", shape, scale, min_shape=1.0, min_inclusive=True)

    # Step 1
    s2 = a - 0.5
    s = math.sqrt(s2)
    i2s = 0.5 / s
    d = SQRT32 - 12.0 * s

    # Step 4
    ia = 1.0 / a
    q0 = ia * horner(ia, Q0_COEFFICIENTS)

    if a <= GD_REGIME_BOUNDS[0]:
        regime = 0
        b = 0.463 + s + 0.178 * s2
        sigma = 1.235
        c = 0.195 / s - 0.079 + 0.16 * s
    elif a <= GD_REGIME_BOUNDS[1]:
        regime = 1
        b = 1.654 + 0.0076 * s2
        sigma = 1.68 / s + 0.275
        c = 0.062 / s + 0.024
    else:
        regime = 2
        b = 1.77
        sigma = 0.75
        c = 0.1515 / s

    logger.debug("GD sampler: shape=%g scale=%g regime=%d", a, scale, regime)
    return GammaGDSampler(a, s2, s, i2s, d, q0, b, sigma, c, scale)


class GammaGSSampler(NamedTuple):
    """Precomputed state of the GS algorithm for one (shape, scale) pair."""

    a: float
    ia: float
    b: float
    scale: float

    def draw(self, source: RandomSource) -> float:
        """Draw one Gamma(a, scale) variate.

        A uniform ``p = b * u`` selects the branch. For ``p <= 1`` the
        proposal is ``p**(1/a)`` and for ``p > 1`` it is
        ``-log((b - p) / a)``. Both retry the whole loop on rejection.

        ``p == 0`` yields exactly 0.0, which is always accepted. The
        uniform stream's [0, 1) range allows it with probability 2**-53
        per draw.

        Examples:
            >>> from gamma_samplers.random import ReplaySource
            >>> sampler = gs_sampler(0.5, 4.0)
            >>> source = ReplaySource(uniforms=[0.0], exponentials=[0.5])
            >>> sampler.draw(source)
            0.0

        """
        a, ia, b, scale = self
        while True:
            # Step 1
            p = b * source.uniform()
            e = source.exponential()
            if p <= 1.0:
                # Step 2, exp(log(p) / a)
                x = p**ia
                if e >= x:
                    return scale * x
            else:
                # Step 3
                x = -math.log(ia * (b - p))
                if e >= (1.0 - a) * math.log(x):
                    return scale * x


def gs_sampler(shape: float, scale: float = 1.0) -> GammaGSSampler:
    """Build a GS sampler for Gamma(shape, scale), 0 < shape <= 1.

    Raises:
        InvalidParameter: If shape is outside (0, 1] or scale <= 0.

    Examples:
        >>> sampler = gs_sampler(1.0)
        >>> round(sampler.b, 6)
        1.367879

    """
    a, scale = validate_parameters("GS", shape, scale, max_shape=1.0)
    return GammaGSSampler(a, 1.0 / a, 1.0 + INV_E * a, scale)
