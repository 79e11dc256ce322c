"""Rejection samplers for the Gamma distribution.

Each sampler is an immutable NamedTuple built by a validating factory and
drawn from with ``draw(source)``.

Algorithms:
    gd_sampler → Ahrens & Dieter (1982), shape >= 1
    gs_sampler → Ahrens & Dieter (1974), 0 < shape <= 1
    mt_sampler → Marsaglia & Tsang (2000), shape >= 1
    ip_sampler → Gamma(shape + 1) boosted down by U**(1/shape), shape < 1
    gamma_sampler → picks one of the above for any shape > 0
"""

from gamma_samplers.samplers.ahrens_dieter import (
    GammaGDSampler,
    GammaGSSampler,
    gd_sampler,
    gs_sampler,
    horner,
)
from gamma_samplers.samplers.dispatch import (
    ExponentialSampler,
    GammaSampler,
    exponential_sampler,
    gamma_sampler,
)
from gamma_samplers.samplers.marsaglia_tsang import (
    GammaIPSampler,
    GammaMTSampler,
    ip_sampler,
    mt_sampler,
)

__all__ = [
    "horner",
    "GammaGDSampler",
    "gd_sampler",
    "GammaGSSampler",
    "gs_sampler",
    "GammaMTSampler",
    "mt_sampler",
    "GammaIPSampler",
    "ip_sampler",
    "ExponentialSampler",
    "exponential_sampler",
    "GammaSampler",
    "gamma_sampler",
]
