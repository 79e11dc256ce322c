"""Exact Gamma-distribution samplers driven by JAX's functional PRNG.

Modules:
    samplers: GD, GS, MT and IP rejection samplers plus shape dispatch
    random: Key-based, replaying, recording and counting random sources
    config: Algorithm selection and float precision
    errors: Exception taxonomy and parameter validation
"""

from gamma_samplers.config import DEFAULT_CONFIG, SamplerConfig, enable_x64
from gamma_samplers.errors import (
    GammaSamplerError,
    InvalidParameter,
    NumericDomainError,
    RejectionLimitExceeded,
    StreamExhausted,
)
from gamma_samplers.random import KeySource, ReplaySource, seeded_source
from gamma_samplers.samplers import (
    GammaSampler,
    gamma_sampler,
    gd_sampler,
    gs_sampler,
    ip_sampler,
    mt_sampler,
)

__version__ = "0.1.0"

__all__ = [
    "SamplerConfig",
    "DEFAULT_CONFIG",
    "enable_x64",
    "GammaSamplerError",
    "InvalidParameter",
    "NumericDomainError",
    "StreamExhausted",
    "RejectionLimitExceeded",
    "KeySource",
    "ReplaySource",
    "seeded_source",
    "GammaSampler",
    "gamma_sampler",
    "gd_sampler",
    "gs_sampler",
    "mt_sampler",
    "ip_sampler",
]
