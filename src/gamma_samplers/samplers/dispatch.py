"""Pick a Gamma sampler for a (shape, scale) pair.

Selection runs once per distribution, never per draw. The result is one
variant of :data:`GammaSampler`; every variant exposes ``draw(source)``.

Default routing:
    shape < 1  → IP over an MT base (config.small_shape, config.ip_base)
    shape == 1 → ExponentialSampler (config.unit_shape_exponential)
    shape >= 1 → GD (config.large_shape)
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Union

from gamma_samplers.config import (
    DEFAULT_CONFIG,
    LARGE_SHAPE_METHODS,
    SMALL_SHAPE_METHODS,
    SamplerConfig,
)
from gamma_samplers.errors import InvalidParameter, validate_parameters
from gamma_samplers.random import RandomSource
from gamma_samplers.samplers.ahrens_dieter import (
    GammaGDSampler,
    GammaGSSampler,
    gd_sampler,
    gs_sampler,
)
from gamma_samplers.samplers.marsaglia_tsang import (
    BASE_SAMPLERS,
    GammaIPSampler,
    GammaMTSampler,
    ip_sampler,
    mt_sampler,
)

logger = logging.getLogger(__name__)


class ExponentialSampler(NamedTuple):
    """Gamma(1, scale), which is Exponential with mean ``scale``."""

    scale: float

    def draw(self, source: RandomSource) -> float:
        return self.scale * source.exponential()


def exponential_sampler(scale: float = 1.0) -> ExponentialSampler:
    """Build the shape == 1 short-cut sampler.

    Raises:
        InvalidParameter: If scale is not a positive finite number.

    """
    _, scale = validate_parameters("Exponential", 1.0, scale)
    return ExponentialSampler(scale)


GammaSampler = Union[
    GammaGDSampler,
    GammaGSSampler,
    GammaMTSampler,
    GammaIPSampler,
    ExponentialSampler,
]


def _check_config(config: SamplerConfig) -> None:
    if config.large_shape not in LARGE_SHAPE_METHODS:
        raise InvalidParameter(
            f"large_shape must be one of {LARGE_SHAPE_METHODS}, got {config.large_shape!r}"
        )
    if config.small_shape not in SMALL_SHAPE_METHODS:
        raise InvalidParameter(
            f"small_shape must be one of {SMALL_SHAPE_METHODS}, got {config.small_shape!r}"
        )
    if config.ip_base not in BASE_SAMPLERS:
        raise InvalidParameter(
            f"ip_base must be one of {tuple(BASE_SAMPLERS)}, got {config.ip_base!r}"
        )


def gamma_sampler(
    shape: float,
    scale: float = 1.0,
    *,
    config: SamplerConfig = DEFAULT_CONFIG,
) -> GammaSampler:
    """Choose and build a sampler for Gamma(shape, scale).

    Args:
        shape: Shape parameter, > 0.
        scale: Scale parameter, > 0.
        config: Algorithm choices per shape range.

    Returns:
        An immutable sampler; call ``draw(source)`` on it.

    Raises:
        InvalidParameter: If shape or scale is not a positive finite
            number, or config names an unknown method.

    Examples:
        >>> type(gamma_sampler(0.3)).__name__
        'GammaIPSampler'
        >>> type(gamma_sampler(1.0)).__name__
        'ExponentialSampler'
        >>> type(gamma_sampler(7.5, 2.0)).__name__
        'GammaGDSampler'
        >>> cfg = DEFAULT_CONFIG._replace(large_shape="mt")
        >>> type(gamma_sampler(7.5, config=cfg)).__name__
        'GammaMTSampler'

    """
    shape, scale = validate_parameters("gamma_sampler", shape, scale)
    _check_config(config)

    sampler: GammaSampler
    if shape < 1.0:
        if config.small_shape == "gs":
            sampler = gs_sampler(shape, scale)
        else:
            sampler = ip_sampler(shape, scale, base=config.ip_base)
    elif shape == 1.0 and config.unit_shape_exponential:
        sampler = exponential_sampler(scale)
    elif config.large_shape == "mt":
        sampler = mt_sampler(shape, scale)
    else:
        sampler = gd_sampler(shape, scale)

    logger.debug("gamma_sampler: shape=%g scale=%g -> %s", shape, scale, type(sampler).__name__)
    return sampler
