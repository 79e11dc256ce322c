"""Configuration for sampler selection and random-source precision.

Everything here is an immutable value or a thin wrapper over
``jax.config``. Nothing is read from the environment.

"""

from __future__ import annotations

from typing import NamedTuple

import jax
import jax.numpy as jnp

DEFAULT_BLOCK_SIZE = 8192

LARGE_SHAPE_METHODS = ("gd", "mt")
SMALL_SHAPE_METHODS = ("ip", "gs")


class SamplerConfig(NamedTuple):
    """Which algorithm family :func:`gamma_sampler` picks for each shape range."""

    large_shape: str = "gd"  # shape >= 1: "gd" or "mt"
    small_shape: str = "ip"  # shape < 1: "ip" or "gs"
    ip_base: str = "mt"  # base family for the IP sampler
    unit_shape_exponential: bool = True


DEFAULT_CONFIG = SamplerConfig()


def enable_x64(enabled: bool = True) -> None:
    """Toggle 64-bit floats for every JAX computation in this process.

    Random sources draw in the widest float JAX allows. Without x64 that
    is float32, which is enough for moment checks. Use float64 when
    tails or exact replays matter.

    Args:
        enabled: True to allow float64, False to return to float32.

    Examples:
        >>> enable_x64()
        >>> default_float_dtype()
        dtype('float64')

    """
    jax.config.update("jax_enable_x64", enabled)


def default_float_dtype() -> jnp.dtype:
    """Widest float dtype JAX currently produces (float64 or float32)."""
    return jax.dtypes.canonicalize_dtype(jnp.float64)
