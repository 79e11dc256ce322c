"""Exception taxonomy and eager parameter validation.

Samplers validate once, in their factory functions, so that ``draw`` never
has to check anything. Errors raised from random sources mean the source
broke its contract, not that the sampler did.

"""

from __future__ import annotations

import math


class GammaSamplerError(Exception):
    """Base class for every error raised by gamma_samplers."""


class InvalidParameter(GammaSamplerError, ValueError):
    """Shape, scale or method name rejected at construction time."""


class NumericDomainError(GammaSamplerError, ArithmeticError):
    """A random source produced a value outside its documented range.

    For example a uniform equal to 1.0 or a negative exponential. The
    sampling loops are not guarded against these values (doing so would
    cost every draw and clamping would bend the tails), so they are caught
    where recorded values enter a :class:`~gamma_samplers.random.ReplaySource`.
    """


class StreamExhausted(GammaSamplerError, LookupError):
    """A replayed random stream has no values left."""


class RejectionLimitExceeded(GammaSamplerError, RuntimeError):
    """A counting source saw more draws than its diagnostic limit."""


def validate_parameters(
    name: str,
    shape: float,
    scale: float,
    *,
    min_shape: float = 0.0,
    max_shape: float = math.inf,
    min_inclusive: bool = False,
    max_inclusive: bool = True,
) -> tuple[float, float]:
    """Check shape and scale against a sampler's domain.

    Args:
        name: Sampler name used in the error message.
        shape: Gamma shape parameter.
        scale: Gamma scale parameter. Must be finite and > 0.
        min_shape: Lower bound of the valid shape interval.
        max_shape: Upper bound of the valid shape interval.
        min_inclusive: Whether ``shape == min_shape`` is allowed.
        max_inclusive: Whether ``shape == max_shape`` is allowed.

    Returns:
        Tuple of (shape, scale) as floats.

    Raises:
        InvalidParameter: If either parameter is out of range.

    Examples:
        >>> validate_parameters("GS", 0.5, 2.0, max_shape=1.0)
        (0.5, 2.0)

    """
    shape = float(shape)
    scale = float(scale)

    if not math.isfinite(scale) or scale <= 0.0:
        raise InvalidParameter(f"{name}: scale must be finite and > 0, got {scale!r}")
    if not math.isfinite(shape) or shape <= 0.0:
        raise InvalidParameter(f"{name}: shape must be finite and > 0, got {shape!r}")

    below = shape < min_shape if min_inclusive else shape <= min_shape
    above = shape > max_shape if max_inclusive else shape >= max_shape
    if below or above:
        lo = "[" if min_inclusive else "("
        hi = "]" if max_inclusive else ")"
        raise InvalidParameter(
            f"{name}: shape must lie in {lo}{min_shape:g}, {max_shape:g}{hi}, got {shape!r}"
        )
    return shape, scale
