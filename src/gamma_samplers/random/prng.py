"""Random sources that feed the Gamma samplers.

The samplers consume scalars one at a time: a uniform in [0, 1), a
standard normal and a standard exponential. JAX's PRNG is functional and
works on whole arrays, so :class:`KeySource` draws a block per stream
from a fresh subkey and hands the values out one by one. The key is
split before every block and never reused.

The other sources wrap or replace a ``KeySource`` for testing: replaying
recorded streams, recording them, and counting draws.

References:
    - JAX random: https://jax.readthedocs.io/en/latest/random-numbers.html
    - JAX source: jax/_src/random.py

"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from typing import Protocol

import jax
import jax.numpy as jnp
from jax import Array

from gamma_samplers.config import DEFAULT_BLOCK_SIZE, default_float_dtype
from gamma_samplers.errors import (
    NumericDomainError,
    RejectionLimitExceeded,
    StreamExhausted,
)

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Scalar random streams consumed by every sampler."""

    def uniform(self) -> float:
        """Uniform variate in [0, 1)."""
        ...

    def normal(self) -> float:
        """Standard normal variate."""
        ...

    def exponential(self) -> float:
        """Standard exponential variate (rate 1)."""
        ...


def create_key(seed: int) -> Array:
    """Create a PRNG key from an integer seed.

    Args:
        seed: Integer seed for reproducibility.

    Returns:
        PRNG key array.

    Examples:
        >>> key = create_key(42)
        >>> key.shape
        ()

    """
    return jax.random.key(seed)


def split_key(key: Array, num: int = 2) -> Array:
    """Split a PRNG key into multiple independent sub-keys.

    Keys must never be reused. Split off a subkey for each block and keep
    the first key as the new parent.

    Args:
        key: Parent PRNG key (consumed, do not reuse).
        num: Number of sub-keys to generate.

    Returns:
        Array of sub-keys with shape (num,).

    Examples:
        >>> key = create_key(0)
        >>> key, subkey = split_key(key)

    """
    return jax.random.split(key, num)


def uniform_block(key: Array, size: int, dtype: jnp.dtype | None = None) -> list[float]:
    """Draw ``size`` uniforms in [0, 1) as Python floats.

    Args:
        key: PRNG key (consumed).
        size: Number of values.
        dtype: Float dtype to draw in. Default: :func:`default_float_dtype`.

    Returns:
        List of floats in [0, 1).

    Examples:
        >>> values = uniform_block(create_key(42), 1000)
        >>> min(values) >= 0.0 and max(values) < 1.0
        True

    """
    if dtype is None:
        dtype = default_float_dtype()
    return jax.random.uniform(key, shape=(size,), dtype=dtype).tolist()


def normal_block(key: Array, size: int, dtype: jnp.dtype | None = None) -> list[float]:
    """Draw ``size`` standard normals as Python floats.

    Examples:
        >>> values = normal_block(create_key(0), 10000)
        >>> abs(sum(values) / len(values)) < 0.1
        True

    """
    if dtype is None:
        dtype = default_float_dtype()
    return jax.random.normal(key, shape=(size,), dtype=dtype).tolist()


def exponential_block(key: Array, size: int, dtype: jnp.dtype | None = None) -> list[float]:
    """Draw ``size`` standard exponentials as Python floats.

    Examples:
        >>> values = exponential_block(create_key(0), 10000)
        >>> min(values) >= 0.0
        True

    """
    if dtype is None:
        dtype = default_float_dtype()
    return jax.random.exponential(key, shape=(size,), dtype=dtype).tolist()


class KeySource:
    """Buffered random source driven by a JAX PRNG key.

    The key is split once into three stream keys. Each stream keeps its
    own block of values, and when a block runs out a subkey is split off
    that stream's key and a new block is drawn. The same key therefore
    always yields the same three streams, whatever order they are
    consumed in.

    Not thread-safe: give every thread its own source, for example from
    :func:`split_key`.

    Args:
        key: PRNG key. The source takes ownership of it.
        block_size: Values drawn per refill, per stream.
        dtype: Float dtype to draw in. Default: :func:`default_float_dtype`.

    Examples:
        >>> source = KeySource(create_key(7), block_size=16)
        >>> 0.0 <= source.uniform() < 1.0
        True
        >>> source.exponential() >= 0.0
        True

    """

    __slots__ = ("_keys", "_block_size", "_dtype", "_uniforms", "_normals", "_exponentials")

    def __init__(
        self,
        key: Array,
        block_size: int = DEFAULT_BLOCK_SIZE,
        dtype: jnp.dtype | None = None,
    ) -> None:
        if block_size < 1:
            raise ValueError(f"block_size must be >= 1, got {block_size!r}")
        ukey, nkey, ekey = split_key(key, 3)
        self._keys = {"uniform": ukey, "normal": nkey, "exponential": ekey}
        self._block_size = block_size
        self._dtype = default_float_dtype() if dtype is None else jnp.dtype(dtype)
        self._uniforms: Iterator[float] = iter(())
        self._normals: Iterator[float] = iter(())
        self._exponentials: Iterator[float] = iter(())
        logger.debug("KeySource created: block_size=%d dtype=%s", block_size, self._dtype)

    @property
    def dtype(self) -> jnp.dtype:
        return self._dtype

    def _next_key(self, stream: str) -> Array:
        self._keys[stream], subkey = split_key(self._keys[stream])
        return subkey

    def uniform(self) -> float:
        try:
            return next(self._uniforms)
        except StopIteration:
            block = uniform_block(self._next_key("uniform"), self._block_size, self._dtype)
            self._uniforms = iter(block)
            return next(self._uniforms)

    def normal(self) -> float:
        try:
            return next(self._normals)
        except StopIteration:
            block = normal_block(self._next_key("normal"), self._block_size, self._dtype)
            self._normals = iter(block)
            return next(self._normals)

    def exponential(self) -> float:
        try:
            return next(self._exponentials)
        except StopIteration:
            block = exponential_block(self._next_key("exponential"), self._block_size, self._dtype)
            self._exponentials = iter(block)
            return next(self._exponentials)


def seeded_source(
    seed: int,
    block_size: int = DEFAULT_BLOCK_SIZE,
    dtype: jnp.dtype | None = None,
) -> KeySource:
    """Create a :class:`KeySource` from an integer seed.

    Examples:
        >>> s1 = seeded_source(3)
        >>> s2 = seeded_source(3)
        >>> s1.normal() == s2.normal()
        True

    """
    return KeySource(create_key(seed), block_size=block_size, dtype=dtype)


class ReplaySource:
    """Replays pre-recorded uniform, normal and exponential streams.

    Values are checked on the way in: a uniform outside [0, 1) or an
    exponential that is negative or not finite raises
    :class:`NumericDomainError`. Asking a stream for more values than were
    recorded raises :class:`StreamExhausted`.

    Examples:
        >>> source = ReplaySource(uniforms=[0.25], normals=[-1.5])
        >>> source.uniform(), source.normal()
        (0.25, -1.5)

    """

    __slots__ = ("uniforms", "normals", "exponentials", "_positions")

    def __init__(
        self,
        uniforms: Iterable[float] = (),
        normals: Iterable[float] = (),
        exponentials: Iterable[float] = (),
    ) -> None:
        self.uniforms = tuple(float(u) for u in uniforms)
        self.normals = tuple(float(z) for z in normals)
        self.exponentials = tuple(float(e) for e in exponentials)

        for u in self.uniforms:
            if not 0.0 <= u < 1.0:
                raise NumericDomainError(f"uniform variate outside [0, 1): {u!r}")
        for z in self.normals:
            if not math.isfinite(z):
                raise NumericDomainError(f"normal variate is not finite: {z!r}")
        for e in self.exponentials:
            if not (math.isfinite(e) and e >= 0.0):
                raise NumericDomainError(f"exponential variate outside [0, inf): {e!r}")

        self._positions = {"uniform": 0, "normal": 0, "exponential": 0}

    def _take(self, stream: str, values: tuple[float, ...]) -> float:
        i = self._positions[stream]
        if i >= len(values):
            raise StreamExhausted(f"{stream} stream exhausted after {len(values)} values")
        self._positions[stream] = i + 1
        return values[i]

    def uniform(self) -> float:
        return self._take("uniform", self.uniforms)

    def normal(self) -> float:
        return self._take("normal", self.normals)

    def exponential(self) -> float:
        return self._take("exponential", self.exponentials)

    def remaining(self) -> dict[str, int]:
        """Number of unread values left in each stream."""
        return {
            "uniform": len(self.uniforms) - self._positions["uniform"],
            "normal": len(self.normals) - self._positions["normal"],
            "exponential": len(self.exponentials) - self._positions["exponential"],
        }


class RecordingSource:
    """Forwards draws to another source and records every value.

    Examples:
        >>> recorder = RecordingSource(seeded_source(0))
        >>> first = recorder.normal()
        >>> recorder.replay().normal() == first
        True

    """

    __slots__ = ("source", "uniforms", "normals", "exponentials")

    def __init__(self, source: RandomSource) -> None:
        self.source = source
        self.uniforms: list[float] = []
        self.normals: list[float] = []
        self.exponentials: list[float] = []

    def uniform(self) -> float:
        u = self.source.uniform()
        self.uniforms.append(u)
        return u

    def normal(self) -> float:
        z = self.source.normal()
        self.normals.append(z)
        return z

    def exponential(self) -> float:
        e = self.source.exponential()
        self.exponentials.append(e)
        return e

    def replay(self) -> ReplaySource:
        """A fresh :class:`ReplaySource` over everything recorded so far."""
        return ReplaySource(self.uniforms, self.normals, self.exponentials)


class CountingSource:
    """Counts draws per stream, with an optional diagnostic limit.

    Rejection loops have no bound in production. In tests, wrap the source
    in a ``CountingSource`` to measure draws per variate, or set ``limit``
    so that a broken acceptance test fails loudly instead of spinning.

    Args:
        source: Source to forward draws to.
        limit: Maximum total draws before :class:`RejectionLimitExceeded`.
            None for no limit.

    Examples:
        >>> counter = CountingSource(seeded_source(0))
        >>> _ = counter.uniform(); _ = counter.normal()
        >>> counter.total
        2

    """

    __slots__ = ("source", "limit", "uniforms", "normals", "exponentials")

    def __init__(self, source: RandomSource, limit: int | None = None) -> None:
        self.source = source
        self.limit = limit
        self.uniforms = 0
        self.normals = 0
        self.exponentials = 0

    @property
    def total(self) -> int:
        return self.uniforms + self.normals + self.exponentials

    def _check(self) -> None:
        if self.limit is not None and self.total > self.limit:
            raise RejectionLimitExceeded(
                f"{self.total} draws exceeded the diagnostic limit of {self.limit}"
            )

    def uniform(self) -> float:
        self.uniforms += 1
        self._check()
        return self.source.uniform()

    def normal(self) -> float:
        self.normals += 1
        self._check()
        return self.source.normal()

    def exponential(self) -> float:
        self.exponentials += 1
        self._check()
        return self.source.exponential()

    def reset(self) -> None:
        """Zero all counters."""
        self.uniforms = 0
        self.normals = 0
        self.exponentials = 0
