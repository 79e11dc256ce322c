"""Random sources built on JAX's functional PRNG.

JAX uses an explicit, splittable PRNG with no hidden global state. The
samplers want one scalar at a time, so KeySource buffers a block per
stream and splits a fresh subkey for every refill.

Sources:
    KeySource → buffered uniform/normal/exponential streams from a key
    ReplaySource → fixed, pre-recorded streams (validated on entry)
    RecordingSource → records what another source produced
    CountingSource → counts draws, optional diagnostic limit
"""

from gamma_samplers.random.prng import (
    CountingSource,
    KeySource,
    RandomSource,
    RecordingSource,
    ReplaySource,
    create_key,
    exponential_block,
    normal_block,
    seeded_source,
    split_key,
    uniform_block,
)

__all__ = [
    "RandomSource",
    "create_key",
    "split_key",
    "uniform_block",
    "normal_block",
    "exponential_block",
    "KeySource",
    "seeded_source",
    "ReplaySource",
    "RecordingSource",
    "CountingSource",
]
