from __future__ import annotations

import pytest

from gamma_samplers import enable_x64
from gamma_samplers.random import KeySource, seeded_source

# Float64 streams for the whole session; replay tests compare bit for bit.
enable_x64()


@pytest.fixture
def source() -> KeySource:
    return seeded_source(2024)


@pytest.fixture
def big_source() -> KeySource:
    """Source with large blocks for the statistical checks."""
    return seeded_source(1982, block_size=1 << 16)
