"""Pytest configuration and fixtures for the mesh telemetry tests."""

import pytest
from whenever import Instant

from mesh_telemetry.random_source import SeededRandomSource


@pytest.fixture
def fixed_now() -> Instant:
    """A fixed clock so wall-clock labels are predictable."""
    return Instant.from_utc(2026, 1, 15, 12, 0)


@pytest.fixture
def seeded() -> SeededRandomSource:
    return SeededRandomSource(1234)
