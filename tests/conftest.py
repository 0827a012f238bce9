"""
Shared test fixtures for tconv tests.

Every test runs with the local zone pinned to UTC (``TZ=UTC`` plus a reset
of the cached local zone), so results do not depend on the machine the
tests run on.
"""

import pytest

from tconv.zones import local_zone


@pytest.fixture(autouse=True)
def utc_local_zone(monkeypatch):
    """Pin the local zone to UTC for the duration of a test."""
    monkeypatch.setenv("TZ", "UTC")
    local_zone.cache_clear()
    yield
    local_zone.cache_clear()


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (runs the command-line interface)",
    )
