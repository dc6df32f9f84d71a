"""Shared fixtures for humancron tests.

Every test runs against default configuration in UTC so results do not
depend on the environment of the machine running the suite.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Generator

import pytest

from humancron.config import HumanCronConfig, reset_config, set_config
from humancron.timezones import FixedClock


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture(autouse=True)
def default_config() -> Generator[HumanCronConfig, None, None]:
    """Pin the process-wide configuration to defaults for each test."""
    config = HumanCronConfig()
    set_config(config)
    yield config
    reset_config()


# =============================================================================
# Clocks
# =============================================================================


@pytest.fixture
def winter_clock() -> FixedClock:
    """Wednesday 2025-01-15 12:00 UTC (standard time in the northern hemisphere)."""
    return FixedClock(datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def summer_clock() -> FixedClock:
    """Tuesday 2025-07-15 12:00 UTC (daylight time in the northern hemisphere)."""
    return FixedClock(datetime(2025, 7, 15, 12, 0, tzinfo=timezone.utc))
