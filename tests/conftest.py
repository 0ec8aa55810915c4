"""Shared test fixtures."""

import random
import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from idforge import ManualClock, SnowflakeGenerator

START_MS = 1_700_000_000_000


@pytest.fixture
def clock():
    """Manual clock frozen at START_MS."""
    return ManualClock(START_MS)


@pytest.fixture
def rng():
    """Seeded random source for reproducible codes."""
    return random.Random(20200413)


@pytest.fixture
def snowflake(clock):
    """Generator with 5 partition bits and 5 machine bits on the manual clock."""
    return SnowflakeGenerator(3, 17, partition_bits=5, machine_bits=5, clock=clock)
