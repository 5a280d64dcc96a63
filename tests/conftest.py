"""Shared pytest fixtures for all tests."""

import pytest

from filestore.engine import StorageEngine


class FakeClock:
    """Controllable clock returning whole epoch seconds."""

    def __init__(self, start: int = 1_700_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int = 1) -> int:
        self.now += seconds
        return self.now


@pytest.fixture
def clock():
    """
    Create a fake clock frozen until advanced.

    Returns:
        FakeClock instance
    """
    return FakeClock()


@pytest.fixture
def engine(clock):
    """
    Create an empty storage engine with default limits.

    Args:
        clock: Fake clock fixture

    Returns:
        StorageEngine instance
    """
    return StorageEngine(clock=clock)


@pytest.fixture
def small_engine(clock):
    """
    Create a storage engine with tiny limits so quota paths are cheap to hit.

    Returns:
        StorageEngine with 4-byte chunks, 10-byte files and 16 bytes of capacity
    """
    return StorageEngine(clock=clock, chunk_size=4, max_file_size=10, max_storage_size=16)
