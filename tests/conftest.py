"""
Shared pytest fixtures and configuration for playstream tests.
"""

import pytest

from playstream.config import reset_config
from playstream.scheduling import ManualIdleScheduler


@pytest.fixture(autouse=True)
def reset_stream_config():
    """Reset the global configuration around each test to prevent leakage."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def idle_host():
    """Provide a deterministic idle scheduler driven by run_idle()."""
    return ManualIdleScheduler()


@pytest.fixture
def recorder():
    """Provide a factory of observers that log every notification."""
    return Recorder


class Recorder:
    """Observer object that appends every notification to ``events``."""

    def __init__(self):
        self.events = []
        self.subscription = None

    def start(self, subscription):
        self.subscription = subscription

    def next(self, value):
        self.events.append(("next", value))

    def error(self, error):
        self.events.append(("error", error))

    def complete(self):
        self.events.append(("complete",))

    @property
    def values(self):
        return [event[1] for event in self.events if event[0] == "next"]
