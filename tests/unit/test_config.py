"""Unit tests for the global stream configuration."""

import pytest

from playstream import CONFIG, StreamConfig, reset_config


@pytest.mark.unit
def test_config_defaults():
    """Isolation on, strict mode off, no idle timeout"""
    assert CONFIG == StreamConfig()
    assert CONFIG.isolate_observer_errors is True
    assert CONFIG.raise_on_terminated is False
    assert CONFIG.idle_timeout_ms is None


@pytest.mark.unit
def test_reset_config_restores_defaults_in_place():
    """reset_config mutates the shared instance rather than replacing it"""
    config = CONFIG
    CONFIG.raise_on_terminated = True
    CONFIG.idle_timeout_ms = 50

    reset_config()

    assert config is CONFIG
    assert CONFIG == StreamConfig()
