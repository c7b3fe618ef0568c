"""Pytest configuration and shared fixtures for component_broker tests."""

import pytest

from component_broker.broker.instance import reset_broker
from component_broker.config.settings import get_settings
from component_broker.testing.fixtures import broker, default_broker, unit_of_work_scope  # noqa: F401


@pytest.fixture(autouse=True)
def reset_global_state():
    """Reset the default broker and cached settings around every test."""
    get_settings.cache_clear()
    reset_broker()
    yield
    reset_broker()
    get_settings.cache_clear()
