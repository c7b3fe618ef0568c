"""
──────────────────────────────────────────────────────────────────────────────
component_broker.testing.fixtures
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Provide reusable pytest fixtures for broker-based applications.

Exports:
    - broker             → a fresh ComponentBroker per test
    - default_broker     → the process-wide broker, reset before and after
    - unit_of_work_scope → a Scope bound to the context for the test

Usage in your conftest.py:
    from component_broker.testing.fixtures import broker, unit_of_work_scope  # noqa: F401

    def test_repo_is_shared(broker):
        assert broker.retrieve(IUserRepo) is broker.retrieve(IUserRepo)
──────────────────────────────────────────────────────────────────────────────
"""

import pytest

from component_broker.broker.instance import get_broker, reset_broker
from component_broker.broker.registry import ComponentBroker
from component_broker.broker.scope import Scope
from component_broker.config.settings import DEFAULT_INTERFACE_MASK, BrokerSettings


# ──────────────────────────────────────────────────────────────
# Isolated broker (per test)
# ──────────────────────────────────────────────────────────────
@pytest.fixture()
def broker():
    """
    Provide a ComponentBroker that nothing else shares.
    The mask is pinned to the default, so neither .env nor
    COMPONENT_BROKER_INTERFACE_MASK changes it.
    """
    instance = ComponentBroker(DEFAULT_INTERFACE_MASK, settings=BrokerSettings(_env_file=None))
    yield instance
    instance.reset()


# ──────────────────────────────────────────────────────────────
# Shared broker (per test)
# ──────────────────────────────────────────────────────────────
@pytest.fixture()
def default_broker():
    """The process-wide broker, reset on both sides of the test."""
    reset_broker()
    yield get_broker()
    reset_broker()


# ──────────────────────────────────────────────────────────────
# Bound scope (per test)
# ──────────────────────────────────────────────────────────────
@pytest.fixture()
def unit_of_work_scope():
    """Bind a fresh Scope for the duration of the test, then close it."""
    with Scope(name="test") as scope:
        yield scope
