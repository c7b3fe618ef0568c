# component_broker/broker/instance.py
"""
Process-wide default broker
────────────────────────────────────────────
Applications that do not want to pass a ComponentBroker around can use
the shared one. Created lazily from BrokerSettings.

Used by:
    • web.api.create_app (when no broker is given)
    • testing.fixtures.default_broker
"""
from __future__ import annotations

from typing import Optional

from component_broker.broker.registry import ComponentBroker

_broker: Optional[ComponentBroker] = None


def get_broker() -> ComponentBroker:
    """Return the default broker (create if missing)."""
    global _broker
    if _broker is None:
        _broker = ComponentBroker()
    return _broker


def set_broker(broker: ComponentBroker) -> None:
    """Allow replacing the default broker (e.g., in app startup or tests)."""
    global _broker
    _broker = broker


def reset_broker() -> None:
    """Reset and drop the default broker; the next get_broker() builds a new one."""
    global _broker
    if _broker is not None:
        _broker.reset()
    _broker = None
