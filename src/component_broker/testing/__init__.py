"""
Testing utilities for broker-based apps.
──────────────────────────────────────────────────────────────
Provides pytest fixtures that hand out isolated brokers and scopes.
──────────────────────────────────────────────────────────────
"""
from .fixtures import broker, default_broker, unit_of_work_scope

__all__ = ["broker", "default_broker", "unit_of_work_scope"]
