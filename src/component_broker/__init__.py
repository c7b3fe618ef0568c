# component_broker/__init__.py
"""
component_broker
──────────────────────────────────────────────────────────────
A runtime component registry and resolver.
Provides:
    - Factory, type-association and naming-convention lookup
    - Per-unit-of-work instance caching (ContextVar scopes)
    - A process-wide fallback cache for scripts and tests
    - Optional FastAPI/Starlette glue (component_broker.web)
──────────────────────────────────────────────────────────────
"""

__version__ = "0.1.0"

from component_broker.broker import (
    Capability,
    CapabilityKind,
    ComponentBroker,
    ComponentBrokerError,
    ComponentConstructionError,
    ComponentFactory,
    ComponentNotFoundError,
    DEFAULT_INTERFACE_MASK,
    InvalidComponentError,
    InvalidKeyError,
    Scope,
    abstract,
    concrete,
    derive_implementation_identifier,
    describe,
    get_broker,
    interface,
    reset_broker,
    set_broker,
    unit_of_work,
)

__all__ = [
    "Capability",
    "CapabilityKind",
    "ComponentBroker",
    "ComponentBrokerError",
    "ComponentConstructionError",
    "ComponentFactory",
    "ComponentNotFoundError",
    "DEFAULT_INTERFACE_MASK",
    "InvalidComponentError",
    "InvalidKeyError",
    "Scope",
    "abstract",
    "concrete",
    "derive_implementation_identifier",
    "describe",
    "get_broker",
    "interface",
    "reset_broker",
    "set_broker",
    "unit_of_work",
]
