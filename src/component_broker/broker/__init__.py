from .capability import Capability, CapabilityKind, abstract, concrete, describe, interface
from .convention import DEFAULT_INTERFACE_MASK, derive_implementation_identifier
from .errors import (
    ComponentBrokerError,
    ComponentConstructionError,
    ComponentNotFoundError,
    InvalidComponentError,
    InvalidKeyError,
)
from .factory import ComponentFactory
from .instance import get_broker, reset_broker, set_broker
from .registry import ComponentBroker
from .scope import Scope, get_scope, unit_of_work

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
    "get_scope",
    "interface",
    "reset_broker",
    "set_broker",
    "unit_of_work",
]
