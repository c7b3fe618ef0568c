# component_broker/broker/errors.py
"""
Broker exceptions
──────────────────────────────────────────────
• InvalidKeyError            → None/empty key or capability
• InvalidComponentError      → None instance on registration
• ComponentNotFoundError     → by-key lookup found nothing
• ComponentConstructionError → engine could not build an instance
──────────────────────────────────────────────
"""
from __future__ import annotations

from typing import Any, Optional


class ComponentBrokerError(Exception):
    """Base class for every error raised by the broker."""


class InvalidKeyError(ComponentBrokerError, ValueError):
    def __init__(self, param: str = "key", message: Optional[str] = None):
        self.param = param
        super().__init__(message or f"{param.capitalize()} must not be None or empty.")


class InvalidComponentError(ComponentBrokerError, ValueError):
    def __init__(self, param: str = "component"):
        self.param = param
        super().__init__(f"{param.capitalize()} must not be None.")


class ComponentNotFoundError(ComponentBrokerError, LookupError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"No component is registered for the key '{key}'")


class ComponentConstructionError(ComponentBrokerError):
    """
    Raised when the resolution engine cannot produce an instance.

    `identifier` is the capability key or implementation identifier the
    engine was working on when it gave up.
    """

    def __init__(self, identifier: Any, reason: Optional[str] = None):
        self.identifier = identifier
        message = f"Could not create the component of type '{identifier}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
