# component_broker/log.py
"""
Logging helpers
──────────────────────────────────────────────
All loggers live under the "component_broker" namespace. The library only
attaches a NullHandler; applications call configure_logging() (create_app
does this for you) or wire the namespace into their own logging setup.
──────────────────────────────────────────────
"""
from __future__ import annotations

import logging
from typing import Optional

ROOT_LOGGER = "component_broker"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a stream handler to the broker namespace (idempotent)."""
    from component_broker.config.settings import get_settings

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel((level or get_settings().log_level).upper())
    if not any(getattr(h, "_component_broker", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        handler._component_broker = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
