from .settings import BrokerSettings, get_settings

__all__ = ["BrokerSettings", "get_settings"]
