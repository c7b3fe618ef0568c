# src/component_broker/config/settings.py
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

# Strip a leading "I": IEmployeeRepository → EmployeeRepository
DEFAULT_INTERFACE_MASK = "^I"


class BrokerSettings(BaseSettings):
    """
    Process-wide broker settings.
    Read from COMPONENT_BROKER_* environment variables or a .env file;
    applications can subclass and extend it.
    """

    interface_mask: str = DEFAULT_INTERFACE_MASK
    app_name: str = "Component Broker"
    log_level: str = "INFO"
    enable_request_logging: bool = True

    model_config = SettingsConfigDict(
        env_prefix="COMPONENT_BROKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> BrokerSettings:
    # singleton (reads env once); get_settings.cache_clear() to re-read
    return BrokerSettings()
