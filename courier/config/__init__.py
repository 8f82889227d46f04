"""Manager configuration: models, environment settings, and YAML loading."""

from courier.config.defaults import (
    default_accept_language,
    default_user_agent,
    preferred_languages,
)
from courier.config.loader import ConfigValidationError, load_manager_config
from courier.config.manager import ManagerConfig
from courier.config.settings import CourierSettings, get_settings


__all__ = [
    "ConfigValidationError",
    "CourierSettings",
    "ManagerConfig",
    "default_accept_language",
    "default_user_agent",
    "get_settings",
    "load_manager_config",
    "preferred_languages",
]
