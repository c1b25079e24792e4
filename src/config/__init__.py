"""Configuration management module."""

from .config_loader import ConfigLoader, load_config, load_config_from_string
from .config_schema import AppConfig, PasswordHash, ServerProfile
from .display import config_to_display_dict
from .errors import ConfigurationError, ValidationError

__all__ = [
    "ConfigLoader",
    "load_config",
    "load_config_from_string",
    "AppConfig",
    "PasswordHash",
    "ServerProfile",
    "config_to_display_dict",
    "ConfigurationError",
    "ValidationError",
]
