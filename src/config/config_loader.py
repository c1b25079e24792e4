"""Configuration loader for YAML files."""

import logging
import os
from collections.abc import Hashable
from pathlib import Path
from typing import Any, Tuple

import pydantic
import yaml

from .config_schema import AppConfig
from .errors import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects duplicate keys instead of keeping the last one."""

    def construct_mapping(self, node, deep=False):
        keys = set()
        for key_node, _ in node.value:
            # merge keys ("<<") may be overridden by explicit keys
            if key_node.tag == "tag:yaml.org,2002:merge":
                continue
            key = self.construct_object(key_node, deep=deep)
            # unhashable keys are reported by the base constructor
            if not isinstance(key, Hashable):
                continue
            if key in keys:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key '{key}'",
                    key_node.start_mark,
                )
            keys.add(key)
        return super().construct_mapping(node, deep=deep)


class ConfigLoader:
    """Load and validate configuration from YAML files."""

    @staticmethod
    def load_config(path: str = "config.yaml") -> AppConfig:
        """
        Load configuration from YAML file.

        Args:
            path: Path to configuration file

        Returns:
            Validated AppConfig instance

        Raises:
            ConfigurationError: If the file is missing, unreadable or malformed
            ValidationError: If a required field is absent or invalid
        """
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigurationError(f"Configuration file not found: {path}")

        logger.info(f"Loading configuration from {config_path}")
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e

        return ConfigLoader.load_config_from_string(text, source=str(config_path))

    @staticmethod
    def load_config_from_string(text: str, source: str = "<string>") -> AppConfig:
        """
        Load configuration from YAML text.

        Args:
            text: YAML document
            source: Name of the source, used in error messages

        Returns:
            Validated AppConfig instance
        """
        try:
            config_dict = yaml.load(text, Loader=UniqueKeyLoader)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Malformed configuration in {source}: {e}") from e

        if config_dict is None:
            raise ConfigurationError(f"Configuration is empty: {source}")
        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                f"Configuration in {source} must be a mapping, got {type(config_dict).__name__}"
            )

        config = ConfigLoader.validate_config(expand_env_vars(config_dict))
        logger.debug(f"Loaded {len(config.servers)} server(s) from {source}")
        return config

    @staticmethod
    def validate_config(config: dict) -> AppConfig:
        """
        Validate configuration dictionary.

        Args:
            config: Configuration dictionary

        Returns:
            Validated AppConfig instance

        Raises:
            ValidationError: If config is invalid
        """
        try:
            return AppConfig.model_validate(config)
        except pydantic.ValidationError as e:
            errors = [
                f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
                for error in e.errors()
            ]
            raise ValidationError("Invalid configuration", errors) from e


def expand_env_vars(value: Any, path: str = "", _parents: Tuple[int, ...] = ()) -> Any:
    """
    Recursively expand ${VAR_NAME} references.

    Args:
        value: Parsed configuration value
        path: Current config path for error messages

    Returns:
        Value with environment references replaced

    Raises:
        ConfigurationError: If a referenced variable is not set, or a YAML
            alias makes a container contain itself
    """
    if isinstance(value, (dict, list)):
        if id(value) in _parents:
            raise ConfigurationError(f"Recursive reference at {path or '<root>'}")
        _parents = _parents + (id(value),)
    if isinstance(value, dict):
        return {
            key: expand_env_vars(item, f"{path}.{key}" if path else str(key), _parents)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [
            expand_env_vars(item, f"{path}[{i}]", _parents) for i, item in enumerate(value)
        ]
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        env_var = value[2:-1]
        env_value = os.getenv(env_var)
        if env_value is None:
            raise ConfigurationError(
                f"Environment variable not found: {env_var} (required by {path})"
            )
        return env_value
    return value


def load_config(path: str = "config.yaml") -> AppConfig:
    """
    Convenience function to load configuration.

    Args:
        path: Path to configuration file

    Returns:
        Validated AppConfig instance
    """
    return ConfigLoader.load_config(path)


def load_config_from_string(text: str) -> AppConfig:
    """Convenience function to load configuration from YAML text."""
    return ConfigLoader.load_config_from_string(text)
