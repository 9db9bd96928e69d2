"""
Configuration loader for releasedeck
"""

import logging
import math
import os
import re
from pathlib import Path
from typing import Any, Dict

import yaml

from ..utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Maximum config file size (1MB should be plenty for YAML configs)
MAX_CONFIG_SIZE = 1024 * 1024

DEFAULT_REFRESH_INTERVAL = 60.0

# A whole string value of the form ${NAME}
ENV_REFERENCE = re.compile(r"^\$\{([A-Za-z_][A-Za-z0-9_]*)\}$")


class ConfigLoader:
    """Loads and validates YAML configuration files"""

    def load(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Validated configuration dictionary

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If config file is invalid or too large
        """
        resolved_path = Path(config_path).expanduser().resolve()

        if not resolved_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {resolved_path}")

        self._validate_config_path(resolved_path)

        file_size = resolved_path.stat().st_size
        if file_size > MAX_CONFIG_SIZE:
            raise ConfigurationError(
                f"Configuration file too large: {file_size} bytes "
                f"(maximum {MAX_CONFIG_SIZE} bytes)"
            )

        try:
            with open(resolved_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e

        self._validate(config)
        config = self._expand_env(config)
        config = self._apply_defaults(config)

        logger.info(f"Loaded configuration from {resolved_path}")
        return config

    def _validate_config_path(self, config_path: Path) -> None:
        """
        Validate that the configuration file path is safe to load.

        Raises:
            ConfigurationError: If path is not a regular file
        """
        if config_path.is_dir():
            raise ConfigurationError(f"Path is a directory, not a file: {config_path}")

        if config_path.suffix.lower() not in [".yaml", ".yml"]:
            logger.warning(
                f"Configuration file has unexpected extension: {config_path.suffix}. "
                f"Expected .yaml or .yml"
            )

        logger.debug(f"Configuration path validated: {config_path}")

    def _validate(self, config: Any) -> None:
        """Validate configuration structure"""
        if not isinstance(config, dict):
            raise ConfigurationError("Configuration must be a dictionary")

        if "widgets" not in config:
            raise ConfigurationError("Configuration must have 'widgets' section")

        widgets = config["widgets"]
        if not isinstance(widgets, list) or not widgets:
            raise ConfigurationError("'widgets' must be a non-empty list")

        for position, widget_config in enumerate(widgets, start=1):
            if not isinstance(widget_config, dict):
                raise ConfigurationError(f"Widget {position} must be a dictionary")
            if not widget_config.get("type"):
                raise ConfigurationError(f"Widget {position} is missing 'type'")

    def _expand_env(self, value: Any) -> Any:
        """Replace ``${NAME}`` string values with environment variables."""
        if isinstance(value, dict):
            return {key: self._expand_env(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self._expand_env(item) for item in value]
        if isinstance(value, str):
            match = ENV_REFERENCE.match(value)
            if match:
                env_var = match.group(1)
                expanded = os.environ.get(env_var)
                if not expanded:
                    raise ConfigurationError(f"Environment variable '{env_var}' not set")
                return expanded
        return value

    def _apply_defaults(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply default values to configuration"""
        interval = config.get("refresh_interval", DEFAULT_REFRESH_INTERVAL)
        if (
            isinstance(interval, bool)
            or not isinstance(interval, (int, float))
            or not math.isfinite(interval)
            or interval <= 0
        ):
            raise ConfigurationError(
                f"'refresh_interval' must be a positive number, got {interval!r}"
            )
        config["refresh_interval"] = float(interval)

        return config
