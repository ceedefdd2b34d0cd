"""
Configuration management for the solvers and the command line driver.
Uses OmegaConf for flexible configuration handling.
"""

import logging
import os
from typing import Any

import omegaconf
from omegaconf import DictConfig, OmegaConf

from ..exceptions import ConfigurationError
from ..formula import MAX_VARIABLES

# Set up logging
logger = logging.getLogger(__name__)


class SolverConfig:
    """
    Configuration manager for solvers.
    Handles loading, merging, and accessing configuration parameters.
    """

    DEFAULT_CONFIG = {
        "solver": {
            "name": "dpll",
            "max_variables": MAX_VARIABLES,
        },
        "logging": {
            "level": "INFO",
            "file": None,
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
        "trace": {
            "enabled": False,
            "output_dir": "logs",
            "format": "json",
        },
    }

    def __init__(self, config_path: str | None = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to a YAML configuration file merged over the defaults

        Raises:
            ConfigurationError: If the file is missing or cannot be parsed
        """
        self.config: DictConfig = OmegaConf.create(self.DEFAULT_CONFIG)

        if config_path:
            self._load_config_file(config_path)

    def _load_config_file(self, config_path: str) -> None:
        if not os.path.exists(config_path):
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            file_config = OmegaConf.load(config_path)
        except Exception as e:
            raise ConfigurationError(f"Error loading configuration file {config_path}: {e}")

        self.update(file_config)
        logger.debug(f"Loaded configuration from {config_path}")

    def update(self, config_dict: dict[str, Any] | DictConfig) -> None:
        """
        Update the configuration with the given dictionary.

        Args:
            config_dict: Dictionary to update the configuration with
        """
        self.config = OmegaConf.merge(self.config, config_dict)
        self._validate()

    def _validate(self) -> None:
        max_variables = self.get("solver.max_variables")
        if not isinstance(max_variables, int) or max_variables <= 0:
            raise ConfigurationError(
                f"solver.max_variables must be a positive integer, got {max_variables!r}"
            )
        if self.get("trace.format") not in ("json", "csv"):
            raise ConfigurationError(
                f"trace.format must be 'json' or 'csv', got {self.get('trace.format')!r}"
            )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.
        Supports dot notation for nested keys (e.g., "solver.max_variables").

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        try:
            value = OmegaConf.select(self.config, key)
        except omegaconf.errors.OmegaConfBaseException:
            return default
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value by key.
        Supports dot notation for nested keys (e.g., "solver.max_variables").

        Args:
            key: Configuration key
            value: Value to set
        """
        OmegaConf.update(self.config, key, value)
        self._validate()

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary representation of the configuration
        """
        return OmegaConf.to_container(self.config, resolve=True)

    def to_yaml(self) -> str:
        return OmegaConf.to_yaml(self.config)

    def save(self, file_path: str) -> None:
        """
        Save the configuration to a YAML file.

        Args:
            file_path: Path to save the configuration to
        """
        os.makedirs(os.path.dirname(os.path.abspath(file_path)), exist_ok=True)
        OmegaConf.save(self.config, file_path)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: str) -> bool:
        """
        Check if a key exists in the configuration.

        Args:
            key: Configuration key

        Returns:
            True if the key exists, False otherwise
        """
        return self.get(key) is not None


# Create a global configuration instance
config = SolverConfig()


def load_config(config_path: str | None = None) -> SolverConfig:
    """
    Load configuration from a file and make it the global configuration.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration instance
    """
    global config
    if config_path:
        config = SolverConfig(config_path)
    return config


def get_config() -> SolverConfig:
    """
    Get the global configuration instance.

    Returns:
        Configuration instance
    """
    return config


def reset_config() -> SolverConfig:
    """Restore the global configuration to the defaults."""
    global config
    config = SolverConfig()
    return config
