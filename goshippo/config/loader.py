"""Configuration loader for the goshippo client.

This module loads the YAML configuration shipped next to it and provides a
singleton config object for easy access throughout the package.
"""

from pathlib import Path
from typing import Any, cast

import yaml

from ..exceptions import ConfigurationError
from ..logging_config import get_module_logger

logger = get_module_logger("config")

_MISSING = object()


class Config:
    """Configuration manager that loads and provides access to all config files."""

    def __init__(self, config_dict: dict[str, Any] | None = None):
        """
        Initialize the configuration manager.

        Args:
            config_dict: Optional dictionary of config values for testing.
                        If provided, config files won't be loaded from disk.
        """
        self._configs: dict[str, Any]
        self._config_dir: Path | None

        if config_dict is not None:
            # Testing mode: use provided config
            self._configs = config_dict
            self._config_dir = None
        else:
            self._configs = {}
            self._config_dir = self._find_config_dir()
            self._load_all_configs()

    def _find_config_dir(self) -> Path:
        """Find the directory holding the YAML files (this package)."""
        config_dir = Path(__file__).resolve().parent

        if not (config_dir / "api_config.yaml").exists():
            raise FileNotFoundError(
                f"api_config.yaml not found in {config_dir}. "
                f"Please reinstall goshippo-client."
            )

        return config_dir

    def _load_all_configs(self):
        """Load all YAML configuration files from the config directory."""
        if self._config_dir is None:
            return

        config_files = {
            "api": "api_config.yaml",
        }

        for key, filename in config_files.items():
            config_path = self._config_dir / filename
            if config_path.exists():
                with open(config_path, encoding="utf-8") as f:
                    loaded_config = yaml.safe_load(f)

                if not isinstance(loaded_config, dict):
                    logger.warning(
                        f"Config file {filename} must contain a dictionary, "
                        f"got {type(loaded_config).__name__}. Using empty config."
                    )
                    self._configs[key] = {}
                else:
                    self._configs[key] = loaded_config
            else:
                logger.warning(f"Config file {filename} not found at {config_path}")
                self._configs[key] = {}

    def get(self, path: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation.

        Args:
            path: Dot-separated path to the config value (e.g., "api.timeouts.api_request")
            default: Default value to return if path is not found

        Returns:
            The configuration value or default if not found

        Example:
            >>> config.get("api.shippo.base_url")
            'https://api.goshippo.com'
            >>> config.get("api.polling.max_wait")
            70
        """
        parts = path.split(".")
        value = self._configs

        for part in parts:
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    def get_required(self, path: str) -> Any:
        """Get a configuration value that must be present.

        Raises:
            ConfigurationError: If the path is not found
        """
        value = self.get(path, _MISSING)
        if value is _MISSING:
            raise ConfigurationError("required value is missing", config_key=path)
        return value

    @property
    def api(self) -> dict[str, Any]:
        """Get API configuration."""
        # Safe cast: _load_all_configs validates all config values are dicts
        return cast(dict[str, Any], self._configs.get("api", {}))

    def reload(self):
        """Reload all configuration files."""
        self._configs.clear()
        self._load_all_configs()


# Create a singleton instance
config = Config()
