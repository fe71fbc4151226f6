"""
Configuration Loader for JobSift
Loads and validates configuration from config.yaml

Secrets (the RapidAPI key) are read from the environment, never from YAML.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from constants import (
    COMPANY_OPTIONS_LIMIT,
    CONFIG_PATH,
    DEFAULT_QUERY,
    JSEARCH_HOST,
    JSEARCH_NUM_PAGES,
    JSEARCH_TIMEOUT_SECONDS,
)

API_KEY_ENV_VAR = "RAPIDAPI_KEY"


class Config:
    """Configuration manager for JobSift."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration from YAML file.

        Args:
            config_path: Path to config.yaml (defaults to ./config.yaml)
        """
        if config_path is None:
            config_path = CONFIG_PATH

        self.config_path = Path(config_path)
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {self.config_path}\n"
                f"Copy config.example.yaml to config.yaml and adjust it."
            )

        with open(self.config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        self._validate_config(config)

        return config

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """Validate that required configuration fields are present."""
        if not isinstance(config, dict):
            raise ValueError("Config file must contain a mapping")

        required_sections = ['api']
        for section in required_sections:
            if not isinstance(config.get(section), dict):
                raise ValueError(f"Missing required config section: {section}")

        required_api_fields = ['host']
        for field in required_api_fields:
            if not config['api'].get(field):
                raise ValueError(f"Missing required api field: {field}")

        num_pages = config['api'].get('num_pages', JSEARCH_NUM_PAGES)
        if not isinstance(num_pages, int) or num_pages < 1:
            raise ValueError("api.num_pages must be a positive integer")

    # ===== SEARCH API =====

    @property
    def api_host(self) -> str:
        """Get the JSearch RapidAPI host."""
        return self._config['api']['host']

    @property
    def api_base_url(self) -> str:
        """Get the API base URL (defaults to https://<host>)."""
        return self._config['api'].get('base_url') or f"https://{self.api_host}"

    @property
    def api_key(self) -> str:
        """Get the RapidAPI key from the environment."""
        return os.getenv(API_KEY_ENV_VAR, '')

    @property
    def num_pages(self) -> int:
        """Get number of API pages fetched per request."""
        return self._config['api'].get('num_pages', JSEARCH_NUM_PAGES)

    @property
    def timeout_seconds(self) -> float:
        """Get HTTP timeout in seconds."""
        return float(self._config['api'].get('timeout_seconds', JSEARCH_TIMEOUT_SECONDS))

    @property
    def max_retries(self) -> int:
        """Get number of retries for transient API failures."""
        return self._config['api'].get('max_retries', 3)

    @property
    def calls_per_minute(self) -> int:
        """Get API rate limit."""
        return self._config['api'].get('calls_per_minute', 30)

    @property
    def default_query(self) -> str:
        """Get the search query used when none is given."""
        return self._config['api'].get('default_query', DEFAULT_QUERY)

    # ===== FILTERS =====

    @property
    def company_options_limit(self) -> int:
        """Get maximum number of company filter options."""
        return self._config.get('filters', {}).get('company_options_limit', COMPANY_OPTIONS_LIMIT)

    # ===== UTILITY METHODS =====

    def reload(self) -> None:
        """Reload configuration from file."""
        self._config = self._load_config()

    def to_dict(self) -> Dict[str, Any]:
        """
        Return a copy of the raw configuration dictionary.

        Returns:
            Dict containing all configuration values
        """
        return dict(self._config)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation key.

        Example: config.get('api.host')
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value


# Global config instance
_config: Optional[Config] = None


def get_config(config_path: Optional[Path] = None) -> Config:
    """
    Get global configuration instance.
    Creates instance on first call (or when a path is given), then returns the cached instance.
    """
    global _config
    if _config is None or config_path is not None:
        _config = Config(config_path)
    return _config
