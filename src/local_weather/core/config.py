"""
Configuration module for local weather resolution.

Loads configuration from a JSON file and environment variables.
"""

import json
import os
from typing import Dict, Any, Optional
from pathlib import Path

from . import constants


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'
        """
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = {}
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        with open(config_path, "r", encoding="utf-8") as f:
            self.config = json.load(f)

    def _set(self, section: str, key: str, value: Any) -> None:
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        # HTTP client
        if os.getenv("API_TIMEOUT"):
            self._set("api", "timeout", float(os.getenv("API_TIMEOUT")))

        if os.getenv("API_USER_AGENT"):
            self._set("api", "user_agent", os.getenv("API_USER_AGENT"))

        # Provider endpoints
        if os.getenv("GEOCODING_BASE_URL"):
            self._set("geocoding", "base_url", os.getenv("GEOCODING_BASE_URL"))

        if os.getenv("PLACES_BASE_URL"):
            self._set("places", "base_url", os.getenv("PLACES_BASE_URL"))

        if os.getenv("WEATHER_BASE_URL"):
            self._set("weather", "base_url", os.getenv("WEATHER_BASE_URL"))

        # Credentials
        if os.getenv("PLACES_APP_ID"):
            self._set("places", "app_id", os.getenv("PLACES_APP_ID"))

        # Preferences
        if os.getenv("WEATHER_UNITS"):
            self._set("preferences", constants.PREF_WEATHER_UNITS, os.getenv("WEATHER_UNITS"))

        # Environment
        if os.getenv("ENVIRONMENT"):
            self.config["environment"] = os.getenv("ENVIRONMENT")

    def _validate_config(self) -> None:
        """Validate that required configuration keys are present."""
        required_config = {
            "api": ["timeout", "max_retries"],
            "places": ["app_id"],
        }

        missing_sections = [
            section for section in required_config.keys() if section not in self.config
        ]
        if missing_sections:
            raise ValueError(
                f"Missing required configuration sections: {', '.join(missing_sections)}"
            )

        missing_keys = []
        for section, keys in required_config.items():
            for key in keys:
                if key not in self.config[section]:
                    missing_keys.append(f"{section}.{key}")

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}"
            )

        # A request without a finite timeout can block a refresh cycle forever
        timeout = self.config["api"]["timeout"]
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ValueError(f"api.timeout must be a positive number, got {timeout!r}")

        count = self.config["places"].get("count", constants.DEFAULT_PLACES_COUNT)
        if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
            raise ValueError(f"places.count must be a positive integer, got {count!r}")

        if not self.config["places"]["app_id"]:
            raise ValueError("places.app_id must not be empty")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'api.timeout')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def api_timeout(self) -> float:
        """Get request timeout in seconds."""
        return self.get("api.timeout", constants.DEFAULT_TIMEOUT)

    @property
    def api_max_retries(self) -> int:
        """Get maximum retry attempts per request."""
        return self.get("api.max_retries", constants.DEFAULT_MAX_RETRIES)

    @property
    def user_agent(self) -> str:
        """Get the client identification header value."""
        return self.get("api.user_agent", constants.DEFAULT_USER_AGENT)

    @property
    def geocoding_base_url(self) -> str:
        """Get reverse geocoding endpoint."""
        return self.get("geocoding.base_url", constants.DEFAULT_GEOCODING_URL)

    @property
    def places_base_url(self) -> str:
        """Get place search endpoint."""
        return self.get("places.base_url", constants.DEFAULT_PLACES_URL)

    @property
    def places_app_id(self) -> str:
        """Get place search credential."""
        return self.get("places.app_id", "")

    @property
    def places_count(self) -> int:
        """Get maximum number of candidate places requested."""
        return self.get("places.count", constants.DEFAULT_PLACES_COUNT)

    @property
    def weather_base_url(self) -> str:
        """Get weather feed endpoint."""
        return self.get("weather.base_url", constants.DEFAULT_WEATHER_URL)

    @property
    def preferences(self) -> Dict[str, Any]:
        """Get the stored user preferences (units, click target)."""
        return self.get("preferences", {})

    def __repr__(self) -> str:
        return f"Config(file={self.config_file}, env={self.get('environment')})"
