"""Configuration Management

Loads configuration from appsettings.json, with credentials
overridable through environment variables (and a .env file).
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from ..exceptions import ConfigurationError


class Config:
    """Configuration manager for the application."""

    DEFAULT_CONFIG_PATH = Path("appsettings.json")

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration.

        Args:
            config_path: Optional path to the settings file.

        Raises:
            ConfigurationError: If the file is missing or not valid JSON.
        """
        # Load environment variables from .env file
        load_dotenv()

        self.config_path = Path(
            config_path
            or os.environ.get("IMAGE_SERVICE_CONFIG", self.DEFAULT_CONFIG_PATH)
        )

        self._config = self._load_config()

    def _load_config(self) -> dict:
        """Load configuration from the JSON settings file.

        Returns:
            Configuration dictionary.
        """
        if not self.config_path.is_file():
            raise ConfigurationError(f"Settings file not found: {self.config_path}")

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Settings file {self.config_path} is not valid JSON: {e}"
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Settings file {self.config_path} must contain a JSON object"
            )
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "Output.ThumbnailFolder").
            default: Default value if key not found.

        Returns:
            Configuration value.
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def _require(self, env_name: str, key: str) -> str:
        value = os.environ.get(env_name) or self.get(key)
        if not value:
            raise ConfigurationError(
                f"'{key}' is missing from {self.config_path} "
                f"and {env_name} is not set"
            )
        return value

    @property
    def endpoint(self) -> str:
        """Get the Cognitive Services endpoint URL.

        Returns:
            Endpoint URL.
        """
        return self._require("COGNITIVE_SERVICES_ENDPOINT", "CognitiveServicesEndpoint")

    @property
    def key(self) -> str:
        """Get the Cognitive Services API key.

        Returns:
            API key.
        """
        return self._require("COGNITIVE_SERVICE_KEY", "CognitiveServiceKey")

    @property
    def bounding_box_folder(self) -> Path:
        """Folder that receives the annotated image."""
        return Path(self.get("Output.BoundingBoxFolder", "BoundingBoxes"))

    @property
    def thumbnail_folder(self) -> Path:
        """Folder that receives generated thumbnails."""
        return Path(self.get("Output.ThumbnailFolder", "Thumbnails"))

    @property
    def download_folder(self) -> Path:
        """Folder that receives images downloaded from a URL."""
        return Path(self.get("Output.DownloadFolder", "."))

    @property
    def log_level(self) -> str:
        """Get logging level.

        Returns:
            Log level string.
        """
        return self.get("Logging.Level", "WARNING")

    @property
    def log_file(self) -> Optional[Path]:
        """Get log file path, or None when file logging is disabled."""
        path = self.get("Logging.File", "logs/image_service.log")
        return Path(path) if path else None
