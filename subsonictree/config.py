#!/usr/bin/env python3

from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging


class ConfigManager:
    """Centralized configuration manager for SubsonicTree."""

    DEFAULT_CONFIG_DIR = Path.home() / ".config" / "subsonictree"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.json"
    DEFAULT_CLIENT_NAME = "subsonictree"
    DEFAULT_API_VERSION = "1.16.1"
    DEFAULT_TIMEOUT = 30  # seconds

    def __init__(
        self,
        config_file: Optional[str] = None,
        server_url: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        linked_categories: Optional[Dict[str, bool]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Load the config file, then apply any explicit overrides."""
        self.logger = logger or logging.getLogger(__name__)
        self.config_file = (
            Path(config_file) if config_file else self.DEFAULT_CONFIG_FILE
        )

        data = self._load(self.config_file)

        self.server_url: Optional[str] = server_url or data.get("server_url")
        self.username: Optional[str] = username or data.get("username")
        self.password: Optional[str] = password or data.get("password")
        self.client_name: str = data.get("client_name", self.DEFAULT_CLIENT_NAME)
        self.api_version: str = data.get("api_version", self.DEFAULT_API_VERSION)
        self.timeout: float = float(data.get("timeout", self.DEFAULT_TIMEOUT))

        self.linked_categories: Dict[str, bool] = dict(
            data.get("linked_categories") or {}
        )
        if linked_categories:
            self.linked_categories.update(linked_categories)

    def _load(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            self.logger.debug(f"No config file at {path}, using defaults")
            return {}

        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a JSON object")
        self.logger.debug(f"Loaded config from {path}")
        return data

    def validate(self) -> None:
        """Check that enough settings are present to reach a server.

        Raises:
            ValueError: If the server url or credentials are missing or invalid.
        """
        url = (self.server_url or "").strip()
        if not url.startswith(("http://", "https://")):
            raise ValueError("server_url must be a valid HTTP/HTTPS URL")
        if not self.username:
            raise ValueError("username is required")
        if not self.password:
            raise ValueError("password is required")

    def save(self) -> None:
        """Write the current settings back to the config file."""
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "server_url": self.server_url,
            "username": self.username,
            "password": self.password,
            "client_name": self.client_name,
            "api_version": self.api_version,
            "timeout": self.timeout,
            "linked_categories": self.linked_categories,
        }
        with open(self.config_file, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2)
        self.logger.info(f"Saved config to {self.config_file}")
