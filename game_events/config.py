"""
Configuration management for the game-events SDK.
Handles loading client settings from defaults, a JSON file and environment variables.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass

DEFAULT_BACKEND_URL = "https://analytics.whaleboxstudio.com/v1/events"
DEFAULT_CONFIG_FILE = "game_events_config.json"


@dataclass
class ClientConfig:
    """Client configuration settings."""
    api_key: str
    backend_url: str = DEFAULT_BACKEND_URL
    timeout: float = 10.0
    batch_size: int = 100


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    debug: bool = False


class ConfigManager:
    """Manages SDK configuration loading and access."""

    def __init__(self, config_file: str = DEFAULT_CONFIG_FILE):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        self._config = self._get_default_config()

        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    self._merge_config(json.load(f))
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep defaults if the file is invalid or vanished
                pass

        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "client": {
                "api_key": "",
                "backend_url": DEFAULT_BACKEND_URL,
                "timeout": 10.0,
                "batch_size": 100
            },
            "logging": {
                "debug": False
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config and isinstance(values, dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("GAME_EVENTS_API_KEY"):
            self._config["client"]["api_key"] = os.getenv("GAME_EVENTS_API_KEY")

        if os.getenv("GAME_EVENTS_BACKEND_URL"):
            self._config["client"]["backend_url"] = os.getenv("GAME_EVENTS_BACKEND_URL")

        if os.getenv("GAME_EVENTS_TIMEOUT"):
            self._config["client"]["timeout"] = float(os.getenv("GAME_EVENTS_TIMEOUT"))

        if os.getenv("GAME_EVENTS_BATCH_SIZE"):
            self._config["client"]["batch_size"] = int(os.getenv("GAME_EVENTS_BATCH_SIZE"))

        if os.getenv("GAME_EVENTS_DEBUG"):
            self._config["logging"]["debug"] = os.getenv("GAME_EVENTS_DEBUG").lower() == "true"

    def get_client_config(self) -> ClientConfig:
        """Get client configuration."""
        client_config = self._config["client"]
        return ClientConfig(
            api_key=client_config["api_key"],
            backend_url=client_config["backend_url"],
            timeout=client_config["timeout"],
            batch_size=client_config["batch_size"]
        )

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration."""
        return LoggingConfig(debug=self._config["logging"]["debug"])

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file and environment."""
        self._load_config()

    def save_config(self) -> None:
        """Save current configuration to file."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)


# Global configuration instance, created on first use
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the shared configuration manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_client_config() -> ClientConfig:
    """Get client configuration."""
    return get_config_manager().get_client_config()


def get_logging_config() -> LoggingConfig:
    """Get logging configuration."""
    return get_config_manager().get_logging_config()


def reload_config() -> None:
    """Reload configuration."""
    get_config_manager().reload()
