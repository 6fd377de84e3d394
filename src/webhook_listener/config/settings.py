"""
Configuration defaults and loading for the webhook listener.

Defines the built-in default configuration and handles loading
overrides from JSON files and environment variables.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .store import merge


class BasicAuthConfig(BaseModel):
    """HTTP Basic credentials required by the listener."""

    user: str = Field(description="Basic auth user name")
    password: str = Field(description="Basic auth password")


class ListenerConfig(BaseModel):
    """Configuration for the HTTP listener."""

    port: int = Field(default=5000, description="TCP port to bind")
    endpoint: str = Field(default="/notify", description="URL path the webhook is served on")
    host: str = Field(default="0.0.0.0", description="Interface to bind")
    basic_auth: Optional[BasicAuthConfig] = Field(
        default=None, description="Require HTTP Basic credentials when set"
    )
    max_body_size: int = Field(default=1048576, description="Maximum request body in bytes")

    model_config = ConfigDict(extra="allow")


class Config(BaseModel):
    """Main configuration object."""

    listener: ListenerConfig = Field(default_factory=ListenerConfig)

    model_config = ConfigDict(extra="allow")


def default_config() -> Dict[str, Any]:
    """Return a fresh, fully populated copy of the built-in defaults."""
    return Config().model_dump()


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration overrides from file and environment variables.

    Args:
        config_path: Path to configuration file. If None, looks for
                    WEBHOOK_LISTENER_CONFIG_PATH environment variable.

    Returns:
        Override mapping to pass to ``set_config``/``start``

    Raises:
        FileNotFoundError: If config file specified but not found
        ValueError: If the file does not hold a JSON object
    """
    if config_path is None:
        env_path = os.getenv("WEBHOOK_LISTENER_CONFIG_PATH")
        if env_path:
            config_path = Path(env_path)

    config_data: Dict[str, Any] = {}
    if config_path and config_path.exists():
        with open(config_path, "r") as f:
            config_data = json.load(f)
        if not isinstance(config_data, dict):
            raise ValueError(f"Configuration file must contain a JSON object: {config_path}")
    elif config_path:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    env_overrides: Dict[str, Any] = {}

    log_level = os.getenv("WEBHOOK_LISTENER_LOG_LEVEL")
    if log_level:
        env_overrides["log_level"] = log_level.upper()

    if env_overrides:
        config_data = merge(config_data, env_overrides)

    return config_data


def create_default_config(config_path: Path) -> None:
    """
    Create a default configuration file.

    Args:
        config_path: Path where to create the configuration file
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        json.dump(default_config(), f, indent=2)
