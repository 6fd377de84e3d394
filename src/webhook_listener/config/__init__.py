"""Configuration management."""

from .settings import (
    BasicAuthConfig,
    Config,
    ListenerConfig,
    create_default_config,
    default_config,
    load_config,
)
from .store import ConfigStore, merge
from .validation import check_config, normalize_config, validate_config

__all__ = [
    "Config",
    "ListenerConfig",
    "BasicAuthConfig",
    "ConfigStore",
    "merge",
    "default_config",
    "load_config",
    "create_default_config",
    "check_config",
    "normalize_config",
    "validate_config",
]
