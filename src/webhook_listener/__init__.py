"""
Webhook Listener

Registers a host callback for inbound webhook requests and manages the
HTTP listener that serves them.
"""

__version__ = "1.0.0"
__license__ = "MIT"

from typing import Any, Dict, Mapping, Optional

from .config.settings import Config, ListenerConfig, default_config, load_config
from .errors import (
    BindError,
    InvalidConfigError,
    InvalidConsumerError,
    InvalidEndpointError,
    InvalidLoggerError,
    InvalidPortError,
    ListenerError,
    MissingConsumerError,
)
from .listener import WebhookListener
from .registry import Consumer
from .server import ListenerServer, create_listener

_default_listener = WebhookListener()


def register(consumer: Consumer) -> bool:
    """Register the function called when the webhook is triggered."""
    return _default_listener.register(consumer)


async def start(
    overrides: Optional[Mapping[str, Any]] = None, custom_logger: Optional[Any] = None
) -> ListenerServer:
    """Start the process-wide webhook listener. See ``WebhookListener.start``."""
    return await _default_listener.start(overrides, custom_logger)


def set_config(overrides: Optional[Mapping[str, Any]]) -> None:
    _default_listener.set_config(overrides)


def get_config() -> Dict[str, Any]:
    return _default_listener.get_config()


def init_config() -> None:
    _default_listener.init_config()


def validate_config(candidate: Optional[Mapping[str, Any]]) -> None:
    _default_listener.validate_config(candidate)


def set_logger(custom_logger: Any) -> None:
    _default_listener.set_logger(custom_logger)


__all__ = [
    "WebhookListener",
    "ListenerServer",
    "create_listener",
    "Config",
    "ListenerConfig",
    "default_config",
    "load_config",
    "register",
    "start",
    "set_config",
    "get_config",
    "init_config",
    "validate_config",
    "set_logger",
    "ListenerError",
    "InvalidConsumerError",
    "InvalidEndpointError",
    "InvalidPortError",
    "InvalidConfigError",
    "InvalidLoggerError",
    "MissingConsumerError",
    "BindError",
    "__version__",
    "__license__",
]
