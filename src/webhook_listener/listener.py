"""
Webhook listener lifecycle.

Coordinates configuration, consumer registration and the listener
factory to bring up an HTTP endpoint that notifies the host application.
"""

import os
import threading
from typing import Any, Callable, Dict, Mapping, Optional

import structlog

from .config.store import ConfigStore
from .config.validation import check_config, normalize_config, validate_config
from .errors import InvalidLoggerError, InvalidPortError, MissingConsumerError
from .registry import Consumer, NotificationRegistry
from .server import ListenerServer, create_listener
from .utils.logging import LOGGER_METHODS, is_logger_like

logger = structlog.get_logger(__name__)

PORT_ENV_VAR = "PORT"

ListenerFactory = Callable[[Dict[str, Any], Consumer], Any]


def resolve_port(config: Mapping[str, Any], environ: Optional[Mapping[str, str]] = None) -> Any:
    """
    Determine the port to bind.

    A non-empty ``PORT`` environment variable takes precedence over
    ``listener.port``.

    Raises:
        InvalidPortError: If ``PORT`` is set but not an integer
    """
    environ = os.environ if environ is None else environ
    env_port = environ.get(PORT_ENV_VAR)
    if env_port:
        try:
            return int(env_port)
        except ValueError:
            raise InvalidPortError(
                f"Please provide valid {PORT_ENV_VAR} environment variable",
                details={"port": env_port},
            )
    return (config.get("listener") or {}).get("port")


class WebhookListener:
    """
    Owns the configuration, consumer and logger of one webhook listener.

    Several instances may coexist in a process; each ``start`` call
    creates an independent server.
    """

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        listener_factory: Optional[ListenerFactory] = None,
        custom_logger: Optional[Any] = None,
    ):
        """
        Initialize the listener.

        Args:
            config: Overrides applied on top of the built-in defaults
            listener_factory: Callable building the HTTP endpoint
                              (``create_listener`` if None)
            custom_logger: Logger exposing info/debug/error/warn
        """
        self.config_store = ConfigStore(config)
        self.registry = NotificationRegistry()
        self.listener_factory = listener_factory or create_listener
        self._lock = threading.RLock()
        self.logger = structlog.get_logger("webhook_listener")
        if custom_logger is not None:
            self.set_logger(custom_logger)

    def register(self, consumer: Consumer) -> bool:
        """Register the function called when the webhook is triggered."""
        return self.registry.register(consumer)

    def set_logger(self, custom_logger: Any) -> None:
        """
        Replace the logger used for lifecycle messages.

        Raises:
            InvalidLoggerError: If the logger lacks info/debug/error/warn
        """
        if not is_logger_like(custom_logger):
            raise InvalidLoggerError(
                f"Logger must provide {', '.join(LOGGER_METHODS)} methods",
                details={"type": type(custom_logger).__name__},
            )
        with self._lock:
            self.logger = custom_logger

    def set_config(self, overrides: Optional[Mapping[str, Any]]) -> None:
        self.config_store.set_config(overrides)

    def get_config(self) -> Dict[str, Any]:
        return self.config_store.get_config()

    def init_config(self) -> None:
        self.config_store.init_config()

    @staticmethod
    def validate_config(candidate: Optional[Mapping[str, Any]]) -> None:
        validate_config(candidate)

    def _prepare(self, overrides: Optional[Mapping[str, Any]], custom_logger: Optional[Any]):
        """Run the synchronous part of ``start`` and return (config, consumer, port)."""
        with self._lock:
            if custom_logger is not None:
                self.set_logger(custom_logger)

            logger.debug("start called", overrides=overrides)
            self.config_store.set_config(overrides)
            check_config(self.config_store.get_config())
            self.config_store.set_config(normalize_config(self.config_store.get_config()))

            consumer = self.registry.consumer
            if consumer is None:
                error = MissingConsumerError()
                self.logger.error(error.message)
                raise error

            config = self.config_store.get_config()
            logger.debug("starting with config", config=config)
            return config, consumer, resolve_port(config)

    async def start(
        self,
        overrides: Optional[Mapping[str, Any]] = None,
        custom_logger: Optional[Any] = None,
    ) -> ListenerServer:
        """
        Start the webhook listener.

        Args:
            overrides: Configuration merged over the active configuration
            custom_logger: Logger to install before starting

        Returns:
            Handle of the running server

        Raises:
            InvalidEndpointError: If ``listener.endpoint`` is not a string
            InvalidPortError: If the port is not numeric
            MissingConsumerError: If no consumer is registered
            BindError: If the port cannot be bound
        """
        config, consumer, port = self._prepare(overrides, custom_logger)

        server = await self.listener_factory(config, consumer).listen(port)

        self.logger.info(f"Server running at port {getattr(server, 'bound_port', port)}")
        return server
