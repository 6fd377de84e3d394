"""Notification registry holding the current webhook consumer."""

import threading
from typing import Any, Awaitable, Callable, Optional, Union

import structlog

from .errors import InvalidConsumerError

logger = structlog.get_logger(__name__)

Consumer = Callable[..., Union[Any, Awaitable[Any]]]


class NotificationRegistry:
    """Stores at most one consumer; the latest registration wins."""

    def __init__(self):
        self._consumer: Optional[Consumer] = None
        self._lock = threading.Lock()

    @property
    def consumer(self) -> Optional[Consumer]:
        return self._consumer

    def register(self, consumer: Consumer) -> bool:
        """
        Register the function called when a webhook is triggered.

        Args:
            consumer: Sync or async callable receiving the webhook payload

        Returns:
            True once the consumer is stored

        Raises:
            InvalidConsumerError: If ``consumer`` is not callable
        """
        if not callable(consumer):
            raise InvalidConsumerError(details={"type": type(consumer).__name__})

        with self._lock:
            logger.debug(
                "Registering consumer",
                consumer=getattr(consumer, "__qualname__", repr(consumer)),
                replaces=self._consumer is not None,
            )
            self._consumer = consumer
        return True
