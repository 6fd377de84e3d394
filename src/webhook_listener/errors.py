"""
Exception hierarchy for the webhook listener.

Every error carries a machine-readable ``code`` and optional ``details``
so hosts can branch on failures without parsing messages.
"""

from typing import Any, Dict, Optional


class ListenerError(Exception):
    """Base exception for webhook listener errors."""

    def __init__(
        self, message: str, code: str = "listener_error", details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class InvalidConsumerError(ListenerError, TypeError):
    """Raised when a non-callable value is registered as consumer."""

    def __init__(self, message: str = "Provide function to notify consumer.", details=None):
        super().__init__(message, code="invalid_consumer", details=details)


class InvalidEndpointError(ListenerError, TypeError):
    """Raised when ``listener.endpoint`` is not a string."""

    def __init__(self, message: str = "Please provide valid listener.endpoint", details=None):
        super().__init__(message, code="invalid_endpoint", details=details)


class InvalidPortError(ListenerError, TypeError):
    """Raised when ``listener.port`` (or ``PORT``) is not numeric."""

    def __init__(self, message: str = "Please provide valid listener.port", details=None):
        super().__init__(message, code="invalid_port", details=details)


class InvalidConfigError(ListenerError, TypeError):
    """Raised when configuration overrides are not a mapping."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="invalid_config", details=details)


class InvalidLoggerError(ListenerError, TypeError):
    """Raised when a custom logger lacks the required methods."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="invalid_logger", details=details)


class MissingConsumerError(ListenerError):
    """Raised by ``start`` when no consumer has been registered."""

    def __init__(
        self,
        message: str = "Aborting start of webhook listener, since no function is provided to notify.",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code="missing_consumer", details=details)


class BindError(ListenerError):
    """Raised when the HTTP listener cannot bind its socket."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="bind_error", details=details)
