"""
Configuration checks run before the listener starts.
"""

import copy
import math
from collections.abc import Mapping
from numbers import Real
from typing import Any, Dict, Optional

from ..errors import InvalidConfigError, InvalidEndpointError, InvalidPortError


def _listener_section(candidate: Optional[Mapping]) -> Optional[Mapping]:
    if not isinstance(candidate, Mapping):
        return None
    listener = candidate.get("listener")
    return listener if isinstance(listener, Mapping) else None


def is_port_number(value: Any) -> bool:
    """Whether ``value`` counts as a numeric port."""
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def check_config(candidate: Optional[Mapping]) -> None:
    """
    Check the shape of the ``listener`` section.

    Raises:
        InvalidConfigError: If ``listener`` is present and not a mapping
        InvalidEndpointError: If ``listener.endpoint`` is present and not a string
        InvalidPortError: If ``listener.port`` is present and not a number
    """
    if isinstance(candidate, Mapping):
        section = candidate.get("listener")
        if section is not None and not isinstance(section, Mapping):
            raise InvalidConfigError(
                "Please provide listener as a mapping",
                details={"type": type(section).__name__},
            )

    listener = _listener_section(candidate)
    if listener is None:
        return

    endpoint = listener.get("endpoint")
    if endpoint is not None and not isinstance(endpoint, str):
        raise InvalidEndpointError(details={"endpoint": repr(endpoint)})

    port = listener.get("port")
    if port is not None and not is_port_number(port):
        raise InvalidPortError(details={"port": repr(port)})


def normalize_endpoint(endpoint: str) -> str:
    """Prefix ``endpoint`` with ``/`` unless it already starts with one."""
    return endpoint if endpoint.startswith("/") else "/" + endpoint


def normalize_config(candidate: Mapping) -> Dict[str, Any]:
    """Return a copy of ``candidate`` with a normalized endpoint."""
    result = copy.deepcopy(dict(candidate))
    listener = _listener_section(result)
    if listener is not None and isinstance(listener.get("endpoint"), str):
        result["listener"] = dict(listener, endpoint=normalize_endpoint(listener["endpoint"]))
    return result


def validate_config(candidate: Optional[Mapping]) -> None:
    """
    Validate ``candidate`` and normalize its endpoint in place.

    Args:
        candidate: Configuration to validate; ``listener.endpoint`` is
                   rewritten to start with ``/`` when needed
    """
    check_config(candidate)
    listener = _listener_section(candidate)
    if listener is not None and isinstance(listener.get("endpoint"), str):
        normalized = normalize_endpoint(listener["endpoint"])
        if normalized != listener["endpoint"]:
            listener["endpoint"] = normalized
