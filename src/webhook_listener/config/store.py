"""Active configuration storage with deep-merge semantics."""

import copy
import threading
from collections.abc import Mapping
from typing import Any, Dict, Optional

from ..errors import InvalidConfigError


def merge(base: Mapping, overrides: Mapping) -> Dict[str, Any]:
    """
    Deep merge two mappings without mutating either.

    Nested mappings are merged recursively; lists and scalars from
    ``overrides`` replace the value in ``base``.

    Args:
        base: Base mapping
        overrides: Override mapping

    Returns:
        Merged dictionary
    """
    result = {key: copy.deepcopy(value) for key, value in base.items()}

    for key, value in overrides.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)

    return result


class ConfigStore:
    """
    Holds the active configuration.

    The active value always starts from the built-in defaults and only
    changes through deep merges or a reset.
    """

    def __init__(self, initial: Optional[Mapping] = None):
        self._lock = threading.RLock()
        self._config: Dict[str, Any] = {}
        self.init_config()
        if initial is not None:
            self.set_config(initial)

    def set_config(self, overrides: Optional[Mapping]) -> None:
        """Merge ``overrides`` into the active configuration."""
        if overrides is None:
            return
        if not isinstance(overrides, Mapping):
            raise InvalidConfigError(
                "Configuration overrides must be a mapping",
                details={"type": type(overrides).__name__},
            )
        with self._lock:
            merged = merge(self._config, overrides)
            if not isinstance(merged.get("listener"), Mapping):
                raise InvalidConfigError(
                    "Please provide listener as a mapping",
                    details={"type": type(merged.get("listener")).__name__},
                )
            self._config = merged

    def get_config(self) -> Dict[str, Any]:
        """Return the live active configuration (not a copy)."""
        return self._config

    def init_config(self) -> None:
        """Reset the active configuration to the built-in defaults."""
        from .settings import default_config

        with self._lock:
            self._config = default_config()
