"""
Pytest configuration and fixtures for webhook listener tests.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

import webhook_listener
from webhook_listener.listener import WebhookListener


class RecordingLogger:
    """Logger-like object capturing lifecycle messages."""

    def __init__(self):
        self.records = []

    def _record(self, level, msg, *args):
        self.records.append((level, msg))

    def info(self, msg, *args):
        self._record("info", msg, *args)

    def debug(self, msg, *args):
        self._record("debug", msg, *args)

    def error(self, msg, *args):
        self._record("error", msg, *args)

    def warn(self, msg, *args):
        self._record("warn", msg, *args)

    def messages(self, level):
        return [msg for lvl, msg in self.records if lvl == level]


@pytest.fixture(autouse=True)
def clear_port_env(monkeypatch):
    """Keep a PORT variable from the environment out of the tests."""
    monkeypatch.delenv("PORT", raising=False)


@pytest.fixture
def server_handle():
    """Opaque stand-in for a running server."""
    return MagicMock(name="server_handle", spec=["stop"])


@pytest.fixture
def listener_factory(server_handle):
    """Mock listener factory whose endpoint binds immediately."""
    factory = MagicMock(name="listener_factory")
    factory.return_value.listen = AsyncMock(return_value=server_handle)
    return factory


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def listener(listener_factory):
    """Listener wired to the mock factory."""
    return WebhookListener(listener_factory=listener_factory)


@pytest.fixture
def default_listener(monkeypatch, listener_factory):
    """Fresh process-wide listener behind the module-level API."""
    instance = WebhookListener(listener_factory=listener_factory)
    monkeypatch.setattr(webhook_listener, "_default_listener", instance)
    return instance
