"""
Unit tests for configuration storage, validation and loading.
"""

import json

import pytest

from webhook_listener.config.settings import create_default_config, default_config, load_config
from webhook_listener.config.store import ConfigStore, merge
from webhook_listener.config.validation import check_config, normalize_config, validate_config
from webhook_listener.errors import InvalidConfigError, InvalidEndpointError, InvalidPortError


class TestMerge:
    """Test the deep merge function."""

    def test_nested_mappings_are_merged(self):
        base = {"listener": {"port": 5000, "endpoint": "/notify"}}

        result = merge(base, {"listener": {"port": 9999}})

        assert result == {"listener": {"port": 9999, "endpoint": "/notify"}}

    def test_lists_and_scalars_replace(self):
        base = {"tags": ["a", "b"], "listener": {"port": 5000}}

        result = merge(base, {"tags": ["c"], "listener": 7})

        assert result == {"tags": ["c"], "listener": 7}

    def test_inputs_are_not_mutated(self):
        base = {"listener": {"port": 5000}}
        overrides = {"listener": {"extra": {"deep": [1]}}}

        result = merge(base, overrides)
        result["listener"]["extra"]["deep"].append(2)

        assert base == {"listener": {"port": 5000}}
        assert overrides == {"listener": {"extra": {"deep": [1]}}}


class TestConfigStore:
    """Test the active configuration store."""

    def test_starts_from_defaults(self):
        store = ConfigStore()
        assert store.get_config() == default_config()

    def test_set_config_merges(self):
        store = ConfigStore()

        store.set_config({"listener": {"port": 9999}})

        config = store.get_config()
        defaults = default_config()
        assert config["listener"]["port"] == 9999
        assert config["listener"]["endpoint"] == defaults["listener"]["endpoint"]
        assert config["listener"]["host"] == defaults["listener"]["host"]

    def test_set_config_is_idempotent(self):
        store = ConfigStore()
        overrides = {"listener": {"port": 9999}, "custom": {"flag": True}}

        store.set_config(overrides)
        once = json.dumps(store.get_config(), sort_keys=True)
        store.set_config(overrides)

        assert json.dumps(store.get_config(), sort_keys=True) == once

    def test_set_config_none_is_noop(self):
        store = ConfigStore()
        store.set_config(None)
        assert store.get_config() == default_config()

    def test_set_config_rejects_non_mapping(self):
        store = ConfigStore()

        with pytest.raises(InvalidConfigError) as exc_info:
            store.set_config(["listener"])

        assert exc_info.value.code == "invalid_config"
        assert isinstance(exc_info.value, TypeError)

    @pytest.mark.parametrize("section", [7, "listener", [5000]])
    def test_set_config_rejects_scalar_listener(self, section):
        store = ConfigStore()

        with pytest.raises(InvalidConfigError):
            store.set_config({"listener": section})

        assert store.get_config() == default_config()

    def test_set_config_rejects_null_listener(self):
        store = ConfigStore()

        with pytest.raises(InvalidConfigError):
            store.set_config({"listener": None})

        assert store.get_config()["listener"]["port"] == 5000

    def test_get_config_is_live(self):
        store = ConfigStore()
        config = store.get_config()

        config["listener"]["port"] = 1234

        assert store.get_config()["listener"]["port"] == 1234

    def test_init_config_restores_defaults(self):
        store = ConfigStore()
        store.set_config({"listener": {"port": 9999, "endpoint": "/other"}, "extra": 1})

        store.init_config()

        assert store.get_config() == default_config()

    def test_defaults_are_not_shared(self):
        first = ConfigStore()
        second = ConfigStore()

        first.get_config()["listener"]["port"] = 1

        assert second.get_config()["listener"]["port"] == 5000


class TestValidation:
    """Test configuration validation."""

    def test_endpoint_is_prefixed_in_place(self):
        candidate = {"listener": {"endpoint": "hook"}}

        validate_config(candidate)

        assert candidate["listener"]["endpoint"] == "/hook"

    def test_endpoint_with_slash_unchanged(self):
        candidate = {"listener": {"endpoint": "/hook"}}

        validate_config(candidate)

        assert candidate == {"listener": {"endpoint": "/hook"}}

    @pytest.mark.parametrize("endpoint", [42, ["/hook"], {"path": "/hook"}])
    def test_non_string_endpoint_rejected(self, endpoint):
        with pytest.raises(InvalidEndpointError) as exc_info:
            validate_config({"listener": {"endpoint": endpoint}})

        assert isinstance(exc_info.value, TypeError)
        assert exc_info.value.code == "invalid_endpoint"

    @pytest.mark.parametrize("port", ["abc", "3000", True, [3000], float("nan"), float("inf"), 1j])
    def test_non_numeric_port_rejected(self, port):
        with pytest.raises(InvalidPortError) as exc_info:
            validate_config({"listener": {"port": port}})

        assert isinstance(exc_info.value, TypeError)

    @pytest.mark.parametrize("candidate", [None, {}, {"other": {"port": "abc"}}])
    def test_missing_listener_is_noop(self, candidate):
        validate_config(candidate)

    @pytest.mark.parametrize("section", [7, "hook", ["/hook"]])
    def test_non_mapping_listener_rejected(self, section):
        with pytest.raises(InvalidConfigError) as exc_info:
            validate_config({"listener": section})

        assert exc_info.value.code == "invalid_config"
        assert isinstance(exc_info.value, TypeError)

    def test_null_listener_is_noop(self):
        validate_config({"listener": None})

    def test_unrelated_fields_ignored(self):
        candidate = {"listener": {"port": 3000, "host": 42, "whatever": object()}}
        validate_config(candidate)

    def test_float_port_accepted(self):
        check_config({"listener": {"port": 3000.0}})

    def test_normalize_config_is_pure(self):
        candidate = {"listener": {"endpoint": "hook", "port": 3000}}

        result = normalize_config(candidate)

        assert result["listener"]["endpoint"] == "/hook"
        assert candidate["listener"]["endpoint"] == "hook"

    def test_check_config_does_not_normalize(self):
        candidate = {"listener": {"endpoint": "hook"}}

        check_config(candidate)

        assert candidate["listener"]["endpoint"] == "hook"


class TestLoadConfig:
    """Test configuration file loading."""

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"listener": {"port": 8080}}))

        assert load_config(path) == {"listener": {"port": 8080}}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.json")

    def test_non_object_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")

        with pytest.raises(ValueError):
            load_config(path)

    def test_env_path_and_log_level(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"listener": {"endpoint": "/env"}}))
        monkeypatch.setenv("WEBHOOK_LISTENER_CONFIG_PATH", str(path))
        monkeypatch.setenv("WEBHOOK_LISTENER_LOG_LEVEL", "debug")

        config = load_config()

        assert config == {"listener": {"endpoint": "/env"}, "log_level": "DEBUG"}

    def test_no_sources(self, monkeypatch):
        monkeypatch.delenv("WEBHOOK_LISTENER_CONFIG_PATH", raising=False)
        monkeypatch.delenv("WEBHOOK_LISTENER_LOG_LEVEL", raising=False)

        assert load_config() == {}

    def test_create_default_config(self, tmp_path):
        path = tmp_path / "nested" / "config.json"

        create_default_config(path)

        assert json.loads(path.read_text()) == default_config()
