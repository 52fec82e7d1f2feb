#!/usr/bin/env python3
"""Tests pour le module config (settings, URLs, timeouts)."""

import os

import pytest
from unittest.mock import Mock, patch

from config.settings_loader import get_settings, load_yaml_parameters, safe_bool, safe_int
from config.timeouts import TimeoutConfig
from config.urls import URLConfig

CLEAN_ENV = {k: v for k, v in os.environ.items() if not k.startswith(("BITFINEX_", "WS_", "SINK_", "BOOK_"))}


class TestGetSettings:
    @patch("config.settings_loader.load_yaml_parameters", return_value={})
    def test_defaults(self, _mock_yaml):
        with patch.dict(os.environ, CLEAN_ENV, clear=True):
            settings = get_settings()

        assert settings["api_key"] is None
        assert settings["api_secret"] is None
        assert settings["ws_url"] == URLConfig.DEFAULT_WS_URL
        assert settings["tls_skip_verify"] is False
        assert settings["sink_maxsize"] == 0
        assert settings["book_length"] == 25

    @patch("config.settings_loader.load_yaml_parameters", return_value={})
    def test_environment(self, _mock_yaml, mock_env_vars):
        settings = get_settings()

        assert settings["api_key"] == "test_api_key"
        assert settings["api_secret"] == "test_api_secret"
        assert settings["log_level"] == "INFO"

    @patch("config.settings_loader.load_yaml_parameters")
    def test_environment_overrides_yaml(self, mock_yaml):
        mock_yaml.return_value = {"ws_url": "wss://yaml.test/ws", "sink_maxsize": 50, "tls_skip_verify": True}
        env = dict(CLEAN_ENV, SINK_MAXSIZE="10")
        with patch.dict(os.environ, env, clear=True):
            settings = get_settings()

        assert settings["ws_url"] == "wss://yaml.test/ws"
        assert settings["sink_maxsize"] == 10
        assert settings["tls_skip_verify"] is True

    def test_missing_yaml_file(self, tmp_path):
        assert load_yaml_parameters(str(tmp_path / "absent.yaml")) == {}

    def test_yaml_section(self, tmp_path):
        path = tmp_path / "parameters.yaml"
        path.write_text("bitfinex_ws:\n  book_length: 100\nautre: 1\n", encoding="utf-8")
        assert load_yaml_parameters(str(path)) == {"book_length": 100}


@pytest.mark.parametrize("value,expected", [("1", True), ("true", True), ("off", False), ("", None), (None, None)])
def test_safe_bool(value, expected):
    assert safe_bool(value) is expected


def test_safe_int():
    assert safe_int("12") == 12
    assert safe_int("abc") is None


class TestURLConfig:
    def test_override_is_validated(self):
        assert URLConfig.get_websocket_url("ws://localhost:8080/ws") == "ws://localhost:8080/ws"
        with pytest.raises(ValueError):
            URLConfig.get_websocket_url("https://api.bitfinex.com")

    def test_timeouts_are_positive(self):
        assert TimeoutConfig.validate_timeouts() is True
        assert all(v > 0 for v in TimeoutConfig.get_all_timeouts().values())

    def test_environment_url_read_at_call_time(self):
        from ws_public import PublicWSClient

        with patch.dict(os.environ, {"BITFINEX_WS_URL": "wss://dotenv.test/ws"}):
            assert URLConfig.get_websocket_url() == "wss://dotenv.test/ws"
            assert PublicWSClient(logger=Mock()).url == "wss://dotenv.test/ws"

        with patch.dict(os.environ, CLEAN_ENV, clear=True):
            assert URLConfig.get_websocket_url() == URLConfig.DEFAULT_WS_URL


class TestEnvValidator:
    def test_only_client_prefixes_are_reported(self):
        from config.env_validator import find_unknown_client_variables

        env = {"NEWS_FEED": "x", "MY_BOOKMARKS": "y", "WS_TLS_SKIP_VERYFY": "1", "BITFINEX_API_KEYS": "k"}
        with patch.dict(os.environ, env, clear=True):
            assert find_unknown_client_variables() == {"WS_TLS_SKIP_VERYFY", "BITFINEX_API_KEYS"}

    def test_known_variables_are_accepted(self):
        from config.env_validator import VALID_ENV_VARS, find_unknown_client_variables

        with patch.dict(os.environ, {name: "1" for name in VALID_ENV_VARS}, clear=True):
            assert find_unknown_client_variables() == set()
