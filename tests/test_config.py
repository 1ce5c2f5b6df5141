"""Tests for client configuration."""

import pytest

from coinbase_trade.api.config import (
    DEFAULT_BASE_PATH,
    DEFAULT_HOST,
    DEFAULT_TIMEOUT_SECS,
    ClientConfig,
)


class TestResolve:
    def test_defaults(self):
        config = ClientConfig.resolve(environ={})

        assert config.host == DEFAULT_HOST
        assert config.base_path == DEFAULT_BASE_PATH
        assert config.key == ""
        assert config.timeout == DEFAULT_TIMEOUT_SECS
        assert not config.has_credentials

    def test_environment_over_defaults(self):
        env = {
            "COINBASE_KEY": "env-key",
            "COINBASE_SECRET": "env-secret",
            "COINBASE_HOST": "https://api.example.com",
            "COINBASE_PATH": "/v9",
        }

        config = ClientConfig.resolve(environ=env)

        assert config.key == "env-key"
        assert config.secret == "env-secret"
        assert config.host == "https://api.example.com"
        assert config.base_path == "/v9"
        assert config.has_credentials

    def test_explicit_over_environment(self):
        env = {"COINBASE_KEY": "env-key", "COINBASE_SECRET": "env-secret"}

        config = ClientConfig.resolve(ClientConfig(key="mine"), environ=env)

        assert config.key == "mine"
        assert config.secret == "env-secret"

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("COINBASE_KEY", "process-key")

        assert ClientConfig.resolve().key == "process-key"

    def test_trailing_slash_trimmed_from_host(self):
        config = ClientConfig.resolve(ClientConfig(host="http://localhost:8080/"), environ={})

        assert config.host == "http://localhost:8080"

    def test_frozen(self):
        config = ClientConfig.resolve(environ={})

        with pytest.raises(Exception):
            config.key = "changed"
