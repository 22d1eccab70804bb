"""Unit tests for console configuration loading."""

import json

import pytest

from chargeconsole.shared.config import (
    DEFAULT_SERVER_URL,
    ConfigError,
    ConsoleConfig,
    default_config_path,
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in (
        "CHARGE_CONSOLE_CONFIG",
        "CHARGE_CONSOLE_SERVER_URL",
        "CHARGE_CONSOLE_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)


class TestConsoleConfig:
    def test_defaults(self):
        config = ConsoleConfig()
        assert config.server_url == DEFAULT_SERVER_URL
        assert config.api_token is None
        assert config.refresh_after_start is True

    def test_from_dict(self):
        config = ConsoleConfig.from_dict(
            {
                "server_url": "https://csms.example.com",
                "api_token": "tok",
                "refresh_after_start": False,
                "timeout": {"connect_timeout": 2, "read_timeout": 8},
                "retry": {"max_retries": 1},
            }
        )
        assert config.server_url == "https://csms.example.com"
        assert config.api_token == "tok"
        assert config.refresh_after_start is False
        assert config.timeout_config.request_timeout == (2.0, 8.0)
        assert config.retry_config.max_retries == 1

    def test_load_missing_file_uses_defaults(self, tmp_path):
        config = ConsoleConfig.load(tmp_path / "missing.json")
        assert config.server_url == DEFAULT_SERVER_URL

    def test_load_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"server_url": "http://10.0.0.5:8090"}))

        config = ConsoleConfig.load(path)

        assert config.server_url == "http://10.0.0.5:8090"

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"server_url": "http://file", "api_token": "a"}))
        monkeypatch.setenv("CHARGE_CONSOLE_SERVER_URL", "http://env")
        monkeypatch.setenv("CHARGE_CONSOLE_TOKEN", "b")

        config = ConsoleConfig.load(path)

        assert config.server_url == "http://env"
        assert config.api_token == "b"

    def test_invalid_json_raises_config_error(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError):
            ConsoleConfig.load(path)

    def test_non_object_raises_config_error(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigError):
            ConsoleConfig.load(path)


class TestDefaultConfigPath:
    def test_environment_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CHARGE_CONSOLE_CONFIG", str(tmp_path / "c.json"))
        assert default_config_path() == tmp_path / "c.json"

    def test_home_path(self):
        path = default_config_path()
        assert path.name == "config.json"
        assert path.parent.name == "charge-console"
