"""Console configuration loaded from a JSON file and the environment."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from chargeconsole.shared.network import RetryConfig, TimeoutConfig

logger = logging.getLogger(__name__)

DEFAULT_SERVER_URL = "http://localhost:8080"


class ConfigError(Exception):
    pass


def default_config_path() -> Path:
    env_path = os.getenv("CHARGE_CONSOLE_CONFIG")
    if env_path:
        return Path(env_path)
    return Path.home() / ".config" / "charge-console" / "config.json"


@dataclass
class ConsoleConfig:
    server_url: str = DEFAULT_SERVER_URL
    api_token: str | None = None
    timeout_config: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry_config: RetryConfig = field(default_factory=RetryConfig)
    refresh_after_start: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConsoleConfig":
        config = cls()
        config.server_url = data.get("server_url", config.server_url)
        config.api_token = data.get("api_token") or None
        config.refresh_after_start = bool(
            data.get("refresh_after_start", config.refresh_after_start)
        )
        timeout_cfg = data.get("timeout", {})
        if timeout_cfg:
            config.timeout_config = TimeoutConfig(
                connect_timeout=float(timeout_cfg.get("connect_timeout", 5.0)),
                read_timeout=float(timeout_cfg.get("read_timeout", 30.0)),
            )
        retry_cfg = data.get("retry", {})
        if retry_cfg:
            config.retry_config = RetryConfig(
                max_retries=int(retry_cfg.get("max_retries", 3)),
                base_delay=float(retry_cfg.get("base_delay", 1.0)),
                max_delay=float(retry_cfg.get("max_delay", 30.0)),
            )
        return config

    @classmethod
    def load(cls, path: Path | None = None) -> "ConsoleConfig":
        config_path = path or default_config_path()
        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"Config file {config_path} must hold a JSON object")
            config = cls.from_dict(data)
            logger.info("Loaded configuration from %s", config_path)
        else:
            config = cls()

        server_url = os.getenv("CHARGE_CONSOLE_SERVER_URL")
        if server_url:
            config.server_url = server_url
        api_token = os.getenv("CHARGE_CONSOLE_TOKEN")
        if api_token:
            config.api_token = api_token
        return config
