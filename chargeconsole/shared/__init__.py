"""Shared utilities for the charge console."""

from chargeconsole.shared.authorization import AuthorizationService
from chargeconsole.shared.config import ConfigError, ConsoleConfig
from chargeconsole.shared.logging import (
    ContextAdapter,
    LoggingConfig,
    LogLevel,
    format_error_for_user,
    get_logger,
    get_user_friendly_error,
    sanitize_dict,
    sanitize_message,
    setup_logging,
)
from chargeconsole.shared.messages import translate
from chargeconsole.shared.models import (
    ChargePointStatus,
    ChargingStation,
    Connector,
    User,
    UserRole,
    UserTag,
    UserToken,
    build_user_full_name,
)
from chargeconsole.shared.network import (
    NetworkClient,
    NetworkError,
    NetworkErrorType,
    RetryConfig,
    TimeoutConfig,
)

__all__ = [
    "AuthorizationService",
    "ConfigError",
    "ConsoleConfig",
    "NetworkClient",
    "NetworkError",
    "NetworkErrorType",
    "RetryConfig",
    "TimeoutConfig",
    "ChargePointStatus",
    "ChargingStation",
    "Connector",
    "User",
    "UserRole",
    "UserTag",
    "UserToken",
    "build_user_full_name",
    "translate",
    "ContextAdapter",
    "LoggingConfig",
    "LogLevel",
    "format_error_for_user",
    "get_logger",
    "get_user_friendly_error",
    "sanitize_dict",
    "sanitize_message",
    "setup_logging",
]
