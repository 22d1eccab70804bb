"""Charge Console - a terminal console for charging station operators.

This package is organized into feature-based modules:
- features.charging_stations: Connector table and the start-transaction workflow
- shared: Shared utilities (network, config, logging, models, messages)
"""

from chargeconsole.shared import (
    ChargingStation,
    Connector,
    ConsoleConfig,
    NetworkClient,
    NetworkError,
    NetworkErrorType,
    User,
    UserToken,
)

__version__ = "0.3.0"
__all__ = [
    "ChargingStation",
    "Connector",
    "ConsoleConfig",
    "NetworkClient",
    "NetworkError",
    "NetworkErrorType",
    "User",
    "UserToken",
]
