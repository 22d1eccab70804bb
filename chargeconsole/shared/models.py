"""Charging station and user records as returned by the central server."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ChargePointStatus(Enum):
    AVAILABLE = "Available"
    PREPARING = "Preparing"
    CHARGING = "Charging"
    SUSPENDED_EVSE = "SuspendedEVSE"
    SUSPENDED_EV = "SuspendedEV"
    FINISHING = "Finishing"
    RESERVED = "Reserved"
    UNAVAILABLE = "Unavailable"
    FAULTED = "Faulted"

    @classmethod
    def parse(cls, value: Any) -> "ChargePointStatus":
        if isinstance(value, cls):
            return value
        for status in cls:
            if status.value.lower() == str(value).lower():
                return status
        raise ValueError(f"Unknown connector status: {value!r}")


class UserRole(Enum):
    SUPER_ADMIN = "S"
    ADMIN = "A"
    BASIC = "B"
    DEMO = "D"


@dataclass
class Connector:
    connector_id: int
    status: ChargePointStatus = ChargePointStatus.AVAILABLE
    current_transaction_id: int | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Connector":
        transaction_id = data.get("currentTransactionID")
        return cls(
            connector_id=int(data["connectorId"]),
            status=ChargePointStatus.parse(data.get("status", "Available")),
            # The server reports 0 when no transaction is running
            current_transaction_id=int(transaction_id) if transaction_id else None,
        )


@dataclass
class ChargingStation:
    id: str
    inactive: bool = False
    connectors: list[Connector] = field(default_factory=list)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "ChargingStation":
        return cls(
            id=str(data["id"]),
            inactive=bool(data.get("inactive", False)),
            connectors=[
                Connector.from_api_response(c) for c in data.get("connectors") or []
            ],
        )

    def get_connector(self, connector_id: int) -> Connector | None:
        for connector in self.connectors:
            if connector.connector_id == connector_id:
                return connector
        return None


@dataclass
class UserTag:
    id: str
    active: bool = False
    description: str = ""

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "UserTag":
        return cls(
            id=str(data["id"]),
            active=bool(data.get("active", False)),
            description=data.get("description") or "",
        )


@dataclass
class User:
    """A user picked from the user directory, with their badges."""

    id: str
    name: str = ""
    first_name: str = ""
    email: str = ""
    tags: list[UserTag] = field(default_factory=list)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "User":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            first_name=data.get("firstName") or "",
            email=data.get("email") or "",
            tags=[UserTag.from_api_response(t) for t in data.get("tags") or []],
        )

    def first_active_tag(self) -> UserTag | None:
        for tag in self.tags:
            if tag.active:
                return tag
        return None


@dataclass
class UserToken:
    """The logged-in user, as carried by the session token."""

    id: str
    name: str = ""
    first_name: str = ""
    email: str = ""
    role: UserRole = UserRole.BASIC
    tag_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "UserToken":
        try:
            role = UserRole(data.get("role", "B"))
        except ValueError:
            role = UserRole.BASIC
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            first_name=data.get("firstName") or "",
            email=data.get("email") or "",
            role=role,
            tag_ids=[str(t) for t in data.get("tagIDs") or []],
        )

    @classmethod
    def from_jwt(cls, token: str) -> "UserToken":
        """Read the claims of a session token without verifying its signature."""
        parts = token.split(".")
        if len(parts) != 3:
            raise ValueError("Session token is not a JWT")
        payload = parts[1] + "=" * (-len(parts[1]) % 4)
        try:
            claims = json.loads(base64.urlsafe_b64decode(payload))
        except (ValueError, TypeError) as e:
            raise ValueError(f"Invalid session token payload: {e}") from e
        return cls.from_api_response(claims)


def build_user_full_name(user: User | UserToken | None) -> str:
    if user is None or not user.name:
        return "-"
    if user.first_name:
        return f"{user.name}, {user.first_name}"
    return user.name
