"""Charging station business logic service for the charge console."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from chargeconsole.shared.models import ChargingStation, User
from chargeconsole.shared.network import (
    NetworkClient,
    NetworkError,
    NetworkErrorType,
)

logger = logging.getLogger(__name__)


class OCPPGeneralResponse(Enum):
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


@dataclass
class ActionResponse:
    status: OCPPGeneralResponse
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "ActionResponse":
        # Anything other than an explicit acceptance counts as a rejection
        if str(data.get("status", "")).lower() == "accepted":
            status = OCPPGeneralResponse.ACCEPTED
        else:
            status = OCPPGeneralResponse.REJECTED
        return cls(status=status, raw=data)

    @property
    def accepted(self) -> bool:
        return self.status == OCPPGeneralResponse.ACCEPTED


class ChargingStationService:
    """Remote calls against the central server's charging station API."""

    def __init__(self, client: NetworkClient):
        self.client = client

    def get_charging_stations(self) -> list[ChargingStation]:
        result = self.client.get(
            "/charging-stations",
            context="Fetch charging stations",
            params={"Limit": 100},
        )
        return [
            ChargingStation.from_api_response(s) for s in result.get("result", [])
        ]

    def get_users(self, search: str = "") -> list[User]:
        params: dict[str, Any] = {"Limit": 100, "WithTag": "true"}
        if search:
            params["Search"] = search
        result = self.client.get("/users", context="Fetch users", params=params)
        return [User.from_api_response(u) for u in result.get("result", [])]

    def request_start_transaction(
        self, station_id: str, connector_id: int, tag_id: str
    ) -> ActionResponse:
        logger.info(
            "Requesting transaction start on %s connector %s",
            station_id,
            connector_id,
        )
        result = self.client.put(
            f"/charging-stations/{station_id}/remote/start",
            context="Start transaction",
            json={"args": {"tagID": tag_id, "connectorId": connector_id}},
        )
        if not isinstance(result, dict):
            raise NetworkError(
                error_type=NetworkErrorType.INVALID_RESPONSE,
                message=(
                    "Start transaction: Invalid response from server: "
                    f"expected a JSON object, got {type(result).__name__}"
                ),
                response_text=repr(result),
            )
        response = ActionResponse.from_api_response(result)
        logger.info(
            "Start transaction on %s connector %s answered %s",
            station_id,
            connector_id,
            response.status.value,
        )
        return response

    async def start_transaction(
        self, station_id: str, connector_id: int, tag_id: str
    ) -> ActionResponse:
        return await asyncio.to_thread(
            self.request_start_transaction, station_id, connector_id, tag_id
        )
