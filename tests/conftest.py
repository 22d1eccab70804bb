import asyncio
from dataclasses import dataclass, field
from typing import Any

import pytest

from chargeconsole.features.charging_stations.service import (
    ActionResponse,
    OCPPGeneralResponse,
)
from chargeconsole.features.charging_stations.start_transaction import (
    TransactionStartController,
)
from chargeconsole.shared.authorization import AuthorizationService
from chargeconsole.shared.dialogs import DialogConfig
from chargeconsole.shared.models import (
    ChargePointStatus,
    ChargingStation,
    Connector,
    User,
    UserRole,
    UserTag,
    UserToken,
)


class FakeDialogSurface:
    """Answers dialogs from a scripted list of responses."""

    def __init__(self, responses: list[Any] | None = None):
        self.responses = list(responses or [])
        self.presented: list[DialogConfig] = []
        self.notices: list[tuple[str, str]] = []

    def show_ok(self, title: str, message: str) -> None:
        self.notices.append((title, message))

    async def present(self, config: DialogConfig) -> Any:
        self.presented.append(config)
        if self.responses:
            return self.responses.pop(0)
        return None


class RecordingNotifier:
    def __init__(self):
        self.successes: list[str] = []
        self.errors: list[str] = []

    def show_success(self, message: str) -> None:
        self.successes.append(message)

    def show_error(self, message: str) -> None:
        self.errors.append(message)


class RecordingBusyIndicator:
    def __init__(self):
        self.events: list[str] = []

    def show(self) -> None:
        self.events.append("show")

    def hide(self) -> None:
        self.events.append("hide")


class RecordingNavigator:
    def __init__(self):
        self.routes: list[str] = []

    def navigate(self, route: str) -> None:
        self.routes.append(route)


class FakeGateway:
    def __init__(
        self,
        response: ActionResponse | None = None,
        error: Exception | None = None,
        events: list[str] | None = None,
    ):
        self.response = response or ActionResponse(
            status=OCPPGeneralResponse.ACCEPTED, raw={"status": "Accepted"}
        )
        self.error = error
        self.calls: list[tuple[str, int, str]] = []
        self.events = events

    async def start_transaction(
        self, station_id: str, connector_id: int, tag_id: str
    ) -> ActionResponse:
        self.calls.append((station_id, connector_id, tag_id))
        if self.events is not None:
            self.events.append("submit")
        if self.error is not None:
            raise self.error
        return self.response


@dataclass
class WorkflowHarness:
    dialogs: FakeDialogSurface = field(default_factory=FakeDialogSurface)
    notifier: RecordingNotifier = field(default_factory=RecordingNotifier)
    busy: RecordingBusyIndicator = field(default_factory=RecordingBusyIndicator)
    navigator: RecordingNavigator = field(default_factory=RecordingNavigator)
    gateway: FakeGateway = field(default_factory=FakeGateway)

    @property
    def controller(self) -> TransactionStartController:
        return TransactionStartController(
            dialogs=self.dialogs,
            notifier=self.notifier,
            gateway=self.gateway,
            busy=self.busy,
            authorization=AuthorizationService(),
            navigator=self.navigator,
        )

    def run(self, station, connector, logged_user, refresh=None):
        async def main():
            outcome = await self.controller.initiate(
                station, connector, logged_user, refresh
            )
            # Let the fire-and-forget refresh task run
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            return outcome

        return asyncio.run(main())


@pytest.fixture
def harness():
    return WorkflowHarness()


@pytest.fixture
def connector():
    return Connector(connector_id=1, status=ChargePointStatus.AVAILABLE)


@pytest.fixture
def station(connector):
    return ChargingStation(
        id="CS-PARIS-01",
        inactive=False,
        connectors=[connector, Connector(connector_id=2)],
    )


@pytest.fixture
def basic_user():
    return UserToken(
        id="u-basic",
        name="Martin",
        first_name="Claire",
        email="claire.martin@example.com",
        role=UserRole.BASIC,
        tag_ids=["X", "Y"],
    )


@pytest.fixture
def admin_user():
    return UserToken(
        id="u-admin",
        name="Durand",
        first_name="Paul",
        email="paul.durand@example.com",
        role=UserRole.ADMIN,
        tag_ids=["ADMIN-TAG"],
    )


@pytest.fixture
def selected_user():
    return User(
        id="u-other",
        name="Bernard",
        first_name="Lea",
        email="lea.bernard@example.com",
        tags=[UserTag(id="A", active=False), UserTag(id="B", active=True)],
    )
