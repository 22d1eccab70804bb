"""Charging station event handlers for the charge console TUI."""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, cast

from textual.app import App
from textual.binding import Binding
from textual.widgets import DataTable

from chargeconsole.features.charging_stations.screen import UserSelectionScreen
from chargeconsole.features.charging_stations.service import ChargingStationService
from chargeconsole.features.charging_stations.start_transaction import (
    StartTransactionOutcome,
    TransactionStartController,
)
from chargeconsole.screens import (
    ChoiceDialogScreen,
    LoadingScreen,
    OkDialogScreen,
    YesNoDialogScreen,
)
from chargeconsole.shared.authorization import AuthorizationService
from chargeconsole.shared.dialogs import DialogConfig, DialogKind
from chargeconsole.shared.logging import (
    format_error_for_user,
    get_logger,
    log_with_context,
)
from chargeconsole.shared.messages import translate
from chargeconsole.shared.models import ChargingStation, Connector, UserToken
from chargeconsole.shared.protocols import UserDirectory

if TYPE_CHECKING:
    from chargeconsole.__main__ import ChargeConsoleApp

logger = get_logger(__name__)


class ChargingStationButtonAction(Enum):
    START_TRANSACTION = "start_transaction"
    REFRESH = "refresh_stations"


@dataclass(frozen=True)
class TableActionDef:
    id: ChargingStationButtonAction
    key: str
    icon: str
    name: str
    tooltip: str

    @property
    def label(self) -> str:
        return f"{self.icon} {translate(self.name)}"

    def binding(self) -> Binding:
        return Binding(self.key, self.id.value, translate(self.name))


START_TRANSACTION_ACTION = TableActionDef(
    id=ChargingStationButtonAction.START_TRANSACTION,
    key="s",
    icon="▶",
    name="general.start",
    tooltip="general.tooltips.start",
)

REFRESH_ACTION = TableActionDef(
    id=ChargingStationButtonAction.REFRESH,
    key="r",
    icon="⟳",
    name="general.refresh",
    tooltip="general.refresh",
)


class TextualDialogSurface:
    """Presents dialogs as modal screens and resumes when they are dismissed."""

    def __init__(self, app: App, user_directory: UserDirectory | None = None):
        self.app = app
        self.user_directory = user_directory

    def show_ok(self, title: str, message: str) -> None:
        self.app.push_screen(OkDialogScreen(title, message))

    def build_screen(self, config: DialogConfig):
        if config.kind == DialogKind.OK:
            return OkDialogScreen(config.title, config.message)
        if config.kind == DialogKind.YES_NO:
            return YesNoDialogScreen(config.title, config.message)
        if config.kind == DialogKind.CHOICE:
            return ChoiceDialogScreen(config.title, config.message, config.buttons)
        if config.kind == DialogKind.USER_SELECTION:
            directory = self.user_directory
            return UserSelectionScreen(
                config.title,
                config.validate_button_title,
                candidates=config.candidates,
                load_users=directory.get_users if directory is not None else None,
                multiple_selection=config.multiple_selection,
            )
        raise ValueError(f"Unsupported dialog kind: {config.kind}")

    async def present(self, config: DialogConfig) -> Any:
        future: asyncio.Future = asyncio.get_running_loop().create_future()

        def on_dismiss(result: Any) -> None:
            if not future.done():
                future.set_result(result)

        self.app.push_screen(self.build_screen(config), on_dismiss)
        return await future


class TextualNotifier:
    def __init__(self, app: App):
        self.app = app

    def show_success(self, message: str) -> None:
        self.app.notify(message, severity="information")

    def show_error(self, message: str) -> None:
        self.app.notify(message, severity="error", timeout=8)


class TextualBusyIndicator:
    """Loading screen with nesting: only the outermost show/hide pair acts."""

    def __init__(self, app: App, message: str = "Please wait..."):
        self.app = app
        self.message = message
        self._depth = 0
        self._screen: LoadingScreen | None = None

    def show(self) -> None:
        self._depth += 1
        if self._depth == 1:
            self._screen = LoadingScreen(self.message)
            self.app.push_screen(self._screen)

    def hide(self) -> None:
        if self._depth == 0:
            return
        self._depth -= 1
        if self._depth == 0 and self._screen is not None:
            self._screen.close()
            self._screen = None


class ChargingStationHandlersMixin:
    """Mixin class providing charging station handlers for ChargeConsoleApp."""

    station_service: ChargingStationService
    logged_user: UserToken | None
    _stations: list[ChargingStation]
    _row_keys: list[tuple[str, int]]
    _busy_indicator: TextualBusyIndicator | None = None

    def _get_busy_indicator(self: "ChargeConsoleApp") -> TextualBusyIndicator:
        if self._busy_indicator is None:
            self._busy_indicator = TextualBusyIndicator(self, "Starting transaction...")
        return self._busy_indicator

    def build_start_transaction_controller(
        self: "ChargeConsoleApp",
    ) -> TransactionStartController:
        return TransactionStartController(
            dialogs=TextualDialogSurface(self, self.station_service),
            notifier=TextualNotifier(self),
            gateway=self.station_service,
            busy=self._get_busy_indicator(),
            authorization=AuthorizationService(),
            navigator=self,
        )

    def load_charging_stations(self: "ChargeConsoleApp") -> None:
        def worker() -> None:
            try:
                stations = self.station_service.get_charging_stations()
                self.call_from_thread(self._on_stations_loaded, stations, None)
            except Exception as e:
                self.call_from_thread(self._on_stations_loaded, None, e)

        threading.Thread(target=worker, daemon=True).start()

    async def refresh_charging_stations(self: "ChargeConsoleApp") -> None:
        stations = await asyncio.to_thread(self.station_service.get_charging_stations)
        self._on_stations_loaded(stations, None)

    def _on_stations_loaded(
        self: "ChargeConsoleApp",
        stations: list[ChargingStation] | None,
        error: Exception | None,
    ) -> None:
        if error is not None:
            log_with_context(
                logger,
                logging.ERROR,
                "Failed to load charging stations",
                server_url=self.config.server_url,
                error=str(error),
            )
            self.notify(
                f"{translate('chargers.load_error')} {format_error_for_user(error)}",
                severity="error",
            )
            return
        self._stations = stations or []
        self.update_connectors_table()

    def update_connectors_table(self: "ChargeConsoleApp") -> None:
        table = cast(DataTable, self.query_one("#connectors-table"))
        table.clear()
        self._row_keys = []
        for station in self._stations:
            for connector in station.connectors:
                table.add_row(
                    station.id,
                    str(connector.connector_id),
                    connector.status.value,
                    str(connector.current_transaction_id or "-"),
                    "inactive" if station.inactive else "online",
                )
                self._row_keys.append((station.id, connector.connector_id))

    def get_selected_connector(
        self: "ChargeConsoleApp",
    ) -> tuple[ChargingStation, Connector] | None:
        table = cast(DataTable, self.query_one("#connectors-table"))
        cursor_row = table.cursor_row
        if cursor_row is None or not 0 <= cursor_row < len(self._row_keys):
            return None
        station_id, connector_id = self._row_keys[cursor_row]
        for station in self._stations:
            if station.id == station_id:
                connector = station.get_connector(connector_id)
                if connector is not None:
                    return station, connector
        return None

    def action_start_transaction(self: "ChargeConsoleApp") -> None:
        if self.logged_user is None:
            self.notify(translate("general.session_expired"), severity="error")
            return
        selection = self.get_selected_connector()
        if selection is None:
            self.notify("Select a connector row first", severity="warning")
            return
        station, connector = selection
        self.run_worker(
            self.start_transaction(station, connector, self.logged_user),
            group="start-transaction",
        )

    async def start_transaction(
        self: "ChargeConsoleApp",
        station: ChargingStation,
        connector: Connector,
        logged_user: UserToken,
    ) -> StartTransactionOutcome:
        controller = self.build_start_transaction_controller()
        refresh = (
            self.refresh_charging_stations
            if self.config.refresh_after_start
            else None
        )
        return await controller.initiate(station, connector, logged_user, refresh)

    def action_refresh_stations(self: "ChargeConsoleApp") -> None:
        self.load_charging_stations()
