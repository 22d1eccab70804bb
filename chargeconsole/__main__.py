"""Main application entry point for the charge console."""

from __future__ import annotations

import logging
from typing import cast

from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button, DataTable, Footer, Header, Static

from chargeconsole.features.charging_stations.handlers import (
    REFRESH_ACTION,
    START_TRANSACTION_ACTION,
    ChargingStationHandlersMixin,
)
from chargeconsole.features.charging_stations.service import ChargingStationService
from chargeconsole.screens import OkDialogScreen
from chargeconsole.shared.config import ConsoleConfig
from chargeconsole.shared.error_handling import LOGIN_ROUTE
from chargeconsole.shared.logging import setup_logging
from chargeconsole.shared.messages import translate
from chargeconsole.shared.models import (
    ChargingStation,
    UserToken,
    build_user_full_name,
)
from chargeconsole.shared.network import NetworkClient
from chargeconsole.styles import CSS

logger = logging.getLogger(__name__)


class ChargeConsoleApp(ChargingStationHandlersMixin, App):
    CSS = CSS
    TITLE = "Charge Console"

    BINDINGS = [
        START_TRANSACTION_ACTION.binding(),
        REFRESH_ACTION.binding(),
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        config: ConsoleConfig | None = None,
        station_service: ChargingStationService | None = None,
        logged_user: UserToken | None = None,
    ):
        super().__init__()
        self.config = config or ConsoleConfig()
        self.station_service = station_service or ChargingStationService(
            NetworkClient(
                self.config.server_url,
                api_token=self.config.api_token,
                timeout_config=self.config.timeout_config,
                retry_config=self.config.retry_config,
                on_retry=self._on_network_retry,
            )
        )
        self.logged_user = logged_user or self._read_logged_user()
        self._stations: list[ChargingStation] = []
        self._row_keys: list[tuple[str, int]] = []

    def _on_network_retry(self, attempt: int, error: Exception, delay: float) -> None:
        # Reads are retried on worker threads, never on the event loop
        self.call_from_thread(
            self.notify,
            translate("general.retrying", attempt=attempt, delay=delay),
            severity="warning",
        )

    def _read_logged_user(self) -> UserToken | None:
        if not self.config.api_token:
            return None
        try:
            return UserToken.from_jwt(self.config.api_token)
        except ValueError as e:
            logger.warning("Cannot read the logged user from the token: %s", e)
            return None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(self._session_text(), id="session-info")
        yield DataTable(id="connectors-table", cursor_type="row")
        start_button = Button(
            START_TRANSACTION_ACTION.label, id="start-transaction-button", variant="primary"
        )
        start_button.tooltip = translate(START_TRANSACTION_ACTION.tooltip)
        yield Horizontal(
            start_button,
            Button(REFRESH_ACTION.label, id="refresh-button"),
            id="station-actions-row",
        )
        yield Footer()

    def _session_text(self) -> str:
        if self.logged_user is None:
            return "Not logged in"
        return f"{build_user_full_name(self.logged_user)} @ {self.config.server_url}"

    def on_mount(self) -> None:
        table = cast(DataTable, self.query_one("#connectors-table"))
        table.add_column("Station", key="station")
        table.add_column("Connector", key="connector")
        table.add_column("Status", key="status")
        table.add_column("Transaction", key="transaction")
        table.add_column("State", key="state")
        if self.logged_user is None:
            self.navigate(LOGIN_ROUTE)
            return
        self.load_charging_stations()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "start-transaction-button":
            self.action_start_transaction()
        elif event.button.id == "refresh-button":
            self.action_refresh_stations()

    def navigate(self, route: str) -> None:
        if route == LOGIN_ROUTE:
            logger.info("Session is no longer valid, asking for a new token")
            self.logged_user = None
            self.station_service.client.api_token = None
            cast(Static, self.query_one("#session-info")).update(self._session_text())
            self.push_screen(
                OkDialogScreen(
                    translate("general.login_required_title"),
                    f"{translate('general.session_expired')} "
                    "Set CHARGE_CONSOLE_TOKEN and restart the console.",
                )
            )
            return
        logger.warning("Unknown route: %s", route)


def main():
    """Entry point for the application."""
    setup_logging()
    app = ChargeConsoleApp(ConsoleConfig.load())
    app.run()


if __name__ == "__main__":
    main()
