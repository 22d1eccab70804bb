"""Charging station screens for the charge console TUI."""

from __future__ import annotations

import threading
from typing import Callable, cast

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button, DataTable, Input, Label, Static

from chargeconsole.screens import BaseModalScreen
from chargeconsole.shared.logging import format_error_for_user, get_logger
from chargeconsole.shared.messages import translate
from chargeconsole.shared.models import User, build_user_full_name

logger = get_logger(__name__)

UserLoader = Callable[[str], list[User]]


class UserSelectionScreen(BaseModalScreen):
    """Pick one (or several) users; dismisses with the picked users.

    An empty list means the dialog was closed without a selection.
    """

    def __init__(
        self,
        title: str,
        validate_button_title: str,
        candidates: list[User] | None = None,
        load_users: UserLoader | None = None,
        multiple_selection: bool = False,
    ):
        super().__init__()
        self.dialog_title = title
        self.validate_button_title = validate_button_title
        self.load_users = load_users
        self.multiple_selection = multiple_selection
        self.users: list[User] = list(candidates or [])
        self.selected_ids: list[str] = []
        self.cancel_result = []

    def compose(self) -> ComposeResult:
        yield Label(f"👤 {self.dialog_title}", id="dialog-title")
        if self.load_users is not None:
            yield Input(placeholder="Search users...", id="user-search-input")
        yield DataTable(id="users-table", cursor_type="row")
        yield Static("", id="user-selection-summary")
        yield Horizontal(
            Button(
                f"✓ {self.validate_button_title}",
                id="validate-button",
                variant="primary",
                disabled=True,
            ),
            Button(f"✗ {translate('general.cancel')}", id="cancel-button"),
            classes="dialog-buttons",
        )

    def on_mount(self) -> None:
        table = cast(DataTable, self.query_one("#users-table"))
        table.add_column("", key="selected")
        table.add_column("Name", key="name")
        table.add_column("Email", key="email")
        table.add_column("Active badge", key="badge")
        if self.users or self.load_users is None:
            self.update_users_table()
        else:
            self.fetch_users("")

    def fetch_users(self, search: str) -> None:
        loader = self.load_users
        if loader is None:
            return
        summary = cast(Static, self.query_one("#user-selection-summary"))
        summary.update("[yellow]Loading users...[/yellow]")
        app = self.app

        def worker() -> None:
            try:
                users = loader(search)
            except Exception as e:
                app.call_from_thread(self._on_users_loaded, None, e)
                return
            app.call_from_thread(self._on_users_loaded, users, None)

        threading.Thread(target=worker, daemon=True).start()

    def _on_users_loaded(
        self, users: list[User] | None, error: Exception | None
    ) -> None:
        # The dialog may have been closed while the users were loading
        if not self.is_attached:
            return
        summary = cast(Static, self.query_one("#user-selection-summary"))
        if error is not None:
            logger.error("Failed to load users: %s", error)
            summary.update(
                f"[red]{translate('users.load_error')} {format_error_for_user(error)}[/red]"
            )
            return
        self.users = users or []
        self.selected_ids = [
            user_id
            for user_id in self.selected_ids
            if any(u.id == user_id for u in self.users)
        ]
        self.update_users_table()

    def update_users_table(self) -> None:
        table = cast(DataTable, self.query_one("#users-table"))
        table.clear()
        for user in self.users:
            active_tag = user.first_active_tag()
            table.add_row(
                "●" if user.id in self.selected_ids else " ",
                build_user_full_name(user),
                user.email,
                active_tag.id if active_tag else "-",
                key=user.id,
            )
        self._update_summary()

    def _update_summary(self) -> None:
        summary = cast(Static, self.query_one("#user-selection-summary"))
        names = [build_user_full_name(u) for u in self.get_selected_users()]
        summary.update(f"Selected: {', '.join(names)}" if names else "")
        validate = cast(Button, self.query_one("#validate-button"))
        validate.disabled = not names

    def get_selected_users(self) -> list[User]:
        by_id = {user.id: user for user in self.users}
        return [by_id[user_id] for user_id in self.selected_ids if user_id in by_id]

    def toggle_user(self, user_id: str) -> None:
        if self.multiple_selection:
            if user_id in self.selected_ids:
                self.selected_ids.remove(user_id)
            else:
                self.selected_ids.append(user_id)
        elif self.selected_ids == [user_id]:
            self.selected_ids = []
        else:
            self.selected_ids = [user_id]
        table = cast(DataTable, self.query_one("#users-table"))
        for user in self.users:
            table.update_cell(
                user.id, "selected", "●" if user.id in self.selected_ids else " "
            )
        self._update_summary()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        row = event.row_key
        user_id = row.value if hasattr(row, "value") else str(row)
        if user_id is not None:
            self.toggle_user(user_id)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "user-search-input":
            self.fetch_users(event.value.strip())

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "validate-button":
            self.dismiss(self.get_selected_users())
        elif event.button.id == "cancel-button":
            self.dismiss([])
