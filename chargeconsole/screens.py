"""Modal screens shared by the charge console features."""

from typing import cast

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from chargeconsole.shared.dialogs import ButtonType, DialogButton
from chargeconsole.shared.messages import translate


class BaseModalScreen(ModalScreen):
    """Base modal screen with common key bindings.

    Escape dismisses the screen with :attr:`cancel_result` so that whoever
    waits on the dialog is always resumed.
    """

    BINDINGS = [
        ("escape", "cancel", "Close"),
        ("tab", "focus_next", "Next"),
        ("shift+tab", "focus_previous", "Previous"),
    ]

    cancel_result: object = None

    def action_cancel(self) -> None:
        self.dismiss(self.cancel_result)


class OkDialogScreen(BaseModalScreen):
    cancel_result = ButtonType.OK

    def __init__(self, title: str, message: str):
        super().__init__()
        self.dialog_title = title
        self.message = message

    def compose(self) -> ComposeResult:
        yield Label(f"ℹ️ {self.dialog_title}", id="dialog-title")
        yield Static(self.message, id="dialog-message")
        yield Horizontal(
            Button(translate("general.ok"), id="ok-button", variant="primary"),
            classes="dialog-buttons",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "ok-button":
            self.dismiss(ButtonType.OK)


class YesNoDialogScreen(BaseModalScreen):
    BINDINGS = BaseModalScreen.BINDINGS + [("enter", "confirm", "Confirm")]
    cancel_result = ButtonType.NO

    def __init__(self, title: str, message: str):
        super().__init__()
        self.dialog_title = title
        self.message = message

    def compose(self) -> ComposeResult:
        yield Label(f"❓ {self.dialog_title}", id="dialog-title")
        yield Static(self.message, id="dialog-message")
        yield Horizontal(
            Button(f"✓ {translate('general.yes')}", id="yes-button", variant="primary"),
            Button(f"✗ {translate('general.no')}", id="no-button"),
            classes="dialog-buttons",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "yes-button":
            self.dismiss(ButtonType.YES)
        elif event.button.id == "no-button":
            self.dismiss(ButtonType.NO)

    def action_confirm(self) -> None:
        self.dismiss(ButtonType.YES)


class ChoiceDialogScreen(BaseModalScreen):
    """Shows one button per choice and dismisses with the chosen button id."""

    cancel_result = ButtonType.CANCEL.value

    def __init__(self, title: str, message: str, buttons: list[DialogButton]):
        super().__init__()
        self.dialog_title = title
        self.message = message
        self.buttons = buttons
        self._button_ids = {
            f"choice-{button.id.lower()}": button.id for button in buttons
        }

    def compose(self) -> ComposeResult:
        yield Label(f"⚡ {self.dialog_title}", id="dialog-title")
        yield Static(self.message, id="dialog-message")
        yield Horizontal(
            *[
                Button(
                    button.label,
                    id=f"choice-{button.id.lower()}",
                    variant=button.variant,  # type: ignore[arg-type]
                )
                for button in self.buttons
            ],
            classes="dialog-buttons",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = self._button_ids.get(event.button.id or "")
        if button_id is not None:
            self.dismiss(button_id)


class LoadingScreen(ModalScreen):
    """Blocking spinner shown while a remote call is in flight."""

    BINDINGS = []

    def __init__(self, message: str = "Please wait..."):
        super().__init__()
        self.message = message
        self._loading_step = 0
        self._loading_timer = None
        self._close_requested = False

    def compose(self) -> ComposeResult:
        yield Static(f"[yellow]⠋ {self.message}[/yellow]", id="loading-message")

    def on_mount(self) -> None:
        frames = ["⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"]

        def tick() -> None:
            self._loading_step = (self._loading_step + 1) % len(frames)
            # The timer can fire once more while the screen is being removed
            try:
                widget = cast(Static, self.query_one("#loading-message"))
            except NoMatches:
                return
            widget.update(
                f"[yellow]{frames[self._loading_step]} {self.message}[/yellow]"
            )

        self._loading_timer = self.set_interval(0.1, tick)

    def close(self) -> None:
        """Remove this spinner, waiting for any screen pushed above it to go first."""
        if self.app.screen is self:
            self.dismiss()
        elif self in self.app.screen_stack:
            self._close_requested = True

    def on_screen_resume(self) -> None:
        if self._close_requested:
            self._close_requested = False
            self.dismiss()

    def on_unmount(self) -> None:
        if self._loading_timer:
            self._loading_timer.stop()
            self._loading_timer = None
