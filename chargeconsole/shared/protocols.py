"""Interfaces of the collaborators the start-transaction workflow talks to."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from chargeconsole.shared.dialogs import DialogConfig
from chargeconsole.shared.models import User, UserToken

if TYPE_CHECKING:
    from chargeconsole.features.charging_stations.service import ActionResponse


class DialogSurface(Protocol):
    def show_ok(self, title: str, message: str) -> None: ...

    async def present(self, config: DialogConfig) -> Any: ...


class Notifier(Protocol):
    def show_success(self, message: str) -> None: ...

    def show_error(self, message: str) -> None: ...


class BusyIndicator(Protocol):
    def show(self) -> None: ...

    def hide(self) -> None: ...


class Navigator(Protocol):
    def navigate(self, route: str) -> None: ...


class AuthorizationOracle(Protocol):
    def has_elevated_privilege(self, actor: UserToken) -> bool: ...


class StartTransactionGateway(Protocol):
    async def start_transaction(
        self, station_id: str, connector_id: int, tag_id: str
    ) -> "ActionResponse": ...


class UserDirectory(Protocol):
    def get_users(self, search: str = "") -> list[User]: ...
