"""Start-transaction workflow for a charging station connector.

The workflow is a small state machine. Each state handler receives the
payload produced by the previous transition and returns the next
:class:`Transition`; the driver loop in
:meth:`TransactionStartController.initiate` runs handlers until a
terminal state is reached and returns its :class:`StartTransactionOutcome`.

The only suspension points are the dialogs (privileged-user choice, user
selection, confirmation) and the start request itself. A run submits at
most one request and never retries.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable

from chargeconsole.features.charging_stations.service import ActionResponse
from chargeconsole.shared.dialogs import (
    ButtonType,
    DialogButton,
    DialogConfig,
    DialogKind,
)
from chargeconsole.shared.error_handling import (
    handle_action_error,
    handle_http_error,
)
from chargeconsole.shared.logging import ContextAdapter, get_logger
from chargeconsole.shared.messages import translate
from chargeconsole.shared.models import (
    ChargePointStatus,
    ChargingStation,
    Connector,
    User,
    UserToken,
    build_user_full_name,
)
from chargeconsole.shared.network import NetworkError
from chargeconsole.shared.protocols import (
    AuthorizationOracle,
    BusyIndicator,
    DialogSurface,
    Navigator,
    Notifier,
    StartTransactionGateway,
)

logger = get_logger(__name__)

BUTTON_FOR_MYSELF = "FOR_MYSELF"
BUTTON_SELECT_USER = "SELECT_USER"

RefreshCallback = Callable[[], Awaitable[Any]]


class WorkflowState(Enum):
    PRECONDITION_CHECK = "precondition_check"
    ACTOR_SELECTION = "actor_selection"
    USER_SELECTION = "user_selection"
    TAG_RESOLUTION = "tag_resolution"
    CONFIRMATION = "confirmation"
    SUBMITTING = "submitting"
    COMPLETED = "completed"
    FAILED = "failed"
    ABORTED = "aborted"


TERMINAL_STATES = frozenset(
    {WorkflowState.COMPLETED, WorkflowState.FAILED, WorkflowState.ABORTED}
)


class OutcomeReason(Enum):
    ACCEPTED = "accepted"
    STATION_INACTIVE = "station_inactive"
    CONNECTOR_UNAVAILABLE = "connector_unavailable"
    TRANSACTION_IN_PROGRESS = "transaction_in_progress"
    MISSING_TAG = "missing_tag"
    CANCELLED = "cancelled"
    REJECTED = "rejected"
    TRANSPORT_FAILURE = "transport_failure"


@dataclass(frozen=True)
class TargetActor:
    """Who the transaction is started for."""

    logged_user: UserToken
    selected_user: User | None = None

    @property
    def record(self) -> User | UserToken:
        if self.selected_user is not None:
            return self.selected_user
        return self.logged_user


@dataclass(frozen=True)
class ResolvedTag:
    actor: TargetActor
    tag_id: str


@dataclass(frozen=True)
class StartTransactionOutcome:
    state: WorkflowState
    reason: OutcomeReason
    actor: TargetActor | None = None
    tag_id: str | None = None


@dataclass(frozen=True)
class Transition:
    state: WorkflowState
    payload: Any = None


@dataclass
class _WorkflowRun:
    station: ChargingStation
    connector: Connector
    logged_user: UserToken
    refresh: RefreshCallback | None
    log: ContextAdapter


def _finish(
    state: WorkflowState,
    reason: OutcomeReason,
    actor: TargetActor | None = None,
    tag_id: str | None = None,
) -> Transition:
    return Transition(state, StartTransactionOutcome(state, reason, actor, tag_id))


class TransactionStartController:
    """Decides whether and for whom to start a transaction, then starts it."""

    def __init__(
        self,
        dialogs: DialogSurface,
        notifier: Notifier,
        gateway: StartTransactionGateway,
        busy: BusyIndicator,
        authorization: AuthorizationOracle,
        navigator: Navigator,
        translate_fn: Callable[..., str] = translate,
        name_formatter: Callable[[User | UserToken], str] = build_user_full_name,
    ):
        self.dialogs = dialogs
        self.notifier = notifier
        self.gateway = gateway
        self.busy = busy
        self.authorization = authorization
        self.navigator = navigator
        self.translate = translate_fn
        self.name_formatter = name_formatter
        self._handlers = {
            WorkflowState.PRECONDITION_CHECK: self._check_preconditions,
            WorkflowState.ACTOR_SELECTION: self._select_actor,
            WorkflowState.USER_SELECTION: self._select_user,
            WorkflowState.TAG_RESOLUTION: self._resolve_tag,
            WorkflowState.CONFIRMATION: self._confirm,
            WorkflowState.SUBMITTING: self._submit,
        }
        self._background_tasks: set[asyncio.Future] = set()

    async def initiate(
        self,
        station: ChargingStation,
        connector: Connector,
        logged_user: UserToken,
        refresh: RefreshCallback | None = None,
    ) -> StartTransactionOutcome:
        if station.connectors and station.get_connector(connector.connector_id) is None:
            raise ValueError(
                f"Connector {connector.connector_id} does not belong to "
                f"charging station {station.id}"
            )

        run = _WorkflowRun(
            station=station,
            connector=connector,
            logged_user=logged_user,
            refresh=refresh,
            log=logger.with_context(
                station_id=station.id, connector_id=connector.connector_id
            ),
        )
        transition = Transition(WorkflowState.PRECONDITION_CHECK)
        while transition.state not in TERMINAL_STATES:
            next_transition = await self._handlers[transition.state](
                run, transition.payload
            )
            run.log.debug(
                "Workflow %s -> %s",
                transition.state.value,
                next_transition.state.value,
            )
            transition = next_transition

        outcome: StartTransactionOutcome = transition.payload
        run.log.info(
            "Start transaction workflow ended: %s (%s)",
            outcome.state.value,
            outcome.reason.value,
        )
        return outcome

    def _display_name(self, actor: TargetActor) -> str:
        return self.name_formatter(actor.record)

    async def _check_preconditions(self, run: _WorkflowRun, payload: Any) -> Transition:
        if run.station.inactive:
            key = "chargers.action_error.transaction_start_charging_station_inactive"
            reason = OutcomeReason.STATION_INACTIVE
        elif run.connector.status == ChargePointStatus.UNAVAILABLE:
            key = "chargers.action_error.transaction_start_not_available"
            reason = OutcomeReason.CONNECTOR_UNAVAILABLE
        elif run.connector.current_transaction_id is not None:
            key = "chargers.action_error.transaction_in_progress"
            reason = OutcomeReason.TRANSACTION_IN_PROGRESS
        else:
            return Transition(WorkflowState.ACTOR_SELECTION)

        self.dialogs.show_ok(
            self.translate("chargers.action_error.transaction_start_title"),
            self.translate(key),
        )
        return _finish(WorkflowState.ABORTED, reason)

    async def _select_actor(self, run: _WorkflowRun, payload: Any) -> Transition:
        if not self.authorization.has_elevated_privilege(run.logged_user):
            return Transition(
                WorkflowState.TAG_RESOLUTION, TargetActor(run.logged_user)
            )

        button_id = await self.dialogs.present(
            DialogConfig(
                kind=DialogKind.CHOICE,
                title=self.translate("chargers.start_transaction_admin_title"),
                message=self.translate("chargers.start_transaction_admin_message"),
                buttons=[
                    DialogButton(
                        BUTTON_FOR_MYSELF,
                        self.translate("chargers.start_transaction_admin_for_myself"),
                        "primary",
                    ),
                    DialogButton(
                        BUTTON_SELECT_USER,
                        self.translate("chargers.start_transaction_admin_select_user"),
                    ),
                    DialogButton(
                        ButtonType.CANCEL.value, self.translate("general.cancel")
                    ),
                ],
            )
        )
        if button_id == BUTTON_FOR_MYSELF:
            return Transition(
                WorkflowState.TAG_RESOLUTION, TargetActor(run.logged_user)
            )
        if button_id == BUTTON_SELECT_USER:
            return Transition(WorkflowState.USER_SELECTION)
        return _finish(WorkflowState.ABORTED, OutcomeReason.CANCELLED)

    async def _select_user(self, run: _WorkflowRun, payload: Any) -> Transition:
        selected = await self.dialogs.present(
            DialogConfig(
                kind=DialogKind.USER_SELECTION,
                title=self.translate("chargers.start_transaction_user_select_title"),
                validate_button_title=self.translate(
                    "chargers.start_transaction_user_select_button"
                ),
                multiple_selection=False,
            )
        )
        if not selected:
            return _finish(WorkflowState.ABORTED, OutcomeReason.CANCELLED)
        return Transition(
            WorkflowState.TAG_RESOLUTION,
            TargetActor(run.logged_user, selected_user=selected[0]),
        )

    async def _resolve_tag(self, run: _WorkflowRun, actor: TargetActor) -> Transition:
        tag_id = None
        if actor.selected_user is not None:
            tag = actor.selected_user.first_active_tag()
            if tag is not None:
                tag_id = tag.id
        elif actor.logged_user.tag_ids:
            tag_id = actor.logged_user.tag_ids[0]

        if not tag_id:
            run.log.warning("No usable badge for %s", self._display_name(actor))
            self.notifier.show_error(
                self.translate(
                    "chargers.start_transaction_missing_active_tag",
                    charge_box_id=run.station.id,
                    user_name=self._display_name(actor),
                )
            )
            return _finish(WorkflowState.ABORTED, OutcomeReason.MISSING_TAG, actor)
        return Transition(WorkflowState.CONFIRMATION, ResolvedTag(actor, tag_id))

    async def _confirm(self, run: _WorkflowRun, resolved: ResolvedTag) -> Transition:
        response = await self.dialogs.present(
            DialogConfig(
                kind=DialogKind.YES_NO,
                title=self.translate("chargers.start_transaction_title"),
                message=self.translate(
                    "chargers.start_transaction_confirm",
                    charge_box_id=run.station.id,
                    user_name=self._display_name(resolved.actor),
                ),
            )
        )
        if response != ButtonType.YES:
            return _finish(
                WorkflowState.ABORTED,
                OutcomeReason.CANCELLED,
                resolved.actor,
                resolved.tag_id,
            )
        return Transition(WorkflowState.SUBMITTING, resolved)

    async def _submit(self, run: _WorkflowRun, resolved: ResolvedTag) -> Transition:
        station_id = run.station.id
        try:
            self.busy.show()
            try:
                response: ActionResponse = await self.gateway.start_transaction(
                    station_id, run.connector.connector_id, resolved.tag_id
                )
            finally:
                self.busy.hide()
        except NetworkError as error:
            run.log.warning("Start transaction request failed: %s", error)
            handle_http_error(
                error,
                self.navigator,
                self.notifier,
                "chargers.start_transaction_error",
                self.translate,
                charge_box_id=station_id,
            )
            return _finish(
                WorkflowState.FAILED,
                OutcomeReason.TRANSPORT_FAILURE,
                resolved.actor,
                resolved.tag_id,
            )

        if not response.accepted:
            handle_action_error(
                response.raw,
                self.notifier,
                self.translate(
                    "chargers.start_transaction_error", charge_box_id=station_id
                ),
            )
            return _finish(
                WorkflowState.FAILED,
                OutcomeReason.REJECTED,
                resolved.actor,
                resolved.tag_id,
            )

        self.notifier.show_success(
            self.translate("chargers.start_transaction_success", charge_box_id=station_id)
        )
        if run.refresh is not None:
            self._schedule_refresh(run.refresh, run.log)
        return _finish(
            WorkflowState.COMPLETED,
            OutcomeReason.ACCEPTED,
            resolved.actor,
            resolved.tag_id,
        )

    def _schedule_refresh(self, refresh: RefreshCallback, log: ContextAdapter) -> None:
        try:
            pending = refresh()
        except Exception as e:
            log.debug("Refresh after transaction start failed: %s", e)
            return

        async def wait_refresh() -> None:
            try:
                await pending
            except Exception as e:
                log.debug("Refresh after transaction start failed: %s", e)

        task = asyncio.ensure_future(wait_refresh())
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
