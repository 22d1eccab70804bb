"""Charging station feature module for the charge console."""

from chargeconsole.features.charging_stations.service import (
    ActionResponse,
    ChargingStationService,
    OCPPGeneralResponse,
)
from chargeconsole.features.charging_stations.start_transaction import (
    BUTTON_FOR_MYSELF,
    BUTTON_SELECT_USER,
    OutcomeReason,
    StartTransactionOutcome,
    TargetActor,
    TransactionStartController,
    WorkflowState,
)
from chargeconsole.features.charging_stations.screen import UserSelectionScreen
from chargeconsole.features.charging_stations.handlers import (
    ChargingStationHandlersMixin,
    TextualBusyIndicator,
    TextualDialogSurface,
    TextualNotifier,
)

__all__ = [
    "ActionResponse",
    "ChargingStationService",
    "OCPPGeneralResponse",
    "BUTTON_FOR_MYSELF",
    "BUTTON_SELECT_USER",
    "OutcomeReason",
    "StartTransactionOutcome",
    "TargetActor",
    "TransactionStartController",
    "WorkflowState",
    "UserSelectionScreen",
    "ChargingStationHandlersMixin",
    "TextualBusyIndicator",
    "TextualDialogSurface",
    "TextualNotifier",
]
