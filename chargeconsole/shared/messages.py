"""User-facing message catalog.

Messages are looked up by dotted ids and formatted with named
parameters, e.g. ``translate("chargers.start_transaction_success",
charge_box_id="CS-01")``.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

MESSAGES: dict[str, str] = {
    "general.ok": "OK",
    "general.yes": "Yes",
    "general.no": "No",
    "general.cancel": "Cancel",
    "general.start": "Start",
    "general.refresh": "Refresh",
    "general.tooltips.start": "Start a charging session on the selected connector",
    "general.backend_not_running": "Cannot reach the central server. Check your network connection.",
    "general.not_authorized": "You are not authorized to perform this action.",
    "general.object_not_found": "The requested object no longer exists.",
    "general.session_expired": "Your session has expired. Please log in again.",
    "general.login_required_title": "Login Required",
    "general.transport_error_detail": "{message} ({detail})",
    "general.retrying": (
        "The central server is not responding, retrying in {delay:.0f}s "
        "(attempt {attempt})."
    ),
    "chargers.action_error.transaction_start_title": "Start Transaction",
    "chargers.action_error.transaction_start_charging_station_inactive": (
        "The charging station is inactive, the transaction cannot be started."
    ),
    "chargers.action_error.transaction_start_not_available": (
        "The connector is not available, the transaction cannot be started."
    ),
    "chargers.action_error.transaction_in_progress": (
        "A transaction is already in progress on this connector."
    ),
    "chargers.start_transaction_admin_title": "Start Transaction",
    "chargers.start_transaction_admin_message": (
        "Do you want to start the transaction for yourself or for another user?"
    ),
    "chargers.start_transaction_admin_for_myself": "For Myself",
    "chargers.start_transaction_admin_select_user": "Select User",
    "chargers.start_transaction_user_select_title": "Select the user",
    "chargers.start_transaction_user_select_button": "Start",
    "chargers.start_transaction_title": "Start Transaction",
    "chargers.start_transaction_confirm": (
        "Do you really want to start a new transaction on the charging station "
        "'{charge_box_id}' for '{user_name}'?"
    ),
    "chargers.start_transaction_missing_active_tag": (
        "The transaction cannot be started on the charging station "
        "'{charge_box_id}': '{user_name}' has no active badge."
    ),
    "chargers.start_transaction_success": (
        "The transaction on the charging station '{charge_box_id}' has been started."
    ),
    "chargers.start_transaction_error": (
        "Cannot start the transaction on the charging station '{charge_box_id}'."
    ),
    "chargers.load_error": "Cannot load the charging stations.",
    "users.load_error": "Cannot load the users.",
}


def translate(key: str, **params: Any) -> str:
    template = MESSAGES.get(key)
    if template is None:
        logger.warning("Missing message for key '%s'", key)
        return key
    if not params:
        return template
    try:
        return template.format(**params)
    except (KeyError, IndexError) as e:
        logger.warning("Missing parameter %s for message '%s'", e, key)
        return template
