"""Turning failed remote actions into user notifications."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from chargeconsole.shared.messages import translate
from chargeconsole.shared.network import NetworkError, NetworkErrorType
from chargeconsole.shared.protocols import Navigator, Notifier

logger = logging.getLogger(__name__)

LOGIN_ROUTE = "login"

Translate = Callable[..., str]


def handle_action_error(
    response: Any, notifier: Notifier, message: str
) -> None:
    """The server answered but declined: log what it said, show ``message``."""
    try:
        payload = json.dumps(response, default=str)
    except (TypeError, ValueError):
        payload = repr(response)
    logger.warning("Action declined by server: %s", payload)
    notifier.show_error(message)


def handle_http_error(
    error: NetworkError,
    navigator: Navigator,
    notifier: Notifier,
    message_key: str,
    translate_fn: Translate = translate,
    **params: Any,
) -> None:
    """Surface a transport failure, sending the user to login when the session is gone."""
    logger.warning(
        "Request failed (%s, status=%s): %s",
        error.error_type.value,
        error.status_code,
        error.message,
    )
    if error.error_type in (
        NetworkErrorType.CONNECTION_ERROR,
        NetworkErrorType.TIMEOUT,
    ):
        notifier.show_error(translate_fn("general.backend_not_running"))
        return

    if error.status_code == 401:
        notifier.show_error(translate_fn("general.session_expired"))
        navigator.navigate(LOGIN_ROUTE)
        return
    if error.status_code == 403:
        notifier.show_error(translate_fn("general.not_authorized"))
        return
    if error.status_code == 404:
        notifier.show_error(translate_fn("general.object_not_found"))
        return

    if error.status_code:
        detail = f"HTTP {error.status_code}"
    else:
        detail = error.error_type.value.replace("_", " ")
    notifier.show_error(
        translate_fn(
            "general.transport_error_detail",
            message=translate_fn(message_key, **params),
            detail=detail,
        )
    )
