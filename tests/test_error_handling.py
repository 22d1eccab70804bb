"""Unit tests for turning failed remote actions into notifications."""

from unittest.mock import Mock

import pytest

from chargeconsole.shared.error_handling import (
    LOGIN_ROUTE,
    handle_action_error,
    handle_http_error,
)
from chargeconsole.shared.network import NetworkError, NetworkErrorType


@pytest.fixture
def notifier():
    return Mock()


@pytest.fixture
def navigator():
    return Mock()


def http_error(status_code=None, error_type=NetworkErrorType.HTTP_ERROR):
    return NetworkError(error_type=error_type, message="failed", status_code=status_code)


class TestHandleActionError:
    def test_shows_given_message(self, notifier, caplog):
        handle_action_error({"status": "Rejected"}, notifier, "Cannot start")

        notifier.show_error.assert_called_once_with("Cannot start")
        assert "Rejected" in caplog.text

    def test_unserializable_payload(self, notifier):
        handle_action_error({"when": object()}, notifier, "Cannot start")
        notifier.show_error.assert_called_once_with("Cannot start")


class TestHandleHttpError:
    def test_connection_error(self, navigator, notifier):
        handle_http_error(
            http_error(error_type=NetworkErrorType.CONNECTION_ERROR),
            navigator,
            notifier,
            "chargers.start_transaction_error",
            charge_box_id="CS-01",
        )

        message = notifier.show_error.call_args[0][0]
        assert "Cannot reach the central server" in message
        navigator.navigate.assert_not_called()

    def test_unauthorized_navigates_to_login(self, navigator, notifier):
        handle_http_error(http_error(401), navigator, notifier, "chargers.load_error")

        navigator.navigate.assert_called_once_with(LOGIN_ROUTE)
        assert "session has expired" in notifier.show_error.call_args[0][0]

    @pytest.mark.parametrize(
        "status_code,expected",
        [(403, "not authorized"), (404, "no longer exists")],
    )
    def test_mapped_status_codes(self, navigator, notifier, status_code, expected):
        handle_http_error(
            http_error(status_code), navigator, notifier, "chargers.load_error"
        )

        assert expected in notifier.show_error.call_args[0][0]
        navigator.navigate.assert_not_called()

    def test_other_status_adds_detail_to_action_message(self, navigator, notifier):
        handle_http_error(
            http_error(502),
            navigator,
            notifier,
            "chargers.start_transaction_error",
            charge_box_id="CS-01",
        )

        notifier.show_error.assert_called_once_with(
            "Cannot start the transaction on the charging station 'CS-01'. (HTTP 502)"
        )

    def test_invalid_response_detail(self, navigator, notifier):
        handle_http_error(
            http_error(error_type=NetworkErrorType.INVALID_RESPONSE),
            navigator,
            notifier,
            "chargers.load_error",
        )

        notifier.show_error.assert_called_once_with(
            "Cannot load the charging stations. (invalid response)"
        )

    def test_custom_translate(self, navigator, notifier):
        translate_fn = Mock(side_effect=lambda key, **params: key)

        handle_http_error(
            http_error(403), navigator, notifier, "chargers.load_error", translate_fn
        )

        notifier.show_error.assert_called_once_with("general.not_authorized")
