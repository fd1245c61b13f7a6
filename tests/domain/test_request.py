"""Tests for ControlRequest validation."""

import pytest
from pydantic import ValidationError

from svcctl.domain.lifecycle import Action
from svcctl.domain.request import ControlRequest, first_error_message


def _error(**kwargs: object) -> str:
    with pytest.raises(ValidationError) as info:
        ControlRequest(**kwargs)  # type: ignore[arg-type]
    return first_error_message(info.value)


class TestControlRequest:
    def test_valid_from_cli_strings(self) -> None:
        req = ControlRequest(action="Stop", service_name=" nginx ", timeout_seconds="30")
        assert req.action is Action.STOP
        assert req.service_name == "nginx"
        assert req.timeout_seconds == 30

    def test_valid_from_typed_values(self) -> None:
        req = ControlRequest(action=Action.START, service_name="db", timeout_seconds=1)
        assert req.action is Action.START
        assert req.timeout_seconds == 1

    def test_frozen(self) -> None:
        req = ControlRequest(action="start", service_name="db", timeout_seconds=5)
        with pytest.raises(ValidationError):
            req.timeout_seconds = 10  # type: ignore[misc]

    def test_invalid_action(self) -> None:
        msg = _error(action="restart", service_name="db", timeout_seconds=5)
        assert msg == "Invalid action 'restart'. Expected 'start' or 'stop'."

    @pytest.mark.parametrize("action", [" start", "start\n", "\tstop "])
    def test_padded_action_rejected(self, action: str) -> None:
        msg = _error(action=action, service_name="db", timeout_seconds=5)
        assert msg == f"Invalid action '{action}'. Expected 'start' or 'stop'."

    def test_missing_action(self) -> None:
        msg = _error(action=None, service_name="db", timeout_seconds=5)
        assert "Invalid action ''" in msg

    @pytest.mark.parametrize("timeout", [0, -1, "0", "-5", "1.5", "abc", "", None, True, 2.0])
    def test_invalid_timeout(self, timeout: object) -> None:
        msg = _error(action="start", service_name="db", timeout_seconds=timeout)
        assert msg.startswith("Timeout must be a whole number of seconds")

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name(self, name: object) -> None:
        msg = _error(action="start", service_name=name, timeout_seconds=5)
        assert msg == "A service name is required."

    def test_first_error_reported_in_field_order(self) -> None:
        msg = _error(action="bogus", service_name="", timeout_seconds=0)
        assert msg.startswith("Invalid action")
