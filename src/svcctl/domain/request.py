"""ControlRequest — the validated, immutable input of one invocation."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from svcctl.domain.lifecycle import Action, parse_action


class ControlRequest(BaseModel):
    """A single start/stop request.

    Raw CLI strings are accepted for every field so that malformed input
    surfaces as a ``ValidationError`` with a readable message rather than
    a usage error from the argument parser.
    """

    model_config = {"frozen": True}

    action: Action
    service_name: str
    timeout_seconds: int

    @field_validator("action", mode="before")
    @classmethod
    def _parse_action(cls, value: Any) -> Action:
        if isinstance(value, Action):
            return value
        try:
            return parse_action("" if value is None else str(value))
        except ValueError:
            raise PydanticCustomError(
                "invalid_action",
                "Invalid action '{action}'. Expected 'start' or 'stop'.",
                {"action": "" if value is None else value},
            ) from None

    @field_validator("service_name", mode="before")
    @classmethod
    def _check_name(cls, value: Any) -> str:
        if value is None or not str(value).strip():
            raise PydanticCustomError("missing_name", "A service name is required.")
        return str(value).strip()

    @field_validator("timeout_seconds", mode="before")
    @classmethod
    def _parse_timeout(cls, value: Any) -> int:
        if isinstance(value, bool):
            value = None
        if isinstance(value, str):
            text = value.strip()
            value = int(text) if re.fullmatch(r"[+-]?\d+", text, re.ASCII) else None
        if not isinstance(value, int) or value < 1:
            raise PydanticCustomError(
                "invalid_timeout",
                "Timeout must be a whole number of seconds greater than or equal to 1.",
            )
        return value


def first_error_message(exc: ValidationError) -> str:
    """Return the message of the first error in a pydantic ``ValidationError``."""
    errors = exc.errors()
    if not errors:
        return str(exc)
    return str(errors[0]["msg"])
