"""Service status and action lifecycle models.

Only two statuses are actionable: a Running service can be stopped and a
Stopped service can be started. Every transitional or paused status is
treated uniformly as ineligible for either action.
"""

from __future__ import annotations

from enum import StrEnum


class Action(StrEnum):
    """Requested state change."""

    START = "start"
    STOP = "stop"


class ServiceStatus(StrEnum):
    """Observable status of an OS service.

    Values are the display names used in result messages.
    """

    RUNNING = "Running"
    STOPPED = "Stopped"
    START_PENDING = "StartPending"
    STOP_PENDING = "StopPending"
    PAUSED = "Paused"
    PAUSE_PENDING = "PausePending"
    CONTINUE_PENDING = "ContinuePending"
    UNKNOWN = "Unknown"


class Decision(StrEnum):
    """Outcome of evaluating the current status against an action."""

    NOOP = "noop"
    TRANSITION = "transition"
    ILLEGAL = "illegal"


# --- Transition maps ---

TARGET_STATUS: dict[Action, ServiceStatus] = {
    Action.START: ServiceStatus.RUNNING,
    Action.STOP: ServiceStatus.STOPPED,
}

SOURCE_STATUS: dict[Action, ServiceStatus] = {
    Action.START: ServiceStatus.STOPPED,
    Action.STOP: ServiceStatus.RUNNING,
}

PAST_TENSE: dict[Action, str] = {
    Action.START: "Started",
    Action.STOP: "Stopped",
}


def decide(current: ServiceStatus, action: Action) -> Decision:
    """Return what the controller should do for *action* given *current*."""
    if current == TARGET_STATUS[action]:
        return Decision.NOOP
    if current == SOURCE_STATUS[action]:
        return Decision.TRANSITION
    return Decision.ILLEGAL


def parse_action(value: str) -> Action:
    """Parse an action name case-insensitively. Raises ValueError if unknown.

    Whitespace is significant: " start" is not an action.
    """
    return Action(value.lower())
