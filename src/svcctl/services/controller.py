"""ControllerService — start or stop one service and wait for it to settle.

Pipeline: VALIDATE → RESOLVE → EVALUATE → TRANSITION → WAIT → RESULT

Every outcome, including unexpected OS failures, is converted into a
single ControlResult at the point it is detected. Nothing is retried and
a timeout does not cancel the command already issued to the OS.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from svcctl.domain.lifecycle import PAST_TENSE, TARGET_STATUS, Action, Decision, decide
from svcctl.domain.request import ControlRequest, first_error_message
from svcctl.services.base import BaseService, describe_error
from svcctl.services.result import ControlResult, ExitCode

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from svcctl.infrastructure.manager import ServiceHandle


def _seconds(n: int) -> str:
    return f"{n} second" if n == 1 else f"{n} seconds"


class ControllerService(BaseService):
    """Drives a single start/stop request through the state machine."""

    @staticmethod
    def validate(
        action: Any, service_name: Any, timeout_seconds: Any
    ) -> ControlRequest | ControlResult:
        """Build a ControlRequest from raw arguments, or an exit-code-1 result.

        Needs no manager, so commands call it before any backend exists.
        """
        try:
            return ControlRequest(
                action=action,
                service_name=service_name,
                timeout_seconds=timeout_seconds,
            )
        except ValidationError as exc:
            return ControlResult.of(ExitCode.INVALID_INPUT, first_error_message(exc))

    def execute(self, request: ControlRequest) -> ControlResult:
        """Run an already-validated request."""
        log: BoundLogger = structlog.get_logger(__name__).bind(
            action=str(request.action),
            service=request.service_name,
            timeout=request.timeout_seconds,
        )
        log.debug("control.request")
        try:
            result = self._run(request, log)
        except Exception as exc:
            log.debug("control.failed", exc_info=True)
            result = ControlResult.of(
                ExitCode.UNEXPECTED,
                f"Failed to {request.action} service '{request.service_name}': "
                f"{describe_error(exc)}",
            )
        log.debug("control.result", exit_code=result.exit_code, message=result.message)
        return result

    def _run(self, request: ControlRequest, log: BoundLogger) -> ControlResult:
        resolved = self._resolve(request.service_name)
        if isinstance(resolved, ControlResult):
            return resolved
        handle = resolved

        current = self._manager.status(handle)
        log.debug("control.found", unit=handle.name, status=str(current))

        decision = decide(current, request.action)
        if decision is Decision.NOOP:
            return ControlResult.ok(
                f"Service '{handle.name}' is already {str(TARGET_STATUS[request.action]).lower()}."
            )
        if decision is Decision.ILLEGAL:
            return ControlResult.of(
                ExitCode.ILLEGAL_STATE,
                f"Cannot {request.action} a service that is {current}.",
            )

        return self._transition(request, handle, log)

    def _transition(
        self,
        request: ControlRequest,
        handle: ServiceHandle,
        log: BoundLogger,
    ) -> ControlResult:
        target = TARGET_STATUS[request.action]
        if request.action is Action.START:
            self._manager.start(handle)
        else:
            self._manager.stop(handle)
        log.debug("control.issued", unit=handle.name, target=str(target))

        if self._manager.wait_for_status(handle, target, request.timeout_seconds):
            log.debug("control.reached", unit=handle.name, target=str(target))
            return ControlResult.ok(f"{PAST_TENSE[request.action]} successfully.")

        log.debug("control.timeout", unit=handle.name, target=str(target))
        return ControlResult.of(
            ExitCode.TIMEOUT,
            f"Timed out after {_seconds(request.timeout_seconds)} waiting for service "
            f"'{handle.name}' to {request.action}.",
        )
