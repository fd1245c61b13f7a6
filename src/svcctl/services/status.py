"""StatusService — read-only status query for one service."""

from __future__ import annotations

import logging

from svcctl.services.base import BaseService, describe_error
from svcctl.services.result import ControlResult, ExitCode

logger = logging.getLogger(__name__)


class StatusService(BaseService):
    """Reports the live status of the single service matching a name."""

    def status(self, service_name: str) -> ControlResult:
        name = (service_name or "").strip()
        if not name:
            return ControlResult.of(ExitCode.INVALID_INPUT, "A service name is required.")
        try:
            resolved = self._resolve(name)
            if isinstance(resolved, ControlResult):
                return resolved
            current = self._manager.status(resolved)
        except Exception as exc:
            logger.debug("Status query for %r failed", name, exc_info=True)
            return ControlResult.of(
                ExitCode.UNEXPECTED,
                f"Failed to query service '{name}': {describe_error(exc)}",
            )
        return ControlResult.ok(f"Service '{resolved.name}' is {current}.")
