"""BaseService — abstract foundation for svcctl services.

Every service receives a :class:`ServiceManager` at construction time and
never touches the OS directly. Lookup is shared: exactly one service must
resolve from a name pattern before anything else happens.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from svcctl.services.result import ControlResult, ExitCode

if TYPE_CHECKING:
    from svcctl.infrastructure.manager import ServiceHandle, ServiceManager

logger = logging.getLogger(__name__)

MULTIPLE_MATCHES_MESSAGE = "Found more than one service with the supplied name."


def not_found_message(name: str) -> str:
    return f"Could not find a service called '{name}'."


def describe_error(exc: BaseException) -> str:
    """Underlying failure text, falling back to the exception type."""
    text = str(exc).strip()
    return text or type(exc).__name__


class BaseService:
    """Abstract base for service-layer classes.

    Usage::

        class StatusService(BaseService):
            def status(self, name: str) -> ControlResult:
                handle = self._resolve(name)
                ...
    """

    def __init__(self, manager: ServiceManager) -> None:
        self._manager = manager

    def _resolve(self, pattern: str) -> ServiceHandle | ControlResult:
        """Resolve *pattern* to exactly one handle, or a failure result.

        OS errors from the lookup propagate to the caller.
        """
        matches = self._manager.find(pattern)
        if not matches:
            logger.debug("No service matched %r", pattern)
            return ControlResult.of(ExitCode.TARGET_NOT_FOUND, not_found_message(pattern))
        if len(matches) > 1:
            logger.debug(
                "Pattern %r matched %s", pattern, ", ".join(h.name for h in matches)
            )
            return ControlResult.of(ExitCode.TARGET_NOT_FOUND, MULTIPLE_MATCHES_MESSAGE)
        return matches[0]
