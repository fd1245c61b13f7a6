"""ServiceManager — the OS service-control collaborator.

Backends implement lookup, status reads, and non-blocking start/stop.
The bounded wait is shared: it polls the live status until the target is
observed or the deadline passes.
"""

from __future__ import annotations

import fnmatch
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass

from svcctl.domain.lifecycle import ServiceStatus

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.5


class ServiceControlError(Exception):
    """Raised when the OS service manager rejects or fails an operation."""


@dataclass(frozen=True)
class ServiceHandle:
    """Reference to exactly one OS service.

    Holds no status; callers re-read it via :meth:`ServiceManager.status`.
    """

    name: str
    display_name: str = ""

    def __str__(self) -> str:
        return self.name


def match_names(pattern: str, names: Iterable[str], *, case_sensitive: bool = True) -> bool:
    """Return True if *pattern* (exact or glob) matches any of *names*."""
    if case_sensitive:
        return any(fnmatch.fnmatchcase(name, pattern) for name in names if name)
    lowered = pattern.lower()
    return any(fnmatch.fnmatchcase(name.lower(), lowered) for name in names if name)


class ServiceManager(ABC):
    """Base class for OS service managers."""

    def __init__(self, *, poll_interval: float = DEFAULT_POLL_INTERVAL) -> None:
        self.poll_interval = poll_interval

    @abstractmethod
    def find(self, pattern: str) -> list[ServiceHandle]:
        """Return every service whose name matches *pattern*."""

    @abstractmethod
    def status(self, handle: ServiceHandle) -> ServiceStatus:
        """Read the current status of *handle* from the OS."""

    @abstractmethod
    def start(self, handle: ServiceHandle) -> None:
        """Request a start without waiting for it to complete."""

    @abstractmethod
    def stop(self, handle: ServiceHandle) -> None:
        """Request a stop without waiting for it to complete."""

    def wait_for_status(
        self,
        handle: ServiceHandle,
        target: ServiceStatus,
        timeout: float,
    ) -> bool:
        """Block until *handle* reports *target* or *timeout* seconds elapse.

        Returns True if the target status was observed, False on timeout.
        Errors from status reads propagate to the caller.
        """
        deadline = time.monotonic() + timeout
        while True:
            current = self.status(handle)
            if current == target:
                return True
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.debug(
                    "Timed out waiting for %s to reach %s (last: %s)", handle, target, current
                )
                return False
            time.sleep(min(self.poll_interval, remaining))
