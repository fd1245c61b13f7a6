"""WindowsServiceManager — the Service Control Manager via pywin32.

pywin32 is imported lazily so the package imports cleanly on every
platform; it is only required when this backend is selected.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from svcctl.domain.lifecycle import ServiceStatus
from svcctl.infrastructure.manager import (
    DEFAULT_POLL_INTERVAL,
    ServiceControlError,
    ServiceHandle,
    ServiceManager,
    match_names,
)

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

# SCM dwCurrentState values (winsvc.h)
SCM_STATE_MAP: dict[int, ServiceStatus] = {
    1: ServiceStatus.STOPPED,
    2: ServiceStatus.START_PENDING,
    3: ServiceStatus.STOP_PENDING,
    4: ServiceStatus.RUNNING,
    5: ServiceStatus.CONTINUE_PENDING,
    6: ServiceStatus.PAUSE_PENDING,
    7: ServiceStatus.PAUSED,
}


def _load_pywin32() -> tuple[Any, Any, Any]:
    """Import pywin32 modules. Raises ServiceControlError if not installed."""
    try:
        import pywintypes
        import win32service
        import win32serviceutil
    except ImportError as exc:
        msg = "pywin32 is required for the windows backend (pip install pywin32)"
        raise ServiceControlError(msg) from exc
    return win32service, win32serviceutil, pywintypes


class WindowsServiceManager(ServiceManager):
    """Controls Win32 services through the local Service Control Manager."""

    def __init__(self, *, poll_interval: float = DEFAULT_POLL_INTERVAL) -> None:
        super().__init__(poll_interval=poll_interval)
        self._win32service, self._win32serviceutil, self._pywintypes = _load_pywin32()

    def _call(self, func: Callable[..., _T], *args: Any) -> _T:
        """Invoke a pywin32 function, wrapping its errors."""
        try:
            return func(*args)
        except self._pywintypes.error as exc:
            raise ServiceControlError(exc.strerror or str(exc)) from exc

    def find(self, pattern: str) -> list[ServiceHandle]:
        svc = self._win32service
        hscm = self._call(svc.OpenSCManager, None, None, svc.SC_MANAGER_ENUMERATE_SERVICE)
        try:
            entries = self._call(
                svc.EnumServicesStatus, hscm, svc.SERVICE_WIN32, svc.SERVICE_STATE_ALL
            )
        finally:
            svc.CloseServiceHandle(hscm)

        matches = [
            ServiceHandle(name=name, display_name=display_name)
            for name, display_name, _status in entries
            if match_names(pattern, (name, display_name), case_sensitive=False)
        ]
        logger.debug("Pattern %r matched %d service(s)", pattern, len(matches))
        return matches

    def status(self, handle: ServiceHandle) -> ServiceStatus:
        raw = self._call(self._win32serviceutil.QueryServiceStatus, handle.name)
        return SCM_STATE_MAP.get(raw[1], ServiceStatus.UNKNOWN)

    def start(self, handle: ServiceHandle) -> None:
        self._call(self._win32serviceutil.StartService, handle.name)

    def stop(self, handle: ServiceHandle) -> None:
        self._call(self._win32serviceutil.StopService, handle.name)
