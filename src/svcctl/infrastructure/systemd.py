"""SystemdServiceManager — systemd units via the ``systemctl`` binary.

All commands are non-blocking (``--no-block``); the shared poll in
:meth:`ServiceManager.wait_for_status` observes the outcome.
"""

from __future__ import annotations

import logging
import subprocess

from svcctl.domain.lifecycle import ServiceStatus
from svcctl.infrastructure.manager import (
    DEFAULT_POLL_INTERVAL,
    ServiceControlError,
    ServiceHandle,
    ServiceManager,
    match_names,
)

logger = logging.getLogger(__name__)

UNIT_SUFFIX = ".service"

# ActiveState -> status
ACTIVE_STATE_MAP: dict[str, ServiceStatus] = {
    "active": ServiceStatus.RUNNING,
    "reloading": ServiceStatus.RUNNING,
    "refreshing": ServiceStatus.RUNNING,
    "inactive": ServiceStatus.STOPPED,
    "failed": ServiceStatus.STOPPED,
    "activating": ServiceStatus.START_PENDING,
    "deactivating": ServiceStatus.STOP_PENDING,
}


def _is_template(unit: str) -> bool:
    return unit.endswith("@" + UNIT_SUFFIX)


def _first_column(output: str) -> list[str]:
    units: list[str] = []
    for line in output.splitlines():
        parts = line.split()
        if parts and parts[0].endswith(UNIT_SUFFIX):
            units.append(parts[0])
    return units


def parse_show_output(output: str) -> dict[str, str]:
    """Parse ``KEY=value`` lines printed by ``systemctl show``."""
    props: dict[str, str] = {}
    for line in output.splitlines():
        key, sep, value = line.partition("=")
        if sep:
            props[key.strip()] = value.strip()
    return props


class SystemdServiceManager(ServiceManager):
    """Controls systemd service units, system-wide or for the current user."""

    def __init__(
        self,
        *,
        user_scope: bool = False,
        systemctl: str = "systemctl",
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        super().__init__(poll_interval=poll_interval)
        self._user_scope = user_scope
        self._systemctl = systemctl

    # ------------------------------------------------------------------
    # systemctl subprocess helpers
    # ------------------------------------------------------------------

    def _run(self, *args: str) -> str:
        """Run systemctl and return stdout. Raises ServiceControlError on failure."""
        cmd = [self._systemctl]
        if self._user_scope:
            cmd.append("--user")
        cmd.extend(args)
        logger.debug("Running %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=True)
        except FileNotFoundError as exc:
            msg = f"{self._systemctl} not found - systemd not available"
            raise ServiceControlError(msg) from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"{' '.join(cmd)} exited with {exc.returncode}"
            raise ServiceControlError(detail) from exc
        return proc.stdout

    # ------------------------------------------------------------------
    # ServiceManager
    # ------------------------------------------------------------------

    def find(self, pattern: str) -> list[ServiceHandle]:
        units = set(
            _first_column(
                self._run("list-unit-files", "--type=service", "--no-legend", "--no-pager")
            )
        )
        units.update(
            _first_column(
                self._run(
                    "list-units", "--type=service", "--all", "--no-legend", "--no-pager", "--plain"
                )
            )
        )
        matches: list[ServiceHandle] = []
        for unit in sorted(units):
            if _is_template(unit):
                continue
            stem = unit.removesuffix(UNIT_SUFFIX)
            if match_names(pattern, (unit, stem)):
                matches.append(ServiceHandle(name=unit, display_name=stem))
        logger.debug("Pattern %r matched %d unit(s)", pattern, len(matches))
        return matches

    def status(self, handle: ServiceHandle) -> ServiceStatus:
        props = parse_show_output(
            self._run("show", "--property=ActiveState,SubState", "--", handle.name)
        )
        active_state = props.get("ActiveState", "")
        return ACTIVE_STATE_MAP.get(active_state, ServiceStatus.UNKNOWN)

    def start(self, handle: ServiceHandle) -> None:
        self._run("start", "--no-block", "--", handle.name)

    def stop(self, handle: ServiceHandle) -> None:
        self._run("stop", "--no-block", "--", handle.name)
