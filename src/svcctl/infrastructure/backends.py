"""Backend selection for the OS service manager."""

from __future__ import annotations

import sys

from svcctl.infrastructure.manager import DEFAULT_POLL_INTERVAL, ServiceManager

BACKEND_NAMES = ("auto", "systemd", "windows")


def resolve_backend(name: str, platform: str | None = None) -> str:
    """Map ``auto`` to the native backend for *platform* (default: current)."""
    if name != "auto":
        return name
    return "windows" if (platform or sys.platform) == "win32" else "systemd"


def create_manager(
    name: str = "auto",
    *,
    user_scope: bool = False,
    systemctl: str = "systemctl",
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> ServiceManager:
    """Instantiate the service manager for backend *name*.

    Raises ValueError for an unknown backend name.
    """
    resolved = resolve_backend(name)
    if resolved == "systemd":
        from svcctl.infrastructure.systemd import SystemdServiceManager

        return SystemdServiceManager(
            user_scope=user_scope, systemctl=systemctl, poll_interval=poll_interval
        )
    if resolved == "windows":
        from svcctl.infrastructure.windows import WindowsServiceManager

        return WindowsServiceManager(poll_interval=poll_interval)
    msg = f"Unknown backend {name!r}; expected one of {', '.join(BACKEND_NAMES)}"
    raise ValueError(msg)
