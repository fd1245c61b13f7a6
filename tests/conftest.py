"""Shared pytest fixtures and test helpers for svcctl tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from svcctl.domain.lifecycle import ServiceStatus
from svcctl.infrastructure import manager as manager_module
from svcctl.infrastructure.manager import ServiceHandle, ServiceManager, match_names


class FakeClock:
    """Stands in for the ``time`` module inside the wait loop."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeServiceManager(ServiceManager):
    """In-memory service manager with scripted transitions.

    ``settle_after`` is the number of status reads after a start/stop
    command before the service reaches its target; None means never.
    """

    def __init__(
        self,
        services: dict[str, ServiceStatus] | None = None,
        *,
        settle_after: int | None = 1,
        poll_interval: float = 0.5,
    ) -> None:
        super().__init__(poll_interval=poll_interval)
        self.services: dict[str, ServiceStatus] = dict(services or {})
        self.settle_after = settle_after
        self.commands: list[tuple[str, str]] = []
        self.status_reads = 0
        self.failures: dict[str, Exception] = {}
        self._pending: dict[str, tuple[ServiceStatus, int]] = {}

    def find(self, pattern: str) -> list[ServiceHandle]:
        self._maybe_fail("find")
        return [
            ServiceHandle(name=name, display_name=name)
            for name in sorted(self.services)
            if match_names(pattern, (name,))
        ]

    def status(self, handle: ServiceHandle) -> ServiceStatus:
        self._maybe_fail("status")
        self.status_reads += 1
        pending = self._pending.get(handle.name)
        if pending is not None:
            target, remaining = pending
            if remaining <= 0:
                self.services[handle.name] = target
                del self._pending[handle.name]
            else:
                self._pending[handle.name] = (target, remaining - 1)
        return self.services[handle.name]

    def start(self, handle: ServiceHandle) -> None:
        self._command("start", handle, ServiceStatus.START_PENDING, ServiceStatus.RUNNING)

    def stop(self, handle: ServiceHandle) -> None:
        self._command("stop", handle, ServiceStatus.STOP_PENDING, ServiceStatus.STOPPED)

    def _command(
        self,
        action: str,
        handle: ServiceHandle,
        transitional: ServiceStatus,
        target: ServiceStatus,
    ) -> None:
        self._maybe_fail(action)
        self.commands.append((action, handle.name))
        self.services[handle.name] = transitional
        if self.settle_after is not None:
            self._pending[handle.name] = (target, self.settle_after)

    def _maybe_fail(self, operation: str) -> None:
        exc = self.failures.get(operation)
        if exc is not None:
            raise exc


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    """Replace the wait loop's clock so timeouts elapse instantly."""
    fake = FakeClock()
    monkeypatch.setattr(manager_module, "time", fake)
    return fake


@pytest.fixture
def fake_manager(clock: FakeClock) -> FakeServiceManager:
    """A manager with one running and one stopped service."""
    return FakeServiceManager(
        {
            "nginx": ServiceStatus.RUNNING,
            "postgres": ServiceStatus.STOPPED,
        }
    )


@pytest.fixture
def installed_manager(
    fake_manager: FakeServiceManager,
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> Generator[FakeServiceManager]:
    """Route the CLI's backend factory to ``fake_manager``.

    Also isolates the CLI from any svcctl.toml or SVCCTL_* environment.
    """
    for var in ("SVCCTL_CONFIG", "SVCCTL_VERBOSE", "SVCCTL_LOG_JSON"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        "svcctl.infrastructure.backends.create_manager",
        lambda *args, **kwargs: fake_manager,
    )
    yield fake_manager


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo the handler and level changes made by configure_logging."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    svc = logging.getLogger("svcctl")
    svc_level = svc.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    svc.setLevel(svc_level)
