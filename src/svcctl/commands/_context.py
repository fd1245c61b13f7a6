"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy ServiceManager initialization and
centralized result emission (stdout JSON + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from svcctl.output.formatters import format_result
from svcctl.services.result import ControlResult, ExitCode

if TYPE_CHECKING:
    from svcctl.config.settings import SvcSettings
    from svcctl.infrastructure.manager import ServiceManager


def emit_result(result: ControlResult) -> None:
    """Write *result* as JSON to stdout and apply its exit code.

    Returns normally on success; raises ``SystemExit`` otherwise.
    """
    click.echo(format_result(result))
    if result.exit_code != ExitCode.OK:
        raise SystemExit(result.exit_code)


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The service manager is
    lazily initialized on first use so argument validation and ``--help``
    never touch the OS.
    """

    def __init__(self, settings: SvcSettings) -> None:
        self.settings = settings
        self._manager: ServiceManager | None = None

        from svcctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def manager(self) -> ServiceManager:
        """The service manager for the configured backend (created lazily).

        If the backend cannot be created, an exit-code-99 result is written
        and ``SystemExit`` is raised.
        """
        if self._manager is None:
            from svcctl.infrastructure.backends import create_manager
            from svcctl.infrastructure.manager import ServiceControlError
            from svcctl.services.base import describe_error

            backend = self.settings.backend
            try:
                self._manager = create_manager(
                    backend.name,
                    user_scope=backend.user_scope,
                    systemctl=backend.systemctl,
                    poll_interval=self.settings.wait.poll_interval,
                )
            except (ServiceControlError, ValueError) as exc:
                result = ControlResult.of(
                    ExitCode.UNEXPECTED,
                    f"Service manager unavailable: {describe_error(exc)}",
                )
                click.echo(format_result(result))
                raise SystemExit(result.exit_code) from exc
        return self._manager

    def emit(self, result: ControlResult) -> None:
        """Format and output a ControlResult with correct exit semantics.

        The JSON result always goes to stdout; diagnostics stay on stderr.
        """
        emit_result(result)
