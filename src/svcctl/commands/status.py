"""Command: report the current status of a service."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from svcctl.commands._base import SvcCommand

if TYPE_CHECKING:
    from svcctl.commands._context import AppContext


@click.command(
    cls=SvcCommand,
    examples="""\
  svcctl status nginx
  svcctl --user status 'syncthing*'""",
)
@click.argument("service", required=False)
@click.pass_obj
def status(app: AppContext, service: str | None) -> None:
    """Report the current status of SERVICE."""
    from svcctl.services.result import ControlResult, ExitCode
    from svcctl.services.status import StatusService

    if not (service or "").strip():
        app.emit(ControlResult.of(ExitCode.INVALID_INPUT, "A service name is required."))
        return
    app.emit(StatusService(app.manager).status(service or ""))
