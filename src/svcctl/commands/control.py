"""Commands: start or stop a service and wait for the target state."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from svcctl.commands._base import SvcCommand

if TYPE_CHECKING:
    from svcctl.commands._context import AppContext


def _run(app: AppContext, action: str | None, service: str | None, timeout: str | None) -> None:
    """Validate, then drive the request through the controller and emit."""
    from svcctl.services.controller import ControllerService
    from svcctl.services.result import ControlResult

    outcome = ControllerService.validate(action, service, timeout)
    if isinstance(outcome, ControlResult):
        app.emit(outcome)
        return
    app.emit(ControllerService(app.manager).execute(outcome))


# Raw strings: the controller validates so bad input yields exit code 1 JSON.
_timeout_option = click.option(
    "-t",
    "--timeout",
    "timeout",
    default=None,
    metavar="SECONDS",
    help="Seconds to wait for the target state (>= 1).",
)


@click.command(
    cls=SvcCommand,
    examples="""\
  svcctl control --action start --service nginx --timeout 30
  svcctl control --action STOP --service 'postgresql@*' --timeout 60
  svcctl --verbose --log-json control --action stop --service cron -t 10""",
)
@click.option("-a", "--action", default=None, metavar="start|stop", help="Action to perform.")
@click.option(
    "-s", "--service", default=None, metavar="NAME", help="Service name or glob pattern."
)
@_timeout_option
@click.pass_obj
def control(app: AppContext, action: str | None, service: str | None, timeout: str | None) -> None:
    """Start or stop a service and wait for it to settle."""
    _run(app, action, service, timeout)


@click.command(
    cls=SvcCommand,
    examples="""\
  svcctl start nginx --timeout 30
  svcctl --user start 'syncthing*' -t 15""",
)
@click.argument("service", required=False)
@_timeout_option
@click.pass_obj
def start(app: AppContext, service: str | None, timeout: str | None) -> None:
    """Start SERVICE and wait until it is running."""
    _run(app, "start", service, timeout)


@click.command(
    cls=SvcCommand,
    examples="""\
  svcctl stop nginx --timeout 30
  svcctl --backend windows stop Spooler -t 20""",
)
@click.argument("service", required=False)
@_timeout_option
@click.pass_obj
def stop(app: AppContext, service: str | None, timeout: str | None) -> None:
    """Stop SERVICE and wait until it is stopped."""
    _run(app, "stop", service, timeout)
