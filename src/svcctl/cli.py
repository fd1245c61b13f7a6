"""Root CLI group for svcctl with global flags and command registration."""

from __future__ import annotations

import logging
import sys

import click
from pydantic import ValidationError

from svcctl import __version__
from svcctl.commands import register_commands
from svcctl.commands._base import SvcGroup
from svcctl.commands._context import AppContext, emit_result
from svcctl.config.settings import ConfigError, SvcSettings
from svcctl.infrastructure.backends import BACKEND_NAMES
from svcctl.services.result import ControlResult, ExitCode

logger = logging.getLogger(__name__)

NO_COMMAND_MESSAGE = "A command is required. Run 'svcctl --help' for usage."


@click.group(
    name="svcctl",
    cls=SvcGroup,
    invoke_without_command=True,
    examples="""\
  svcctl control --action start --service nginx --timeout 30
  svcctl stop 'myapp-*' --timeout 60
  SVCCTL_VERBOSE=1 svcctl status sshd""",
)
@click.version_option(version=__version__, prog_name="svcctl")
@click.option("-v", "--verbose", is_flag=True, help="Narrate progress to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--backend",
    type=click.Choice(BACKEND_NAMES),
    default=None,
    help="Service manager backend (default: auto).",
)
@click.option("--user", "user_scope", is_flag=True, help="Manage the user's systemd units.")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    backend: str | None,
    user_scope: bool,
) -> None:
    """svcctl — start or stop an OS service and wait for it to settle."""
    try:
        settings = SvcSettings.from_cli(
            config_path=config_path,
            backend=backend,
            user_scope=user_scope,
            verbose=verbose,
            log_json=log_json,
        )
    except ConfigError as exc:
        emit_result(ControlResult.of(ExitCode.INVALID_INPUT, exc.format_message()))
        return
    except ValidationError as exc:
        emit_result(ControlResult.of(ExitCode.INVALID_INPUT, f"Invalid configuration: {exc}"))
        return
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        emit_result(ControlResult.of(ExitCode.INVALID_INPUT, NO_COMMAND_MESSAGE))


register_commands(cli)


def main(args: list[str] | None = None) -> None:
    """Console-script entry point.

    Usage errors from Click become an exit-code-1 JSON result so callers
    always receive exactly one JSON object on stdout.
    """
    try:
        rv = cli.main(args=args, prog_name="svcctl", standalone_mode=False)
    except click.ClickException as exc:
        emit_result(ControlResult.of(ExitCode.INVALID_INPUT, exc.format_message()))
        rv = None
    except click.Abort:
        emit_result(ControlResult.of(ExitCode.UNEXPECTED, "Aborted."))
        rv = None
    except Exception as exc:
        logger.debug("Unhandled error", exc_info=True)
        emit_result(ControlResult.of(ExitCode.UNEXPECTED, f"Unexpected error: {exc}"))
        rv = None
    sys.exit(rv if isinstance(rv, int) else 0)
