"""Subcommand modules for svcctl.

Provides register_commands() which uses deferred imports to keep
``svcctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from svcctl.commands.control import control, start, stop
    from svcctl.commands.status import status

    cli.add_command(control)
    cli.add_command(start)
    cli.add_command(stop)
    cli.add_command(status)
