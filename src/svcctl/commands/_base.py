"""Click command classes shared by every svcctl command.

Both classes take an optional ``examples`` block. When present, an eager
``--examples`` flag prints it and exits 0 before any argument validation,
so it never produces a JSON result and never touches a service manager.
"""

from __future__ import annotations

from typing import Any

import click


def _examples_option(examples: str) -> click.Option:
    def _show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n\n{examples.rstrip()}")
        ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_show,
        help="Print example invocations and exit.",
    )


class SvcCommand(click.Command):
    """A leaf command (``control``, ``start``, ``stop``, ``status``)."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        self._examples = _examples_option(examples) if examples else None

    def get_params(self, ctx: click.Context) -> list[click.Parameter]:
        params = super().get_params(ctx)
        return params if self._examples is None else [*params, self._examples]


class SvcGroup(click.Group):
    """The root ``svcctl`` group; subcommands default to :class:`SvcCommand`."""

    command_class = SvcCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        self._examples = _examples_option(examples) if examples else None

    def get_params(self, ctx: click.Context) -> list[click.Parameter]:
        params = super().get_params(ctx)
        return params if self._examples is None else [*params, self._examples]
