"""resolve — print the directory, address and routes without binding."""

from __future__ import annotations

import click

from dirserve.commands._base import DirserveCommand
from dirserve.commands._context import AppContext


@click.command(
    cls=DirserveCommand,
    examples=[
        ("Which directory would be served from here?", "dirserve resolve"),
        ("Machine-readable, with an env override", "DIST_DIR=public dirserve resolve --json"),
    ],
)
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.pass_obj
def resolve(app: AppContext, json_output: bool) -> None:
    """Show what 'serve' would do."""
    from dirserve.output.formatters import format_plan

    root, table = app.routes()
    click.echo(format_plan(app.plan(root, table), json_output=json_output))
