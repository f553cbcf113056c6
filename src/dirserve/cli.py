"""Root CLI group for dirserve with global flags and command registration."""

from __future__ import annotations

import click

from dirserve import __version__
from dirserve.commands import register_commands
from dirserve.commands._context import AppContext
from dirserve.config.settings import DirserveSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="dirserve")
@click.option("-q", "--quiet", is_flag=True, help="No banner output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging, including access lines.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """dirserve — serve a directory over HTTP."""
    ctx.ensure_object(dict)
    settings = DirserveSettings.from_cli(
        config_path=config_path,
        quiet=quiet or None,
        verbose=verbose or None,
        log_json=log_json or None,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
