"""Subcommand modules for dirserve.

Provides register_commands() which uses deferred imports to keep
``dirserve --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from dirserve.commands.resolve import resolve
    from dirserve.commands.serve import serve

    cli.add_command(serve)
    cli.add_command(resolve)
