"""Command base class with on-demand usage examples.

``--help`` stays short; ``--examples`` prints sample invocations, each a
``(description, command line)`` pair, and exits.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click

Example = tuple[str, str]


def render_examples(examples: Sequence[Example]) -> str:
    return "\n\n".join(f"  # {about}\n  {line}" for about, line in examples)


class DirserveCommand(click.Command):
    """click.Command with an eager ``--examples`` flag."""

    def __init__(self, *args: Any, examples: Sequence[Example] = (), **kwargs: Any) -> None:
        if examples:
            kwargs.setdefault("epilog", "Run with --examples for sample invocations.")
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(render_examples(self.examples))
        ctx.exit(0)
