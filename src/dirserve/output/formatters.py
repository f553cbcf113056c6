"""Rich/JSON output for serve plans.

Humans get a short banner and a route table; ``--json`` gets the
serialized :class:`ServePlan`.  Rich renders into a buffer and callers
hand the resulting string to ``click.echo``; off a TTY it carries no
ANSI codes.
"""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

if TYPE_CHECKING:
    from rich.console import RenderableType

    from dirserve.plan import ServePlan

THEME = Theme(
    {
        "ds.ok": "bold green",
        "ds.warning": "bold yellow",
        "ds.url": "bold cyan",
        "ds.key": "dim",
        "ds.path": "blue",
        "ds.route": "bold",
    }
)

WIDTH = 120


def render(*items: RenderableType, no_color: bool = False, width: int = WIDTH) -> str:
    """Print *items* to a throwaway console and return the text.

    Text lines are soft-wrapped so long paths survive intact for grep.
    """
    buffer = StringIO()
    console = Console(file=buffer, theme=THEME, no_color=no_color, highlight=False, width=width)
    for item in items:
        console.print(item, soft_wrap=isinstance(item, Text))
    return buffer.getvalue().rstrip("\n")


def _route_table(plan: ServePlan) -> Table:
    table = Table(show_header=True, header_style="ds.key", box=None, pad_edge=False)
    table.add_column("route", style="ds.route")
    table.add_column("serves", style="ds.path", overflow="fold")
    for row in plan.routes:
        table.add_row(row.url, row.target)
    return table


def _warnings(plan: ServePlan) -> list[Text]:
    if plan.root_exists:
        return []
    return [Text.assemble(("WARNING: ", "ds.warning"), f"{plan.root} does not exist")]


def format_banner(plan: ServePlan) -> str:
    """Startup banner printed once the listener is bound."""
    headline = Text.assemble(
        ("Serving ", "ds.ok"), (str(plan.root), "ds.path"), " on ", (plan.url, "ds.url")
    )
    return render(
        headline,
        *_warnings(plan),
        _route_table(plan),
        Text("Press Ctrl+C to stop", style="ds.key"),
    )


def format_plan(plan: ServePlan, *, json_output: bool = False) -> str:
    """Format a plan for ``dirserve resolve``."""
    if json_output:
        return plan.model_dump_json(indent=2)
    lines = [
        Text.assemble(("root: ", "ds.key"), (str(plan.root), "ds.path")),
        Text.assemble(("url: ", "ds.key"), (plan.url, "ds.url")),
    ]
    if plan.config_path is not None:
        lines.append(Text.assemble(("config: ", "ds.key"), str(plan.config_path)))
    return render(*lines, *_warnings(plan), _route_table(plan))
