"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Owns the settings, configures logging, and turns
settings into a route table and a printable plan.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from dirserve.plan import RouteRow, ServePlan
from dirserve.server.resolve import build_routes, resolve_root

if TYPE_CHECKING:
    from dirserve.config.settings import DirserveSettings
    from dirserve.server.routing import RouteTable


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  Nothing touches the
    filesystem or the network until a command asks for routes.
    """

    def __init__(self, settings: DirserveSettings) -> None:
        self.settings = settings

        from dirserve.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def override(self, **overrides: Any) -> None:
        """Apply per-command flags on top of the root settings."""
        self.settings = self.settings.with_overrides(**overrides)

    def resolve_root(self) -> Path:
        """Directory to serve: explicit, else the layout's, else candidates.

        An explicit ``dist_dir`` is relative to the CWD (TOML values arrive
        already anchored); layout and candidate paths are relative to the
        config file's directory.
        """
        serve = self.settings.serve
        if self.settings.dist_dir is not None:
            return resolve_root(self.settings.dist_dir, base=Path.cwd())
        return resolve_root(serve.layout_directory, serve.candidates, base=self.settings.base_dir)

    def routes(self) -> tuple[Path, RouteTable]:
        root = self.resolve_root()
        serve = self.settings.serve
        table = build_routes(
            root,
            prefix=serve.effective_prefix,
            index=serve.effective_index,
            spa=serve.spa,
        )
        return root, table

    def plan(self, root: Path, table: RouteTable, *, port: int | None = None) -> ServePlan:
        return ServePlan(
            root=root,
            root_exists=root.is_dir(),
            host=self.settings.serve.host,
            port=self.settings.port if port is None else port,
            routes=[RouteRow(url=url, target=target) for url, target in table.describe()],
            config_path=self.settings.config_path,
        )

    def echo(self, message: str) -> None:
        """Write to stdout unless ``--quiet``."""
        if not self.settings.quiet:
            click.echo(message)
