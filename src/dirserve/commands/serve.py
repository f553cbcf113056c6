"""serve — bind the listener and serve files until interrupted."""

from __future__ import annotations

from pathlib import Path

import click
import structlog

from dirserve.commands._base import DirserveCommand
from dirserve.commands._context import AppContext
from dirserve.config.models import Layout

log = structlog.get_logger(__name__)


@click.command(
    cls=DirserveCommand,
    examples=[
        ("Serve ./dist (or ../dist) on port 8080", "dirserve serve"),
        ("Serve a build directory on a custom port", "DIST_DIR=/srv/app PORT=9000 dirserve serve"),
        ("/static/* from ./static, index.html at /", "dirserve serve --layout site"),
        (
            "Single-page app: unknown paths return index.html",
            "dirserve serve --dir build --index index.html --spa",
        ),
    ],
)
@click.option(
    "-d",
    "--dir",
    "dist_dir",
    default=None,
    type=click.Path(file_okay=False, path_type=str),
    help="Directory to serve (overrides DIST_DIR).",
)
@click.option("--host", default=None, help="Bind address.  [default: 0.0.0.0]")
@click.option(
    "-p",
    "--port",
    default=None,
    type=click.IntRange(0, 65535),
    help="Listen port (overrides PORT).  [default: 8080]",
)
@click.option(
    "--layout",
    default=None,
    type=click.Choice([layout.value for layout in Layout]),
    help="Routing preset.  [default: app]",
)
@click.option("--prefix", default=None, help="URL prefix the directory is mounted under.")
@click.option(
    "--index", default=None, help="Document returned for '/' (relative to the directory)."
)
@click.option("--spa", is_flag=True, help="Return the index document for unknown paths.")
@click.pass_obj
def serve(
    app: AppContext,
    dist_dir: str | None,
    host: str | None,
    port: int | None,
    layout: str | None,
    prefix: str | None,
    index: str | None,
    spa: bool,
) -> None:
    """Serve a directory over HTTP."""
    from dirserve.output.formatters import format_banner
    from dirserve.server.listener import BindError, create_listener
    from dirserve.server.listener import serve as serve_forever

    app.override(
        dist_dir=Path(dist_dir) if dist_dir else None,
        port=port,
        host=host,
        layout=Layout(layout) if layout else None,
        prefix=prefix,
        index=index,
        spa=spa or None,
    )
    settings = app.settings
    root, table = app.routes()

    try:
        server = create_listener(settings.serve.host, settings.port, table)
    except BindError as exc:
        log.critical("listener failed to bind", host=exc.host, port=exc.port, reason=exc.reason)
        click.echo(f"ERROR: {exc}", err=True)
        raise SystemExit(1) from exc

    app.echo(format_banner(app.plan(root, table, port=server.server_address[1])))
    log.info("serving", root=str(root), url=server.url)
    serve_forever(server)
