"""HTTP listener bootstrap.

Binding is the only fatal failure in the server: :func:`create_listener`
raises :class:`BindError` and the CLI turns it into a logged exit.
"""

from __future__ import annotations

import functools
from http.server import ThreadingHTTPServer
from typing import TYPE_CHECKING

import structlog

from dirserve.server.handler import StaticRequestHandler

if TYPE_CHECKING:
    from dirserve.server.routing import RouteTable

log = structlog.get_logger(__name__)


class BindError(OSError):
    """The listener could not bind its address."""

    def __init__(self, host: str, port: int, reason: str) -> None:
        super().__init__(f"cannot listen on {host or '0.0.0.0'}:{port}: {reason}")
        self.host = host
        self.port = port
        self.reason = reason


class StaticHTTPServer(ThreadingHTTPServer):
    """Thread-per-connection server; a port already in use fails to bind."""

    daemon_threads = True
    allow_reuse_port = False

    @property
    def url(self) -> str:
        host, port = self.server_address[:2]
        return f"http://{host}:{port}"


def create_listener(host: str, port: int, routes: RouteTable) -> StaticHTTPServer:
    """Bind a :class:`StaticHTTPServer` serving *routes*.

    *port* ``0`` picks an ephemeral port; read the bound one from
    ``server.server_address`` or ``server.url``.

    Raises:
        BindError: The address is in use, not permitted, or invalid.
    """
    handler = functools.partial(StaticRequestHandler, routes=routes)
    try:
        server = StaticHTTPServer((host, port), handler)
    except OSError as exc:
        raise BindError(host, port, exc.strerror or str(exc)) from exc
    log.info("listener bound", url=server.url)
    return server


def serve(server: StaticHTTPServer, *, poll_interval: float = 0.5) -> None:
    """Serve until interrupted, then close the socket."""
    try:
        server.serve_forever(poll_interval=poll_interval)
    except KeyboardInterrupt:
        log.info("interrupted, shutting down")
    finally:
        server.server_close()
