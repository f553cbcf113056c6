"""Request handler that serves files through a :class:`RouteTable`."""

from __future__ import annotations

from http import HTTPStatus
from http.server import SimpleHTTPRequestHandler
from typing import Any

import structlog

from dirserve import __version__
from dirserve.config.logging import ACCESS_LOGGER
from dirserve.server.routing import RouteTable

log = structlog.get_logger(ACCESS_LOGGER)


class StaticRequestHandler(SimpleHTTPRequestHandler):
    """``SimpleHTTPRequestHandler`` with prefix mounts and an index route.

    Construct through ``functools.partial(StaticRequestHandler, routes=...)``;
    the base class handles the request inside ``__init__``, so *routes* must
    be bound before delegating.
    """

    server_version = f"dirserve/{__version__}"

    def __init__(self, *args: Any, routes: RouteTable, **kwargs: Any) -> None:
        self.routes = routes
        super().__init__(*args, **kwargs)

    def send_head(self):  # type: ignore[no-untyped-def]
        location = self.routes.redirect_for(self.path)
        if location is not None:
            self.send_response(HTTPStatus.MOVED_PERMANENTLY)
            self.send_header("Location", location)
            self.send_header("Content-Length", "0")
            self.end_headers()
            return None
        if self.routes.lookup(self.path) is None:
            self.send_error(HTTPStatus.NOT_FOUND, "File not found")
            return None
        return super().send_head()

    def translate_path(self, path: str) -> str:
        # Only reached through send_head, after the route was found.
        return self.routes.lookup(path) or ""

    def log_request(self, code: int | str = "-", size: int | str = "-") -> None:
        status = code.value if isinstance(code, HTTPStatus) else code
        log.info(
            "request",
            client=self.address_string(),
            method=self.command,
            path=self.path,
            status=status,
            size=size,
        )

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        log.debug(format % args, client=self.address_string())
