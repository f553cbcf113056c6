"""Shared pytest fixtures and test helpers for dirserve tests."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Generator
from pathlib import Path

import httpx
import pytest
from click.testing import CliRunner

from dirserve.server.listener import StaticHTTPServer, create_listener
from dirserve.server.routing import RouteTable


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test from an empty CWD with no serve-related env vars."""
    for name in list(os.environ):
        if name.upper().startswith("DIRSERVE_") or name.upper() in ("PORT", "DIST_DIR"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test.

    CLI invocations reconfigure logging against CliRunner's temporary
    streams, which are closed once the invocation returns.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    levels = {name: logging.getLogger(name).level for name in ("dirserve", "dirserve.access")}
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def app_root(tmp_path: Path) -> Path:
    """Build output directory as produced by a bundler (``dist/``)."""
    root = tmp_path / "dist"
    (root / "assets").mkdir(parents=True)
    (root / "index.html").write_text("<h1>app</h1>\n")
    (root / "assets" / "app.js").write_text("console.log('app');\n")
    (root / "assets" / "logo.bin").write_bytes(bytes(range(256)))
    (root / "empty").mkdir()
    return root


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Hand-written site directory (``static/``) with its own index."""
    root = tmp_path / "static"
    root.mkdir()
    (root / "index.html").write_text("<h1>site</h1>\n")
    (root / "app.css").write_text("body { margin: 0; }\n")
    (tmp_path / "secret.txt").write_text("outside the root\n")
    return root


@pytest.fixture
def live_server() -> Generator[Callable[[RouteTable], httpx.Client]]:
    """Start a listener on an ephemeral port; returns a client bound to it."""
    running: list[tuple[StaticHTTPServer, threading.Thread, httpx.Client]] = []

    def _start(routes: RouteTable) -> httpx.Client:
        server = create_listener("127.0.0.1", 0, routes)
        thread = threading.Thread(
            target=server.serve_forever,
            kwargs={"poll_interval": 0.05},
            daemon=True,
        )
        thread.start()
        client = httpx.Client(base_url=server.url, trust_env=False, timeout=5.0)
        running.append((server, thread, client))
        return client

    yield _start

    for server, thread, client in running:
        client.close()
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)
