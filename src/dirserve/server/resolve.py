"""Serve-directory resolution.

An explicit directory always wins.  Otherwise the first existing candidate
is used, falling back to the last one: ``dist`` when running from a
container image, ``../dist`` when running from a source checkout.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from dirserve.server.routing import Mount, RouteTable

log = structlog.get_logger(__name__)

DEFAULT_CANDIDATES: tuple[str, ...] = ("dist", "../dist")


def _absolute(path: Path, base: Path) -> Path:
    return (path if path.is_absolute() else base / path).resolve()


def resolve_root(
    explicit: Path | str | None,
    candidates: Sequence[Path | str] = DEFAULT_CANDIDATES,
    *,
    base: Path | None = None,
) -> Path:
    """Return the absolute directory to serve.

    Relative paths are taken against *base* (default: CWD).  A missing
    directory is not an error; it is logged and every request will 404.

    Raises:
        ValueError: Neither *explicit* nor *candidates* were given.
    """
    base = base or Path.cwd()
    if explicit is not None and str(explicit) != "":
        root = _absolute(Path(explicit), base)
        source = "explicit"
    else:
        if not candidates:
            msg = "No directory given and no candidates to search"
            raise ValueError(msg)
        paths = [_absolute(Path(c), base) for c in candidates]
        root = next((p for p in paths if p.is_dir()), paths[-1])
        source = "candidates"

    if not root.is_dir():
        log.warning("serve directory does not exist", root=str(root))
    else:
        log.debug("serve directory resolved", root=str(root), source=source)
    return root


def build_routes(
    root: Path,
    *,
    prefix: str = "/",
    index: str | None = None,
    spa: bool = False,
) -> RouteTable:
    """Route table mounting *root* at *prefix*; *index* is relative to *root*."""
    index_path = root / index if index else None
    return RouteTable(mounts=(Mount(prefix, root),), index=index_path, spa=spa)
