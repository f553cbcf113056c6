"""URL-to-directory mapping.

A :class:`RouteTable` holds one or more :class:`Mount` entries plus an
optional index document served for ``/``.  Lookups depend only on the
request path and the filesystem, so one table is shared read-only across
handler threads.
"""

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import unquote, urlsplit


def _request_path(path: str) -> str:
    """Decoded path of a request target, without query string or fragment.

    Routing and filesystem mapping both work on this form, so an encoded
    prefix (``/%73tatic/``) matches like its plain spelling.
    """
    return unquote(urlsplit(path).path, errors="surrogatepass") or "/"


def safe_join(directory: Path, url_path: str) -> str:
    """Map a decoded *url_path* onto *directory* without escaping it.

    ``.`` and ``..`` segments and segments containing a path separator are
    dropped, matching ``SimpleHTTPRequestHandler.translate_path``.  A
    trailing slash on *url_path* is kept so directory redirects still work.
    """
    trailing_slash = url_path.rstrip().endswith("/")
    normalized = posixpath.normpath(url_path)
    result = str(directory)
    for word in normalized.split("/"):
        if not word or os.path.dirname(word) or word in (os.curdir, os.pardir):
            continue
        result = os.path.join(result, word)
    if trailing_slash:
        result += "/"
    return result


@dataclass(frozen=True)
class Mount:
    """A URL prefix served from a root directory.

    Attributes:
        prefix: URL prefix, normalized to start and end with ``/``.
        directory: Filesystem root for the prefix.
    """

    prefix: str
    directory: Path

    def __post_init__(self) -> None:
        prefix = "/" + self.prefix.strip("/")
        if prefix != "/":
            prefix += "/"
        object.__setattr__(self, "prefix", prefix)

    def strip(self, path: str) -> str | None:
        """Return *path* below the prefix (leading ``/`` kept), or None."""
        if not path.startswith(self.prefix):
            return None
        return "/" + path[len(self.prefix) :]


@dataclass(frozen=True)
class RouteTable:
    """Mounts plus optional index document and SPA fallback.

    Attributes:
        mounts: URL-to-directory mappings; the longest prefix wins.
        index: Document returned for ``/`` instead of a directory listing.
        spa: Return *index* for any path that resolves to nothing.
    """

    mounts: tuple[Mount, ...]
    index: Path | None = None
    spa: bool = False
    _ordered: tuple[Mount, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.mounts, key=lambda m: len(m.prefix), reverse=True))
        object.__setattr__(self, "_ordered", ordered)

    def match(self, path: str) -> tuple[Mount, str] | None:
        """Return the longest mount matching *path* and the stripped remainder."""
        for mount in self._ordered:
            rest = mount.strip(path)
            if rest is not None:
                return mount, rest
        return None

    def lookup(self, path: str) -> str | None:
        """Resolve a request target to a filesystem path.

        Returns None when no route applies; the caller answers 404.
        """
        request_path = _request_path(path)
        if request_path == "/" and self.index is not None:
            return str(self.index)

        matched = self.match(request_path)
        if matched is not None:
            mount, rest = matched
            target = safe_join(mount.directory, rest)
            if not self.fallback_enabled or os.path.exists(target):
                return target

        if self.fallback_enabled:
            return str(self.index)
        return None

    def redirect_for(self, path: str) -> str | None:
        """Location for a bare mount prefix (``/static`` → ``/static/``)."""
        request_path = _request_path(path)
        query = urlsplit(path).query
        for mount in self._ordered:
            if mount.prefix != "/" and request_path == mount.prefix.rstrip("/"):
                location = mount.prefix
                if query:
                    location += "?" + query
                return location
        return None

    @property
    def fallback_enabled(self) -> bool:
        return self.spa and self.index is not None

    def describe(self) -> list[tuple[str, str]]:
        """``(url, target)`` pairs for banners and ``resolve`` output."""
        rows: list[tuple[str, str]] = []
        if self.index is not None:
            rows.append(("/", str(self.index)))
        for mount in self._ordered:
            rows.append((mount.prefix + "*", str(mount.directory)))
        if self.fallback_enabled:
            rows.append(("(fallback)", str(self.index)))
        return rows
