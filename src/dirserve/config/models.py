"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, dirserve.toml only contains
overrides.  A fresh checkout needs no config file at all.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from dirserve.server.resolve import DEFAULT_CANDIDATES


class Layout(StrEnum):
    """Routing presets.

    ``app`` mounts the build output at ``/``.  ``site`` mounts a ``static``
    directory under ``/static/`` and answers ``/`` with its ``index.html``.
    """

    APP = "app"
    SITE = "site"


# layout -> (prefix, index, default directory)
_LAYOUT_DEFAULTS: dict[Layout, tuple[str, str | None, str | None]] = {
    Layout.APP: ("/", None, None),
    Layout.SITE: ("/static/", "index.html", "static"),
}


class ServeConfig(BaseModel):
    """[serve] section."""

    model_config = {"frozen": True}

    host: str = "0.0.0.0"
    layout: Layout = Layout.APP
    prefix: str | None = None
    index: str | None = None
    spa: bool = False
    candidates: list[str] = Field(default_factory=lambda: list(DEFAULT_CANDIDATES))

    @property
    def effective_prefix(self) -> str:
        return self.prefix or _LAYOUT_DEFAULTS[self.layout][0]

    @property
    def effective_index(self) -> str | None:
        """Explicit index, else the layout's; an empty string disables it."""
        if self.index is not None:
            return self.index or None
        return _LAYOUT_DEFAULTS[self.layout][1]

    @property
    def layout_directory(self) -> str | None:
        return _LAYOUT_DEFAULTS[self.layout][2]
