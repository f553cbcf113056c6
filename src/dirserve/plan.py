"""ServePlan — what a ``serve`` invocation will do, resolved up front.

Shared by ``dirserve serve`` (startup banner) and ``dirserve resolve``
(printed without binding).
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, computed_field


class RouteRow(BaseModel):
    """One URL pattern and the filesystem target it maps to."""

    model_config = {"frozen": True}

    url: str
    target: str


class ServePlan(BaseModel):
    """Resolved serve configuration.

    Attributes:
        root: Absolute directory being served.
        root_exists: Whether *root* is an existing directory.
        host: Bind address.
        port: Listen port (the bound port once a listener exists).
        routes: Registered URL-to-file mappings.
        config_path: Config file in use, if any.
    """

    model_config = {"frozen": True}

    root: Path
    root_exists: bool
    host: str
    port: int
    routes: list[RouteRow] = Field(default_factory=list)
    config_path: Path | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"
