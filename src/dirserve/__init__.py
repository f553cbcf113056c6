"""dirserve — minimal static-file HTTP server."""

__version__ = "0.1.0"
