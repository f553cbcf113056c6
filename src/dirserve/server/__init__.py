"""Server layer — routing, request handler, listener, directory resolution.

This layer depends on stdlib ``http.server`` and structlog only.
It must never import from commands or output.
"""
