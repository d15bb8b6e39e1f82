"""CLI command modules."""

from facefortune.cli.commands import history, reading, serve

__all__ = [
    "history",
    "reading",
    "serve",
]
