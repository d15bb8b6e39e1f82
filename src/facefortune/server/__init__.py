"""HTTP server for the FaceFortune API."""

from facefortune.server.app import FortuneServer, create_app
from facefortune.server.runner import ServerRunner

__all__ = ["FortuneServer", "ServerRunner", "create_app"]
