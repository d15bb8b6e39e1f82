"""Client side of the face reading page."""

from facefortune.client.api import (
    FortuneAPIError,
    FortuneClient,
    MalformedResponseError,
)
from facefortune.client.render import plain_text, render_result_html, share_text
from facefortune.client.session import ReadingSession
from facefortune.client.state import ChatMessage, ViewState

__all__ = [
    "ChatMessage",
    "FortuneAPIError",
    "FortuneClient",
    "MalformedResponseError",
    "ReadingSession",
    "ViewState",
    "plain_text",
    "render_result_html",
    "share_text",
]
