"""Native mobile shell around the hosted web page."""

from facefortune.shell.protocol import (
    INJECTED_SCRIPT,
    ImagePicker,
    ImageRequest,
    PickerOptions,
    delivery_script,
    parse_request,
)
from facefortune.shell.webview import PageStatus, WebShell, WebView

__all__ = [
    "INJECTED_SCRIPT",
    "ImagePicker",
    "ImageRequest",
    "PageStatus",
    "PickerOptions",
    "WebShell",
    "WebView",
    "delivery_script",
    "parse_request",
]
