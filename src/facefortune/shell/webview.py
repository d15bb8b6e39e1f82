"""Mobile shell hosting the web page in an embedded browser."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol

from facefortune.config.models import ShellConfig
from facefortune.shell.protocol import (
    INJECTED_SCRIPT,
    ImagePicker,
    PickerOptions,
    delivery_script,
    parse_request,
)

logger = logging.getLogger(__name__)


class PageStatus(str, Enum):
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class WebView(Protocol):
    """The embedded browser the shell drives."""

    def inject_javascript(self, script: str) -> None: ...

    def reload(self) -> None: ...

    def go_back(self) -> None: ...


class WebShell:
    """Page-load state machine plus the native image bridge.

    ``loading -> loaded`` hides the splash, ``loading -> error`` shows the
    retry screen, and ``retry`` goes back to ``loading`` with a full reload.
    """

    def __init__(
        self,
        web_view: WebView,
        picker: ImagePicker,
        *,
        web_url: str,
        picker_quality: float = 0.7,
    ) -> None:
        self._web_view = web_view
        self._picker = picker
        self._web_url = web_url
        self._picker_options = PickerOptions(quality=picker_quality)
        self._status = PageStatus.LOADING
        self._can_go_back = False

    @classmethod
    def from_config(
        cls, web_view: WebView, picker: ImagePicker, config: ShellConfig
    ) -> WebShell:
        """Create a shell from the ``[shell]`` config section."""
        return cls(
            web_view,
            picker,
            web_url=config.web_url,
            picker_quality=config.picker_quality,
        )

    @property
    def web_url(self) -> str:
        return self._web_url

    @property
    def injected_script(self) -> str:
        return INJECTED_SCRIPT

    @property
    def status(self) -> PageStatus:
        return self._status

    @property
    def splash_visible(self) -> bool:
        return self._status == PageStatus.LOADING

    @property
    def error_visible(self) -> bool:
        return self._status == PageStatus.ERROR

    def on_load_end(self) -> None:
        # Load-end also fires after a failed load; the error screen stays
        if self._status == PageStatus.LOADING:
            self._status = PageStatus.LOADED
            logger.info("page_loaded")

    def on_error(self) -> None:
        self._status = PageStatus.ERROR
        logger.warning("page_load_failed", extra={"url": self._web_url})

    def retry(self) -> None:
        if self._status != PageStatus.ERROR:
            return
        self._status = PageStatus.LOADING
        logger.info("page_reload")
        self._web_view.reload()

    def on_navigation_state_change(self, can_go_back: bool) -> None:
        self._can_go_back = can_go_back

    def on_back_pressed(self) -> bool:
        """Navigate back inside the page; False lets the OS handle it."""
        if self._can_go_back:
            self._web_view.go_back()
            return True
        return False

    async def on_message(self, raw: str) -> bool:
        """Handle a request-image message; True if an image was delivered."""
        request = parse_request(raw)
        if request is None:
            return False

        if request.from_camera:
            picked = await self._picker.capture_from_camera(self._picker_options)
        else:
            picked = await self._picker.pick_from_library(self._picker_options)

        if not picked:
            logger.debug("Picker cancelled (%s)", request.type)
            return False

        image = to_data_uri_from_base64(picked)
        self._web_view.inject_javascript(delivery_script(image))
        logger.info("image_delivered", extra={"source": request.type})
        return True


def to_data_uri_from_base64(payload: str) -> str:
    """Wrap picker output (bare base64 JPEG) as a data-URI."""
    if payload.startswith("data:"):
        return payload
    return f"data:image/jpeg;base64,{payload}"
