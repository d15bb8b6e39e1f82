"""Messages exchanged between the hosted page and the native shell.

Two messages only:

- request-image, page to shell: ``{"type": "selectImage"}`` for the gallery
  or ``{"type": "captureImage"}`` for the camera, posted by the injected
  script when a file input is clicked.
- deliver-image, shell to page: one injected call to
  ``window.receiveImageFromApp(<data-URI>)``, which hands the image to the
  page's ``window.setImageFromApp`` callback.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Literal, Protocol

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

RequestType = Literal["selectImage", "captureImage"]


class ImageRequest(BaseModel):
    type: RequestType

    @property
    def from_camera(self) -> bool:
        return self.type == "captureImage"


@dataclass(frozen=True, slots=True)
class PickerOptions:
    """Options passed to the native gallery/camera pickers."""

    allows_editing: bool = True
    aspect: tuple[int, int] = (1, 1)
    quality: float = 0.7
    base64: bool = True


class ImagePicker(Protocol):
    """Native pickers; each returns base64 JPEG data or None if cancelled."""

    async def pick_from_library(self, options: PickerOptions) -> str | None: ...

    async def capture_from_camera(self, options: PickerOptions) -> str | None: ...


def parse_request(raw: str) -> ImageRequest | None:
    """Parse a page message; anything unrecognised is logged and dropped."""
    try:
        return ImageRequest.model_validate_json(raw)
    except ValidationError as e:
        logger.debug("Ignoring bridge message: %s", e.errors()[0]["msg"])
        return None


def delivery_script(image: str) -> str:
    """Script injected into the page to deliver a picked image."""
    # json.dumps yields a JS string literal with quotes and newlines escaped
    return (
        f"window.receiveImageFromApp && window.receiveImageFromApp({json.dumps(image)});\n"
        "true;"
    )


INJECTED_SCRIPT = """
(function() {
  window.receiveImageFromApp = function(image) {
    if (typeof window.setImageFromApp === 'function') {
      window.setImageFromApp(image);
    }
  };

  document.addEventListener('click', function(e) {
    var target = e.target;
    if (target && target.tagName === 'INPUT' && target.type === 'file') {
      e.preventDefault();
      e.stopPropagation();
      var type = target.hasAttribute('capture') ? 'captureImage' : 'selectImage';
      window.ReactNativeWebView.postMessage(JSON.stringify({ type: type }));
    }
  }, true);

  true;
})();
"""
