"""Classification of upstream generation failures.

Providers report most failures as free-text messages. Classification prefers
a structured HTTP status or a typed exception; matching on the message text
is the fallback, and it breaks whenever a provider rewords its errors.
"""

from __future__ import annotations

import re
from enum import Enum


class ErrorKind(str, Enum):
    """What went wrong upstream."""

    CREDENTIAL = "credential"
    SAFETY = "safety"
    INVALID_IMAGE = "invalid_image"
    RATE_LIMIT = "rate_limit"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


class GenerationError(Exception):
    """A provider returned no usable text."""


class GenerationBlockedError(GenerationError):
    """The provider's safety filter blocked the prompt or the response."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Response blocked by SAFETY filter: {reason}")


_STATUS_KINDS: dict[int, ErrorKind] = {
    401: ErrorKind.CREDENTIAL,
    403: ErrorKind.CREDENTIAL,
    404: ErrorKind.NOT_FOUND,
    429: ErrorKind.RATE_LIMIT,
}

# Checked in order; the first match wins.
_MESSAGE_PATTERNS: list[tuple[ErrorKind, re.Pattern[str]]] = [
    (
        ErrorKind.CREDENTIAL,
        re.compile(r"api.?key|credential|unauthenticated|permission.?denied", re.I),
    ),
    (ErrorKind.SAFETY, re.compile(r"safety|blocked", re.I)),
    (
        ErrorKind.INVALID_IMAGE,
        re.compile(
            r"invalid.?image|image.{0,40}too.?small|"
            r"unable to process input image|image is not valid",
            re.I,
        ),
    ),
    (
        ErrorKind.RATE_LIMIT,
        re.compile(
            r"quota|rate.?limit|too many requests|resource.?exhausted|\b429\b", re.I
        ),
    ),
    (ErrorKind.NOT_FOUND, re.compile(r"not.?found|\b404\b", re.I)),
]


def _status_code(error: BaseException) -> int | None:
    # google-genai APIError exposes `code`, openai APIStatusError `status_code`
    for attr in ("status_code", "code"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def classify_error(error: BaseException) -> ErrorKind:
    """Classify an exception raised while calling a provider."""
    if isinstance(error, GenerationBlockedError):
        return ErrorKind.SAFETY

    status = _status_code(error)
    if status in _STATUS_KINDS:
        return _STATUS_KINDS[status]

    message = str(error)
    for kind, pattern in _MESSAGE_PATTERNS:
        if pattern.search(message):
            return kind
    return ErrorKind.UNKNOWN
