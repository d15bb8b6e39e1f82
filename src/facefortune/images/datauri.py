"""Parsing and building ``data:<mime>;base64,<payload>`` strings."""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass

DATA_URI_PATTERN = re.compile(r"^data:([^;,]+);base64,(.+)$", re.DOTALL)


class InvalidDataURIError(ValueError):
    """The string is not a base64 data-URI."""


@dataclass(frozen=True, slots=True)
class DataURI:
    """A decoded data-URI."""

    mime_type: str
    data: bytes

    @property
    def base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def __str__(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64}"


def parse_data_uri(value: str) -> DataURI:
    """Extract MIME type and payload from a data-URI.

    Raises:
        InvalidDataURIError: If the pattern does not match or the payload
            is not valid base64.
    """
    match = DATA_URI_PATTERN.match(value.strip())
    if match is None:
        raise InvalidDataURIError("Expected data:<mime>;base64,<data>")

    mime_type, payload = match.group(1).strip().lower(), match.group(2)
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidDataURIError(f"Invalid base64 payload: {e}") from e
    if not data:
        raise InvalidDataURIError("Empty payload")
    return DataURI(mime_type=mime_type, data=data)


def to_data_uri(data: bytes, mime_type: str = "image/jpeg") -> str:
    return str(DataURI(mime_type=mime_type, data=data))
