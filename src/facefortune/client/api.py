"""HTTP client for the FaceFortune API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

ANALYZE_FALLBACK_ERROR = "분석 실패"
CHAT_FALLBACK_ERROR = "답변 실패"


class FortuneAPIError(Exception):
    """The API answered with an error status."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class MalformedResponseError(FortuneAPIError):
    """A successful status whose body lacks the expected text."""


class FortuneClient:
    """Posts images and questions to a FaceFortune server.

    Requests have no timeout, matching a browser fetch.
    """

    def __init__(
        self,
        base_url: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url, transport=transport, timeout=None
        )

    async def __aenter__(self) -> FortuneClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def analyze(self, image: str) -> str:
        """Send a data-URI image and return the reading text."""
        return await self._post(
            "/api/analyze", {"image": image}, "result", ANALYZE_FALLBACK_ERROR
        )

    async def chat(self, message: str, analysis_result: str) -> str:
        """Ask a follow-up question about a reading."""
        return await self._post(
            "/api/chat",
            {"message": message, "analysisResult": analysis_result},
            "reply",
            CHAT_FALLBACK_ERROR,
        )

    async def _post(
        self, path: str, payload: dict[str, Any], key: str, fallback_error: str
    ) -> str:
        """POST ``payload`` and return the string under ``key`` in the reply.

        Error statuses raise ``FortuneAPIError``; successful responses
        without that string raise ``MalformedResponseError``.
        """
        response = await self._client.post(path, json=payload)
        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {}

        if response.is_error:
            message = data.get("error") or fallback_error
            logger.warning(
                "api_request_failed",
                extra={"path": path, "status_code": response.status_code},
            )
            raise FortuneAPIError(response.status_code, str(message))

        value = data.get(key)
        if not isinstance(value, str):
            logger.warning(
                "api_response_malformed",
                extra={"path": path, "status_code": response.status_code},
            )
            raise MalformedResponseError(response.status_code, fallback_error)
        return value
