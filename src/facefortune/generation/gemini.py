"""Google Gemini provider."""

from __future__ import annotations

import logging
from typing import Any

from google import genai
from google.genai import types

from facefortune.generation.errors import GenerationBlockedError, GenerationError
from facefortune.generation.types import GenerationRequest, GenerationResult

logger = logging.getLogger(__name__)


def _enum_name(value: Any) -> str | None:
    if value is None:
        return None
    return getattr(value, "name", None) or str(value)


def _extract_text(response: types.GenerateContentResponse) -> str:
    feedback = getattr(response, "prompt_feedback", None)
    block_reason = _enum_name(getattr(feedback, "block_reason", None))
    if block_reason:
        raise GenerationBlockedError(block_reason)

    text = response.text or ""
    if text.strip():
        return text

    for candidate in response.candidates or []:
        finish_reason = _enum_name(candidate.finish_reason) or ""
        if "SAFETY" in finish_reason or "PROHIBITED" in finish_reason:
            raise GenerationBlockedError(finish_reason)
    raise GenerationError("Model returned an empty response")


class GeminiProvider:
    """Gemini ``generate_content`` with inline image parts."""

    def __init__(self, api_key: str | None = None) -> None:
        self._client = genai.Client(api_key=api_key)

    @property
    def name(self) -> str:
        return "gemini"

    def _build_contents(self, request: GenerationRequest) -> list[Any]:
        contents: list[Any] = [request.prompt]
        for image in request.images:
            contents.append(
                types.Part.from_bytes(data=image.data, mime_type=image.mime_type)
            )
        return contents

    def _build_config(
        self, request: GenerationRequest
    ) -> types.GenerateContentConfig | None:
        kwargs: dict[str, Any] = {}
        if request.temperature is not None:
            kwargs["temperature"] = request.temperature
        if request.max_output_tokens is not None:
            kwargs["max_output_tokens"] = request.max_output_tokens
        if not kwargs:
            return None
        return types.GenerateContentConfig(**kwargs)

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        logger.debug(
            f"Calling {request.model} ({len(request.images)} image(s), "
            f"{len(request.prompt)} prompt chars)"
        )
        response = await self._client.aio.models.generate_content(
            model=request.model,
            contents=self._build_contents(request),
            config=self._build_config(request),
        )
        text = _extract_text(response)

        usage = response.usage_metadata
        if usage is not None:
            logger.debug(
                f"API call complete: {usage.prompt_token_count}in/"
                f"{usage.candidates_token_count}out tokens"
            )

        return GenerationResult(
            text=text,
            provider=self.name,
            model=response.model_version or request.model,
        )
