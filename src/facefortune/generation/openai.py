"""OpenAI-backed provider using the Responses API."""

from __future__ import annotations

import base64
from typing import Any

import openai

from facefortune.generation.errors import GenerationBlockedError, GenerationError
from facefortune.generation.types import GenerationRequest, GenerationResult


def _extract_output_text(response: Any) -> str:
    parts: list[str] = []
    for item in getattr(response, "output", []) or []:
        if getattr(item, "type", None) != "message":
            continue
        for part in getattr(item, "content", []) or []:
            part_type = getattr(part, "type", None)
            if part_type == "output_text":
                parts.append(part.text)
            elif part_type == "refusal":
                raise GenerationBlockedError(getattr(part, "refusal", "refusal"))
    return "\n".join(parts).strip()


class OpenAIProvider:
    """OpenAI Responses API implementation."""

    def __init__(self, api_key: str | None = None) -> None:
        self._client = openai.AsyncOpenAI(api_key=api_key)

    @property
    def name(self) -> str:
        return "openai"

    def _build_request_kwargs(self, request: GenerationRequest) -> dict[str, Any]:
        input_content: list[dict[str, Any]] = [
            {"type": "input_text", "text": request.prompt}
        ]
        for image in request.images:
            image_data = base64.b64encode(image.data).decode("ascii")
            input_content.append(
                {
                    "type": "input_image",
                    "image_url": f"data:{image.mime_type};base64,{image_data}",
                }
            )

        kwargs: dict[str, Any] = {
            "model": request.model,
            "input": [{"role": "user", "content": input_content}],
        }
        if request.max_output_tokens is not None:
            kwargs["max_output_tokens"] = request.max_output_tokens
        if request.temperature is not None:
            kwargs["temperature"] = request.temperature
        return kwargs

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        response = await self._client.responses.create(
            **self._build_request_kwargs(request)
        )
        text = _extract_output_text(response)
        if not text:
            raise GenerationError("Model returned an empty response")

        return GenerationResult(
            text=text,
            provider=self.name,
            model=getattr(response, "model", request.model),
        )
