"""Face reading orchestration over a generative provider."""

from __future__ import annotations

import logging

from facefortune.config.models import ModelConfig
from facefortune.fortune.prompts import ANALYSIS_PROMPT, build_chat_prompt
from facefortune.generation.base import GenerativeProvider
from facefortune.generation.types import GenerationRequest, InlineImage
from facefortune.images.datauri import DataURI

logger = logging.getLogger(__name__)


class FortuneService:
    """Builds analysis and chat requests and returns the model's text."""

    def __init__(self, *, provider: GenerativeProvider, model: ModelConfig) -> None:
        self._provider = provider
        self._model = model

    @property
    def provider(self) -> GenerativeProvider:
        return self._provider

    async def analyze(self, image: DataURI) -> str:
        """Read a face image with the fixed analysis prompt."""
        request = GenerationRequest(
            prompt=ANALYSIS_PROMPT,
            model=self._model.resolve_analysis_model(),
            images=[InlineImage(data=image.data, mime_type=image.mime_type)],
            max_output_tokens=self._model.max_output_tokens,
            temperature=self._model.temperature,
        )
        result = await self._provider.generate(request)
        logger.info(
            "analysis_complete",
            extra={
                "provider": result.provider,
                "model": result.model,
                "image_bytes": len(image.data),
                "result_chars": len(result.text),
            },
        )
        return result.text

    async def chat(self, message: str, analysis_result: str) -> str:
        """Answer a follow-up question about an earlier analysis."""
        request = GenerationRequest(
            prompt=build_chat_prompt(message, analysis_result),
            model=self._model.resolve_chat_model(),
            max_output_tokens=self._model.chat_max_output_tokens,
            temperature=self._model.temperature,
        )
        result = await self._provider.generate(request)
        logger.info(
            "chat_complete",
            extra={"provider": result.provider, "model": result.model},
        )
        return result.text
