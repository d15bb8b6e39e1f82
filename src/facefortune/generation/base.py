"""Generative model provider interface."""

from __future__ import annotations

from typing import Protocol

from facefortune.generation.types import GenerationRequest, GenerationResult


class GenerativeProvider(Protocol):
    """Provider contract for text and vision-to-text generation."""

    @property
    def name(self) -> str:
        """Stable provider name."""
        ...

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Generate text for a prompt and optional inline images."""
        ...
