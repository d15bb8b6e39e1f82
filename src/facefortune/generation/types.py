"""Types for generative model requests."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class InlineImage:
    """An image attached to a request as inline binary data."""

    data: bytes
    mime_type: str


@dataclass(slots=True)
class GenerationRequest:
    """A single prompt, optionally with images, sent to a model."""

    prompt: str
    model: str
    images: list[InlineImage] = field(default_factory=list)
    max_output_tokens: int | None = None
    temperature: float | None = None


@dataclass(slots=True)
class GenerationResult:
    """Text returned by a provider."""

    text: str
    provider: str = "unknown"
    model: str | None = None
