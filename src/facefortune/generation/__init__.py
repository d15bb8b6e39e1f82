"""Generative model provider abstraction layer."""

from facefortune.generation.base import GenerativeProvider
from facefortune.generation.errors import (
    ErrorKind,
    GenerationBlockedError,
    GenerationError,
    classify_error,
)
from facefortune.generation.gemini import GeminiProvider
from facefortune.generation.openai import OpenAIProvider
from facefortune.generation.registry import create_provider
from facefortune.generation.types import (
    GenerationRequest,
    GenerationResult,
    InlineImage,
)

__all__ = [
    "ErrorKind",
    "GeminiProvider",
    "GenerationBlockedError",
    "GenerationError",
    "GenerationRequest",
    "GenerationResult",
    "GenerativeProvider",
    "InlineImage",
    "OpenAIProvider",
    "classify_error",
    "create_provider",
]
