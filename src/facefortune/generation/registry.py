"""Provider construction from configuration."""

from __future__ import annotations

from pydantic import SecretStr

from facefortune.config.models import ProviderName
from facefortune.generation.base import GenerativeProvider
from facefortune.generation.gemini import GeminiProvider
from facefortune.generation.openai import OpenAIProvider


def create_provider(
    provider: ProviderName,
    api_key: str | SecretStr | None = None,
) -> GenerativeProvider:
    """Create a single provider instance.

    Raises:
        ValueError: If provider name is unknown.
    """
    key = api_key.get_secret_value() if isinstance(api_key, SecretStr) else api_key

    if provider == "gemini":
        return GeminiProvider(api_key=key)
    if provider == "openai":
        return OpenAIProvider(api_key=key)

    raise ValueError(f"Unknown provider: {provider}")
