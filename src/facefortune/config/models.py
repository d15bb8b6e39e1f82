"""Configuration models using Pydantic."""

import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, SecretStr

from facefortune.config.paths import get_storage_path

logger = logging.getLogger(__name__)

ProviderName = Literal["gemini", "openai"]

# Environment variables consulted when a provider section has no api_key
PROVIDER_ENV_VARS: dict[str, str] = {
    "gemini": "GEMINI_API_KEY",
    "openai": "OPENAI_API_KEY",
}

DEFAULT_MODELS: dict[str, str] = {
    "gemini": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
}


class ConfigError(Exception):
    """Configuration error."""

    pass


class ModelConfig(BaseModel):
    """Which generative model answers analysis and chat requests.

    Model names are optional - if None, the provider default is used.
    Temperature is optional - if None, the provider's default is used.
    """

    provider: ProviderName = "gemini"
    analysis_model: str | None = None
    chat_model: str | None = None
    temperature: float | None = None
    max_output_tokens: int = 4096
    chat_max_output_tokens: int = 1024

    def resolve_analysis_model(self) -> str:
        return self.analysis_model or DEFAULT_MODELS[self.provider]

    def resolve_chat_model(self) -> str:
        return self.chat_model or self.analysis_model or DEFAULT_MODELS[self.provider]


class ProviderConfig(BaseModel):
    """Provider-level configuration."""

    api_key: SecretStr | None = None


class ServerConfig(BaseModel):
    """Configuration for HTTP server."""

    host: str = "127.0.0.1"
    port: int = 8080
    cors_origins: list[str] = ["*"]


class ImageConfig(BaseModel):
    """Client-side image preprocessing limits."""

    max_upload_bytes: int = 20 * 1024 * 1024
    max_width: int = 800
    jpeg_quality: float = Field(default=0.7, gt=0, le=1)
    thumbnail_width: int = 200


class HistoryConfig(BaseModel):
    """Configuration for the local reading history."""

    path: Path = Field(default_factory=get_storage_path)
    max_entries: int = Field(default=20, ge=1)


class ShellConfig(BaseModel):
    """Configuration for the mobile web view shell."""

    web_url: str = "https://isw-seem.vercel.app"
    picker_quality: float = Field(default=0.7, gt=0, le=1)


class FortuneConfig(BaseModel):
    """Root configuration model."""

    model: ModelConfig = Field(default_factory=ModelConfig)
    gemini: ProviderConfig | None = None
    openai: ProviderConfig | None = None
    server: ServerConfig = Field(default_factory=ServerConfig)
    image: ImageConfig = Field(default_factory=ImageConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    shell: ShellConfig = Field(default_factory=ShellConfig)

    def resolve_api_key(self) -> SecretStr | None:
        """Resolve the API key for the configured provider.

        Resolution order:
        1. Provider-level config api_key
        2. Environment variable (GEMINI_API_KEY or OPENAI_API_KEY)

        Returns:
            The resolved API key, or None if not found.
        """
        provider = self.model.provider
        section: ProviderConfig | None = getattr(self, provider)
        if section and section.api_key and section.api_key.get_secret_value():
            return section.api_key

        env_value = os.environ.get(PROVIDER_ENV_VARS[provider])
        if env_value:
            return SecretStr(env_value)

        return None

    def require_api_key(self) -> SecretStr:
        """Resolve the API key or raise ConfigError."""
        api_key = self.resolve_api_key()
        if api_key is None:
            env_var = PROVIDER_ENV_VARS[self.model.provider]
            raise ConfigError(
                f"No API key for provider '{self.model.provider}'. "
                f"Set {env_var} or [{self.model.provider}].api_key"
            )
        return api_key
