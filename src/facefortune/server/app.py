"""FastAPI application for the FaceFortune API."""

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from facefortune import __version__
from facefortune.config.models import FortuneConfig
from facefortune.fortune.service import FortuneService
from facefortune.generation.registry import create_provider
from facefortune.server.routes import api, health

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from facefortune.generation.base import GenerativeProvider

logger = logging.getLogger(__name__)


class FortuneServer:
    """Owns the FastAPI app and the lazily created model provider.

    Handlers are stateless; the only thing shared across requests is the
    provider client, created on first use once a credential is available.
    """

    def __init__(
        self,
        config: FortuneConfig,
        provider: "GenerativeProvider | None" = None,
    ):
        self._config = config
        self._provider = provider
        self._app = self._create_app()

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application."""
        return self._app

    @property
    def config(self) -> FortuneConfig:
        return self._config

    @property
    def has_provider(self) -> bool:
        return self._provider is not None

    def get_service(self) -> FortuneService:
        """Return a service bound to the provider.

        Raises:
            ConfigError: If no provider was injected and no API key resolves.
        """
        if self._provider is None:
            api_key = self._config.require_api_key()
            self._provider = create_provider(self._config.model.provider, api_key)
            logger.info(f"Created {self._provider.name} provider")
        return FortuneService(provider=self._provider, model=self._config.model)

    def _create_app(self) -> FastAPI:
        @asynccontextmanager
        async def lifespan(app: FastAPI) -> "AsyncIterator[None]":
            logger.info("Starting FaceFortune server")
            if self._config.resolve_api_key() is None and self._provider is None:
                logger.warning(
                    "api_credential_missing",
                    extra={"provider": self._config.model.provider},
                )
            yield
            logger.info("Shutting down FaceFortune server")

        app = FastAPI(
            title="FaceFortune",
            description="AI face reading API",
            version=__version__,
            lifespan=lifespan,
        )

        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._config.server.cors_origins,
            allow_credentials=False,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )

        app.state.server = self
        app.include_router(health.router, tags=["health"])
        app.include_router(api.router, prefix="/api", tags=["fortune"])

        return app


def create_app(
    config: FortuneConfig | None = None,
    provider: "GenerativeProvider | None" = None,
) -> FastAPI:
    """Create the FastAPI application."""
    from facefortune.config.loader import get_default_config

    server = FortuneServer(config=config or get_default_config(), provider=provider)
    return server.app
