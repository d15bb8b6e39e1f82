"""Server command for running the FaceFortune API."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

logger = logging.getLogger(__name__)


def register(app: typer.Typer) -> None:
    """Register the serve command."""

    @app.command()
    def serve(
        config: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="Path to configuration file",
            ),
        ] = None,
        host: Annotated[
            str | None,
            typer.Option(
                "--host",
                "-h",
                help="Host to bind to (default from config)",
            ),
        ] = None,
        port: Annotated[
            int | None,
            typer.Option(
                "--port",
                "-p",
                help="Port to bind to (default from config)",
            ),
        ] = None,
    ) -> None:
        """Start the FaceFortune API server."""
        try:
            asyncio.run(_run_server(config, host, port))
        except KeyboardInterrupt:
            # Use print here since logging may not be configured yet
            print("\nServer stopped")


async def _run_server(
    config_path: Path | None = None,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Run the server asynchronously."""
    from facefortune.logging import configure_logging

    # Rich console output plus JSONL files for the server
    configure_logging(use_rich=True, log_to_file=True)

    from facefortune.config import load_config
    from facefortune.server.app import create_app
    from facefortune.server.runner import ServerRunner

    logger.info("Loading configuration")
    fortune_config = load_config(config_path)

    fastapi_app = create_app(fortune_config)
    runner = ServerRunner(
        fastapi_app,
        host=host or fortune_config.server.host,
        port=port or fortune_config.server.port,
    )
    await runner.run()
