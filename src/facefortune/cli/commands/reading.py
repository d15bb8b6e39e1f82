"""Commands that talk to a running FaceFortune server."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from facefortune.cli.console import console, dim, error, warning

if TYPE_CHECKING:
    from facefortune.client import ReadingSession
    from facefortune.config import FortuneConfig

DEFAULT_URL = "http://127.0.0.1:8080"

UrlOption = Annotated[
    str,
    typer.Option("--url", "-u", help="Base URL of the FaceFortune server"),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to configuration file"),
]


def register(app: typer.Typer) -> None:
    """Register the analyze and ask commands."""

    @app.command()
    def analyze(
        image: Annotated[
            Path,
            typer.Argument(
                help="Photo of a face (JPEG, PNG, ...)",
                exists=True,
                dir_okay=False,
                readable=True,
            ),
        ],
        url: UrlOption = DEFAULT_URL,
        config: ConfigOption = None,
    ) -> None:
        """Get a face reading for a photo and save it to history."""
        asyncio.run(_analyze(image, url, _load_config(config)))

    @app.command()
    def ask(
        question: Annotated[str, typer.Argument(help="Question about the reading")],
        reading_id: Annotated[
            str,
            typer.Option("--reading", "-r", help="ID of a saved reading"),
        ],
        url: UrlOption = DEFAULT_URL,
        config: ConfigOption = None,
    ) -> None:
        """Ask a follow-up question about a saved reading."""
        asyncio.run(_ask(question, reading_id, url, _load_config(config)))


def _load_config(path: Path | None) -> FortuneConfig:
    from facefortune.config import load_config
    from facefortune.logging import configure_logging

    # Keep request logs out of the reading output
    configure_logging(level="WARNING")

    try:
        return load_config(path)
    except FileNotFoundError as e:
        error(str(e))
        raise typer.Exit(1) from None


def _open_session(client, config: FortuneConfig) -> ReadingSession:
    from facefortune.client import ReadingSession
    from facefortune.history import open_history

    history = open_history(config.history.path, config.history.max_entries)
    return ReadingSession(client, history, image_config=config.image)


async def _analyze(image: Path, url: str, config: FortuneConfig) -> None:
    from rich.markdown import Markdown

    from facefortune.client import FortuneClient

    async with FortuneClient(url) as client:
        session = _open_session(client, config)

        state = session.select_file(image)
        if state.error:
            error(state.error)
            raise typer.Exit(1)

        with console.status("[dim]관상을 분석하고 있습니다...[/dim]"):
            state = await session.analyze()

    if state.error or state.result is None:
        error(state.error or "분석 실패")
        raise typer.Exit(1)

    console.print(Markdown(state.result))
    if state.saved_reading_id:
        dim(f"Saved as {state.saved_reading_id}")
    if state.notice:
        warning(state.notice)


async def _ask(question: str, reading_id: str, url: str, config: FortuneConfig) -> None:
    from rich.markdown import Markdown

    from facefortune.client import FortuneClient

    async with FortuneClient(url) as client:
        session = _open_session(client, config)

        state = session.load_reading(reading_id)
        if state.saved_reading_id != reading_id:
            error(f"Reading not found: {reading_id}")
            raise typer.Exit(1)

        with console.status("[dim]답변을 준비하고 있습니다...[/dim]"):
            state = await session.ask(question)

    if state.error:
        error(state.error)
        raise typer.Exit(1)
    if not state.chat or state.chat[-1].role != "assistant":
        error("Question was empty")
        raise typer.Exit(1)

    console.print(Markdown(state.chat[-1].content))
