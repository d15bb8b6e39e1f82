"""Saved reading history commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from facefortune.cli.console import (
    confirm_or_cancel,
    console,
    create_table,
    dim,
    error,
    success,
)

if TYPE_CHECKING:
    from facefortune.history import HistoryStore

app = typer.Typer(
    name="history",
    help="Manage saved readings.",
    no_args_is_help=True,
)

PREVIEW_CHARS = 60

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to configuration file"),
]


def register(root: typer.Typer) -> None:
    root.add_typer(app, name="history")


def _open_store(config_path: Path | None) -> HistoryStore:
    from facefortune.config import load_config
    from facefortune.history import open_history

    try:
        config = load_config(config_path)
    except FileNotFoundError as e:
        error(str(e))
        raise typer.Exit(1) from None
    return open_history(config.history.path, config.history.max_entries)


def _preview(result: str) -> str:
    from facefortune.client.render import plain_text

    for line in plain_text(result).splitlines():
        line = line.strip()
        if line:
            if len(line) > PREVIEW_CHARS:
                return line[:PREVIEW_CHARS] + "…"
            return line
    return ""


@app.command("list")
def list_cmd(config: ConfigOption = None) -> None:
    """List saved readings, newest first."""
    store = _open_store(config)
    readings = store.list()
    if not readings:
        dim("No saved readings")
        return

    table = create_table(
        f"Readings ({len(readings)}/{store.max_entries})",
        [
            ("ID", "cyan"),
            ("Date", "green"),
            ("Preview", {"style": "white", "overflow": "ellipsis"}),
        ],
    )
    for reading in readings:
        table.add_row(reading.id, reading.date, _preview(reading.result))
    console.print(table)


@app.command("show")
def show_cmd(
    reading_id: Annotated[str, typer.Argument(help="Reading ID")],
    config: ConfigOption = None,
) -> None:
    """Show a saved reading."""
    from rich.markdown import Markdown

    reading = _open_store(config).load(reading_id)
    if reading is None:
        error(f"Reading not found: {reading_id}")
        raise typer.Exit(1)

    dim(reading.date)
    console.print(Markdown(reading.result))


@app.command("delete")
def delete_cmd(
    reading_id: Annotated[str, typer.Argument(help="Reading ID")],
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Skip confirmation")
    ] = False,
    config: ConfigOption = None,
) -> None:
    """Delete a saved reading."""
    from facefortune.history import HistoryStorageError

    store = _open_store(config)
    if store.load(reading_id) is None:
        error(f"Reading not found: {reading_id}")
        raise typer.Exit(1)
    if not confirm_or_cancel(f"Delete reading {reading_id}?", force):
        return

    try:
        store.remove(reading_id)
    except HistoryStorageError as e:
        error(f"Failed to delete reading: {e}")
        raise typer.Exit(1) from None
    success(f"Deleted reading {reading_id}")
