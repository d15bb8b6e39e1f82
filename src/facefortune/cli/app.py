"""Main CLI application."""

import typer

from facefortune.cli.commands import history, reading, serve

app = typer.Typer(
    name="facefortune",
    help="FaceFortune - AI face reading",
    no_args_is_help=True,
)

serve.register(app)
reading.register(app)
history.register(app)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
