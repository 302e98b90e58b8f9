"""CLI entrypoint that wires subcommands into a Typer app."""

import typer

from .commands.clone import clone

app = typer.Typer(
    add_completion=False,
    help="A fast tool for cloning and compressing all repos of a GitHub organisation.",
)


@app.callback()
def main() -> None:
    """Clone and compress all repos of a GitHub organisation."""


app.command()(clone)
