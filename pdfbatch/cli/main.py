"""Main CLI application using Typer."""

from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console

from pdfbatch import __version__
from pdfbatch.cli.commands.config import config_app
from pdfbatch.cli.commands.convert import convert

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="pdfbatch",
    help="Batch conversion of Markdown, text and HTML documents to PDF.",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()

# Register commands
app.command(name="convert", help="Convert every supported file in a directory to PDF.")(convert)
app.add_typer(config_app, name="config")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]pdfbatch[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """pdfbatch - batch document to PDF conversion.

    Scans a directory tree for Markdown, text and HTML files, wraps each in a
    print-ready HTML template and renders it to PDF with a headless browser,
    falling back to Adobe PDF Services when configured.
    """
    pass


if __name__ == "__main__":
    app()
