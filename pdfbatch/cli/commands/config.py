"""Config command for configuration management."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from pdfbatch.config import get_settings
from pdfbatch.config.constants import (
    ADOBE_CLIENT_ID_ENV,
    ADOBE_CLIENT_SECRET_ENV,
    CONFIG_LOCATIONS,
    DEFAULT_CONFIG_FILE,
)

config_app = typer.Typer(help="Configuration management.")
console = Console()


@config_app.command("show")
def show() -> None:
    """Show current configuration."""
    settings = get_settings()

    console.print("\n[bold blue]Current Configuration[/bold blue]\n")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    # Global settings
    table.add_row("Log Level", settings.log_level)
    table.add_row("Log Directory", settings.log_dir)

    # Input settings
    table.add_row("Input Directory", settings.input.default_dir)
    table.add_row("Extensions", ", ".join(settings.input.extensions))
    table.add_row("Follow Symlinks", str(settings.input.follow_symlinks))

    # Output settings
    table.add_row("Output Directory", settings.output.default_dir)
    table.add_row("On Existing", settings.output.on_existing)

    # Rendering settings
    table.add_row("Rendering Methods", " -> ".join(settings.render.methods))
    table.add_row("Page Format", settings.render.page_format)
    table.add_row("Page Margin", settings.render.margin)
    table.add_row("Page Timeout (ms)", str(settings.render.timeout_ms))

    # Concurrency settings
    table.add_row("Chunk Size", str(settings.concurrency.chunk_size))

    # Adobe settings
    table.add_row("Adobe Env File", settings.adobe.env_file)
    table.add_row("Adobe API", settings.adobe.api_base_url)

    console.print(table)
    console.print()


# Default configuration template
DEFAULT_CONFIG_TEMPLATE = f"""# pdfbatch Configuration

log_level: "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
log_dir: ".logs"  # One log file per run

input:
  default_dir: "generated-documents"
  extensions: [".md", ".txt", ".html"]  # Also: .markdown, .htm
  follow_symlinks: false

output:
  default_dir: "generated-documents-pdf"
  on_existing: "skip"  # skip, overwrite, newer

concurrency:
  chunk_size: 3  # Files converted concurrently per chunk

render:
  methods: ["playwright", "adobe"]  # Tried in order until one succeeds
  page_format: "A4"
  margin: "1in"
  timeout_ms: 30000

# Credentials are read from {ADOBE_CLIENT_ID_ENV} and {ADOBE_CLIENT_SECRET_ENV}
adobe:
  env_file: ".env.adobe"
  poll_interval: 2.0
  max_polls: 60
"""


@config_app.command("init")
def init(
    path: Annotated[
        Path | None,
        typer.Option(
            "--path",
            "-p",
            help="Path to create config file.",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite existing config file.",
        ),
    ] = False,
) -> None:
    """Initialize a configuration file."""
    config_path = path or Path.cwd() / DEFAULT_CONFIG_FILE

    if config_path.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists at {config_path}")
        console.print("Use --force to overwrite.")
        raise typer.Exit(1)

    config_path.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
    console.print(f"[green]Created config file at:[/green] {config_path}")


@config_app.command("validate")
def validate() -> None:
    """Validate current configuration."""
    try:
        settings = get_settings()

        console.print("\n[bold blue]Configuration Validation[/bold blue]\n")
        console.print(f"[green]Rendering methods:[/green] {' -> '.join(settings.render.methods)}")

        if "adobe" in settings.render.methods:
            from dotenv import load_dotenv

            from pdfbatch.renderers.adobe import AdobeRenderer

            load_dotenv(settings.adobe.env_file)
            if AdobeRenderer.from_settings(settings).has_credentials:
                console.print("  - adobe: [green]OK[/green]")
            else:
                console.print("  - adobe: [yellow]No credentials[/yellow]")

        console.print()
        console.print("[green]Configuration is valid![/green]")

    except Exception as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1) from e


@config_app.command("locations")
def locations() -> None:
    """Show configuration file search locations."""
    console.print("\n[bold blue]Configuration File Locations[/bold blue]\n")
    console.print("pdfbatch searches for configuration files in the following order:\n")

    for i, loc in enumerate(CONFIG_LOCATIONS, 1):
        exists = "[green]exists[/green]" if loc.exists() else "[dim]not found[/dim]"
        console.print(f"  {i}. {loc} ({exists})")

    console.print()
    console.print("[dim]Environment variables with PDFBATCH_ prefix are also supported.[/dim]")
    console.print()
