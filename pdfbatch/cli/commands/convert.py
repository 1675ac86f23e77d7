"""Convert command: batch-convert a directory tree to PDF."""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.table import Table

from pdfbatch.cli.callbacks import (
    validate_concurrency,
    validate_methods,
    validate_on_existing,
    validate_output_dir,
)
from pdfbatch.config import get_settings
from pdfbatch.config.constants import ON_EXISTING_POLICIES, RENDER_METHODS
from pdfbatch.core.batch import BatchRunner
from pdfbatch.core.pipeline import ConversionPipeline, FileResult
from pdfbatch.exceptions import ConfigurationError, DiscoveryError
from pdfbatch.utils.fs import (
    FileDescriptor,
    discover_files,
    ensure_directory,
    find_output_collisions,
    group_by_extension,
)
from pdfbatch.utils.logging import get_console, get_logger, setup_task_logging
from pdfbatch.utils.stats import BatchSummary

console = get_console()
log = get_logger(__name__)


def convert(
    input_dir: Annotated[
        Path | None,
        typer.Argument(
            help="Input directory to scan (default: input.default_dir from config).",
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output directory for PDFs (mirrors the input tree).",
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
            callback=validate_output_dir,
        ),
    ] = None,
    concurrency: Annotated[
        int | None,
        typer.Option(
            "--concurrency",
            "-c",
            help="Number of files converted concurrently per chunk.",
            callback=validate_concurrency,
        ),
    ] = None,
    method: Annotated[
        list[str] | None,
        typer.Option(
            "--method",
            "-m",
            help=f"Rendering method, repeat to set fallback order. Options: {', '.join(RENDER_METHODS)}",
            callback=validate_methods,
        ),
    ] = None,
    on_existing: Annotated[
        str | None,
        typer.Option(
            "--on-existing",
            help=f"What to do when a PDF already exists. Options: {', '.join(ON_EXISTING_POLICIES)}",
            callback=validate_on_existing,
        ),
    ] = None,
    include: Annotated[
        str | None,
        typer.Option(
            "--include",
            help="File name pattern to include (glob syntax).",
        ),
    ] = None,
    exclude: Annotated[
        str | None,
        typer.Option(
            "--exclude",
            help="File name pattern to exclude (glob syntax).",
        ),
    ] = None,
    follow_symlinks: Annotated[
        bool,
        typer.Option(
            "--follow-symlinks",
            help="Follow symlinked files and directories while scanning.",
        ),
    ] = False,
    report: Annotated[
        Path | None,
        typer.Option(
            "--report",
            help="Write the final summary as JSON to this path.",
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Show the conversion plan without executing.",
        ),
    ] = False,
) -> None:
    """Convert Markdown, text and HTML files in a directory tree to PDF.

    Examples:
        pdfbatch convert ./generated-documents
        pdfbatch convert ./docs -o ./pdf --concurrency 4
        pdfbatch convert ./docs --method adobe --method playwright
        pdfbatch convert ./docs --on-existing newer --report summary.json
    """
    settings = get_settings()

    task_id, log_path = setup_task_logging(
        log_dir=settings.log_dir,
        prefix="convert",
        verbose=verbose,
        level=settings.log_level,
    )
    if verbose:
        log.info("Logs will be saved to", log_file=str(log_path))
    log.debug("Task Configuration", task_id=task_id, config=settings.model_dump())

    # Vendor credentials live in their own dotenv file
    load_dotenv(settings.adobe.env_file)

    input_root = input_dir or settings.get_input_dir().resolve()
    output_root = output or settings.get_output_dir().resolve()
    chunk_size = concurrency or settings.concurrency.chunk_size

    log.info("Starting batch PDF conversion", input_dir=str(input_root), task_id=task_id)
    log.info("Scanning for supported files", extensions=settings.input.extensions)

    try:
        files = discover_files(
            input_root,
            settings.input.extensions,
            follow_symlinks=follow_symlinks or settings.input.follow_symlinks,
            include=include,
            exclude=exclude,
        )
    except DiscoveryError as e:
        console.print(f"[red]Error:[/red] {e}")
        log.error("Batch conversion failed", error=str(e))
        raise typer.Exit(1) from e

    if dry_run:
        _show_dry_run(input_root, output_root, files, method or settings.render.methods, chunk_size)
        return

    if not files:
        log.warning("No supported files found for conversion")
        return

    log.info("Found files to convert", count=len(files))
    for ext, count in sorted(group_by_extension(files).items()):
        log.info("File breakdown", extension=ext, files=count)
    for pdf, sources in find_output_collisions(files).items():
        log.warning(
            "Sources share an output path",
            output=str(pdf),
            sources=[str(s.relative_path) for s in sources],
        )

    try:
        ensure_directory(output_root)
        pipeline = ConversionPipeline.from_settings(
            settings,
            methods=method,
            on_existing=on_existing,  # type: ignore[arg-type]
        )
    except (OSError, ConfigurationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        log.error("Batch conversion failed", error=str(e))
        raise typer.Exit(1) from e

    log.info("Rendering methods", order=pipeline.method_names)
    runner = BatchRunner(pipeline, output_root, chunk_size)

    try:
        summary = asyncio.run(runner.run(files, on_result=_on_result))
    except KeyboardInterrupt:
        console.print("\n[yellow]Conversion interrupted.[/yellow]")
        raise typer.Exit(130) from None
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        log.error("Batch conversion failed", error=str(e), exc_info=True)
        raise typer.Exit(1) from e

    _log_summary(summary, output_root)
    _display_summary(summary)

    if report:
        _write_report(report, summary, input_root, output_root)


def _on_result(result: FileResult) -> None:
    log.debug(
        "File finished",
        file=str(result.descriptor.relative_path),
        outcome=result.outcome,
        duration=round(result.duration, 2),
    )


def _log_summary(summary: BatchSummary, output_root: Path) -> None:
    log.info("=== CONVERSION COMPLETE ===")
    for line in summary.format_summary().splitlines():
        log.info(line)
    log.info("Output directory", path=str(output_root))

    if summary.failed > 0:
        log.warning(f"{summary.failed} files failed to convert")
    else:
        log.info("All files converted successfully")


def _display_summary(summary: BatchSummary) -> None:
    """Display the batch summary table and failed files."""
    console.print()

    table = Table(title="Conversion Summary", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value")

    table.add_row("Total Files", str(summary.total))
    table.add_row("Completed", f"[green]{summary.completed}[/green]")
    table.add_row("Skipped", f"[yellow]{summary.skipped}[/yellow]")
    table.add_row("Failed", f"[red]{summary.failed}[/red]")
    table.add_row("Success Rate", f"{summary.success_rate:.1f}%")
    table.add_row("Elapsed", f"{summary.elapsed_seconds:.1f}s")

    console.print(table)

    if summary.failures:
        console.print()
        console.print("[bold red]Failed Files:[/bold red]")
        for failure in summary.failures[:10]:
            console.print(f"  [dim]-[/dim] {failure.path}")
            console.print(f"    [dim]{_simplify_error(failure.error)}[/dim]")
        if len(summary.failures) > 10:
            console.print(f"  [dim]... and {len(summary.failures) - 10} more[/dim]")

    console.print()


def _simplify_error(error: str) -> str:
    """Simplify error message for display."""
    if "Missing credentials" in error:
        return "Adobe credentials not set - check your .env.adobe file"

    if "Executable doesn't exist" in error:
        return "Chromium not installed - run: playwright install chromium"

    if "All conversion methods failed" in error:
        return "All rendering methods failed for this file"

    if "No converter available" in error:
        return "Unsupported file type"

    if len(error) > 100:
        return error[:97] + "..."

    return error


def _write_report(
    report_path: Path, summary: BatchSummary, input_root: Path, output_root: Path
) -> None:
    data = {
        "input_dir": str(input_root),
        "output_dir": str(output_root),
        **summary.to_dict(),
    }
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    log.info("Report written", path=str(report_path))


def _show_dry_run(
    input_root: Path,
    output_root: Path,
    files: list[FileDescriptor],
    methods: list[str],
    chunk_size: int,
) -> None:
    """Display the conversion plan without executing."""
    console.print("\n[bold blue]Conversion Plan (Dry Run)[/bold blue]\n")
    console.print(f"  [bold]Input Directory:[/bold] {input_root}")
    console.print(f"  [bold]Output Directory:[/bold] {output_root}")
    console.print(f"  [bold]Rendering Methods:[/bold] {' -> '.join(methods)}")
    console.print(f"  [bold]Chunk Size:[/bold] {chunk_size}")

    console.print()
    console.print(f"[bold]Files Found:[/bold] {len(files)}")

    if files:
        console.print()
        console.print("[bold]By Type:[/bold]")
        for ext, count in sorted(group_by_extension(files).items()):
            console.print(f"  {ext}: {count}")

        console.print()
        console.print("[bold]Files:[/bold]")
        for f in files[:10]:
            console.print(f"  - {f.relative_path}")
        if len(files) > 10:
            console.print(f"  ... and {len(files) - 10} more")

    console.print()
