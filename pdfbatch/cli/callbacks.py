"""CLI callback functions."""

from pathlib import Path

import typer

from pdfbatch.config.constants import ON_EXISTING_POLICIES, RENDER_METHODS


def validate_output_dir(value: Path | None) -> Path | None:
    """Validate the output directory option."""
    if value is None:
        return None

    if value.exists() and not value.is_dir():
        raise typer.BadParameter(f"Output path exists but is not a directory: {value}")

    return value


def validate_methods(value: list[str] | None) -> list[str] | None:
    """Validate rendering method options."""
    if not value:
        return None

    invalid = [m for m in value if m not in RENDER_METHODS]
    if invalid:
        raise typer.BadParameter(
            f"Invalid rendering method '{invalid[0]}'. Options: {', '.join(RENDER_METHODS)}"
        )

    # Keep priority order, drop repeats
    return list(dict.fromkeys(value))


def validate_on_existing(value: str | None) -> str | None:
    """Validate the existing-output policy option."""
    if value is not None and value not in ON_EXISTING_POLICIES:
        raise typer.BadParameter(
            f"Invalid policy '{value}'. Options: {', '.join(ON_EXISTING_POLICIES)}"
        )

    return value


def validate_concurrency(value: int | None) -> int | None:
    """Validate the chunk width option."""
    if value is not None and value < 1:
        raise typer.BadParameter("Concurrency must be at least 1")

    return value
