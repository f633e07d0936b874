"""
Scriptura - Main CLI Application

Command-line interface for the catalog, the conversion pipeline and the
validation engine.
"""
import json
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from config import LoggingConfig, get_config
from core.errors import (
    BooksConversionError,
    LegacyFormatError,
    RemoteStorageError,
    ScripturaError,
    SerializationError,
    UnknownBookNameError,
)
from data.legacy import load_legacy_file
from data.serialization import dump_translation, load_metadata, load_translation, translation_to_dict
from domain.books import canonical_order, resolve as resolve_book
from domain.entities import Translation, TranslationMetadata
from observability import get_logger, setup_logging, setup_tracing, shutdown_tracing
from pipeline.conversion import convert as convert_legacy
from pipeline.validation import ValidationResult, validate as validate_translation, validation_report

# Initialize app
app = typer.Typer(
    name="scriptura",
    help="Scriptura - Canonical Scripture corpus tools",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

logger = get_logger("scriptura.cli")


class OutputFormat(str, Enum):
    """Output format options."""
    TABLE = "table"
    JSON = "json"
    TEXT = "text"


@app.callback()
def setup(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose (debug) logging"),
):
    """Configure logging and tracing before any command runs."""
    config = get_config()
    logging_config = config.logging
    # DEBUG=true acts like --verbose
    if verbose or config.debug:
        logging_config = LoggingConfig(level="DEBUG", json_format=logging_config.json_format)
    setup_logging(logging_config, force=True)
    setup_tracing(config.observability)
    logger.debug("Configuration loaded", **config.to_dict())


@app.command()
def books():
    """List the canonical books in reading order."""
    table = Table(title="Canonical Books")
    table.add_column("#", justify="right")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    table.add_column("Testament")

    for book in canonical_order():
        table.add_row(str(int(book)), book.code, book.display_name, book.testament)

    console.print(table)


@app.command()
def resolve(
    name: str = typer.Argument(..., help="Book name in any accepted spelling (e.g. 'II Samuel')"),
):
    """Resolve a free-text book name to its canonical identifier."""
    try:
        book = resolve_book(name)
    except UnknownBookNameError as e:
        err_console.print(f"[red]{escape(e.message)}[/red]")
        raise typer.Exit(1)

    console.print(f"{escape(name.strip())} -> [bold]{book.display_name}[/bold] ({book.code})")


@app.command()
def convert(
    legacy_file: Path = typer.Argument(..., help="Legacy JSON file"),
    meta: Optional[Path] = typer.Option(None, "--meta", "-m", help="Translation metadata JSON"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write canonical JSON here"),
):
    """Convert a legacy file into the canonical JSON representation."""
    try:
        if meta is not None:
            metadata = load_metadata(meta)
        else:
            err_console.print(
                "[yellow]Warning: no --meta given, using placeholder metadata[/yellow]"
            )
            metadata = TranslationMetadata.placeholder()

        translation = convert_legacy(load_legacy_file(legacy_file), metadata)
    except (LegacyFormatError, SerializationError, BooksConversionError) as e:
        logger.error("Conversion failed", file=str(legacy_file), error_code=e.error_code)
        err_console.print(f"[red]Conversion failed:[/red] {escape(e.message)}")
        for suggestion in e.suggestions:
            err_console.print(f"  - {escape(suggestion)}")
        raise typer.Exit(1)

    if output is None:
        typer.echo(json.dumps(translation_to_dict(translation), indent=2, ensure_ascii=False))
        return

    try:
        dump_translation(translation, output)
    except OSError as e:
        err_console.print(f"[red]Cannot write {escape(str(output))}:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    books = translation.local_books
    err_console.print(
        f"[green]Converted {len(books)} books to {escape(str(output))}[/green]"
    )


@app.command()
def validate(
    file: Path = typer.Argument(..., help="Canonical JSON file (or legacy file with --legacy)"),
    legacy: bool = typer.Option(False, "--legacy", help="Convert FILE from the legacy format first"),
    format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Output format"),
):
    """Validate a translation and report every structural defect."""
    try:
        translation = _load_for_validation(file, legacy)
        result = validate_translation(translation)
    except RemoteStorageError as e:
        err_console.print(f"[red]{escape(e.message)}[/red]")
        raise typer.Exit(1)
    except ScripturaError as e:
        err_console.print(f"[red]Could not load {escape(str(file))}:[/red] {escape(e.message)}")
        raise typer.Exit(1)

    if format == OutputFormat.JSON:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    elif format == OutputFormat.TEXT:
        typer.echo(validation_report(result))
    else:
        _display_validation_result(result)

    if not result.is_valid:
        raise typer.Exit(1)


# Helper functions

def _load_for_validation(file: Path, legacy: bool) -> Translation:
    """Load a canonical file, or convert a legacy one with placeholder metadata."""
    if legacy:
        return convert_legacy(load_legacy_file(file), TranslationMetadata.placeholder())
    return load_translation(file)


def _display_validation_result(result: ValidationResult):
    """Display validation result as rich tables."""
    stats = result.statistics
    table = Table(title="Validation Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Total Books", str(stats.total_books))
    table.add_row("Total Chapters", str(stats.total_chapters))
    table.add_row("Total Verses", str(stats.total_verses))
    table.add_row("Errors", str(len(result.errors)))
    table.add_row("Warnings", str(len(result.warnings)))
    table.add_row("Books with errors", str(stats.books_with_errors))
    table.add_row("Chapters with errors", str(stats.chapters_with_errors))
    console.print(table)

    if result.errors:
        errors = Table(title="Errors")
        errors.add_column("#", justify="right")
        errors.add_column("Kind", style="red")
        errors.add_column("Message")
        for i, error in enumerate(result.errors, 1):
            errors.add_row(str(i), error.kind.value, escape(error.message))
        console.print(errors)

    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")

    if result.is_valid:
        console.print(Panel.fit("[bold green]Validation: PASSED[/bold green]", border_style="green"))
    else:
        console.print(Panel.fit("[bold red]Validation: FAILED[/bold red]", border_style="red"))


def main():
    """Main entry point."""
    try:
        app()
    finally:
        shutdown_tracing()


if __name__ == "__main__":
    main()
