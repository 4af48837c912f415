"""Command-line shell for the HEIC to JPEG converter.

Exposes the operations a desktop front-end invokes: convert a file, show the
current settings, stage an upload, save a converted file and clean up
temporary files.
"""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from heic_jpeg import __version__
from heic_jpeg.config import load_config
from heic_jpeg.errors import AppError
from heic_jpeg.filesystem import FileSystemHandler, format_file_size
from heic_jpeg.logging_config import setup_logging
from heic_jpeg.models import AppConfig, ConversionResult, ConversionStatus
from heic_jpeg.orchestrator import ConversionOrchestrator

# Create console for rich output
console = Console()


def handle_error(error: Exception) -> None:
    """Display a formatted error message."""
    console.print(f"[bold red]Error:[/bold red] {error}", style="red")


def display_config(config: AppConfig) -> None:
    """Display the resolved configuration as a table."""
    table = Table(title="Current Settings", show_header=True, header_style="bold")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    for group, values in config.to_dict().items():
        for key, value in values.items():
            table.add_row(f"{group}.{key}", str(value))

    console.print(table)


def display_result(result: ConversionResult) -> None:
    """Display the result of a single file conversion."""
    if result.status == ConversionStatus.SUCCESS:
        console.print(
            f"[green]✓[/green] Converted: {Path(result.input_path).name} → "
            f"{result.output_path} ({result.processing_time:.2f}s)"
        )
    else:
        console.print(f"[red]✗[/red] Failed: {result.input_path} - {result.error_message}")


@click.group()
@click.version_option(
    __version__, "--version", message="HEIC to JPEG Converter v%(version)s"
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose logging.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (default: HEIC_LOG_LEVEL or INFO).",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also append log output to this file.",
)
@click.help_option("--help", "-h")
def main(verbose: bool, log_level: str | None, log_file: Path | None) -> None:
    """Convert HEIC/HEIF images to JPEG.

    Examples:

        # Convert a file into the temporary directory
        heic-jpeg convert photo.heic

        # Convert and save the result next to the original
        heic-jpeg convert photo.heic --output photo.jpg

        # Show the settings in effect
        heic-jpeg config

        # Keep a debug log of a conversion
        heic-jpeg --log-level debug --log-file run.log convert photo.heic
    """
    setup_logging(level=log_level, verbose=verbose, log_file=log_file)


@main.command()
@click.argument("file_path")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Copy the converted JPEG here and remove the temporary file.",
)
def convert(file_path: str, output: Path | None) -> None:
    """Convert FILE_PATH to JPEG."""
    orchestrator = ConversionOrchestrator()
    result = orchestrator.convert_single(file_path)
    display_result(result)
    if result.status == ConversionStatus.FAILED or result.output_path is None:
        sys.exit(1)

    if output is not None:
        filesystem = orchestrator.filesystem
        try:
            filesystem.copy_to_destination(result.output_path, output)
            filesystem.cleanup_temp_file(result.output_path)
        except AppError as e:
            handle_error(e)
            sys.exit(1)
        console.print(f"Saved to: [cyan]{output}[/cyan]")


@main.command("config")
def show_config() -> None:
    """Show the configuration currently in effect."""
    display_config(load_config())


@main.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def stage(source: Path) -> None:
    """Copy SOURCE into the temporary directory under a unique name."""
    try:
        temp_path = FileSystemHandler().save_temp_file(source.name, source.read_bytes())
    except (OSError, AppError) as e:
        handle_error(e)
        sys.exit(1)
    console.print(str(temp_path))


@main.command()
@click.argument("temp_file", type=click.Path(path_type=Path))
@click.argument("destination", type=click.Path(dir_okay=False, path_type=Path))
def save(temp_file: Path, destination: Path) -> None:
    """Copy a converted TEMP_FILE to DESTINATION."""
    try:
        FileSystemHandler().copy_to_destination(temp_file, destination)
    except AppError as e:
        handle_error(e)
        sys.exit(1)
    console.print(f"[green]✓[/green] Saved to: {destination}")


@main.command()
@click.argument("file_path", type=click.Path(path_type=Path))
def cleanup(file_path: Path) -> None:
    """Remove a temporary file; succeeds if it is already gone."""
    try:
        FileSystemHandler().cleanup_temp_file(file_path)
    except AppError as e:
        handle_error(e)
        sys.exit(1)


@main.command()
@click.argument("file_path", type=click.Path(path_type=Path))
def size(file_path: Path) -> None:
    """Print the size of FILE_PATH."""
    try:
        size_bytes = FileSystemHandler().get_file_size(file_path)
    except AppError as e:
        handle_error(e)
        sys.exit(1)
    console.print(format_file_size(size_bytes))


if __name__ == "__main__":
    main()
