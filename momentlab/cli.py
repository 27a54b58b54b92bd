"""
Momentlab CLI - Contour Moment Features

Command-line interface for measuring the shapes in an image.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

from momentlab.config import DEFAULT_IMAGE_PATH, AnalysisConfig, list_presets
from momentlab.errors import ImageLoadError, ImageWriteError
from momentlab.pipeline import analyze_path
from momentlab.render import annotate, save, show
from momentlab.report import features_table, format_text, write_json

# Exit code of the original demo when the image cannot be read
EXIT_LOAD_FAILED = -1
EXIT_WRITE_FAILED = 1

app = typer.Typer(
    name="momentlab",
    help="📐 [bold cyan]Momentlab[/] - Contour Moment Features\n\n"
         "Measure area, centroid, perimeter, orientation and eccentricity "
         "of every contour in an image.",
    rich_markup_mode="rich",
    add_completion=False,
    no_args_is_help=True,
    pretty_exceptions_enable=True,
    pretty_exceptions_show_locals=False,
)

console = Console()
error_console = Console(stderr=True, style="bold red")


class Preset(str, Enum):
    """Analysis preset."""
    classic = "classic"
    binary = "binary"
    detailed = "detailed"


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        from momentlab import __version__
        console.print(Panel(
            f"[bold cyan]Momentlab[/] version [bold green]{__version__}[/]",
            title="Version Info",
            border_style="cyan",
        ))
        raise typer.Exit()


def setup_logging(verbose: bool):
    """Route library logging through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


def parse_threshold(value: Optional[str]):
    """Accept 'otsu' or an integer level in [0, 255]."""
    if value is None:
        return None
    value = value.strip().lower()
    if value == "otsu":
        return value
    try:
        level = int(value)
    except ValueError:
        raise typer.BadParameter("must be 'otsu' or an integer between 0 and 255")
    if not 0 <= level <= 255:
        raise typer.BadParameter("must be between 0 and 255")
    return level


@app.command("analyze", rich_help_panel="Commands")
def analyze(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Path to the image to analyze",
        )
    ] = Path(DEFAULT_IMAGE_PATH),
    preset: Annotated[
        Preset,
        typer.Option(
            "--preset", "-p",
            help="Analysis preset",
            rich_help_panel="Analysis Options",
        )
    ] = Preset.classic,
    threshold: Annotated[
        Optional[str],
        typer.Option(
            "--threshold", "-t",
            help="Binarize before extraction: 'otsu' or a level 0-255",
            callback=parse_threshold,
            rich_help_panel="Analysis Options",
        )
    ] = None,
    legacy_int: Annotated[
        bool,
        typer.Option(
            "--legacy-int",
            help="Truncate area, centroid and perimeter to integers",
            rich_help_panel="Analysis Options",
        )
    ] = False,
    min_area: Annotated[
        Optional[float],
        typer.Option(
            "--min-area",
            help="Do not draw contours smaller than this area",
            min=0.0,
            rich_help_panel="Output Options",
        )
    ] = None,
    display: Annotated[
        bool,
        typer.Option(
            "--show/--no-show",
            help="Show the annotated image and wait for a key press",
            rich_help_panel="Output Options",
        )
    ] = True,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output", "-o",
            help="Save the annotated image to this path",
            rich_help_panel="Output Options",
        )
    ] = None,
    json_file: Annotated[
        Optional[Path],
        typer.Option(
            "--json",
            help="Write the features as JSON",
            rich_help_panel="Output Options",
        )
    ] = None,
    plain: Annotated[
        bool,
        typer.Option(
            "--plain",
            help="Print the plain text report instead of a table",
            rich_help_panel="Output Options",
        )
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose", "-v",
            help="Show debug logging",
        )
    ] = False,
):
    """
    📐 Measure the contours of an image.

    [bold]Examples:[/]

      [dim]# Analyze and show the annotated image[/]
      $ momentlab analyze shapes.png

      [dim]# Headless: save the annotation and the features[/]
      $ momentlab analyze shapes.png --no-show -o annotated.png --json features.json

      [dim]# Reproduce the integer output of the original demo[/]
      $ momentlab analyze shapes.png --legacy-int --plain
    """
    setup_logging(verbose)

    try:
        config = AnalysisConfig.from_preset(
            preset.value,
            threshold=threshold,
            min_area=min_area,
            integer_measurements=legacy_int or None,
        )
    except ValueError as e:
        error_console.print(f"❌ {e}")
        raise typer.Exit(2)

    try:
        image, result = analyze_path(input_file, config)
    except ImageLoadError as e:
        error_console.print(f"❌ {e}")
        raise typer.Exit(EXIT_LOAD_FAILED)

    if plain:
        console.print(format_text(result), end="", markup=False, highlight=False)
    else:
        console.print(f"Number of contours: [bold]{result.contour_count}[/]")
        if result.features:
            console.print(features_table(result))

    annotated = annotate(image, result, config)

    try:
        if output is not None:
            save(annotated, output)
            console.print(f"✅ Annotated image saved to [cyan]{output}[/]")
        if json_file is not None:
            write_json(result, json_file)
            console.print(f"✅ Features saved to [cyan]{json_file}[/]")
    except (ImageWriteError, OSError) as e:
        error_console.print(f"❌ {e}")
        raise typer.Exit(EXIT_WRITE_FAILED)

    if display:
        show(annotated)


@app.command("presets", rich_help_panel="Utilities")
def presets():
    """
    📋 List analysis presets.
    """
    table = Table(box=box.ROUNDED, border_style="cyan")
    table.add_column("Preset", style="cyan bold")
    table.add_column("Description")
    for name, description in list_presets().items():
        table.add_row(name, description)
    console.print(table)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version", "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        )
    ] = None,
):
    """
    📐 [bold cyan]Momentlab[/] - Contour Moment Features

    [bold]Quick Start:[/]

      [dim]# Measure every contour in an image[/]
      $ momentlab analyze shapes.png

      [dim]# List the analysis presets[/]
      $ momentlab presets
    """
    if ctx.invoked_subcommand is None:
        pass


def run():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
