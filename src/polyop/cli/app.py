"""CLI application entry point for polyop.

This module provides the main CLI interface using Typer.
"""

import json
import time
from pathlib import Path
from typing import Annotated

import typer

from polyop import __version__
from polyop.cli.output import (
    console,
    print_crossings,
    print_error,
    print_header,
    print_polygon_info,
    print_ring_table,
    print_step,
    print_success,
)
from polyop.config import GeometryConfig, LoggingConfig, PolyopSettings
from polyop.core import PolygonOperator
from polyop.domain import OperationKind, Polygon
from polyop.exceptions import PolyopError
from polyop.io import FORMAT_GEOJSON, FORMAT_RINGS, PolygonReader, PolygonWriter, polygon_to_data
from polyop.utils.logging import configure_logging

# Create the Typer app
app = typer.Typer(
    name="polyop",
    help="Boolean operations (intersection, union, xor, difference) on 2D polygons.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]polyop[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Boolean operations on polygons stored as JSON ring lists or GeoJSON."""


PolygonArgument = Annotated[
    Path,
    typer.Argument(help="Polygon JSON file (ring list or GeoJSON)", show_default=False),
]
OutputOption = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Write the result here instead of printing it"),
]
FormatOption = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format (rings|geojson)"),
]
ToleranceOption = Annotated[
    float,
    typer.Option("--tolerance", "-t", help="Distance below which points coincide", min=0.0),
]
NoValidateOption = Annotated[
    bool,
    typer.Option("--no-validate", help="Skip the self-crossing check on output rings"),
]
NormalizeOption = Annotated[
    bool,
    typer.Option("--normalize", help="Re-orient input rings from their nesting depth"),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option("--log-file", help="Write detailed logs to file"),
]
LogLevelOption = Annotated[
    str,
    typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
]
QuietOption = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Minimal console output"),
]


def _build_settings(
    tolerance: float,
    no_validate: bool,
    normalize: bool,
    log_file: Path | None,
    log_level: str,
) -> PolyopSettings:
    try:
        return PolyopSettings(
            geometry=GeometryConfig(
                tolerance=tolerance,
                validate_output=not no_validate,
                normalize_orientation=normalize,
            ),
            logging=LoggingConfig(log_file=log_file, log_level=log_level),
        )
    except ValueError as e:
        print_error("Invalid options", details=str(e))
        raise typer.Exit(code=1)


def _load(path: Path) -> Polygon:
    reader = PolygonReader(path)
    return reader.load()


def _run_operation(
    kind: OperationKind,
    polygon_a: Path,
    polygon_b: Path,
    output: Path | None,
    fmt: str,
    tolerance: float,
    no_validate: bool,
    normalize: bool,
    log_file: Path | None,
    log_level: str,
    quiet: bool,
) -> None:
    if fmt not in (FORMAT_RINGS, FORMAT_GEOJSON):
        print_error(f"Invalid format: {fmt}", details="Valid values: rings, geojson")
        raise typer.Exit(code=1)

    settings = _build_settings(tolerance, no_validate, normalize, log_file, log_level)
    # Without --output the result document goes to stdout on its own
    chatty = not quiet and output is not None

    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if chatty:
        print_header(__version__)

    try:
        if chatty:
            print_step("Loading polygons")
        a = _load(polygon_a)
        b = _load(polygon_b)
        if chatty:
            print_polygon_info(str(polygon_a), a)
            print_polygon_info(str(polygon_b), b)
            print_step(f"Computing {kind.value}")

        operator = PolygonOperator(settings.geometry, logger=logger)
        operator.stats.start_time = time.time()
        result = operator.apply(kind, a, b)
        operator.stats.end_time = time.time()

        if output is None:
            typer.echo(json.dumps(polygon_to_data(result, fmt), indent=2))
            return

        PolygonWriter(output, fmt).save(result)
    except PolyopError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if chatty:
        print_polygon_info(str(output), result)
        print_success(
            operation=kind.value,
            output_path=str(output),
            total_time_s=operator.stats.duration_seconds,
            rings=len(result.rings) if result is not None else 0,
            crossings=operator.stats.crossing_count,
        )


@app.command()
def intersect(
    polygon_a: PolygonArgument,
    polygon_b: PolygonArgument,
    output: OutputOption = None,
    fmt: FormatOption = FORMAT_RINGS,
    tolerance: ToleranceOption = GeometryConfig().tolerance,
    no_validate: NoValidateOption = False,
    normalize: NormalizeOption = False,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Area covered by both polygons.

    Example:
        polyop intersect a.json b.json -o result.json
    """
    _run_operation(
        OperationKind.INTERSECTION, polygon_a, polygon_b, output, fmt,
        tolerance, no_validate, normalize, log_file, log_level, quiet,
    )


@app.command()
def union(
    polygon_a: PolygonArgument,
    polygon_b: PolygonArgument,
    output: OutputOption = None,
    fmt: FormatOption = FORMAT_RINGS,
    tolerance: ToleranceOption = GeometryConfig().tolerance,
    no_validate: NoValidateOption = False,
    normalize: NormalizeOption = False,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Area covered by either polygon."""
    _run_operation(
        OperationKind.UNION, polygon_a, polygon_b, output, fmt,
        tolerance, no_validate, normalize, log_file, log_level, quiet,
    )


@app.command()
def xor(
    polygon_a: PolygonArgument,
    polygon_b: PolygonArgument,
    output: OutputOption = None,
    fmt: FormatOption = FORMAT_RINGS,
    tolerance: ToleranceOption = GeometryConfig().tolerance,
    no_validate: NoValidateOption = False,
    normalize: NormalizeOption = False,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Area covered by exactly one of the polygons."""
    _run_operation(
        OperationKind.XOR, polygon_a, polygon_b, output, fmt,
        tolerance, no_validate, normalize, log_file, log_level, quiet,
    )


@app.command()
def difference(
    polygon_a: PolygonArgument,
    polygon_b: PolygonArgument,
    output: OutputOption = None,
    fmt: FormatOption = FORMAT_RINGS,
    tolerance: ToleranceOption = GeometryConfig().tolerance,
    no_validate: NoValidateOption = False,
    normalize: NormalizeOption = False,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Area of the first polygon not covered by the second."""
    _run_operation(
        OperationKind.DIFFERENCE, polygon_a, polygon_b, output, fmt,
        tolerance, no_validate, normalize, log_file, log_level, quiet,
    )


@app.command()
def crossings(
    polygon_a: PolygonArgument,
    polygon_b: PolygonArgument,
    tolerance: ToleranceOption = GeometryConfig().tolerance,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the crossings as JSON"),
    ] = False,
) -> None:
    """List the points where the two polygon boundaries meet."""
    try:
        operator = PolygonOperator(GeometryConfig(tolerance=tolerance))
        found = operator.crossings(_load(polygon_a), _load(polygon_b))
    except PolyopError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except ValueError as e:
        print_error("Invalid options", details=str(e))
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps([crossing.to_dict() for crossing in found], indent=2))
        return

    print_step(f"Crossings of {polygon_a} and {polygon_b}")
    print_crossings(found)


@app.command()
def info(polygon: PolygonArgument) -> None:
    """Show the rings, orientation and area of a polygon file."""
    try:
        reader = PolygonReader(polygon)
        loaded = reader.load()
    except PolyopError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    print_step(f"Polygon ({reader.format})")
    print_polygon_info(str(polygon), loaded)
    if not loaded.is_empty:
        console.print()
        print_ring_table(loaded)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
