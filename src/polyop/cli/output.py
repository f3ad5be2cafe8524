"""Rich console output helpers for the CLI.

This module provides user-friendly console output using the Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from polyop.domain import Crossing, Polygon

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]polyop[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def _format_number(value: float) -> str:
    return f"{value:,.6g}"


def print_polygon_info(path: str, polygon: Polygon | None) -> None:
    """Print a one-line polygon summary under its path.

    Args:
        path: Where the polygon came from or goes to
        polygon: Polygon to summarise (None for an empty result)
    """
    line = Text("  ")
    line.append(path)
    console.print(line)

    if polygon is None or polygon.is_empty:
        console.print("  empty")
        return

    outer = len(polygon.outer_rings)
    holes = len(polygon.holes)
    points = sum(len(ring) for ring in polygon.rings)
    console.print(
        f"  {outer} outer {SYM_DOT} {holes} holes {SYM_DOT} {points} points "
        f"{SYM_DOT} area {_format_number(polygon.area)}"
    )


def print_ring_table(polygon: Polygon) -> None:
    """Print a table with one row per ring."""
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Points", justify="right")
    table.add_column("Area", justify="right")
    table.add_column("Bounds")

    for idx, ring in enumerate(polygon.rings):
        box = ring.bounding_box
        table.add_row(
            str(idx),
            "hole" if ring.is_hole else "outer",
            str(len(ring)),
            _format_number(ring.signed_area),
            f"({_format_number(box.min_x)}, {_format_number(box.min_y)}) – "
            f"({_format_number(box.max_x)}, {_format_number(box.max_y)})",
        )
    console.print(table)


def print_crossings(crossings: list[Crossing]) -> None:
    """Print a table of classified crossings."""
    if not crossings:
        console.print("  No crossings")
        return

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Point")
    table.add_column("A ring:seg@ratio")
    table.add_column("A")
    table.add_column("B ring:seg@ratio")
    table.add_column("B")

    for crossing in crossings:
        loc_a, loc_b = crossing.location_a, crossing.location_b
        table.add_row(
            f"({_format_number(crossing.point.x)}, {_format_number(crossing.point.y)})",
            f"{loc_a.ring_index}:{loc_a.segment_index}@{loc_a.ratio:.4f}",
            crossing.kind_a.name.lower() if crossing.kind_a else "-",
            f"{loc_b.ring_index}:{loc_b.segment_index}@{loc_b.ratio:.4f}",
            crossing.kind_b.name.lower() if crossing.kind_b else "-",
        )
    console.print(table)
    console.print(f"  {len(crossings)} crossings")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    return f"{seconds:.2f}s"


def print_success(
    operation: str,
    output_path: str,
    total_time_s: float,
    rings: int,
    crossings: int,
) -> None:
    """Print success message with summary.

    Args:
        operation: Operation name
        output_path: Path to output file
        total_time_s: Total time in seconds
        rings: Number of output rings
        crossings: Number of crossings found
    """
    console.print(
        f"\n[bold green]{SYM_OK} {operation.capitalize()} complete[/bold green] "
        f"in {_format_time(total_time_s)}"
    )

    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)
    console.print(f"  {rings} rings {SYM_DOT} {crossings} crossings")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
