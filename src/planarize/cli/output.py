"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from planarize.domain import ImportResult
from planarize.utils import ImportStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def _format_vector(values: list[float]) -> str:
    return "(" + ", ".join(f"{v:.4f}" for v in values) + ")"


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Planarize[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_mesh_info(mesh_path: str, mesh_format: str, point_count: int, face_count: int) -> None:
    """Print mesh information.

    Args:
        mesh_path: Path to the mesh file
        mesh_format: Mesh format (e.g., "OBJ", "JSON")
        point_count: Number of vertices
        face_count: Number of faces
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(mesh_path)
    line1.append(f" ({mesh_format})")
    console.print(line1)
    console.print(f"  {point_count:,} points {SYM_DOT} {face_count:,} faces")


def print_plane_info(result: ImportResult) -> None:
    """Print fitted plane and local frame.

    Args:
        result: Import result holding plane and frame
    """
    console.print(
        f"  normal {_format_vector(result.plane.normal.tolist())} "
        f"{SYM_DOT} offset {result.plane.offset:.4f}"
    )
    console.print(
        f"  origin {_format_vector(result.frame.origin.tolist())} "
        f"{SYM_DOT} {result.inlier_fraction:.1%} inliers"
    )


def print_boundaries(result: ImportResult, verbose: bool) -> None:
    """Print a table of extracted boundaries.

    Args:
        result: Import result holding boundaries and hierarchy
        verbose: Whether to include bounding boxes
    """
    hierarchy = result.hierarchy
    console.print(
        f"  [green]{len(result.boundaries)}[/green] boundaries "
        f"{SYM_DOT} {len(hierarchy.holes)} holes"
    )
    if not result.boundaries:
        return

    table = Table(box=None, padding=(0, 2), show_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Points", justify="right")
    table.add_column("Area", justify="right")
    table.add_column("Winding")
    if verbose:
        table.add_column("Bounds")

    for idx, boundary in enumerate(result.boundaries):
        if idx == hierarchy.outer:
            kind = "outer"
        elif idx in hierarchy.stray:
            kind = "[yellow]stray hole[/yellow]"
        elif idx in hierarchy.holes:
            kind = "hole"
        else:
            kind = "degenerate"
        winding = boundary.winding
        row = [
            str(idx),
            kind,
            str(len(boundary)),
            f"{boundary.signed_area():.4f}",
            winding.name.lower() if winding else "-",
        ]
        if verbose:
            min_x, min_y, max_x, max_y = boundary.bounding_box()
            row.append(f"[{min_x:.3f}, {min_y:.3f}] to [{max_x:.3f}, {max_y:.3f}]")
        table.add_row(*row)

    console.print(table)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(output_path: str, total_time_s: float, stats: ImportStats | None = None) -> None:
    """Print success message.

    Args:
        output_path: Path to output file
        total_time_s: Total processing time in seconds
        stats: Import statistics to summarize, if available
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")
    if stats is not None:
        console.print(
            f"  [dim]{stats.loop_count} boundaries {SYM_DOT} {stats.hole_count} holes {SYM_DOT} "
            f"import {_format_time(stats.duration_seconds)}[/dim]"
        )
    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
