"""CLI application entry point for planarize.

This module provides the main CLI interface using Typer.
"""

import time
from pathlib import Path
from typing import Annotated

import typer

from planarize import __version__
from planarize.cli.output import (
    print_boundaries,
    print_error,
    print_header,
    print_mesh_info,
    print_plane_info,
    print_step,
    print_success,
)
from planarize.config import (
    BoundaryConfig,
    LoggingConfig,
    PlanarizeSettings,
    PlaneFitConfig,
)
from planarize.core import MeshImporter
from planarize.exceptions import (
    FitRejected,
    MeshError,
    MeshFileError,
    PlanarizeError,
)
from planarize.io import MeshReader, ResultWriter
from planarize.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="planarize",
    help="Extract planar boundary polygons (outer boundary and holes) from a triangle mesh patch.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"Planarize v{__version__}")
        raise typer.Exit()


def parse_vector(text: str) -> tuple[float, float, float]:
    """Parse an ``X,Y,Z`` string into a 3-tuple.

    Raises:
        typer.BadParameter: If the text is not three comma-separated numbers
    """
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 3:
        raise typer.BadParameter(f"expected X,Y,Z but got '{text}'")
    try:
        x, y, z = (float(p) for p in parts)
    except ValueError:
        raise typer.BadParameter(f"expected three numbers but got '{text}'") from None
    return (x, y, z)


@app.command()
def planarize(
    input_mesh: Annotated[
        Path,
        typer.Argument(
            help="Path to input OBJ or JSON mesh file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-boundaries.json)",
        ),
    ] = None,
    distance_threshold: Annotated[
        float,
        typer.Option(
            "--distance-threshold",
            "-d",
            help="Inlier distance for plane fitting (mesh units)",
            min=0.0,
        ),
    ] = 0.01,
    angle_tolerance: Annotated[
        float,
        typer.Option(
            "--angle-tolerance",
            "-a",
            help="Allowed angle between fitted and expected normal (radians)",
            min=0.0,
        ),
    ] = 0.5,
    min_inlier_fraction: Annotated[
        float,
        typer.Option(
            "--min-inlier-fraction",
            help="Minimum fraction of points on the fitted plane",
            min=0.0,
            max=1.0,
        ),
    ] = 0.9,
    normal: Annotated[
        str | None,
        typer.Option(
            "--normal",
            "-n",
            help="Expected plane normal as X,Y,Z (default: first vertex normal)",
        ),
    ] = None,
    enforce_winding: Annotated[
        bool,
        typer.Option(
            "--enforce-winding",
            help="Make the outer boundary CCW and holes CW",
        ),
    ] = False,
    seed: Annotated[
        int | None,
        typer.Option(
            "--seed",
            help="Random seed for plane fitting",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
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
    """Extract the boundaries of a planar mesh patch as 2D polygons.

    Fits a plane to the mesh points, builds a local frame on it and writes the
    outer boundary and holes in local plane coordinates, together with the
    frame needed to map them back to world coordinates.

    Example:
        planarize patch.obj

    This will create patch-boundaries.json next to the input file.
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    # Validate input file exists
    if not input_mesh.exists():
        print_error(
            f"Input file not found: {input_mesh}",
            details=f"The file '{input_mesh}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_mesh.is_file():
        print_error(
            f"Input path is not a file: {input_mesh}",
            details="Please provide a path to an OBJ or JSON mesh file.",
        )
        raise typer.Exit(code=1)

    try:
        expected_normal = parse_vector(normal) if normal is not None else None
        settings = PlanarizeSettings(
            plane=PlaneFitConfig(
                distance_threshold=distance_threshold,
                angle_tolerance=angle_tolerance,
                min_inlier_fraction=min_inlier_fraction,
                random_seed=seed,
            ),
            boundary=BoundaryConfig(enforce_winding=enforce_winding),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=log_level if not quiet else "ERROR",
            ),
        )
    except (typer.BadParameter, ValueError) as e:
        print_error(f"Invalid option: {e}")
        raise typer.Exit(code=1)

    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)

    start = time.perf_counter()
    try:
        if not quiet:
            print_step("Loading mesh")

        reader = MeshReader(input_mesh)
        mesh = reader.load()

        if not quiet:
            print_mesh_info(
                mesh_path=str(input_mesh),
                mesh_format=reader.format,
                point_count=mesh.point_count,
                face_count=mesh.face_count,
            )
            print_step("Fitting plane")

        importer = MeshImporter(settings)
        result = importer.import_mesh(mesh, expected_normal=expected_normal, source=str(input_mesh))

        if not quiet:
            print_plane_info(result)
            print_step("Boundaries")
            print_boundaries(result, verbose=verbose)

        output_path = output if output is not None else ResultWriter.get_output_path(input_mesh)
        ResultWriter().save(result, output_path)

        if not quiet:
            print_success(str(output_path), time.perf_counter() - start, stats=result.stats)

    except FitRejected as e:
        print_error("Mesh is not planar enough", details=e.reason)
        raise typer.Exit(code=1)
    except MeshError as e:
        print_error(f"Invalid mesh: {e}")
        raise typer.Exit(code=1)
    except MeshFileError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except PlanarizeError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
