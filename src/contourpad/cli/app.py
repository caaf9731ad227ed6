"""CLI application entry point for contourpad.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from contourpad import __version__
from contourpad.cli.output import (
    SYM_OK,
    console,
    create_progress,
    print_error,
    print_header,
    print_image_info,
    print_stage_table,
    print_step,
    print_success,
    print_summary,
    print_warning,
)
from contourpad.config import (
    CanvasConfig,
    ContourPadSettings,
    CrossSectionConfig,
    LoggingConfig,
    MeshConfig,
    MeshMode,
    ScanConfig,
    SimplifyConfig,
    ThicknessConfig,
)
from contourpad.core import ContourPipeline, PipelineResult
from contourpad.domain import Bitmap
from contourpad.exceptions import (
    ContourPadError,
    EmptySilhouetteError,
    ImageError,
    MeshExportError,
)
from contourpad.io import ImageReader, MeshWriter, PointFormat, write_geometry_json

# Create the Typer app
app = typer.Typer(
    name="contourpad",
    help="Trace the silhouette of a drawing and extrude it into a thickness mesh.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]ContourPad[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def extrude(
    input_image: Annotated[
        Path,
        typer.Argument(
            help="Path to input image (PNG, JPEG, ...)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Mesh output path, format from suffix (default: {name}-mesh.stl)",
        ),
    ] = None,
    points_out: Annotated[
        Path | None,
        typer.Option(
            "--points-out",
            help="Also write boundary points, outline and cross-sections as JSON",
        ),
    ] = None,
    point_format: Annotated[
        str,
        typer.Option(
            "--point-format",
            help="Point format for --points-out (object|string|array)",
        ),
    ] = "object",
    grid_step: Annotated[
        int,
        typer.Option(
            "--grid-step",
            "-g",
            help="Scan angle step in degrees and scan-line spacing in pixels",
            min=1,
            max=45,
        ),
    ] = 5,
    tolerance: Annotated[
        float,
        typer.Option(
            "--tolerance",
            "-t",
            help="Outline simplification tolerance in pixels",
        ),
    ] = 2.0,
    cross_section_tolerance: Annotated[
        float,
        typer.Option(
            "--cross-section-tolerance",
            help="Largest x gap paired without interpolation",
        ),
    ] = 10.0,
    thickness: Annotated[
        str,
        typer.Option(
            "--thickness",
            help="Thickness profile (fish|ellipse|spindle|leaf)",
        ),
    ] = "fish",
    min_thickness: Annotated[
        float,
        typer.Option("--min-thickness", help="Smallest extrusion depth"),
    ] = 2.0,
    max_thickness: Annotated[
        float,
        typer.Option("--max-thickness", help="Peak extrusion depth"),
    ] = 20.0,
    solid: Annotated[
        bool,
        typer.Option(
            "--solid",
            help="Build a closed slab instead of the center-line strip",
        ),
    ] = False,
    no_fit: Annotated[
        bool,
        typer.Option(
            "--no-fit",
            help="Use the image at its own size instead of fitting it to the canvas",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Trace and report without writing any files",
        ),
    ] = False,
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
    """Trace the silhouette of a drawing and extrude it into a mesh.

    The image is placed on the canvas, scanned for its outline from many
    directions, simplified, split at its rightmost point and extruded
    using the chosen thickness profile.

    Example:
        contourpad fish.png --thickness spindle -o fish.obj
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    # Validate input file exists
    if not input_image.exists():
        print_error(
            f"Input file not found: {input_image}",
            details=f"The file '{input_image}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_image.is_file():
        print_error(
            f"Input path is not a file: {input_image}",
            details="Please provide a path to an image file.",
        )
        raise typer.Exit(code=1)

    try:
        fmt = PointFormat(point_format.lower())
    except ValueError:
        print_error(
            f"Invalid point format: {point_format}",
            details="Valid values: object, string, array",
        )
        raise typer.Exit(code=1)

    # Create settings from CLI arguments
    try:
        settings = ContourPadSettings(
            scan=ScanConfig(grid_step=grid_step),
            simplify=SimplifyConfig(tolerance=tolerance),
            cross_section=CrossSectionConfig(tolerance=cross_section_tolerance),
            thickness=ThicknessConfig(
                function=thickness,
                min_thickness=min_thickness,
                max_thickness=max_thickness,
            ),
            canvas=CanvasConfig(),
            mesh=MeshConfig(mode=MeshMode.SOLID if solid else MeshMode.STRIP),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=log_level,
                quiet=quiet,
            ),
        )
    except ValidationError as e:
        print_error("Invalid settings", details=str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    try:
        if not quiet:
            print_step("Loading image")

        reader = ImageReader(input_image, canvas=settings.canvas, fit=not no_fit)
        bitmap = reader.load()

        if not quiet:
            print_image_info(str(input_image), reader.original_size, bitmap.size)
            print_step("Tracing silhouette")

        result = _run_pipeline(settings, bitmap, quiet)

        if not quiet:
            if result.thickness.used_fallback:
                print_warning(
                    f"Unknown thickness profile '{thickness}', "
                    f"using {result.thickness.function.value}"
                )
            print_summary(result.stats, result.thickness.function.value)
            if verbose:
                print_stage_table(result.stats)

        if dry_run:
            if not quiet:
                console.print(
                    f"\n[bold green]{SYM_OK} Dry run complete[/bold green] – no files written"
                )
            raise typer.Exit(code=0)

        output_path = output or MeshWriter.get_mesh_path(input_image)
        MeshWriter(result.mesh, output_path).save()

        if points_out is not None:
            write_geometry_json(result, points_out, fmt)

        if not quiet:
            print_success(
                output_path=str(output_path),
                file_size=_format_file_size(output_path),
                total_time_s=result.stats.duration_seconds,
            )

    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except ImageError as e:
        print_error(f"Could not load image: {e}")
        raise typer.Exit(code=1)
    except EmptySilhouetteError:
        print_error(
            "Nothing to trace",
            details="The canvas is blank; draw or import something first.",
        )
        raise typer.Exit(code=1)
    except MeshExportError as e:
        print_error(f"Could not save mesh: {e.reason}")
        raise typer.Exit(code=1)
    except ContourPadError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _run_pipeline(settings: ContourPadSettings, bitmap: Bitmap, quiet: bool) -> PipelineResult:
    """Run the pipeline, showing scan progress unless quiet.

    Args:
        settings: Pipeline settings
        bitmap: Canvas to trace
        quiet: Suppress the progress bar

    Returns:
        Result of the pipeline run
    """
    pipeline = ContourPipeline(settings)

    if quiet:
        return pipeline.run(bitmap)

    with create_progress() as progress:
        task_id = progress.add_task("Scanning", total=None)

        def update_progress(current: int, total: int, _angle: float) -> None:
            progress.update(task_id, completed=current, total=total)

        return pipeline.run(bitmap, progress_callback=update_progress)


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
        if size_bytes < 1024:
            return f"{size_bytes} B"
        elif size_bytes < 1024 * 1024:
            return f"{size_bytes / 1024:.0f} KB"
        else:
            return f"{size_bytes / (1024 * 1024):.1f} MB"
    except OSError:
        return "unknown"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
