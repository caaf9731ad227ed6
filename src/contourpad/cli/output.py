"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""


from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from contourpad.utils import PipelineStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for the radial scan.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]ContourPad[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_image_info(
    image_path: str,
    original_size: tuple[int, int],
    canvas_size: tuple[int, int],
) -> None:
    """Print image and canvas information.

    Args:
        image_path: Path to the image file
        original_size: Source image (width, height)
        canvas_size: Canvas (width, height) the image was placed on
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(image_path)
    console.print(line)
    console.print(
        f"  {original_size[0]}x{original_size[1]} px {SYM_DOT} "
        f"canvas {canvas_size[0]}x{canvas_size[1]}"
    )


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


def print_stage_table(stats: PipelineStats) -> None:
    """Print per-stage timings.

    Args:
        stats: Statistics of the finished run
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Stage")
    table.add_column("Time", justify="right")
    for stage, duration_ms in stats.stage_timings_ms.items():
        table.add_row(stage, _format_time(duration_ms / 1000))
    console.print(table)


def print_summary(stats: PipelineStats, thickness_function: str) -> None:
    """Print geometry counts of a finished run.

    Args:
        stats: Statistics of the finished run
        thickness_function: Name of the profile actually used
    """
    closed = "closed" if stats.path_closed else "open"
    console.print(
        f"  {stats.boundary_points} boundary points {SYM_DOT} "
        f"{stats.path_points} outline points ({closed})"
    )
    console.print(
        f"  {stats.cross_sections} cross-sections {SYM_DOT} "
        f"{thickness_function} profile"
    )
    console.print(f"  {stats.vertices} vertices {SYM_DOT} {stats.triangles} triangles")


def print_success(output_path: str, file_size: str, total_time_s: float) -> None:
    """Print success message.

    Args:
        output_path: Path to the written mesh
        file_size: Human-readable file size string
        total_time_s: Total processing time in seconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)


def print_warning(message: str) -> None:
    """Print a non-fatal warning."""
    console.print(f"  [yellow]{SYM_DOT} {message}[/yellow]")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        # Pydantic messages contain [brackets] that Rich would read as markup
        console.print(Text(f"  {details}"))
