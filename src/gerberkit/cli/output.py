"""Rich console output helpers for the CLI."""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

console = Console()

SYM_STEP = "▸"
SYM_OK = "✓"
SYM_ERR = "✗"
SYM_DOT = "·"


def create_progress() -> Progress:
    """Create a rich progress bar for glyph polarity computation."""
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header."""
    console.print(f"\n[bold]gerberkit[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, font_id: str, glyph_count: int, upm: float) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        font_id: Registry id of the font
        glyph_count: Number of mapped glyphs
        upm: Units per em value
    """
    line = Text("  ")
    line.append(font_path)
    line.append(f" ({font_id})")
    console.print(line)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} {upm:,.0f} UPM")


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


def print_polarity_summary(computed: int, kept: int, mismatches: int) -> None:
    """Print the polarity computation counts."""
    mismatch_style = "yellow" if mismatches > 0 else "green"
    console.print(
        f"  {computed} computed {SYM_DOT} {kept} kept {SYM_DOT} "
        f"[{mismatch_style}]{mismatches} mismatches[/{mismatch_style}]"
    )


def print_success(paths: list[str], total_time_s: float) -> None:
    """Print success message with the written files.

    Args:
        paths: Written files
        total_time_s: Total run time in seconds
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")
    for path in paths:
        line = Text("  ")
        line.append(path, style="bold")
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
