"""CLI application entry point for gerberkit.

This module provides the command-line interface using Typer:

- ``compile-font``: read a font, precompute glyph polarity, write JSON
- ``text``: render a string onto a silkscreen layer and write Gerber files
"""

import time
from pathlib import Path
from typing import Annotated

import structlog
import typer

from gerberkit import __version__
from gerberkit.cli.output import (
    console,
    create_progress,
    print_error,
    print_font_info,
    print_header,
    print_polarity_summary,
    print_step,
    print_success,
)
from gerberkit.config import (
    GerberSettings,
    LoggingConfig,
    OutputConfig,
    PolarityConfig,
    TessellationConfig,
)
from gerberkit.core import (
    Design,
    Text,
    TextAlign,
    XAlign,
    YAlign,
    fill_polarity,
    get_font,
    load_fonts_dir,
    register_font,
)
from gerberkit.domain import Font
from gerberkit.exceptions import FontLoadError, GerberKitError
from gerberkit.io import FontWriter, load_font
from gerberkit.utils import CompileLogger, configure_logging

logger = structlog.get_logger(__name__)

app = typer.Typer(
    name="gerberkit",
    help="Write Gerber RS274X files for printed circuit boards.",
    add_completion=False,
    no_args_is_help=True,
)

ALIGN_NAMES = {
    "left": XAlign.LEFT,
    "center": XAlign.CENTER,
    "right": XAlign.RIGHT,
    "bottom": YAlign.BOTTOM,
    "top": YAlign.TOP,
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]gerberkit[/bold blue] v{__version__}")
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
    """Write Gerber RS274X files for printed circuit boards."""


def parse_align(value: str) -> TextAlign:
    """Parse an alignment like "bottom-left", "center" or "top-right".

    Raises:
        ValueError: If the value names no known alignment
    """
    value = value.lower().strip()
    if value == "center":
        return TextAlign(XAlign.CENTER, YAlign.CENTER)

    parts = value.split("-")
    if len(parts) != 2:
        raise ValueError(f"Invalid alignment: {value}")
    vertical, horizontal = parts
    y_align = YAlign.CENTER if vertical == "center" else ALIGN_NAMES.get(vertical)
    x_align = XAlign.CENTER if horizontal == "center" else ALIGN_NAMES.get(horizontal)
    if not isinstance(y_align, YAlign) or not isinstance(x_align, XAlign):
        raise ValueError(f"Invalid alignment: {value}")
    return TextAlign(x_align, y_align)


def _setup_logging(log_file: Path | None, log_level: str, quiet: bool) -> None:
    settings = LoggingConfig(log_file=log_file, log_level=log_level)
    configure_logging(
        log_file=settings.log_file,
        console_level=settings.log_level,
        file_level=settings.file_log_level,
        quiet=quiet,
    )


def _resolve_font(font: str, fonts_dir: Path | None) -> Font:
    """Load a font file, or look an id up in the registry."""
    path = Path(font)
    if path.is_file():
        loaded = load_font(path)
        register_font(loaded)
        return loaded
    if fonts_dir is not None:
        load_fonts_dir(fonts_dir)
    return get_font(font)


@app.command("compile-font")
def compile_font(
    input_font: Annotated[
        Path,
        typer.Argument(
            help="Path to input SVG webfont, TTF or OTF file",
            show_default=False,
        ),
    ],
    output_dir: Annotated[
        Path,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for the compiled <font-id>.json",
        ),
    ] = Path("."),
    canvas_size: Annotated[
        int,
        typer.Option(
            "--canvas-size",
            help="Raster canvas size for polarity computation (pixels)",
            min=64,
        ),
    ] = 2048,
    cross_check: Annotated[
        bool,
        typer.Option(
            "--cross-check/--no-cross-check",
            help="Compare raster polarity with exact nesting and warn on mismatch",
        ),
    ] = True,
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
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Compile a font to JSON with precomputed glyph polarity.

    Example:
        gerberkit compile-font FreeSerif.svg -o fonts/
    """
    if not input_font.is_file():
        print_error(
            f"Input file not found: {input_font}",
            details=f"The file '{input_font}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    _setup_logging(log_file, log_level, quiet)
    if not quiet:
        print_header(__version__)

    start = time.time()
    try:
        if not quiet:
            print_step("Loading font")
        font = load_font(input_font)
        if not quiet:
            print_font_info(str(input_font), font.font_id, len(font.glyphs), font.units_per_em)
            print_step("Computing polarity")

        compile_logger = CompileLogger(logger)
        polarity_config = PolarityConfig(canvas_size=canvas_size, cross_check=cross_check)
        if quiet:
            stats = fill_polarity(font, polarity_config, compile_logger=compile_logger)
        else:
            with create_progress() as progress:
                task_id = progress.add_task("Glyphs", total=len(font.glyphs))

                def update_progress(completed: int, total: int) -> None:
                    progress.update(task_id, completed=completed, total=total)

                stats = fill_polarity(
                    font,
                    polarity_config,
                    compile_logger=compile_logger,
                    progress_callback=update_progress,
                )
            print_polarity_summary(stats.computed_count, stats.kept_count, stats.mismatch_count)

        path = FontWriter(font, output_dir).save()
    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except GerberKitError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except OSError as e:
        print_error(f"Could not write font: {e}")
        raise typer.Exit(code=1)

    if not quiet:
        print_success([str(path)], time.time() - start)


@app.command("text")
def text_command(
    text: Annotated[
        str,
        typer.Argument(
            help="Text to render (\\n starts a new line)",
            show_default=False,
        ),
    ],
    font: Annotated[
        str,
        typer.Option(
            "--font",
            "-f",
            help="Font file or registered font id",
        ),
    ],
    size: Annotated[
        float,
        typer.Option(
            "--size",
            "-s",
            help="Font size in points",
            min=0.1,
        ),
    ] = 12.0,
    prefix: Annotated[
        str,
        typer.Option(
            "--prefix",
            "-p",
            help="File name prefix of the design",
        ),
    ] = "text",
    x: Annotated[float, typer.Option("--x", help="Anchor X (mm)")] = 0.0,
    y: Annotated[float, typer.Option("--y", help="Anchor Y (mm)")] = 0.0,
    align: Annotated[
        str,
        typer.Option(
            "--align",
            "-a",
            help="Alignment (bottom-left|bottom-center|...|center|...|top-right)",
        ),
    ] = "bottom-left",
    bottom: Annotated[
        bool,
        typer.Option(
            "--bottom",
            help="Place mirrored text on the bottom silkscreen",
        ),
    ] = False,
    fonts_dir: Annotated[
        Path | None,
        typer.Option(
            "--fonts-dir",
            help="Directory of compiled JSON fonts to register",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for the Gerber files (default: current directory)",
        ),
    ] = None,
    resolution: Annotated[
        float,
        typer.Option(
            "--resolution",
            help="Curve flattening resolution (mm)",
            min=0.001,
        ),
    ] = 0.1,
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
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Render text onto a silkscreen layer and write Gerber files plus zip.

    Example:
        gerberkit text "REV A" --font FreeSerif.svg --size 10 --prefix board
    """
    try:
        text_align = parse_align(align)
    except ValueError as e:
        print_error(str(e), details="Valid values: bottom-left, center, top-right, ...")
        raise typer.Exit(code=1)

    _setup_logging(log_file, log_level, quiet)
    if not quiet:
        print_header(__version__)

    text = text.replace("\\n", "\n").replace("\\t", "\t")
    settings = GerberSettings(
        tessellation=TessellationConfig(resolution_mm=resolution),
        output=OutputConfig(output_dir=output_dir),
    )

    start = time.time()
    try:
        loaded = _resolve_font(font, fonts_dir)
        # Only the glyphs this text uses need polarity.
        fill_polarity(loaded, settings.polarity, settings.tessellation, chars=text)

        design = Design(prefix, settings)
        layer = design.bottom_silkscreen() if bottom else design.top_silkscreen()
        layer.add(
            Text(
                x,
                y,
                -1.0 if bottom else 1.0,
                text,
                loaded.font_id,
                size_pts=size,
                align=text_align,
                config=settings.tessellation,
            )
        )
        if not quiet:
            print_step("Writing Gerber files")
        paths = design.write_gerber()
        mbb = design.mbb()
    except GerberKitError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except OSError as e:
        print_error(f"Could not write Gerber files: {e}")
        raise typer.Exit(code=1)

    if not quiet:
        if not mbb.is_empty:
            console.print(f"  {mbb.width:.2f} x {mbb.height:.2f} mm")
        print_success([str(p) for p in paths], time.time() - start)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
