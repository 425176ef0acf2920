"""CLI application entry point for msdfatlas.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from msdfatlas import __version__
from msdfatlas.cli.output import (
    SYM_OK,
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_field_info,
    print_font_info,
    print_header,
    print_processing_info,
    print_step,
    print_success,
)
from msdfatlas.config import (
    DEFAULT_CHARSET,
    AtlasConfig,
    FieldConfig,
    LoggingConfig,
    MsdfAtlasSettings,
    ProcessingConfig,
)
from msdfatlas.core import (
    AtlasProcessor,
    build_shape,
    generate_debug_planes,
    generate_msdf,
)
from msdfatlas.core.generator import bitmap_size
from msdfatlas.exceptions import (
    FontLoadError,
    FontSaveError,
    MsdfAtlasError,
    ProcessingCancelledError,
)
from msdfatlas.io import AtlasWriter, FontReader, write_tga

app = typer.Typer(
    name="msdfatlas",
    help="Build a multi-channel signed distance field atlas from a TrueType font.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]msdfatlas[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def generate(
    input_font: Annotated[
        Path,
        typer.Argument(
            help="Path to input TTF font file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Atlas PNG path (default: {name}.png)",
        ),
    ] = None,
    json_output: Annotated[
        Path | None,
        typer.Option(
            "--json",
            help="Metrics JSON path (default: {name}.json)",
        ),
    ] = None,
    font_size: Annotated[
        float,
        typer.Option(
            "--size",
            "-s",
            help="Font size in pixels",
            min=1.0,
            max=1000.0,
        ),
    ] = 100.0,
    padding: Annotated[
        int,
        typer.Option(
            "--padding",
            "-p",
            help="Border around each glyph in pixels",
            min=0,
            max=128,
        ),
    ] = 10,
    max_range: Annotated[
        float,
        typer.Option(
            "--max-range",
            "-r",
            help="Distance mapped to the ends of the byte range",
            min=0.01,
            max=64.0,
        ),
    ] = 1.0,
    charset: Annotated[
        str | None,
        typer.Option(
            "--charset",
            "-c",
            help="Characters to include (default: printable ASCII)",
        ),
    ] = None,
    max_width: Annotated[
        int,
        typer.Option(
            "--max-width",
            help="Maximum atlas width in pixels",
            min=16,
        ),
    ] = 1024,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    debug_tga: Annotated[
        str | None,
        typer.Option(
            "--debug-tga",
            help="Render one character to TGA files for inspection and exit",
        ),
    ] = None,
    list_glyphs: Annotated[
        bool,
        typer.Option(
            "--list-glyphs",
            help="List charset glyphs with their segment counts and exit",
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
    """Render the glyphs of a font into an MSDF atlas with JSON metrics.

    Example:
        msdfatlas Roboto-Regular.ttf

    This will create Roboto-Regular.png and Roboto-Regular.json next to the font.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not input_font.exists():
        print_error(f"Input file not found: {input_font}")
        raise typer.Exit(code=1)

    if not input_font.is_file():
        print_error(f"Input path is not a file: {input_font}")
        raise typer.Exit(code=1)

    settings = MsdfAtlasSettings(
        distance_field=FieldConfig(padding=padding, max_range=max_range),
        atlas=AtlasConfig(
            font_size=font_size,
            charset=charset or DEFAULT_CHARSET,
            max_width=max_width,
        ),
        processing=ProcessingConfig(max_workers=workers),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    if not quiet:
        print_header(__version__)

    try:
        if list_glyphs:
            _handle_list_glyphs(input_font, settings, quiet)
            raise typer.Exit(code=0)

        if debug_tga is not None:
            _handle_debug_tga(input_font, debug_tga, settings, quiet)
            raise typer.Exit(code=0)

        if not quiet:
            print_step("Loading font")

        try:
            with FontReader(input_font) as reader:
                font_type = reader.format
                glyph_count = reader.glyph_count
                upm = reader.units_per_em
        except Exception as e:
            raise FontLoadError(str(input_font), str(e)) from e

        if not quiet:
            print_font_info(
                font_path=str(input_font),
                font_type=font_type,
                glyph_count=glyph_count,
                upm=upm,
            )
            print_field_info(
                charset_size=len(settings.atlas.charset),
                font_size=font_size,
                padding=padding,
                max_range=max_range,
            )
            actual_workers = workers if workers else os.cpu_count() or 1
            print_step("Rendering")
            print_processing_info(actual_workers, is_auto=(workers is None))

        default_image, default_metrics = AtlasWriter.get_output_paths(input_font)
        image_path = output or default_image
        metrics_path = json_output or default_metrics

        processor = AtlasProcessor(settings)
        stats = processor.processing_logger.stats

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task(
                        f"Rendering {len(settings.atlas.charset)} glyphs",
                        total=len(settings.atlas.charset),
                    )

                    def update_progress(completed: int, total: int, *_: object) -> None:
                        progress.update(task_id, completed=completed, total=total)

                    stats = processor.process(
                        font_path=input_font,
                        image_path=image_path,
                        metrics_path=metrics_path,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                stats = processor.process(
                    font_path=input_font,
                    image_path=image_path,
                    metrics_path=metrics_path,
                    max_workers=workers,
                )
        except (KeyboardInterrupt, ProcessingCancelledError):
            if not quiet:
                print_cancellation_notice()
                print_cancellation_summary(
                    processed=stats.processed_count,
                    cancelled=stats.cancelled_count,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if not quiet:
            print_success(
                image_path=str(image_path),
                metrics_path=str(metrics_path),
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                skipped=stats.skipped_count,
                errors=stats.error_count,
                pixels_rendered=stats.pixels_rendered,
                avg_time_ms=stats.avg_glyph_time_ms,
            )
            if verbose and stats.errors:
                console.print("\n[bold]Errors[/bold]")
                for glyph_name, message in stats.errors:
                    console.print(f"  {glyph_name}: {message}")

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except FontSaveError as e:
        print_error(f"Could not save atlas: {e.reason}")
        raise typer.Exit(code=1)
    except MsdfAtlasError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _handle_list_glyphs(font_path: Path, settings: MsdfAtlasSettings, quiet: bool) -> None:
    """Handle --list-glyphs mode.

    Args:
        font_path: Path to font file
        settings: Settings holding the charset and field parameters
        quiet: Suppress output
    """
    if not quiet:
        print_step("Scanning charset")

    try:
        with FontReader(font_path) as reader:
            rows = []
            for char in settings.atlas.charset:
                outline = reader.get_outline(char, settings.atlas.font_size)
                if outline is None or outline.is_empty():
                    continue
                shape = build_shape(outline, padding=settings.distance_field.padding)
                width, height = bitmap_size(shape)
                rows.append((char, outline.name, len(shape.lines), width, height))
    except Exception as e:
        print_error(f"Could not read font: {e}")
        raise typer.Exit(code=1)

    if not quiet:
        console.print(f"\n[bold]{len(rows)} glyphs with outlines[/bold]\n")

    for char, name, segment_count, width, height in rows:
        plural = "segment" if segment_count == 1 else "segments"
        console.print(f"  {char!r} {name}: {segment_count} {plural}, {width}x{height}px")


def _handle_debug_tga(
    font_path: Path, char: str, settings: MsdfAtlasSettings, quiet: bool
) -> None:
    """Handle --debug-tga mode.

    Writes {name}_{code}.tga with the MSDF and {name}_{code}_debug_{r,g,b}.tga
    with one debug image per plane, next to the font.

    Args:
        font_path: Path to font file
        char: Character to render
        settings: Settings holding the field parameters
        quiet: Suppress output
    """
    if len(char) != 1:
        print_error(f"--debug-tga expects a single character, got {char!r}")
        raise typer.Exit(code=1)

    if not quiet:
        print_step(f"Rendering {char!r} for inspection")

    try:
        with FontReader(font_path) as reader:
            outline = reader.get_outline(char, settings.atlas.font_size)
    except MsdfAtlasError:
        raise
    except Exception as e:
        raise FontLoadError(str(font_path), str(e)) from e

    if outline is None or outline.is_empty():
        print_error(f"No outline for {char!r} in {font_path}")
        raise typer.Exit(code=1)

    field_config = settings.distance_field
    shape = build_shape(
        outline,
        padding=field_config.padding,
        tolerance=field_config.degenerate_tolerance,
        quadratic_samples=field_config.quadratic_samples,
    )
    width, height = bitmap_size(shape)
    stem = f"{font_path.stem}_{ord(char):04x}"

    written = []
    msdf_path = font_path.with_name(f"{stem}.tga")
    write_tga(generate_msdf(shape, width, height, field_config), msdf_path)
    written.append(msdf_path)

    debug_images = generate_debug_planes(shape, width, height, field_config)
    for suffix, image in zip("rgb", debug_images, strict=True):
        path = font_path.with_name(f"{stem}_debug_{suffix}.tga")
        write_tga(image, path)
        written.append(path)

    if not quiet:
        console.print(f"\n[bold green]{SYM_OK} Wrote[/bold green] {len(written)} files")
        for path in written:
            console.print(f"  {path}")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
