"""Parallel processing orchestration for atlas generation.

This module coordinates the full atlas workflow with parallel rendering of
individual glyphs using ProcessPoolExecutor.

Key components:
- process_glyph: Top-level picklable function for parallel execution
- AtlasProcessor: Main orchestrator class for atlas generation
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from msdfatlas.config import FieldConfig, MsdfAtlasSettings, get_default_settings
from msdfatlas.core.generator import render_glyph
from msdfatlas.core.packer import compose_atlas, pack_rects
from msdfatlas.domain import (
    AtlasGlyph,
    FontCommon,
    FontData,
    FontInfo,
    GlyphMetrics,
    GlyphOutline,
    Uint8Image,
)
from msdfatlas.exceptions import (
    AtlasError,
    GlyphProcessingError,
    ProcessingCancelledError,
    UnsupportedOutlineError,
)
from msdfatlas.io import AtlasWriter, FontReader
from msdfatlas.utils import ProcessingLogger, ProcessingStats, configure_logging


def process_glyph(
    outline_dict: dict[str, Any],
    config_dict: dict[str, Any],
) -> dict[str, Any]:
    """Render a single glyph into an MSDF bitmap.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Deserializes the outline, renders it, and returns the raw bitmap.

    Args:
        outline_dict: Serialized outline (from GlyphOutline.to_dict())
        config_dict: Serialized field configuration

    Returns:
        Dictionary containing either:
        - Success: {"char", "width", "height", "image": bytes, "metrics": dict,
          "duration_ms": float}
        - Error: {"error": str, "char": str, "glyph_name": str,
          "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        outline = GlyphOutline.from_dict(outline_dict)
        config = FieldConfig(**config_dict)

        image, metrics = render_glyph(outline, config)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "char": outline.char,
            "width": image.width,
            "height": image.height,
            "image": bytes(image.data),
            "metrics": metrics.to_dict(),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        # Capture full traceback for debugging
        duration_ms = (time.time() - start_time) * 1000
        tb = traceback.format_exc()
        return {
            "error": str(e),
            "char": outline_dict.get("char", ""),
            "glyph_name": outline_dict.get("name", "unknown"),
            "traceback": tb,
            "duration_ms": duration_ms,
        }


class AtlasProcessor:
    """Orchestrates parallel MSDF atlas generation.

    Manages the complete workflow:
    1. Load font file and extract outlines for the charset
    2. Render glyphs in parallel using worker processes
    3. Pack glyph bitmaps into one atlas
    4. Write the atlas PNG and JSON metrics

    A glyph that fails to render is logged and left out of the atlas; it
    never aborts the run.

    Example:
        settings = MsdfAtlasSettings()
        processor = AtlasProcessor(settings)
        stats = processor.process(font_path=Path("font.ttf"))
    """

    def __init__(self, config: MsdfAtlasSettings | None = None) -> None:
        """Initialize atlas processor with configuration.

        Args:
            config: Settings containing field, atlas and processing config
                (defaults if None)
        """
        self.config = config or get_default_settings()
        logging_config = self.config.logging
        self.logger = configure_logging(
            log_file=logging_config.log_file,
            console_level=logging_config.log_level,
            file_level=logging_config.file_log_level,
            quiet=False,
        )
        self.processing_logger = ProcessingLogger(self.logger)

    def process(
        self,
        font_path: Path,
        image_path: Path | None = None,
        metrics_path: Path | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> ProcessingStats:
        """Generate an atlas for a font file.

        Args:
            font_path: Path to input font file
            image_path: Output PNG (defaults next to the font)
            metrics_path: Output JSON (defaults next to the font)
            max_workers: Maximum worker processes (None = config, then auto)
            progress_callback: Optional callback(completed, total, char, success)
                for progress updates

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            FileNotFoundError: If font file does not exist
            AtlasError: If no glyph could be rendered
            ProcessingCancelledError: If processing is cancelled by user
        """
        stats = self.processing_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        default_image, default_metrics = AtlasWriter.get_output_paths(font_path)
        image_path = image_path or default_image
        metrics_path = metrics_path or default_metrics

        self.logger.info(
            "Starting atlas generation",
            input=str(font_path),
            image=str(image_path),
            metrics=str(metrics_path),
            max_workers=max_workers,
        )

        atlas_config = self.config.atlas
        reader = FontReader(font_path)
        reader.load()

        try:
            self.logger.info(
                "Font loaded",
                format=reader.format,
                upm=reader.units_per_em,
                glyph_count=reader.glyph_count,
            )
            outlines = self._collect_outlines(reader)
            font_info, font_common = self._font_tables(reader)
        finally:
            reader.close()

        rendered = self._render_glyphs_parallel(
            outlines=outlines,
            max_workers=max_workers,
            progress_callback=progress_callback,
        )

        if not rendered:
            raise AtlasError("No glyphs could be rendered")

        # Keep charset order regardless of completion order
        order = {char: index for index, char in enumerate(atlas_config.charset)}
        rendered.sort(key=lambda item: order.get(item[1].char, len(order)))

        atlas, font_data = self.build_atlas(rendered, font_info, font_common)

        writer = AtlasWriter(image_path, metrics_path)
        writer.save(atlas, font_data)

        stats.end_time = time.time()

        self.logger.info(
            "Atlas generation complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            atlas_width=atlas.width,
            atlas_height=atlas.height,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def _collect_outlines(self, reader: FontReader) -> list[GlyphOutline]:
        """Extract outlines for every charset character that has ink."""
        atlas_config = self.config.atlas
        outlines: list[GlyphOutline] = []

        for char in atlas_config.charset:
            try:
                outline = reader.get_outline(char, atlas_config.font_size)
            except UnsupportedOutlineError as e:
                self.processing_logger.log_glyph_error(e.glyph_name, e)
                continue
            except Exception as e:
                # Malformed glyph data stays local to its glyph
                glyph_name = reader.glyph_name_for(char) or repr(char)
                self.processing_logger.log_glyph_error(
                    glyph_name,
                    GlyphProcessingError(glyph_name, str(e)),
                    traceback=traceback.format_exc(),
                )
                continue

            if outline is None:
                self.processing_logger.log_glyph_skipped(repr(char), "not in font")
                continue
            if outline.is_empty():
                self.processing_logger.log_glyph_skipped(outline.name, "empty glyph")
                continue

            outlines.append(outline)

        self.logger.info(
            "Collected outlines",
            charset=len(atlas_config.charset),
            to_process=len(outlines),
            skipped=self.processing_logger.stats.skipped_count,
        )
        return outlines

    def _font_tables(self, reader: FontReader) -> tuple[FontInfo, FontCommon]:
        """Compute atlas-wide info and common records (atlas size unset)."""
        font_size = self.config.atlas.font_size
        padding = self.config.distance_field.padding
        scale = font_size / reader.units_per_em
        ascender, descender, line_gap = reader.vertical_metrics()

        info = FontInfo(
            size=font_size,
            padding=(padding, padding, padding, padding),
            face=reader.family_name,
            distance_range=self.config.distance_field.max_range,
        )
        common = FontCommon(
            line_height=(ascender - descender + line_gap) * scale,
            base=ascender * scale,
            scale_w=0,
            scale_h=0,
        )
        return info, common

    def _render_glyphs_parallel(
        self,
        outlines: list[GlyphOutline],
        max_workers: int | None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> list[tuple[Uint8Image, GlyphMetrics]]:
        """Render glyphs in parallel using ProcessPoolExecutor.

        Args:
            outlines: Outlines to render
            max_workers: Maximum worker processes
            progress_callback: Optional callback(completed, total, char, success)

        Returns:
            (image, metrics) for each glyph that rendered successfully
        """
        rendered: list[tuple[Uint8Image, GlyphMetrics]] = []
        if not outlines:
            self.logger.info("No glyphs to process")
            return rendered

        config_dict = self.config.distance_field.model_dump()
        stats = self.processing_logger.stats

        self.logger.info(
            "Starting parallel processing",
            glyph_count=len(outlines),
            max_workers=max_workers,
        )

        total = len(outlines)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for outline in outlines:
                self.processing_logger.log_glyph_start(outline.name)
                future = executor.submit(process_glyph, outline.to_dict(), config_dict)
                pending_futures[future] = outline

            try:
                for future in as_completed(pending_futures):
                    outline = pending_futures.pop(future)
                    success = False

                    try:
                        result = future.result()
                        if "error" in result:
                            self.processing_logger.log_glyph_error(
                                glyph_name=result["glyph_name"],
                                error=GlyphProcessingError(result["glyph_name"], result["error"]),
                                traceback=result.get("traceback"),
                            )
                        else:
                            success = True
                            rendered.append(self._unpack_result(result))
                            self.processing_logger.log_glyph_complete(
                                glyph_name=outline.name,
                                width=result["width"],
                                height=result["height"],
                                duration_ms=result.get("duration_ms", 0.0),
                            )
                    except Exception as e:
                        # Executor-level error
                        self.processing_logger.log_glyph_error(
                            glyph_name=outline.name,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, outline.char, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise ProcessingCancelledError(
                    stats.processed_count, stats.cancelled_count
                ) from None

        return rendered

    @staticmethod
    def _unpack_result(result: dict[str, Any]) -> tuple[Uint8Image, GlyphMetrics]:
        image = Uint8Image(
            width=result["width"],
            height=result["height"],
            pitch=3,
            data=bytearray(result["image"]),
        )
        return image, GlyphMetrics.from_dict(result["metrics"])

    def build_atlas(
        self,
        rendered: list[tuple[Uint8Image, GlyphMetrics]],
        info: FontInfo,
        common: FontCommon,
    ) -> tuple[Uint8Image, FontData]:
        """Pack rendered glyphs and build the metrics record.

        Args:
            rendered: (image, metrics) per glyph, in output order
            info: Font info record
            common: Common record; its atlas size is filled in here

        Returns:
            Tuple of (atlas image, metrics record)

        Raises:
            PackingError: If a glyph is wider than the atlas limit
        """
        atlas_config = self.config.atlas
        images = [image for image, _ in rendered]
        pack = pack_rects(
            [(image.width, image.height) for image in images],
            max_width=atlas_config.max_width,
            spacing=atlas_config.spacing,
        )
        self.processing_logger.log_atlas_packed(len(images), pack.width, pack.height)

        atlas = compose_atlas(images, pack)

        common.scale_w = pack.width
        common.scale_h = pack.height
        chars = [
            AtlasGlyph(id=ord(metrics.char), metrics=metrics, x=x, y=y)
            for (_, metrics), (x, y) in zip(rendered, pack.placements, strict=True)
        ]
        return atlas, FontData(info=info, common=common, chars=chars)
