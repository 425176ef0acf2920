"""Tests for parallel processing orchestration."""

from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest

from msdfatlas.config import AtlasConfig, FieldConfig, MsdfAtlasSettings
from msdfatlas.core.processor import AtlasProcessor, process_glyph
from msdfatlas.domain import (
    ClosePath,
    FontCommon,
    FontData,
    FontInfo,
    GlyphMetrics,
    GlyphOutline,
    LineTo,
    MoveTo,
    Uint8Image,
)
from msdfatlas.exceptions import AtlasError, UnsupportedOutlineError


def _square_outline(char: str = "#", size: float = 8.0) -> GlyphOutline:
    return GlyphOutline(
        char=char,
        name=f"glyph_{ord(char)}",
        commands=[
            MoveTo(0, size),
            LineTo(0, 0),
            LineTo(size, 0),
            LineTo(size, size),
            ClosePath(),
        ],
        bounds=(0.0, 0.0, size, size),
        advance=size + 1,
    )


def _sliver_outline() -> GlyphOutline:
    """Two segments: too few to fill every plane."""
    return GlyphOutline(
        char="-",
        name="hyphen",
        commands=[MoveTo(0, 0), LineTo(6, 1), ClosePath()],
        bounds=(0.0, 0.0, 6.0, 1.0),
        advance=7.0,
    )


def _run_inline(fn, *args):
    """Stand-in for executor.submit that runs the task immediately."""
    future = MagicMock()
    future.result.return_value = fn(*args)
    return future


@pytest.fixture
def settings() -> MsdfAtlasSettings:
    return MsdfAtlasSettings(
        distance_field=FieldConfig(padding=2),
        atlas=AtlasConfig(font_size=20, charset="#+"),
    )


@pytest.fixture
def mock_reader() -> Mock:
    reader = Mock()
    reader.format = "TrueType"
    reader.units_per_em = 1000
    reader.glyph_count = 3
    reader.family_name = "Mock Sans"
    reader.vertical_metrics.return_value = (800, -200, 100)
    return reader


class TestProcessGlyph:
    """Tests for process_glyph function."""

    def test_success(self):
        """Test that a closed outline renders into raw RGB bytes."""
        config_dict = FieldConfig(padding=2).model_dump()
        result = process_glyph(_square_outline().to_dict(), config_dict)

        assert "error" not in result
        assert result["char"] == "#"
        assert (result["width"], result["height"]) == (12, 12)
        assert len(result["image"]) == 12 * 12 * 3
        assert result["metrics"]["xoffset"] == -2.0
        assert result["metrics"]["xadvance"] == 9.0
        assert result["duration_ms"] >= 0

    def test_handles_error(self):
        """Test that a failing glyph returns an error dict instead of raising."""
        result = process_glyph(_sliver_outline().to_dict(), FieldConfig().model_dump())

        assert result["char"] == "-"
        assert result["glyph_name"] == "hyphen"
        assert "Plane has 1 segment" in result["error"]
        assert "UnsupportedPlaneError" in result["traceback"]

    def test_handles_malformed_input(self):
        """Test that a bad outline dict is reported, not raised."""
        result = process_glyph({"name": "broken"}, {})
        assert result["glyph_name"] == "broken"
        assert "error" in result


class TestAtlasProcessor:
    """Tests for AtlasProcessor class."""

    def test_init(self, settings: MsdfAtlasSettings):
        """Test AtlasProcessor initialization."""
        with patch("msdfatlas.core.processor.configure_logging") as mock_logging:
            mock_logging.return_value = Mock()
            processor = AtlasProcessor(settings)

            assert processor.config == settings
            mock_logging.assert_called_once()

    @patch("msdfatlas.core.processor.as_completed", side_effect=lambda fs: list(fs))
    @patch("msdfatlas.core.processor.ProcessPoolExecutor")
    @patch("msdfatlas.core.processor.AtlasWriter")
    @patch("msdfatlas.core.processor.FontReader")
    @patch("msdfatlas.core.processor.configure_logging")
    def test_process_with_glyphs(
        self,
        mock_logging,
        mock_reader_class,
        mock_writer_class,
        mock_executor_class,
        _mock_as_completed,
        settings: MsdfAtlasSettings,
        mock_reader: Mock,
    ):
        """Test a run that renders every charset glyph."""
        mock_logging.return_value = Mock()
        mock_reader.get_outline.side_effect = lambda char, size: _square_outline(char)
        mock_reader_class.return_value = mock_reader

        mock_writer = Mock()
        mock_writer_class.return_value = mock_writer
        mock_writer_class.get_output_paths.return_value = (Path("out.png"), Path("out.json"))

        mock_executor = MagicMock()
        mock_executor.submit.side_effect = _run_inline
        mock_executor.__enter__.return_value = mock_executor
        mock_executor.__exit__.return_value = None
        mock_executor_class.return_value = mock_executor

        progress = []
        processor = AtlasProcessor(settings)
        stats = processor.process(
            Path("input.ttf"),
            max_workers=1,
            progress_callback=lambda *args: progress.append(args),
        )

        assert stats.processed_count == 2
        assert stats.error_count == 0
        assert stats.pixels_rendered == 2 * 12 * 12
        assert len(progress) == 2
        assert progress[-1][:2] == (2, 2)

        mock_writer_class.assert_called_once_with(Path("out.png"), Path("out.json"))
        atlas, font_data = mock_writer.save.call_args.args
        assert (atlas.width, atlas.height) == (24, 12)
        assert [g.char for g in font_data.chars] == ["#", "+"]
        assert font_data.common.scale_w == 24
        assert font_data.common.line_height == pytest.approx(22.0)
        assert font_data.common.base == pytest.approx(16.0)
        assert font_data.info.face == "Mock Sans"
        assert font_data.info.padding == (2, 2, 2, 2)
        mock_reader.close.assert_called_once()

    @patch("msdfatlas.core.processor.as_completed", side_effect=lambda fs: list(fs))
    @patch("msdfatlas.core.processor.ProcessPoolExecutor")
    @patch("msdfatlas.core.processor.AtlasWriter")
    @patch("msdfatlas.core.processor.FontReader")
    @patch("msdfatlas.core.processor.configure_logging")
    def test_process_handles_errors(
        self,
        mock_logging,
        mock_reader_class,
        mock_writer_class,
        mock_executor_class,
        _mock_as_completed,
        mock_reader: Mock,
    ):
        """Test that failing glyphs are counted and left out of the atlas."""
        settings = MsdfAtlasSettings(
            distance_field=FieldConfig(padding=2),
            atlas=AtlasConfig(font_size=20, charset="#-~"),
        )
        outlines = {"#": _square_outline(), "-": _sliver_outline()}

        def get_outline(char, size):  # noqa: ARG001
            if char == "~":
                raise UnsupportedOutlineError("asciitilde", "curveTo")
            return outlines[char]

        mock_logging.return_value = Mock()
        mock_reader.get_outline.side_effect = get_outline
        mock_reader_class.return_value = mock_reader

        mock_writer = Mock()
        mock_writer_class.return_value = mock_writer
        mock_writer_class.get_output_paths.return_value = (Path("out.png"), Path("out.json"))

        mock_executor = MagicMock()
        mock_executor.submit.side_effect = _run_inline
        mock_executor.__enter__.return_value = mock_executor
        mock_executor.__exit__.return_value = None
        mock_executor_class.return_value = mock_executor

        processor = AtlasProcessor(settings)
        stats = processor.process(Path("input.ttf"), max_workers=1)

        assert stats.processed_count == 1
        assert stats.error_count == 2
        assert {name for name, _ in stats.errors} == {"hyphen", "asciitilde"}

        _, font_data = mock_writer.save.call_args.args
        assert [g.char for g in font_data.chars] == ["#"]

    @patch("msdfatlas.core.processor.as_completed", side_effect=lambda fs: list(fs))
    @patch("msdfatlas.core.processor.ProcessPoolExecutor")
    @patch("msdfatlas.core.processor.AtlasWriter")
    @patch("msdfatlas.core.processor.FontReader")
    @patch("msdfatlas.core.processor.configure_logging")
    def test_process_isolates_extraction_failure(
        self,
        mock_logging,
        mock_reader_class,
        mock_writer_class,
        mock_executor_class,
        _mock_as_completed,
        settings: MsdfAtlasSettings,
        mock_reader: Mock,
    ):
        """Test that an outline read failure is a glyph error, not a failed run."""

        def get_outline(char, size):  # noqa: ARG001
            if char == "+":
                raise TypeError("'NoneType' object is not subscriptable")
            return _square_outline(char)

        mock_logging.return_value = Mock()
        mock_reader.get_outline.side_effect = get_outline
        mock_reader.glyph_name_for.return_value = "plus"
        mock_reader_class.return_value = mock_reader

        mock_writer = Mock()
        mock_writer_class.return_value = mock_writer
        mock_writer_class.get_output_paths.return_value = (Path("out.png"), Path("out.json"))

        mock_executor = MagicMock()
        mock_executor.submit.side_effect = _run_inline
        mock_executor.__enter__.return_value = mock_executor
        mock_executor.__exit__.return_value = None
        mock_executor_class.return_value = mock_executor

        stats = AtlasProcessor(settings).process(Path("input.ttf"), max_workers=1)

        assert stats.processed_count == 1
        assert stats.error_count == 1
        assert stats.errors[0][0] == "plus"
        assert "not subscriptable" in stats.errors[0][1]

        _, font_data = mock_writer.save.call_args.args
        assert [g.char for g in font_data.chars] == ["#"]

    @patch("msdfatlas.core.processor.AtlasWriter")
    @patch("msdfatlas.core.processor.FontReader")
    @patch("msdfatlas.core.processor.configure_logging")
    def test_process_nothing_to_render(
        self,
        mock_logging,
        mock_reader_class,
        mock_writer_class,
        settings: MsdfAtlasSettings,
        mock_reader: Mock,
    ):
        """Test that unmapped and empty glyphs are skipped, and an empty atlas is an error."""
        empty = GlyphOutline(char="+", name="plus", commands=[], bounds=(0, 0, 0, 0), advance=5.0)
        mock_logging.return_value = Mock()
        mock_reader.get_outline.side_effect = lambda char, size: None if char == "#" else empty
        mock_reader_class.return_value = mock_reader
        mock_writer_class.get_output_paths.return_value = (Path("out.png"), Path("out.json"))

        processor = AtlasProcessor(settings)
        with pytest.raises(AtlasError, match="No glyphs"):
            processor.process(Path("input.ttf"))

        assert processor.processing_logger.stats.skipped_count == 2
        mock_writer_class.return_value.save.assert_not_called()


class TestBuildAtlas:
    """Tests for AtlasProcessor.build_atlas."""

    def test_placements_and_common(self, settings: MsdfAtlasSettings):
        """Test that chars carry their packed positions and the atlas size."""
        with patch("msdfatlas.core.processor.configure_logging", return_value=Mock()):
            processor = AtlasProcessor(settings)

        rendered = [
            (Uint8Image(4, 4), GlyphMetrics("a", 4, 4, 0.0, 0.0, 5.0)),
            (Uint8Image(6, 8), GlyphMetrics("b", 6, 8, 0.0, 0.0, 7.0)),
        ]
        info = FontInfo(size=20, padding=(2, 2, 2, 2))
        common = FontCommon(line_height=22.0, base=16.0, scale_w=0, scale_h=0)

        atlas, data = processor.build_atlas(rendered, info, common)

        assert isinstance(data, FontData)
        assert (atlas.width, atlas.height) == (10, 8)
        assert (data.common.scale_w, data.common.scale_h) == (10, 8)
        assert [(g.id, g.x, g.y) for g in data.chars] == [(97, 6, 0), (98, 0, 0)]
