"""Tests for the TGA encoder."""

import struct
from pathlib import Path

import pytest

from msdfatlas.domain import Uint8Image
from msdfatlas.io import encode_tga, write_tga


def _gradient_image(width: int, height: int) -> Uint8Image:
    image = Uint8Image(width, height)
    for index in range(width * height):
        image.data[index * 3] = index
        image.data[index * 3 + 1] = 100 + index
        image.data[index * 3 + 2] = 200 + index
    return image


class TestEncodeTga:
    """Tests for encode_tga."""

    def test_header_fields(self) -> None:
        """Test header layout for a 4x3 image."""
        data = encode_tga(_gradient_image(4, 3))

        assert len(data) == 18 + 4 * 3 * 3
        assert data[2] == 2
        assert struct.unpack("<H", data[12:14])[0] == 4
        assert struct.unpack("<H", data[14:16])[0] == 3
        assert data[16] == 24
        assert data[17] == 32
        # Everything else in the header is zero
        zero_fields = [0, 1, *range(3, 12)]
        assert all(data[i] == 0 for i in zero_fields)

    def test_pixels_written_bgr(self) -> None:
        """Test that channels are swapped to BGR in row-major order."""
        data = encode_tga(_gradient_image(4, 3))
        body = data[18:]

        assert tuple(body[0:3]) == (200, 100, 0)
        # Pixel (1, 2) is index 9
        assert tuple(body[27:30]) == (209, 109, 9)

    def test_extra_channels_dropped(self) -> None:
        """Test that only the first three channels are encoded."""
        image = Uint8Image(1, 1, pitch=4, data=bytearray([1, 2, 3, 4]))
        assert encode_tga(image)[18:] == bytes([3, 2, 1])

    def test_large_dimensions_rejected(self) -> None:
        image = Uint8Image(0, 0)
        image.width = 70000
        with pytest.raises(ValueError, match="too large"):
            encode_tga(image)


class TestWriteTga:
    """Tests for write_tga."""

    def test_writes_file(self, tmp_path: Path) -> None:
        image = _gradient_image(2, 2)
        path = tmp_path / "glyph.tga"

        write_tga(image, path)

        assert path.read_bytes() == encode_tga(image)
