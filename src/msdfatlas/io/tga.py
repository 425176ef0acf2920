"""Minimal uncompressed TGA encoder for inspecting distance fields.

Layout: an 18-byte header followed by 3 bytes per pixel in row-major order.
Each pixel is written as (channel 2, channel 1, channel 0), the BGR order
TGA expects. Image descriptor 32 marks a top-left origin. There is no color
map, compression, or footer.
"""

import struct
from pathlib import Path

from msdfatlas.domain import Uint8Image

HEADER_SIZE = 18
IMAGE_TYPE_TRUECOLOR = 2
BITS_PER_PIXEL = 24
DESCRIPTOR_TOP_LEFT = 32


def encode_tga(image: Uint8Image) -> bytes:
    """Encode an image as an uncompressed 24-bit TGA.

    Args:
        image: Source image with at least three channels

    Returns:
        Encoded bytes, length 18 + width * height * 3

    Raises:
        ValueError: If a dimension does not fit in 16 bits
    """
    if not (0 <= image.width <= 0xFFFF and 0 <= image.height <= 0xFFFF):
        raise ValueError(f"Image too large for TGA: {image.width}x{image.height}")

    header = struct.pack(
        "<BBBHHBHHHHBB",
        0,  # id length
        0,  # no color map
        IMAGE_TYPE_TRUECOLOR,
        0,  # color map origin
        0,  # color map length
        0,  # color map depth
        0,  # x origin
        0,  # y origin
        image.width,
        image.height,
        BITS_PER_PIXEL,
        DESCRIPTOR_TOP_LEFT,
    )

    pitch = image.pitch
    src = image.data
    body = bytearray(image.pixel_count * 3)
    for i in range(image.pixel_count):
        offset = i * pitch
        body[i * 3] = src[offset + 2]
        body[i * 3 + 1] = src[offset + 1]
        body[i * 3 + 2] = src[offset]

    return header + bytes(body)


def write_tga(image: Uint8Image, path: Path) -> None:
    """Encode an image and write it to disk."""
    path.write_bytes(encode_tga(image))
