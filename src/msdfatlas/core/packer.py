"""Atlas packing and composition.

Places glyph bitmaps into a single atlas with a shelf packer: rectangles
are sorted tallest first and laid left to right in rows no wider than the
atlas limit. Results are deterministic for a given input order.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from msdfatlas.domain import Uint8Image
from msdfatlas.exceptions import PackingError


@dataclass
class PackResult:
    """Output of the packer.

    Attributes:
        width: Atlas width in pixels
        height: Atlas height in pixels
        placements: Top-left (x, y) for each input rectangle, in input order
    """

    width: int
    height: int
    placements: list[tuple[int, int]] = field(default_factory=list)


def pack_rects(
    sizes: Sequence[tuple[int, int]],
    max_width: int,
    spacing: int = 0,
) -> PackResult:
    """Pack rectangles into rows.

    Args:
        sizes: (width, height) of each rectangle
        max_width: Widest a row may grow
        spacing: Gap left between neighbouring rectangles

    Returns:
        PackResult with the tight atlas size

    Raises:
        PackingError: If a rectangle is wider than max_width or has a
            negative dimension
    """
    for index, (w, h) in enumerate(sizes):
        if w < 0 or h < 0:
            raise PackingError(f"rectangle {index} has negative size {w}x{h}")
        if w > max_width:
            raise PackingError(
                f"rectangle {index} is {w}px wide, atlas limit is {max_width}px"
            )

    order = sorted(range(len(sizes)), key=lambda k: (-sizes[k][1], -sizes[k][0]))
    placements: list[tuple[int, int]] = [(0, 0)] * len(sizes)

    x = 0
    y = 0
    row_height = 0
    atlas_width = 0

    for index in order:
        w, h = sizes[index]
        if x > 0 and x + w > max_width:
            y += row_height + spacing
            x = 0
            row_height = 0
        placements[index] = (x, y)
        atlas_width = max(atlas_width, x + w)
        row_height = max(row_height, h)
        x += w + spacing

    return PackResult(width=atlas_width, height=y + row_height, placements=placements)


def blit(atlas: Uint8Image, image: Uint8Image, x: int, y: int) -> None:
    """Copy a glyph image into the atlas at (x, y).

    The glyph's first column and row and its last two columns and rows are
    left untouched, which keeps neighbouring glyphs from bleeding into each
    other when the atlas is sampled with filtering.

    Raises:
        ValueError: If the glyph does not fit at the given position
    """
    if x < 0 or y < 0 or x + image.width > atlas.width or y + image.height > atlas.height:
        raise ValueError(
            f"{image.width}x{image.height} image at ({x}, {y}) does not fit "
            f"in {atlas.width}x{atlas.height} atlas"
        )

    channels = min(atlas.pitch, image.pitch, 3)
    for j in range(1, image.height - 2):
        for i in range(1, image.width - 2):
            src = (j * image.width + i) * image.pitch
            dst = ((y + j) * atlas.width + (x + i)) * atlas.pitch
            atlas.data[dst : dst + channels] = image.data[src : src + channels]


def compose_atlas(
    images: Sequence[Uint8Image],
    pack: PackResult,
) -> Uint8Image:
    """Build the atlas image from packed glyph images.

    Args:
        images: Glyph images, in the order they were packed
        pack: Result of pack_rects for those images

    Returns:
        RGB atlas image
    """
    atlas = Uint8Image(pack.width, pack.height, pitch=3)
    for image, (x, y) in zip(images, pack.placements, strict=True):
        blit(atlas, image, x, y)
    return atlas
