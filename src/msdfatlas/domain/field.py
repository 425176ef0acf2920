"""Raster buffers produced by the distance field pipeline.

- DistanceMap: Dense row-major grid of signed float distances
- Uint8Image: Dense row-major byte image with a fixed channel pitch
"""

from dataclasses import dataclass, field


@dataclass
class DistanceMap:
    """Signed distance per pixel.

    ``values[j * width + i]`` is the distance at column i, row j. The map is
    a scratch buffer: rasterizing a plane overwrites every value.

    Attributes:
        width: Pixel columns
        height: Pixel rows
        values: Row-major distances, length width * height
    """

    width: int
    height: int
    values: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Invalid distance map size {self.width}x{self.height}")
        if not self.values:
            self.values = [0.0] * (self.width * self.height)
        elif len(self.values) != self.width * self.height:
            raise ValueError(
                f"Expected {self.width * self.height} values, got {len(self.values)}"
            )

    def get(self, i: int, j: int) -> float:
        return self.values[j * self.width + i]

    def set(self, i: int, j: int, distance: float) -> None:
        self.values[j * self.width + i] = distance


@dataclass
class Uint8Image:
    """Byte image with ``pitch`` channels per pixel.

    Channel c of pixel (i, j) lives at ``data[(j * width + i) * pitch + c]``.

    Attributes:
        width: Pixel columns
        height: Pixel rows
        pitch: Channels per pixel (at least 3)
        data: Row-major bytes, length width * height * pitch
    """

    width: int
    height: int
    pitch: int = 3
    data: bytearray = field(default_factory=bytearray)

    def __post_init__(self) -> None:
        if self.pitch < 3:
            raise ValueError(f"Image pitch must be at least 3, got {self.pitch}")
        size = self.width * self.height * self.pitch
        if not self.data:
            self.data = bytearray(size)
        elif len(self.data) != size:
            raise ValueError(f"Expected {size} bytes, got {len(self.data)}")

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def pixel(self, i: int, j: int) -> tuple[int, ...]:
        """Return all channels of pixel (i, j)."""
        offset = (j * self.width + i) * self.pitch
        return tuple(self.data[offset : offset + self.pitch])

    def channel(self, i: int, j: int, channel: int) -> int:
        return self.data[(j * self.width + i) * self.pitch + channel]
