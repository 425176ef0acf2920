"""Atlas writer for saving the atlas image and metrics.

The atlas image is written as PNG through Pillow; metrics are written as
JSON next to it.
"""

import json
from pathlib import Path

from PIL import Image

from msdfatlas.domain import FontData, Uint8Image
from msdfatlas.exceptions import FontSaveError


def to_pil_image(image: Uint8Image) -> Image.Image:
    """Convert a Uint8Image to an RGB Pillow image.

    Channels beyond the third are dropped.
    """
    if image.pitch == 3:
        rgb = bytes(image.data)
    else:
        rgb = bytearray(image.pixel_count * 3)
        for c in range(3):
            rgb[c::3] = image.data[c :: image.pitch]
        rgb = bytes(rgb)
    return Image.frombytes("RGB", (image.width, image.height), rgb)


class AtlasWriter:
    """Writes an atlas image and its metrics record.

    Example:
        writer = AtlasWriter(Path("font.png"), Path("font.json"))
        writer.save(atlas_image, font_data)
    """

    def __init__(self, image_path: Path, metrics_path: Path) -> None:
        """Initialize the atlas writer.

        Args:
            image_path: Where the PNG atlas is written
            metrics_path: Where the JSON metrics are written
        """
        self._image_path = image_path
        self._metrics_path = metrics_path

    @property
    def image_path(self) -> Path:
        return self._image_path

    @property
    def metrics_path(self) -> Path:
        return self._metrics_path

    def write_image(self, image: Uint8Image) -> None:
        """Write the atlas as PNG.

        Raises:
            FontSaveError: If the image cannot be written
        """
        try:
            to_pil_image(image).save(self._image_path, format="PNG")
        except (OSError, ValueError) as e:
            raise FontSaveError(str(self._image_path), str(e)) from e

    def write_metrics(self, data: FontData) -> None:
        """Write the metrics record as JSON.

        Raises:
            FontSaveError: If the file cannot be written
        """
        try:
            with self._metrics_path.open("w", encoding="utf-8") as f:
                json.dump(data.to_dict(), f, ensure_ascii=False)
        except OSError as e:
            raise FontSaveError(str(self._metrics_path), str(e)) from e

    def save(self, image: Uint8Image, data: FontData) -> None:
        """Write both the atlas image and the metrics record."""
        self.write_image(image)
        self.write_metrics(data)

    @staticmethod
    def get_output_paths(input_path: Path) -> tuple[Path, Path]:
        """Derive default output paths from the font path.

        Converts: Roboto-Regular.ttf -> Roboto-Regular.png, Roboto-Regular.json

        Args:
            input_path: Font file path

        Returns:
            Tuple of (image_path, metrics_path)
        """
        return input_path.with_suffix(".png"), input_path.with_suffix(".json")


def load_font_data(path: Path) -> FontData:
    """Read a metrics record written by AtlasWriter."""
    with path.open(encoding="utf-8") as f:
        return FontData.from_dict(json.load(f))
