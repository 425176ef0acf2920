"""Channel compositing.

Maps a float DistanceMap into one byte channel of a Uint8Image.

Production mapping, for a configured max_range:

    s = distance / (2 * max_range) + 0.5, clamped to [0, 1]
    byte = floor((1 - s) * 255)

so distance 0 becomes 127, +max_range becomes 0 and -max_range becomes 255.
"""

import math

from msdfatlas.domain import DistanceMap, Uint8Image


def encode_distance(distance: float, max_range: float) -> int:
    """Encode one signed distance as a byte.

    Args:
        distance: Signed distance in shape-space units
        max_range: Distance mapped to either end of the byte range

    Returns:
        Byte value in [0, 255]
    """
    s = distance / (2 * max_range) + 0.5
    s = min(max(s, 0.0), 1.0)
    return math.floor((1 - s) * 255)


def _check_sizes(image: Uint8Image, distance_map: DistanceMap) -> None:
    if image.width != distance_map.width or image.height != distance_map.height:
        raise ValueError(
            f"Image is {image.width}x{image.height} but distance map is "
            f"{distance_map.width}x{distance_map.height}"
        )


def fill_rgb_distance_map(
    image: Uint8Image,
    distance_map: DistanceMap,
    channel: int,
    max_range: float,
) -> Uint8Image:
    """Write a distance map into one channel of an image.

    Args:
        image: Target image, same size as the map
        distance_map: Source distances
        channel: Channel index, below image.pitch
        max_range: Distance mapped to either end of the byte range

    Returns:
        The same image

    Raises:
        ValueError: If sizes disagree, the channel is out of range, or
            max_range is not positive
    """
    _check_sizes(image, distance_map)
    if not 0 <= channel < image.pitch:
        raise ValueError(f"Channel {channel} out of range for pitch {image.pitch}")
    if max_range <= 0:
        raise ValueError(f"max_range must be positive, got {max_range}")

    pitch = image.pitch
    data = image.data
    for i, distance in enumerate(distance_map.values):
        data[i * pitch + channel] = encode_distance(distance, max_range)

    return image


def fill_rgb_debug_distance_map(
    image: Uint8Image,
    distance_map: DistanceMap,
    channel: int,
) -> Uint8Image:
    """Visualize a distance map with the sign split across channels.

    No range scaling is applied; distances are clamped to one unit. The
    selected channel darkens with positive distance while the other two
    darken with negative distance. All three channels are written.

    Args:
        image: Target image, same size as the map
        distance_map: Source distances
        channel: Channel that shows the positive side (0, 1 or 2)

    Returns:
        The same image
    """
    _check_sizes(image, distance_map)
    if not 0 <= channel < 3:
        raise ValueError(f"Debug channel must be 0, 1 or 2, got {channel}")

    pitch = image.pitch
    data = image.data
    for i, distance in enumerate(distance_map.values):
        positive = math.floor((1 - min(max(distance, 0.0), 1.0)) * 255)
        negative = math.floor((1 - min(max(-distance, 0.0), 1.0)) * 255)
        for c in range(3):
            data[i * pitch + c] = positive if c == channel else negative

    return image
