"""
Median-cut color quantization.

Recursively bisects the sample set along its widest RGB channel and
averages each resulting box into one representative color.
"""

from typing import List

import numpy as np
from loguru import logger

from .utils import Color, luma


def widest_channel(space: np.ndarray) -> int:
    """Index of the channel with the largest max-min range; ties prefer R, then G."""
    ranges = space.max(axis=0).astype(np.int16) - space.min(axis=0).astype(np.int16)
    return int(np.argmax(ranges))


def average_color(space: np.ndarray) -> Color:
    """Per-channel arithmetic mean, each channel rounded half-up."""
    mean = space.astype(np.float64).mean(axis=0)
    return Color.from_float(*mean)


def median_cut(pixels: np.ndarray, num_colors: int) -> List[Color]:
    """
    Quantize pixels into roughly num_colors representative colors.

    Every space holding at least two pixels is split in each pass, so the
    final count can overshoot num_colors; callers truncate. When the input
    is too small to reach num_colors the loop stops once nothing can split.

    Args:
        pixels: (N, 3) uint8 RGB samples
        num_colors: Target number of spaces

    Returns:
        Average color per space, sorted by luma (brightest first)
    """
    if len(pixels) == 0 or num_colors <= 0:
        return []

    spaces = [pixels]
    while len(spaces) < num_colors:
        next_spaces = []
        split_any = False
        for space in spaces:
            if len(space) >= 2:
                channel = widest_channel(space)
                ordered = space[np.argsort(space[:, channel], kind="stable")]
                middle = len(ordered) // 2
                next_spaces.append(ordered[:middle])
                next_spaces.append(ordered[middle:])
                split_any = True
            else:
                next_spaces.append(space)
        spaces = next_spaces
        if not split_any:
            break

    logger.debug(f"Median cut produced {len(spaces)} spaces for target {num_colors}")

    colors = [average_color(space) for space in spaces]
    # sorted() is stable, so equal-luma colors keep their split order
    return sorted(colors, key=luma, reverse=True)
