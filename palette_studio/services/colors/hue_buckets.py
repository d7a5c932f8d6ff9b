"""
Hue-bucket extraction.

Guarantees hue diversity in the final palette: hue space is cut into
equal slices and the most saturated sample of each occupied slice is kept.
"""

from typing import List

import numpy as np

from .utils import Color, hue_saturation_arrays


def hue_buckets(pixels: np.ndarray, num_colors: int) -> List[Color]:
    """
    Pick the most saturated pixel from each populated hue bucket.

    Args:
        pixels: (N, 3) uint8 RGB samples
        num_colors: Number of equal-width hue buckets over [0, 360)

    Returns:
        At most num_colors colors in ascending bucket order
    """
    if len(pixels) == 0 or num_colors <= 0:
        return []

    hues, sats = hue_saturation_arrays(pixels)
    hue_step = 360 / num_colors
    buckets = np.minimum(np.floor(hues / hue_step).astype(np.int64), num_colors - 1)

    colors = []
    for bucket in np.unique(buckets):
        members = np.flatnonzero(buckets == bucket)
        # argmax returns the first maximum, so ties keep scan order
        best = members[np.argmax(sats[members])]
        colors.append(Color(*pixels[best]))

    return colors[:num_colors]
