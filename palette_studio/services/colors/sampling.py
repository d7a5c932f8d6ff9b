"""
Pixel sampling for color extraction.

Turns a decoded RGBA buffer into the candidate pixel set that every
quantizer consumes: a strided, row-major subsample with transparent and
near-black pixels removed.
"""

import math
from dataclasses import dataclass

import numpy as np
from loguru import logger

from palette_studio.exceptions import ImageDecodeError

ALPHA_THRESHOLD = 200
NEAR_BLACK_THRESHOLD = 10


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded raster image: flat uint8 RGBA data in row-major order."""
    width: int
    height: int
    data: np.ndarray

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


def compute_stride(num_colors: int, quality: float) -> int:
    """
    Number of pixels to advance between samples.

    Larger requests sample more coarsely to bound the work of the
    quantizers; small requests follow the quality hint directly.
    """
    if num_colors > 15:
        return max(2, math.floor(quality * 1.5))
    if num_colors > 10:
        return max(1, math.floor(quality * 1.2))
    return max(1, math.floor(quality))


def sample_pixels(buffer: PixelBuffer, num_colors: int, quality: float) -> np.ndarray:
    """
    Sample opaque, non-black pixels from an RGBA buffer.

    Args:
        buffer: Decoded image pixels
        num_colors: Requested palette size (drives the stride)
        quality: Sampling density hint, smaller means denser

    Returns:
        (N, 3) uint8 RGB array in scan order; N may be 0

    Raises:
        ImageDecodeError: If the buffer length does not match width * height * 4
    """
    data = np.asarray(buffer.data, dtype=np.uint8).reshape(-1)
    expected = buffer.pixel_count * 4
    if data.size != expected:
        raise ImageDecodeError(
            f"Pixel buffer size mismatch: expected {expected} bytes for "
            f"{buffer.width}x{buffer.height} RGBA, got {data.size}"
        )

    stride = compute_stride(num_colors, quality)
    rgba = data.reshape(-1, 4)[::stride]

    opaque = rgba[:, 3] > ALPHA_THRESHOLD
    not_black = (rgba[:, :3] > NEAR_BLACK_THRESHOLD).any(axis=1)
    sampled = rgba[opaque & not_black, :3].copy()

    logger.debug(
        f"Sampled {len(sampled)} of {len(rgba)} strided pixels "
        f"(stride={stride}, image={buffer.width}x{buffer.height})"
    )
    return sampled
