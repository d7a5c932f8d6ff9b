"""
Swatch Rendering Module

Renders extracted palettes as a PNG strip of solid color chips for quick
visual inspection.
"""

import base64
from typing import List, Tuple

import cv2
import numpy as np
from loguru import logger

from .utils import Color

MIN_CHIP_SIZE = 8
MAX_CHIP_SIZE = 200


def color_to_bgr(color: Color) -> Tuple[int, int, int]:
    """RGB color to a BGR tuple for OpenCV."""
    return (color.b, color.g, color.r)


def render_swatch_strip(hex_colors: List[str], chip_size: int = 40) -> str:
    """
    Render a horizontal strip of color swatches.

    Args:
        hex_colors: List of hex color strings
        chip_size: Size of each square color chip in pixels

    Returns:
        Base64-encoded PNG image string

    Raises:
        ValueError: For an empty list, bad chip size or malformed hex color
    """
    if not hex_colors:
        raise ValueError("Empty hex_colors list provided")
    if not MIN_CHIP_SIZE <= chip_size <= MAX_CHIP_SIZE:
        raise ValueError(f"chip_size must be between {MIN_CHIP_SIZE} and {MAX_CHIP_SIZE}")

    colors = [Color.from_hex(hex_color) for hex_color in hex_colors]
    k = len(colors)
    logger.debug(f"Rendering swatch strip with {k} colors, chip_size={chip_size}")

    img = np.zeros((chip_size, chip_size * k, 3), dtype=np.uint8)
    for i, color in enumerate(colors):
        img[:, i * chip_size:(i + 1) * chip_size, :] = color_to_bgr(color)

    success, buffer = cv2.imencode('.png', img)
    if not success:
        raise RuntimeError("Failed to encode swatch strip as PNG")

    b64_string = base64.b64encode(buffer.tobytes()).decode('ascii')
    logger.debug(f"Encoded swatch strip: {chip_size * k}x{chip_size} -> {len(b64_string)} chars")
    return b64_string
