"""
Color value type and pure color math shared by every quantizer.

All functions here are stateless and deterministic; the vectorized
helpers reproduce the scalar ones exactly so that per-pixel decisions
made on numpy arrays agree with decisions made on single colors.
"""

import math
import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


@dataclass(frozen=True)
class Color:
    """An immutable RGB triple with integer channels in [0, 255]."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"Channel {name} must be an integer, got {value!r}")
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name} out of range [0, 255]: {value}")
            # Normalize numpy integers so equality and hashing behave like ints
            object.__setattr__(self, name, int(value))

    @classmethod
    def from_float(cls, r: float, g: float, b: float) -> "Color":
        """Build a color from float channels, rounding half-up and clamping."""
        return cls(*(min(255, max(0, int(math.floor(c + 0.5)))) for c in (r, g, b)))

    @classmethod
    def from_hex(cls, hex_color: str) -> "Color":
        """Parse '#RRGGBB' (or 'RRGGBB'); raises ValueError when malformed."""
        rgb = hex_to_rgb(hex_color)
        if rgb is None:
            raise ValueError(f"Invalid hex color: {hex_color!r}")
        return cls(*rgb)

    @property
    def hex(self) -> str:
        return rgb_to_hex(self.r, self.g, self.b)

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB channels to an upper-case hex color string."""
    return f"#{int(r):02X}{int(g):02X}{int(b):02X}"


def hex_to_rgb(hex_color: str) -> Optional[Tuple[int, int, int]]:
    """Convert hex color string to RGB tuple, or None if it does not parse."""
    match = _HEX_RE.match(hex_color.strip()) if isinstance(hex_color, str) else None
    if match is None:
        return None
    return tuple(int(part, 16) for part in match.groups())


def distance(a: Color, b: Color) -> float:
    """Euclidean distance in RGB space."""
    return math.sqrt((a.r - b.r) ** 2 + (a.g - b.g) ** 2 + (a.b - b.b) ** 2)


def hue(color: Color) -> float:
    """HSV hue in degrees [0, 360); achromatic colors have hue 0."""
    r, g, b = color.r / 255, color.g / 255, color.b / 255
    cmax = max(r, g, b)
    cmin = min(r, g, b)
    if cmax == cmin:
        return 0.0
    d = cmax - cmin
    if cmax == r:
        h = (g - b) / d + (6 if g < b else 0)
    elif cmax == g:
        h = (b - r) / d + 2
    else:
        h = (r - g) / d + 4
    return h * 60


def saturation(color: Color) -> float:
    """HSV saturation as a percentage [0, 100]; 0 for black."""
    cmax = max(color.r, color.g, color.b)
    if cmax == 0:
        return 0.0
    cmin = min(color.r, color.g, color.b)
    return (cmax - cmin) / cmax * 100


def brightness(color: Color) -> float:
    """Mid-range brightness ((max + min) / 2) as a percentage of 255."""
    cmax = max(color.r, color.g, color.b)
    cmin = min(color.r, color.g, color.b)
    return ((cmax + cmin) / 2) / 255 * 100


def luma(color: Color) -> float:
    """Weighted perceptual brightness 0.299R + 0.587G + 0.114B."""
    return 0.299 * color.r + 0.587 * color.g + 0.114 * color.b


def hue_saturation_arrays(pixels: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Vectorized hue and saturation for an (N, 3) uint8 pixel array.

    Mirrors hue() and saturation() operation for operation so results match
    the scalar functions bit for bit.

    Returns:
        Tuple of (hue_degrees, saturation_percent), both float64 arrays of length N
    """
    if len(pixels) == 0:
        empty = np.zeros(0, dtype=np.float64)
        return empty, empty.copy()

    channels = pixels.astype(np.float64)
    r = channels[:, 0] / 255
    g = channels[:, 1] / 255
    b = channels[:, 2] / 255
    cmax = np.maximum(np.maximum(r, g), b)
    cmin = np.minimum(np.minimum(r, g), b)
    d = cmax - cmin
    chromatic = d != 0
    safe_d = np.where(chromatic, d, 1.0)

    red_max = cmax == r
    green_max = ~red_max & (cmax == g)
    h = np.where(
        red_max,
        (g - b) / safe_d + np.where(g < b, 6, 0),
        np.where(green_max, (b - r) / safe_d + 2, (r - g) / safe_d + 4),
    )
    hues = np.where(chromatic, h * 60, 0.0)

    raw = pixels.astype(np.int64)
    imax = raw.max(axis=1)
    imin = raw.min(axis=1)
    safe_max = np.where(imax == 0, 1, imax)
    sats = np.where(imax == 0, 0.0, (imax - imin) / safe_max * 100)
    return hues, sats


def rgb_to_hsl(color: Color) -> Dict[str, float]:
    """Convert a color to HSL with hue in degrees and s/l as percentages."""
    r, g, b = color.r / 255, color.g / 255, color.b / 255
    cmax = max(r, g, b)
    cmin = min(r, g, b)
    lightness = (cmax + cmin) / 2

    if cmax == cmin:
        h = s = 0.0
    else:
        d = cmax - cmin
        s = d / (2 - cmax - cmin) if lightness > 0.5 else d / (cmax + cmin)
        h = hue(color)

    return {"h": h, "s": s * 100, "l": lightness * 100}
