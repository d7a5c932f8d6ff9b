"""
WCAG 2.x contrast checks between two colors.
"""

from typing import Dict

from .utils import Color

AA_NORMAL = 4.5
AA_LARGE = 3.0
AAA_NORMAL = 7.0
AAA_LARGE = 4.5

DEFAULT_FOREGROUND = Color(17, 17, 17)
DEFAULT_BACKGROUND = Color(255, 255, 255)


def _linearize(channel: int) -> float:
    c = channel / 255
    return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(color: Color) -> float:
    """Relative luminance of an sRGB color, 0 for black up to 1 for white."""
    return (0.2126 * _linearize(color.r)
            + 0.7152 * _linearize(color.g)
            + 0.0722 * _linearize(color.b))


def contrast_ratio(a: Color, b: Color) -> float:
    """Contrast ratio (lighter + 0.05) / (darker + 0.05), in [1, 21]."""
    lum_a = relative_luminance(a)
    lum_b = relative_luminance(b)
    lighter = max(lum_a, lum_b)
    darker = min(lum_a, lum_b)
    return (lighter + 0.05) / (darker + 0.05)


def check_wcag_compliance(ratio: float) -> Dict[str, Dict[str, bool]]:
    """Pass/fail for the AA and AAA levels at normal and large text sizes."""
    return {
        "AA": {
            "normal": ratio >= AA_NORMAL,
            "large": ratio >= AA_LARGE,
        },
        "AAA": {
            "normal": ratio >= AAA_NORMAL,
            "large": ratio >= AAA_LARGE,
        },
    }


def format_ratio(ratio: float) -> str:
    return f"{ratio:.2f}:1"
