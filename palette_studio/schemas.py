"""
Palette Studio API Schemas
Pydantic models for extraction, contrast and palette request/response validation.
"""
import re
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from palette_studio.services.colors.contrast import DEFAULT_BACKGROUND, DEFAULT_FOREGROUND

HEX_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("palette-studio", description="Service name")


# ============================================================================
# COLOR EXTRACTION SCHEMAS
# ============================================================================

class ColorEntry(BaseModel):
    """Single extracted color."""
    hex: str = Field(..., pattern=HEX_PATTERN, description="Hex color code in format #RRGGBB")
    rgb: List[int] = Field(..., min_length=3, max_length=3, description="[R, G, B] channels, 0-255")
    saturation: float = Field(..., ge=0.0, le=100.0, description="HSV saturation percentage")
    brightness: float = Field(..., ge=0.0, le=100.0, description="Mid-range brightness percentage")


class ColorExtractRequestBase64(BaseModel):
    """JSON request carrying the image inline."""
    image_b64: str = Field(
        ...,
        min_length=1,
        description="Base64-encoded image or data URL (PNG, JPEG, GIF, WebP, BMP)"
    )


class ColorArtifacts(BaseModel):
    """Color extraction output artifacts."""
    swatch_png_b64: Optional[str] = Field(
        None,
        description="Base64-encoded PNG showing the extracted colors as a strip"
    )


class ColorDebug(BaseModel):
    """Debug information for color extraction."""
    stride: int = Field(..., description="Pixels skipped between samples")
    strategy_counts: Dict[str, int] = Field(
        ...,
        description="Colors contributed by median_cut, kmeans and hue_buckets before deduplication"
    )
    timings_ms: Dict[str, float] = Field(..., description="Per-stage durations in milliseconds")


class ColorExtractResponse(BaseModel):
    """Color extraction response."""
    request_id: str = Field(..., description="Request id for log correlation")
    width: int = Field(..., description="Image width in pixels")
    height: int = Field(..., description="Image height in pixels")
    num_colors: int = Field(..., description="Requested number of colors")
    quality: int = Field(..., description="Sampling quality hint used")
    sampled_pixels: int = Field(..., description="Pixels kept by the sampler")
    colors: List[ColorEntry] = Field(..., description="Dominant colors in display order")
    debug: ColorDebug = Field(..., description="Debug information")
    artifacts: Optional[ColorArtifacts] = Field(None, description="Optional artifacts")


# ============================================================================
# CONTRAST SCHEMAS
# ============================================================================

class ContrastRequest(BaseModel):
    """Pair of colors to compare."""
    foreground: str = Field(DEFAULT_FOREGROUND.hex, pattern=HEX_PATTERN, description="Text color")
    background: str = Field(DEFAULT_BACKGROUND.hex, pattern=HEX_PATTERN, description="Background color")


class ContrastResponse(BaseModel):
    """WCAG contrast result."""
    foreground: str
    background: str
    ratio: float = Field(..., description="Contrast ratio between 1 and 21")
    ratio_text: str = Field(..., description="Ratio formatted as 'N.NN:1'")
    compliance: Dict[str, Dict[str, bool]] = Field(
        ...,
        description="Pass/fail per level (AA, AAA) and text size (normal, large)"
    )


# ============================================================================
# PALETTE SCHEMAS
# ============================================================================

class PaletteCreateRequest(BaseModel):
    """Request to save a palette."""
    name: Optional[str] = Field(None, max_length=80, description="Palette name; defaults to 'Palette N'")
    colors: List[str] = Field(..., min_length=1, description="Hex colors in display order")

    @field_validator("colors")
    @classmethod
    def validate_colors(cls, v):
        for hex_color in v:
            if not re.match(HEX_PATTERN, hex_color):
                raise ValueError(f"Invalid hex color: {hex_color}")
        return [hex_color.upper() for hex_color in v]


class PaletteResponse(BaseModel):
    """A saved palette."""
    id: str
    name: str
    colors: List[str] = Field(..., description="Hex colors in display order")
    created: str = Field(..., description="ISO-8601 creation timestamp")


class PaletteListResponse(BaseModel):
    """All saved palettes."""
    palettes: List[PaletteResponse]
    count: int
