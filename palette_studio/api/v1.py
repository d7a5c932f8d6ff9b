"""
Palette Studio v1 API Routes
Color extraction, contrast checking and saved palette management.
"""
import asyncio
from typing import Any, Dict

from fastapi import APIRouter, Depends, File, HTTPException, Query, Request, UploadFile
from fastapi.responses import JSONResponse

from palette_studio.config import config
from palette_studio.exceptions import (
    ExtractionConfigError, ImageDecodeError, PaletteNotFoundError,
    PaletteStorageError, PaletteValidationError
)
from palette_studio.schemas import (
    ColorExtractRequestBase64, ColorExtractResponse, ContrastRequest, ContrastResponse,
    PaletteCreateRequest, PaletteListResponse, PaletteResponse
)
from palette_studio.services.colors.contrast import (
    check_wcag_compliance, contrast_ratio, format_ratio
)
from palette_studio.services.colors.extract_api import handle_extract
from palette_studio.services.colors.extraction import ColorExtractor
from palette_studio.services.colors.utils import Color
from palette_studio.services.palettes import Palette, PaletteStore, export_filename, export_palette
from palette_studio.utils.metrics import get_metrics

router = APIRouter(prefix="/v1", tags=["Palette Studio"])


def get_extractor() -> ColorExtractor:
    """A fresh extractor per request; extractors share no state."""
    return ColorExtractor()


def get_palette_store(request: Request) -> PaletteStore:
    """Palette store owned by the application instance."""
    return request.app.state.palette_store


def _palette_response(palette: Palette) -> PaletteResponse:
    return PaletteResponse(
        id=palette.id,
        name=palette.name,
        colors=[color.hex for color in palette.colors],
        created=palette.created
    )


async def _run_extract(extractor: ColorExtractor, **kwargs) -> ColorExtractResponse:
    """Map extraction failures onto HTTP errors."""
    try:
        return await handle_extract(extractor, **kwargs)
    except ImageDecodeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ExtractionConfigError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except asyncio.TimeoutError:
        raise HTTPException(
            status_code=504,
            detail=f"Color extraction exceeded {config.EXTRACTION_TIMEOUT_S}s"
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# =============================================================================
# Color Extraction
# =============================================================================

@router.post("/colors/extract", response_model=ColorExtractResponse)
async def extract_colors(
    file: UploadFile = File(..., description="Image file (PNG, JPEG, GIF, WebP, BMP)"),
    num_colors: int = Query(config.DEFAULT_NUM_COLORS, ge=1, le=config.MAX_NUM_COLORS,
                            description="Number of colors to extract"),
    quality: int = Query(config.DEFAULT_QUALITY, ge=1, le=config.MAX_QUALITY,
                         description="Sampling density hint, smaller samples more pixels"),
    include_swatch: bool = Query(True, description="Include color swatch PNG in response"),
    extractor: ColorExtractor = Depends(get_extractor)
):
    """
    Extract dominant colors from an uploaded image.

    **Parameters:**
    - **num_colors**: Number of colors to return (upper bound, 1-32)
    - **quality**: Pixel stride hint; 1 samples every pixel
    - **include_swatch**: Attach a PNG strip of the result
    """
    return await _run_extract(
        extractor,
        file=file,
        params={"num_colors": num_colors, "quality": quality, "include_swatch": include_swatch}
    )


@router.post("/colors/extract/base64", response_model=ColorExtractResponse)
async def extract_colors_base64(
    body: ColorExtractRequestBase64,
    num_colors: int = Query(config.DEFAULT_NUM_COLORS, ge=1, le=config.MAX_NUM_COLORS,
                            description="Number of colors to extract"),
    quality: int = Query(config.DEFAULT_QUALITY, ge=1, le=config.MAX_QUALITY,
                         description="Sampling density hint, smaller samples more pixels"),
    include_swatch: bool = Query(True, description="Include color swatch PNG in response"),
    extractor: ColorExtractor = Depends(get_extractor)
):
    """Extract dominant colors from a base64 image or data URL."""
    return await _run_extract(
        extractor,
        image_b64=body.image_b64,
        params={"num_colors": num_colors, "quality": quality, "include_swatch": include_swatch}
    )


# =============================================================================
# Contrast
# =============================================================================

@router.post("/contrast", response_model=ContrastResponse)
async def check_contrast(body: ContrastRequest):
    """WCAG contrast ratio and AA/AAA compliance for a color pair."""
    foreground = Color.from_hex(body.foreground)
    background = Color.from_hex(body.background)
    ratio = contrast_ratio(foreground, background)
    return ContrastResponse(
        foreground=foreground.hex,
        background=background.hex,
        ratio=ratio,
        ratio_text=format_ratio(ratio),
        compliance=check_wcag_compliance(ratio)
    )


# =============================================================================
# Palettes
# =============================================================================

@router.get("/palettes", response_model=PaletteListResponse)
async def list_palettes(store: PaletteStore = Depends(get_palette_store)):
    """List saved palettes in creation order."""
    palettes = [_palette_response(p) for p in store.list_palettes()]
    return PaletteListResponse(palettes=palettes, count=len(palettes))


@router.post("/palettes", response_model=PaletteResponse, status_code=201)
async def create_palette(body: PaletteCreateRequest,
                         store: PaletteStore = Depends(get_palette_store)):
    """Save a named palette (1-20 colors)."""
    try:
        palette = store.save([Color.from_hex(h) for h in body.colors], name=body.name)
    except PaletteValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PaletteStorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    get_metrics().increment_counter("palettes_saved_total")
    return _palette_response(palette)


@router.get("/palettes/{palette_id}", response_model=PaletteResponse)
async def get_palette(palette_id: str, store: PaletteStore = Depends(get_palette_store)):
    """Fetch one saved palette."""
    try:
        return _palette_response(store.get(palette_id))
    except PaletteNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/palettes/{palette_id}", status_code=204)
async def delete_palette(palette_id: str, store: PaletteStore = Depends(get_palette_store)):
    """Delete a saved palette."""
    try:
        store.delete(palette_id)
    except PaletteNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PaletteStorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    get_metrics().increment_counter("palettes_deleted_total")


@router.get("/palettes/{palette_id}/export")
async def export_saved_palette(palette_id: str, store: PaletteStore = Depends(get_palette_store)):
    """Download a palette as JSON with hex, rgb() and HSL values."""
    try:
        palette = store.get(palette_id)
    except PaletteNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return JSONResponse(
        content=export_palette(palette),
        headers={"Content-Disposition": f'attachment; filename="{export_filename(palette.name)}"'}
    )


# =============================================================================
# Metrics
# =============================================================================

@router.get("/metrics")
def metrics_summary() -> Dict[str, Any]:
    """In-process counters and timing statistics."""
    return get_metrics().get_summary()
