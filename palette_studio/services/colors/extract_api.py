"""
Color Extraction API Orchestrator

Handles Upload and Base64 modes for color extraction. Coordinates the
pipeline from image decoding through dominant color extraction to the
optional swatch artifact, with logging and metrics around every stage.
"""

import asyncio
import time
from typing import Any, Dict, Optional

from fastapi import UploadFile

from palette_studio.config import config
from palette_studio.exceptions import ExtractionConfigError
from palette_studio.schemas import (
    ColorArtifacts, ColorDebug, ColorEntry, ColorExtractResponse
)
from palette_studio.services.colors.extraction import ColorExtractor
from palette_studio.services.colors.swatches import render_swatch_strip
from palette_studio.services.colors.utils import brightness, saturation
from palette_studio.services.imaging import decode_base64_image, read_upload
from palette_studio.utils.ids import generate_request_id
from palette_studio.utils.logging import get_logger
from palette_studio.utils.metrics import get_metrics

logger = get_logger()


async def handle_extract(
    extractor: ColorExtractor,
    file: Optional[UploadFile] = None,
    image_b64: Optional[str] = None,
    params: Optional[Dict[str, Any]] = None
) -> ColorExtractResponse:
    """
    Main orchestrator for color extraction supporting Upload and Base64 modes.

    Args:
        extractor: Caller-owned extractor instance
        file: Uploaded image file for Upload mode
        image_b64: Base64 image or data URL for Base64 mode
        params: Dictionary of extraction parameters

    Returns:
        ColorExtractResponse with the dominant colors

    Raises:
        ValueError: For missing or conflicting inputs
        ImageDecodeError: When the image cannot be decoded
        ExtractionConfigError: For invalid num_colors / quality
        asyncio.TimeoutError: When extraction exceeds EXTRACTION_TIMEOUT_S
    """
    request_id = generate_request_id("color")
    start_time = time.time()
    params = params or {}

    logger.info("Starting color extraction", extra={"request_id": request_id})

    # Validate input modes
    if file is None and image_b64 is None:
        raise ValueError("Either 'file' (Upload) or 'image_b64' (Base64) must be provided")

    if file is not None and image_b64 is not None:
        raise ValueError("Cannot specify both 'file' and 'image_b64' simultaneously")

    num_colors = params.get('num_colors', config.DEFAULT_NUM_COLORS)
    quality = params.get('quality', config.DEFAULT_QUALITY)
    include_swatch = params.get('include_swatch', True)

    if not config.validate_num_colors(num_colors):
        raise ExtractionConfigError(
            f"num_colors must be between 1 and {config.MAX_NUM_COLORS}, got {num_colors!r}"
        )
    if not config.validate_quality(quality):
        raise ExtractionConfigError(f"quality must be in (0, {config.MAX_QUALITY}], got {quality!r}")

    mode = "upload" if file is not None else "base64"

    metrics = get_metrics()

    try:
        if file is not None:
            buffer = await read_upload(file)
        else:
            buffer = decode_base64_image(image_b64)

        decode_time = time.time() - start_time
        logger.info(f"Input decoding complete: {mode} mode",
                    extra={"request_id": request_id, "ms_decode": decode_time * 1000,
                           "dims": f"{buffer.width}x{buffer.height}"})

        # CPU-bound, keep it off the event loop
        extract_start = time.time()
        result = await asyncio.wait_for(
            asyncio.to_thread(extractor.extract, buffer, num_colors, quality),
            timeout=config.EXTRACTION_TIMEOUT_S
        )
        extract_time = time.time() - extract_start

        colors = [
            ColorEntry(
                hex=color.hex,
                rgb=list(color.as_tuple()),
                saturation=saturation(color),
                brightness=brightness(color)
            )
            for color in result.colors
        ]

        artifacts = None
        if include_swatch and colors:
            try:
                artifacts = ColorArtifacts(
                    swatch_png_b64=render_swatch_strip([entry.hex for entry in colors])
                )
            except (ValueError, RuntimeError) as e:
                logger.warning(f"Swatch generation failed: {str(e)}",
                               extra={"request_id": request_id})

        response = ColorExtractResponse(
            request_id=request_id,
            width=buffer.width,
            height=buffer.height,
            num_colors=num_colors,
            quality=quality,
            sampled_pixels=result.sampled_pixels,
            colors=colors,
            debug=ColorDebug(
                stride=result.stride,
                strategy_counts=result.strategy_counts,
                timings_ms=result.timings_ms
            ),
            artifacts=artifacts
        )

        total_time = time.time() - start_time
        logger.info("Color extraction completed successfully",
                    extra={
                        "request_id": request_id,
                        "mode": mode,
                        "num_colors": num_colors,
                        "quality": quality,
                        "sampled_pixels": result.sampled_pixels,
                        "returned_colors": len(colors),
                        "ms_decode": decode_time * 1000,
                        "ms_extract": extract_time * 1000,
                        "ms_total": total_time * 1000,
                        "result": "ok"
                    })

        metrics.record_extraction(
            mode=mode,
            returned_colors=len(colors),
            kmeans_used=bool(result.strategy_counts.get("kmeans")),
            total_ms=total_time * 1000,
            core_ms=extract_time * 1000
        )
        for stage, stage_ms in result.timings_ms.items():
            metrics.record_timing(f"color_extract_stage_{stage}_ms", stage_ms)

        return response

    except Exception as e:
        error_time = time.time() - start_time
        logger.error(f"Color extraction failed: {str(e)}",
                     extra={
                         "request_id": request_id,
                         "ms_total": error_time * 1000,
                         "result": "error",
                         "error_type": type(e).__name__
                     })

        metrics.record_extraction_failure(type(e).__name__)

        raise
