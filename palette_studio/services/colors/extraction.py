"""
Color extraction service.

This module implements the core extraction pipeline for Palette Studio:
pixel sampling, three competing quantizers (median cut, k-means, hue
buckets), then merging, deduplication, ranking and truncation.
"""

import math
import time
from dataclasses import dataclass, field
from functools import cmp_to_key
from pathlib import Path
from typing import Dict, List, Union

import numpy as np
from loguru import logger

from palette_studio.exceptions import ExtractionConfigError
from palette_studio.services.imaging import decode_image_bytes, load_image
from .hue_buckets import hue_buckets
from .kmeans import kmeans
from .median_cut import median_cut
from .sampling import PixelBuffer, compute_stride, sample_pixels
from .utils import Color, brightness, distance, saturation

DUPLICATE_DISTANCE = 15
SATURATION_TIE_BAND = 10

# Request-size thresholds that decide which quantizers run and how hard
MEDIAN_CUT_CAP = 15
KMEANS_MIN_COLORS = 12
KMEANS_CAP = 12
HUE_BUCKET_CAP = 10


@dataclass
class ExtractionResult:
    """Ordered dominant colors plus bookkeeping about how they were found."""
    colors: List[Color]
    sampled_pixels: int
    stride: int
    strategy_counts: Dict[str, int] = field(default_factory=dict)
    timings_ms: Dict[str, float] = field(default_factory=dict)


def deduplicate_colors(colors: List[Color], threshold: float = DUPLICATE_DISTANCE) -> List[Color]:
    """Keep each color only if it is at least `threshold` away from every kept color."""
    kept: List[Color] = []
    for color in colors:
        if all(distance(color, other) >= threshold for other in kept):
            kept.append(color)
    return kept


def compare_colors(a: Color, b: Color) -> float:
    """
    Display-order comparator: clearly more saturated first, else brighter first.

    Not transitive; it is only used for the final display ordering.
    """
    sat_a = saturation(a)
    sat_b = saturation(b)
    if abs(sat_a - sat_b) > SATURATION_TIE_BAND:
        return sat_b - sat_a
    return brightness(b) - brightness(a)


def rank_colors(colors: List[Color]) -> List[Color]:
    """Sort with compare_colors; Python's sort is stable so equal pairs keep input order."""
    return sorted(colors, key=cmp_to_key(compare_colors))


class ColorExtractor:
    """
    Extracts dominant colors from decoded images.

    Instances hold no per-call state, so one extractor may serve concurrent
    calls; every call works on its own sample set and cluster lists.
    """

    def extract(self, buffer: PixelBuffer, num_colors: int = 6, quality: float = 10) -> ExtractionResult:
        """
        Extract up to num_colors dominant colors from a pixel buffer.

        Args:
            buffer: Decoded RGBA image
            num_colors: Requested palette size (>= 1)
            quality: Sampling density hint (> 0, smaller is denser)

        Returns:
            ExtractionResult whose colors are deduplicated and display-ordered

        Raises:
            ExtractionConfigError: For num_colors <= 0, or quality that is not a
                positive finite number
            ImageDecodeError: If the buffer is malformed
        """
        self._validate(num_colors, quality)
        timings: Dict[str, float] = {}

        start_time = time.time()
        samples = sample_pixels(buffer, num_colors, quality)
        timings["sampling"] = (time.time() - start_time) * 1000
        stride = compute_stride(num_colors, quality)

        if len(samples) == 0:
            logger.warning(
                f"No usable pixels in {buffer.width}x{buffer.height} image; returning empty palette"
            )
            return ExtractionResult(
                colors=[],
                sampled_pixels=0,
                stride=stride,
                strategy_counts={"median_cut": 0, "kmeans": 0, "hue_buckets": 0},
                timings_ms=timings,
            )

        median_target = min(num_colors, MEDIAN_CUT_CAP)
        hue_target = min(num_colors, HUE_BUCKET_CAP)

        start_time = time.time()
        median_colors = median_cut(samples.copy(), median_target)
        timings["median_cut"] = (time.time() - start_time) * 1000

        kmeans_colors: List[Color] = []
        if num_colors > KMEANS_MIN_COLORS:
            start_time = time.time()
            kmeans_colors = kmeans(samples.copy(), min(num_colors, KMEANS_CAP))
            timings["kmeans"] = (time.time() - start_time) * 1000

        start_time = time.time()
        bucket_colors = hue_buckets(samples.copy(), hue_target)
        timings["hue_buckets"] = (time.time() - start_time) * 1000

        start_time = time.time()
        candidates = median_colors + kmeans_colors + bucket_colors
        unique = deduplicate_colors(candidates)
        ranked = rank_colors(unique)[:num_colors]
        timings["merge"] = (time.time() - start_time) * 1000

        logger.info(
            f"Extracted {len(ranked)} colors from {len(samples)} samples "
            f"(median_cut={len(median_colors)}, kmeans={len(kmeans_colors)}, "
            f"hue_buckets={len(bucket_colors)}, unique={len(unique)})"
        )

        return ExtractionResult(
            colors=ranked,
            sampled_pixels=int(len(samples)),
            stride=stride,
            strategy_counts={
                "median_cut": len(median_colors),
                "kmeans": len(kmeans_colors),
                "hue_buckets": len(bucket_colors),
            },
            timings_ms=timings,
        )

    def extract_from_image(self, source: Union[str, Path, bytes], num_colors: int = 6,
                           quality: float = 10) -> ExtractionResult:
        """
        Decode an image file or encoded bytes, then extract colors.

        Decode failures propagate as ImageDecodeError.
        """
        self._validate(num_colors, quality)
        if isinstance(source, (bytes, bytearray)):
            buffer = decode_image_bytes(bytes(source))
        else:
            buffer = load_image(source)
        return self.extract(buffer, num_colors, quality)

    @staticmethod
    def _validate(num_colors: int, quality: float) -> None:
        if isinstance(num_colors, bool) or not isinstance(num_colors, (int, np.integer)):
            raise ExtractionConfigError(f"num_colors must be an integer, got {num_colors!r}")
        if num_colors <= 0:
            raise ExtractionConfigError(f"num_colors must be positive, got {num_colors}")
        if isinstance(quality, bool) or not isinstance(quality, (int, float, np.integer, np.floating)):
            raise ExtractionConfigError(f"quality must be a number, got {quality!r}")
        if not math.isfinite(quality) or quality <= 0:
            raise ExtractionConfigError(f"quality must be a positive finite number, got {quality}")
