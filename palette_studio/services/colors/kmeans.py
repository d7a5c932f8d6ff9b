"""
Deterministic k-means quantization.

A second extraction strategy next to median cut. Initialization spreads
centroids evenly by sample index rather than at random, and the iteration
count is capped so the cost stays bounded on large images.
"""

from typing import List

import numpy as np
from loguru import logger

from .utils import Color, distance

MAX_CLUSTERS = 12
MOVE_THRESHOLD = 1.0


def max_iterations_for(k: int) -> int:
    return 15 if k > 8 else 20


def initial_centroids(pixels: np.ndarray, k: int) -> List[Color]:
    """Centroid i starts at sample index min(i * floor(len / k), len - 1)."""
    n = len(pixels)
    step = n // k
    return [Color(*pixels[min(i * step, n - 1)]) for i in range(k)]


def assign_clusters(pixels: np.ndarray, centroids: List[Color]) -> np.ndarray:
    """
    Index of the nearest centroid for every pixel; ties go to the lowest index.

    Distances are computed one centroid at a time so memory stays O(N)
    regardless of k.
    """
    values = np.asarray(pixels, dtype=np.float64)
    best = np.full(len(values), np.inf)
    labels = np.zeros(len(values), dtype=np.int64)
    diff = np.empty_like(values)
    for index, centroid in enumerate(centroids):
        np.subtract(values, centroid.as_tuple(), out=diff)
        np.square(diff, out=diff)
        dist = diff.sum(axis=1)
        closer = dist < best
        best[closer] = dist[closer]
        labels[closer] = index
    return labels


def kmeans(pixels: np.ndarray, k: int) -> List[Color]:
    """
    Cluster pixels into at most 12 centroid colors.

    Args:
        pixels: (N, 3) uint8 RGB samples
        k: Requested cluster count (capped at 12)

    Returns:
        One color per centroid, in centroid index order
    """
    k = min(k, MAX_CLUSTERS)
    if len(pixels) == 0 or k <= 0:
        return []

    centroids = initial_centroids(pixels, k)
    # Above 10 clusters only every other pixel takes part in assignment
    working = (pixels[::2] if k > 10 else pixels).astype(np.float64)
    max_iterations = max_iterations_for(k)

    iterations = 0
    for iterations in range(1, max_iterations + 1):
        labels = assign_clusters(working, centroids)
        has_changed = False

        for index in range(k):
            members = working[labels == index]
            if len(members) == 0:
                continue
            mean = Color.from_float(*members.mean(axis=0))
            if distance(mean, centroids[index]) > MOVE_THRESHOLD:
                centroids[index] = mean
                has_changed = True

        if not has_changed:
            break

    logger.debug(f"K-means converged after {iterations} iterations with k={k}")
    return centroids
