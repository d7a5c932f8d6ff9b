"""
Palette Studio Colors Module

Provides dominant color extraction from decoded images: pixel sampling,
median-cut, k-means and hue-bucket quantizers, plus the orchestrator that
merges, deduplicates and ranks their output. Also hosts WCAG contrast
checks and swatch rendering.
"""

__version__ = "1.0.0"
