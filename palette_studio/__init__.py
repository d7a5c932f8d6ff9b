"""
Palette Studio

Dominant color extraction, palette curation and WCAG contrast checks
for raster images.
"""

__version__ = "1.0.0"
