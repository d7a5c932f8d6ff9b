"""
Palette Studio error types.
"""


class PaletteStudioError(Exception):
    """Base class for all Palette Studio errors."""


class ImageDecodeError(PaletteStudioError, ValueError):
    """Raised when an image cannot be loaded or decoded into a pixel buffer."""


class ExtractionConfigError(PaletteStudioError, ValueError):
    """Raised for nonsensical extraction parameters such as num_colors <= 0."""


class PaletteValidationError(PaletteStudioError, ValueError):
    """Raised when a palette is empty, too large or has malformed colors."""


class PaletteNotFoundError(PaletteStudioError, LookupError):
    """Raised when a palette id does not exist in the store."""


class PaletteStorageError(PaletteStudioError, RuntimeError):
    """Raised when the palette store cannot be written."""
