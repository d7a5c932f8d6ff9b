"""
Palette Studio Configuration
Manages environment variables and defaults for the extraction service.
"""
import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Configuration class for Palette Studio services."""

    # Upload limits
    MAX_FILE_MB: int = int(os.environ.get("PALETTE_STUDIO_MAX_FILE_MB", "10"))

    # Extraction defaults
    DEFAULT_NUM_COLORS: int = int(os.environ.get("PALETTE_STUDIO_DEFAULT_NUM_COLORS", "6"))
    DEFAULT_QUALITY: int = int(os.environ.get("PALETTE_STUDIO_DEFAULT_QUALITY", "10"))
    MAX_NUM_COLORS: int = int(os.environ.get("PALETTE_STUDIO_MAX_NUM_COLORS", "32"))
    MAX_QUALITY: int = 100

    # Palettes
    MAX_PALETTE_COLORS: int = int(os.environ.get("PALETTE_STUDIO_MAX_PALETTE_COLORS", "20"))
    PALETTE_STORE: str = os.environ.get("PALETTE_STUDIO_PALETTE_STORE", "./data/palettes.json")

    # Logging
    LOG_LEVEL: str = os.environ.get("PALETTE_STUDIO_LOG_LEVEL", "INFO")

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get("PALETTE_STUDIO_ALLOWED_ORIGINS", "")

    # Timeouts (seconds)
    EXTRACTION_TIMEOUT_S: float = float(os.environ.get("PALETTE_STUDIO_EXTRACTION_TIMEOUT_S", "30"))

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png", "image/gif", "image/webp", "image/bmp"]

    @classmethod
    def validate_num_colors(cls, num_colors: int) -> bool:
        """Validate requested color count."""
        if isinstance(num_colors, bool) or not isinstance(num_colors, int):
            return False
        return 1 <= num_colors <= cls.MAX_NUM_COLORS

    @classmethod
    def validate_quality(cls, quality: float) -> bool:
        """Validate sampling quality hint."""
        return 0 < quality <= cls.MAX_QUALITY

    @classmethod
    def allowed_origins(cls) -> list:
        """Parse the comma separated CORS origin list."""
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Global config instance
config = Config()
