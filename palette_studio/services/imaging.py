"""
Palette Studio Imaging Utilities
Handles image I/O, validation and decoding into RGBA pixel buffers.
"""
import base64
import binascii
import io
from pathlib import Path
from typing import Union

import numpy as np
from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from palette_studio.config import config
from palette_studio.exceptions import ImageDecodeError
from palette_studio.services.colors.sampling import PixelBuffer


def detect_mime_type(file_bytes: bytes) -> str:
    """Sniff the image container from its leading bytes; "" when unknown."""
    if file_bytes.startswith(b'\xff\xd8\xff'):
        return "image/jpeg"
    if file_bytes.startswith(b'\x89PNG\r\n\x1a\n'):
        return "image/png"
    if file_bytes[:6] in (b'GIF87a', b'GIF89a'):
        return "image/gif"
    if file_bytes[:4] == b'RIFF' and file_bytes[8:12] == b'WEBP':
        return "image/webp"
    if file_bytes.startswith(b'BM'):
        return "image/bmp"
    return ""


def validate_magic_bytes(file_bytes: bytes) -> str:
    """
    Validate file magic bytes against the configured image formats.

    Args:
        file_bytes: Raw file bytes

    Returns:
        Detected MIME type

    Raises:
        ImageDecodeError: For empty, truncated or unsupported files
    """
    if len(file_bytes) < 8:
        raise ImageDecodeError("File too small or corrupt")

    mime_type = detect_mime_type(file_bytes)
    if mime_type not in config.SUPPORTED_MIME_TYPES:
        raise ImageDecodeError("Invalid image file. Magic bytes don't match supported formats.")
    return mime_type


def decode_image_bytes(file_bytes: bytes) -> PixelBuffer:
    """
    Decode encoded image bytes into a flat RGBA pixel buffer.

    Args:
        file_bytes: PNG/JPEG/GIF/WebP/BMP file content

    Returns:
        PixelBuffer with width, height and uint8 RGBA data

    Raises:
        ImageDecodeError: If the bytes are not a decodable image
    """
    validate_magic_bytes(file_bytes)

    try:
        with Image.open(io.BytesIO(file_bytes)) as pil_image:
            rgba = pil_image.convert("RGBA")
            width, height = rgba.size
            data = np.asarray(rgba, dtype=np.uint8).reshape(-1)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise ImageDecodeError(f"Failed to decode image: {str(e)}")

    if width == 0 or height == 0:
        raise ImageDecodeError("Image has no pixels")

    return PixelBuffer(width=width, height=height, data=data)


def decode_base64_image(b64_data: str) -> PixelBuffer:
    """Decode base64 image data (optionally a data URL) into a pixel buffer."""
    # Remove data URL prefix if present
    if ',' in b64_data:
        b64_data = b64_data.split(',', 1)[1]

    try:
        file_bytes = base64.b64decode(b64_data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Invalid base64 image data: {str(e)}")

    return decode_image_bytes(file_bytes)


def load_image(path: Union[str, Path]) -> PixelBuffer:
    """Read an image file from disk and decode it."""
    try:
        file_bytes = Path(path).read_bytes()
    except OSError as e:
        raise ImageDecodeError(f"Failed to read image file {path}: {str(e)}")
    return decode_image_bytes(file_bytes)


async def read_upload(file: UploadFile) -> PixelBuffer:
    """
    Safely read and decode an uploaded image.

    Args:
        file: FastAPI UploadFile object

    Returns:
        Decoded PixelBuffer

    Raises:
        ImageDecodeError: For unreadable, oversized or undecodable uploads
    """
    try:
        file_bytes = await file.read()
    except Exception as e:
        raise ImageDecodeError(f"Failed to read file: {str(e)}")

    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise ImageDecodeError(f"File too large. Maximum size: {config.MAX_FILE_MB}MB")

    return decode_image_bytes(file_bytes)
