"""
Unit tests for image validation and decoding.
"""
import base64
import io

import numpy as np
import pytest
from PIL import Image

from palette_studio.exceptions import ImageDecodeError
from palette_studio.services.imaging import (
    decode_base64_image, decode_image_bytes, load_image, validate_magic_bytes
)


def encode(array, fmt):
    out = io.BytesIO()
    Image.fromarray(array).save(out, format=fmt)
    return out.getvalue()


class TestMagicBytes:
    """Container sniffing before decoding"""

    @pytest.mark.parametrize("fmt,mime", [
        ("PNG", "image/png"),
        ("JPEG", "image/jpeg"),
        ("GIF", "image/gif"),
        ("BMP", "image/bmp"),
        ("WEBP", "image/webp"),
    ])
    def test_supported_formats(self, fmt, mime):
        """Test MIME detection for each supported format"""
        data = encode(np.full((4, 4, 3), 120, dtype=np.uint8), fmt)

        assert validate_magic_bytes(data) == mime

    def test_too_small(self):
        """Test files shorter than any signature"""
        with pytest.raises(ImageDecodeError):
            validate_magic_bytes(b"\x89PNG")

    def test_unknown_format(self):
        """Test unrecognized signatures"""
        with pytest.raises(ImageDecodeError):
            validate_magic_bytes(b"%PDF-1.7 not an image")

    def test_respects_configured_formats(self, monkeypatch):
        """Test that detection honours SUPPORTED_MIME_TYPES"""
        from palette_studio.config import config
        data = encode(np.full((4, 4, 3), 120, dtype=np.uint8), "BMP")
        monkeypatch.setattr(config, "SUPPORTED_MIME_TYPES", ["image/png"])

        with pytest.raises(ImageDecodeError):
            validate_magic_bytes(data)


class TestDecode:
    """Decoding to RGBA pixel buffers"""

    def test_png_rgba(self, quadrant_rgba, encode_png):
        """Test RGBA PNG decoding round trip"""
        buffer = decode_image_bytes(encode_png(quadrant_rgba))

        assert (buffer.width, buffer.height) == (20, 20)
        assert buffer.data.dtype == np.uint8
        assert buffer.data.shape == (20 * 20 * 4,)
        np.testing.assert_array_equal(buffer.data, quadrant_rgba.reshape(-1))

    def test_rgb_gets_opaque_alpha(self):
        """Test RGB images gain an opaque alpha channel"""
        data = encode(np.full((3, 5, 3), 200, dtype=np.uint8), "PNG")

        buffer = decode_image_bytes(data)

        assert (buffer.width, buffer.height) == (5, 3)
        assert set(buffer.data[3::4].tolist()) == {255}

    def test_jpeg(self):
        """Test JPEG decoding"""
        data = encode(np.full((8, 8, 3), (200, 30, 30), dtype=np.uint8), "JPEG")

        buffer = decode_image_bytes(data)

        assert buffer.pixel_count == 64
        assert abs(int(buffer.data[0]) - 200) < 10

    def test_truncated_png(self, quadrant_rgba, encode_png):
        """Test truncated PNG data"""
        data = encode_png(quadrant_rgba)

        with pytest.raises(ImageDecodeError):
            decode_image_bytes(data[:40])

    def test_garbage_with_valid_magic(self):
        """Test valid signature with a corrupt body"""
        with pytest.raises(ImageDecodeError):
            decode_image_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 64)


class TestBase64AndFiles:
    """Alternate input paths"""

    def test_plain_base64(self, quadrant_rgba, encode_png):
        """Test raw base64 input"""
        b64 = base64.b64encode(encode_png(quadrant_rgba)).decode("ascii")

        assert decode_base64_image(b64).width == 20

    def test_data_url(self, quadrant_rgba, encode_png):
        """Test data URL input"""
        b64 = base64.b64encode(encode_png(quadrant_rgba)).decode("ascii")

        assert decode_base64_image(f"data:image/png;base64,{b64}").height == 20

    def test_invalid_base64(self):
        """Test malformed base64 input"""
        with pytest.raises(ImageDecodeError):
            decode_base64_image("not*base64!")

    def test_load_image(self, tmp_path, quadrant_rgba, encode_png):
        """Test loading from str and Path"""
        path = tmp_path / "img.png"
        path.write_bytes(encode_png(quadrant_rgba))

        assert load_image(path).pixel_count == 400
        assert load_image(str(path)).pixel_count == 400

    def test_missing_file(self, tmp_path):
        """Test loading a path that does not exist"""
        with pytest.raises(ImageDecodeError):
            load_image(tmp_path / "missing.png")
