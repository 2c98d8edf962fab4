from io import BytesIO

import numpy as np
import pytest
import tifffile
from PIL import Image

from camera_evolution import encoder
from camera_evolution.errors import EmptyFrameError, EncodingFailure
from camera_evolution.frames import PixelBuffer


@pytest.fixture
def small_buffer():
    rng = np.random.default_rng(4)
    pixels = rng.integers(0, 256, (30, 40, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    return PixelBuffer(pixels)


def test_zero_area_buffer_raises():
    with pytest.raises(EmptyFrameError):
        encoder.encode(PixelBuffer.empty())


def test_jpeg_output(small_buffer):
    data = encoder.encode(small_buffer)
    assert data[:2] == b'\xff\xd8'
    with Image.open(BytesIO(data)) as image:
        assert image.format == 'JPEG'
        assert image.size == (40, 30)
        assert image.mode == 'RGB'


def test_jpeg_is_deterministic(small_buffer):
    assert encoder.encode(small_buffer) == encoder.encode(small_buffer)


def test_tiff_is_lossless(small_buffer):
    data = encoder.encode(small_buffer, image_format='tiff')
    decoded = tifffile.imread(BytesIO(data))
    np.testing.assert_array_equal(decoded, small_buffer.pixels[..., :3])


def test_heif_output(small_buffer):
    data = encoder.encode(small_buffer, image_format='heif')
    assert b'ftyp' in data[:16]


def test_transparent_pixels_flatten_to_black():
    pixels = np.full((2, 2, 4), 200, dtype=np.uint8)
    pixels[0, 0, 3] = 0
    flat = encoder.flatten(pixels)
    assert flat[0, 0].tolist() == [0, 0, 0]
    assert flat[1, 1].tolist() == [157, 157, 157]


def test_unknown_format_raises(small_buffer):
    with pytest.raises(EncodingFailure):
        encoder.encode(small_buffer, image_format='gif')


def test_codec_error_becomes_encoding_failure(small_buffer, monkeypatch):
    def broken(rgb, stream, quality):
        raise OSError("encoder exploded")

    monkeypatch.setitem(encoder.ENCODERS, 'jpeg', broken)
    with pytest.raises(EncodingFailure, match="exploded"):
        encoder.encode(small_buffer)
