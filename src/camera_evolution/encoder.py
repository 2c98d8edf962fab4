# -*- coding: utf-8 -*-
"""
Encode the final buffer to image bytes.

JPEG is the capture format. TIFF (lossless, zlib) and HEIF are available
for keeping higher quality masters of the same render.
"""

from io import BytesIO

import numpy as np
import pillow_heif
import tifffile
from PIL import Image

from .constants import JPEG_QUALITY, OUTPUT_EXTENSIONS
from .errors import EmptyFrameError, EncodingFailure

IMAGE_FORMATS = list(OUTPUT_EXTENSIONS)


def flatten(pixels):
    """Drop alpha by compositing over black, as a JPEG export does."""
    alpha = pixels[..., 3:4].astype(np.float32) / 255.0
    rgb = pixels[..., :3].astype(np.float32) * alpha
    return np.rint(rgb).astype(np.uint8)


def _encode_jpeg(rgb, stream, quality):
    Image.fromarray(rgb).save(
        stream,
        format='JPEG',
        quality=quality,
        subsampling=0,
        optimize=True,
    )


def _encode_tiff(rgb, stream, quality):
    tifffile.imwrite(
        stream,
        rgb,
        photometric='rgb',
        compression='zlib',
        compressionargs={'level': 8},
    )


def _encode_heif(rgb, stream, quality):
    heif_file = pillow_heif.from_bytes(
        mode='RGB',
        size=(rgb.shape[1], rgb.shape[0]),
        data=rgb.tobytes(),
    )
    heif_file.save(stream, quality=quality)


ENCODERS = {
    'jpeg': _encode_jpeg,
    'tiff': _encode_tiff,
    'heif': _encode_heif,
}


def encode(buffer, image_format='jpeg', quality=JPEG_QUALITY) -> bytes:
    """
    Serialize `buffer` and return the encoded bytes.

    Raises EmptyFrameError for a zero-area buffer and EncodingFailure when
    the codec rejects the data or the format is unknown.
    """
    if buffer.is_empty:
        raise EmptyFrameError(f"Cannot encode a {buffer.width}x{buffer.height} buffer")

    encoder = ENCODERS.get(image_format)
    if encoder is None:
        raise EncodingFailure(f"Unsupported image format: {image_format}")

    rgb = np.ascontiguousarray(flatten(buffer.pixels))
    stream = BytesIO()
    try:
        encoder(rgb, stream, quality)
    except (OSError, ValueError, RuntimeError) as e:
        raise EncodingFailure(f"{image_format} encoding failed: {e}") from e

    data = stream.getvalue()
    if not data:
        raise EncodingFailure(f"{image_format} encoder produced no data")
    return data
