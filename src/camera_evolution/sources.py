"""Frame sources: load a single RawFrame from a file on disk."""

import os

import numpy as np
import rawpy
from PIL import Image, UnidentifiedImageError

from .constants import SUPPORTED_IMAGE_EXTENSIONS, SUPPORTED_RAW_EXTENSIONS
from .errors import MissingSource
from .frames import RawFrame

SUPPORTED_FRAME_EXTENSIONS = SUPPORTED_IMAGE_EXTENSIONS + SUPPORTED_RAW_EXTENSIONS


def is_frame_file(path) -> bool:
    return os.path.splitext(str(path))[1].lower() in SUPPORTED_FRAME_EXTENSIONS


def _decode_raw(path):
    with rawpy.imread(path) as raw:
        rgb = raw.postprocess(
            use_camera_wb=True,
            no_auto_bright=False,
            output_bps=8,
            output_color=rawpy.ColorSpace.sRGB,
        )
    return np.asarray(rgb, dtype=np.uint8)


def _decode_image(path):
    with Image.open(path) as image:
        return np.asarray(image.convert('RGBA'), dtype=np.uint8)


def load_frame(path) -> RawFrame:
    """
    Read `path` as an RGBA frame. Camera RAW files go through rawpy,
    everything else through Pillow.
    """
    path = str(path)
    if not os.path.isfile(path):
        raise MissingSource(f"No frame at {path}")

    ext = os.path.splitext(path)[1].lower()
    try:
        if ext in SUPPORTED_RAW_EXTENSIONS:
            pixels = _decode_raw(path)
        else:
            pixels = _decode_image(path)
    except (OSError, UnidentifiedImageError, rawpy.LibRawError) as e:
        raise MissingSource(f"Could not read frame from {path}: {e}") from e

    return RawFrame(pixels)
