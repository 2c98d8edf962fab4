"""Color depth reduction."""

import numpy as np

from .constants import FULL_COLOR_DEPTH


def quantize_pixels(pixels, color_depth):
    """
    Reduce RGB to 2**color_depth evenly spaced levels per channel.

    Values are floored into their bucket (not rounded), which crushes
    shadows: at depth 6 the brightest reachable value is 252. Alpha is
    left alone. Returns a new array.
    """
    levels = 2 ** color_depth
    step = 256.0 / levels
    out = pixels.copy()
    rgb = pixels[..., :3].astype(np.float64)
    out[..., :3] = (np.floor(rgb / step) * step).astype(np.uint8)
    return out


def quantize(buffer, color_depth):
    """Quantize `buffer` in place; no-op for full color depths or empty buffers."""
    if color_depth >= FULL_COLOR_DEPTH or buffer.is_empty:
        return buffer
    buffer.swap(quantize_pixels(buffer.pixels, color_depth))
    return buffer
