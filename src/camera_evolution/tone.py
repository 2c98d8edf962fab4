# -*- coding: utf-8 -*-
"""
Tone stage: resample the cropped frame into the output size and apply the
era's base tone adjustments, then long-exposure ghosting where the era
calls for it.

Adjustments behave like the CSS filter functions of the same names and are
applied in order, clamping to [0, 1] after each one.
"""

import math

import numpy as np
from PIL import Image

from .compositing import draw_image, gaussian_blur
from .constants import GHOST_BLUR, GHOST_OPACITY, GHOST_PASSES
from .frames import PixelBuffer

# ==========================================
#              COLOR MATRICES
# ==========================================

def grayscale_matrix(amount):
    a = 1.0 - min(max(amount, 0.0), 1.0)
    return (
        (0.2126 + 0.7874 * a, 0.7152 - 0.7152 * a, 0.0722 - 0.0722 * a),
        (0.2126 - 0.2126 * a, 0.7152 + 0.2848 * a, 0.0722 - 0.0722 * a),
        (0.2126 - 0.2126 * a, 0.7152 - 0.7152 * a, 0.0722 + 0.9278 * a),
    )


def sepia_matrix(amount):
    a = 1.0 - min(max(amount, 0.0), 1.0)
    return (
        (0.393 + 0.607 * a, 0.769 - 0.769 * a, 0.189 - 0.189 * a),
        (0.349 - 0.349 * a, 0.686 + 0.314 * a, 0.168 - 0.168 * a),
        (0.272 - 0.272 * a, 0.534 - 0.534 * a, 0.131 + 0.869 * a),
    )


def saturate_matrix(amount):
    s = max(amount, 0.0)
    return (
        (0.213 + 0.787 * s, 0.715 - 0.715 * s, 0.072 - 0.072 * s),
        (0.213 - 0.213 * s, 0.715 + 0.285 * s, 0.072 - 0.072 * s),
        (0.213 - 0.213 * s, 0.715 - 0.715 * s, 0.072 + 0.928 * s),
    )


def hue_rotate_matrix(degrees):
    c = math.cos(math.radians(degrees))
    s = math.sin(math.radians(degrees))
    return (
        (0.213 + c * 0.787 - s * 0.213, 0.715 - c * 0.715 - s * 0.715, 0.072 - c * 0.072 + s * 0.928),
        (0.213 - c * 0.213 + s * 0.143, 0.715 + c * 0.285 + s * 0.140, 0.072 - c * 0.072 - s * 0.283),
        (0.213 - c * 0.213 - s * 0.787, 0.715 - c * 0.715 + s * 0.715, 0.072 + c * 0.928 + s * 0.072),
    )


MATRICES = {
    'grayscale': grayscale_matrix,
    'sepia': sepia_matrix,
    'saturate': saturate_matrix,
    'hue-rotate': hue_rotate_matrix,
}


def apply_matrix(rgb, matrix):
    # Channel by channel so that identical rows give bit-identical channels.
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    out = np.empty_like(rgb)
    for index, (mr, mg, mb) in enumerate(matrix):
        out[..., index] = mr * r + mg * g + mb * b
    return out


# ==========================================
#              STAGE FUNCTIONS
# ==========================================

def resample(pixels, rect, size):
    """Nearest-neighbour scale of `rect` from `pixels` to `size` (w, h)."""
    height, width = pixels.shape[:2]
    left, upper, right, lower = rect.box
    box = (max(0.0, left), max(0.0, upper), min(float(width), right), min(float(height), lower))
    image = Image.fromarray(np.ascontiguousarray(pixels))
    scaled = image.resize(size, Image.Resampling.NEAREST, box=box)
    return np.asarray(scaled, dtype=np.uint8).copy()


def apply_tone(pixels, adjustments):
    """Apply tone adjustments in order; no adjustments leaves pixels untouched."""
    if not adjustments:
        return pixels

    alpha = pixels[..., 3:4]
    rgb = pixels[..., :3].astype(np.float32) / 255.0

    for adjustment in adjustments:
        name, amount = adjustment.name, adjustment.amount
        if name in MATRICES:
            rgb = apply_matrix(rgb, MATRICES[name](amount))
        elif name == 'contrast':
            rgb = (rgb - 0.5) * amount + 0.5
        elif name == 'brightness':
            rgb = rgb * amount
        elif name == 'blur':
            as_bytes = np.concatenate([np.rint(rgb * 255.0).astype(np.uint8), alpha], axis=2)
            rgb = gaussian_blur(as_bytes, amount)[..., :3].astype(np.float32) / 255.0
        else:
            raise ValueError(f"Unknown tone adjustment: {name}")
        rgb = np.clip(rgb, 0.0, 1.0)

    out = np.empty_like(pixels)
    out[..., :3] = np.rint(rgb * 255.0).astype(np.uint8)
    out[..., 3:4] = alpha
    return out


def ghost(pixels, passes=GHOST_PASSES, opacity=GHOST_OPACITY, blur=GHOST_BLUR):
    """Long exposure: re-draw a blurred snapshot of the image over itself."""
    for _ in range(passes):
        snapshot = pixels
        pixels = draw_image(snapshot, gaussian_blur(snapshot, blur), opacity)
    return pixels


def render_tone(frame, rect, era, size, _log=None) -> PixelBuffer:
    """
    Draw `rect` of `frame` into a new buffer of `size` with the era's tone.

    A zero-area crop draws nothing and returns an empty buffer.
    """
    if rect.is_empty:
        if _log:
            _log("  ⚠️ Zero-area crop, nothing to draw.")
        return PixelBuffer.empty()

    pixels = resample(frame.pixels, rect, size)
    pixels = apply_tone(pixels, era.tone)

    if era.exposure == 'long':
        if _log:
            _log(f"  🔹 Long exposure ghosting ({GHOST_PASSES} passes)")
        pixels = ghost(pixels)

    return PixelBuffer(pixels)
