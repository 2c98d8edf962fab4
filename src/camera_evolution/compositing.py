# -*- coding: utf-8 -*-
"""
Canvas-style compositing primitives on RGBA8 arrays.

Buffers are straight (non-premultiplied) alpha. Every function returns a
new array and never writes into its inputs, so callers can read from a
snapshot and swap the result in.

Blend math follows the W3C Compositing and Blending formulas:

    Cs' = (1 - ab) * Cs + ab * B(Cb, Cs)
    co  = as * Cs' + ab * (1 - as) * Cb
    ao  = as + ab * (1 - as)
"""

import numpy as np
from PIL import Image, ImageFilter

SOURCE_OVER = 'source-over'
MULTIPLY = 'multiply'
SCREEN = 'screen'
DESTINATION_IN = 'destination-in'

BLEND_MODES = [SOURCE_OVER, MULTIPLY, SCREEN, DESTINATION_IN]


# ==========================================
#              CONVERSIONS
# ==========================================

def to_float(pixels):
    """Split RGBA8 into float32 rgb (H, W, 3) and alpha (H, W), both 0..1."""
    data = pixels.astype(np.float32) / 255.0
    return data[..., :3], data[..., 3]


def to_pixels(rgb, alpha):
    rgba = np.concatenate([rgb, alpha[..., None]], axis=2)
    return np.rint(np.clip(rgba, 0.0, 1.0) * 255.0).astype(np.uint8)


def rgba_color(r, g, b, a=1.0):
    """Canvas-style color: 0..255 channels, 0..1 alpha -> float rgb, alpha."""
    return np.array([r, g, b], dtype=np.float32) / 255.0, float(a)


# ==========================================
#              BLENDING
# ==========================================

def _blend_function(mode, cb, cs):
    if mode == SOURCE_OVER:
        return cs
    if mode == MULTIPLY:
        return cb * cs
    if mode == SCREEN:
        return cb + cs - cb * cs
    raise ValueError(f"Unsupported blend mode: {mode}")


def composite(pixels, src_rgb, src_alpha, mode=SOURCE_OVER):
    """
    Composite a source layer over `pixels` and return the result.

    `src_rgb` broadcasts against (H, W, 3) and `src_alpha` against (H, W),
    so flat fills can pass a single color and a scalar opacity.
    """
    cb, ab = to_float(pixels)
    src_alpha = np.broadcast_to(np.asarray(src_alpha, dtype=np.float32), ab.shape)

    if mode == DESTINATION_IN:
        return to_pixels(cb, ab * src_alpha)

    cs = np.broadcast_to(np.asarray(src_rgb, dtype=np.float32), cb.shape)
    a_s = src_alpha[..., None]
    a_b = ab[..., None]

    mixed = (1.0 - a_b) * cs + a_b * _blend_function(mode, cb, cs)
    ao = a_s + a_b * (1.0 - a_s)
    co = a_s * mixed + a_b * (1.0 - a_s) * cb
    rgb = np.divide(co, ao, out=np.zeros_like(co), where=ao > 0)
    return to_pixels(rgb, ao[..., 0])


def draw_image(pixels, image, opacity=1.0, mode=SOURCE_OVER):
    """Draw a whole RGBA8 image over `pixels` at a global opacity."""
    rgb, alpha = to_float(image)
    return composite(pixels, rgb, alpha * opacity, mode)


# ==========================================
#              LAYERS
# ==========================================

def radial_gradient(width, height, center, inner, outer, stops):
    """
    Concentric radial gradient as a float (rgb, alpha) layer.

    `stops` is a list of (offset, (r, g, b, a)) with 0..255 channels and a
    0..1 alpha. Inside `inner` the first stop is used, beyond `outer` the
    last one.
    """
    cx, cy = center
    ys, xs = np.ogrid[:height, :width]
    dist = np.sqrt((xs + 0.5 - cx) ** 2 + (ys + 0.5 - cy) ** 2).astype(np.float32)
    span = max(outer - inner, 1e-6)
    t = np.clip((dist - inner) / span, 0.0, 1.0)

    offsets = [offset for offset, _ in stops]
    channels = []
    for index in range(4):
        values = [color[index] / 255.0 if index < 3 else color[index] for _, color in stops]
        channels.append(np.interp(t, offsets, values).astype(np.float32))
    rgb = np.stack(channels[:3], axis=2)
    return rgb, channels[3]


def stacked_dots(height, width, ys, xs, alphas, colors=None):
    """
    Layer for many single-pixel dots drawn one after another.

    Alphas landing on the same pixel combine as 1 - prod(1 - a). Dot colors
    (0..1 rgb per dot) are averaged by alpha where dots overlap.
    """
    transmission = np.ones((height, width), dtype=np.float32)
    np.multiply.at(transmission, (ys, xs), (1.0 - alphas).astype(np.float32))
    alpha = 1.0 - transmission

    if colors is None:
        return np.zeros((height, width, 3), dtype=np.float32), alpha

    weighted = np.zeros((height, width, 3), dtype=np.float32)
    weights = np.zeros((height, width), dtype=np.float32)
    np.add.at(weighted, (ys, xs), (colors * alphas[:, None]).astype(np.float32))
    np.add.at(weights, (ys, xs), alphas.astype(np.float32))
    rgb = np.divide(
        weighted, weights[..., None],
        out=np.zeros_like(weighted),
        where=weights[..., None] > 0,
    )
    return rgb, alpha


# ==========================================
#              FILTERED COPIES
# ==========================================

def gaussian_blur(pixels, radius):
    """
    Gaussian blur with standard deviation `radius` pixels. Edge pixels are
    extended outward, so borders keep their color and opacity.
    """
    if radius <= 0:
        return pixels.copy()
    image = Image.fromarray(np.ascontiguousarray(pixels))
    return np.asarray(image.filter(ImageFilter.GaussianBlur(radius)), dtype=np.uint8).copy()


def filtered_copy(pixels, blur=0.0, brightness=1.0):
    """A `blur(..) brightness(..)` filtered copy of `pixels`."""
    out = gaussian_blur(pixels, blur)
    if brightness != 1.0:
        rgb = out[..., :3].astype(np.float32) * brightness
        out[..., :3] = np.rint(np.clip(rgb, 0.0, 255.0)).astype(np.uint8)
    return out


def shifted_copy(pixels, dx):
    """Copy moved `dx` pixels horizontally; uncovered columns are transparent."""
    out = np.zeros_like(pixels)
    width = pixels.shape[1]
    if dx == 0:
        out[:] = pixels
    elif abs(dx) < width:
        if dx > 0:
            out[:, dx:] = pixels[:, :width - dx]
        else:
            out[:, :width + dx] = pixels[:, -dx:]
    return out
