# -*- coding: utf-8 -*-
"""
Era effect compositor.

Each era maps to a fixed, ordered tuple of compositing passes in
`ERA_EFFECTS`. Order matters: later passes blend over the result of the
earlier ones. A pass reads a snapshot of the buffer, builds a new array and
swaps it in.

Gradient radii are fractions of the output width, as are hot-spot ranges.
Colors are (r, g, b, a) with 0..255 channels and 0..1 alpha.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .compositing import (
    DESTINATION_IN,
    MULTIPLY,
    SCREEN,
    SOURCE_OVER,
    composite,
    draw_image,
    filtered_copy,
    radial_gradient,
    rgba_color,
    shifted_copy,
    stacked_dots,
)

WHITE = rgba_color(255, 255, 255)[0]


# ==========================================
#              FLAT & GRADIENT FILLS
# ==========================================

@dataclass(frozen=True)
class Fill:
    """Flat color over the whole frame."""
    color: Tuple[float, float, float, float]
    mode: str = SOURCE_OVER

    def apply(self, buffer, rng):
        rgb, alpha = rgba_color(*self.color)
        buffer.swap(composite(buffer.pixels, rgb, alpha, self.mode))


@dataclass(frozen=True)
class RadialFill:
    """Radial gradient centered on the frame."""
    inner: float
    outer: float
    stops: tuple
    mode: str = SOURCE_OVER

    def apply(self, buffer, rng):
        w, h = buffer.width, buffer.height
        rgb, alpha = radial_gradient(w, h, (w / 2, h / 2), self.inner * w, self.outer * w, self.stops)
        buffer.swap(composite(buffer.pixels, rgb, alpha, self.mode))


@dataclass(frozen=True)
class HotSpot:
    """Radial glow at a random spot inside the given ranges (uneven exposure)."""
    inner: float
    outer: float
    stops: tuple
    x_range: Tuple[float, float] = (0.3, 0.7)
    y_range: Tuple[float, float] = (0.2, 0.5)

    def apply(self, buffer, rng):
        w, h = buffer.width, buffer.height
        cx = w * rng.uniform(*self.x_range)
        cy = h * rng.uniform(*self.y_range)
        rgb, alpha = radial_gradient(w, h, (cx, cy), self.inner * w, self.outer * w, self.stops)
        buffer.swap(composite(buffer.pixels, rgb, alpha, SOURCE_OVER))


# ==========================================
#              SELF COMPOSITES
# ==========================================

@dataclass(frozen=True)
class SelfComposite:
    """Draw a filtered, optionally shifted copy of the frame over itself."""
    opacity: float
    blur: float = 0.0
    brightness: float = 1.0
    offset: int = 0

    def apply(self, buffer, rng):
        snapshot = buffer.pixels
        copy = filtered_copy(snapshot, blur=self.blur, brightness=self.brightness)
        if self.offset:
            copy = shifted_copy(copy, self.offset)
        buffer.swap(draw_image(snapshot, copy, self.opacity))


# ==========================================
#              STOCHASTIC PASSES
# ==========================================

@dataclass(frozen=True)
class Grain:
    """Single-pixel dots of one color at random low opacity."""
    count: int = 24000
    max_opacity: float = 0.12
    color: Tuple[int, int, int] = (0, 0, 0)

    def apply(self, buffer, rng):
        w, h = buffer.width, buffer.height
        xs = rng.integers(0, w, self.count)
        ys = rng.integers(0, h, self.count)
        alphas = rng.random(self.count) * self.max_opacity
        _, alpha = stacked_dots(h, w, ys, xs, alphas)
        buffer.swap(composite(buffer.pixels, rgba_color(*self.color)[0], alpha))


@dataclass(frozen=True)
class Scratches:
    """Faint white near-vertical lines running the full frame height."""
    count: int = 8
    min_opacity: float = 0.02
    opacity_spread: float = 0.08
    drift: float = 10.0
    thin_chance: float = 0.7

    def apply(self, buffer, rng):
        w, h = buffer.width, buffer.height
        rows = np.arange(h)
        transmission = np.ones((h, w), dtype=np.float32)

        for _ in range(self.count):
            opacity = rng.random() * self.opacity_spread + self.min_opacity
            line_width = 1 if rng.random() < self.thin_chance else 2
            x_top = rng.random() * w
            x_shift = (rng.random() - 0.5) * self.drift
            xs = x_top + x_shift * (rows + 0.5) / h

            line = np.zeros((h, w), dtype=np.float32)
            for k in range(line_width):
                cols = np.floor(xs).astype(np.int64) + k - line_width // 2
                inside = (cols >= 0) & (cols < w)
                line[rows[inside], cols[inside]] = opacity
            transmission *= 1.0 - line

        buffer.swap(composite(buffer.pixels, WHITE, 1.0 - transmission))


@dataclass(frozen=True)
class Dust:
    """Small soft white disks."""
    count: int = 15
    max_radius: float = 3.0
    max_opacity: float = 0.15

    def apply(self, buffer, rng):
        w, h = buffer.width, buffer.height
        transmission = np.ones((h, w), dtype=np.float32)

        for _ in range(self.count):
            opacity = rng.random() * self.max_opacity
            cx, cy = rng.random() * w, rng.random() * h
            radius = rng.random() * self.max_radius

            x_lo, x_hi = max(0, int(cx - radius - 1)), min(w, int(cx + radius + 2))
            y_lo, y_hi = max(0, int(cy - radius - 1)), min(h, int(cy + radius + 2))
            if x_lo >= x_hi or y_lo >= y_hi:
                continue

            ys, xs = np.ogrid[y_lo:y_hi, x_lo:x_hi]
            dist = np.sqrt((xs + 0.5 - cx) ** 2 + (ys + 0.5 - cy) ** 2)
            coverage = np.clip(radius - dist + 0.5, 0.0, 1.0)
            transmission[y_lo:y_hi, x_lo:x_hi] *= (1.0 - opacity * coverage).astype(np.float32)

        buffer.swap(composite(buffer.pixels, WHITE, 1.0 - transmission))


@dataclass(frozen=True)
class ColorNoise:
    """Single pixels of random dark color (sensor noise)."""
    count: int = 3000
    max_level: int = 80
    opacity: float = 0.08

    def apply(self, buffer, rng):
        w, h = buffer.width, buffer.height
        xs = rng.integers(0, w, self.count)
        ys = rng.integers(0, h, self.count)
        colors = rng.integers(0, self.max_level, (self.count, 3)) / 255.0
        alphas = np.full(self.count, self.opacity)
        rgb, alpha = stacked_dots(h, w, ys, xs, alphas, colors)
        buffer.swap(composite(buffer.pixels, rgb, alpha))


# ==========================================
#              ERA PASS TABLE
# ==========================================

FILM_DAMAGE = (Grain(), Scratches(), Dust())

ERA_EFFECTS = {
    'daguerreotype': (
        # Metallic sheen
        RadialFill(0.05, 0.65, (
            (0.0, (255, 255, 255, 0.15)),
            (0.6, (200, 200, 200, 0.0)),
            (1.0, (0, 0, 0, 0.45)),
        )),
        RadialFill(0.3, 0.9, (
            (0.0, (255, 255, 255, 1.0)),
            (0.6, (180, 180, 180, 1.0)),
            (1.0, (50, 50, 50, 0.4)),
        ), MULTIPLY),
        # Plate edges fall off
        RadialFill(0.3, 0.6, (
            (0.0, (255, 255, 255, 1.0)),
            (0.8, (255, 255, 255, 0.9)),
            (1.0, (255, 255, 255, 0.75)),
        ), DESTINATION_IN),
    ),
    'wet-plate': (
        HotSpot(0.05, 0.4, (
            (0.0, (255, 255, 255, 0.2)),
            (1.0, (255, 255, 255, 0.0)),
        )),
        SelfComposite(0.25, blur=6.0, brightness=1.4),
        Fill((0, 0, 0, 0.15), MULTIPLY),
    ),
    'early-film': FILM_DAMAGE,
    'noir': FILM_DAMAGE,
    'sepia': (
        Fill((120, 80, 40, 0.12)),
        SelfComposite(0.2, blur=4.0, brightness=1.1),
        RadialFill(0.3, 0.7, (
            (0.0, (255, 255, 255, 1.0)),
            (1.0, (100, 80, 60, 0.85)),
        ), MULTIPLY),
    ),
    'kodachrome': (
        Fill((255, 60, 0, 0.08)),
        Fill((0, 80, 120, 0.04), SCREEN),
        Fill((0, 0, 0, 0.08), MULTIPLY),
    ),
    'polaroid': (
        Fill((160, 200, 255, 0.15)),
        Fill((255, 240, 255, 0.95), MULTIPLY),
        SelfComposite(0.15, blur=2.0),
        RadialFill(0.25, 0.75, (
            (0.0, (255, 255, 255, 1.0)),
            (0.7, (230, 230, 240, 1.0)),
            (1.0, (180, 180, 200, 0.75)),
        ), MULTIPLY),
    ),
    'early-digital': (
        # Over-sharpened edges
        SelfComposite(0.35, offset=-1),
        SelfComposite(0.35, offset=1),
        ColorNoise(),
    ),
    'smartphone-hdr': (
        SelfComposite(0.28, blur=12.0, brightness=1.3),
        Fill((255, 255, 255, 0.08)),
        Fill((40, 40, 40, 0.15), SCREEN),
    ),
    'modern': (),
}


def passes_for(era):
    """Ordered compositing passes for an era; eras not in the table get none."""
    return ERA_EFFECTS.get(era.id, ())


def apply_effects(buffer, era, rng: Optional[np.random.Generator] = None, _log=None):
    """Run the era's passes over `buffer` in place."""
    passes = passes_for(era)
    if buffer.is_empty or not passes:
        return buffer

    if rng is None:
        rng = np.random.default_rng()

    for effect in passes:
        if _log:
            _log(f"    - {type(effect).__name__}")
        effect.apply(buffer, rng)
    return buffer
