"""Centered aspect-ratio crop."""

from typing import NamedTuple


class CropRect(NamedTuple):
    x: float
    y: float
    w: float
    h: float

    @property
    def is_empty(self) -> bool:
        return self.w <= 0 or self.h <= 0

    @property
    def box(self):
        """(left, upper, right, lower) as used by Pillow."""
        return (self.x, self.y, self.x + self.w, self.y + self.h)


def crop_rect(source_width, source_height, target_aspect) -> CropRect:
    """
    Largest centered rectangle of aspect `target_aspect` (width/height)
    inside a source of the given size. Wider sources lose their sides,
    taller ones their top and bottom.
    """
    if source_width <= 0 or source_height <= 0:
        return CropRect(0.0, 0.0, 0.0, 0.0)

    target_aspect = float(target_aspect)
    source_aspect = source_width / source_height

    if source_aspect > target_aspect:
        w = source_height * target_aspect
        return CropRect((source_width - w) / 2, 0.0, w, float(source_height))

    h = source_width / target_aspect
    return CropRect(0.0, (source_height - h) / 2, float(source_width), h)
