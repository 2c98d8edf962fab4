"""Pixel containers passed between pipeline stages."""

from dataclasses import dataclass

import numpy as np

from .constants import OUTPUT_EXTENSIONS


def _as_rgba(pixels) -> np.ndarray:
    arr = np.asarray(pixels)
    if arr.dtype != np.uint8:
        raise ValueError(f"Expected 8-bit pixels, got {arr.dtype}")
    if arr.ndim == 2:
        arr = np.repeat(arr[..., None], 3, axis=2)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError(f"Expected an HxWx3 or HxWx4 array, got shape {arr.shape}")
    if arr.shape[2] == 3:
        alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
        arr = np.concatenate([arr, alpha], axis=2)
    return arr


class RawFrame:
    """
    One captured source frame: interleaved 8-bit RGBA.

    The pixel array is copied and made read-only, so the pipeline can never
    write back into the source.
    """

    def __init__(self, pixels):
        arr = np.array(_as_rgba(pixels), dtype=np.uint8, copy=True)
        arr.setflags(write=False)
        self._pixels = arr

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    def __repr__(self):
        return f"RawFrame({self.width}x{self.height})"


class PixelBuffer:
    """Mutable RGBA8 working buffer owned by the stage transforming it."""

    def __init__(self, pixels):
        self.pixels = _as_rgba(pixels)

    @classmethod
    def empty(cls):
        return cls(np.zeros((0, 0, 4), dtype=np.uint8))

    @classmethod
    def blank(cls, width, height):
        return cls(np.zeros((height, width, 4), dtype=np.uint8))

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def is_empty(self) -> bool:
        return self.pixels.size == 0

    def swap(self, pixels: np.ndarray):
        """Replace the contents with a freshly written array of the same shape."""
        if pixels.shape != self.pixels.shape:
            raise ValueError(f"Shape mismatch: {pixels.shape} != {self.pixels.shape}")
        self.pixels = pixels.astype(np.uint8, copy=False)

    def copy(self):
        return PixelBuffer(self.pixels.copy())

    def __repr__(self):
        return f"PixelBuffer({self.width}x{self.height})"


@dataclass(frozen=True)
class CaptureArtifact:
    """Encoded result of one successful capture."""
    data: bytes
    era_id: str
    era_name: str
    format_id: str
    timestamp: int  # epoch milliseconds
    width: int
    height: int
    image_format: str = 'jpeg'

    @property
    def extension(self) -> str:
        return OUTPUT_EXTENSIONS[self.image_format]

    @property
    def filename(self) -> str:
        return f"{self.era_id}-{self.timestamp}.{self.extension}"
