"""Shared pytest configuration and fixtures for the Camera Evolution suite."""

import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

# Ensure the src/ layout is importable without an install
SRC_ROOT = Path(__file__).parent.parent / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from camera_evolution.frames import PixelBuffer, RawFrame  # noqa: E402


# =============================================================================
# Frame Fixtures
# =============================================================================

@pytest.fixture
def gray_frame() -> RawFrame:
    """1920x1080 mid-gray, fully opaque."""
    pixels = np.full((1080, 1920, 4), 128, dtype=np.uint8)
    pixels[..., 3] = 255
    return RawFrame(pixels)


@pytest.fixture
def color_frame() -> RawFrame:
    """Small landscape frame with horizontal and vertical color ramps."""
    height, width = 90, 160
    xs = np.linspace(0, 255, width, dtype=np.float32)
    ys = np.linspace(0, 255, height, dtype=np.float32)
    rgb = np.zeros((height, width, 3), dtype=np.uint8)
    rgb[..., 0] = xs[None, :].astype(np.uint8)
    rgb[..., 1] = ys[:, None].astype(np.uint8)
    rgb[..., 2] = 90
    return RawFrame(rgb)


@pytest.fixture
def white_buffer() -> PixelBuffer:
    return PixelBuffer(np.full((1080, 1080, 4), 255, dtype=np.uint8))


@pytest.fixture
def gray_buffer() -> PixelBuffer:
    pixels = np.full((200, 200, 4), 128, dtype=np.uint8)
    pixels[..., 3] = 255
    return PixelBuffer(pixels)


@pytest.fixture
def frame_png(tmp_path, color_frame) -> Path:
    path = tmp_path / "frame.png"
    Image.fromarray(color_frame.pixels[..., :3].copy()).save(path)
    return path
