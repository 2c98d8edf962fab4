import numpy as np
import pytest

from camera_evolution.catalog import ERA_CATALOG, get_era
from camera_evolution.effects import (
    ERA_EFFECTS,
    ColorNoise,
    Dust,
    Grain,
    HotSpot,
    Scratches,
    apply_effects,
    passes_for,
)
from camera_evolution.frames import PixelBuffer


def _changed(before, after):
    return np.any(before != after, axis=2)


def test_every_era_has_a_pass_list():
    for era in ERA_CATALOG:
        assert era.id in ERA_EFFECTS


def test_modern_compositor_is_identity(gray_buffer):
    before = gray_buffer.pixels.copy()
    apply_effects(gray_buffer, get_era('modern'))
    np.testing.assert_array_equal(gray_buffer.pixels, before)


def test_early_film_and_noir_share_film_damage():
    assert passes_for(get_era('early-film')) == passes_for(get_era('noir'))
    kinds = [type(p) for p in passes_for(get_era('noir'))]
    assert kinds == [Grain, Scratches, Dust]


def test_empty_buffer_is_skipped():
    buffer = PixelBuffer.empty()
    apply_effects(buffer, get_era('early-film'))
    assert buffer.is_empty


def test_daguerreotype_center_differs_from_corners(gray_buffer):
    apply_effects(gray_buffer, get_era('daguerreotype'))
    pixels = gray_buffer.pixels
    center = pixels[100, 100]
    for corner in (pixels[0, 0], pixels[0, -1], pixels[-1, 0], pixels[-1, -1]):
        assert not np.array_equal(center, corner)
        assert corner[3] < center[3]


def test_grain_statistics(white_buffer):
    before = white_buffer.pixels.copy()
    Grain().apply(white_buffer, np.random.default_rng(3))
    after = white_buffer.pixels

    changed = _changed(before, after)
    # Most of the 24000 dots land on distinct pixels and are visible.
    assert 22000 < changed.sum() <= 24000
    # Only darkening, never below the 0.12 opacity floor of a single dot
    # by much (overlaps can stack).
    assert np.all(after[..., :3] <= before[..., :3])
    assert after[..., 0].min() >= 255 * (1 - 0.12) ** 3 - 1


def test_grain_reproducible_with_seed_only(white_buffer):
    first, second, other = white_buffer.copy(), white_buffer.copy(), white_buffer.copy()
    Grain().apply(first, np.random.default_rng(11))
    Grain().apply(second, np.random.default_rng(11))
    Grain().apply(other, np.random.default_rng(12))
    np.testing.assert_array_equal(first.pixels, second.pixels)
    assert not np.array_equal(first.pixels, other.pixels)


def test_scratches_are_thin_vertical_lines():
    pixels = np.zeros((300, 400, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    buffer = PixelBuffer(pixels)
    Scratches().apply(buffer, np.random.default_rng(5))
    changed = _changed(pixels, buffer.pixels)
    # At most 8 lines, 2 px wide each, on every row.
    assert changed.sum(axis=1).max() <= 16
    assert changed.sum() > 0
    # Lines brighten.
    assert np.all(buffer.pixels[..., 0] >= pixels[..., 0])


def test_dust_is_small_and_sparse():
    pixels = np.zeros((300, 400, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    buffer = PixelBuffer(pixels)
    Dust().apply(buffer, np.random.default_rng(9))
    changed = _changed(pixels, buffer.pixels)
    assert changed.sum() <= 15 * 8 * 8


def test_color_noise_touches_at_most_count_pixels(white_buffer):
    before = white_buffer.pixels.copy()
    ColorNoise().apply(white_buffer, np.random.default_rng(2))
    changed = _changed(before, white_buffer.pixels)
    assert 0 < changed.sum() <= 3000


def test_hot_spot_position_depends_on_rng():
    def brightest(seed):
        pixels = np.zeros((120, 200, 4), dtype=np.uint8)
        pixels[..., 3] = 255
        buffer = PixelBuffer(pixels)
        HotSpot(0.05, 0.4, ((0.0, (255, 255, 255, 0.2)), (1.0, (255, 255, 255, 0.0)))).apply(
            buffer, np.random.default_rng(seed))
        return buffer.pixels[..., 0]

    first, second = brightest(1), brightest(2)
    assert first.max() > 0
    assert not np.array_equal(first, second)


@pytest.mark.parametrize("era_id", ['sepia', 'kodachrome', 'polaroid', 'smartphone-hdr'])
def test_deterministic_eras_repeat_exactly(era_id, gray_buffer):
    first, second = gray_buffer.copy(), gray_buffer.copy()
    apply_effects(first, get_era(era_id), rng=np.random.default_rng(1))
    apply_effects(second, get_era(era_id), rng=np.random.default_rng(2))
    np.testing.assert_array_equal(first.pixels, second.pixels)
    assert not np.array_equal(first.pixels, gray_buffer.pixels)


@pytest.mark.parametrize("seed", range(12))
def test_hot_spot_stays_inside_its_ranges(seed):
    spot = passes_for(get_era('wet-plate'))[0]
    assert isinstance(spot, HotSpot)
    height, width = 120, 200
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    buffer = PixelBuffer(pixels)
    spot.apply(buffer, np.random.default_rng(seed))

    # The gradient is flat inside the inner radius; its centroid is the spot.
    red = buffer.pixels[..., 0]
    rows, cols = np.nonzero(red == red.max())
    cx, cy = cols.mean() + 0.5, rows.mean() + 0.5
    assert width * spot.x_range[0] - 1.5 <= cx <= width * spot.x_range[1] + 1.5
    assert height * spot.y_range[0] - 1.5 <= cy <= height * spot.y_range[1] + 1.5
