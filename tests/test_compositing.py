import numpy as np
import pytest

from camera_evolution.compositing import (
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


def _solid(value, alpha=255, size=4):
    pixels = np.full((size, size, 4), value, dtype=np.uint8)
    pixels[..., 3] = alpha
    return pixels


def test_source_over_opaque_color_replaces():
    rgb, alpha = rgba_color(10, 20, 30)
    out = composite(_solid(200), rgb, alpha)
    assert out[0, 0].tolist() == [10, 20, 30, 255]


def test_source_over_half_white_on_black():
    rgb, alpha = rgba_color(255, 255, 255, 0.5)
    out = composite(_solid(0), rgb, alpha, SOURCE_OVER)
    assert abs(int(out[0, 0, 0]) - 128) <= 1
    assert out[0, 0, 3] == 255


def test_source_over_onto_transparent_takes_source_color():
    rgb, alpha = rgba_color(255, 0, 0, 0.5)
    out = composite(_solid(0, alpha=0), rgb, alpha)
    assert out[0, 0, :3].tolist() == [255, 0, 0]
    assert abs(int(out[0, 0, 3]) - 128) <= 1


@pytest.mark.parametrize("mode, color, expected", [
    (MULTIPLY, (255, 255, 255), 200),
    (MULTIPLY, (0, 0, 0), 0),
    (SCREEN, (0, 0, 0), 200),
    (SCREEN, (255, 255, 255), 255),
])
def test_blend_modes_on_opaque_gray(mode, color, expected):
    rgb, alpha = rgba_color(*color)
    out = composite(_solid(200), rgb, alpha, mode)
    assert out[0, 0, 0] == expected


def test_destination_in_scales_alpha_only():
    rgb, alpha = rgba_color(0, 0, 0, 0.5)
    out = composite(_solid(200), rgb, alpha, DESTINATION_IN)
    assert out[0, 0, :3].tolist() == [200, 200, 200]
    assert abs(int(out[0, 0, 3]) - 128) <= 1


def test_composite_does_not_touch_input():
    pixels = _solid(50)
    before = pixels.copy()
    composite(pixels, *rgba_color(255, 255, 255, 0.7))
    np.testing.assert_array_equal(pixels, before)


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        composite(_solid(0), *rgba_color(0, 0, 0), mode='overlay')


def test_draw_image_at_zero_opacity_is_identity():
    pixels = np.random.default_rng(1).integers(0, 256, (8, 8, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    out = draw_image(pixels, _solid(0, size=8), opacity=0.0)
    np.testing.assert_array_equal(out, pixels)


def test_radial_gradient_pads_inside_and_outside():
    stops = ((0.0, (255, 255, 255, 1.0)), (1.0, (0, 0, 0, 0.5)))
    rgb, alpha = radial_gradient(100, 100, (50, 50), 10, 40, stops)
    assert rgb[50, 50].tolist() == [1.0, 1.0, 1.0]
    assert alpha[50, 50] == pytest.approx(1.0)
    assert rgb[0, 0].tolist() == [0.0, 0.0, 0.0]
    assert alpha[0, 0] == pytest.approx(0.5)
    # Halfway between the radii sits between the stops.
    assert 0.3 < rgb[50, 75, 0] < 0.7


def test_stacked_dots_combine_alpha():
    ys = np.array([1, 1, 2])
    xs = np.array([1, 1, 3])
    alphas = np.array([0.5, 0.5, 0.2])
    _, alpha = stacked_dots(4, 4, ys, xs, alphas)
    assert alpha[1, 1] == pytest.approx(0.75)
    assert alpha[2, 3] == pytest.approx(0.2)
    assert alpha[0, 0] == 0.0


def test_stacked_dots_average_colors():
    ys = np.array([0, 0])
    xs = np.array([0, 0])
    colors = np.array([[1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
    rgb, _ = stacked_dots(2, 2, ys, xs, np.array([0.1, 0.1]), colors)
    assert rgb[0, 0].tolist() == pytest.approx([0.5, 0.0, 0.5])


@pytest.mark.parametrize("dx", [1, -1])
def test_shifted_copy_leaves_transparent_column(dx):
    pixels = _solid(255, size=5)
    out = shifted_copy(pixels, dx)
    uncovered = 0 if dx > 0 else -1
    assert np.all(out[:, uncovered, 3] == 0)
    assert np.all(out[:, 2, 3] == 255)


def test_blur_extends_edges_of_uniform_image():
    pixels = _solid(90, size=32)
    out = filtered_copy(pixels, blur=6.0)
    np.testing.assert_array_equal(out, pixels)
