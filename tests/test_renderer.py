import numpy as np
import pytest
from sphere_renders import constants
from sphere_renders.core import Renderer, camera_rays
from sphere_renders.image import ImageBuffer
from sphere_renders.scene import default_scene
from conftest import assert_color_close, assert_color_in_range


def reference_direction(i, j, width, height, fov):
    """Per-pixel camera direction, computed one pixel at a time."""
    scale = np.tan(np.pi * 0.5 * fov / 180.0)
    aspect_ratio = width / float(height)
    x = (2 * ((i + 0.5) / width) - 1) * scale * aspect_ratio
    y = (1 - 2 * ((j + 0.5) / height)) * scale
    d = np.array([x, y, -1.0])
    return d / np.linalg.norm(d)


def test_camera_rays_shape_and_unit_length():
    dirs = camera_rays(8, 6, 30.0)
    assert dirs.shape == (48, 3)
    np.testing.assert_allclose(np.linalg.norm(dirs, axis=1), 1.0)
    assert np.all(dirs[:, 2] < 0), "Camera looks down -Z"


def test_camera_rays_orientation():
    width, height = 8, 6
    dirs = camera_rays(width, height, 30.0).reshape(height, width, 3)
    # Top row points up, left column points left
    assert np.all(dirs[0, :, 1] > 0)
    assert np.all(dirs[-1, :, 1] < 0)
    assert np.all(dirs[:, 0, 0] < 0)
    assert np.all(dirs[:, -1, 0] > 0)


def test_camera_rays_match_per_pixel_mapping():
    width, height, fov = 5, 4, 30.0
    dirs = camera_rays(width, height, fov)
    for j in range(height):
        for i in range(width):
            np.testing.assert_allclose(dirs[j * width + i],
                                       reference_direction(i, j, width, height, fov))


def test_camera_rays_square_ninety_degrees():
    dirs = camera_rays(2, 2, 90.0)
    np.testing.assert_allclose(dirs[0], np.array([-0.5, 0.5, -1.0]) / np.sqrt(1.5))


def test_odd_image_center_ray_is_forward():
    dirs = camera_rays(3, 3, 60.0)
    np.testing.assert_allclose(dirs[4], [0.0, 0.0, -1.0], atol=1e-12)


def test_default_configuration(renderer):
    assert renderer.scene == default_scene()
    np.testing.assert_array_equal(renderer.camera_origin, [0.0, 0.0, 0.0])
    np.testing.assert_array_equal(renderer.background, constants.BACKGROUND_COLOR)
    assert renderer.shadow_model.bias == constants.SHADOW_BIAS


def test_center_pixel_of_default_scene(renderer, origin, standard_rays):
    """
    The forward ray hits the red sphere at (0, 0, -28) with normal +Z.
    Light 1 grazes that point (cos = 0) and light 2 is behind it, so it is black.
    """
    hits = renderer.hit_selector.select_primary(origin, standard_rays['forward'])
    assert hits.distance[0] == pytest.approx(28.0)
    np.testing.assert_allclose(hits.hit_point[0], [0.0, 0.0, -28.0], atol=1e-12)
    np.testing.assert_allclose(renderer.scene.spheres[0].normal_at(hits.hit_point[0]), [0.0, 0.0, 1.0])

    color = renderer.get_color(origin, standard_rays['forward'])
    assert_color_close(color, [0.0, 0.0, 0.0])


def test_green_sphere_is_lit(renderer, origin, standard_rays):
    color = renderer.get_color(origin, standard_rays['left'])
    assert np.all(np.isfinite(color))
    assert color[1] > color[0] > 0.0


def test_get_color_single_vs_batch(renderer, origin, standard_rays):
    for direction in standard_rays.values():
        single = renderer.get_color(origin, direction)
        batch = renderer.get_color(origin, direction[None, :])[0]
        np.testing.assert_allclose(single, batch, rtol=1e-12, atol=1e-12)


def test_render_returns_image_buffer(renderer):
    image = renderer.render(width=32, height=24)
    assert isinstance(image, ImageBuffer)
    assert (image.width, image.height) == (32, 24)
    assert image.shape == (24, 32, 3)


def test_render_matches_per_pixel_shading(renderer, origin):
    width, height, fov = 32, 24, 30.0
    image = renderer.render(width=width, height=height, fov=fov)
    for i, j in [(0, 0), (16, 12), (10, 12), (22, 11), (31, 23)]:
        expected = renderer.get_color(origin, reference_direction(i, j, width, height, fov))
        np.testing.assert_allclose(image.get_pixel(i, j), expected, rtol=1e-9, atol=1e-12)


def test_background_corner_quantizes_to_127(renderer):
    image = renderer.render(width=32, height=24)
    np.testing.assert_array_equal(image.get_pixel(0, 0), [0.5, 0.5, 0.5])
    np.testing.assert_array_equal(image.to_rgb8()[0, 0], [127, 127, 127])


def test_zero_lights_image_is_black_or_gray(dark_scene):
    image = Renderer(dark_scene).render(width=32, height=24)
    pixels = image.to_array().reshape(-1, 3)

    is_black = np.all(pixels == 0.0, axis=1)
    is_gray = np.all(pixels == 0.5, axis=1)
    assert np.all(is_black | is_gray)
    assert np.any(is_black) and np.any(is_gray)
    np.testing.assert_array_equal(image.get_pixel(16, 12), [0.0, 0.0, 0.0])


def test_rendered_colors_stay_in_range_after_quantization(renderer):
    rgb = renderer.render(width=40, height=30).to_rgb8()
    assert rgb.dtype == np.uint8
    assert_color_in_range(rgb, 0, 255)


def test_render_without_shadows_is_never_darker(renderer):
    shadowed = renderer.render(width=40, height=30).to_array()
    unshadowed = renderer.render(width=40, height=30, use_shadows=False).to_array()
    assert np.all(unshadowed >= shadowed - 1e-12)


@pytest.mark.parametrize("kwargs", [
    {"width": 0},
    {"height": -2},
    {"fov": 0.0},
    {"fov": 180.0},
])
def test_render_rejects_invalid_parameters(renderer, kwargs):
    with pytest.raises(ValueError):
        renderer.render(**kwargs)


def test_render_buffers_are_independent(renderer):
    first = renderer.render(width=16, height=12)
    first.set_pixel(0, 0, [9.0, 9.0, 9.0])
    second = renderer.render(width=16, height=12)
    np.testing.assert_array_equal(second.get_pixel(0, 0), [0.5, 0.5, 0.5])


def test_save_writes_ppm(renderer, tmp_path):
    path = renderer.save(tmp_path / "scene.ppm", width=8, height=6)
    data = path.read_bytes()
    header = b"P6\n8 6\n255\n"
    assert data.startswith(header)
    assert len(data) == len(header) + 8 * 6 * 3


if __name__ == "__main__":
    pytest.main([__file__])
