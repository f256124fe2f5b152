import time
from sphere_renders.core import Renderer


def test_render_caching():
    """
    Verify that subsequent renders with identical parameters are significantly faster.
    """
    renderer = Renderer()

    # First render (uncached)
    start_time = time.time()
    renderer.render(width=200, height=150)
    first_duration = time.time() - start_time

    # Second render (should be cached)
    start_time = time.time()
    renderer.render(width=200, height=150)
    second_duration = time.time() - start_time

    print(f"\nCache performance: First={first_duration:.4f}s, Second={second_duration:.4f}s")

    assert second_duration < first_duration / 5.0, f"Caching failed: {second_duration} is not significantly faster than {first_duration}"


def test_default_resolution_render():
    image = Renderer().render()
    assert (image.width, image.height) == (640, 480)
