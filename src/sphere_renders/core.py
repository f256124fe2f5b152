import functools
import numpy as np
from sphere_renders import constants
from sphere_renders.image import ImageBuffer, write_ppm
from sphere_renders.rendering import HitSelector, MaterialSystem
from sphere_renders.scene import default_scene
from sphere_renders.shadows import ShadowModel
from sphere_renders.vectors import normalize


def camera_rays(width, height, fov):
    """
    Unit camera ray directions for a pinhole camera looking down -Z.

    Pixel centers are mapped to the image plane at z = -1, scaled by
    tan(fov / 2) vertically and additionally by the aspect ratio
    horizontally. Row 0 is the top of the image.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        fov: Vertical field of view in degrees

    Returns:
        (height * width, 3) array of directions in row-major pixel order
    """
    aspect_ratio = width / float(height)
    scale = np.tan(np.deg2rad(fov * 0.5))

    x = (2.0 * ((np.arange(width) + 0.5) / width) - 1.0) * scale * aspect_ratio
    y = (1.0 - 2.0 * ((np.arange(height) + 0.5) / height)) * scale
    px, py = np.meshgrid(x, y)

    directions = np.stack([px, py, -np.ones_like(px)], axis=-1)
    return normalize(directions.reshape(-1, 3))


class Renderer:
    def __init__(self, scene=None, background=None, shadow_bias=None):
        """
        Initialize the renderer for a fixed scene.

        Coordinate System:
        - Camera at the origin (0,0,0), looking down -Z.
        - +Y up, +X right.

        Args:
            scene: Scene to render; the built-in three-sphere scene if None
            background: RGB color for rays that miss every sphere
            shadow_bias: Normal offset for shadow ray origins
        """
        self.scene = scene if scene is not None else default_scene()
        self.camera_origin = np.array(constants.CAMERA_ORIGIN, dtype=float)

        self.shadow_model = ShadowModel(self.scene, shadow_bias)
        self.hit_selector = HitSelector(self.scene)
        self.material_system = MaterialSystem(self.scene, self.shadow_model, background)

    @property
    def background(self):
        return self.material_system.background

    def get_color(self, ray_origin, ray_directions, use_shadows=True):
        """
        Calculate the color for each ray.
        vectorized for N rays. Colors are not clamped.
        """
        ray_directions = np.asarray(ray_directions, dtype=float)
        is_single = ray_directions.ndim == 1
        if is_single:
            ray_directions = ray_directions[None, :]

        hits = self.hit_selector.select_primary(ray_origin, ray_directions)
        colors = self.material_system.get_surface_color(hits, use_shadows=use_shadows)

        return colors[0] if is_single else colors

    @functools.lru_cache(maxsize=32)
    def _render_cached(self, width, height, fov, use_shadows):
        """
        Internal cached render call using hashable arguments.
        """
        ray_dirs = camera_rays(width, height, fov)
        colors = self.get_color(self.camera_origin, ray_dirs, use_shadows)
        return colors.reshape(height, width, 3)

    def render(self, width=constants.DEFAULT_WIDTH, height=constants.DEFAULT_HEIGHT,
               fov=constants.DEFAULT_FOV_DEGREES, use_shadows=True):
        """
        Render the scene into a new ImageBuffer, one camera ray per pixel.
        """
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        if not 0.0 < fov < 180.0:
            raise ValueError(f"fov must be in (0, 180) degrees, got {fov}")

        pixels = self._render_cached(int(width), int(height), float(fov), bool(use_shadows))
        return ImageBuffer(int(width), int(height), pixels)

    def save(self, path=constants.DEFAULT_OUTPUT, **render_kwargs):
        """
        Render and write a PPM file.

        Raises:
            ImageWriteError: if the file cannot be written
        """
        return write_ppm(self.render(**render_kwargs), path)
