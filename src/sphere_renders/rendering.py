"""
Data structures and interfaces for the sphere rendering pipeline.
"""
from dataclasses import dataclass
import numpy as np
from sphere_renders import constants
from sphere_renders.intersections import intersect_sphere, sphere_normals
from sphere_renders.vectors import dot, normalize


@dataclass
class HitResult:
    """
    Result of ray intersection calculations.

    Attributes:
        distance: Ray parameter of the nearest hit (N,) shape, inf on a miss
        sphere_index: Index into Scene.spheres (N,) shape, -1 on a miss
        hit_point: 3D coordinates of hit point (N, 3) shape, NaN on a miss
    """
    distance: np.ndarray  # (N,) shape
    sphere_index: np.ndarray  # (N,) int
    hit_point: np.ndarray  # (N, 3) shape

    def __post_init__(self):
        """Validate array shapes."""
        if self.distance.ndim != 1:
            raise ValueError(f"distance must be 1D array, got shape {self.distance.shape}")
        if self.sphere_index.ndim != 1:
            raise ValueError(f"sphere_index must be 1D array, got shape {self.sphere_index.shape}")
        if self.hit_point.ndim != 2 or self.hit_point.shape[1] != 3:
            raise ValueError(f"hit_point must be (N,3) array, got shape {self.hit_point.shape}")

        n_rays = self.distance.shape[0]
        if self.sphere_index.shape[0] != n_rays:
            raise ValueError(f"sphere_index shape {self.sphere_index.shape} doesn't match distance shape {self.distance.shape}")
        if self.hit_point.shape[0] != n_rays:
            raise ValueError(f"hit_point shape {self.hit_point.shape} doesn't match distance shape {self.distance.shape}")

    @property
    def hit_mask(self):
        """(N,) True where the ray hit a sphere."""
        return self.sphere_index >= 0


def trace(ray_origins, ray_directions, scene):
    """
    Find the nearest sphere along each ray.

    Every sphere is tested against every ray. A sphere replaces the current
    best only when its t0 is strictly smaller, so on an exact tie the sphere
    listed first in the scene wins.

    Args:
        ray_origins: (3,) shared origin or (N, 3) per-ray origins
        ray_directions: (3,) or (N, 3) ray directions
        scene: Scene to trace against

    Returns:
        HitResult with one entry per ray
    """
    ray_directions = np.asarray(ray_directions, dtype=float)
    if ray_directions.ndim == 1:
        ray_directions = ray_directions[None, :]

    n_rays = ray_directions.shape[0]
    ray_origins = np.broadcast_to(np.asarray(ray_origins, dtype=float), ray_directions.shape)

    t_near = np.full(n_rays, np.inf)
    sphere_index = np.full(n_rays, -1, dtype=int)

    for i, sphere in enumerate(scene.spheres):
        t0, _, hit = intersect_sphere(ray_origins, ray_directions, sphere.center, sphere.radius)
        closer = hit & (t0 < t_near)
        t_near[closer] = t0[closer]
        sphere_index[closer] = i

    hit_points = np.full((n_rays, 3), np.nan)
    valid_hits = sphere_index >= 0
    if np.any(valid_hits):
        hit_points[valid_hits] = (ray_origins[valid_hits] +
                                  t_near[valid_hits, None] * ray_directions[valid_hits])

    return HitResult(distance=t_near, sphere_index=sphere_index, hit_point=hit_points)


class HitSelector:
    """
    Responsible for determining which sphere each camera ray hits first.
    """

    def __init__(self, scene):
        """
        Args:
            scene: Scene whose spheres are traced
        """
        self.scene = scene

    def select_primary(self, ray_origin: np.ndarray, ray_directions: np.ndarray) -> HitResult:
        """
        Find the primary intersection for each ray.

        Args:
            ray_origin: (3,) origin point (typically the camera position)
            ray_directions: (N, 3) array of ray directions

        Returns:
            HitResult with primary intersections for all rays
        """
        return trace(ray_origin, ray_directions, self.scene)


def directions_to_light(points, light):
    """Unit directions from each point toward a light's position."""
    return normalize(np.asarray(light.position, dtype=float) - points)


class MaterialSystem:
    """
    Responsible for turning hit results into colors.

    Each hit point sums a Lambertian term from every light it can see:
    color * max(cos_theta, 0) * intensity * albedo / pi. Rays that hit
    nothing take the flat background color. Values are left unclamped.
    """

    def __init__(self, scene, shadow_model, background=None):
        """
        Args:
            scene: Scene providing sphere materials and lights
            shadow_model: ShadowModel used for light visibility
            background: RGB color for rays that miss every sphere
        """
        self.scene = scene
        self.shadow_model = shadow_model
        bg = background if background is not None else constants.BACKGROUND_COLOR
        self.background = np.asarray(bg, dtype=float)

    def get_surface_color(self, hits: HitResult, use_shadows: bool = True) -> np.ndarray:
        """
        Calculate colors for all rays in a hit result.

        Args:
            hits: HitResult from tracing
            use_shadows: Whether to test each light for occlusion

        Returns:
            (N, 3) array of RGB colors
        """
        n_rays = hits.distance.shape[0]
        colors = np.tile(self.background, (n_rays, 1))

        hit_mask = hits.hit_mask
        if not np.any(hit_mask):
            return colors

        idx = hits.sphere_index[hit_mask]
        points = hits.hit_point[hit_mask]
        normals = sphere_normals(points, self.scene.centers[idx])
        albedo_colors = self.scene.colors[idx]
        albedos = self.scene.albedos[idx]

        radiance = np.zeros((points.shape[0], 3))
        for light in self.scene.lights:
            light_dirs = directions_to_light(points, light)

            lit = np.ones(points.shape[0], dtype=bool)
            if use_shadows:
                lit = self.shadow_model.light_visibility(points, normals, idx, light, light_dirs)

            cos_theta = np.maximum(dot(light_dirs, normals), 0.0)
            weight = cos_theta * (light.intensity * albedos / np.pi)
            radiance[lit] += albedo_colors[lit] * weight[lit, None]

        colors[hit_mask] = radiance
        return colors
