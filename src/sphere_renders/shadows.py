"""
Hard shadows for the sphere renderer.

A point sees a light unless a shadow ray toward the light hits some other
sphere. The ray starts a small bias along the surface normal to keep it off
its own surface. If it still hits the sphere it started on, that hit is
floating-point noise and the light counts as visible.
"""
import numpy as np
from sphere_renders import constants
from sphere_renders.rendering import directions_to_light, trace


class ShadowModel:
    """
    Handles shadow ray casting against the scene's spheres.
    """

    def __init__(self, scene, bias=None):
        """
        Args:
            scene: Scene whose spheres can occlude lights
            bias: Offset along the normal for shadow ray origins
        """
        self.scene = scene
        self.bias = bias if bias is not None else constants.SHADOW_BIAS

    def light_visibility(self, hit_points, normals, sphere_index, light, light_dirs=None):
        """
        Vectorized visibility test between surface points and one light.

        Any other sphere along the shadow ray occludes, wherever it lies
        along the ray.

        Args:
            hit_points: (N, 3) shaded surface points
            normals: (N, 3) outward unit normals at those points
            sphere_index: (N,) index of the sphere each point lies on
            light: Light to test
            light_dirs: Optional (N, 3) precomputed unit directions to the light

        Returns:
            (N,) boolean array, True where the light is visible
        """
        if light_dirs is None:
            light_dirs = directions_to_light(hit_points, light)

        shadow_origins = hit_points + normals * self.bias
        shadow_hits = trace(shadow_origins, light_dirs, self.scene)

        occluded = shadow_hits.hit_mask & (shadow_hits.sphere_index != np.asarray(sphere_index))
        return ~occluded
