"""
Ray-sphere intersection for the sphere renderer.

The solver is vectorized over rays: pass a single (3,) direction or an (N, 3)
batch. Origins may be one shared (3,) point or one point per ray.
"""
import numpy as np
from sphere_renders.vectors import normalize


def intersect_sphere(ray_origins, ray_directions, center, radius):
    """
    Vectorized geometric intersection of rays with one sphere.

    Projects the origin-to-center vector onto each ray to get the
    closest-approach parameter tca, rejects rays whose perpendicular distance
    to the center exceeds the radius, then steps back and forth along the ray
    by the half-chord thc. Rays are parameterized as origin + t * direction,
    so t is in units of the direction's length.

    Negative-t policy: when the near hit is behind the origin, the far hit
    takes its place (a ray starting inside the sphere reports its exit
    point). When both are behind, the ray misses.

    Args:
        ray_origins: (3,) shared origin or (N, 3) per-ray origins
        ray_directions: (3,) single direction or (N, 3) array of directions
        center: (3,) sphere center
        radius: Sphere radius

    Returns:
        tuple: (t0, t1, hit_mask). t0 <= t1 where hit, inf elsewhere.
        Scalars for a single ray, (N,) arrays for a batch.
    """
    ray_directions = np.asarray(ray_directions, dtype=float)
    is_single = ray_directions.ndim == 1
    if is_single:
        ray_directions = ray_directions[None, :]

    n_rays = ray_directions.shape[0]
    ray_origins = np.broadcast_to(np.asarray(ray_origins, dtype=float), ray_directions.shape)

    L = np.asarray(center, dtype=float) - ray_origins
    # |D|^2 keeps t in ray-parameter units for non-unit directions
    a = np.sum(ray_directions**2, axis=1)
    proj = np.sum(L * ray_directions, axis=1)

    t0 = np.full(n_rays, np.inf)
    t1 = np.full(n_rays, np.inf)
    hit_mask = np.zeros(n_rays, dtype=bool)
    valid = a > 1e-12

    if np.any(valid):
        a_v = a[valid]
        tca = proj[valid] / a_v
        # Squared perpendicular distance from center to the line
        d2 = np.sum(L[valid]**2, axis=1) - proj[valid]**2 / a_v
        radius2 = radius * radius

        reached = d2 <= radius2
        thc = np.sqrt(np.where(reached, radius2 - d2, 0.0) / a_v)
        near = tca - thc
        far = tca + thc

        # Near hit behind the origin: fall back to the far hit
        near = np.where(near < 0, far, near)
        ahead = reached & (near >= 0)

        sub_t0 = np.full(near.shape, np.inf)
        sub_t1 = np.full(far.shape, np.inf)
        sub_t0[ahead] = near[ahead]
        sub_t1[ahead] = far[ahead]

        t0[valid] = sub_t0
        t1[valid] = sub_t1
        hit_mask[valid] = ahead

    if is_single:
        return t0[0], t1[0], bool(hit_mask[0])
    return t0, t1, hit_mask


def sphere_normals(points, centers):
    """
    Unit outward normals for points on sphere surfaces.

    No check is made that the points actually lie on the surface.

    Args:
        points: (3,) point or (N, 3) points
        centers: Matching (3,) or (N, 3) sphere centers

    Returns:
        Normals with the same shape as points
    """
    return normalize(np.asarray(points, dtype=float) - np.asarray(centers, dtype=float))
