"""
Scene description: spheres, point lights and the collection that owns them.

Everything here is immutable once constructed. Vectors are stored as float
tuples so the objects stay hashable; the array properties hand out NumPy
copies for the vectorized tracer.
"""
import math
from dataclasses import dataclass, field
import numpy as np
from sphere_renders import constants
from sphere_renders.errors import SceneError
from sphere_renders.intersections import intersect_sphere, sphere_normals


def _as_triple(value, name):
    try:
        triple = tuple(float(c) for c in value)
    except (TypeError, ValueError) as exc:
        raise SceneError(f"{name} must be a sequence of 3 numbers, got {value!r}") from exc
    if len(triple) != 3:
        raise SceneError(f"{name} must have 3 components, got {len(triple)}")
    if not all(math.isfinite(c) for c in triple):
        raise SceneError(f"{name} must be finite, got {triple}")
    return triple


@dataclass(frozen=True)
class Sphere:
    """
    Diffuse sphere.

    Attributes:
        center: (x, y, z) center point
        radius: Positive radius
        color: Albedo color, RGB channels in [0, 1]
        albedo: Fraction of incident light diffusely reflected, in [0, 1]
    """
    center: tuple
    radius: float
    color: tuple
    albedo: float

    def __post_init__(self):
        object.__setattr__(self, "center", _as_triple(self.center, "center"))
        object.__setattr__(self, "color", _as_triple(self.color, "color"))
        if not (math.isfinite(self.radius) and self.radius > 0):
            raise SceneError(f"radius must be positive and finite, got {self.radius}")
        if not 0.0 <= self.albedo <= 1.0:
            raise SceneError(f"albedo must be in [0, 1], got {self.albedo}")
        object.__setattr__(self, "radius", float(self.radius))
        object.__setattr__(self, "albedo", float(self.albedo))

    def intersect(self, origin, direction):
        """
        Intersect a single ray with this sphere.

        Returns:
            tuple: (hit, t0, t1); t0 and t1 are inf on a miss
        """
        t0, t1, hit = intersect_sphere(origin, np.asarray(direction, dtype=float),
                                       self.center, self.radius)
        return hit, float(t0), float(t1)

    def normal_at(self, point):
        """Unit outward normal at a point on (or very near) the surface."""
        return sphere_normals(point, self.center)


@dataclass(frozen=True)
class Light:
    """
    Point light.

    Attributes:
        position: (x, y, z) light position
        color: RGB light color
        intensity: Non-negative scalar intensity
    """
    position: tuple
    color: tuple = (1.0, 1.0, 1.0)
    intensity: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "position", _as_triple(self.position, "position"))
        object.__setattr__(self, "color", _as_triple(self.color, "color"))
        if not (math.isfinite(self.intensity) and self.intensity >= 0):
            raise SceneError(f"intensity must be non-negative and finite, got {self.intensity}")
        object.__setattr__(self, "intensity", float(self.intensity))


@dataclass(frozen=True)
class Scene:
    """Ordered spheres and lights. Sphere order breaks nearest-hit ties."""
    spheres: tuple = field(default_factory=tuple)
    lights: tuple = field(default_factory=tuple)

    def __post_init__(self):
        spheres = tuple(self.spheres)
        lights = tuple(self.lights)
        for sphere in spheres:
            if not isinstance(sphere, Sphere):
                raise SceneError(f"Expected Sphere, got {type(sphere).__name__}")
        for light in lights:
            if not isinstance(light, Light):
                raise SceneError(f"Expected Light, got {type(light).__name__}")
        object.__setattr__(self, "spheres", spheres)
        object.__setattr__(self, "lights", lights)

    @property
    def centers(self):
        """(M, 3) sphere centers."""
        return np.array([s.center for s in self.spheres], dtype=float).reshape(-1, 3)

    @property
    def radii(self):
        """(M,) sphere radii."""
        return np.array([s.radius for s in self.spheres], dtype=float)

    @property
    def colors(self):
        """(M, 3) sphere albedo colors."""
        return np.array([s.color for s in self.spheres], dtype=float).reshape(-1, 3)

    @property
    def albedos(self):
        """(M,) sphere albedo scalars."""
        return np.array([s.albedo for s in self.spheres], dtype=float)


def default_scene():
    """The fixed three-sphere, two-light scene."""
    spheres = [Sphere(center, radius, color, albedo)
               for center, radius, color, albedo in constants.DEFAULT_SPHERES]
    lights = [Light(position, color, intensity)
              for position, color, intensity in constants.DEFAULT_LIGHTS]
    return Scene(spheres, lights)
