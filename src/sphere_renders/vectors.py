"""
Vector algebra for the sphere renderer.

Vectors are plain NumPy float arrays: a single vector has shape (3,) and a
batch of N vectors has shape (N, 3). Every function here works along the last
axis, so the same call serves one ray or a whole image's worth of rays. The
same arrays double as points, directions and RGB colors.
"""

import numpy as np
from sphere_renders.errors import DegenerateVectorError


def vec3(x, y, z):
    """Build a single (3,) float vector."""
    return np.array([x, y, z], dtype=float)


def as_vectors(v):
    """
    Coerce input to a float array of 3-vectors.

    Args:
        v: Sequence or array with a trailing dimension of size 3

    Returns:
        Float array with the same leading shape
    """
    arr = np.asarray(v, dtype=float)
    if arr.shape[-1:] != (3,):
        raise ValueError(f"Expected vector(s) with a trailing axis of 3, got shape {arr.shape}")
    return arr


def dot(a, b):
    """Dot product along the last axis (scalar for single vectors)."""
    return np.sum(np.asarray(a) * np.asarray(b), axis=-1)


def cross(a, b):
    """Right-handed cross product along the last axis."""
    return np.cross(a, b)


def length(v):
    """Euclidean norm along the last axis."""
    return np.sqrt(dot(v, v))


def normalize(v):
    """
    Scale vector(s) to unit length.

    Returns a new array; the input is left untouched.

    Args:
        v: (3,) vector or (N, 3) batch

    Returns:
        Unit vector(s) of the same shape

    Raises:
        DegenerateVectorError: if any vector has zero or non-finite length
    """
    v = as_vectors(v)
    norm = length(v)
    bad = ~np.isfinite(norm) | (norm == 0.0)
    if np.any(bad):
        count = int(np.count_nonzero(bad))
        raise DegenerateVectorError(f"Cannot normalize {count} zero-length or non-finite vector(s)")
    return v / np.expand_dims(norm, axis=-1)
