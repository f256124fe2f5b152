"""
Pytest fixtures and configuration for sphere renderer tests.

This module provides shared fixtures and utilities to reduce test code duplication
and improve test organization.
"""

import numpy as np
import pytest
from sphere_renders.core import Renderer
from sphere_renders.scene import Light, Scene, Sphere, default_scene


@pytest.fixture
def renderer():
    """Create a standard renderer instance (default scene) for tests."""
    return Renderer()


@pytest.fixture
def scene():
    """The built-in three-sphere, two-light scene."""
    return default_scene()


@pytest.fixture
def origin():
    """Standard ray origin at the camera position."""
    return np.array([0.0, 0.0, 0.0])


@pytest.fixture
def standard_rays():
    """Common ray directions used in multiple tests."""
    return {
        'forward': np.array([0.0, 0.0, -1.0]),  # Straight at the red sphere
        'up': np.array([0.0, 1.0, 0.0]),        # Misses everything
        'back': np.array([0.0, 0.0, 1.0]),      # Away from the scene
        'left': np.array([-7.0, 0.0, -30.0]) / np.linalg.norm([-7.0, 0.0, -30.0]),  # Green sphere
        'right': np.array([7.0, 0.0, -30.0]) / np.linalg.norm([7.0, 0.0, -30.0]),   # Blue sphere
    }


@pytest.fixture
def white_sphere():
    """Unit white sphere at z = -10 with full albedo."""
    return Sphere((0.0, 0.0, -10.0), 1.0, (1.0, 1.0, 1.0), 1.0)


@pytest.fixture
def dark_scene(scene):
    """The default spheres with no lights at all."""
    return Scene(scene.spheres, [])


def make_scene(spheres, lights=()):
    """Build a Scene from (center, radius, color, albedo) and (position, color, intensity) tuples."""
    return Scene([Sphere(*s) for s in spheres], [Light(*l) for l in lights])


def assert_color_close(actual, expected, rtol=1e-6, atol=1e-6, err_msg=""):
    """Assert that two colors are close, with helpful error messages."""
    np.testing.assert_allclose(
        actual, expected, rtol=rtol, atol=atol,
        err_msg=f"Color mismatch: {err_msg}"
    )


def assert_color_in_range(color, min_val=0.0, max_val=1.0, err_msg=""):
    """Assert that all color components are within valid range."""
    assert np.all(color >= min_val), f"Color below minimum {min_val}: {color} - {err_msg}"
    assert np.all(color <= max_val), f"Color above maximum {max_val}: {color} - {err_msg}"
