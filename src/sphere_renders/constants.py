"""
Default camera, image and scene configuration for the sphere renderer.
"""

# Image / Camera
DEFAULT_WIDTH = 640
DEFAULT_HEIGHT = 480
DEFAULT_FOV_DEGREES = 30.0  # vertical field of view
CAMERA_ORIGIN = (0.0, 0.0, 0.0)

# Output
DEFAULT_OUTPUT = "shading.ppm"
MAX_CHANNEL_VALUE = 255

# Shading
BACKGROUND_COLOR = (0.5, 0.5, 0.5)  # Flat mid-gray
SHADOW_BIAS = 1e-3  # Offset along the normal for shadow ray origins

# Default Scene
# (center, radius, color, albedo)
DEFAULT_SPHERES = [
    ((0.0, 0.0, -30.0), 2.0, (1.00, 0.32, 0.36), 0.7),  # Red
    ((-7.0, 0.0, -30.0), 2.0, (0.31, 1.00, 0.36), 0.7),  # Green
    ((7.0, 0.0, -30.0), 2.0, (0.36, 0.32, 1.00), 0.7),  # Blue
]

# (position, color, intensity)
DEFAULT_LIGHTS = [
    ((-3.0, -0.5, -28.0), (1.0, 1.0, 1.0), 1.0),
    ((11.0, 2.0, -29.5), (1.0, 1.0, 1.0), 1.0),
]
