"""
Exception types raised by the sphere renderer.
"""


class DegenerateVectorError(ValueError):
    """A zero-length (or non-finite) vector was normalized."""
    pass


class SceneError(ValueError):
    """A sphere or light was constructed with invalid parameters."""
    pass


class ImageWriteError(OSError):
    """The rendered image could not be written to disk."""
    pass
