"""
Pixel buffer and PPM output for the sphere renderer.
"""
import os
import numpy as np
import PIL.Image
from sphere_renders import constants
from sphere_renders.errors import ImageWriteError


class ImageBuffer:
    """
    Owned, row-major RGB float buffer.

    Pixels are addressed as (i, j) = (column, row) with row 0 at the top of
    the image. Colors are stored unclamped; clamping happens in to_rgb8().
    """

    def __init__(self, width, height, data=None):
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        if data is None:
            self._data = np.zeros((self.height, self.width, 3))
        else:
            data = np.array(data, dtype=float)
            if data.shape != (self.height, self.width, 3):
                raise ValueError(f"data must have shape {(self.height, self.width, 3)}, got {data.shape}")
            self._data = data

    @classmethod
    def from_colors(cls, colors, width, height):
        """Build a buffer from a flat (width*height, 3) row-major color array."""
        colors = np.asarray(colors, dtype=float)
        return cls(width, height, colors.reshape(height, width, 3))

    @property
    def shape(self):
        return self._data.shape

    def _check(self, i, j):
        if not (0 <= i < self.width and 0 <= j < self.height):
            raise IndexError(f"Pixel ({i}, {j}) outside {self.width}x{self.height} image")

    def get_pixel(self, i, j):
        """Color at column i, row j (a copy)."""
        self._check(i, j)
        return self._data[j, i].copy()

    def set_pixel(self, i, j, color):
        """Store a color at column i, row j."""
        self._check(i, j)
        self._data[j, i] = color

    def to_array(self):
        """(height, width, 3) float copy of the buffer."""
        return self._data.copy()

    def to_rgb8(self):
        """
        Quantize to 8-bit RGB.

        Each channel is clamped to [0, 1], scaled by 255 and truncated, so
        0.5 becomes 127.
        """
        clamped = np.clip(self._data, 0.0, 1.0)
        return (clamped * constants.MAX_CHANNEL_VALUE).astype(np.uint8)


def write_ppm(buffer, path):
    """
    Write an ImageBuffer as a binary PPM (P6) file.

    The file holds the header "P6\\n<width> <height>\\n255\\n" followed by
    width * height * 3 bytes of RGB, top row first.

    Args:
        buffer: ImageBuffer to serialize
        path: Destination file path

    Returns:
        The path written

    Raises:
        ImageWriteError: if the file cannot be opened or written
    """
    img = PIL.Image.fromarray(buffer.to_rgb8())
    try:
        with open(path, "wb") as fp:
            img.save(fp, format="PPM")
    except OSError as exc:
        raise ImageWriteError(f"Could not write image to {os.fspath(path)}: {exc}") from exc
    return path
