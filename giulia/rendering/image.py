"""
Fixed-size RGB image buffer.

The buffer owns one contiguous row-major uint8 array of width * height
RGB triples. It is created once at known dimensions, written pixel by
pixel during a render, and never resized.
"""

import numpy as np
from typing import Callable, Optional, Union
import logging

from PIL import Image

from .pixel import Pixel

logger = logging.getLogger(__name__)

PixelLike = Union[Pixel, tuple]


class ImageBuffer:
    """Row-major RGB pixel buffer with bounds-checked access."""

    def __init__(self, width: int, height: int):
        """
        Initialize an all-black image buffer.

        Args:
            width, height: Image resolution in pixels
        """
        if width <= 0 or height <= 0:
            raise ValueError("Width and height must be positive")

        self._width = int(width)
        self._height = int(height)
        self._data = np.zeros((self._width * self._height, 3), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> int:
        """Total number of pixels."""
        return self._width * self._height

    @property
    def data(self) -> np.ndarray:
        """Raw (size, 3) uint8 array backing the buffer."""
        return self._data

    def __len__(self) -> int:
        return self.size

    def _check_index(self, i: int) -> int:
        i = int(i)
        if i < 0 or i >= self.size:
            raise IndexError(f"Pixel index {i} out of range for {self._width}x{self._height} image")
        return i

    def _linear_index(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Pixel ({x}, {y}) out of range for {self._width}x{self._height} image")
        return self._width * int(y) + int(x)

    def get_pixel(self, i: int, j: Optional[int] = None) -> Pixel:
        """
        Get a pixel by linear index or by (x, y) position.

        Args:
            i: Linear index, or column when j is given
            j: Optional row

        Returns:
            Pixel at that position
        """
        index = self._check_index(i) if j is None else self._linear_index(i, j)
        r, g, b = self._data[index]
        return Pixel(int(r), int(g), int(b))

    def set_pixel(self, x: int, y: int, pixel: PixelLike) -> None:
        """Set the pixel at column x, row y."""
        self._data[self._linear_index(x, y)] = tuple(Pixel(*pixel))

    def __getitem__(self, i: int) -> Pixel:
        return self.get_pixel(i)

    def __setitem__(self, i: int, pixel: PixelLike) -> None:
        self._data[self._check_index(i)] = tuple(Pixel(*pixel))

    def write_rows(self, row_start: int, rows: np.ndarray) -> None:
        """
        Copy a block of complete rows into the buffer.

        Args:
            row_start: First row to overwrite
            rows: uint8 array of shape (n_rows * width, 3)
        """
        n_pixels = rows.shape[0]
        if n_pixels % self._width != 0:
            raise ValueError("Row block must contain whole rows")
        start = row_start * self._width
        if row_start < 0 or start + n_pixels > self.size:
            raise IndexError(f"Rows {row_start}..{row_start + n_pixels // self._width} out of range")
        self._data[start:start + n_pixels] = rows

    def contains(self, x: float, y: float) -> bool:
        """True when (x, y) lies in the normalized canvas [0, 1] x [0, 1]."""
        return 0.0 <= x <= 1.0 and 0.0 <= y <= 1.0

    def index_of(self, x: float, y: float) -> int:
        """
        Map normalized plane coordinates in [0, 1] x [0, 1] to a linear index.

        The vertical axis is flipped so that increasing y moves up the image.
        Coordinates on the upper and right borders land on the last row/column.

        Raises:
            IndexError: (x, y) lies outside the canvas
        """
        if not self.contains(x, y):
            raise IndexError(f"Plane point ({x}, {y}) outside the [0, 1] x [0, 1] canvas")
        col = min(int(self._width * x), self._width - 1)
        row = min(int(self._height * (1 - y)), self._height - 1)
        return self._width * row + col

    def overwrite(self, x: float, y: float, pixel: PixelLike) -> None:
        """Set the pixel at normalized plane coordinates (x, y); off-canvas points are skipped."""
        if not self.contains(x, y):
            return
        self._data[self.index_of(x, y)] = tuple(Pixel(*pixel))

    def apply(self, *functions: Callable[[Pixel], Pixel]) -> None:
        """Replace every pixel p with f(p), applying functions in order."""
        for i in range(self.size):
            p = self.get_pixel(i)
            for f in functions:
                p = f(p)
            self._data[i] = p.to_tuple()

    def fill(self, pixel: PixelLike) -> None:
        self._data[:] = tuple(Pixel(*pixel))

    def to_array(self) -> np.ndarray:
        """View of the buffer as a (height, width, 3) array."""
        return self._data.reshape(self._height, self._width, 3)

    def to_image(self) -> Image.Image:
        """Hand the buffer to Pillow as an RGB image for encoding."""
        return Image.fromarray(np.ascontiguousarray(self.to_array()))

    def copy(self) -> 'ImageBuffer':
        other = ImageBuffer(self._width, self._height)
        other._data[:] = self._data
        return other

    def __repr__(self) -> str:
        return f"ImageBuffer(width={self._width}, height={self._height})"
