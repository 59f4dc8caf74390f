"""Write-once raster of colors.

The raster is the hand-off between the render loop and the output encoder.
It holds exactly width * height colors in row-major order: pixel (col, row)
lives at index ``row * width + col``, row 0 is the top of the image.

Each pixel is written exactly once during a render. A second write to the
same pixel raises RasterError, which catches render loops that overlap or
revisit pixels.

Values are stored unclamped as float64 in a NumPy array of shape
(height, width, 3). Clamping and quantization belong to the encoder.

Example:
    >>> from raycore.core.raster import Raster
    >>> from raycore.core.vector import Color
    >>> raster = Raster(2, 1)
    >>> raster.set_pixel(0, 0, Color(1.0, 0.0, 0.0))
    >>> raster.set_pixel(1, 0, Color(0.0, 1.0, 0.0))
    >>> raster.is_complete
    True
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from raycore.core.vector import Color
from raycore.errors import RasterError


def check_dimensions(width: int, height: int) -> tuple[int, int]:
    """Validate image dimensions and return them as plain ints.

    Raises:
        RasterError: If either dimension is not a positive integer.
    """
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
            raise RasterError(f"Raster {name} must be a positive integer, got {value!r}")
    return int(width), int(height)


class Raster:
    """A width x height grid of colors, written once per pixel.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Create an empty raster.

        Args:
            width: Image width in pixels (positive).
            height: Image height in pixels (positive).

        Raises:
            RasterError: If either dimension is not a positive integer.
        """
        self._width, self._height = check_dimensions(width, height)
        self._data = np.zeros((self._height, self._width, 3), dtype=np.float64)
        self._written = np.zeros((self._height, self._width), dtype=bool)

    @classmethod
    def from_numpy(cls, image: npt.NDArray[np.floating]) -> Raster:
        """Build a complete raster from an (H, W, 3) array.

        Args:
            image: Image array of shape (height, width, 3).

        Returns:
            A raster with every pixel marked as written.

        Raises:
            RasterError: If the array does not have shape (H, W, 3).
        """
        if image.ndim != 3 or image.shape[2] != 3:
            raise RasterError(f"Expected an array of shape (H, W, 3), got {image.shape}")
        height, width = image.shape[:2]
        raster = cls(width, height)
        raster._data[...] = image
        raster._written[...] = True
        return raster

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self._width / self._height

    @property
    def is_complete(self) -> bool:
        """Whether every pixel has been written."""
        return bool(self._written.all())

    @property
    def pixels_written(self) -> int:
        """Number of pixels written so far."""
        return int(self._written.sum())

    def __len__(self) -> int:
        return self._width * self._height

    def index_of(self, col: int, row: int) -> int:
        """Return the row-major index of pixel (col, row)."""
        self._check_bounds(col, row)
        return row * self._width + col

    def coords_of(self, index: int) -> tuple[int, int]:
        """Return the (col, row) of a row-major pixel index."""
        if not 0 <= index < len(self):
            raise RasterError(f"Pixel index {index} out of range for {len(self)} pixels")
        row, col = divmod(index, self._width)
        return col, row

    def set_pixel(self, col: int, row: int, color: Color) -> None:
        """Write a pixel.

        Args:
            col: Column (0 = left).
            row: Row (0 = top).
            color: The color to store.

        Raises:
            RasterError: If the pixel is out of range or was already written.
        """
        self._check_bounds(col, row)
        if self._written[row, col]:
            raise RasterError(f"Pixel ({col}, {row}) was already written")
        self._data[row, col] = (color.r, color.g, color.b)
        self._written[row, col] = True

    def get_pixel(self, col: int, row: int) -> Color:
        """Read a pixel as a Color."""
        self._check_bounds(col, row)
        r, g, b = self._data[row, col]
        return Color(float(r), float(g), float(b))

    def __getitem__(self, index: int) -> Color:
        col, row = self.coords_of(index)
        return self.get_pixel(col, row)

    def to_numpy(self, dtype: npt.DTypeLike = np.float32) -> npt.NDArray[np.floating]:
        """Return a copy of the pixel data as an (H, W, 3) array."""
        return self._data.astype(dtype, copy=True)

    def _check_bounds(self, col: int, row: int) -> None:
        if not (0 <= col < self._width and 0 <= row < self._height):
            raise RasterError(
                f"Pixel ({col}, {row}) out of range for {self._width}x{self._height} raster"
            )

    def __repr__(self) -> str:
        return (
            f"Raster(width={self._width}, height={self._height}, "
            f"written={self.pixels_written}/{len(self)})"
        )
