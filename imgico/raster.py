"""
In-memory rasters used by the encoder.

A ``SourceImage`` holds the decoded picture and hands out one ``RasterBuffer``
per requested icon size through ``resize``. Both use 8-bit BGRA pixels, which
is the byte order of 32bpp ARGB on a little-endian machine.
"""
import numpy as np
import cv2 as cv

from imgico.errors import RasterizationFailed
from imgico.logger import get_logger

logger = get_logger()

BYTES_PER_PIXEL = 4


class RasterBuffer:
    """Rectangular grid of BGRA pixels for a single icon size, top row first."""

    def __init__(self, pixels: np.ndarray):
        if pixels.ndim != 3 or pixels.shape[2] != BYTES_PER_PIXEL or pixels.dtype != np.uint8:
            raise ValueError(
                f"Raster must be a (height, width, 4) uint8 array, got shape={pixels.shape}, dtype={pixels.dtype}"
            )
        self.pixels = np.ascontiguousarray(pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def stride(self) -> int:
        """Row pitch in bytes."""
        return self.width * BYTES_PER_PIXEL

    def tobytes(self) -> bytes:
        return self.pixels.tobytes()


class SourceImage:
    """Decoded source picture that can be rasterized at any icon size.

    The pixel array is copied on construction and only read afterwards, so
    a single instance can back any number of encode calls.
    """

    def __init__(self, pixels: np.ndarray):
        if pixels.ndim != 3 or pixels.shape[2] != BYTES_PER_PIXEL or pixels.dtype != np.uint8:
            raise ValueError(
                f"Source image must be a (height, width, 4) uint8 BGRA array, got shape={pixels.shape}, dtype={pixels.dtype}"
            )
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError(f"Source image is empty: shape={pixels.shape}")
        self._pixels = np.array(pixels, dtype=np.uint8, copy=True)

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    def resize(self, width: int, height: int) -> RasterBuffer:
        """Rasterize the image at exactly ``width`` x ``height`` pixels.

        Enlarging along either axis uses bicubic interpolation, otherwise
        area interpolation.

        Raises:
            RasterizationFailed: If the target size is invalid or OpenCV fails.
        """
        if not isinstance(width, int) or not isinstance(height, int) or width < 1 or height < 1:
            raise RasterizationFailed(width, height, "target size must be positive integers")

        if width > self.width or height > self.height:
            interpolation = cv.INTER_CUBIC
        else:
            interpolation = cv.INTER_AREA

        logger.debug(f"Resizing {self.width}x{self.height} -> {width}x{height}")
        try:
            resized = cv.resize(self._pixels, (width, height), interpolation=interpolation)
        except cv.error as e:
            raise RasterizationFailed(width, height, str(e).strip()) from e

        return RasterBuffer(resized)
