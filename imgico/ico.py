"""
Assembly of multi-resolution ICO files.

The encoder is a pure function of its inputs: it reads the source through its
``resize`` method, never mutates it, and keeps no state between calls.
"""
from numbers import Integral
from typing import Iterable, List, Tuple, Union

import numpy as np

from imgico.config import MIN_ICON_SIZE, MAX_ICON_SIZE
from imgico.dib import build_dib
from imgico.directory import ICO_HEADER, DIRECTORY_ENTRY, build_ico_header, build_directory_entry
from imgico.errors import InvalidArgument, RasterizationFailed
from imgico.raster import RasterBuffer
from imgico.logger import get_logger

logger = get_logger()

SizeLike = Union[int, Tuple[int, int]]

# The image count is a 16-bit header field
MAX_IMAGE_COUNT = 0xFFFF

# Sizes and offsets in the directory are 32-bit
MAX_FILE_LENGTH = 0xFFFFFFFF


def normalize_sizes(sizes: Iterable[SizeLike]) -> List[Tuple[int, int]]:
    """Validate a size request and return it as a list of (width, height).

    Order and duplicates are preserved. A bare integer ``n`` means ``(n, n)``.

    Raises:
        InvalidArgument: If the request is empty or a dimension is not an
            integer between 1 and 256, or the file would outgrow
            32-bit offsets.
    """
    if sizes is None:
        raise InvalidArgument("At least one icon size is required")

    normalized = []
    for size in sizes:
        if isinstance(size, Integral) and not isinstance(size, bool):
            width, height = size, size
        else:
            try:
                width, height = size
            except (TypeError, ValueError):
                raise InvalidArgument(f"Icon size must be an int or a (width, height) pair, got {size!r}") from None

        for value in (width, height):
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise InvalidArgument(f"Icon dimensions must be integers, got {size!r}")
            if not MIN_ICON_SIZE <= value <= MAX_ICON_SIZE:
                raise InvalidArgument(
                    f"Icon dimensions must be between {MIN_ICON_SIZE} and {MAX_ICON_SIZE}, got {size!r}"
                )
        normalized.append((int(width), int(height)))

    if not normalized:
        raise InvalidArgument("At least one icon size is required")
    if len(normalized) > MAX_IMAGE_COUNT:
        raise InvalidArgument(f"An ICO file holds at most {MAX_IMAGE_COUNT} images, got {len(normalized)}")
    total = _ico_length(normalized)
    if total > MAX_FILE_LENGTH:
        raise InvalidArgument(f"ICO file would be {total} bytes, offsets are limited to {MAX_FILE_LENGTH}")
    return normalized


def _ico_length(normalized):
    return (ICO_HEADER.size + DIRECTORY_ENTRY.size * len(normalized)
            + sum(40 + 4 * width * height for width, height in normalized))


def expected_ico_length(sizes: Iterable[SizeLike]) -> int:
    """Byte length of the ICO file ``create_ico`` produces for ``sizes``."""
    return _ico_length(normalize_sizes(sizes))


def _rasterize(source, width: int, height: int) -> RasterBuffer:
    try:
        raster = source.resize(width, height)
    except RasterizationFailed:
        raise
    except Exception as e:
        raise RasterizationFailed(width, height, str(e) or type(e).__name__) from e

    if isinstance(raster, np.ndarray):
        try:
            raster = RasterBuffer(raster)
        except ValueError as e:
            raise RasterizationFailed(width, height, str(e)) from e
    elif not isinstance(raster, RasterBuffer):
        raise RasterizationFailed(width, height, f"resize returned {type(raster).__name__}, expected a raster")

    if (raster.width, raster.height) != (width, height):
        raise RasterizationFailed(width, height, f"resize produced {raster.width}x{raster.height}")
    return raster


def create_ico(source, sizes: Iterable[SizeLike]) -> bytes:
    """Encode ``source`` as an ICO file with one 32-bit image per size.

    Args:
        source: Object with a ``resize(width, height)`` method returning a
            ``RasterBuffer`` (or a ``(height, width, 4)`` uint8 BGRA array),
            typically a ``SourceImage``.
        sizes: Ordered (width, height) pairs, each dimension in 1..256.
            The directory lists images in this order.

    Returns:
        bytes: The complete ICO file.

    Raises:
        InvalidArgument: If ``sizes`` is empty or malformed, or the file
            would not fit 32-bit offsets.
        RasterizationFailed: If the source cannot be rasterized at one of
            the sizes. Nothing is produced in that case.

    Example:
        >>> data = create_ico(import_image('logo.png'), [(16, 16), (32, 32)])
        >>> len(data)
        5238
    """
    try:
        normalized = normalize_sizes(sizes)
    except InvalidArgument as e:
        logger.error(f"ICO creation rejected: {e}")
        raise

    logger.info(f"Creating ICO with {len(normalized)} image(s): {', '.join(f'{w}x{h}' for w, h in normalized)}")

    offset = ICO_HEADER.size + DIRECTORY_ENTRY.size * len(normalized)
    entries = []
    blobs = []
    for width, height in normalized:
        try:
            raster = _rasterize(source, width, height)
        except RasterizationFailed as e:
            logger.error(str(e))
            raise

        blob = build_dib(raster)
        entries.append(build_directory_entry(width, height, len(blob), offset))
        blobs.append(blob)
        logger.debug(f"Entry {width}x{height}: offset={offset}, length={len(blob)}")
        offset += len(blob)

    data = b''.join([build_ico_header(len(normalized))] + entries + blobs)
    logger.info(f"ICO created: {len(data)} bytes")
    return data
