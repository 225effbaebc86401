"""
Conversion of a raster into the device-independent bitmap stored in an ICO entry.
"""
import struct

from imgico.raster import RasterBuffer
from imgico.rows import reverse_rows
from imgico.logger import get_logger

logger = get_logger()

# BITMAPINFOHEADER: size, width, height, planes, bit count, compression,
# image size, x/y pixels per meter, colors used, colors important
BITMAP_INFO_HEADER = struct.Struct('<iiiHHiiiiii')
assert BITMAP_INFO_HEADER.size == 40

BIT_COUNT = 32
PLANES = 1
BI_RGB = 0


def build_bitmap_info_header(width: int, height: int, image_size: int) -> bytes:
    """Pack the 40-byte header of an icon bitmap.

    The height field holds twice the image height, the ICO convention for
    a color image combined with its (here alpha-derived) AND mask.

    Args:
        width (int): Image width in pixels.
        height (int): Image height in pixels.
        image_size (int): Length of the pixel data in bytes.

    Returns:
        bytes: The packed header.
    """
    return BITMAP_INFO_HEADER.pack(
        BITMAP_INFO_HEADER.size,
        width,
        height * 2,
        PLANES,
        BIT_COUNT,
        BI_RGB,
        image_size,
        0, 0,
        0, 0,
    )


def build_dib(raster: RasterBuffer) -> bytes:
    """Build the DIB blob for one icon size.

    Args:
        raster (RasterBuffer): BGRA pixels, top row first.

    Returns:
        bytes: Header followed by the pixel rows bottom row first,
            ``40 + width * height * 4`` bytes long.
    """
    pixel_data = reverse_rows(raster.tobytes(), raster.height, raster.stride)
    header = build_bitmap_info_header(raster.width, raster.height, len(pixel_data))
    logger.debug(f"Built DIB {raster.width}x{raster.height}: {len(header) + len(pixel_data)} bytes")
    return header + pixel_data
