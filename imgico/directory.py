"""
ICO header and directory records.

Writing is used by the assembler; the parsing half lets callers inspect the
directory of a produced file without a full image decoder.
"""
import struct
from typing import List, NamedTuple

from imgico.errors import InvalidArgument

# reserved, type, image count
ICO_HEADER = struct.Struct('<HHH')
assert ICO_HEADER.size == 6

# width, height, color count, reserved, planes, bit count, data length, offset
DIRECTORY_ENTRY = struct.Struct('<BBBBHHII')
assert DIRECTORY_ENTRY.size == 16

ICO_TYPE_ICON = 1
ICO_TYPE_CURSOR = 2


class IconDirEntry(NamedTuple):
    """Parsed directory record. Width and height are actual pixel counts."""
    width: int
    height: int
    color_count: int
    planes: int
    bit_count: int
    size: int
    offset: int


def _dimension_byte(value: int) -> int:
    # 256 does not fit in a byte; 0 stands for it
    return 0 if value == 256 else value


def build_ico_header(count: int) -> bytes:
    """Pack the 6-byte file header of an icon holding ``count`` images."""
    return ICO_HEADER.pack(0, ICO_TYPE_ICON, count)


def build_directory_entry(width: int, height: int, data_length: int, offset: int) -> bytes:
    """Pack the 16-byte directory record of one 32-bit image.

    Args:
        width (int): Image width, 1 to 256.
        height (int): Image height, 1 to 256.
        data_length (int): Length of the image's DIB blob in bytes.
        offset (int): Absolute position of the DIB blob in the file.

    Returns:
        bytes: The packed record.
    """
    return DIRECTORY_ENTRY.pack(
        _dimension_byte(width),
        _dimension_byte(height),
        0,
        0,
        1,
        32,
        data_length,
        offset,
    )


def read_ico_header(data: bytes):
    """Unpack the file header.

    Returns:
        tuple: ``(reserved, type, count)``.

    Raises:
        InvalidArgument: If the data is too short or is not an icon or cursor.
    """
    if len(data) < ICO_HEADER.size:
        raise InvalidArgument(f"ICO data too short for header: {len(data)} bytes")
    reserved, kind, count = ICO_HEADER.unpack_from(data, 0)
    if reserved != 0 or kind not in (ICO_TYPE_ICON, ICO_TYPE_CURSOR):
        raise InvalidArgument(f"Not an ICO file: reserved={reserved}, type={kind}")
    return reserved, kind, count


def read_ico_directory(data: bytes) -> List[IconDirEntry]:
    """Parse all directory records of an ICO file, in file order.

    Raises:
        InvalidArgument: If the header is invalid, the directory is truncated,
            or an entry points outside the data.
    """
    _, _, count = read_ico_header(data)
    end_of_directory = ICO_HEADER.size + DIRECTORY_ENTRY.size * count
    if len(data) < end_of_directory:
        raise InvalidArgument(f"ICO directory truncated: need {end_of_directory} bytes, got {len(data)}")

    entries = []
    for i in range(count):
        width, height, color_count, _, planes, bit_count, size, offset = DIRECTORY_ENTRY.unpack_from(
            data, ICO_HEADER.size + DIRECTORY_ENTRY.size * i)
        if offset + size > len(data):
            raise InvalidArgument(f"Entry {i} points past end of data: offset={offset}, size={size}")
        entries.append(IconDirEntry(width or 256, height or 256, color_count, planes, bit_count, size, offset))
    return entries
