"""
Re-decoding of produced ICO files for previews and inspection.

Directory parsing is done locally so that entry order is preserved exactly;
pixel decoding goes through Pillow's ICO reader, the same kind of standard
reader the files are meant for.
"""
import io
from typing import Dict, List, Tuple

from PIL import Image, UnidentifiedImageError

from imgico.directory import read_ico_directory, read_ico_header
from imgico.errors import InvalidArgument
from imgico.logger import get_logger

logger = get_logger()

__all__ = ['read_ico_header', 'read_ico_directory', 'decode_ico', 'load_preview', 'describe_ico']


def _open_ico(data: bytes) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(data), formats=['ICO'])
    except (UnidentifiedImageError, SyntaxError, OSError) as e:
        raise InvalidArgument(f"Could not decode ICO data: {e}") from e
    return image


def decode_ico(data: bytes) -> Dict[Tuple[int, int], Image.Image]:
    """Decode every image size stored in an ICO file.

    Args:
        data (bytes): ICO file contents.

    Returns:
        dict: RGBA Pillow images keyed by (width, height). Entries that
            repeat a size share one key, so the dict can hold fewer
            images than the directory; use ``read_ico_directory`` to see
            every entry.

    Raises:
        InvalidArgument: If Pillow cannot read the data.
    """
    with _open_ico(data) as image:
        images = {}
        for size in image.ico.sizes():
            decoded = image.ico.getimage(size)
            if decoded.mode != 'RGBA':
                decoded = decoded.convert('RGBA')
            images[size] = decoded
    logger.debug(f"Decoded ICO sizes: {sorted(images)}")
    return images


def load_preview(data: bytes) -> Image.Image:
    """Return the largest image of an ICO file, as a preview would show it."""
    images = decode_ico(data)
    size = max(images, key=lambda s: (s[0] * s[1], s))
    return images[size]


def describe_ico(data: bytes) -> List[str]:
    """One readable line per directory entry, in file order."""
    _, kind, count = read_ico_header(data)
    lines = [f"{'icon' if kind == 1 else 'cursor'}, {count} image(s), {len(data)} bytes"]
    for i, entry in enumerate(read_ico_directory(data)):
        lines.append(
            f"  #{i}: {entry.width}x{entry.height} {entry.bit_count}-bit, "
            f"{entry.size} bytes at offset {entry.offset}"
        )
    return lines
