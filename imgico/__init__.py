"""
imgico - Multi-resolution Windows ICO encoder

Converts a raster image into an ICO file holding one 32-bit bitmap per
requested size.
"""

__version__ = "0.1.0"

from imgico.errors import IcoError, InvalidArgument, RasterizationFailed
from imgico.raster import RasterBuffer, SourceImage
from imgico.rows import reverse_rows
from imgico.dib import build_dib, build_bitmap_info_header
from imgico.directory import build_directory_entry, read_ico_directory, IconDirEntry
from imgico.ico import create_ico, expected_ico_length
from imgico.io import import_image, import_image_bytes, save_ico, convert_image_to_ico
