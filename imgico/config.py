"""
Constants shared by the encoder, the loader and the command line.
"""
from pathlib import Path

# Sizes offered for selection, smallest first
STANDARD_SIZES = [(16, 16), (32, 32), (48, 48), (64, 64), (128, 128), (256, 256)]

# Sizes selected when the caller does not choose any
DEFAULT_SIZES = [(16, 16), (32, 32), (48, 48)]

MIN_ICON_SIZE = 1
MAX_ICON_SIZE = 256

SUPPORTED_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.bmp', '.gif', '.tiff')

DEFAULT_OUTPUT_NAME = 'converted_icon.ico'

LOG_DIRECTORY = Path.home() / '.imgico' / 'logs'
