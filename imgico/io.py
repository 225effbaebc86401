import numpy as np
import cv2 as cv
from pathlib import Path
from typing import Optional, Union, Iterable
from imgico.config import DEFAULT_SIZES
from imgico.errors import InvalidArgument
from imgico.ico import create_ico
from imgico.raster import SourceImage
from imgico.logger import get_logger

logger = get_logger()

def to_bgra(image: np.ndarray) -> np.ndarray:
    """Convert a decoded OpenCV image to 8-bit BGRA.

    Supports:
    - 8-bit, 16-bit and float images (floats are min/max normalized)
    - Grayscale, grayscale with alpha, BGR and BGRA layouts

    Args:
        image (np.ndarray): Image as returned by ``cv.imread(..., cv.IMREAD_UNCHANGED)``.

    Returns:
        np.ndarray: (height, width, 4) uint8 array.

    Raises:
        ValueError: If the channel layout is not supported.
    """
    original_dtype = image.dtype

    # Step 1: Bring the bit depth to 0-255
    if image.dtype == np.uint8:
        image_uint8 = image
    elif image.dtype == np.uint16:
        image_uint8 = np.clip(image.astype(np.float32) / 65535.0 * 255.0, 0, 255).astype(np.uint8)
        logger.debug("Converted 16-bit image to 8-bit range")
    elif image.dtype == np.float32 or image.dtype == np.float64:
        image_min = image.min()
        image_max = image.max()
        if image_max > image_min:
            image_uint8 = np.clip((image - image_min) / (image_max - image_min) * 255.0, 0, 255).astype(np.uint8)
        else:
            image_uint8 = np.zeros(image.shape, dtype=np.uint8)
        logger.debug(f"Converted float image: min={image_min}, max={image_max}")
    else:
        image_uint8 = np.clip(image, 0, 255).astype(np.uint8)
        logger.warning(f"Unknown dtype {original_dtype}, attempting direct conversion")

    # Step 2: Expand to four channels
    if image_uint8.ndim == 3 and image_uint8.shape[2] == 1:
        image_uint8 = image_uint8[:, :, 0]

    if image_uint8.ndim == 2:
        return cv.cvtColor(image_uint8, cv.COLOR_GRAY2BGRA)
    if image_uint8.ndim != 3:
        raise ValueError(f"Unsupported image shape {image.shape}")

    channels = image_uint8.shape[2]
    if channels == 2:
        # Grayscale + alpha
        bgra = cv.cvtColor(np.ascontiguousarray(image_uint8[:, :, 0]), cv.COLOR_GRAY2BGRA)
        bgra[:, :, 3] = image_uint8[:, :, 1]
        return bgra
    if channels == 3:
        return cv.cvtColor(image_uint8, cv.COLOR_BGR2BGRA)
    if channels == 4:
        return np.ascontiguousarray(image_uint8)
    raise ValueError(f"Unsupported channel count {channels}")

def import_image(path: Union[str, Path]) -> SourceImage:
    """Import an image file as an icon source.

    Args:
        path (Union[str, Path]): Path to the image (PNG, JPEG, BMP, GIF, TIFF...).

    Returns:
        SourceImage: The decoded image in BGRA.

    Raises:
        FileNotFoundError: If the image file cannot be loaded.
    """
    logger.debug(f"Importing image: {path}")

    # Read image with IMREAD_UNCHANGED to preserve alpha and bit depth
    image = cv.imread(str(path), cv.IMREAD_UNCHANGED)
    if image is None:
        raise FileNotFoundError(f"Failed to load image: {path}")

    logger.debug(f"Original image: dtype={image.dtype}, shape={image.shape}")
    source = SourceImage(to_bgra(image))
    logger.info(f"Image imported: {path} ({source.width}x{source.height})")
    return source

def import_image_bytes(data: bytes) -> SourceImage:
    """Import an encoded image held in memory.

    Raises:
        InvalidArgument: If the bytes cannot be decoded.
    """
    buffer = np.frombuffer(data, dtype=np.uint8)
    image = cv.imdecode(buffer, cv.IMREAD_UNCHANGED) if buffer.size else None
    if image is None:
        raise InvalidArgument(f"Failed to decode image data ({len(data)} bytes)")
    logger.debug(f"Decoded image bytes: dtype={image.dtype}, shape={image.shape}")
    return SourceImage(to_bgra(image))

def save_ico(data: bytes, path: Union[str, Path]) -> Path:
    """Write ICO bytes to ``path``, creating parent directories.

    Returns:
        Path: The written path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    logger.info(f"ICO saved: {path} ({len(data)} bytes)")
    return path

def convert_image_to_ico(image_path: Union[str, Path],
                         ico_path: Optional[Union[str, Path]] = None,
                         sizes: Optional[Iterable] = None) -> bytes:
    """Load an image, encode it as ICO and optionally save it.

    Args:
        image_path (Union[str, Path]): Source image file.
        ico_path (Optional[Union[str, Path]]): Destination; nothing is written if None.
        sizes (Optional[Iterable]): Requested sizes. Defaults to ``DEFAULT_SIZES``.

    Returns:
        bytes: The ICO file.
    """
    if sizes is None:
        sizes = DEFAULT_SIZES

    source = import_image(image_path)
    data = create_ico(source, sizes)
    if ico_path is not None:
        save_ico(data, ico_path)
    return data
