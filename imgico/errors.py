"""
Exception types raised by the ICO encoder.
"""


class IcoError(Exception):
    """Base class for all imgico errors."""


class InvalidArgument(IcoError, ValueError):
    """Raised for an empty or malformed size request, a row buffer whose
    length does not match its geometry, or malformed ICO bytes."""


class RasterizationFailed(IcoError, RuntimeError):
    """Raised when the source image cannot be rasterized at a requested size.

    Attributes:
        width: Requested width in pixels.
        height: Requested height in pixels.
        reason: Short description of what went wrong.
    """

    def __init__(self, width, height, reason):
        self.width = width
        self.height = height
        self.reason = reason
        super().__init__(f"Failed to rasterize {width}x{height}: {reason}")
