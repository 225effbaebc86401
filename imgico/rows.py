"""
Row order inversion for bitmap pixel buffers.
"""
import numpy as np

from imgico.errors import InvalidArgument


def reverse_rows(buffer: bytes, height: int, stride: int) -> bytes:
    """Invert the row order of a row-major pixel buffer.

    Rows are moved as whole units of ``stride`` bytes, padding included, so
    the pixel layout inside a row is never touched. Applying the function
    twice with the same geometry returns the original buffer.

    Args:
        buffer (bytes): ``height`` rows of ``stride`` bytes, top row first.
        height (int): Number of rows.
        stride (int): Row pitch in bytes.

    Returns:
        bytes: Buffer of the same length with the bottom row first.

    Raises:
        InvalidArgument: If ``height * stride`` does not equal the buffer length.
    """
    if height < 0 or stride < 0:
        raise InvalidArgument(f"Row geometry must be non-negative, got height={height}, stride={stride}")
    if height * stride != len(buffer):
        raise InvalidArgument(
            f"Buffer length {len(buffer)} does not match {height} rows of {stride} bytes"
        )

    rows = np.frombuffer(buffer, dtype=np.uint8).reshape(height, stride)
    return rows[::-1].tobytes()
