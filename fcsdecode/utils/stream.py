"""
Helpers for reading from seekable binary streams.
"""

import io
from typing import BinaryIO, Optional

from fcsdecode.errors import TruncatedFileError


def remaining_bytes(stream: BinaryIO) -> Optional[int]:
    """
    Count the bytes between the current position and the end of the stream.

    Returns None for streams that cannot seek. The position is left
    unchanged.
    """
    if not stream.seekable():
        return None
    position = stream.tell()
    end = stream.seek(0, io.SEEK_END)
    stream.seek(position)
    return max(0, end - position)


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """
    Read exactly ``size`` bytes from ``stream``.

    On seekable streams the size is checked against what is left before
    reading, so a bogus length never allocates a buffer for it.

    Args:
        stream: Binary file-like object
        size: Number of bytes wanted

    Returns:
        The bytes read

    Raises:
        TruncatedFileError: If the stream ends early
    """
    available = remaining_bytes(stream)
    if available is not None and available < size:
        raise TruncatedFileError(size, available)

    data = stream.read(size)
    if len(data) != size:
        raise TruncatedFileError(size, len(data))
    return data


def read_byte(stream: BinaryIO) -> int:
    """Read a single byte and return it as an int."""
    return read_exact(stream, 1)[0]
