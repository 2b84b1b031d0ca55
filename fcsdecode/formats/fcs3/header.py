"""
FCS HEADER segment parser.

The header is 58 bytes of ASCII laid out in fixed columns (see
fcsdecode.constants). Offsets are inclusive byte positions from the start
of the file. Offsets are zero when a segment doesn't exist (ANALYSIS only)
or when they don't fit in 8 digits and are written to the TEXT segment
instead.
"""

import logging
from dataclasses import dataclass
from typing import BinaryIO, NamedTuple

from fcsdecode.constants import HEADER_SIZE, OFFSET_FIELDS, VALID_FCS_VERSIONS, VERSION_FIELD
from fcsdecode.errors import InvalidHeaderError, UnsupportedVersionError
from fcsdecode.utils.stream import read_exact
from fcsdecode.utils.validation import parse_unsigned

LOGGER = logging.getLogger(__name__)


class SegmentRange(NamedTuple):
    """Inclusive start/end byte offsets of a segment."""

    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return self.start == 0 and self.end == 0

    @property
    def size(self) -> int:
        """Number of bytes covered, 0 for an absent segment."""
        if self.is_empty:
            return 0
        return self.end - self.start + 1


@dataclass(frozen=True)
class Header:
    """
    Parsed FCS header.

    Example:
        header = Header.parse("FCS3.0         256    1545    1792  202456       0       0")
        header.text_offsets  # SegmentRange(start=256, end=1545)
    """

    version: str
    text_offsets: SegmentRange
    data_offsets: SegmentRange
    analysis_offsets: SegmentRange

    @classmethod
    def parse(cls, header: str) -> "Header":
        """
        Parse the fixed-width header text.

        Args:
            header: At least 58 characters of header text

        Returns:
            Header with its three segment ranges

        Raises:
            InvalidHeaderError: If the text is too short, a field is not
                numeric, or a range ends before it starts
        """
        if len(header) < HEADER_SIZE:
            raise InvalidHeaderError(f"header is {len(header)} characters, expected {HEADER_SIZE}")

        version = header[VERSION_FIELD]
        offsets = {
            name: _parse_offset(header[columns], optional=name.startswith("analysis"))
            for name, columns in OFFSET_FIELDS.items()
        }

        ranges = {}
        for segment in ("text", "data", "analysis"):
            start, end = offsets[f"{segment}_start"], offsets[f"{segment}_end"]
            if start > end:
                raise InvalidHeaderError(f"{segment} segment ends at {end} before it starts at {start}")
            ranges[segment] = SegmentRange(start, end)

        return cls(
            version=version,
            text_offsets=ranges["text"],
            data_offsets=ranges["data"],
            analysis_offsets=ranges["analysis"],
        )

    def render(self) -> str:
        """Format the header back into its fixed-width layout."""
        return "{:<10}{:>8}{:>8}{:>8}{:>8}{:>8}{:>8}".format(
            self.version,
            self.text_offsets.start,
            self.text_offsets.end,
            self.data_offsets.start,
            self.data_offsets.end,
            self.analysis_offsets.start,
            self.analysis_offsets.end,
        )

    def __str__(self) -> str:
        return self.render()


def _parse_offset(field: str, optional: bool = False) -> int:
    """Parse an 8-column offset field; blank optional fields become 0."""
    value = field.lstrip()
    if optional and value == "":
        return 0
    try:
        return parse_unsigned(value)
    except ValueError as err:
        raise InvalidHeaderError(f"bad offset field {field!r}") from err


def read_header(stream: BinaryIO) -> Header:
    """
    Read and validate the header at the current stream position.

    Args:
        stream: Binary stream positioned at the start of an FCS data set

    Returns:
        Parsed Header

    Raises:
        TruncatedFileError: If fewer than 58 bytes are available
        InvalidHeaderError: If the bytes are not a header
        UnsupportedVersionError: If the version is not FCS3.0 or FCS3.1
    """
    raw = read_exact(stream, HEADER_SIZE)
    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError as err:
        raise InvalidHeaderError("header is not ASCII text") from err

    header = Header.parse(text)

    if header.version not in VALID_FCS_VERSIONS:
        raise UnsupportedVersionError(header.version)

    LOGGER.debug(
        "Header %s: text=%s data=%s analysis=%s",
        header.version,
        header.text_offsets,
        header.data_offsets,
        header.analysis_offsets,
    )
    return header
