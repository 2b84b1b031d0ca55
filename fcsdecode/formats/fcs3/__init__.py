"""FCS 3.0/3.1 segment parsers and file reader."""

from fcsdecode.formats.fcs3.header import Header, SegmentRange, read_header
from fcsdecode.formats.fcs3.text import KeywordScanner, read_metadata, read_text
from fcsdecode.formats.fcs3.data import ByteOrder, create_dataframe, parse_data, read_events
from fcsdecode.formats.fcs3.reader import FcsFile, read_fcs

__all__ = [
    "Header",
    "SegmentRange",
    "read_header",
    "KeywordScanner",
    "read_metadata",
    "read_text",
    "ByteOrder",
    "create_dataframe",
    "parse_data",
    "read_events",
    "FcsFile",
    "read_fcs",
]
