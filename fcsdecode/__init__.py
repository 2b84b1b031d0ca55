"""
fcsdecode - Reader for Flow Cytometry Standard (FCS 3.0/3.1) files.

This library provides tools to:
- Parse the HEADER, TEXT and DATA segments of list mode FCS files
- Validate the required TEXT keywords
- Load events into a pandas DataFrame together with the keywords

Example usage:
    from fcsdecode import FcsFile

    with FcsFile.open("sample.fcs") as fcs:
        sample = fcs.read()

    print(sample)
    print(sample.data.describe())
"""

__version__ = "0.1.0"

from fcsdecode.constants import REQUIRED_KEYWORDS, VALID_FCS_VERSIONS
from fcsdecode.errors import (
    FcsError,
    InvalidDataError,
    InvalidHeaderError,
    InvalidMetadataError,
    MissingKeywordError,
    ShapeMismatchError,
    TruncatedFileError,
    UnsupportedVersionError,
)
from fcsdecode.formats.fcs3.header import Header, read_header
from fcsdecode.formats.fcs3.text import read_metadata
from fcsdecode.formats.fcs3.data import create_dataframe, parse_data, read_events
from fcsdecode.formats.fcs3.reader import FcsFile, read_fcs
from fcsdecode.models.sample import FlowSample
from fcsdecode.utils.validation import validate_text

__all__ = [
    "REQUIRED_KEYWORDS",
    "VALID_FCS_VERSIONS",
    "FcsError",
    "InvalidDataError",
    "InvalidHeaderError",
    "InvalidMetadataError",
    "MissingKeywordError",
    "ShapeMismatchError",
    "TruncatedFileError",
    "UnsupportedVersionError",
    "Header",
    "read_header",
    "read_metadata",
    "validate_text",
    "create_dataframe",
    "parse_data",
    "read_events",
    "FcsFile",
    "read_fcs",
    "FlowSample",
]
