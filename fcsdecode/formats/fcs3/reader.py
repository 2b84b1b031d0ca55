"""
FCS 3.0/3.1 file reader.

Runs header, TEXT and DATA decoding over a file handle and returns a
FlowSample.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Dict, Union

from fcsdecode.constants import DEFAULT_ENCODING, VALID_FCS_VERSIONS
from fcsdecode.formats.fcs3 import header as header_segment
from fcsdecode.formats.fcs3.data import parse_data
from fcsdecode.formats.fcs3.header import Header
from fcsdecode.formats.fcs3.text import read_text
from fcsdecode.models.sample import FlowSample
from fcsdecode.utils.validation import validate_text

LOGGER = logging.getLogger(__name__)


class FcsFile:
    """
    An open FCS file.

    Each FcsFile owns its stream position, so separate handles on the same
    path can be read independently.

    Example:
        with FcsFile.open("sample.fcs") as fcs:
            sample = fcs.read()
        print(sample.data["FSC-H"].head())
    """

    def __init__(self, stream: BinaryIO, encoding: str = DEFAULT_ENCODING):
        self._stream = stream
        self.encoding = encoding
        self.name = getattr(stream, "name", "<stream>")

    @classmethod
    def open(cls, filepath: Union[str, Path], encoding: str = DEFAULT_ENCODING) -> "FcsFile":
        """
        Open an FCS file in read-only binary mode.

        Args:
            filepath: Path to .fcs file
            encoding: Text encoding of the TEXT segment

        Raises:
            FileNotFoundError: If the file does not exist
        """
        return cls(open(Path(filepath), "rb"), encoding)

    @classmethod
    def from_file(cls, stream: BinaryIO, encoding: str = DEFAULT_ENCODING) -> "FcsFile":
        """Wrap an already open, seekable binary stream."""
        return cls(stream, encoding)

    def read_header(self) -> Header:
        """Read only the header segment."""
        self._stream.seek(0)
        return header_segment.read_header(self._stream)

    def read_metadata(self) -> Dict[str, str]:
        """Read and validate the TEXT segment keywords."""
        header = self.read_header()
        metadata = read_text(self._stream, header, encoding=self.encoding)
        validate_text(metadata)
        return metadata

    def read(self) -> FlowSample:
        """
        Decode the whole file.

        Returns:
            FlowSample with events and keywords

        Raises:
            FcsError: On any decoding failure
            OSError: On read or seek failures
        """
        header = self.read_header()
        metadata = read_text(self._stream, header, encoding=self.encoding)
        validate_text(metadata)
        sample = parse_data(self._stream, metadata, header=header)
        LOGGER.debug(
            "Read %s: %d events x %d parameters", self.name, sample.n_events, sample.n_parameters
        )
        return sample

    def close(self) -> None:
        self._stream.close()

    @property
    def closed(self) -> bool:
        return self._stream.closed

    def __enter__(self) -> "FcsFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @classmethod
    def can_read(cls, filepath: Union[str, Path]) -> bool:
        """
        Check if a file starts with a supported FCS version string.

        Args:
            filepath: Path to check

        Returns:
            True if the file looks like FCS 3.0 or 3.1
        """
        filepath = Path(filepath)

        if not filepath.is_file():
            return False

        with open(filepath, "rb") as f:
            magic = f.read(6)

        return magic.decode("ascii", errors="replace") in VALID_FCS_VERSIONS


def read_fcs(filepath: Union[str, Path], encoding: str = DEFAULT_ENCODING) -> FlowSample:
    """
    Read an FCS file and return a FlowSample.

    Args:
        filepath: Path to .fcs file
        encoding: Text encoding of the TEXT segment

    Returns:
        Decoded FlowSample
    """
    with FcsFile.open(filepath, encoding=encoding) as fcs:
        return fcs.read()
