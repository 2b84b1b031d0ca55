"""
FCS TEXT segment parser.

The TEXT segment starts with a delimiter byte, followed by keyword/value
pairs separated by that delimiter:

    /$BEGINANALYSIS/0/$BEGINDATA/1792/.../$TOT/5000/

Keywords defined by the standard start with "$".
"""

import logging
from enum import Enum
from typing import BinaryIO, Dict, Iterable, Optional

from fcsdecode.constants import DEFAULT_ENCODING
from fcsdecode.errors import InvalidMetadataError
from fcsdecode.formats.fcs3.header import Header, read_header
from fcsdecode.utils.stream import read_byte, read_exact
from fcsdecode.utils.validation import validate_text

LOGGER = logging.getLogger(__name__)


class ScanState(Enum):
    """Keyword scanner states."""

    AWAITING_KEYWORD = "awaiting_keyword"
    AWAITING_VALUE = "awaiting_value"


class KeywordScanner:
    """
    Builds the keyword dictionary from delimiter-split tokens.

    A "$" token opens a keyword. Following non-"$" tokens are joined and
    bound to it, so a value that was cut in two by a stray delimiter is
    glued back together. A keyword directly followed by another keyword
    is dropped.

    Example:
        scanner = KeywordScanner()
        scanner.feed(["$PAR", "2", "$TOT", "100"])
        scanner.keywords  # {"$PAR": "2", "$TOT": "100"}
    """

    def __init__(self):
        self.state = ScanState.AWAITING_KEYWORD
        self.keywords: Dict[str, str] = {}
        self._keyword: Optional[str] = None
        self._value = ""

    def feed(self, tokens: Iterable[str]) -> Dict[str, str]:
        """Consume tokens in order and return the keyword dictionary."""
        for token in tokens:
            self.push(token)
        return self.keywords

    def push(self, token: str) -> None:
        """Consume a single token."""
        if token.startswith("$"):
            self._keyword = token
            self._value = ""
            self.state = ScanState.AWAITING_VALUE
        elif self.state is ScanState.AWAITING_VALUE:
            # Value tokens keep extending the open keyword
            self._value += token
            self.keywords[self._keyword] = self._value
        else:
            LOGGER.debug("Ignoring token before first keyword: %r", token)


def read_text(stream: BinaryIO, header: Header, encoding: str = DEFAULT_ENCODING) -> Dict[str, str]:
    """
    Read the TEXT segment located by the header.

    Args:
        stream: Seekable binary stream of the whole file
        header: Parsed header
        encoding: Text encoding of the segment

    Returns:
        Keyword/value dictionary (not validated)

    Raises:
        InvalidMetadataError: If the segment range is empty or not decodable
        TruncatedFileError: If the file ends inside the segment
    """
    start, end = header.text_offsets
    if end <= start:
        raise InvalidMetadataError(f"empty TEXT segment {start}..{end}")

    stream.seek(start)
    delimiter = chr(read_byte(stream))
    payload = read_exact(stream, end - start - 1)

    try:
        text = payload.decode(encoding)
    except UnicodeDecodeError as err:
        raise InvalidMetadataError(f"TEXT segment is not valid {encoding}") from err

    keywords = KeywordScanner().feed(text.split(delimiter))
    LOGGER.debug("Read %d keywords with delimiter %r", len(keywords), delimiter)
    return keywords


def read_metadata(stream: BinaryIO, encoding: str = DEFAULT_ENCODING) -> Dict[str, str]:
    """
    Read the header and TEXT segment and validate the keywords.

    The stream must be positioned at the start of the file.

    Raises:
        FcsError: On any header, text or validation failure
    """
    header = read_header(stream)
    metadata = read_text(stream, header, encoding=encoding)
    validate_text(metadata)
    return metadata
