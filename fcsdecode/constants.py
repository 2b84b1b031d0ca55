"""
FCS format constants.

HEADER layout (58 bytes, ASCII):
    Offset  Size    Description
    0       6       Version ("FCS3.0" or "FCS3.1")
    6       4       Spaces
    10      8       TEXT segment start
    18      8       TEXT segment end
    26      8       DATA segment start
    34      8       DATA segment end
    42      8       ANALYSIS segment start (may be blank)
    50      8       ANALYSIS segment end (may be blank)
"""

from typing import Tuple

HEADER_SIZE = 58

VALID_FCS_VERSIONS: Tuple[str, ...] = ("FCS3.0", "FCS3.1")

DEFAULT_ENCODING = "utf-8"

# Column slices for the header fields
VERSION_FIELD = slice(0, 6)
OFFSET_FIELDS = {
    "text_start": slice(10, 18),
    "text_end": slice(18, 26),
    "data_start": slice(26, 34),
    "data_end": slice(34, 42),
    "analysis_start": slice(42, 50),
    "analysis_end": slice(50, 58),
}

# Required keywords. The first 12 are plain keywords; the last 4 are templates
# where "n" is replaced by the parameter index (1..$PAR).
REQUIRED_KEYWORDS: Tuple[str, ...] = (
    "$BEGINANALYSIS",  # Byte offset of the ANALYSIS segment
    "$BEGINDATA",  # Byte offset of the DATA segment
    "$BEGINSTEXT",  # Byte offset of a supplemental TEXT segment
    "$BYTEORD",  # Byte order of the acquisition computer
    "$DATATYPE",  # Type of values in DATA (A, I, F, D)
    "$ENDANALYSIS",  # Last byte of the ANALYSIS segment
    "$ENDDATA",  # Last byte of the DATA segment
    "$ENDSTEXT",  # Last byte of a supplemental TEXT segment
    "$MODE",  # L (list) or C/U (histogram, deprecated)
    "$NEXTDATA",  # Offset of the next data set in the file
    "$PAR",  # Number of parameters per event
    "$TOT",  # Total number of events
    "$PnB",  # Bits reserved for parameter n
    "$PnE",  # Amplification type for parameter n
    "$PnN",  # Short name of parameter n
    "$PnR",  # Range of parameter n
)

NON_INDEXED_KEYWORDS = REQUIRED_KEYWORDS[:12]
INDEXED_KEYWORDS = REQUIRED_KEYWORDS[12:]

LIST_MODE = "L"

# Keywords shown in the sample summary, with their display label
SUMMARY_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("Machine", "$CYT"),
    ("Begin Time", "$BTIM"),
    ("End Time", "$ETIM"),
    ("Date", "$DATE"),
    ("File", "$FIL"),
    ("Volume run", "$VOL"),
)
