"""
FCS DATA segment decoder.

List mode data is stored parameter-major: all $TOT values of parameter 1,
then all values of parameter 2, and so on. Element encoding depends on
$DATATYPE and, for integers, on $PnB:

    $DATATYPE   $PnB    Element
    F           -       4-byte IEEE float
    D           -       8-byte IEEE float
    I           16      2-byte unsigned int
    I           32      4-byte unsigned int
    I           64      8-byte unsigned int
    I           128     16-byte unsigned int

$BYTEORD selects little ("1,2,3,4") or big ("4,3,2,1") endian.
"""

import logging
from enum import Enum
from typing import BinaryIO, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from fcsdecode.constants import LIST_MODE
from fcsdecode.errors import InvalidDataError, MissingKeywordError, ShapeMismatchError
from fcsdecode.formats.fcs3.header import Header
from fcsdecode.models.sample import FlowSample
from fcsdecode.utils.stream import read_exact
from fcsdecode.utils.validation import require_unsigned

LOGGER = logging.getLogger(__name__)


class ByteOrder(Enum):
    """Byte orders accepted in $BYTEORD."""

    LITTLE = "1,2,3,4"
    BIG = "4,3,2,1"

    @property
    def dtype_prefix(self) -> str:
        return "<" if self is ByteOrder.LITTLE else ">"

    @property
    def int_order(self) -> str:
        return "little" if self is ByteOrder.LITTLE else "big"

    @classmethod
    def from_keyword(cls, value: str) -> "ByteOrder":
        """Match the literal $BYTEORD value."""
        for order in cls:
            if order.value == value:
                return order
        raise InvalidDataError(f"Could not determine byte order from $BYTEORD {value!r}")


# (data type, element width in bytes) -> numpy dtype without byte order
DTYPE_CODES = {
    ("F", 4): "f4",
    ("D", 8): "f8",
    ("I", 2): "u2",
    ("I", 4): "u4",
    ("I", 8): "u8",
}

# numpy has no 128-bit integer dtype; decoded with int.from_bytes
WIDE_INT_WIDTH = 16

FLOAT_WIDTHS = {"F": 4, "D": 8}


def element_width(data_type: str, param_index: int, metadata: Dict[str, str]) -> int:
    """
    Get the byte width of one element of a parameter.

    Args:
        data_type: $DATATYPE value
        param_index: 1-based parameter index
        metadata: TEXT keywords

    Returns:
        Width in bytes

    Raises:
        InvalidDataError: For unknown data types or integer widths
        MissingKeywordError: If $PnB is missing for integer data
    """
    if data_type in FLOAT_WIDTHS:
        return FLOAT_WIDTHS[data_type]

    if data_type != "I":
        raise InvalidDataError(f"Data type {data_type!r} not supported. Must be F, D, or I")

    keyword = f"$P{param_index}B"
    if keyword not in metadata:
        raise MissingKeywordError(keyword)
    bits = require_unsigned(metadata, keyword)

    width = bits // 8
    if ("I", width) not in DTYPE_CODES and width != WIDE_INT_WIDTH:
        raise InvalidDataError(f"{bits} bits for parameter {param_index} ({keyword}) not supported")
    return width


def unpack_elements(
    buffer: bytes, data_type: str, width: int, n_events: int, byte_order: ByteOrder
) -> np.ndarray:
    """
    Unpack ``n_events`` elements of one type from a buffer.

    Floats are widened to double precision and integers converted to
    float, giving a float64 array.
    """
    if width == WIDE_INT_WIDTH and data_type == "I":
        return np.array(
            [
                float(int.from_bytes(buffer[i * width : (i + 1) * width], byte_order.int_order))
                for i in range(n_events)
            ],
            dtype="float64",
        )

    dtype = np.dtype(f"{byte_order.dtype_prefix}{DTYPE_CODES[(data_type, width)]}")
    return np.frombuffer(buffer, dtype=dtype, count=n_events).astype("float64")


def read_column(
    stream: BinaryIO,
    data_type: str,
    n_events: int,
    param_index: int,
    metadata: Dict[str, str],
    byte_order: ByteOrder = ByteOrder.LITTLE,
) -> np.ndarray:
    """Read one parameter's events as a float64 array."""
    width = element_width(data_type, param_index, metadata)
    buffer = read_exact(stream, n_events * width)
    return unpack_elements(buffer, data_type, width, n_events, byte_order)


def read_events(
    stream: BinaryIO,
    data_type: str,
    n_events: int,
    param_index: int,
    metadata: Dict[str, str],
    byte_order: ByteOrder = ByteOrder.LITTLE,
) -> List[float]:
    """
    Read all events of a single parameter at the current stream position.

    Args:
        stream: Binary stream positioned at the parameter's first value
        data_type: $DATATYPE value ("F", "D" or "I")
        n_events: Number of values to read ($TOT)
        param_index: 1-based parameter index, used to look up $PnB
        metadata: TEXT keywords
        byte_order: Endianness of the values

    Returns:
        The values as floats

    Raises:
        InvalidDataError: For unsupported types or widths
        TruncatedFileError: If the stream ends early
    """
    return read_column(stream, data_type, n_events, param_index, metadata, byte_order).tolist()


def create_dataframe(column_titles: Sequence[str], data: Sequence[Sequence[float]]) -> pd.DataFrame:
    """
    Build the event table from column labels and column vectors.

    Args:
        column_titles: One label per column
        data: One vector per column, all of the same length

    Returns:
        DataFrame with float64 columns in the given order

    Raises:
        ShapeMismatchError: If labels are duplicated, their number differs
            from the number of vectors, or the vectors differ in length
    """
    if len(set(column_titles)) != len(data) or len(column_titles) != len(data):
        raise ShapeMismatchError(
            f"{len(data)} columns but {len(set(column_titles))} distinct column titles"
        )

    lengths = {len(column) for column in data}
    if len(lengths) > 1:
        raise ShapeMismatchError(f"Columns have different lengths: {sorted(lengths)}")

    return pd.DataFrame(
        {title: pd.Series(column, dtype="float64") for title, column in zip(column_titles, data)},
        columns=list(column_titles),
    )


def parse_data(
    stream: BinaryIO, metadata: Dict[str, str], header: Optional[Header] = None
) -> FlowSample:
    """
    Decode the DATA segment and assemble a FlowSample.

    Args:
        stream: Seekable binary stream of the whole file
        metadata: Validated TEXT keywords
        header: Parsed header, attached to the sample

    Returns:
        FlowSample with one column per parameter

    Raises:
        InvalidDataError: If the keywords don't describe decodable list
            mode data
        TruncatedFileError: If the file ends inside the DATA segment
    """
    if "$MODE" not in metadata:
        raise InvalidDataError("Missing $MODE in metadata")
    if metadata["$MODE"] != LIST_MODE:
        raise InvalidDataError("Data must be in list (L) mode")

    if "$DATATYPE" not in metadata:
        raise InvalidDataError("Missing $DATATYPE in metadata")
    data_type = metadata["$DATATYPE"]

    n_params = require_unsigned(metadata, "$PAR")
    n_events = require_unsigned(metadata, "$TOT")
    data_start = require_unsigned(metadata, "$BEGINDATA", strip=True)

    if "$BYTEORD" not in metadata:
        raise InvalidDataError("Missing $BYTEORD in metadata")

    if n_params * n_events == 0:
        raise InvalidDataError("FCS file may be corrupted. No data found")

    stream.seek(data_start)
    byte_order = ByteOrder.from_keyword(metadata["$BYTEORD"])
    LOGGER.debug(
        "Decoding %d parameters x %d events of type %s (%s) at offset %d",
        n_params,
        n_events,
        data_type,
        byte_order.name,
        data_start,
    )

    column_titles: List[str] = []
    columns: List[np.ndarray] = []
    for index in range(1, n_params + 1):
        events = read_column(stream, data_type, n_events, index, metadata, byte_order)

        label = metadata.get(f"$P{index}S")
        if label is None:
            raise InvalidDataError(f"Missing $P{index}S in metadata")

        column_titles.append(label)
        columns.append(events)

    return FlowSample(
        data=create_dataframe(column_titles, columns),
        parameters=dict(metadata),
        header=header,
    )
