"""Test configuration and fixtures."""

import struct
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

import pytest

STRUCT_CODES = {("F", 32): "f", ("D", 64): "d", ("I", 16): "H", ("I", 32): "I", ("I", 64): "Q"}
DEFAULT_BITS = {"F": 32, "D": 64, "I": 32}


def pack_column(values: Sequence[float], data_type: str, bits: int, byte_order: str) -> bytes:
    """Encode one parameter's values."""
    little = byte_order == "1,2,3,4"
    if data_type == "I" and bits == 128:
        return b"".join(int(v).to_bytes(16, "little" if little else "big") for v in values)
    code = STRUCT_CODES[(data_type, bits)]
    if data_type == "I":
        values = [int(v) for v in values]
    return struct.pack(f"{'<' if little else '>'}{len(values)}{code}", *values)


def encode_text(keywords: Dict[str, str], delimiter: bytes) -> bytes:
    """Join keywords into a TEXT segment, leading and trailing delimiter."""
    body = b"".join(
        k.encode() + delimiter + v.encode() + delimiter for k, v in keywords.items()
    )
    return delimiter + body


def build_fcs(
    columns: Dict[str, Sequence[float]],
    data_type: str = "F",
    byte_order: str = "1,2,3,4",
    bits: Optional[Sequence[int]] = None,
    version: str = "FCS3.0",
    delimiter: bytes = b"/",
    extra: Optional[Dict[str, str]] = None,
    drop: Iterable[str] = (),
    header_data_offsets: bool = True,
) -> bytes:
    """
    Build an FCS file in memory.

    Layout: 58-byte header, TEXT starting at byte 58, DATA right after.

    Args:
        columns: $PnS label -> values, in parameter order
        data_type: $DATATYPE
        byte_order: $BYTEORD
        bits: $PnB per parameter (defaults follow the data type)
        version: Header version string
        delimiter: TEXT delimiter byte
        extra: Additional or overriding keywords
        drop: Keywords to leave out
        header_data_offsets: Write DATA offsets into the header too
    """
    labels = list(columns)
    n_events = len(columns[labels[0]]) if labels else 0
    if bits is None:
        bits = [DEFAULT_BITS.get(data_type, 32)] * len(labels)

    data = b"".join(
        pack_column(columns[label], data_type, b, byte_order) for label, b in zip(labels, bits)
    )

    keywords = {
        "$BEGINANALYSIS": "0",
        "$ENDANALYSIS": "0",
        "$BEGINSTEXT": "0",
        "$ENDSTEXT": "0",
        "$BEGINDATA": "0",
        "$ENDDATA": "0",
        "$BYTEORD": byte_order,
        "$DATATYPE": data_type,
        "$MODE": "L",
        "$NEXTDATA": "0",
        "$PAR": str(len(labels)),
        "$TOT": str(n_events),
    }
    for i, (label, b) in enumerate(zip(labels, bits), start=1):
        keywords[f"$P{i}B"] = str(b)
        keywords[f"$P{i}E"] = "0,0"
        keywords[f"$P{i}N"] = label
        keywords[f"$P{i}R"] = "262144"
        keywords[f"$P{i}S"] = label
    extra = extra or {}
    keywords.update(extra)

    text_start = 58
    begin = 0
    for _ in range(10):
        if "$BEGINDATA" not in extra:
            keywords["$BEGINDATA"] = str(begin)
        if "$ENDDATA" not in extra:
            keywords["$ENDDATA"] = str(begin + len(data) - 1)
        text = encode_text({k: v for k, v in keywords.items() if k not in drop}, delimiter)
        text_end = text_start + len(text) - 1
        if begin == text_end + 1:
            break
        begin = text_end + 1

    data_start, data_end = (begin, begin + len(data) - 1) if header_data_offsets else (0, 0)
    header = "{:<10}{:>8}{:>8}{:>8}{:>8}{:>8}{:>8}".format(
        version, text_start, text_end, data_start, data_end, 0, 0
    )
    return header.encode("ascii") + text + data


@pytest.fixture
def make_fcs():
    """Return the in-memory FCS builder."""
    return build_fcs


@pytest.fixture
def write_fcs(tmp_path):
    """Return a function that builds an FCS file and writes it under tmp_path."""

    def _write(name: str = "sample.fcs", **kwargs) -> Path:
        path = tmp_path / name
        path.write_bytes(build_fcs(**kwargs))
        return path

    return _write


@pytest.fixture
def scatter_columns():
    """Three parameters, four events."""
    return {
        "FSC-A": [1.5, 2.25, 1024.0, 0.0],
        "SSC-A": [10.0, 20.0, 30.0, 40.0],
        "FITC-A": [-1.0, 0.5, 3.75, 100.0],
    }


@pytest.fixture
def fcs_path(write_fcs, scatter_columns):
    """Path to a float32 little endian FCS file."""
    return write_fcs(columns=scatter_columns)
