"""Tests for FcsFile, read_fcs and FlowSample."""

import io
import math
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from fcsdecode import FcsFile, FlowSample, read_fcs
from fcsdecode.errors import (
    FcsError,
    MissingKeywordError,
    TruncatedFileError,
    UnsupportedVersionError,
)


class TestFcsFile:
    """Test cases for the FcsFile handle."""

    def test_open_missing_file(self, tmp_path):
        """Test that opening a missing path raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            FcsFile.open(tmp_path / "missing.fcs")

    def test_read(self, fcs_path, scatter_columns):
        """Test reading a file into a FlowSample."""
        with FcsFile.open(fcs_path) as fcs:
            sample = fcs.read()

        assert isinstance(sample, FlowSample)
        assert sample.get_dataframe_columns() == list(scatter_columns)
        assert sample.data["SSC-A"].tolist() == scatter_columns["SSC-A"]
        assert sample.header is not None
        assert sample.header.version == "FCS3.0"

    def test_context_manager_closes(self, fcs_path):
        """Test that leaving the with block closes the file."""
        with FcsFile.open(fcs_path) as fcs:
            assert not fcs.closed

        assert fcs.closed

    def test_read_twice_same_handle(self, fcs_path):
        """Test that one handle can be read more than once."""
        with FcsFile.open(fcs_path) as fcs:
            first = fcs.read()
            second = fcs.read()

        assert first.data.equals(second.data)

    def test_independent_handles(self, fcs_path):
        """Test that two handles on one path decode identically."""
        a = FcsFile.open(fcs_path)
        b = FcsFile.open(fcs_path)
        try:
            a.read_header()
            sample_b = b.read()
            sample_a = a.read()
        finally:
            a.close()
            b.close()

        assert sample_a.data.equals(sample_b.data)
        assert sample_a.parameters == sample_b.parameters

    def test_from_file(self, make_fcs, scatter_columns):
        """Test wrapping an in-memory stream."""
        fcs = FcsFile.from_file(io.BytesIO(make_fcs(scatter_columns)))

        sample = fcs.read()

        assert sample.n_events == 4
        assert fcs.name == "<stream>"

    def test_read_header(self, fcs_path):
        """Test reading only the header."""
        with FcsFile.open(fcs_path) as fcs:
            header = fcs.read_header()

        assert header.text_offsets.start == 58

    def test_read_metadata(self, write_fcs, scatter_columns):
        """Test reading only the TEXT keywords."""
        path = write_fcs(columns=scatter_columns, extra={"$CYT": "LSRFortessa"})

        with FcsFile.open(path) as fcs:
            metadata = fcs.read_metadata()

        assert metadata["$CYT"] == "LSRFortessa"
        assert metadata["$PAR"] == "3"

    def test_read_metadata_missing_keyword(self, write_fcs, scatter_columns):
        """Test that read_metadata validates required keywords."""
        path = write_fcs(columns=scatter_columns, drop=("$NEXTDATA",))

        with FcsFile.open(path) as fcs:
            with pytest.raises(MissingKeywordError):
                fcs.read_metadata()

    def test_fcs31(self, write_fcs, scatter_columns):
        """Test reading an FCS3.1 file."""
        path = write_fcs(columns=scatter_columns, version="FCS3.1")

        assert read_fcs(path).header.version == "FCS3.1"

    def test_unsupported_version(self, write_fcs, scatter_columns):
        """Test that FCS2.0 files are rejected."""
        path = write_fcs(columns=scatter_columns, version="FCS2.0")

        with pytest.raises(UnsupportedVersionError):
            read_fcs(path)

    def test_errors_share_base(self, write_fcs, scatter_columns):
        """Test that decoding errors derive from FcsError."""
        path = write_fcs(columns=scatter_columns, extra={"$MODE": "U"})

        with pytest.raises(FcsError):
            read_fcs(path)

    def test_oversized_event_count_on_disk(self, write_fcs, scatter_columns):
        """Test that a $TOT far beyond the file size fails as truncation."""
        path = write_fcs(columns=scatter_columns, extra={"$TOT": "100000000000"})

        with pytest.raises(TruncatedFileError) as excinfo:
            read_fcs(path)

        assert excinfo.value.expected == 100000000000 * 4
        assert excinfo.value.actual == 3 * 4 * 4

    def test_header_data_offsets_ignored(self, write_fcs, scatter_columns):
        """Test that $BEGINDATA locates the events when the header holds zeros."""
        path = write_fcs(columns=scatter_columns, header_data_offsets=False)

        sample = read_fcs(path)

        assert sample.data["FITC-A"].tolist() == scatter_columns["FITC-A"]
        assert sample.header.data_offsets.is_empty


class TestCanRead:
    """Test cases for FCS detection."""

    def test_valid_file(self, fcs_path):
        """Test that a generated file is detected."""
        assert FcsFile.can_read(fcs_path)

    def test_old_version(self, write_fcs, scatter_columns):
        """Test that FCS2.0 is not detected."""
        assert not FcsFile.can_read(write_fcs(columns=scatter_columns, version="FCS2.0"))

    def test_missing_file(self, tmp_path):
        """Test that a missing path is not detected."""
        assert not FcsFile.can_read(tmp_path / "nope.fcs")

    def test_directory(self, tmp_path):
        """Test that a directory is not detected."""
        assert not FcsFile.can_read(tmp_path)

    def test_other_file(self, tmp_path):
        """Test that arbitrary bytes are not detected."""
        path = tmp_path / "notes.txt"
        path.write_bytes(b"\x00\xffnot fcs")

        assert not FcsFile.can_read(path)


class TestFlowSample:
    """Test cases for FlowSample conveniences."""

    def test_counts(self, fcs_path):
        """Test event and parameter counts."""
        sample = read_fcs(fcs_path)

        assert sample.n_events == 4
        assert sample.n_parameters == 3

    def test_keyword_default(self, fcs_path):
        """Test keyword lookup with defaults."""
        sample = read_fcs(fcs_path)

        assert sample.keyword("$DATATYPE") == "F"
        assert sample.keyword("$CYT") == "Unknown"
        assert sample.keyword("$CYT", default="") == ""

    def test_summary(self, write_fcs, scatter_columns):
        """Test the text summary of a sample."""
        path = write_fcs(
            columns=scatter_columns,
            extra={"$CYT": "FACSCanto II", "$DATE": "05-MAR-2021", "$FIL": "tube1.fcs"},
        )

        summary = str(read_fcs(path))

        assert summary.startswith("FlowSample:\n")
        assert "    Machine: FACSCanto II\n" in summary
        assert "    Begin Time: Unknown\n" in summary
        assert "    Date: 05-MAR-2021\n" in summary
        assert "    File: tube1.fcs\n" in summary
        assert "    Labels: \n" in summary
        assert "        FSC-A (FSC-A)\n" in summary
        assert summary.endswith("        FITC-A (FITC-A)\n")

    def test_summary_skips_parameters_without_long_name(self):
        """Test that parameters without $PnS are left out of the labels."""
        sample = FlowSample(
            data=None,
            parameters={"$PAR": "2", "$P1N": "FSC-H", "$P1S": "Forward", "$P2N": "Time"},
        )

        summary = str(sample)

        assert "        FSC-H (Forward)\n" in summary
        assert "Time" not in summary

    def test_arcsinh_transform(self, fcs_path):
        """Test arcsinh on selected channels only."""
        sample = read_fcs(fcs_path)

        sample.arcsinh_transform(5.0, ["FSC-A", "SSC-A"])

        assert sample.data["FSC-A"].tolist() == pytest.approx(
            [math.asinh(v / 5.0) for v in [1.5, 2.25, 1024.0, 0.0]]
        )
        assert sample.data["SSC-A"].iloc[0] == pytest.approx(math.asinh(2.0))
        assert sample.data["FITC-A"].tolist() == [-1.0, 0.5, 3.75, 100.0]

    def test_arcsinh_unknown_channel_skipped(self, fcs_path):
        """Test that unknown channels are skipped."""
        sample = read_fcs(fcs_path)

        sample.arcsinh_transform(150.0, ["CD3", "FITC-A"])

        assert "CD3" not in sample.column_names
        assert sample.data["FITC-A"].iloc[3] == pytest.approx(math.asinh(100.0 / 150.0))

    @pytest.mark.parametrize("cofactor", [0, -5.0])
    def test_arcsinh_bad_cofactor(self, fcs_path, cofactor):
        """Test that the cofactor must be positive."""
        sample = read_fcs(fcs_path)

        with pytest.raises(ValueError):
            sample.arcsinh_transform(cofactor, ["FSC-A"])
