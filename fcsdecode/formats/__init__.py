"""Format handlers for FCS files."""

from fcsdecode.formats.fcs3 import FcsFile, read_fcs

__all__ = ["FcsFile", "read_fcs"]
