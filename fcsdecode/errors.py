"""
Exceptions raised while decoding FCS files.
"""


class FcsError(Exception):
    """Base class for every FCS decoding failure."""

    pass


class TruncatedFileError(FcsError, OSError):
    """Raised when the stream ends before a segment is fully read."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Unexpected end of file: wanted {expected} bytes, got {actual}")


class InvalidHeaderError(FcsError):
    """Raised when the HEADER segment cannot be parsed."""

    def __init__(self, detail: str = ""):
        message = "Invalid FCS header. File may be corrupted or not a FCS file."
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class UnsupportedVersionError(FcsError):
    """Raised when the header carries a version we do not decode."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"FCS version '{version}' not supported. Must be either FCS3.0 or FCS3.1")


class InvalidMetadataError(FcsError):
    """Raised when the TEXT segment cannot be read as text."""

    def __init__(self, detail: str = ""):
        message = "Invalid FCS metadata"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MissingKeywordError(FcsError):
    """Raised when a required keyword is absent from the TEXT segment."""

    def __init__(self, keyword: str):
        self.keyword = keyword
        super().__init__(
            f"FCS file is corrupted. It is missing required keyword {keyword} in its TEXT section"
        )


class InvalidDataError(FcsError):
    """Raised when the DATA segment cannot be decoded."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Invalid FCS data: {detail}")


class ShapeMismatchError(InvalidDataError):
    """Raised when column labels and column vectors do not line up."""

    pass
