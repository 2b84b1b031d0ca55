"""Utility functions for fcsdecode."""

from fcsdecode.utils.stream import read_exact
from fcsdecode.utils.validation import missing_keywords, required_keywords, validate_text

__all__ = [
    "read_exact",
    "missing_keywords",
    "required_keywords",
    "validate_text",
]
