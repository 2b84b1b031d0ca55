"""
CLI display modules.
"""

from cli.display.tables import (
    display_header_info,
    display_keywords,
    display_parameter_table,
    display_sample_info,
)
from cli.display.hex_view import display_header_bytes

__all__ = [
    "display_header_info",
    "display_keywords",
    "display_parameter_table",
    "display_sample_info",
    "display_header_bytes",
]
