"""
Display formatting utilities for CLI output.

Provides bar graphics, size and range formatting helpers.
"""

from fcsdecode.formats.fcs3.header import SegmentRange


def size_bar(
    size: int,
    total: int,
    width: int = 20,
    filled_char: str = "█",
    empty_char: str = "░",
    show_percent: bool = True,
) -> str:
    """
    Create a text-based bar showing what share of the file a segment uses.

    Args:
        size: Segment size in bytes
        total: File size in bytes
        width: Bar width in characters
        filled_char: Character for filled portion
        empty_char: Character for empty portion
        show_percent: Show percentage

    Returns:
        Formatted string like "[████░░░░░░] 40%"
    """
    if total <= 0:
        total = 1

    clamped = max(0, min(size, total))
    fill_count = int((clamped / total) * width)
    bar = filled_char * fill_count + empty_char * (width - fill_count)

    if show_percent:
        return f"[{bar}] {int((clamped / total) * 100):3d}%"
    return f"[{bar}]"


def format_range(segment: SegmentRange) -> str:
    """Format a segment range, dimming absent segments."""
    if segment.is_empty:
        return "[dim]absent / in TEXT[/dim]"
    return f"{segment.start}-{segment.end}"


def format_bytes(size: int) -> str:
    """Human readable byte count."""
    value = float(size)
    for unit in ("B", "KB", "MB"):
        if value < 1024:
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


def shorten(value: str, max_len: int = 60) -> str:
    """Cut long keyword values for table display."""
    if len(value) <= max_len:
        return value
    return value[: max_len - 3] + "..."
