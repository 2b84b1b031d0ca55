"""
Annotated hex view of the FCS header bytes.
"""

from typing import List, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

console = Console()


# Header fields with start, end, name and color
HEADER_REGIONS: List[Tuple[int, int, str, str]] = [
    (0, 6, "VERSION", "bright_blue"),
    (6, 10, "SPACES", "dim"),
    (10, 18, "TEXT_BEG", "green"),
    (18, 26, "TEXT_END", "green"),
    (26, 34, "DATA_BEG", "yellow"),
    (34, 42, "DATA_END", "yellow"),
    (42, 50, "ANAL_BEG", "magenta"),
    (50, 58, "ANAL_END", "magenta"),
]


def format_header_bytes(data: bytes) -> Text:
    """Color each header byte by the field it belongs to."""
    text = Text()

    for start, end, name, color in HEADER_REGIONS:
        chunk = data[start:end]
        if not chunk:
            break
        text.append(f"{start:02d}  ", style="dim")
        text.append(f"[{name:8s}] ", style=color)
        text.append(" ".join(f"{b:02X}" for b in chunk).ljust(8 * 3), style="bold white")
        text.append("  ")
        text.append("".join(chr(b) if 32 <= b < 127 else "." for b in chunk), style="green")
        text.append("\n")

    return text


def display_header_bytes(data: bytes, title: str = "Header Bytes") -> None:
    """Display the raw header with field annotations."""
    console.print(Panel(format_header_bytes(data), title=title, border_style="blue", expand=False))
