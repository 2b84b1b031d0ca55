"""
Rich table displays for FCS file information.
"""

import re
from typing import Dict, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cli.display.formatters import format_bytes, format_range, shorten, size_bar
from fcsdecode.formats.fcs3.header import Header
from fcsdecode.models.sample import FlowSample

console = Console()

PARAMETER_PATTERN = re.compile(r"^\$P(\d+)[A-Z]+$")

DATA_TYPES = {
    "F": "32-bit float",
    "D": "64-bit float",
    "I": "unsigned integer",
    "A": "ASCII",
}

BYTE_ORDERS = {
    "1,2,3,4": "little endian",
    "4,3,2,1": "big endian",
}


def display_sample_info(sample: FlowSample, filepath: str) -> None:
    """Display the overview panel of a decoded sample."""
    data_type = sample.keyword("$DATATYPE")
    byte_order = sample.keyword("$BYTEORD")
    version = sample.header.version if sample.header is not None else "Unknown"
    # Keyword values come from the file and may contain rich markup
    shown = {
        keyword: escape(sample.keyword(keyword))
        for keyword in ("$CYT", "$DATE", "$BTIM", "$ETIM", "$MODE", "$DATATYPE", "$BYTEORD")
    }

    overview = f"""[bold]File:[/bold] {escape(filepath)}
[bold]Version:[/bold] {escape(version)}
[bold]Cytometer:[/bold] {shown["$CYT"]}
[bold]Date:[/bold] {shown["$DATE"]} ({shown["$BTIM"]} - {shown["$ETIM"]})
[bold]Events:[/bold] {sample.n_events}
[bold]Parameters:[/bold] {sample.n_parameters}
[bold]Data Type:[/bold] {shown["$DATATYPE"]} ({DATA_TYPES.get(data_type, "unknown")})
[bold]Byte Order:[/bold] {shown["$BYTEORD"]} ({BYTE_ORDERS.get(byte_order, "unknown")})
[bold]Mode:[/bold] {shown["$MODE"]}"""

    console.print(
        Panel(
            overview,
            title="[bold blue]FCS Sample Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )


def display_parameter_table(metadata: Dict[str, str], sample: Optional[FlowSample] = None) -> None:
    """Display one row per parameter with its $Pn* keywords."""
    table = Table(title="Parameters", box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=4)
    table.add_column("Name ($PnN)", style="cyan")
    table.add_column("Label ($PnS)")
    table.add_column("Bits", width=5)
    table.add_column("Amp ($PnE)", width=10)
    table.add_column("Range", width=10)
    if sample is not None:
        table.add_column("Min", justify="right")
        table.add_column("Max", justify="right")

    try:
        n_params = int(metadata.get("$PAR", "0"))
    except ValueError:
        n_params = 0

    for i in range(1, n_params + 1):
        label = metadata.get(f"$P{i}S", "")
        row = [
            str(i),
            escape(metadata[f"$P{i}N"]) if f"$P{i}N" in metadata else "[red]missing[/red]",
            escape(label) or "[dim]-[/dim]",
            escape(metadata.get(f"$P{i}B", "-")),
            escape(metadata.get(f"$P{i}E", "-")),
            escape(metadata.get(f"$P{i}R", "-")),
        ]
        if sample is not None:
            if label in sample.data.columns:
                column = sample.data[label]
                row += [f"{column.min():.6g}", f"{column.max():.6g}"]
            else:
                row += ["-", "-"]
        table.add_row(*row)

    console.print(table)


def display_header_info(header: Header, file_size: int) -> None:
    """Display the header segment ranges."""
    table = Table(
        title=f"Header ({header.version})",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold green",
    )
    table.add_column("Segment", style="cyan", width=10)
    table.add_column("Offsets", width=22)
    table.add_column("Size", justify="right", width=10)
    table.add_column("Share of file", width=28)

    segments = (
        ("TEXT", header.text_offsets),
        ("DATA", header.data_offsets),
        ("ANALYSIS", header.analysis_offsets),
    )
    for name, segment in segments:
        table.add_row(
            name,
            format_range(segment),
            format_bytes(segment.size),
            size_bar(segment.size, file_size),
        )

    console.print(table)
    console.print(f"[dim]File size: {format_bytes(file_size)}[/dim]")


def display_keywords(metadata: Dict[str, str], pattern: Optional[str] = None, show_all: bool = False) -> int:
    """
    Display keyword/value pairs.

    Args:
        metadata: TEXT keywords
        pattern: Keep only keys containing this text (case-insensitive)
        show_all: Include $Pn* parameter keywords

    Returns:
        Number of rows shown
    """
    table = Table(title="TEXT Keywords", box=box.SIMPLE, show_header=True, header_style="bold yellow")
    table.add_column("Keyword", style="cyan")
    table.add_column("Value")

    shown = 0
    for key in sorted(metadata):
        if not show_all and PARAMETER_PATTERN.match(key):
            continue
        if pattern and pattern.lower() not in key.lower():
            continue
        table.add_row(escape(key), escape(shorten(metadata[key])))
        shown += 1

    console.print(table)
    console.print(f"[dim]{shown} of {len(metadata)} keywords shown[/dim]")
    return shown
