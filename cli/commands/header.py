"""
Header command - show the HEADER segment offsets.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from cli.display.hex_view import display_header_bytes
from cli.display.tables import display_header_info
from fcsdecode.constants import HEADER_SIZE
from fcsdecode.errors import FcsError
from fcsdecode.formats.fcs3.reader import FcsFile

console = Console()
app = typer.Typer()


@app.command()
def header(
    file: Path = typer.Argument(..., help="FCS file to inspect"),
    raw: bool = typer.Option(False, "--raw", "-r", help="Show annotated header bytes"),
) -> None:
    """
    Show the HEADER segment: version and TEXT/DATA/ANALYSIS offsets.

    Examples:

        fcsdecode header sample.fcs

        fcsdecode header sample.fcs --raw
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {escape(str(file))}[/red]")
        raise typer.Exit(1)

    try:
        with FcsFile.open(file) as fcs:
            parsed = fcs.read_header()
    except (FcsError, OSError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    display_header_info(parsed, file.stat().st_size)
    console.print(f"[bold]Rendered:[/bold] [cyan]{parsed.render()}[/cyan]", highlight=False)

    if raw:
        with open(file, "rb") as f:
            display_header_bytes(f.read(HEADER_SIZE))


if __name__ == "__main__":
    app()
