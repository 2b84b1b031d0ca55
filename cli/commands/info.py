"""
Info command - display sample overview and parameter table.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from cli.display.tables import display_parameter_table, display_sample_info
from fcsdecode.errors import FcsError
from fcsdecode.formats.fcs3.reader import FcsFile

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="FCS file to analyze"),
    stats: bool = typer.Option(True, "--stats/--no-stats", help="Show min/max per parameter"),
    summary: bool = typer.Option(False, "--summary", "-s", help="Print the plain text summary"),
) -> None:
    """
    Display FCS file information.

    Shows:

    - Version, cytometer, acquisition date and time
    - Event and parameter counts
    - Data type, byte order and mode
    - Parameter names, labels, bit widths and ranges

    Examples:

        fcsdecode info sample.fcs

        fcsdecode info sample.fcs --no-stats
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {escape(str(file))}[/red]")
        raise typer.Exit(1)

    try:
        with FcsFile.open(file) as fcs:
            sample = fcs.read()
    except (FcsError, OSError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if summary:
        console.print(str(sample), highlight=False, markup=False)
        return

    display_sample_info(sample, str(file))
    display_parameter_table(sample.parameters, sample if stats else None)


if __name__ == "__main__":
    app()
