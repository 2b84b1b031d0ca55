"""
Keywords command - list TEXT segment keyword/value pairs.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from cli.display.tables import PARAMETER_PATTERN, display_keywords
from fcsdecode.errors import FcsError
from fcsdecode.formats.fcs3.reader import FcsFile

console = Console()
app = typer.Typer()


@app.command()
def keywords(
    file: Path = typer.Argument(..., help="FCS file to inspect"),
    filter_text: Optional[str] = typer.Option(
        None, "--filter", "-f", help="Only keywords containing this text"
    ),
    show_all: bool = typer.Option(False, "--all", "-a", help="Include $Pn* parameter keywords"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """
    List keywords from the TEXT segment.

    Examples:

        fcsdecode keywords sample.fcs

        fcsdecode keywords sample.fcs --filter date

        fcsdecode keywords sample.fcs --all --json
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {escape(str(file))}[/red]")
        raise typer.Exit(1)

    try:
        with FcsFile.open(file) as fcs:
            metadata = fcs.read_metadata()
    except (FcsError, OSError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if json_output:
        selected = {
            k: v
            for k, v in sorted(metadata.items())
            if show_all or not PARAMETER_PATTERN.match(k)
            if not filter_text or filter_text.lower() in k.lower()
        }
        console.print_json(data=selected)
        return

    display_keywords(metadata, pattern=filter_text, show_all=show_all)


if __name__ == "__main__":
    app()
