"""
Export command - write decoded events to a delimited text file.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from fcsdecode.errors import FcsError
from fcsdecode.formats.fcs3.reader import FcsFile

console = Console()
app = typer.Typer()


@app.command()
def export(
    source: Path = typer.Argument(..., help="Source FCS file"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path"),
    sep: str = typer.Option("\t", "--sep", help="Column separator"),
    arcsinh: Optional[float] = typer.Option(
        None, "--arcsinh", help="Apply arcsinh(x / COFACTOR) to every column"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed progress"),
) -> None:
    """
    Export events to TSV/CSV, one column per parameter label.

    Examples:

        fcsdecode export sample.fcs

        fcsdecode export sample.fcs -o events.csv --sep ,

        fcsdecode export sample.fcs --arcsinh 150
    """
    if not source.exists():
        console.print(f"[red]Error: Source file not found: {escape(str(source))}[/red]")
        raise typer.Exit(1)

    if len(sep) != 1:
        console.print(f"[red]Error: --sep must be a single character, got {escape(repr(sep))}[/red]")
        raise typer.Exit(1)

    output_path = output or source.with_suffix(".tsv")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=not verbose,
    ) as progress:
        task = progress.add_task("Decoding FCS file...", total=None)

        try:
            with FcsFile.open(source) as fcs:
                sample = fcs.read()

            if arcsinh is not None:
                sample.arcsinh_transform(arcsinh, sample.column_names)

            progress.update(task, description="Writing events...")
            output_path.parent.mkdir(parents=True, exist_ok=True)
            sample.data.to_csv(output_path, sep=sep, index=False)
            progress.update(task, description="Done!")

        except (FcsError, OSError, ValueError) as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            if verbose:
                console.print_exception()
            raise typer.Exit(1)

    console.print(f"[green]Exported:[/green] {escape(str(source))} -> {escape(str(output_path))}")
    console.print(f"[dim]{sample.n_events} events x {sample.n_parameters} parameters[/dim]")


if __name__ == "__main__":
    app()
