"""
fcsdecode - Read and inspect Flow Cytometry Standard (FCS) files.

A CLI tool for looking inside FCS 3.0/3.1 list mode files.
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli.commands.export import export
from cli.commands.header import header
from cli.commands.info import info
from cli.commands.keywords import keywords
from cli.commands.validate import validate
from fcsdecode import __version__

console = Console()

# Main app
app = typer.Typer(
    name="fcsdecode",
    help="Read and inspect Flow Cytometry Standard (FCS) files.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Add commands directly
app.command(name="info")(info)
app.command(name="header")(header)
app.command(name="keywords")(keywords)
app.command(name="validate")(validate)
app.command(name="export")(export)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]fcsdecode[/bold] version {__version__}")
    console.print("[dim]Reader for FCS 3.0/3.1 list mode files[/dim]")


def setup_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """
    fcsdecode - Inspect and export FCS flow cytometry files.

    [bold]Quick Start:[/bold]

        fcsdecode info sample.fcs          # Sample overview and parameters
        fcsdecode header sample.fcs        # Segment offsets
        fcsdecode keywords sample.fcs      # TEXT keywords

    [bold]Utility Commands:[/bold]

        fcsdecode validate sample.fcs      # Check file structure
        fcsdecode export sample.fcs        # Events to TSV

    Use --help with any command for more details.
    """
    setup_logging(verbose)

    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
