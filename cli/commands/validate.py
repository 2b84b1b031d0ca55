"""
Validate command - check FCS file structure stage by stage.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from fcsdecode.errors import FcsError
from fcsdecode.formats.fcs3.data import element_width, parse_data
from fcsdecode.formats.fcs3.header import Header, read_header
from fcsdecode.formats.fcs3.text import read_text
from fcsdecode.utils.validation import missing_keywords, parse_unsigned

console = Console()
app = typer.Typer()

SEVERITY_STYLES = {
    "error": "[red]ERROR[/red]",
    "warning": "[yellow]WARN[/yellow]",
    "info": "[green]OK[/green]",
}


@dataclass
class ValidationIssue:
    """One finding from a decoding stage."""

    severity: str  # "error", "warning", "info"
    stage: str
    message: str


@dataclass
class ValidationResult:
    """Findings for one FCS file."""

    filepath: str
    issues: List[ValidationIssue] = field(default_factory=list)
    strict: bool = False

    def by_severity(self, severity: str) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == severity]

    @property
    def errors(self) -> List[ValidationIssue]:
        return self.by_severity("error")

    @property
    def warnings(self) -> List[ValidationIssue]:
        return self.by_severity("warning")

    @property
    def valid(self) -> bool:
        """No errors, and no warnings either in strict mode."""
        if self.strict and self.warnings:
            return False
        return not self.errors


class FcsValidator:
    """
    Run each decoding stage and collect findings instead of stopping.

    Stages run in pipeline order. Header or TEXT failures stop the run
    since later stages need their output; missing keywords skip only the
    DATA stage.
    """

    def __init__(self, filepath: Path, strict: bool = False):
        self.filepath = filepath
        self.strict = strict
        self.header: Optional[Header] = None
        self.metadata: Dict[str, str] = {}
        self._result = ValidationResult(filepath=str(filepath), strict=strict)

    def validate(self) -> ValidationResult:
        """Run every stage and return the collected findings."""
        self._result = ValidationResult(filepath=str(self.filepath), strict=self.strict)

        with open(self.filepath, "rb") as stream:
            if self._check_header(stream) and self._check_text(stream):
                keywords_ok = self._check_keywords()
                self._check_offsets()
                if keywords_ok:
                    self._check_data(stream)

        return self._result

    def _report(self, severity: str, stage: str, message: str) -> None:
        self._result.issues.append(ValidationIssue(severity, stage, message))

    def _check_header(self, stream: BinaryIO) -> bool:
        try:
            self.header = read_header(stream)
        except (FcsError, OSError) as e:
            self._report("error", "Header", str(e))
            return False
        self._report("info", "Header", f"{self.header.version} header is valid")
        return True

    def _check_text(self, stream: BinaryIO) -> bool:
        try:
            self.metadata = read_text(stream, self.header)
        except (FcsError, OSError) as e:
            self._report("error", "TEXT", str(e))
            return False
        self._report("info", "TEXT", f"{len(self.metadata)} keywords read")
        return True

    def _check_keywords(self) -> bool:
        missing = missing_keywords(self.metadata)
        for keyword in missing:
            self._report("error", "Keywords", f"Missing required keyword {keyword}")
        if not missing:
            self._report("info", "Keywords", "All required keywords present")
        return not missing

    def _check_offsets(self) -> None:
        """Compare header DATA offsets with $BEGINDATA/$ENDDATA."""
        try:
            begin = parse_unsigned(self.metadata.get("$BEGINDATA", "").strip())
            end = parse_unsigned(self.metadata.get("$ENDDATA", "").strip())
        except ValueError:
            self._report("warning", "Offsets", "$BEGINDATA/$ENDDATA are not plain offsets")
            return

        data_offsets = self.header.data_offsets
        if not data_offsets.is_empty and (data_offsets.start, data_offsets.end) != (begin, end):
            self._report(
                "warning",
                "Offsets",
                f"Header DATA {data_offsets.start}-{data_offsets.end} "
                f"differs from TEXT {begin}-{end}",
            )

        expected = self._expected_data_size()
        if expected is not None and end - begin + 1 != expected:
            self._report(
                "warning",
                "Offsets",
                f"DATA segment spans {end - begin + 1} bytes, parameters need {expected}",
            )

    def _expected_data_size(self) -> Optional[int]:
        try:
            n_params = parse_unsigned(self.metadata["$PAR"])
            n_events = parse_unsigned(self.metadata["$TOT"])
            widths = [
                element_width(self.metadata["$DATATYPE"], i, self.metadata)
                for i in range(1, n_params + 1)
            ]
        except (KeyError, ValueError, FcsError):
            return None
        return sum(widths) * n_events

    def _check_data(self, stream: BinaryIO) -> None:
        try:
            sample = parse_data(stream, self.metadata, header=self.header)
        except (FcsError, OSError) as e:
            self._report("error", "DATA", str(e))
            return
        self._report(
            "info", "DATA", f"{sample.n_events} events x {sample.n_parameters} parameters decoded"
        )


def display_validation(result: ValidationResult) -> None:
    """Print a stage table followed by the verdict."""
    table = Table(
        title=f"Validation of {escape(result.filepath)}",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("", width=6)
    table.add_column("Stage", style="cyan", width=9)
    table.add_column("Finding")

    for issue in result.issues:
        table.add_row(SEVERITY_STYLES[issue.severity], issue.stage, escape(issue.message))

    console.print(table)

    if result.valid:
        verdict = "[bold green]VALID[/bold green]"
    else:
        verdict = "[bold red]INVALID[/bold red]"
    summary = f"{verdict}  {len(result.errors)} error(s), {len(result.warnings)} warning(s)"
    if result.strict:
        summary += " [dim](strict)[/dim]"

    console.print(Panel(summary, border_style="green" if result.valid else "red", expand=False))


@app.command()
def validate(
    file: Path = typer.Argument(..., help="FCS file to validate"),
    strict: bool = typer.Option(False, "--strict", "-s", help="Treat warnings as errors"),
) -> None:
    """
    Validate an FCS file stage by stage.

    Checks for:

    - Readable header with a supported version (FCS3.0, FCS3.1)
    - Decodable TEXT segment
    - All required keywords, including $PnB/$PnE/$PnN/$PnR per parameter
    - Header and TEXT DATA offsets agreeing with each other
    - Decodable list mode DATA segment

    Examples:

        fcsdecode validate sample.fcs

        fcsdecode validate sample.fcs --strict
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {escape(str(file))}[/red]")
        raise typer.Exit(1)

    result = FcsValidator(file, strict=strict).validate()
    display_validation(result)

    if not result.valid:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
