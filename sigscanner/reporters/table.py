"""Tabular listing of the checks loaded from a rule file."""

from rich.console import Console
from rich.table import Table

from sigscanner.signatures.model import Signatures


def print_signatures(sign: Signatures, severity: str, file=None) -> int:
    """
    Print every check whose severity equals *severity* and return how many
    were listed.
    """
    table = Table(show_header=True, header_style="bold cyan", show_footer=True)
    table.add_column("Endpoint", style="cyan", overflow="fold")
    table.add_column("Check Name", style="magenta")
    table.add_column("Severity", footer="Total Checks")
    table.add_column("Description", overflow="fold")

    count = 0
    for endpoints, name, sev, description in sign.checks_with_severity(severity):
        table.add_row(", ".join(endpoints), name, sev, description)
        count += 1
    table.columns[3].footer = str(count)

    Console(file=file).print(table)
    return count
