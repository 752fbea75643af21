"""
Console output for the iotconn commands.

Key and signature values never reach the console: tables show them through
mask_secret(), and errors print the message of the typed exception, which
names the field or rule but not the value.
"""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

MISSING_VALUE = "-"
SECRET_PLACEHOLDER = "set"


def success(message: str):
    """Display success message"""
    console.print(f"✔ {message}", style="bold green")


def error(message: str):
    """Display error message"""
    console.print(f"✖ {escape(message)}", style="bold red")


def warning(message: str):
    """Display warning message"""
    console.print(f"⚠  {message}", style="bold yellow")


def info(message: str):
    """Display info message"""
    console.print(f"{message}", style="cyan")


def rejected(exc: Exception) -> None:
    """Report a rejected connection string or parameter set"""
    error(f"{type(exc).__name__}: {exc}")


def show_value(value: Optional[object]) -> str:
    if value is None or value == "":
        return MISSING_VALUE
    return str(value)


def mask_secret(value: Optional[str]) -> str:
    return SECRET_PLACEHOLDER if value else MISSING_VALUE


def create_table(title: str, columns: List[str]) -> Table:
    """Create a rich table"""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    for column in columns:
        table.add_column(column)
    return table


def create_property_table(title: str) -> Table:
    """Two-column Property / Value table for connection string fields"""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value")
    return table
