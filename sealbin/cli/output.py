"""
sealbin CLI - Rich Output Helpers

Small set of helpers so every command reports results and failures the
same way.  Machine-readable output (``--json``) bypasses Rich entirely so
it is never wrapped or highlighted.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

# Create console instances
console = Console()
err_console = Console(stderr=True)


def emit_json(data: dict[str, Any]) -> None:
    """Write compact JSON to stdout, one document per line."""
    typer.echo(json.dumps(data, default=str))


def print_error(
    message: str,
    details: Optional[str] = None,
    hint: Optional[str] = None,
) -> None:
    """
    Print error message.

    Args:
        message: Error message
        details: Optional detailed error information
        hint: Optional hint for resolving the error
    """
    err_console.print(f"[bold red]Error:[/bold red] {message}", markup=True, highlight=False)

    if details:
        err_console.print(f"[dim]{details}[/dim]")

    if hint:
        err_console.print(f"[yellow]Hint:[/yellow] {hint}")


def print_success(message: str, details: Optional[str] = None) -> None:
    console.print(f"[bold green]Success:[/bold green] {message}")

    if details:
        console.print(f"[dim]{details}[/dim]")


def print_key_value(data: dict[str, Any], title: Optional[str] = None) -> None:
    """
    Print key-value pairs as a two-column table.

    Values are printed without markup so base64 and user text survive
    untouched.
    """
    table = Table(title=title, show_header=False, box=None)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for key, value in data.items():
        table.add_row(str(key), Text("" if value is None else str(value)))
    console.print(table)


def print_code(code: str, language: str = "text", line_numbers: bool = False) -> None:
    """Print syntax-highlighted code."""
    lexer = "text" if language == "plaintext" else language
    console.print(Syntax(code, lexer, line_numbers=line_numbers, word_wrap=True))
