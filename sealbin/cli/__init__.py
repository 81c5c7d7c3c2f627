"""
sealbin - Command Line Interface

Local tooling around the paste envelope format.  Everything here runs
client-side: keys are generated and used on this machine and never sent
anywhere.

Usage:
    $ sealbin keygen
    $ sealbin encrypt notes.txt --json
    $ sealbin decrypt "<iv>:<ciphertext>" --key <key>
    $ sealbin detect script.sh
    $ sealbin format data.json
    $ sealbin expiry 1w
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer

from sealbin import __version__
from sealbin.cli.output import (
    console,
    emit_json,
    print_code,
    print_error,
    print_key_value,
    print_success,
)
from sealbin.crypto import envelope as cipher
from sealbin.crypto.keys import export_key, generate, import_key
from sealbin.errors import SealbinError
from sealbin.paste.classifier import Language, detect_language, explain
from sealbin.paste.expiration import (
    EXPIRATION_OPTIONS,
    calculate_custom_expiration,
    calculate_expiration_date,
    format_expiration_time,
)
from sealbin.paste.formatter import format_code

# Create main application
app = typer.Typer(
    name="sealbin",
    help="sealbin - zero-knowledge encrypted pastes",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=True,
    pretty_exceptions_show_locals=False,
)

EXIT_FAILURE = 1
EXIT_DECRYPTION = 2


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"sealbin version {__version__}")
        raise typer.Exit()


def verbose_callback(value: bool) -> None:
    """Set verbose mode."""
    if value:
        logging.basicConfig(level=logging.DEBUG)


def _read_input(path: Optional[Path]) -> str:
    if path is None or str(path) == "-":
        return sys.stdin.read()
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        print_error(f"Cannot read {path}", details=str(exc))
        raise typer.Exit(EXIT_FAILURE)


def _fail(exc: SealbinError, code: int = EXIT_FAILURE) -> NoReturn:
    print_error(str(exc), details=exc.code)
    raise typer.Exit(code)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        callback=verbose_callback,
        help="Enable verbose output.",
    ),
) -> None:
    """
    sealbin - zero-knowledge encrypted pastes

    Use --help on any subcommand for detailed information.
    """
    pass


@app.command()
def keygen() -> None:
    """Generate a fresh 256-bit key and print it as base64."""
    typer.echo(export_key(generate()))


@app.command()
def encrypt(
    path: Optional[Path] = typer.Argument(None, help="File to encrypt; stdin if omitted or '-'."),
    key: Optional[str] = typer.Option(None, "--key", "-k", help="Existing base64 key to use."),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table."),
) -> None:
    """
    Classify and encrypt content into a wire envelope.

    A new key is generated unless --key is given.  The key is printed once;
    store it somewhere safe, it cannot be recovered from the envelope.
    """
    content = _read_input(path)
    if not content.strip():
        print_error("Content must not be empty")
        raise typer.Exit(EXIT_FAILURE)

    try:
        k = import_key(key) if key else generate()
    except SealbinError as exc:
        _fail(exc)

    envelope = cipher.seal(content, k)
    data = {
        "language": detect_language(content).value,
        "envelope": envelope,
        "key": export_key(k),
    }
    if as_json:
        emit_json(data)
    else:
        print_key_value(data, title="Sealed paste")


@app.command()
def decrypt(
    envelope: str = typer.Argument(..., help="Envelope string, or '-' to read it from stdin."),
    key: str = typer.Option(..., "--key", "-k", help="Base64 key from the share link fragment."),
) -> None:
    """Decrypt an envelope and print the plaintext."""
    if envelope == "-":
        envelope = sys.stdin.read().strip()
    try:
        k = import_key(key)
        plaintext = cipher.open_envelope(envelope, k)
    except SealbinError as exc:
        _fail(exc, EXIT_DECRYPTION if exc.code == "decryption_failure" else EXIT_FAILURE)
    typer.echo(plaintext, nl=False)


@app.command()
def detect(
    path: Optional[Path] = typer.Argument(None, help="File to classify; stdin if omitted or '-'."),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON."),
) -> None:
    """Show the language the classifier assigns to some content."""
    content = _read_input(path)
    label = detect_language(content)
    rule = explain(content)
    if as_json:
        emit_json({"language": label.value, "rule": rule})
    else:
        print_key_value({"language": label.value, "rule": rule or "fallback"})


@app.command(name="format")
def format_command(
    path: Optional[Path] = typer.Argument(None, help="File to format; stdin if omitted or '-'."),
    language: Optional[Language] = typer.Option(
        None, "--language", "-l", help="Override the detected language."
    ),
    highlight: bool = typer.Option(False, "--highlight", help="Syntax-highlight the output."),
) -> None:
    """Re-indent content (JSON is pretty-printed)."""
    content = _read_input(path)
    label = language or detect_language(content)
    formatted = format_code(content, label)
    if highlight:
        print_code(formatted, label.value)
    else:
        typer.echo(formatted)


@app.command()
def expiry(
    option: str = typer.Argument(
        "never", help="One of: " + ", ".join(v for v, _ in EXPIRATION_OPTIONS)
    ),
    amount: int = typer.Option(1, "--amount", "-n", help="Amount for 'custom'."),
    unit: str = typer.Option("days", "--unit", "-u", help="Unit for 'custom'."),
) -> None:
    """Show when a paste created now with OPTION would expire."""
    try:
        custom = calculate_custom_expiration(amount, unit) if option == "custom" else None
        expires_at = calculate_expiration_date(option, custom)
    except SealbinError as exc:
        _fail(exc)
    print_key_value(
        {
            "option": option,
            "expires_at": expires_at.isoformat() if expires_at else "never",
            "label": format_expiration_time(expires_at),
        }
    )
    print_success("Expiration computed")


if __name__ == "__main__":
    app()
