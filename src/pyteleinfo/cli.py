#!/usr/bin/env python3
"""Command-line interface for pyteleinfo using Typer."""

import json
import logging
import sys
from dataclasses import asdict
from enum import Enum
from typing import Any, Optional

import typer
from typing_extensions import Annotated

from . import __version__  # type: ignore
from .decode import IGNORED_CODES, decode
from .errors import ParseError, SerialIOError
from .reader import DEFAULT_BAUDRATE, DEFAULT_PORT, DEFAULT_TIMEOUT, DecodeResult, TeleinfoReader, decode_lines
from .types import FieldCode, Message

app = typer.Typer(
    name="pyteleinfo",
    help="Decode Teleinfo electricity-meter groups from a record, a file or a serial link.",
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Shared options and helpers
# ============================================================================

PortOption = Annotated[
    str,
    typer.Option("--port", "-p", help="Serial device of the Teleinfo link", envvar="PYTELEINFO_PORT"),
]
BaudrateOption = Annotated[
    int,
    typer.Option("--baudrate", "-b", help="Link speed in baud", envvar="PYTELEINFO_BAUDRATE"),
]
TimeoutOption = Annotated[
    float,
    typer.Option("--timeout", "-t", help="Read timeout in seconds", envvar="PYTELEINFO_TIMEOUT"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable debug logging"),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Output as JSON (one object per record)"),
]
SkipIgnoredOption = Annotated[
    bool,
    typer.Option("--skip-ignored", help="Do not print groups that carry no message"),
]


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbose flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if not verbose else "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _enum_values(items: list[tuple[str, Any]]) -> dict[str, Any]:
    return {k: v.value if isinstance(v, Enum) else v for k, v in items}


def message_to_dict(message: Message | None) -> dict[str, Any] | None:
    """Plain-dict form of a message (enums as their values); None stays None."""
    if message is None:
        return None
    return asdict(message, dict_factory=_enum_values)


def format_message(message: Message | None) -> str:
    """
    One-line text form of a message, e.g.
    Index(hour=peak_hours, day_color=red, value=7659709). None renders as Ignored.
    """
    if message is None:
        return "Ignored"
    fields = message_to_dict(message) or {}
    parts: list[str] = []
    for key, value in fields.items():
        if isinstance(value, dict):
            parts.extend(f"{k}={v}" for k, v in value.items())
        else:
            parts.append(f"{key}={value}")
    return f"{type(message).__name__}({', '.join(parts)})"


def result_to_dict(result: DecodeResult) -> dict[str, Any]:
    """JSON shape for one decoded record."""
    return {
        "record": result.record,
        "type": type(result.message).__name__ if result.message is not None else None,
        "message": message_to_dict(result.message),
        "error": str(result.error) if result.error is not None else None,
    }


def emit_result(result: DecodeResult, json_output: bool, skip_ignored: bool = False) -> None:
    """Print one result: NDJSON line, or text (errors on stderr)."""
    if skip_ignored and result.ignored:
        return
    if json_output:
        typer.echo(json.dumps(result_to_dict(result)))
    elif result.error is not None:
        typer.echo(f"Error reading group: {result.record!r}: {result.error}", err=True)
    else:
        typer.echo(f"Message: {result.record:<20} -> {format_message(result.message)}")


# ============================================================================
# Commands
# ============================================================================

@app.command(name="decode")
def decode_command(
    record: Annotated[str, typer.Argument(help="One group, e.g. 'PTEC HCJB S' (tab or space separated)")],
    verbose: VerboseOption = False,
    json_output: JsonOption = False,
) -> None:
    """
    Decode a single group and print the message.

    Prints Ignored for groups that are recognized but carry no message
    (MOTDETAT, IMAX1..3, PPOT, PMAX, ISOUSC).
    """
    setup_logging(verbose)

    try:
        message = decode(record)
    except ParseError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)
    except Exception as e:
        typer.echo(f"Error: Unexpected error: {e}", err=True)
        if verbose:
            import traceback
            traceback.print_exc()
        raise typer.Exit(4)

    if json_output:
        typer.echo(json.dumps(result_to_dict(DecodeResult(record=record, message=message))))
    else:
        typer.echo(format_message(message))


@app.command()
def parse(
    source: Annotated[str, typer.Argument(help="File with one group per line, or - for stdin")] = "-",
    verbose: VerboseOption = False,
    json_output: JsonOption = False,
    skip_ignored: SkipIgnoredOption = False,
) -> None:
    """
    Decode every line of a capture file (or stdin).

    Frame-control bytes (STX, ETX, CR) are trimmed and blank lines skipped.
    Exits 1 if any group failed to decode.
    """
    setup_logging(verbose)

    failures = 0
    try:
        if source == "-":
            for result in decode_lines(sys.stdin):
                failures += 0 if result.ok else 1
                emit_result(result, json_output, skip_ignored)
        else:
            with open(source, encoding="ascii", errors="replace", newline="") as f:
                for result in decode_lines(f):
                    failures += 0 if result.ok else 1
                    emit_result(result, json_output, skip_ignored)
    except FileNotFoundError:
        typer.echo(f"Error: File not found: {source}", err=True)
        raise typer.Exit(2)
    except Exception as e:
        typer.echo(f"Error: Unexpected error: {e}", err=True)
        if verbose:
            import traceback
            traceback.print_exc()
        raise typer.Exit(4)

    if failures:
        logger.debug("%d group(s) failed to decode", failures)
        raise typer.Exit(1)


@app.command()
def listen(
    port: PortOption = DEFAULT_PORT,
    baudrate: BaudrateOption = DEFAULT_BAUDRATE,
    timeout: TimeoutOption = DEFAULT_TIMEOUT,
    verbose: VerboseOption = False,
    json_output: JsonOption = False,
    skip_ignored: SkipIgnoredOption = False,
    count: Annotated[
        Optional[int],
        typer.Option("--count", "-n", help="Stop after this many records (default: run until Ctrl+C)"),
    ] = None,
) -> None:
    """
    Read a live Teleinfo link and print each decoded group.

    The link is opened 7E1 with no flow control. Decode errors are reported
    and reading continues. Press Ctrl+C to stop.
    """
    setup_logging(verbose)

    if count is not None and count <= 0:
        typer.echo(f"Error: Count must be positive, got {count}", err=True)
        raise typer.Exit(2)

    try:
        with TeleinfoReader(port=port, baudrate=baudrate, timeout=timeout) as reader:
            seen = 0
            for result in reader.iter_messages():
                emit_result(result, json_output, skip_ignored)
                seen += 1
                if count is not None and seen >= count:
                    break
    except SerialIOError as e:
        typer.echo(f"Error: Serial error: {e}", err=True)
        raise typer.Exit(3)
    except KeyboardInterrupt:
        typer.echo("\nStopped by user", err=True)
        raise typer.Exit(0)
    except Exception as e:
        typer.echo(f"Error: Unexpected error: {e}", err=True)
        if verbose:
            import traceback
            traceback.print_exc()
        raise typer.Exit(4)


@app.command()
def codes(
    verbose: VerboseOption = False,
    json_output: JsonOption = False,
) -> None:
    """List the recognized group labels and whether each yields a message."""
    setup_logging(verbose)

    table = {code.value: ("ignored" if code in IGNORED_CODES else "decoded") for code in FieldCode}
    if json_output:
        typer.echo(json.dumps(table, indent=2))
    else:
        for code, kind in table.items():
            typer.echo(f"{code:<10} {kind}")


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"pyteleinfo {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
) -> None:
    """pyteleinfo - decode Teleinfo electricity-meter groups."""
    pass


if __name__ == "__main__":
    app()
