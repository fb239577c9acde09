"""Error handling and status output for the action builder CLI."""

import json
from typing import Any, Dict

import typer


def is_json(output: str) -> bool:
    return output.upper() == "JSON"


def emit_json(payload: Dict[str, Any]) -> None:
    """Write a JSON document to stdout."""
    typer.echo(json.dumps(payload, indent=2, default=str))


def handle_error(message: str, exit_code: int = 1, output: str = "TEXT") -> None:
    """Report an error and exit; JSON mode emits ``{"success": false, ...}``."""
    if is_json(output):
        emit_json({"success": False, "error": message})
    else:
        typer.echo(f"❌ Error: {message}", err=True)
    raise typer.Exit(exit_code)


def _status(prefix: str, message: str, output: str) -> None:
    # stdout is reserved for the JSON document
    typer.echo(f"{prefix} {message}", err=is_json(output))


def handle_warning(message: str, output: str = "TEXT") -> None:
    _status("⚠️ Warning:", message, output)


def handle_success(message: str, output: str = "TEXT") -> None:
    _status("✅", message, output)


def handle_info(message: str, output: str = "TEXT") -> None:
    _status("ℹ️", message, output)
