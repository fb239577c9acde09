"""Validate command implementation."""

import dataclasses
import os
from typing import Optional

import typer

from ..config import Config, ConfigLoader
from ..errors import PipelineFailure, ValidationFailed
from ..helpers.error_handler import emit_json, handle_error, handle_success, is_json
from ..validation import Validator, format_validation_result


def load_project_config(
    cwd: str, config_path: Optional[str], quiet: bool, output: str
) -> Config:
    """Load configuration for a CLI command, exiting on failure."""
    show = not quiet and not is_json(output)
    if show:
        typer.echo("Loading configuration...")

    result = ConfigLoader().load(cwd=cwd, config_path=config_path)
    if isinstance(result, PipelineFailure):
        handle_error(result.describe(), output=output)

    if show:
        if result.using_defaults:
            typer.echo("  Using default configuration")
        else:
            typer.echo(f"  Found {result.config_path}")
    return result.config


def validate_command(config_path: Optional[str], quiet: bool, output: str) -> None:
    """Check entry points and action.yml for the current project."""
    cwd = os.getcwd()
    config = load_project_config(cwd, config_path, quiet, output)

    if not quiet and not is_json(output):
        typer.echo("\nValidating...")

    result = Validator().validate(config, cwd=cwd)

    if isinstance(result, ValidationFailed):
        handle_error(result.describe(), output=output)

    if is_json(output):
        emit_json({"success": result.valid, "validation": dataclasses.asdict(result)})
        if not result.valid:
            raise typer.Exit(1)
        return

    # Results are always shown, even in quiet mode
    typer.echo(f"\n{format_validation_result(result)}")

    if not result.valid:
        handle_error("Validation failed")

    if not quiet:
        typer.echo("")
        handle_success("Validation completed successfully!")
