"""Build command implementation."""

import dataclasses
import os
from typing import Any, Dict, Optional

import typer

from ..build import Builder, NccBundler, format_build_result
from ..errors import PipelineFailure
from ..helpers.error_handler import (
    emit_json,
    handle_error,
    handle_success,
    handle_warning,
    is_json,
)
from ..validation import Validator, format_validation_result
from .validate import load_project_config


def build_command(
    config_path: Optional[str], quiet: bool, no_validate: bool, output: str
) -> None:
    """Validate (unless skipped) and bundle every entry point."""
    cwd = os.getcwd()
    show = not quiet and not is_json(output)
    payload: Dict[str, Any] = {}

    config = load_project_config(cwd, config_path, quiet, output)

    if not no_validate:
        if show:
            typer.echo("\nValidating...")

        validation = Validator().validate(config, cwd=cwd)
        if isinstance(validation, PipelineFailure):
            handle_error(validation.describe(), output=output)

        payload["validation"] = dataclasses.asdict(validation)
        if not validation.valid:
            if is_json(output):
                emit_json({"success": False, "error": "Validation failed", **payload})
                raise typer.Exit(1)
            typer.echo(f"\n{format_validation_result(validation)}", err=True)
            handle_error("Validation failed")

        if show:
            if validation.warnings:
                typer.echo(format_validation_result(validation))
            else:
                typer.echo("  All checks passed")

    if show:
        typer.echo("\nBuilding...")

    result = Builder(NccBundler()).build(config, cwd=cwd)
    if isinstance(result, PipelineFailure):
        handle_error(result.describe(), output=output)

    if is_json(output):
        payload["build"] = dataclasses.asdict(result)
        emit_json({"success": result.success, "error": result.error, **payload})
        if not result.success:
            raise typer.Exit(1)
        return

    if not result.success:
        typer.echo(f"\n{format_build_result(result)}", err=True)
        handle_error(f"Build failed: {result.error}")

    if not quiet:
        typer.echo(f"\n{format_build_result(result)}")
        typer.echo("")
        handle_success("Build completed successfully!")
    else:
        for warning in result.warnings:
            handle_warning(warning)
