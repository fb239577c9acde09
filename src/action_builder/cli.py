#!/usr/bin/env python3
"""
GitHub Action Builder CLI - bundle, validate and scaffold TypeScript GitHub Actions
"""

from typing import Optional

import typer
from rich.console import Console

from . import __version__
from .commands.build import build_command
from .commands.init import init_command
from .commands.validate import validate_command
from .helpers.logger import ROOT_LOGGER, resolve_log_level, setup_logger

console = Console()


def configure_logging(output_format: str = "TEXT", log_level: Optional[str] = None):
    """Configure logging based on output format and log level."""
    # For JSON output, send logs to stderr to keep stdout clean
    json_output = output_format.upper() == "JSON"
    setup_logger(ROOT_LOGGER, resolve_log_level(log_level), json_output)


app = typer.Typer(
    help="GitHub Action Builder - bundle TypeScript GitHub Actions for node24",
    no_args_is_help=True,
    add_completion=False,
    epilog="💡 Use 'github-action-builder <command> --help' for command-specific help",
)

# Global log level option
LOG_LEVEL = None


def version_callback(value: bool):
    if value:
        console.print(f"github-action-builder [cyan]{__version__}[/cyan]")
        raise typer.Exit()


@app.callback()
def main(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        case_sensitive=False,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit",
        callback=version_callback,
        is_eager=True,
    ),
):
    """GitHub Action Builder - bundle TypeScript GitHub Actions for node24."""
    global LOG_LEVEL
    LOG_LEVEL = log_level


@app.command(
    "build",
    help="Validate and bundle src/main.ts, src/pre.ts and src/post.ts into dist/. Example: github-action-builder build --config action.config.yaml",
    rich_help_panel="Action Commands",
)
def build(
    config: str = typer.Option(
        None, "--config", "-c", help="Path to configuration file"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-error output"
    ),
    no_validate: bool = typer.Option(
        False, "--no-validate", help="Skip validation step"
    ),
    output: str = typer.Option(
        "TEXT", "--output", "-o", help="Output format: TEXT (default) or JSON"
    ),
):
    """Bundle the action's entry points."""
    configure_logging(output, LOG_LEVEL)
    build_command(config, quiet, no_validate, output)


@app.command(
    "validate",
    help="Check entry points and action.yml without building. Example: github-action-builder validate",
    rich_help_panel="Action Commands",
)
def validate(
    config: str = typer.Option(
        None, "--config", "-c", help="Path to configuration file"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-error output"
    ),
    output: str = typer.Option(
        "TEXT", "--output", "-o", help="Output format: TEXT (default) or JSON"
    ),
):
    """Validate action.yml and configuration."""
    configure_logging(output, LOG_LEVEL)
    validate_command(config, quiet, output)


@app.command(
    "init",
    help="Scaffold a new action project. Example: github-action-builder init my-action",
    rich_help_panel="Project Commands",
)
def init(
    name: str = typer.Argument(
        ..., help="Name of the GitHub Action (also the output directory)"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite existing files"
    ),
):
    """Create a new GitHub Action project."""
    configure_logging("TEXT", LOG_LEVEL)
    init_command(name, force)


if __name__ == "__main__":
    app()
