"""
calceval CLI Utilities.

Shared helpers used across CLI modules.
"""

from __future__ import annotations

import logging
import platform

import typer
from rich.console import Console

from calceval._version import get_version
from calceval.core.errors import CalcEvalError
from calceval.core.manifest import CalcConfig

console = Console()


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"calceval {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def configure_logging(config: CalcConfig) -> None:
    """Route library logging to stderr at the configured level."""
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )


def get_config(ctx: typer.Context) -> CalcConfig:
    """Return the config loaded by the main callback, or defaults."""
    if isinstance(ctx.obj, CalcConfig):
        return ctx.obj
    return CalcConfig()


def print_error(error: CalcEvalError) -> None:
    """Print an error message (with its source context) in red."""
    console.print(str(error), style="red", markup=False, highlight=False)
