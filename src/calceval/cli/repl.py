"""
Interactive evaluation loop.

Reads one expression per line, evaluates it and prints the result, until the
exit command or end of input.
"""

from __future__ import annotations

import logging

import typer

from calceval.cli.utils import console, get_config
from calceval.core.errors import EvaluationError
from calceval.core.expression_lang import evaluate
from calceval.core.ir.expressions import format_number
from calceval.core.manifest import ReplConfig

logger = logging.getLogger(__name__)


def run_repl(config: ReplConfig, *, show_errors: bool = False) -> int:
    """Run the loop until the exit command or EOF.

    Returns:
        Number of lines that were evaluated (successfully or not).
    """
    if config.banner:
        console.print(
            f'Enter expressions to evaluate, or "{config.exit_command}" to exit.',
            markup=False,
            highlight=False,
        )

    evaluated = 0
    while True:
        try:
            line = console.input(config.prompt, markup=False).strip()
        except EOFError:
            break

        if line == config.exit_command:
            break
        if not line:
            continue

        evaluated += 1
        try:
            result = evaluate(line)
        except EvaluationError as e:
            logger.info("Failed to evaluate %r: %s", line, e.message)
            message = str(e) if show_errors or config.show_errors else config.error_message
            console.print(message, markup=False, highlight=False)
            continue

        console.print(format_number(result), markup=False, highlight=False)

    return evaluated


def repl_command(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Show the error for failed expressions instead of a generic message",
    ),
) -> None:
    """Start an interactive session: one expression per line."""
    config = get_config(ctx)
    try:
        evaluated = run_repl(config.repl, show_errors=verbose)
    except KeyboardInterrupt:
        console.print()
        return
    logger.debug("REPL session ended after %d expressions", evaluated)
