"""
calceval CLI application.

Registers all commands; command implementations live in the modules of
calceval/cli/.
"""

from pathlib import Path

import typer

from calceval.cli.inspect import (
    ast_command,
    bytecode_command,
    eval_command,
    tokens_command,
)
from calceval.cli.repl import repl_command
from calceval.cli.utils import configure_logging, print_error, version_callback
from calceval.core.errors import ConfigError
from calceval.core.manifest import find_config, load_config

# =============================================================================
# Main Application
# =============================================================================

app = typer.Typer(
    help="""calceval – arithmetic expression evaluator

Commands:
  • repl: interactive loop, one expression per line
  • eval: evaluate a single expression
  • tokens, ast, bytecode: inspect a pipeline stage

Expressions starting with '-' need a '--' separator: calceval eval -- -3*2
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    config_path: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Path to calceval.toml (default: ./calceval.toml if present)",
    ),
) -> None:
    """calceval CLI main callback for global options."""
    try:
        config = load_config(config_path) if config_path else find_config()
    except ConfigError as e:
        print_error(e)
        raise typer.Exit(code=2)

    configure_logging(config)
    ctx.obj = config


app.command(name="repl")(repl_command)
app.command(name="eval")(eval_command)
app.command(name="tokens")(tokens_command)
app.command(name="ast")(ast_command)
app.command(name="bytecode")(bytecode_command)


def main(argv: list[str] | None = None) -> None:
    """Console script entry point."""
    app(args=argv)
