"""
Pipeline inspection commands.

Each command runs the pipeline up to one stage and shows its output:
- tokens:   the tokenizer's token stream
- ast:      the parsed tree, rendered back to source (or as JSON)
- bytecode: the compiled instruction listing
- eval:     the final value
"""

from __future__ import annotations

import typer
from rich.table import Table
from rich.text import Text

from calceval.cli.utils import console, print_error
from calceval.core.errors import EvaluationError
from calceval.core.expression_lang import (
    TokenKind,
    compile_expr,
    evaluate,
    parse_expr,
    tokenize,
)
from calceval.core.ir.bytecode import format_listing
from calceval.core.ir.expressions import format_number


def eval_command(
    expression: str = typer.Argument(..., help="Expression to evaluate, e.g. '4+5*6'"),
) -> None:
    """Evaluate one expression and print the result."""
    try:
        result = evaluate(expression)
    except EvaluationError as e:
        print_error(e)
        raise typer.Exit(code=1)
    console.print(format_number(result), markup=False, highlight=False)


def tokens_command(
    expression: str = typer.Argument(..., help="Expression to tokenize"),
) -> None:
    """Show the tokens of an expression."""
    table = Table(title="Tokens")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Source")
    table.add_column("Position", justify="right")

    for i, tok in enumerate(tokenize(expression)):
        style = "red" if tok.kind == TokenKind.ERROR else None
        table.add_row(str(i), tok.kind.value, Text(repr(tok.source)), str(tok.pos), style=style)

    console.print(table)


def ast_command(
    expression: str = typer.Argument(..., help="Expression to parse"),
    as_json: bool = typer.Option(False, "--json", help="Dump the tree as JSON"),
) -> None:
    """Parse an expression and show the tree."""
    try:
        expr = parse_expr(expression)
    except EvaluationError as e:
        print_error(e)
        raise typer.Exit(code=1)

    if as_json:
        try:
            dumped = expr.model_dump_json(indent=2)
        except ValueError as e:
            # pydantic caps serialization depth; long operator chains can exceed it
            console.print(
                f"Cannot dump tree as JSON: {e}", style="red", markup=False, highlight=False
            )
            raise typer.Exit(code=1)
        typer.echo(dumped)
        return
    console.print(str(expr), markup=False, highlight=False)


def bytecode_command(
    expression: str = typer.Argument(..., help="Expression to compile"),
) -> None:
    """Compile an expression and show the instruction listing."""
    try:
        code = compile_expr(expression)
    except EvaluationError as e:
        print_error(e)
        raise typer.Exit(code=1)
    console.print(format_listing(code), markup=False, highlight=False)
