"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from relnotes.core.errors import ErrorCode, NotesError, exit_code_for
from relnotes.output.console import Style

if TYPE_CHECKING:
    from relnotes.cli.context import CLIContext


def exit_with_error(error: NotesError, ctx: CLIContext) -> NoReturn:
    """Print error (and its hint) and exit with the code of its kind."""
    ctx.console.error(error.message)
    if error.hint:
        ctx.console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(exit_code_for(error)))


def exit_usage(message: str) -> NoReturn:
    typer.echo(f"error: {message}", err=True)
    raise typer.Exit(code=int(ErrorCode.USER_ERROR))
