from __future__ import annotations

import os
from pathlib import Path

import typer

from relnotes import __version__
from relnotes.cli.commands.generate_cmd import generate
from relnotes.cli.commands.list_cmd import list_projects
from relnotes.core.errors import ErrorCode
from relnotes.core.repo_root import ENV_VAR as REPO_ROOT_ENV_VAR


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(generate)
app.command("list")(list_projects)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    repo_root: Path | None = typer.Option(
        None,
        "--repo-root",
        help="Repository root (overrides auto detection)",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if repo_root is not None:
        try:
            root = repo_root.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --repo-root: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not root.is_dir():
            typer.echo(f"error: --repo-root '{root}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.IO_ERROR))

        os.environ[REPO_ROOT_ENV_VAR] = str(root)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


def main() -> None:
    app()
