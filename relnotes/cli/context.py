from __future__ import annotations

from dataclasses import dataclass

import typer

from relnotes.core.config import load_config_or_default
from relnotes.core.errors import exit_code_for
from relnotes.core.repo_root import RepoLayout, detect_repo_root
from relnotes.core.result import Err
from relnotes.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    layout: RepoLayout
    console: ConsoleProtocol


def build_context() -> CLIContext:
    root = detect_repo_root()
    if isinstance(root, Err):
        typer.echo(f"error: {root.error.message}", err=True)
        raise typer.Exit(code=int(exit_code_for(root.error)))

    config = load_config_or_default(root.value)
    if isinstance(config, Err):
        typer.echo(f"error: {config.error.pretty()}", err=True)
        raise typer.Exit(code=int(exit_code_for(config.error)))

    return CLIContext(
        layout=RepoLayout(root=root.value, config=config.value),
        console=RichConsole(),
    )
