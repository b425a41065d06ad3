from __future__ import annotations

from datetime import date
from pathlib import Path

import typer

from relnotes.cli.commands._helpers import exit_usage, exit_with_error
from relnotes.cli.context import build_context
from relnotes.core.result import Err
from relnotes.output.console import Style
from relnotes.services.service import GenerateOptions
from relnotes.services.service import generate as generate_notes


def _parse_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        exit_usage(f"invalid --date (expected YYYY-MM-DD): {value}")


def generate(
    project: str = typer.Argument(..., help="Project identifier as written in the manifest."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the note here instead of .repo/releases/."
    ),
    publish: bool = typer.Option(
        False, "--publish", help="Tag, push and create/update the GitHub release."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print publish commands instead of running them."
    ),
    ref: str = typer.Option("HEAD", "--ref", help="Commit-ish the release tag points at."),
    force_tag: bool = typer.Option(
        False, "--force-tag", help="Move the version tag if it points at another commit."
    ),
    series_tag: bool = typer.Option(
        False, "--series-tag", help="Also force-move the '<slug>' series tag."
    ),
    latest: bool = typer.Option(
        False, "--latest", help="Also update '<slug>-latest' and its release."
    ),
    release_date: str | None = typer.Option(
        None, "--date", help="Release date (YYYY-MM-DD), defaults to today."
    ),
) -> None:
    """Render a project's release note and optionally publish it."""
    options = GenerateOptions(
        output=output.expanduser().resolve() if output is not None else None,
        publish=publish,
        dry_run=dry_run,
        ref=ref,
        force_tag=force_tag,
        series_tag=series_tag,
        latest=latest,
        release_date=_parse_date(release_date),
    )
    if dry_run and not publish:
        typer.echo("note: --dry-run only affects --publish", err=True)

    ctx = build_context()
    result = generate_notes(
        layout=ctx.layout,
        project_id=project,
        options=options,
        console=ctx.console,
    )
    if isinstance(result, Err):
        exit_with_error(result.error, ctx)

    outcome = result.value
    if outcome.publish is not None:
        suffix = " (dry-run)" if dry_run else ""
        ctx.console.success(f"published {outcome.notes.tag}{suffix}")
    else:
        ctx.console.print(f"tag: {outcome.notes.tag}", Style.DIM)
