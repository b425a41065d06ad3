"""Generate (and optionally publish) the release note of one project."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path

from relnotes.core.errors import NotesError
from relnotes.core.repo_root import RepoLayout
from relnotes.core.result import Err, Ok, Result
from relnotes.output.console import ConsoleProtocol
from relnotes.platform.process import CommandExecutor, DryRunExecutor, SubprocessExecutor
from relnotes.services.notes import RenderedNotes, render_notes, write_notes
from relnotes.services.publish import PublishOptions, PublishReport, Publisher


@dataclass(frozen=True, slots=True)
class GenerateOptions:
    """Options of one `generate` invocation.

    Attributes:
        output: Output path override (default `.repo/releases/{slug}/{tag}.md`)
        publish: Run the publish phase after writing the note
        dry_run: Print publish commands instead of running them
        ref: Commit-ish the tags point at
        force_tag: Move an existing version tag that points elsewhere
        series_tag: Also force-move the `{slug}` series tag
        latest: Also maintain `{slug}-latest` and its release
        release_date: Date written as `releaseDate` (default today)
    """

    output: Path | None = None
    publish: bool = False
    dry_run: bool = False
    ref: str = "HEAD"
    force_tag: bool = False
    series_tag: bool = False
    latest: bool = False
    release_date: date | None = None

    def publish_options(self) -> PublishOptions:
        return PublishOptions(
            ref=self.ref,
            force_tag=self.force_tag,
            series_tag=self.series_tag,
            latest=self.latest,
        )


@dataclass(frozen=True, slots=True)
class GenerateOutcome:
    notes: RenderedNotes
    written: Path
    publish: PublishReport | None = None


def make_executor(console: ConsoleProtocol, *, dry_run: bool) -> CommandExecutor:
    if dry_run:
        return DryRunExecutor(console)
    return SubprocessExecutor(console)


def generate(
    *,
    layout: RepoLayout,
    project_id: str,
    options: GenerateOptions,
    console: ConsoleProtocol,
    executor: CommandExecutor | None = None,
) -> Result[GenerateOutcome, NotesError]:
    """Render and write the note, then publish it if requested.

    Nothing is written when an input (manifest, project, version, template)
    is missing. The note is written the same way with or without dry-run.
    """
    rendered = render_notes(
        layout=layout,
        project_id=project_id,
        console=console,
        output=options.output,
        release_date=options.release_date,
    )
    if isinstance(rendered, Err):
        return rendered
    notes = rendered.value

    written = write_notes(notes)
    if isinstance(written, Err):
        return written
    console.success(f"wrote {written.value}")

    if not options.publish:
        return Ok(GenerateOutcome(notes=notes, written=written.value))

    publisher = Publisher(
        layout=layout,
        executor=executor or make_executor(console, dry_run=options.dry_run),
        console=console,
    )
    report = publisher.publish(notes, options.publish_options())
    if isinstance(report, Err):
        return report
    return Ok(GenerateOutcome(notes=notes, written=written.value, publish=report.value))
