from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path

from relnotes.core.errors import NotesError
from relnotes.core.repo_root import RepoLayout
from relnotes.core.result import Err, Ok, Result
from relnotes.git.remote import inspect_remote
from relnotes.output.console import ConsoleProtocol
from relnotes.services.manifest import ProjectRecord, load_manifest
from relnotes.services.render import (
    RenderContext,
    build_render_context,
    render_template,
    slugify,
)


@dataclass(frozen=True, slots=True)
class RenderedNotes:
    """Everything the publish phase needs about one rendered note."""

    project: ProjectRecord
    slug: str
    context: RenderContext
    content: str
    output_path: Path

    @property
    def tag(self) -> str:
        return self.context.tag

    @property
    def version(self) -> str:
        return self.context.version


def load_template(path: Path) -> Result[str, NotesError]:
    try:
        return Ok(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(NotesError(kind="not_found", message=f"template not found: {path}"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(NotesError(kind="io_error", message=f"failed to read template: {e}"))


def render_notes(
    *,
    layout: RepoLayout,
    project_id: str,
    console: ConsoleProtocol,
    output: Path | None = None,
    release_date: date | None = None,
) -> Result[RenderedNotes, NotesError]:
    """Load inputs and render one project's note without writing it."""
    manifest = load_manifest(layout.manifest_path)
    if isinstance(manifest, Err):
        return manifest

    record = manifest.value.project(project_id)
    if isinstance(record, Err):
        return record

    version = record.value.require_version()
    if isinstance(version, Err):
        return version

    slug = slugify(project_id)
    remote = inspect_remote(layout.root, layout.config.git.remote)
    if not remote.is_complete:
        console.warning(
            f"could not detect the '{layout.config.git.remote}' remote owner/name; "
            "image URL falls back to a repository-relative path"
        )

    context = build_render_context(
        record=record.value,
        version=version.value,
        slug=slug,
        remote=remote,
        release_date=release_date or date.today(),
        asset_ext=layout.config.assets.extension,
    )

    template = load_template(layout.template_path)
    if isinstance(template, Err):
        return template

    content = render_template(template.value, context.as_mapping())
    output_path = output if output is not None else layout.default_output_path(slug, context.tag)
    return Ok(
        RenderedNotes(
            project=record.value,
            slug=slug,
            context=context,
            content=content,
            output_path=output_path,
        )
    )


def write_notes(notes: RenderedNotes) -> Result[Path, NotesError]:
    """Write the rendered note, creating parent directories and overwriting."""
    path = notes.output_path
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(notes.content, encoding="utf-8")
    except OSError as e:
        return Err(
            NotesError(
                kind="io_error",
                message=f"failed to write release notes: {e}",
                hint=str(path),
            )
        )
    return Ok(path)
