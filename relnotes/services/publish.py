"""Publish phase: tags, GitHub release and asset uploads.

Stages run strictly in order and any hard failure aborts the run with no
rollback; every step is create-or-update, so re-running is the recovery path.

    Idle -> TagReconciled -> TagPushed -> ReleaseEnsured -> AssetsUploaded
         [-> LatestReconciled -> LatestPushed -> LatestReleaseEnsured
             -> LatestAssetsUploaded] -> Done
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Literal

from relnotes.core.errors import NotesError
from relnotes.core.repo_root import RepoLayout
from relnotes.core.result import Err, Found, NotFound, Ok, Probe, ProbeFailed, Result
from relnotes.git.repository import Repository, git_failure
from relnotes.output.console import ConsoleProtocol, Style
from relnotes.platform.process import CommandExecutor, ProcessError
from relnotes.platform.tools import resolve_gh, resolve_git
from relnotes.services.assets import collect_assets, stage_stable_copy
from relnotes.services.gh import GhClient, gh_failure
from relnotes.services.notes import RenderedNotes
from relnotes.services.render import latest_tag_name


class PublishStage(Enum):
    IDLE = "Idle"
    TAG_RECONCILED = "TagReconciled"
    TAG_PUSHED = "TagPushed"
    RELEASE_ENSURED = "ReleaseEnsured"
    ASSETS_UPLOADED = "AssetsUploaded"
    LATEST_RECONCILED = "LatestReconciled"
    LATEST_PUSHED = "LatestPushed"
    LATEST_RELEASE_ENSURED = "LatestReleaseEnsured"
    LATEST_ASSETS_UPLOADED = "LatestAssetsUploaded"
    DONE = "Done"
    FAILED = "Failed"

    def __str__(self) -> str:
        return self.value


TagAction = Literal["created", "unchanged", "moved", "diverged"]


@dataclass(frozen=True, slots=True)
class TagOutcome:
    """Result of reconciling a tag with the target commit.

    Attributes:
        action: What happened to the local tag
        commit: Commit the tag points at afterwards
        force_push: Whether the push must be forced
    """

    action: TagAction
    commit: str
    force_push: bool = False


@dataclass(frozen=True, slots=True)
class PublishOptions:
    ref: str = "HEAD"
    force_tag: bool = False
    series_tag: bool = False
    latest: bool = False


def _empty_paths() -> list[Path]:
    return []


@dataclass
class PublishReport:
    stage: PublishStage = PublishStage.IDLE
    commit: str | None = None
    tag: TagOutcome | None = None
    release_created: bool = False
    assets: list[Path] = field(default_factory=_empty_paths)


def reconcile_tag(
    repo: Repository,
    tag: str,
    commit: str,
    *,
    force: bool,
    console: ConsoleProtocol,
) -> Result[TagOutcome, NotesError]:
    """Create tag at commit, or leave/move an existing one.

    A tag at another commit is only moved with force; otherwise it is kept
    and a warning names both commits.
    """
    match repo.tag_commit(tag):
        case ProbeFailed(error):
            return Err(git_failure(error, message=f"failed to inspect tag {tag}"))
        case NotFound():
            created = repo.create_tag(tag, commit)
            if isinstance(created, Err):
                return created
            return Ok(TagOutcome(action="created", commit=commit))
        case Found(existing):
            if existing == commit:
                console.print(f"tag {tag} already at {commit[:12]}", Style.DIM)
                return Ok(TagOutcome(action="unchanged", commit=commit))
            if not force:
                console.warning(
                    f"tag {tag} points at {existing[:12]}, not {commit[:12]}; "
                    "keeping it (use --force-tag to move it)"
                )
                return Ok(TagOutcome(action="diverged", commit=existing))
            moved = repo.create_tag(tag, commit, force=True)
            if isinstance(moved, Err):
                return moved
            return Ok(TagOutcome(action="moved", commit=commit, force_push=True))


def move_tag(repo: Repository, tag: str, commit: str) -> Result[None, NotesError]:
    """Force a moving tag (series or latest) to commit and force-push it."""
    moved = repo.create_tag(tag, commit, force=True)
    if isinstance(moved, Err):
        return moved
    return repo.push_tag(tag, force=True)


def ensure_release(
    gh: GhClient,
    tag: str,
    *,
    probe: Probe[str, ProcessError],
    title: str,
    notes_file: Path,
) -> Result[bool, NotesError]:
    """Create the release or edit it in place; Ok(True) when it was created.

    `probe` is the earlier `release_probe` answer for tag.
    """
    match probe:
        case ProbeFailed(error):
            return Err(gh_failure(error, message=f"failed to query release {tag}"))
        case NotFound():
            created = gh.create_release(tag, title=title, notes_file=notes_file)
            return created.map(lambda _: True)
        case Found(_):
            edited = gh.edit_release(tag, title=title, notes_file=notes_file)
            return edited.map(lambda _: False)


class Publisher:
    """Runs the publish phase for one rendered note.

    `report.stage` tracks the last stage reached; on failure it becomes
    FAILED after the reached stage has been printed.
    """

    def __init__(
        self,
        *,
        layout: RepoLayout,
        executor: CommandExecutor,
        console: ConsoleProtocol,
    ) -> None:
        self._layout = layout
        self._executor = executor
        self._console = console
        self.report = PublishReport()

    @property
    def stage(self) -> PublishStage:
        return self.report.stage

    def publish(
        self, notes: RenderedNotes, options: PublishOptions
    ) -> Result[PublishReport, NotesError]:
        result = self._publish(notes, options)
        if isinstance(result, Err):
            self._console.print(f"publish failed after stage {self.report.stage}", Style.DIM)
            self.report.stage = PublishStage.FAILED
            return result
        self._advance(PublishStage.DONE)
        return Ok(self.report)

    def _advance(self, stage: PublishStage) -> None:
        self.report.stage = stage
        self._console.print(f"stage: {stage}", Style.DIM)

    def _tools(self) -> Result[tuple[str, str], NotesError]:
        if self._executor.dry_run:
            return Ok(("git", "gh"))
        git = resolve_git()
        if isinstance(git, Err):
            return git
        gh = resolve_gh(self._layout.config.tools.gh_paths)
        if isinstance(gh, Err):
            return gh
        return Ok((str(git.value), str(gh.value)))

    def _publish(self, notes: RenderedNotes, options: PublishOptions) -> Result[None, NotesError]:
        console = self._console
        tools = self._tools()
        if isinstance(tools, Err):
            return tools
        git_exe, gh_exe = tools.value

        repo = Repository(
            self._layout.root,
            executor=self._executor,
            remote=self._layout.config.git.remote,
            git=git_exe,
        )
        gh = GhClient(self._layout.root, executor=self._executor, gh=gh_exe)

        # Probed before tagging: once the tag is pushed the answer would not
        # tell whether this run or an earlier one created the release.
        release_probe = gh.release_probe(notes.tag)
        if isinstance(release_probe, ProbeFailed):
            error = gh_failure(release_probe.error, message=f"failed to query release {notes.tag}")
            return Err(error)

        commit = repo.resolve_commit(options.ref)
        if isinstance(commit, Err):
            return commit
        self.report.commit = commit.value
        console.info(f"{options.ref} -> {commit.value}")

        console.header(f"Tag {notes.tag}")
        tag = reconcile_tag(repo, notes.tag, commit.value, force=options.force_tag, console=console)
        if isinstance(tag, Err):
            return tag
        self.report.tag = tag.value
        self._advance(PublishStage.TAG_RECONCILED)

        pushed = repo.push_tag(notes.tag, force=tag.value.force_push)
        if isinstance(pushed, Err):
            return pushed
        self._advance(PublishStage.TAG_PUSHED)

        if options.series_tag:
            series = move_tag(repo, notes.slug, commit.value)
            if isinstance(series, Err):
                return series
            console.success(f"series tag {notes.slug} -> {commit.value[:12]}")

        console.header(f"Release {notes.tag}")
        ensured = ensure_release(
            gh,
            notes.tag,
            probe=release_probe,
            title=f"{notes.context.project_name} {notes.version}",
            notes_file=notes.output_path,
        )
        if isinstance(ensured, Err):
            return ensured
        self.report.release_created = ensured.value
        console.success(f"release {notes.tag} {'created' if ensured.value else 'updated'}")
        self._advance(PublishStage.RELEASE_ENSURED)

        extension = self._layout.config.assets.extension
        assets_dir = self._layout.assets_dir(notes.slug)
        collected = collect_assets(assets_dir, extension)
        if isinstance(collected, Err):
            return collected
        assets = collected.value
        self.report.assets = assets
        if not assets:
            console.warning(f"no {extension} files in {assets_dir}; skipping upload")
        else:
            uploaded = gh.upload_assets(notes.tag, assets)
            if isinstance(uploaded, Err):
                return uploaded
            console.success(f"uploaded {len(assets)} asset(s) to {notes.tag}")
        self._advance(PublishStage.ASSETS_UPLOADED)

        if options.latest:
            return self._publish_latest(repo, gh, notes, commit.value, assets)
        return Ok(None)

    def _publish_latest(
        self,
        repo: Repository,
        gh: GhClient,
        notes: RenderedNotes,
        commit: str,
        assets: list[Path],
    ) -> Result[None, NotesError]:
        console = self._console
        latest = latest_tag_name(notes.slug)
        console.header(f"Latest {latest}")

        moved = repo.create_tag(latest, commit, force=True)
        if isinstance(moved, Err):
            return moved
        self._advance(PublishStage.LATEST_RECONCILED)

        pushed = repo.push_tag(latest, force=True)
        if isinstance(pushed, Err):
            return pushed
        self._advance(PublishStage.LATEST_PUSHED)

        ensured = ensure_release(
            gh,
            latest,
            probe=gh.release_probe(latest),
            title=f"{notes.context.project_name} (latest)",
            notes_file=notes.output_path,
        )
        if isinstance(ensured, Err):
            return ensured
        self._advance(PublishStage.LATEST_RELEASE_ENSURED)

        if assets:
            uploaded = self._upload_latest(gh, latest, notes.slug, assets)
            if isinstance(uploaded, Err):
                return uploaded
            console.success(f"uploaded {len(assets)} asset(s) to {latest}")
        self._advance(PublishStage.LATEST_ASSETS_UPLOADED)
        return Ok(None)

    def _upload_latest(
        self, gh: GhClient, latest: str, slug: str, assets: list[Path]
    ) -> Result[None, NotesError]:
        if len(assets) > 1:
            return gh.upload_assets(latest, assets)
        # A single asset gets a version-free name for a stable download URL.
        with tempfile.TemporaryDirectory(prefix="relnotes-") as tmp:
            staged = stage_stable_copy(assets[0], slug, Path(tmp))
            if isinstance(staged, Err):
                return staged
            return gh.upload_assets(latest, [staged.value])
