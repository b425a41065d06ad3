from __future__ import annotations

from relnotes.cli.commands._helpers import exit_with_error
from relnotes.cli.context import build_context
from relnotes.core.result import Err
from relnotes.output.console import Style
from relnotes.services.manifest import load_manifest
from relnotes.services.render import slugify, tag_name


def list_projects() -> None:
    """List manifest projects with their slug, version and tag."""
    ctx = build_context()

    manifest = load_manifest(ctx.layout.manifest_path)
    if isinstance(manifest, Err):
        exit_with_error(manifest.error, ctx)

    ctx.console.print(f"manifest: {manifest.value.path}", Style.DIM)
    project_ids = manifest.value.project_ids
    if not project_ids:
        ctx.console.warning("manifest has no projects")
        return

    for project_id in project_ids:
        record = manifest.value.project(project_id)
        if isinstance(record, Err):
            continue
        slug = slugify(project_id)
        version = record.value.version
        if version is None:
            ctx.console.warning(f"{project_id} ({slug}): no file-version or product-version")
            continue
        ctx.console.print(f"{project_id}: {slug} {version} -> {tag_name(slug, version)}")
