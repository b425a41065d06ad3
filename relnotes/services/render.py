"""Release note rendering: names, render context and template substitution."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date

from relnotes.git.remote import RemoteInfo
from relnotes.services.manifest import ProjectRecord

__all__ = [
    "NOTES_FALLBACK",
    "RenderContext",
    "build_render_context",
    "image_url",
    "latest_tag_name",
    "render_template",
    "slugify",
    "tag_name",
]

NOTES_FALLBACK = "The author has not provided specific release notes for this version."

_WHITESPACE_RE = re.compile(r"\s+")
_TOKEN_RE = re.compile(r"\{\{([A-Za-z0-9_]+)\}\}")


def slugify(project_id: str) -> str:
    """Lowercase the id and turn whitespace runs into hyphens.

    "Sailor  Events" -> "sailor-events", " Sailor Events" -> "-sailor-events"
    """
    return _WHITESPACE_RE.sub("-", project_id).lower()


def tag_name(slug: str, version: str) -> str:
    return f"{slug}-v{version}"


def latest_tag_name(slug: str) -> str:
    return f"{slug}-latest"


def card_path(slug: str) -> str:
    return f".repo/resources/{slug}/card.png"


def image_url(slug: str, remote: RemoteInfo) -> str:
    """Raw URL of the project card; repository-relative when the remote is unknown."""
    if not remote.is_complete:
        return card_path(slug)
    return (
        f"https://raw.githubusercontent.com/{remote.owner}/{remote.name}/"
        f"{remote.default_branch}/{card_path(slug)}"
    )


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Resolved values for every template placeholder."""

    project_name: str
    version: str
    tag: str
    image_url: str
    release_date: str
    notes: str
    company_name: str
    copyright: str
    asset_ext: str

    def as_mapping(self) -> dict[str, str]:
        """Placeholder name -> value, keyed as written in the template."""
        return {
            "projectName": self.project_name,
            "version": self.version,
            "tag": self.tag,
            "imageUrl": self.image_url,
            "releaseDate": self.release_date,
            "notes": self.notes,
            "companyName": self.company_name,
            "copyright": self.copyright,
            "assetExt": self.asset_ext,
        }


def build_render_context(
    *,
    record: ProjectRecord,
    version: str,
    slug: str,
    remote: RemoteInfo,
    release_date: date,
    asset_ext: str,
) -> RenderContext:
    return RenderContext(
        project_name=record.display_name,
        version=version,
        tag=tag_name(slug, version),
        image_url=image_url(slug, remote),
        release_date=release_date.isoformat(),
        notes=record.notes or NOTES_FALLBACK,
        company_name=record.company_name or "",
        copyright=record.copyright or "",
        asset_ext=asset_ext,
    )


def render_template(template: str, values: Mapping[str, str]) -> str:
    """Replace each `{{key}}` with its value, literally and in a single pass.

    Unknown tokens are left as they are. Substituted values are never
    rescanned, so notes that mention `{{tag}}` come out verbatim.
    """

    def substitute(match: re.Match[str]) -> str:
        return values.get(match.group(1), match.group(0))

    return _TOKEN_RE.sub(substitute, template)
