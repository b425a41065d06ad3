"""Project manifest loading.

The manifest is a JSON object keyed by project identifier:

    {
      "Sailor Events": {
        "name": "Sailor Events",
        "file-version": "2.0.0.0",
        "product-version": "2.0",
        "notes": "Fixed the race timer.",
        "company-name": "Acme Marine",
        "copyright": "(c) 2024 Acme Marine"
      }
    }

Every field is optional at load time; a version is only required when a
project is actually generated (`ProjectRecord.version`).
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from relnotes.core.errors import NotesError
from relnotes.core.result import Err, Ok, Result
from relnotes.core.structured import StrDict, as_str_dict, get_str, get_text

__all__ = ["Manifest", "ProjectRecord", "load_manifest"]


@dataclass(frozen=True, slots=True)
class ProjectRecord:
    """Metadata of one project, as written in the manifest."""

    project_id: str
    name: str | None = None
    file_version: str | None = None
    product_version: str | None = None
    notes: str | None = None
    company_name: str | None = None
    copyright: str | None = None

    @classmethod
    def from_dict(cls, project_id: str, data: Mapping[str, object]) -> ProjectRecord:
        return cls(
            project_id=project_id,
            name=get_str(data, "name"),
            file_version=get_str(data, "file-version"),
            product_version=get_str(data, "product-version"),
            notes=get_text(data, "notes"),
            company_name=get_str(data, "company-name"),
            copyright=get_str(data, "copyright"),
        )

    @property
    def display_name(self) -> str:
        return self.name or self.project_id

    @property
    def version(self) -> str | None:
        """File version, else product version."""
        return self.file_version or self.product_version

    def require_version(self) -> Result[str, NotesError]:
        version = self.version
        if version is None:
            return Err(
                NotesError(
                    kind="missing_version",
                    message=f"project '{self.project_id}' has no version",
                    hint="set 'file-version' or 'product-version' in the manifest",
                )
            )
        return Ok(version)


@dataclass(frozen=True, slots=True)
class Manifest:
    path: Path
    entries: dict[str, StrDict]

    @property
    def project_ids(self) -> list[str]:
        return list(self.entries)

    def project(self, project_id: str) -> Result[ProjectRecord, NotesError]:
        data = self.entries.get(project_id)
        if data is None:
            known = ", ".join(self.project_ids) or "(none)"
            return Err(
                NotesError(
                    kind="project_not_found",
                    message=f"project '{project_id}' not found in {self.path.name}",
                    hint=f"known projects: {known}",
                )
            )
        return Ok(ProjectRecord.from_dict(project_id, data))


def load_manifest(path: Path) -> Result[Manifest, NotesError]:
    """Load the manifest file.

    Returns:
        Err(not_found) if the file is absent, Err(parse_error) if it is not a
        JSON object; non-object project entries are dropped.
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        return Err(NotesError(kind="not_found", message=f"manifest not found: {path}"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(NotesError(kind="io_error", message=f"failed to read manifest: {e}"))

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(
            NotesError(kind="parse_error", message=f"invalid manifest JSON: {e}", hint=str(path))
        )

    data = as_str_dict(obj)
    if data is None:
        return Err(
            NotesError(
                kind="parse_error",
                message="manifest root must be a JSON object keyed by project",
                hint=str(path),
            )
        )

    entries: dict[str, StrDict] = {}
    for project_id, value in data.items():
        record = as_str_dict(value)
        if record is not None:
            entries[project_id] = record
    return Ok(Manifest(path=path, entries=entries))
