"""Tests for relnotes.services.manifest module."""

from __future__ import annotations

import json
from pathlib import Path

from relnotes.core.result import Err, Ok
from relnotes.services.manifest import Manifest, ProjectRecord, load_manifest


def _write(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _load(path: Path) -> Manifest:
    result = load_manifest(path)
    assert isinstance(result, Ok)
    return result.value


class TestLoadManifest:
    def test_loads_projects_in_order(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "projects.json", {"B": {"name": "b"}, "A": {"name": "a"}})

        result = load_manifest(path)

        assert isinstance(result, Ok)
        assert result.value.project_ids == ["B", "A"]

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_manifest(tmp_path / "projects.json")

        assert isinstance(result, Err)
        assert result.error.kind == "not_found"

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "projects.json"
        path.write_text("{not json", encoding="utf-8")

        result = load_manifest(path)

        assert isinstance(result, Err)
        assert result.error.kind == "parse_error"

    def test_root_must_be_object(self, tmp_path: Path) -> None:
        result = load_manifest(_write(tmp_path / "projects.json", [{"name": "x"}]))

        assert isinstance(result, Err)
        assert result.error.kind == "parse_error"

    def test_byte_order_mark_accepted(self, tmp_path: Path) -> None:
        path = tmp_path / "projects.json"
        path.write_text('\ufeff{"App": {"file-version": "1.0"}}', encoding="utf-8")

        result = load_manifest(path)

        assert isinstance(result, Ok)
        assert result.value.project_ids == ["App"]

    def test_non_object_entries_dropped(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "projects.json", {"App": {"name": "x"}, "Junk": "text"})

        result = load_manifest(path)

        assert isinstance(result, Ok)
        assert result.value.project_ids == ["App"]


class TestProject:
    def test_unknown_project_lists_known(self, tmp_path: Path) -> None:
        manifest = _load(_write(tmp_path / "p.json", {"App": {}, "Tool": {}}))

        result = manifest.project("Nope")

        assert isinstance(result, Err)
        assert result.error.kind == "project_not_found"
        assert result.error.hint == "known projects: App, Tool"

    def test_record_fields(self, tmp_path: Path) -> None:
        data = {
            "Sailor Events": {
                "name": "Sailor Events",
                "file-version": "2.0.0.0",
                "product-version": "2.0",
                "notes": "Race timer fixes.",
                "company-name": "Acme Marine",
                "copyright": "(c) 2024 Acme Marine",
            }
        }
        manifest = _load(_write(tmp_path / "p.json", data))

        record = manifest.project("Sailor Events")

        assert record == Ok(
            ProjectRecord(
                project_id="Sailor Events",
                name="Sailor Events",
                file_version="2.0.0.0",
                product_version="2.0",
                notes="Race timer fixes.",
                company_name="Acme Marine",
                copyright="(c) 2024 Acme Marine",
            )
        )


class TestProjectRecord:
    def test_file_version_preferred(self) -> None:
        record = ProjectRecord("App", file_version="1.2.3.4", product_version="1.2")
        assert record.version == "1.2.3.4"

    def test_product_version_fallback(self) -> None:
        assert ProjectRecord("App", product_version="1.2").version == "1.2"

    def test_blank_version_is_missing(self) -> None:
        record = ProjectRecord.from_dict("App", {"file-version": "  ", "product-version": ""})

        result = record.require_version()

        assert isinstance(result, Err)
        assert result.error.kind == "missing_version"

    def test_notes_kept_verbatim(self) -> None:
        notes = "    indented code block\n\n- item\n\n"

        record = ProjectRecord.from_dict("App", {"notes": notes, "name": "  App  "})

        assert record.notes == notes
        assert record.name == "App"

    def test_blank_notes_are_missing(self) -> None:
        assert ProjectRecord.from_dict("App", {"notes": " \n\t"}).notes is None

    def test_numeric_version_not_coerced(self) -> None:
        assert ProjectRecord.from_dict("App", {"file-version": 2}).version is None

    def test_display_name_falls_back_to_id(self) -> None:
        assert ProjectRecord("Sailor Events").display_name == "Sailor Events"
