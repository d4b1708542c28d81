"""Tests for bsr.adapters.bmad.pipeline module."""

import pytest
import yaml
from pathlib import Path

from bsr.lib.errors import ErrorKind
from bsr.adapters.bmad import (
    TransformOptions,
    bmad_to_bsr,
    bmad_file_to_bsr,
    convert_bmad_to_bsr,
)


def write_bmad_dir(root: Path) -> Path:
    """Create a small but complete BMAD output directory."""
    bmad = root / "bmad"
    bmad.mkdir()
    (bmad / "project.yaml").write_text(
        "name: Bookshelf\n"
        "description: Track books you own and lend\n"
        "vision: A REST API with a small dashboard\n"
        "goals:\n  - Catalog books\n"
        "features:\n"
        "  - name: Catalog\n    description: Store books\n    priority: high\n"
        "  - name: Lending\n    description: Lend to friends\n"
    )
    (bmad / "personas").mkdir()
    (bmad / "personas" / "reader.yaml").write_text("name: Reader\nrole: Owner\ngoals: [Find books]\n")
    (bmad / "epics").mkdir()
    (bmad / "epics" / "e1.yaml").write_text("title: MVP\nfeatures: [F1, F2]\n")
    (bmad / "stories").mkdir()
    (bmad / "stories" / "s1.yaml").write_text("id: S1\ntitle: Catalog import\n")
    return bmad


class TestBmadToBsr:
    """Test bmad_to_bsr function."""

    def test_transforms_after_parse(self, tmp_path):
        bmad = write_bmad_dir(tmp_path)

        parse_result, transform_result = bmad_to_bsr(bmad)

        assert parse_result.success is True
        assert transform_result.success is True
        assert transform_result.idea.name == "Bookshelf"

    def test_skips_transform_when_parse_fails(self, tmp_path):
        parse_result, transform_result = bmad_to_bsr(tmp_path / "missing")

        assert parse_result.success is False
        assert transform_result is None


class TestBmadFileToBsr:
    """Test bmad_file_to_bsr function."""

    def test_single_markdown_file(self, tmp_path):
        path = tmp_path / "project.md"
        path.write_text("# Solo\n\n## Description\nOne file only\n")

        parse_result, transform_result = bmad_file_to_bsr(path)

        assert transform_result.success is True
        assert transform_result.idea.name == "Solo"
        assert transform_result.idea.description == "One file only"

    def test_unsupported_file_skips_transform(self, tmp_path):
        path = tmp_path / "project.json"
        path.write_text("{}")

        parse_result, transform_result = bmad_file_to_bsr(path)

        assert "Unsupported" in parse_result.errors[0]
        assert transform_result is None


class TestConvertBmadToBsr:
    """Test convert_bmad_to_bsr end to end."""

    def test_minimal_end_to_end(self, tmp_path):
        bmad = tmp_path / "bmad"
        bmad.mkdir()
        (bmad / "project.yaml").write_text("name: FullPipeline\ndescription: E2E test\n")
        output = tmp_path / "out" / "idea.yaml"

        result = convert_bmad_to_bsr(bmad, output)

        assert result.success is True
        assert result.idea.name == "FullPipeline"
        assert output.exists()
        assert yaml.safe_load(output.read_text())["name"] == "FullPipeline"

    def test_full_directory(self, tmp_path):
        bmad = write_bmad_dir(tmp_path)
        output = tmp_path / "docs" / "idea.yaml"

        result = convert_bmad_to_bsr(bmad, output, TransformOptions(include_personas=True))

        assert result.success is True
        data = yaml.safe_load(output.read_text())
        assert [f["priority"] for f in data["features"]] == ["P0", "P1"]
        assert data["features"][0]["stories"] == ["S1"]
        assert "stories" not in data["features"][1]
        assert data["milestones"] == [{"id": "M1", "name": "MVP", "features": ["F1", "F2"]}]
        assert data["personas"] == [{"name": "Reader", "role": "Owner", "needs": ["Find books"]}]
        assert data["architecture"]["type"] == "api-first"
        assert "frontend" in data["architecture"]["components"]

    def test_missing_directory(self, tmp_path):
        output = tmp_path / "idea.yaml"

        result = convert_bmad_to_bsr(tmp_path / "missing", output)

        assert result.success is False
        assert result.idea is None
        assert any("not found" in e for e in result.errors)
        assert result.has_error(ErrorKind.NOT_FOUND)
        assert not output.exists()

    def test_empty_directory_fails_on_name(self, tmp_path):
        bmad = tmp_path / "bmad"
        bmad.mkdir()
        output = tmp_path / "idea.yaml"

        result = convert_bmad_to_bsr(bmad, output)

        assert result.success is False
        assert "No project file found" in result.warnings
        assert "Project name is required" in result.errors
        assert not output.exists()

    def test_warnings_carried_through(self, tmp_path):
        bmad = write_bmad_dir(tmp_path)
        (bmad / "stories" / "broken.yaml").write_text("title: [x\n")

        result = convert_bmad_to_bsr(bmad, tmp_path / "idea.yaml")

        assert result.success is True
        assert "Skipped invalid story file: broken.yaml" in result.warnings

    def test_errors_not_duplicated(self, tmp_path):
        bmad = tmp_path / "bmad"
        bmad.mkdir()
        (bmad / "project.yaml").write_text("name: X\n")
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        result = convert_bmad_to_bsr(bmad, blocker / "idea.yaml")

        assert result.success is False
        assert len(result.errors) == 1
        assert "Failed to write file" in result.errors[0]
