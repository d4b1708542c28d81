"""Tests for bsr.lib.validate schema checks."""

import pytest
from pathlib import Path

from bsr.lib.validate import (
    SchemaValidationError,
    validate,
    validate_before_write,
)
from bsr.lib.fileio import write_atomic


def idea_doc(**overrides) -> dict:
    doc = {
        "name": "App",
        "version": "0.1.0",
        "description": "",
        "goals": [],
        "features": [],
    }
    doc.update(overrides)
    return doc


class TestIdeaSchema:
    """Test the idea schema."""

    def test_minimal_document(self):
        validate(idea_doc(), "idea")

    def test_empty_name_rejected(self):
        with pytest.raises(SchemaValidationError) as exc_info:
            validate(idea_doc(name=""), "idea")
        assert exc_info.value.path == "name"

    def test_bad_priority_rejected(self):
        feature = {"id": "F1", "name": "A", "description": "", "priority": "HIGH"}
        with pytest.raises(SchemaValidationError) as exc_info:
            validate(idea_doc(features=[feature]), "idea")
        assert exc_info.value.path == "features.0.priority"

    def test_empty_stories_rejected(self):
        feature = {"id": "F1", "name": "A", "description": "", "priority": "P1", "stories": []}
        with pytest.raises(SchemaValidationError):
            validate(idea_doc(features=[feature]), "idea")

    def test_milestone_id_pattern(self):
        milestone = {"id": "EPIC-1", "name": "x", "features": []}
        with pytest.raises(SchemaValidationError):
            validate(idea_doc(milestones=[milestone]), "idea")

    def test_unknown_architecture_key_rejected(self):
        with pytest.raises(SchemaValidationError):
            validate(idea_doc(architecture={"style": "hexagonal"}), "idea")

    def test_unknown_schema(self):
        with pytest.raises(SchemaValidationError, match="Schema file not found"):
            validate({}, "nope")


class TestValidateBeforeWrite:
    """Test validate_before_write function."""

    def test_message_names_file(self, tmp_path):
        target = tmp_path / "idea.yaml"
        with pytest.raises(SchemaValidationError) as exc_info:
            validate_before_write({"name": "x"}, "idea", target)
        assert "Refusing to write invalid data" in str(exc_info.value)
        assert str(target) in str(exc_info.value)
        assert not target.exists()


class TestWriteAtomic:
    """Test write_atomic function."""

    def test_replaces_existing(self, tmp_path):
        path = tmp_path / "out.txt"
        path.write_text("old")

        write_atomic(path, "new")

        assert path.read_text() == "new"
        assert [p.name for p in tmp_path.iterdir()] == ["out.txt"]

    def test_creates_parents(self, tmp_path):
        path = tmp_path / "a" / "b" / "out.txt"
        write_atomic(path, "x")
        assert path.read_text() == "x"
