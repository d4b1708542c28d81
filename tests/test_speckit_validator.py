"""Tests for bsr.adapters.speckit.validator module."""

import pytest
from pathlib import Path

from bsr.adapters.speckit.models import (
    Architecture,
    BSRIdea,
    IdeaFeature,
    IdeaPersona,
    Milestone,
)
from bsr.adapters.speckit.validator import (
    ValidationOptions,
    validate_idea,
    validate_idea_file,
    validate_spec,
    validate_features,
    validate_architecture,
    validate_personas,
    is_valid_semver,
)


def minimal_idea(**overrides) -> dict:
    idea = {
        "name": "Minimal",
        "version": "1.0.0",
        "description": "A description that is long enough",
        "goals": ["Ship it"],
        "features": [
            {"id": "F1", "name": "Login", "description": "Sign in", "priority": "P1"},
        ],
    }
    idea.update(overrides)
    return idea


def fields(issues) -> list[str]:
    return [i.field for i in issues]


class TestValidateIdea:
    """Test validate_idea scoring and checks."""

    def test_minimal_document_is_valid_and_unsaturated(self):
        result = validate_idea(minimal_idea())

        assert result.valid is True
        assert 0 < result.score < 100
        assert result.score == 39
        assert result.errors == []

    def test_accepts_model_instance(self):
        idea = BSRIdea(
            name="Typed",
            version="1.0.0",
            description="A description that is long enough",
            goals=["One"],
            features=[IdeaFeature(id="F1", name="A", description="d", priority="P0")],
        )
        assert validate_idea(idea).score == 39

    def test_missing_required_fields(self):
        result = validate_idea({})

        assert result.valid is False
        assert fields(result.errors) == ["name", "version", "description", "goals", "features"]
        assert result.score == 0

    def test_non_semver_version_warns(self):
        result = validate_idea(minimal_idea(version="v1"))

        assert result.valid is True
        assert "version" in fields(result.warnings)
        assert result.score == 37

    @pytest.mark.parametrize("version", ["1.0.0", "0.1.0-beta.1", "2.3.4+build.5", "1.0.0-rc1+sha.abc"])
    def test_semver_accepted(self, version):
        assert is_valid_semver(version)

    @pytest.mark.parametrize("version", ["1.0", "v1.0.0", "1.0.0-", "latest"])
    def test_semver_rejected(self, version):
        assert not is_valid_semver(version)

    def test_short_description_warns(self):
        result = validate_idea(minimal_idea(description="Too short"))

        warning = next(w for w in result.warnings if w.field == "description")
        assert warning.suggestion
        assert result.score == 34

    def test_zero_min_goals_downgrades_to_warning(self):
        result = validate_idea(minimal_idea(goals=[]), ValidationOptions(min_goals=0))

        assert result.valid is True
        assert "goals" in fields(result.warnings)

    def test_fewer_goals_than_minimum(self):
        result = validate_idea(minimal_idea(), ValidationOptions(min_goals=3))

        assert result.valid is True
        assert any("recommend at least 3" in w.message for w in result.warnings)
        assert result.score == 34

    def test_features_points_capped(self):
        features = [
            {"id": f"F{i}", "name": f"N{i}", "description": "d", "priority": "P1"}
            for i in range(1, 9)
        ]
        result = validate_idea(minimal_idea(features=features))

        assert result.score == 55

    def test_fewer_features_than_minimum(self):
        result = validate_idea(minimal_idea(), ValidationOptions(min_features=3))
        assert any(w.field == "features" and "Only 1" in w.message for w in result.warnings)

    def test_full_document_saturates(self):
        idea = minimal_idea(
            vision="Be the best",
            features=[
                {"id": f"F{i}", "name": f"N{i}", "description": "d", "priority": "P1"}
                for i in range(1, 6)
            ],
            architecture={
                "type": "monolith",
                "components": ["a", "b", "c", "d", "e", "f"],
                "integrations": ["x", "y", "z", "w", "v"],
            },
            personas=[{"name": f"P{i}", "role": "r", "needs": ["n"]} for i in range(4)],
            milestones=[{"id": f"M{i}", "name": "m", "features": []} for i in range(1, 5)],
            tech_decisions={"db": "postgres", "lang": "python", "ci": "gh", "cache": "redis", "queue": "sqs"},
        )

        result = validate_idea(idea)

        assert result.valid is True
        assert result.warnings == []
        assert result.score == 100

    def test_architecture_required(self):
        result = validate_idea(minimal_idea(), ValidationOptions(require_architecture=True))
        assert result.valid is False
        assert "architecture" in fields(result.errors)

    def test_empty_architecture_counts_as_missing_when_required(self):
        result = validate_idea(minimal_idea(architecture={}), ValidationOptions(require_architecture=True))
        assert "architecture" in fields(result.errors)

    def test_personas_required(self):
        result = validate_idea(minimal_idea(), ValidationOptions(require_personas=True))
        assert result.valid is False
        assert "personas" in fields(result.errors)

    def test_milestones_required(self):
        result = validate_idea(minimal_idea(), ValidationOptions(require_milestones=True))
        assert result.valid is False
        assert "milestones" in fields(result.errors)

    def test_strict_promotes_warnings(self):
        result = validate_idea(minimal_idea(), ValidationOptions(strict=True))

        assert result.valid is False
        assert result.warnings == []
        assert "vision" in fields(result.errors)
        assert all(e.severity == "error" for e in result.errors)

    def test_strict_keeps_score(self):
        lenient = validate_idea(minimal_idea())
        strict = validate_idea(minimal_idea(), ValidationOptions(strict=True))
        assert strict.score == lenient.score


class TestValidateFeatures:
    """Test validate_features sub-validator."""

    def test_duplicate_ids_after_first(self):
        features = [
            IdeaFeature(id="F1", name="A", description="d", priority="P1"),
            IdeaFeature(id="F1", name="B", description="d", priority="P1"),
            IdeaFeature(id="F1", name="C", description="d", priority="P1"),
        ]

        errors, warnings = validate_features(features)

        assert fields(errors) == ["features[1].id", "features[2].id"]
        assert "Duplicate feature ID: F1" in errors[0].message

    def test_missing_id_and_name(self):
        errors, _ = validate_features([IdeaFeature(id="", name=" ", description="d", priority="P1")])
        assert fields(errors) == ["features[0].id", "features[0].name"]

    def test_invalid_priority_warns_with_suggestion(self):
        _, warnings = validate_features([IdeaFeature(id="F1", name="A", description="d", priority="HIGH")])

        (warning,) = warnings
        assert warning.field == "features[0].priority"
        assert warning.suggestion == "Use P0, P1, P2, or P3"

    def test_empty_description_warns(self):
        _, warnings = validate_features([IdeaFeature(id="F1", name="A", description="", priority="P1")])
        assert fields(warnings) == ["features[0].description"]

    def test_hand_authored_priority_not_normalized(self):
        result = validate_idea(minimal_idea(features=[
            {"id": "F1", "name": "A", "description": "d", "priority": "high"},
        ]))
        assert "features[0].priority" in fields(result.warnings)


class TestValidateArchitecture:
    """Test validate_architecture sub-validator."""

    def test_points(self):
        warnings, points = validate_architecture(Architecture(type="monolith", components=["a", "b"]))
        assert warnings == []
        assert points == 7

    def test_missing_type_warns(self):
        warnings, points = validate_architecture(Architecture(components=["a"]))
        assert fields(warnings) == ["architecture.type"]
        assert points == 1


class TestValidatePersonas:
    """Test validate_personas sub-validator."""

    def test_checks(self):
        errors, warnings = validate_personas([IdeaPersona(name="", role="", needs=[])])
        assert fields(errors) == ["personas[0].name"]
        assert fields(warnings) == ["personas[0].role", "personas[0].needs"]


class TestValidateIdeaFile:
    """Test validate_idea_file function."""

    def test_missing_file(self, tmp_path):
        result = validate_idea_file(tmp_path / "idea.yaml")

        assert result.valid is False
        assert result.score == 0
        assert result.errors[0].field == "file"
        assert "File not found" in result.errors[0].message

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "idea.yaml"
        path.write_text("name: [oops\n")

        result = validate_idea_file(path)

        assert result.valid is False
        assert "YAML" in result.errors[0].message

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "idea.yaml"
        path.write_text("- a\n- b\n")

        result = validate_idea_file(path)

        assert result.valid is False
        assert result.errors[0].field == "file"

    def test_valid_file(self, tmp_path):
        path = tmp_path / "idea.yaml"
        path.write_text(
            "name: FromFile\nversion: 1.0.0\ndescription: Long enough description here\n"
            "goals: [One]\nfeatures:\n  - {id: F1, name: A, description: d, priority: P2}\n"
        )

        result = validate_idea_file(path)

        assert result.valid is True
        assert result.score == 39


class TestValidateSpec:
    """Test validate_spec rubric."""

    def test_short_untitled_document(self):
        result = validate_spec("just text")

        assert result.valid is True
        assert result.score == 0
        assert {w.field for w in result.warnings} == {"sections", "title", "content"}

    def test_complete_document(self):
        content = (
            "# App - Technical Specification\n\n"
            "## 1. Overview\n\n## 2. Architecture\n\n## 3. Technical Decisions\n\n"
            "## 4. Features\n\n## 5. User Personas\n\n## 6. Milestones\n\n## 7. Constraints\n"
        ) + "x" * 500

        result = validate_spec(content)

        assert result.warnings == []
        assert result.score == 85
