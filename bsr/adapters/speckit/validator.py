"""
SpecKit validator.

Scores a BSR idea document against a fixed completeness rubric and
reports field-level errors and warnings.
"""

import logging
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

import yaml

from bsr.adapters.speckit.models import (
    PRIORITIES,
    Architecture,
    BSRIdea,
    IdeaFeature,
    IdeaPersona,
)

logger = logging.getLogger(__name__)

SEMVER_RE = re.compile(r'^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?(\+[a-zA-Z0-9.]+)?$')

MIN_DESCRIPTION_LENGTH = 20
MAX_SCORE = 100

SPEC_REQUIRED_SECTIONS = ["Overview", "Architecture", "Features"]
SPEC_OPTIONAL_SECTIONS = ["Technical Decisions", "Personas", "Milestones", "Constraints"]
SPEC_MIN_LENGTH = 500


@dataclass
class ValidationIssue:
    field: str
    message: str
    severity: str = "error"                    # "error" or "warning"
    suggestion: Optional[str] = None


@dataclass
class ValidationResult:
    valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)
    score: int = 0                             # 0-100 completeness


@dataclass
class ValidationOptions:
    strict: bool = False                       # Warnings become errors
    require_personas: bool = False
    require_milestones: bool = False
    require_architecture: bool = False
    min_features: int = 1
    min_goals: int = 1


def _error(field_name: str, message: str) -> ValidationIssue:
    return ValidationIssue(field=field_name, message=message, severity="error")


def _warning(field_name: str, message: str, suggestion: str | None = None) -> ValidationIssue:
    return ValidationIssue(field=field_name, message=message, severity="warning", suggestion=suggestion)


def validate_idea(idea, options: ValidationOptions | None = None) -> ValidationResult:
    """Validate a BSR idea (BSRIdea or plain mapping) and score its completeness."""
    opts = options or ValidationOptions()
    if isinstance(idea, dict):
        idea = BSRIdea.from_dict(idea)

    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []
    points = 0

    # Required fields
    if not idea.name or not idea.name.strip():
        errors.append(_error("name", "Project name is required"))
    else:
        points += 10

    if not idea.version or not idea.version.strip():
        errors.append(_error("version", "Version is required"))
    elif not is_valid_semver(idea.version):
        warnings.append(_warning(
            "version",
            "Version should follow semver format (e.g., 1.0.0)",
            "Use format: MAJOR.MINOR.PATCH",
        ))
        points += 3
    else:
        points += 5

    if not idea.description or not idea.description.strip():
        errors.append(_error("description", "Description is required"))
    elif len(idea.description) < MIN_DESCRIPTION_LENGTH:
        warnings.append(_warning(
            "description",
            "Description is too short",
            f"Provide at least {MIN_DESCRIPTION_LENGTH} characters describing the project",
        ))
        points += 5
    else:
        points += 10

    # Goals
    if not idea.goals:
        if opts.min_goals > 0:
            errors.append(_error("goals", f"At least {opts.min_goals} goal(s) required"))
        else:
            warnings.append(_warning("goals", "No goals defined"))
    elif len(idea.goals) < max(opts.min_goals, 1):
        warnings.append(_warning(
            "goals",
            f"Only {len(idea.goals)} goal(s) defined, recommend at least {opts.min_goals}",
        ))
        points += 5
    else:
        points += 10

    # Features
    if not idea.features:
        if opts.min_features > 0:
            errors.append(_error("features", f"At least {opts.min_features} feature(s) required"))
        else:
            warnings.append(_warning("features", "No features defined"))
    else:
        if len(idea.features) < max(opts.min_features, 1):
            warnings.append(_warning("features", f"Only {len(idea.features)} feature(s) defined"))
        feature_errors, feature_warnings = validate_features(idea.features)
        errors.extend(feature_errors)
        warnings.extend(feature_warnings)
        points += min(20, len(idea.features) * 4)

    # Vision
    if not idea.vision or not idea.vision.strip():
        warnings.append(_warning(
            "vision",
            "Vision statement not provided",
            "Add a vision to guide development decisions",
        ))
    else:
        points += 10

    # Architecture
    if opts.require_architecture and (idea.architecture is None or idea.architecture.is_empty()):
        errors.append(_error("architecture", "Architecture definition required"))
    elif idea.architecture is not None:
        arch_warnings, arch_points = validate_architecture(idea.architecture)
        warnings.extend(arch_warnings)
        points += arch_points
    else:
        warnings.append(_warning(
            "architecture",
            "No architecture defined",
            "Define at least architecture type and main components",
        ))

    # Personas
    if opts.require_personas and not idea.personas:
        errors.append(_error("personas", "At least one persona required"))
    elif idea.personas:
        persona_errors, persona_warnings = validate_personas(idea.personas)
        errors.extend(persona_errors)
        warnings.extend(persona_warnings)
        points += min(10, len(idea.personas) * 3)

    # Milestones
    if opts.require_milestones and not idea.milestones:
        errors.append(_error("milestones", "At least one milestone required"))
    elif idea.milestones:
        points += min(10, len(idea.milestones) * 3)

    if idea.tech_decisions:
        points += min(10, len(idea.tech_decisions) * 2)

    score = min(MAX_SCORE, round(points))
    logger.debug(f"Validated idea '{idea.name}': score={score}, {len(errors)} errors, {len(warnings)} warnings")

    if opts.strict:
        errors.extend(replace(w, severity="error") for w in warnings)
        warnings = []

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings, score=score)


def validate_idea_file(file_path, options: ValidationOptions | None = None) -> ValidationResult:
    """Load an idea YAML file and validate it."""
    path = Path(file_path)
    if not path.is_file():
        return ValidationResult(
            valid=False,
            errors=[_error("file", f"File not found: {file_path}")],
        )

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError, UnicodeDecodeError) as e:
        return ValidationResult(
            valid=False,
            errors=[_error("file", f"Failed to parse YAML: {e}")],
        )

    if not isinstance(data, dict):
        return ValidationResult(
            valid=False,
            errors=[_error("file", f"Failed to parse YAML: expected a mapping in {file_path}")],
        )

    return validate_idea(data, options)


def validate_spec(content: str) -> ValidationResult:
    """Check a generated Markdown spec for its expected sections."""
    warnings: list[ValidationIssue] = []
    score = 0
    lowered = content.lower()

    for section in SPEC_REQUIRED_SECTIONS:
        if "## " not in content or section.lower() not in lowered:
            warnings.append(_warning("sections", f"Missing recommended section: {section}"))
        else:
            score += 15

    for section in SPEC_OPTIONAL_SECTIONS:
        if section.lower() in lowered:
            score += 5

    if not content.startswith("# "):
        warnings.append(_warning("title", "Spec should start with a title (# Title)"))
    else:
        score += 10

    if len(content) < SPEC_MIN_LENGTH:
        warnings.append(_warning(
            "content",
            f"Specification seems incomplete (less than {SPEC_MIN_LENGTH} characters)",
        ))
    else:
        score += 10

    return ValidationResult(valid=True, warnings=warnings, score=min(MAX_SCORE, score))


def is_valid_semver(version: str) -> bool:
    return bool(SEMVER_RE.match(version))


def validate_features(features: list[IdeaFeature]) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    """Check ids (required, unique), names, descriptions and priorities."""
    errors = []
    warnings = []
    seen_ids = set()

    for i, feature in enumerate(features):
        prefix = f"features[{i}]"

        if not feature.id:
            errors.append(_error(f"{prefix}.id", "Feature ID is required"))
        elif feature.id in seen_ids:
            errors.append(_error(f"{prefix}.id", f"Duplicate feature ID: {feature.id}"))
        else:
            seen_ids.add(feature.id)

        if not feature.name or not feature.name.strip():
            errors.append(_error(f"{prefix}.name", "Feature name is required"))

        if not feature.description or not feature.description.strip():
            warnings.append(_warning(f"{prefix}.description", "Feature description is empty"))

        if feature.priority not in PRIORITIES:
            warnings.append(_warning(
                f"{prefix}.priority",
                f"Invalid priority: {feature.priority}",
                "Use P0, P1, P2, or P3",
            ))

    return errors, warnings


def validate_architecture(arch: Architecture) -> tuple[list[ValidationIssue], int]:
    """Return (warnings, points) for an architecture block (max 15 points)."""
    warnings = []
    points = 0

    if arch.type:
        points += 5
    else:
        warnings.append(_warning("architecture.type", "Architecture type not specified"))

    if arch.components:
        points += min(5, len(arch.components))
    if arch.integrations:
        points += min(5, len(arch.integrations))

    return warnings, points


def validate_personas(personas: list[IdeaPersona]) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    errors = []
    warnings = []

    for i, persona in enumerate(personas):
        prefix = f"personas[{i}]"
        if not persona.name:
            errors.append(_error(f"{prefix}.name", "Persona name is required"))
        if not persona.role:
            warnings.append(_warning(f"{prefix}.role", "Persona role not specified"))
        if not persona.needs:
            warnings.append(_warning(f"{prefix}.needs", "Persona has no needs defined"))

    return errors, warnings
