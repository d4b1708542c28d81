"""
BMAD transformer.

Maps a BMADProject onto the BSR idea document: priority normalization,
keyword-based architecture inference, feature/story linking and
epic -> milestone numbering.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from bsr.lib.errors import ErrorKind, Issue, IssueCollector
from bsr.lib.fileio import write_atomic
from bsr.lib.validate import SchemaValidationError, validate_before_write
from bsr.adapters.bmad.models import BMADProject, Feature, UserStory
from bsr.adapters.speckit.models import (
    DEFAULT_VERSION,
    PRIORITIES,
    Architecture,
    BSRIdea,
    IdeaFeature,
    IdeaPersona,
    Milestone,
)

logger = logging.getLogger(__name__)

PRIORITY_ALIASES = {
    "HIGH": "P0",
    "CRITICAL": "P0",
    "MEDIUM": "P1",
    "NORMAL": "P1",
    "LOW": "P2",
}
DEFAULT_PRIORITY = "P1"

# Checked in order, first hit wins
ARCHITECTURE_TYPES = [
    ("microservices", ("microservice",)),
    ("monolith", ("monolith",)),
    ("serverless", ("serverless", "lambda")),
    ("api-first", ("api", "rest")),
]

COMPONENT_KEYWORDS = [
    ("frontend", ("frontend", "ui", "dashboard")),
    ("backend", ("backend", "api", "server")),
    ("database", ("database", "db", "storage")),
    ("auth", ("auth", "login", "user")),
    ("cli", ("cli", "command")),
]

INTEGRATION_KEYWORDS = [
    ("github", ("github",)),
    ("slack", ("slack",)),
    ("payments", ("stripe", "payment")),
    ("email", ("email", "sendgrid")),
    ("oauth", ("oauth", "sso")),
]


@dataclass
class TransformOptions:
    version: str = DEFAULT_VERSION
    include_personas: bool = False
    include_stories: bool = False              # Accepted, not used yet
    output_path: Optional[str] = None          # Accepted, not used by transform_to_bsr


@dataclass
class TransformResult(IssueCollector):
    success: bool = True
    idea: Optional[BSRIdea] = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    issues: list[Issue] = field(default_factory=list)


def transform_to_bsr(project: BMADProject, options: TransformOptions | None = None) -> TransformResult:
    """Transform a BMADProject into a BSR idea.

    A missing name fails the transform, but the idea is still built so the
    caller can inspect it.
    """
    options = options or TransformOptions()
    result = TransformResult()

    if not project.name:
        result.add_error(ErrorKind.VALIDATION, "Project name is required")

    idea = BSRIdea(
        name=project.name,
        version=options.version or DEFAULT_VERSION,
        description=project.description or "",
        vision=project.vision or None,
        goals=list(project.goals or []),
        features=transform_features(project.features or [], project.user_stories),
    )

    if options.include_personas and project.personas is not None:
        idea.personas = [
            IdeaPersona(name=p.name, role=p.role, needs=list(p.goals))
            for p in project.personas
        ]

    if project.epics:
        idea.milestones = [
            Milestone(id=f"M{i}", name=epic.title, features=list(epic.features))
            for i, epic in enumerate(project.epics, 1)
        ]

    idea.architecture = infer_architecture(project)

    result.idea = idea
    result.success = not result.errors
    return result


def transform_and_save(
    project: BMADProject,
    output_path,
    options: TransformOptions | None = None,
) -> TransformResult:
    """Transform and write the idea as YAML. Nothing is written on failure."""
    result = transform_to_bsr(project, options)
    if not result.success or result.idea is None:
        return result

    path = Path(output_path)
    data = result.idea.to_dict()

    try:
        validate_before_write(data, "idea", path)
    except SchemaValidationError as e:
        result.add_error(ErrorKind.VALIDATION, str(e))
        result.success = False
        return result

    try:
        write_atomic(path, dump_idea_yaml(data))
    except OSError as e:
        result.add_error(ErrorKind.IO, f"Failed to write file: {e}")
        result.success = False
        return result

    logger.info(f"Wrote idea for '{result.idea.name}' to {path}")
    return result


def dump_idea_yaml(data: dict) -> str:
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, indent=2, width=100)


def normalize_priority(priority: Optional[str]) -> str:
    """Map a free-form priority onto P0..P3 (unknown or missing -> P1)."""
    if not priority:
        return DEFAULT_PRIORITY
    p = str(priority).upper()
    if p in PRIORITIES:
        return p
    return PRIORITY_ALIASES.get(p, DEFAULT_PRIORITY)


def transform_features(features: list[Feature], stories: Optional[list[UserStory]]) -> list[IdeaFeature]:
    """Project features, linking stories whose title contains the feature name."""
    transformed = []
    for f in features:
        feature = IdeaFeature(
            id=f.id,
            name=f.name,
            description=f.description,
            priority=normalize_priority(f.priority),
        )
        if stories:
            name = f.name.lower()
            related = [s.id for s in stories if name in s.title.lower()]
            if related:
                feature.stories = related
        transformed.append(feature)
    return transformed


def infer_architecture(project: BMADProject) -> Architecture:
    """Guess architecture type, components and integrations from keywords.

    Plain substring matching over description, vision, feature descriptions
    and story text, so "user" alone is enough to detect auth.
    """
    parts = [project.description or "", project.vision or ""]
    parts.extend(f.description for f in project.features or [])
    parts.extend(f"{s.title} {s.i_want}" for s in project.user_stories or [])
    text = " ".join(parts).lower()

    arch = Architecture()
    for arch_type, keywords in ARCHITECTURE_TYPES:
        if _mentions(text, keywords):
            arch.type = arch_type
            break

    components = [name for name, keywords in COMPONENT_KEYWORDS if _mentions(text, keywords)]
    integrations = [name for name, keywords in INTEGRATION_KEYWORDS if _mentions(text, keywords)]
    if components:
        arch.components = components
    if integrations:
        arch.integrations = integrations
    return arch


def _mentions(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)
