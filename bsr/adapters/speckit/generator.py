"""
SpecKit generator.

Renders a BSR idea into a Markdown technical specification or a
restructured YAML spec. The Markdown form is for humans: acceptance
criteria are a "TBD" placeholder and the structure cannot be read back.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

import yaml

from bsr.lib.fileio import write_atomic
from bsr.adapters.speckit.models import PRIORITIES, BSRIdea, IdeaFeature

logger = logging.getLogger(__name__)

FORMATS = ("markdown", "yaml")


@dataclass
class GeneratorOptions:
    format: str = "markdown"                   # "markdown" or "yaml"
    include_task_breakdown: bool = False
    include_acceptance_criteria: bool = False
    output_path: Optional[str] = None


@dataclass
class GeneratorResult:
    success: bool
    content: Optional[str] = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def load_idea(idea_path) -> Optional[BSRIdea]:
    """Load a BSR idea from YAML. Returns None if missing or unreadable."""
    path = Path(idea_path)
    if not path.is_file():
        return None

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to load idea from {path}: {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Failed to load idea from {path}: expected a mapping")
        return None
    return BSRIdea.from_dict(data)


def generate_spec(idea, options: GeneratorOptions | None = None) -> GeneratorResult:
    """Render an idea (BSRIdea or mapping) as a specification document."""
    options = options or GeneratorOptions()
    if isinstance(idea, dict):
        idea = BSRIdea.from_dict(idea)

    if not idea.name:
        return GeneratorResult(success=False, errors=["Project name is required"])

    if options.format not in FORMATS:
        return GeneratorResult(success=False, errors=[f"Unsupported format: {options.format}"])

    if options.format == "yaml":
        content = render_yaml_spec(idea, options)
    else:
        content = render_markdown_spec(idea, options)

    return GeneratorResult(success=True, content=content)


def generate_and_save(idea, output_path, options: GeneratorOptions | None = None) -> GeneratorResult:
    """Generate a spec and write it to output_path."""
    result = generate_spec(idea, options)
    if not result.success or result.content is None:
        return result

    try:
        write_atomic(Path(output_path), result.content)
    except OSError as e:
        result.errors.append(f"Failed to write file: {e}")
        result.success = False
        return result

    logger.info(f"Wrote spec to {output_path}")
    return result


def render_markdown_spec(idea: BSRIdea, options: GeneratorOptions) -> str:
    lines = [
        f"# {idea.name} - Technical Specification",
        "",
        f"**Version:** {idea.version}",
        f"**Generated:** {datetime.now().date().isoformat()}",
        "",
        "## 1. Overview",
        "",
        idea.description,
        "",
    ]

    if idea.vision:
        lines.extend(["### Vision", "", idea.vision, ""])

    if idea.goals:
        lines.extend(["### Goals", ""])
        lines.extend(f"- {goal}" for goal in idea.goals)
        lines.append("")

    # Architecture
    lines.extend(["## 2. Architecture", ""])
    arch = idea.architecture
    if arch is not None:
        if arch.type:
            lines.extend([f"**Architecture Type:** {arch.type}", ""])
        if arch.components:
            lines.extend(["### Components", ""])
            lines.extend(f"- **{comp}**" for comp in arch.components)
            lines.append("")
        if arch.integrations:
            lines.extend(["### External Integrations", ""])
            lines.extend(f"- {integration}" for integration in arch.integrations)
            lines.append("")
    else:
        lines.extend(["*Architecture to be defined*", ""])

    if idea.tech_decisions:
        lines.extend([
            "## 3. Technical Decisions",
            "",
            "| Decision | Choice |",
            "|----------|--------|",
        ])
        lines.extend(f"| {key} | {value} |" for key, value in idea.tech_decisions.items())
        lines.append("")

    # Features
    lines.extend(["## 4. Features", ""])
    for priority, features in group_by_priority(idea.features).items():
        if not features:
            continue
        lines.extend([f"### {priority} Features", ""])
        for feature in features:
            lines.extend([f"#### {feature.id}: {feature.name}", "", feature.description, ""])
            if options.include_acceptance_criteria:
                lines.extend(["**Acceptance Criteria:**", "", "- [ ] TBD", ""])

    if idea.personas:
        lines.extend(["## 5. User Personas", ""])
        for persona in idea.personas:
            lines.extend([f"### {persona.name}", "", f"**Role:** {persona.role}", "", "**Needs:**"])
            lines.extend(f"- {need}" for need in persona.needs)
            lines.append("")

    if idea.milestones:
        lines.extend(["## 6. Milestones", ""])
        for milestone in idea.milestones:
            lines.append(f"### {milestone.id}: {milestone.name}")
            if milestone.target_date:
                lines.append(f"**Target:** {milestone.target_date}")
            lines.extend(["", "**Features:**"])
            lines.extend(f"- {f}" for f in milestone.features)
            lines.append("")

    if idea.constraints:
        lines.extend(["## 7. Constraints", ""])
        lines.extend(f"- {constraint}" for constraint in idea.constraints)
        lines.append("")

    if options.include_task_breakdown:
        lines.extend([
            "## 8. Task Breakdown",
            "",
            "*See `tasks/breakdown.json` for detailed task breakdown.*",
            "",
        ])

    return "\n".join(lines)


def render_yaml_spec(idea: BSRIdea, options: GeneratorOptions) -> str:
    features = []
    for f in idea.features:
        entry = {
            "id": f.id,
            "name": f.name,
            "description": f.description,
            "priority": f.priority,
        }
        if options.include_acceptance_criteria:
            entry["acceptance_criteria"] = ["TBD"]
        features.append(entry)

    doc = idea.to_dict()
    spec = {
        "metadata": {
            "name": idea.name,
            "version": idea.version,
            "generated": datetime.now().isoformat(),
        },
        "overview": _drop_none({
            "description": idea.description,
            "vision": idea.vision,
            "goals": list(idea.goals),
        }),
        "architecture": doc.get("architecture"),
        "tech_decisions": doc.get("tech_decisions"),
        "features": features,
        "personas": doc.get("personas"),
        "milestones": doc.get("milestones"),
        "constraints": doc.get("constraints"),
    }
    return yaml.safe_dump(_drop_none(spec), sort_keys=False, allow_unicode=True, indent=2)


def group_by_priority(features: list[IdeaFeature]) -> dict[str, list[IdeaFeature]]:
    """Group features under P0..P3; unknown priorities get their own group after P3."""
    groups: dict[str, list[IdeaFeature]] = {p: [] for p in PRIORITIES}
    for feature in features:
        groups.setdefault(feature.priority or "P1", []).append(feature)
    return groups


def _drop_none(data: dict) -> dict:
    return {k: v for k, v in data.items() if v is not None}
