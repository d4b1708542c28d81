"""
BMAD parser.

Reads a BMAD output directory (or a single project file) and normalizes the
field-name variants into a BMADProject.

Directory convention:
  project.{yaml,yml,md}
  features.{yaml,yml,md}
  personas/*.{yaml,yml,md}
  epics/*.{yaml,yml}
  stories/*.{yaml,yml}

Failures are never raised to the caller; they are collected as strings in
ParseResult.errors (with a tagged Issue alongside). Directory listings are
sorted by file name so positional ids are the same on every platform.
"""

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from bsr.lib.errors import ErrorKind
from bsr.adapters.bmad.models import (
    BMADProject,
    Epic,
    Feature,
    ParseResult,
    Persona,
    UserStory,
)

logger = logging.getLogger(__name__)

PROJECT_FILES = ["project.yaml", "project.yml", "project.md"]
FEATURE_FILES = ["features.yaml", "features.yml", "features.md"]
YAML_SUFFIXES = (".yaml", ".yml")

DESCRIPTION_SECTIONS = ("description", "overview")
PERSONA_GOAL_SECTIONS = ("goals", "needs")
PERSONA_PAIN_SECTIONS = ("pain points", "painpoints", "pain_points")


def parse_bmad_directory(bmad_path) -> ParseResult:
    """Parse a BMAD output directory into a BMADProject."""
    root = Path(bmad_path)
    result = ParseResult()

    if not root.is_dir():
        result.add_error(ErrorKind.NOT_FOUND, f"BMAD directory not found: {bmad_path}")
        result.success = False
        return result

    project = BMADProject()

    project_file = _find_file(root, PROJECT_FILES)
    if project_file:
        logger.debug(f"Using project file {project_file}")
        _apply_project_file(project, project_file, result)
    else:
        result.warnings.append("No project file found")

    personas_dir = root / "personas"
    if personas_dir.is_dir():
        project.personas = _parse_personas(personas_dir, result)

    epics_dir = root / "epics"
    if epics_dir.is_dir():
        project.epics = _parse_epics(epics_dir, result)

    stories_dir = root / "stories"
    if stories_dir.is_dir():
        project.user_stories = _parse_user_stories(stories_dir, result)

    features_file = _find_file(root, FEATURE_FILES)
    if features_file:
        project.features = _parse_features_file(features_file, result)

    result.project = project
    result.success = not result.errors
    return result


def parse_bmad_file(file_path) -> ParseResult:
    """Parse a single BMAD project file (YAML or Markdown)."""
    path = Path(file_path)
    result = ParseResult(project=BMADProject())

    if not path.is_file():
        result.add_error(ErrorKind.NOT_FOUND, f"File not found: {file_path}")
        result.success = False
        result.project = None
        return result

    ext = path.suffix.lower()
    if ext not in YAML_SUFFIXES and ext != ".md":
        result.add_error(ErrorKind.UNSUPPORTED, f"Unsupported file type: {ext or '(none)'}")
        result.success = False
        return result

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        result.add_error(ErrorKind.IO, f"Failed to read file: {e}")
        result.success = False
        return result

    if ext in YAML_SUFFIXES:
        try:
            result.project = normalize_project(_load_yaml_mapping(content))
        except (yaml.YAMLError, ValueError) as e:
            result.add_error(ErrorKind.PARSE, f"Failed to parse YAML: {e}", format="yaml")
    else:
        result.project = parse_markdown_project(content)

    result.success = not result.errors
    return result


def normalize_project(raw: dict) -> BMADProject:
    """Build a BMADProject from a decoded YAML mapping."""
    goals = raw.get("goals")
    return BMADProject(
        name=_first(raw, "name", "projectName", "title"),
        description=_first(raw, "description", "summary"),
        vision=_first(raw, "vision", "projectVision"),
        goals=_str_list(goals) if isinstance(goals, list) else [],
        features=normalize_features(raw.get("features") or []),
    )


def normalize_features(raw: Any) -> list[Feature]:
    """Normalize a YAML features list, assigning F<n> ids by position."""
    if not isinstance(raw, list):
        return []

    features = []
    for i, item in enumerate(raw, 1):
        if isinstance(item, str):
            item = {"name": item}
        elif not isinstance(item, dict):
            logger.warning(f"Ignoring feature entry {i}: expected a mapping, got {type(item).__name__}")
            continue
        features.append(Feature(
            id=_first(item, "id") or f"F{i}",
            name=_first(item, "name", "title"),
            description=_first(item, "description"),
            priority=_first(item, "priority") or "P1",
        ))
    return features


def parse_markdown_project(content: str) -> BMADProject:
    """Scan a Markdown project file.

    "# Title" is the name, "## Section" opens a capture region, and
    "- " bullets under Goals become goals.
    """
    project = BMADProject()
    description: list[str] = []
    vision: list[str] = []
    current_section = ""

    for line in content.split("\n"):
        if line.startswith("# "):
            project.name = line[2:].strip()
        elif line.startswith("## "):
            current_section = line[3:].strip().lower()
        elif current_section in DESCRIPTION_SECTIONS:
            description.append(line)
        elif current_section == "vision":
            vision.append(line)
        elif current_section == "goals" and line.startswith("- "):
            if project.goals is None:
                project.goals = []
            project.goals.append(line[2:].strip())

    project.description = "\n".join(description).strip()
    project.vision = "\n".join(vision).strip()
    return project


def parse_markdown_features(content: str) -> list[Feature]:
    """Extract "- Name: Description" bullets as features."""
    features = []
    for line in content.split("\n"):
        if line.startswith("- ") or line.startswith("* "):
            name, _, description = line[2:].strip().partition(":")
            features.append(Feature(
                id=f"F{len(features) + 1}",
                name=name.strip(),
                description=description.strip(),
            ))
    return features


def parse_markdown_persona(content: str, default_name: str = "") -> Persona:
    """Scan a Markdown persona file (# Name, ## Role, ## Goals, ## Pain Points)."""
    persona = Persona(name=default_name)
    role_lines: list[str] = []
    current_section = ""

    for line in content.split("\n"):
        if line.startswith("# "):
            persona.name = line[2:].strip()
        elif line.startswith("## "):
            current_section = line[3:].strip().lower()
        elif current_section == "role":
            role_lines.append(line)
        elif line.startswith("- ") or line.startswith("* "):
            item = line[2:].strip()
            if current_section in PERSONA_GOAL_SECTIONS:
                persona.goals.append(item)
            elif current_section in PERSONA_PAIN_SECTIONS:
                persona.pain_points.append(item)

    persona.role = "\n".join(role_lines).strip()
    return persona


# Helpers

def _find_file(directory: Path, names: list[str]) -> Optional[Path]:
    for name in names:
        path = directory / name
        if path.is_file():
            return path
    return None


def _list_files(directory: Path, suffixes: tuple[str, ...]) -> list[Path]:
    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.suffix.lower() in suffixes
    )


def _load_yaml_mapping(content: str) -> dict:
    """Decode YAML that must hold a mapping. Empty documents become {}."""
    data = yaml.safe_load(content)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"expected a mapping, got {type(data).__name__}")
    return data


def _first(raw: dict, *keys: str) -> str:
    """Return the first non-empty value among keys, as a string."""
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return str(value)
    return ""


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


def _apply_project_file(project: BMADProject, path: Path, result: ParseResult) -> None:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        result.add_error(ErrorKind.IO, f"Failed to read project file: {e}")
        return

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            parsed = normalize_project(_load_yaml_mapping(content))
        except (yaml.YAMLError, ValueError) as e:
            result.add_error(ErrorKind.PARSE, f"Failed to parse project YAML: {e}", format="yaml")
            return
        project.name = parsed.name
        project.description = parsed.description
        project.vision = parsed.vision
        project.goals = parsed.goals
        project.features = parsed.features
    else:
        parsed = parse_markdown_project(content)
        project.name = parsed.name
        project.description = parsed.description
        project.vision = parsed.vision
        if parsed.goals is not None:
            project.goals = parsed.goals


def _load_entries(directory: Path, suffixes: tuple[str, ...], kind: str, result: ParseResult):
    """Yield (path, data) for each readable file, warning on the rest.

    data is the decoded mapping for YAML files and the raw text otherwise.
    """
    for path in _list_files(directory, suffixes):
        try:
            content = path.read_text(encoding="utf-8")
            if path.suffix.lower() in YAML_SUFFIXES:
                data = _load_yaml_mapping(content)
            else:
                data = content
        except (yaml.YAMLError, ValueError, OSError) as e:
            logger.warning(f"Skipping invalid {kind} file {path}: {e}")
            result.warnings.append(f"Skipped invalid {kind} file: {path.name}")
            continue
        yield path, data


def _parse_personas(directory: Path, result: ParseResult) -> list[Persona]:
    personas = []
    for path, data in _load_entries(directory, YAML_SUFFIXES + (".md",), "persona", result):
        if isinstance(data, str):
            personas.append(parse_markdown_persona(data, path.stem))
            continue
        personas.append(Persona(
            name=_first(data, "name"),
            role=_first(data, "role"),
            goals=_str_list(data.get("goals")),
            pain_points=_str_list(data.get("painPoints") or data.get("pain_points")),
        ))
    logger.debug(f"Parsed {len(personas)} personas from {directory}")
    return personas


def _parse_epics(directory: Path, result: ParseResult) -> list[Epic]:
    epics = []
    for path, data in _load_entries(directory, YAML_SUFFIXES, "epic", result):
        epics.append(Epic(
            id=_first(data, "id") or path.stem,
            title=_first(data, "title", "name"),
            description=_first(data, "description"),
            features=_str_list(data.get("features")),
        ))
    logger.debug(f"Parsed {len(epics)} epics from {directory}")
    return epics


def _parse_user_stories(directory: Path, result: ParseResult) -> list[UserStory]:
    stories = []
    for path, data in _load_entries(directory, YAML_SUFFIXES, "story", result):
        stories.append(UserStory(
            id=_first(data, "id") or path.stem,
            epic=_first(data, "epic") or None,
            title=_first(data, "title"),
            as_a=_first(data, "asA", "as_a"),
            i_want=_first(data, "iWant", "i_want"),
            so_that=_first(data, "soThat", "so_that"),
            acceptance_criteria=_str_list(
                data.get("acceptanceCriteria") or data.get("acceptance_criteria")
            ),
        ))
    logger.debug(f"Parsed {len(stories)} stories from {directory}")
    return stories


def _parse_features_file(path: Path, result: ParseResult) -> list[Feature]:
    try:
        content = path.read_text(encoding="utf-8")
        if path.suffix.lower() not in YAML_SUFFIXES:
            return parse_markdown_features(content)
        parsed = yaml.safe_load(content)
    except (yaml.YAMLError, OSError, UnicodeDecodeError) as e:
        logger.warning(f"Skipping invalid features file {path}: {e}")
        result.warnings.append(f"Skipped invalid features file: {path.name}")
        return []

    if isinstance(parsed, dict):
        parsed = parsed.get("features") or []
    return normalize_features(parsed)
