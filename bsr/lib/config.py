"""
Configuration loaders for BSR.

Loads project configuration from .bsr/config.yaml and progress markers
from the workflow progress file.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from . import validate

logger = logging.getLogger(__name__)

BSR_DIR = ".bsr"
CONFIG_FILENAME = "config.yaml"

VALID_LLM_TARGETS = ("claude", "cursor", "copilot", "vscode", "generic")
VALID_PROJECT_TYPES = ("greenfield", "brownfield")

PHASE_RE = re.compile(r'## Current Phase\n(\w+)')
STATUS_RE = re.compile(r'## Status\n(\w+)')


class ConfigError(Exception):
    """Config file missing or unreadable."""


@dataclass
class BSRConfig:
    """Project configuration from .bsr/config.yaml"""
    project_name: str
    project_type: str = "greenfield"
    created: str = ""
    version: str = "1.0"
    llm_target: str = "generic"
    auto_commit: bool = False
    commit_prefix: str = ""
    progress_file: str = "progress.txt"
    dashboard_port: int = 3000
    dashboard_auto_open: bool = True
    export_formats: list[str] = field(default_factory=lambda: ["md"])
    export_output_dir: str = "reports"
    root: Path = field(default_factory=Path.cwd)  # Directory holding .bsr/


@dataclass
class Progress:
    """Workflow position parsed from the progress file."""
    phase: str = "unknown"
    status: str = "unknown"


def get_config_path(root: Path) -> Path:
    return root / BSR_DIR / CONFIG_FILENAME


def read_config_data(root: Path) -> dict:
    """Read .bsr/config.yaml as a raw dict.

    Raises:
        ConfigError: if the file is missing or is not a YAML mapping
    """
    config_path = get_config_path(root)
    if not config_path.exists():
        raise ConfigError("BSR not initialized. Run `bsr init` first.")

    try:
        data = yaml.safe_load(config_path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {config_path}: {e}") from None

    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config in {config_path}: expected a mapping")

    # YAML turns unquoted ISO timestamps into datetime objects
    project = data.get("project")
    if isinstance(project, dict) and project.get("created") is not None:
        project["created"] = str(project["created"])

    return data


def load_config(root: Path) -> BSRConfig:
    """Load and validate .bsr/config.yaml and return BSRConfig."""
    data = read_config_data(root)
    validate.validate(data, "config")

    project = data["project"]
    llm = data.get("llm") or {}
    workflow = data.get("workflow") or {}
    dashboard = data.get("dashboard") or {}
    export = data.get("export") or {}

    llm_target = llm.get("target", "generic")
    if llm_target not in VALID_LLM_TARGETS:
        logger.warning(
            f"Unknown llm.target '{llm_target}', using 'generic'. "
            f"Valid targets: {', '.join(VALID_LLM_TARGETS)}"
        )
        llm_target = "generic"

    return BSRConfig(
        project_name=project["name"],
        project_type=project.get("type", "greenfield"),
        created=project.get("created", ""),
        version=str(data.get("version", "1.0")),
        llm_target=llm_target,
        auto_commit=workflow.get("auto_commit", False),
        commit_prefix=workflow.get("commit_prefix", ""),
        progress_file=workflow.get("progress_file", "progress.txt"),
        dashboard_port=dashboard.get("port", 3000),
        dashboard_auto_open=dashboard.get("auto_open", True),
        export_formats=export.get("formats", ["md"]),
        export_output_dir=export.get("output_dir", "reports"),
        root=root,
    )


def get_config_value(data: dict, key: str) -> Any:
    """Resolve a dot-notation key ("project.name") against config data.

    Returns None when any segment is missing.
    """
    value: Any = data
    for part in key.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return None
    return value


def read_progress(progress_path: Path) -> Progress:
    """Extract current phase and status from the progress file."""
    progress = Progress()
    if not progress_path.exists():
        return progress

    content = progress_path.read_text()
    phase_match = PHASE_RE.search(content)
    status_match = STATUS_RE.search(content)
    if phase_match:
        progress.phase = phase_match.group(1)
    if status_match:
        progress.status = status_match.group(1)
    return progress
