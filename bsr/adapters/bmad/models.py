"""
Data models for the BMAD adapter.
"""

from dataclasses import dataclass, field
from typing import Optional

from bsr.lib.errors import Issue, IssueCollector


@dataclass
class Feature:
    id: str                                    # F1, F2 ... when not given
    name: str
    description: str = ""
    priority: Optional[str] = None             # Free-form, normalized by the transformer


@dataclass
class Persona:
    name: str
    role: str = ""
    goals: list[str] = field(default_factory=list)
    pain_points: list[str] = field(default_factory=list)


@dataclass
class Epic:
    id: str                                    # File stem when not given
    title: str
    description: str = ""
    features: list[str] = field(default_factory=list)  # Feature ids, not checked


@dataclass
class UserStory:
    """One "As a / I want / so that" story."""
    id: str                                    # File stem when not given
    title: str
    as_a: str = ""
    i_want: str = ""
    so_that: str = ""
    epic: Optional[str] = None
    acceptance_criteria: list[str] = field(default_factory=list)


@dataclass
class BMADProject:
    """Canonical project record built from a BMAD directory or file.

    List fields stay None when the source never provided them.
    """
    name: str = ""
    description: str = ""
    vision: str = ""
    goals: Optional[list[str]] = None
    features: Optional[list[Feature]] = None
    personas: Optional[list[Persona]] = None
    epics: Optional[list[Epic]] = None
    user_stories: Optional[list[UserStory]] = None


@dataclass
class ParseResult(IssueCollector):
    success: bool = True
    project: Optional[BMADProject] = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    issues: list[Issue] = field(default_factory=list)
