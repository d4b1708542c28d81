"""
BSR idea document models.

The idea document (idea.yaml) is what the BMAD transformer produces and
what the SpecKit validator and generator consume.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

PRIORITIES = ("P0", "P1", "P2", "P3")
DEFAULT_VERSION = "0.1.0"


@dataclass
class IdeaFeature:
    id: str
    name: str
    description: str
    priority: str                              # P0..P3
    stories: Optional[list[str]] = None        # Linked story ids, omitted when none

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "priority": self.priority,
        }
        if self.stories:
            data["stories"] = list(self.stories)
        return data


@dataclass
class IdeaPersona:
    name: str
    role: str
    needs: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"name": self.name, "role": self.role, "needs": list(self.needs)}


@dataclass
class Architecture:
    type: Optional[str] = None                 # microservices, monolith, serverless, api-first
    components: Optional[list[str]] = None
    integrations: Optional[list[str]] = None

    def to_dict(self) -> dict:
        return _drop_none({
            "type": self.type,
            "components": self.components,
            "integrations": self.integrations,
        })

    def is_empty(self) -> bool:
        return not (self.type or self.components or self.integrations)


@dataclass
class Milestone:
    id: str                                    # M1, M2 ...
    name: str
    features: list[str] = field(default_factory=list)
    target_date: Optional[str] = None

    def to_dict(self) -> dict:
        return _drop_none({
            "id": self.id,
            "name": self.name,
            "features": list(self.features),
            "target_date": self.target_date,
        })


@dataclass
class BSRIdea:
    """The BSR idea document."""
    name: str
    version: str = DEFAULT_VERSION
    description: str = ""
    vision: Optional[str] = None
    goals: list[str] = field(default_factory=list)
    features: list[IdeaFeature] = field(default_factory=list)
    personas: Optional[list[IdeaPersona]] = None
    architecture: Optional[Architecture] = None
    tech_decisions: Optional[dict[str, str]] = None
    constraints: Optional[list[str]] = None
    milestones: Optional[list[Milestone]] = None

    def to_dict(self) -> dict:
        """Document shape for YAML output. None values are omitted."""
        return _drop_none({
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "vision": self.vision or None,
            "goals": list(self.goals),
            "features": [f.to_dict() for f in self.features],
            "personas": [p.to_dict() for p in self.personas] if self.personas is not None else None,
            "architecture": self.architecture.to_dict() if self.architecture is not None else None,
            "tech_decisions": dict(self.tech_decisions) if self.tech_decisions else None,
            "constraints": list(self.constraints) if self.constraints else None,
            "milestones": [m.to_dict() for m in self.milestones] if self.milestones is not None else None,
        })

    @classmethod
    def from_dict(cls, data: dict) -> "BSRIdea":
        """Read a (possibly hand-authored) idea document leniently.

        Values are taken as they are; priorities are not normalized here so
        the validator can still flag them.
        """
        arch = data.get("architecture")
        personas = data.get("personas")
        milestones = data.get("milestones")
        tech = data.get("tech_decisions")
        constraints = data.get("constraints")

        return cls(
            name=_text(data.get("name")),
            version=_text(data.get("version")),
            description=_text(data.get("description")),
            vision=_text(data.get("vision")) or None,
            goals=_str_list(data.get("goals")),
            features=[
                IdeaFeature(
                    id=_text(f.get("id")),
                    name=_text(f.get("name")),
                    description=_text(f.get("description")),
                    priority=_text(f.get("priority")),
                    stories=_str_list(f.get("stories")) or None,
                )
                for f in _dict_list(data.get("features"))
            ],
            personas=[
                IdeaPersona(
                    name=_text(p.get("name")),
                    role=_text(p.get("role")),
                    needs=_str_list(p.get("needs")),
                )
                for p in _dict_list(personas)
            ] if isinstance(personas, list) else None,
            architecture=Architecture(
                type=_text(arch.get("type")) or None,
                components=_str_list(arch.get("components")) or None,
                integrations=_str_list(arch.get("integrations")) or None,
            ) if isinstance(arch, dict) else None,
            tech_decisions={str(k): _text(v) for k, v in tech.items()} if isinstance(tech, dict) else None,
            constraints=_str_list(constraints) if isinstance(constraints, list) else None,
            milestones=[
                Milestone(
                    id=_text(m.get("id")),
                    name=_text(m.get("name")),
                    features=_str_list(m.get("features")),
                    target_date=_text(m.get("target_date")) or None,
                )
                for m in _dict_list(milestones)
            ] if isinstance(milestones, list) else None,
        )


def _drop_none(data: dict) -> dict:
    return {k: v for k, v in data.items() if v is not None}


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


def _dict_list(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]
