"""
SpecKit adapter for BSR.

Validates BSR idea documents and generates specifications from them.
"""

from bsr.adapters.speckit.models import (
    Architecture,
    BSRIdea,
    IdeaFeature,
    IdeaPersona,
    Milestone,
)
from bsr.adapters.speckit.validator import (
    ValidationIssue,
    ValidationOptions,
    ValidationResult,
    is_valid_semver,
    validate_idea,
    validate_idea_file,
    validate_spec,
)
from bsr.adapters.speckit.generator import (
    GeneratorOptions,
    GeneratorResult,
    generate_and_save,
    generate_spec,
    load_idea,
)
from bsr.adapters.speckit.pipeline import (
    SpecResult,
    check_idea,
    create_spec,
    idea_to_spec,
)

__all__ = [
    "Architecture",
    "BSRIdea",
    "IdeaFeature",
    "IdeaPersona",
    "Milestone",
    "ValidationIssue",
    "ValidationOptions",
    "ValidationResult",
    "is_valid_semver",
    "validate_idea",
    "validate_idea_file",
    "validate_spec",
    "GeneratorOptions",
    "GeneratorResult",
    "generate_and_save",
    "generate_spec",
    "load_idea",
    "SpecResult",
    "check_idea",
    "create_spec",
    "idea_to_spec",
]
