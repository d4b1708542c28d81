"""
High-level SpecKit operations: load, validate, generate.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from bsr.adapters.speckit.generator import (
    GeneratorOptions,
    GeneratorResult,
    generate_and_save,
    generate_spec,
    load_idea,
)
from bsr.adapters.speckit.validator import (
    ValidationOptions,
    ValidationResult,
    ValidationIssue,
    validate_idea,
    validate_idea_file,
)

logger = logging.getLogger(__name__)


@dataclass
class SpecResult:
    validation: ValidationResult
    generation: Optional[GeneratorResult] = None


def idea_to_spec(
    idea_path,
    output_path,
    generator_options: GeneratorOptions | None = None,
    validation_options: ValidationOptions | None = None,
) -> SpecResult:
    """Load an idea file, validate it and write the generated spec.

    Generation is skipped when the idea does not validate.
    """
    idea = load_idea(idea_path)
    if idea is None:
        return SpecResult(validation=ValidationResult(
            valid=False,
            errors=[ValidationIssue(field="file", message=f"Failed to load idea from: {idea_path}")],
        ))

    validation = validate_idea(idea, validation_options)
    if not validation.valid:
        logger.info(f"Idea {idea_path} has {len(validation.errors)} errors, spec not generated")
        return SpecResult(validation=validation)

    return SpecResult(
        validation=validation,
        generation=generate_and_save(idea, output_path, generator_options),
    )


def check_idea(idea_path, options: ValidationOptions | None = None) -> ValidationResult:
    """Validate an idea file only."""
    return validate_idea_file(idea_path, options)


def create_spec(idea, options: GeneratorOptions | None = None) -> GeneratorResult:
    """Generate spec content from an in-memory idea."""
    return generate_spec(idea, options)
